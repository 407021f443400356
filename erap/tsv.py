"""
Reading the tab-separated program export.

The export is a spreadsheet dump: a few lines of front matter, a header row,
then one program per line. Cells are split on tabs with no quoting rules.
"""

from __future__ import annotations

import logging
from typing import Dict, List

from charset_normalizer import from_bytes

from .rules import COLUMN_DELIMITER, HEADER_LINE_INDEX

logger = logging.getLogger(__name__)

RawRecord = Dict[str, str]


class TabularFormatError(ValueError):
    """Raised when the export has no header row to key records by."""


def decode_tsv_bytes(raw: bytes) -> tuple[str, str]:
    """
    Decode an export to text, converting CRLF line endings to LF.

    Rules:
    - UTF-8 is expected; a leading BOM is dropped.
    - If UTF-8 decoding fails, use charset-normalizer's best guess.
    - If there is no guess, decode UTF-8 with replacement characters.

    Returns the text and the encoding actually used.
    """
    decode_used = "utf-8-sig"
    try:
        text = raw.decode(decode_used)
    except UnicodeDecodeError:
        match = from_bytes(raw).best()
        if match is not None:
            decode_used = match.encoding
            text = str(match)
        else:
            decode_used = "utf-8"
            text = raw.decode(decode_used, errors="replace")
        logger.warning("Input is not valid UTF-8, decoded as %s", decode_used)

    text = text.replace("\r\n", "\n")
    return text, decode_used


def parse_tsv(text: str) -> List[RawRecord]:
    """
    Split export text into header-keyed records, in input order.

    Line HEADER_LINE_INDEX holds the headers; everything before and including it
    is dropped. Only empty lines are skipped: a line of tabs or spaces is
    still a record. One trailing CR is dropped per line. Short rows leave
    their trailing headers absent; cells past the last header are ignored.
    """
    lines = text.split("\n")
    if len(lines) <= HEADER_LINE_INDEX:
        raise TabularFormatError(
            f"Expected a header row on line {HEADER_LINE_INDEX + 1}, "
            f"input has {len(lines)} line(s)"
        )

    lines = [line[:-1] if line.endswith("\r") else line for line in lines]
    headers = lines[HEADER_LINE_INDEX].split(COLUMN_DELIMITER)

    records: List[RawRecord] = []
    for line in lines[HEADER_LINE_INDEX + 1:]:
        if not line:
            continue
        cells = line.split(COLUMN_DELIMITER)
        records.append(dict(zip(headers, cells)))

    return records
