"""
Core normalization logic.

Responsibilities:
- contact classification (URL vs phone)
- display name selection per jurisdiction type
- status validation
- per-record normalization + suppression rules
- batch partitioning + diagnostics
"""

from __future__ import annotations

import logging
from typing import AbstractSet, Iterable, Optional

from .counties import CountyResolver
from .models import (
    BatchResult,
    Contact,
    Diagnostics,
    NormalizedRecord,
    NormalizeResponse,
    ReportSummary,
)
from .rules import (
    ACCEPTED_STATUSES,
    CLOSED_STATUS_MARKER,
    COL_CONTACT,
    COL_GEOGRAPHIC_LEVEL,
    COL_LOCALITY,
    COL_PROGRAM_NAME,
    COL_PROGRAM_STATUS,
    COL_STATE,
    COL_TRIBAL_TERRITORY,
    SUPPRESSED_STATES,
    TERRITORY_RENAMES,
    TYPE_CITY,
    TYPE_COUNTY,
    TYPE_STATE,
    TYPE_TERRITORY,
    TYPE_TRIBAL,
)
from .tsv import RawRecord, decode_tsv_bytes, parse_tsv

logger = logging.getLogger(__name__)


def classify_contact(raw: Optional[str]) -> Optional[Contact]:
    """
    Decide whether a contact cell is a URL or a phone number.

    Bare ``www`` hosts get an ``http://`` scheme. Anything that does not look
    like a URL is kept as a phone number, malformed or not.
    """
    if not raw:
        return None
    if raw.startswith("http"):
        return Contact(kind="url", value=raw)
    if raw.startswith("www"):
        return Contact(kind="url", value="http://" + raw)
    return Contact(kind="phone", value=raw)


def name_for(type_: Optional[str], record: RawRecord) -> Optional[str]:
    if type_ == TYPE_STATE:
        return record.get(COL_STATE)
    if type_ in (TYPE_COUNTY, TYPE_CITY):
        return record.get(COL_LOCALITY)
    if type_ in (TYPE_TRIBAL, TYPE_TERRITORY):
        return record.get(COL_TRIBAL_TERRITORY)
    return (
        record.get(COL_LOCALITY)
        or record.get(COL_TRIBAL_TERRITORY)
        or record.get(COL_STATE)
    )


def is_valid_status(status: Optional[str]) -> bool:
    return status in ACCEPTED_STATUSES


def is_suppressed(record: RawRecord, suppressed_states: AbstractSet[str] = SUPPRESSED_STATES) -> bool:
    """True for records dropped without output or diagnostics."""
    if CLOSED_STATUS_MARKER in (record.get(COL_PROGRAM_STATUS) or ""):
        return True
    return (
        record.get(COL_GEOGRAPHIC_LEVEL) == TYPE_STATE
        and record.get(COL_STATE) in suppressed_states
    )


def partition_for(item: NormalizedRecord) -> str:
    return "tribal" if item.type == TYPE_TRIBAL else "geographic"


def normalize_record(
    record: RawRecord,
    counties: CountyResolver,
    diagnostics: Diagnostics,
    suppressed_states: AbstractSet[str] = SUPPRESSED_STATES,
) -> Optional[NormalizedRecord]:
    """
    Normalize one raw record, appending any anomalies to ``diagnostics``.

    Returns None for suppressed records. Bad data never raises: it leaves the
    optional field unset and adds a diagnostic message instead.
    """
    if is_suppressed(record, suppressed_states):
        return None

    item = NormalizedRecord()
    program = record.get(COL_PROGRAM_NAME)

    type_ = record.get(COL_GEOGRAPHIC_LEVEL)
    item.type = type_

    status = record.get(COL_PROGRAM_STATUS)
    if is_valid_status(status):
        item.status = status
    else:
        diagnostics.bad_status.append(f"Bad status: {program}")

    state = record.get(COL_STATE)
    item.state = state
    if type_ == TYPE_TERRITORY:
        territory = record.get(COL_TRIBAL_TERRITORY)
        item.state = TERRITORY_RENAMES.get(territory, territory)

    item.program = program
    item.name = name_for(type_, record)

    if type_ in (TYPE_CITY, TYPE_COUNTY):
        locality = record.get(COL_LOCALITY)
        county = counties.resolve(state, locality)
        if county:
            item.county = county
        elif type_ == TYPE_CITY:
            # County-level rows without a match are left silent.
            diagnostics.no_county.append(f"No county: {locality}, {state}")

    contact = classify_contact(record.get(COL_CONTACT))
    if contact is None:
        diagnostics.no_contact.append(f"No contact: {program}")
    elif contact.kind == "url":
        item.url = contact.value
    else:
        item.phone = contact.value
        diagnostics.no_url.append(f"No/bad URL: {program}, {contact.value}")

    return item


def process_programs(
    records: Iterable[RawRecord],
    counties: CountyResolver,
    suppressed_states: AbstractSet[str] = SUPPRESSED_STATES,
) -> BatchResult:
    """Normalize every record in input order and partition the results."""
    result = BatchResult()

    for i, record in enumerate(records):
        item = normalize_record(record, counties, result.diagnostics, suppressed_states)
        if item is None:
            result.suppressed += 1
            logger.debug(
                "Suppressed row %d: %s (%s)",
                i + 1,
                record.get(COL_PROGRAM_NAME),
                record.get(COL_PROGRAM_STATUS),
            )
            continue
        getattr(result.programs, partition_for(item)).append(item)

    logger.info(
        "Normalized %d geographic and %d tribal programs (%d suppressed, %d diagnostics)",
        len(result.programs.geographic),
        len(result.programs.tribal),
        result.suppressed,
        len(result.diagnostics.messages()),
    )
    return result


def normalize_tsv_bytes(
    raw: bytes,
    counties: CountyResolver,
    suppressed_states: AbstractSet[str] = SUPPRESSED_STATES,
) -> NormalizeResponse:
    """
    Decode, parse and normalize a whole export.
    Returns the envelope served by the API.
    """
    text, encoding = decode_tsv_bytes(raw)
    records = parse_tsv(text)
    result = process_programs(records, counties, suppressed_states)

    return NormalizeResponse(
        programs=result.programs,
        diagnostics=result.diagnostics,
        summary=ReportSummary(
            rows=len(records),
            geographic=len(result.programs.geographic),
            tribal=len(result.programs.tribal),
            suppressed=result.suppressed,
            diagnostics=len(result.diagnostics.messages()),
            encoding=encoding,
        ),
    )
