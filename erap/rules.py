"""
Deterministic normalization rules.

This file exists to make the business rules explicit and reviewable.
"""

from pathlib import Path

# The export carries three lines of front matter; line index 3 holds the headers.
HEADER_LINE_INDEX = 3
COLUMN_DELIMITER = "\t"

# Source column headers, spelled exactly as they appear in the export.
COL_GEOGRAPHIC_LEVEL = "Geographic Level"
COL_STATE = "State"
COL_LOCALITY = "City/County/ Locality"
COL_TRIBAL_TERRITORY = "Tribal Government/ Territory"
COL_PROGRAM_NAME = "Program Name"
COL_PROGRAM_STATUS = "Program Status"
COL_CONTACT = "Program Page Link  (Phone # if Link is Unavailable)"

TYPE_STATE = "State"
TYPE_COUNTY = "County"
TYPE_CITY = "City"
TYPE_TRIBAL = "Tribal Government"
TYPE_TERRITORY = "Territory"

ACCEPTED_STATUSES = frozenset({
    "Accepting applications - rolling basis",
    "Applications on hold/Waitlist",
})
CLOSED_STATUS_MARKER = "Program permanently closed"

# State-level programs hidden until their listings are corrected upstream.
SUPPRESSED_STATES = frozenset({"Texas", "Mississippi"})

TERRITORY_RENAMES = {
    "Commonwealth of the Northern Mariana Islands": "Northern Mariana Islands",
}

DEFAULT_COUNTY_MAP = Path(__file__).parent / "data" / "county-map.json"

OUTPUT_DIR = Path("output")
PROGRAMS_FILENAME = "erap.json"
ERRORS_FILENAME = "errors.txt"
JSON_INDENT = 1
