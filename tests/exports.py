"""Builders for synthetic program exports used across the tests."""

HEADERS = [
    "Geographic Level",
    "State",
    "City/County/ Locality",
    "Tribal Government/ Territory",
    "Program Name",
    "Program Status",
    "Program Page Link  (Phone # if Link is Unavailable)",
]

FRONT_MATTER = [
    "Emergency Rental Assistance programs",
    "Snapshot\t2021-06-01",
    "",
]


def make_tsv(*rows):
    """Build an export: three front-matter lines, the header row, then rows."""
    lines = FRONT_MATTER + ["\t".join(HEADERS)]
    lines += ["\t".join(row) for row in rows]
    return "\n".join(lines) + "\n"


def make_record(**fields):
    """A raw record keyed by the export headers; unspecified cells are empty."""
    keys = {
        "level": "Geographic Level",
        "state": "State",
        "locality": "City/County/ Locality",
        "territory": "Tribal Government/ Territory",
        "program": "Program Name",
        "status": "Program Status",
        "contact": "Program Page Link  (Phone # if Link is Unavailable)",
    }
    record = {h: "" for h in HEADERS}
    for k, v in fields.items():
        record[keys[k]] = v
    return record
