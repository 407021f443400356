from fastapi.testclient import TestClient
from erap.main import app

from exports import make_tsv

client = TestClient(app)

def test_health():
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"ok": True}

def test_normalize_tsv_upload():
    raw = make_tsv(
        ["City", "Ohio", "Springfield", "", "Test Program",
         "Accepting applications - rolling basis", "www.test.gov"],
        ["Tribal Government", "Arizona", "", "Navajo Nation", "Navajo ERA",
         "Applications on hold/Waitlist", "928-555-0100"],
    ).encode("utf-8")

    files = {"file": ("erap.tsv", raw, "text/tab-separated-values")}
    r = client.post("/normalize", files=files)
    assert r.status_code == 200

    data = r.json()
    assert data["programs"]["geographic"] == [{
        "type": "City",
        "status": "Accepting applications - rolling basis",
        "state": "Ohio",
        "program": "Test Program",
        "name": "Springfield",
        "county": "Clark County",
        "url": "http://www.test.gov",
    }]
    assert data["programs"]["tribal"][0]["phone"] == "928-555-0100"
    assert data["diagnostics"]["noURL"] == ["No/bad URL: Navajo ERA, 928-555-0100"]
    assert data["summary"]["rows"] == 2
    assert data["summary"]["diagnostics"] == 1
    assert data["summary"]["encoding"] == "utf-8-sig"

def test_rejects_non_tsv_upload():
    files = {"file": ("erap.pdf", b"%PDF", "application/pdf")}
    r = client.post("/normalize", files=files)
    assert r.status_code == 422

def test_rejects_export_without_header_row():
    files = {"file": ("erap.tsv", b"only\ntwo lines", "text/tab-separated-values")}
    r = client.post("/normalize", files=files)
    assert r.status_code == 422
    assert "header row" in r.json()["detail"]
