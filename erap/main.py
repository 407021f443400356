from fastapi import FastAPI, UploadFile, File, HTTPException
from .counties import load_default_counties
from .models import NormalizeResponse, HealthResponse
from .normalize import normalize_tsv_bytes
from .tsv import TabularFormatError

app = FastAPI(
    title="erap-normalizer",
    description="Deterministic normalization of rental assistance program listings",
    version="0.1.0",
)

@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}

@app.post("/normalize", response_model=NormalizeResponse, response_model_exclude_none=True)
async def normalize_tsv(file: UploadFile = File(...)):
    if not file.filename.lower().endswith((".tsv", ".txt")):
        raise HTTPException(status_code=422, detail="Only TSV files are supported")

    raw = await file.read()
    try:
        return normalize_tsv_bytes(raw, load_default_counties())
    except TabularFormatError as e:
        raise HTTPException(status_code=422, detail=str(e))
