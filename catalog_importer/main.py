import logging

from fastapi import FastAPI, UploadFile, File, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from .config import get_settings
from .models import (
    CompareResponse,
    FatalError,
    HealthResponse,
    ParsedFile,
    RevisedCompareResponse,
    RevisedValidateResponse,
    UploadResponse,
)
from .normalize import read_csv_rows
from .report import compare_against_library, compare_revised_file, validate_file, validate_revised_file

settings = get_settings()

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="catalog-importer",
    description="Pre-import validation and duplicate detection for catalog spreadsheets",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

VALIDATED_OK = "File uploaded and validated successfully!"
VALIDATED_WITH_ISSUES = "Validation completed with issues. Review errors and warnings."


async def _read_upload(file: UploadFile, label: str) -> ParsedFile:
    if not file.filename:
        raise HTTPException(status_code=400, detail=f"The {label} is required.")
    if not file.filename.lower().endswith(".csv"):
        raise HTTPException(status_code=422, detail="Only CSV files are supported")

    raw = await file.read()
    logger.info("Received %s: %s, Size: %d bytes", label, file.filename, len(raw))

    if not raw:
        logger.warning("No data in %s %s", label, file.filename)
        raise HTTPException(status_code=400, detail=f"The {label} is required.")
    if len(raw) > settings.max_upload_bytes:
        raise HTTPException(status_code=413, detail=f"The {label} is too large.")

    parsed = read_csv_rows(raw, name=label)
    if isinstance(parsed, FatalError):
        logger.warning("Could not parse %s: %s %s", label, parsed.message, parsed.details or "")
        detail = parsed.message if not parsed.details else f"{parsed.message} {parsed.details}"
        raise HTTPException(status_code=400, detail=detail)
    return parsed


@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}


@app.post("/api/fileupload/upload", response_model=UploadResponse)
async def upload_file(file: UploadFile = File(...)):
    logger.info("UploadFile endpoint hit.")
    parsed = await _read_upload(file, "file")

    report = validate_file(parsed.rows)
    return UploadResponse(
        message=VALIDATED_OK if report.ok else VALIDATED_WITH_ISSUES,
        errors=report.errors,
        warnings=report.warnings,
    )


@app.post("/api/fileupload/compare", response_model=CompareResponse)
async def compare_files(importFile: UploadFile = File(...), libraryFile: UploadFile = File(...)):
    import_file = await _read_upload(importFile, "import file")
    library_file = await _read_upload(libraryFile, "library file")

    result = compare_against_library(import_file.rows, library_file.rows)
    return CompareResponse(warnings=result.warnings)


@app.post("/api/revisedfile/validate", response_model=RevisedValidateResponse)
async def validate_revised(revisedFile: UploadFile = File(...)):
    parsed = await _read_upload(revisedFile, "revised file")

    outcome = validate_revised_file(parsed.rows, header=parsed.header)
    if isinstance(outcome, FatalError):
        return RevisedValidateResponse(errors=[outcome.message], warnings=[])
    return RevisedValidateResponse(errors=outcome.errors, warnings=outcome.warnings)


@app.post("/api/revisedfile/compare", response_model=RevisedCompareResponse)
async def compare_revised(revisedFile: UploadFile = File(...)):
    parsed = await _read_upload(revisedFile, "revised file")

    result = compare_revised_file(parsed.rows)
    return RevisedCompareResponse(compare_warnings=result.compare_warnings)
