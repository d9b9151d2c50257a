import logging
from typing import List, Optional

from fastapi import APIRouter, File, HTTPException, UploadFile

from app.config import get_settings
from app.core.docx_extractor import extract_docx_text
from app.core.errors import (
    ExtractionError,
    InvalidInputError,
    OCRExtractionError,
    ScrapeError,
)
from app.core.ocr_extractor import extract_image_text
from app.core.pdf_extractor import extract_pdf_text
from app.core.profile_parser import parse_profile_text
from app.core.quality import QualityCalculator, collect_warnings, is_meaningful
from app.core.schemas import ParseResponse, TextParseRequest, TextSource, UrlParseRequest
from app.core.web_scraper import scrape_profile_text

logger = logging.getLogger(__name__)

router = APIRouter(tags=["parse"])

DOCX_CONTENT_TYPES = {"application/vnd.openxmlformats-officedocument.wordprocessingml.document"}
TEXT_CONTENT_TYPES = {"text/plain", "text/markdown"}


def _extraction_http_error(exc: ExtractionError) -> HTTPException:
    if isinstance(exc, InvalidInputError):
        return HTTPException(status_code=400, detail=exc.message)
    if isinstance(exc, ScrapeError):
        return HTTPException(status_code=502, detail=exc.message)
    if isinstance(exc, OCRExtractionError):
        return HTTPException(status_code=503, detail=exc.message)
    return HTTPException(status_code=422, detail=exc.message)


def _build_response(text: str, source: TextSource, count_experience: bool = False) -> ParseResponse:
    profile = parse_profile_text(text)
    logger.info(
        f"Parsed {source} profile: name={bool(profile.name)}, headline={bool(profile.headline)}, "
        f"about={len(profile.about)} chars, experience={len(profile.experience)}, "
        f"skills={len(profile.skills)}, education={len(profile.education)}"
    )

    if not is_meaningful(profile, count_experience=count_experience):
        raise HTTPException(
            status_code=422,
            detail="Could not extract meaningful profile data. Please ensure the input contains readable profile text.",
        )

    field_scores = QualityCalculator.score_fields(profile)
    return ParseResponse(
        profile=profile,
        source=source,
        parse_quality=QualityCalculator.overall_quality(field_scores),
        field_scores=field_scores,
        warnings=collect_warnings(profile),
    )


@router.post(
    "/parse",
    response_model=ParseResponse,
    summary="Parse Profile Document",
    description="Extract a structured profile from a PDF, DOCX or plain-text file.",
    responses={
        400: {"description": "Empty file uploaded"},
        413: {"description": "File too large"},
        415: {"description": "Unsupported file format"},
        422: {"description": "No extractable text or no meaningful profile data"},
    },
)
async def parse_document(
    file: UploadFile = File(..., description="Profile file (PDF, DOCX, TXT or MD)")
):
    limit = get_settings().max_upload_bytes
    # Multipart uploads report their size before the body is read into memory
    if file.size is not None and file.size > limit:
        raise HTTPException(status_code=413, detail="File too large.")

    raw = await file.read()
    if not raw:
        raise HTTPException(status_code=400, detail="Empty file uploaded.")
    if len(raw) > limit:
        raise HTTPException(status_code=413, detail="File too large.")

    filename = (file.filename or "").lower()
    content_type = (file.content_type or "").lower()

    try:
        # PDF
        if filename.endswith(".pdf") or content_type == "application/pdf":
            text = extract_pdf_text(raw)
            return _build_response(text, "pdf", count_experience=True)
        # DOCX
        if filename.endswith(".docx") or content_type in DOCX_CONTENT_TYPES:
            text = extract_docx_text(raw)
            return _build_response(text, "docx")
    except ExtractionError as exc:
        raise _extraction_http_error(exc) from exc

    # Text
    if content_type in TEXT_CONTENT_TYPES or filename.endswith((".txt", ".md")):
        text = raw.decode("utf-8", errors="replace")
        return _build_response(text, "user")

    raise HTTPException(status_code=415, detail=f"Unsupported content type: {file.content_type}")


@router.post(
    "/parse/text",
    response_model=ParseResponse,
    summary="Parse Pasted Text",
    responses={
        400: {"description": "Empty text"},
        422: {"description": "No meaningful profile data"},
    },
)
def parse_text(body: TextParseRequest):
    if not body.text.strip():
        raise HTTPException(status_code=400, detail="No text provided.")
    return _build_response(body.text, "user")


@router.post(
    "/parse/ocr",
    response_model=ParseResponse,
    summary="Parse Profile Screenshots",
    description="Run OCR over one or more profile screenshots and parse the combined text.",
    responses={
        400: {"description": "No image files provided"},
        413: {"description": "Images too large"},
        422: {"description": "No text recognized or no meaningful profile data"},
        503: {"description": "OCR engine unavailable"},
    },
)
async def parse_images(
    files: Optional[List[UploadFile]] = File(None, description="One or more profile screenshots")
):
    files = files or []
    limit = get_settings().max_upload_bytes
    if sum(f.size or 0 for f in files) > limit:
        raise HTTPException(status_code=413, detail="Images too large.")

    images = []
    for f in files:
        data = await f.read()
        if data:
            images.append(data)
    if not images:
        raise HTTPException(status_code=400, detail="No image files provided")
    if sum(len(b) for b in images) > limit:
        raise HTTPException(status_code=413, detail="Images too large.")

    try:
        text = extract_image_text(images)
    except ExtractionError as exc:
        raise _extraction_http_error(exc) from exc
    return _build_response(text, "ocr")


@router.post(
    "/parse/url",
    response_model=ParseResponse,
    summary="Parse Profile Page",
    description="Fetch a public profile page and parse its visible text.",
    responses={
        400: {"description": "Invalid or disallowed URL"},
        422: {"description": "No content or no meaningful profile data"},
        502: {"description": "Profile page could not be fetched"},
    },
)
def parse_url(body: UrlParseRequest):
    try:
        text = scrape_profile_text(body.url)
    except ExtractionError as exc:
        raise _extraction_http_error(exc) from exc
    return _build_response(text, "url")

