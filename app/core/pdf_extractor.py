from typing import Any, Dict, List, Sequence, Tuple
from io import BytesIO
import logging
import re

import pdfplumber

from app.core.errors import EmptyExtractionError, PDFExtractionError
from app.core.text_normalization import clean_extracted_text

logger = logging.getLogger(__name__)

# x_tolerance candidates tried on every page, tightest first
X_TOLERANCES = (1.5, 2, 2.5, 3)
LINE_Y_TOLERANCE = 3
GLUED_TOKEN_LEN = 18
ALLOWED_SINGLE_LETTERS = 10


def _group_lines(words: List[Dict[str, Any]], line_y_tolerance: float = LINE_Y_TOLERANCE) -> List[str]:
    """
    Rebuild text rows from pdfplumber word dicts.

    Words whose `top` falls in the same `line_y_tolerance` band form one row,
    ordered left to right by `x0` and joined with single spaces.
    """
    rows: Dict[int, List[Tuple[float, str]]] = {}
    for w in words:
        band = round(w["top"] / line_y_tolerance)
        rows.setdefault(band, []).append((w["x0"], w["text"]))

    return [" ".join(text for _, text in sorted(rows[band], key=lambda item: item[0])) for band in sorted(rows)]


def _page_text(page: Any, x_tolerance: float) -> str:
    """One cleaned candidate text for a page at the given horizontal tolerance."""
    words = page.extract_words(
        x_tolerance=x_tolerance,
        y_tolerance=2,
        keep_blank_chars=False,
        use_text_flow=True,
    )
    if not words:
        return ""
    return clean_extracted_text("\n".join(_group_lines(words)))


def _fragmentation_score(text: str) -> float:
    """
    Lower is better.

    Glued words (one alphabetic token of 18+ chars, e.g. "SeniorSoftwareEngineer")
    cost 10 each; single letters beyond the first ten ("J a n e") cost 3 each.
    A candidate without any letters is never chosen over one with letters.
    """
    tokens = re.findall(r"[^\W\d_]+", text)
    if not tokens:
        return float("inf")

    glued = sum(1 for t in tokens if len(t) >= GLUED_TOKEN_LEN)
    singles = sum(1 for t in tokens if len(t) == 1)
    return glued * 10 + max(0, singles - ALLOWED_SINGLE_LETTERS) * 3


def _extract_page(page: Any, page_number: int, tolerances: Sequence[float] = X_TOLERANCES) -> str:
    """Best cleaned text for one page; the tightest tolerance wins ties."""
    best_text, best_tol, best_score = "", tolerances[0], float("inf")
    for tol in tolerances:
        text = _page_text(page, tol)
        score = _fragmentation_score(text)
        if score < best_score:
            best_text, best_tol, best_score = text, tol, score

    logger.debug(f"PDF page {page_number}: x_tolerance={best_tol}, score={best_score}, {len(best_text)} chars")
    return best_text


def extract_pdf_text(pdf_bytes: bytes) -> str:
    """
    Extract the text layer of a PDF as one cleaned blob, pages in order.

    Raises:
        PDFExtractionError: the file cannot be opened (corrupt, encrypted)
        EmptyExtractionError: no text layer, e.g. a scanned/image-only PDF
    """
    try:
        with pdfplumber.open(BytesIO(pdf_bytes)) as pdf:
            pages = [_extract_page(page, i) for i, page in enumerate(pdf.pages, start=1)]
    except Exception as exc:
        logger.warning(f"PDF could not be read: {exc!r}")
        raise PDFExtractionError(
            "Failed to extract text from PDF. The PDF might be corrupted or password-protected."
        ) from exc

    texts = [t for t in pages if t]
    if not texts:
        raise EmptyExtractionError(
            "No text content found in PDF. The PDF might be image-based or corrupted."
        )

    text = "\n".join(texts)
    logger.info(f"Extracted {len(text)} chars from {len(texts)}/{len(pages)} PDF page(s)")
    return text
