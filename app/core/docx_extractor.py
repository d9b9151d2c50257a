from io import BytesIO
import logging

from docx import Document

from app.core.errors import DocumentExtractionError, EmptyExtractionError
from app.core.text_normalization import clean_extracted_text

logger = logging.getLogger(__name__)


def extract_docx_text(docx_bytes: bytes) -> str:
    """
    Deterministically extract non-empty paragraph text from a DOCX, one paragraph per line.
    """
    try:
        doc = Document(BytesIO(docx_bytes))
    except Exception as exc:
        raise DocumentExtractionError("Failed to open DOCX file. The document might be corrupted.") from exc

    paras = [(p.text or "").strip() for p in doc.paragraphs]
    text = clean_extracted_text("\n".join(t for t in paras if t))
    if not text:
        raise EmptyExtractionError("DOCX contains no text paragraphs.")

    logger.info(f"Extracted {len(text)} chars from DOCX")
    return text
