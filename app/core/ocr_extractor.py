"""
OCR for profile screenshots. Uses Tesseract through pytesseract.

Each image is recognized independently; one unreadable image does not fail the
batch. Recognized texts are joined with a blank line in upload order.
"""

import io
import logging
from typing import List, Optional, Sequence

import pytesseract
from PIL import Image, UnidentifiedImageError

from app.config import get_settings
from app.core.errors import EmptyExtractionError, OCRExtractionError

logger = logging.getLogger(__name__)


def _recognize(image_bytes: bytes, language: str) -> str:
    with Image.open(io.BytesIO(image_bytes)) as img:
        # Tesseract handles L/RGB; palette and alpha images are converted first
        if img.mode not in ("L", "RGB"):
            img = img.convert("RGB")
        return pytesseract.image_to_string(img, lang=language)


def extract_image_text(images: Sequence[bytes], language: Optional[str] = None) -> str:
    """
    Run OCR over every image and return the combined text.

    Raises:
        OCRExtractionError: Tesseract is not installed or not on PATH
        EmptyExtractionError: no image produced any text
    """
    settings = get_settings()
    if settings.tesseract_cmd:
        pytesseract.pytesseract.tesseract_cmd = settings.tesseract_cmd
    lang = language or settings.ocr_language

    texts: List[str] = []
    for i, data in enumerate(images):
        try:
            text = _recognize(data, lang)
        except pytesseract.TesseractNotFoundError as exc:
            raise OCRExtractionError("OCR engine is not available on this server.") from exc
        except (UnidentifiedImageError, OSError, pytesseract.TesseractError) as exc:
            logger.warning(f"OCR failed for image {i}: {exc!r}")
            continue

        if text and text.strip():
            texts.append(text.strip())
        else:
            logger.info(f"OCR found no text in image {i}")

    if not texts:
        raise EmptyExtractionError("No text content could be extracted from the images")

    combined = "\n\n".join(texts)
    logger.info(f"OCR extracted {len(combined)} chars from {len(texts)}/{len(images)} image(s)")
    return combined
