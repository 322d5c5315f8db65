import pytesseract

from legalscan.imaging.models import PixelBuffer, buffer_to_image
from legalscan.ocr.base import BaseOcrEngine
from legalscan.ocr.exceptions import OcrError, OcrTimeoutError


class TesseractAdapter(BaseOcrEngine):
    """Recognizes text with the Tesseract engine via pytesseract."""

    def __init__(self, timeout_seconds: int = 30) -> None:
        self._timeout_seconds = timeout_seconds

    def recognize(
        self,
        buffer: PixelBuffer,
        language: str,
        page_segmentation_mode: int,
    ) -> str:
        image = buffer_to_image(buffer).convert("L")
        try:
            text = pytesseract.image_to_string(
                image,
                lang=language,
                config=f"--psm {page_segmentation_mode}",
                timeout=self._timeout_seconds,
            )
        except RuntimeError as exc:
            # pytesseract signals a killed subprocess with this message
            if "timeout" in str(exc).lower():
                raise OcrTimeoutError(
                    f"Tesseract exceeded {self._timeout_seconds}s"
                ) from exc
            raise OcrError(f"Tesseract recognition failed: {exc}") from exc
        except Exception as exc:
            raise OcrError(f"Tesseract recognition failed: {exc}") from exc
        return text.strip()
