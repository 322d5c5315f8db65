from abc import ABC, abstractmethod

from legalscan.imaging.models import PixelBuffer


class BaseOcrEngine(ABC):
    """Contract for all OCR adapters."""

    @abstractmethod
    def recognize(
        self,
        buffer: PixelBuffer,
        language: str,
        page_segmentation_mode: int,
    ) -> str:
        """Recognize text in a preprocessed page.

        Args:
            buffer: Preprocessed pixels for one page.
            language: Engine language code, e.g. "eng".
            page_segmentation_mode: How the engine partitions the page.

        Returns:
            Recognized text, stripped. May be empty.

        Raises:
            OcrError: if recognition fails for any reason.
        """
