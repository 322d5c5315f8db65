from dataclasses import dataclass

from legalscan.extraction.exceptions import UnsupportedMediaTypeError

PDF_MEDIA_TYPES = frozenset({"pdf", "application/pdf"})
IMAGE_MEDIA_PREFIX = "image/"

METHOD_NATIVE = "native"
METHOD_OCR = "ocr"
METHOD_IMAGE = "image"


@dataclass(frozen=True)
class SourceDocument:
    """Raw payload plus the media type declared by the caller."""

    content: bytes
    media_type: str
    name: str | None = None

    @property
    def kind(self) -> str:
        """Return "pdf" or "image" for the declared media type.

        Raises:
            UnsupportedMediaTypeError: for anything else.
        """
        media_type = self.media_type.strip().lower()
        if media_type in PDF_MEDIA_TYPES:
            return "pdf"
        if media_type.startswith(IMAGE_MEDIA_PREFIX):
            return "image"
        raise UnsupportedMediaTypeError(f"Unsupported media type '{self.media_type}'")


@dataclass(frozen=True)
class PageResult:
    """Outcome of recognizing one page (1-based ``number``)."""

    number: int
    text: str = ""
    error: str | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None


@dataclass(frozen=True)
class ExtractionResult:
    """Extracted text plus per-page accounting for OCR paths.

    ``pages`` is empty when the text came from the embedded PDF text layer.
    """

    text: str
    method: str
    pages: tuple[PageResult, ...] = ()

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def failed_pages(self) -> list[int]:
        return [page.number for page in self.pages if page.failed]

    @property
    def is_partial(self) -> bool:
        return bool(self.failed_pages)
