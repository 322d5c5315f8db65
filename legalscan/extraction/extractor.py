"""Text extraction orchestrator.

Decision flow:
1. PDF: read the embedded text layer; non-blank text is returned as is.
2. PDF without usable text: render every page, then preprocess and OCR
   each page, joining page texts in page order.
3. Raster image: preprocess and OCR once.

A page that cannot be decoded or recognized contributes an empty segment.
Only an unreadable source (empty payload, unrenderable PDF, unsupported
media type) is fatal.
"""

from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor

from legalscan.extraction.exceptions import ExtractionError
from legalscan.extraction.models import (
    METHOD_IMAGE,
    METHOD_NATIVE,
    METHOD_OCR,
    ExtractionResult,
    PageResult,
    SourceDocument,
)
from legalscan.imaging.exceptions import ImageDecodeError
from legalscan.imaging.preprocessor import ImagePreprocessor
from legalscan.logging.logger import Log
from legalscan.ocr.base import BaseOcrEngine
from legalscan.ocr.exceptions import OcrError
from legalscan.pdf.base import PAGE_SEPARATOR, BasePdfExtractor, BasePdfRenderer
from legalscan.pdf.exceptions import PdfExtractionError, PdfRenderError


def join_pages(pages: Sequence[PageResult]) -> str:
    """Concatenate non-empty page texts with a blank line, in page order."""
    return PAGE_SEPARATOR.join(page.text for page in pages if page.text)


class TextExtractor:
    """Chooses between the embedded text layer and page-by-page OCR."""

    def __init__(
        self,
        pdf_extractor: BasePdfExtractor,
        pdf_renderer: BasePdfRenderer,
        preprocessor: ImagePreprocessor,
        ocr_engine: BaseOcrEngine,
        *,
        language: str = "eng",
        page_segmentation_mode: int = 6,
        render_dpi: int = 300,
        page_workers: int = 1,
    ) -> None:
        self._pdf_extractor = pdf_extractor
        self._pdf_renderer = pdf_renderer
        self._preprocessor = preprocessor
        self._ocr_engine = ocr_engine
        self._language = language
        self._page_segmentation_mode = page_segmentation_mode
        self._render_dpi = render_dpi
        self._page_workers = max(1, page_workers)

    def extract(self, document: SourceDocument) -> ExtractionResult:
        """Extract text from a source document.

        Raises:
            ExtractionError: if the source cannot be read at all.
        """
        if not document.content:
            raise ExtractionError("Source document is empty")

        if document.kind == "pdf":
            return self._extract_pdf(document.content)

        page = self._recognize_page(1, document.content)
        return ExtractionResult(text=page.text, method=METHOD_IMAGE, pages=(page,))

    def _extract_pdf(self, content: bytes) -> ExtractionResult:
        native_text = self._extract_native(content)
        if native_text:
            Log.info("Using embedded PDF text", chars=len(native_text))
            return ExtractionResult(text=native_text, method=METHOD_NATIVE)

        try:
            images = self._pdf_renderer.render_pages(content, self._render_dpi)
        except PdfRenderError as exc:
            raise ExtractionError(f"Cannot read PDF: {exc}") from exc

        Log.info("PDF has no embedded text, running OCR", pages=len(images))
        pages = self._recognize_pages(images)
        result = ExtractionResult(
            text=join_pages(pages),
            method=METHOD_OCR,
            pages=tuple(pages),
        )
        if result.is_partial:
            Log.warning(
                "PDF partially read",
                failed_pages=result.failed_pages,
                pages=result.page_count,
            )
        return result

    def _extract_native(self, content: bytes) -> str:
        try:
            return self._pdf_extractor.extract(content).strip()
        except PdfExtractionError as exc:
            Log.warning("Embedded text extraction failed, falling back to OCR", error=str(exc))
            return ""

    def _recognize_pages(self, images: Sequence[bytes]) -> list[PageResult]:
        numbered = list(enumerate(images, start=1))
        if self._page_workers == 1 or len(numbered) <= 1:
            return [self._recognize_page(number, image) for number, image in numbered]

        # map() yields in submission order, so results stay in page order
        with ThreadPoolExecutor(max_workers=self._page_workers) as pool:
            return list(pool.map(lambda item: self._recognize_page(*item), numbered))

    def _recognize_page(self, number: int, image: bytes) -> PageResult:
        try:
            buffer = self._preprocessor.preprocess(image)
            text = self._ocr_engine.recognize(
                buffer,
                self._language,
                self._page_segmentation_mode,
            )
        except (ImageDecodeError, OcrError) as exc:
            Log.warning("Page skipped", page=number, error=str(exc))
            return PageResult(number=number, error=str(exc))

        Log.debug("Page recognized", page=number, chars=len(text))
        return PageResult(number=number, text=text)
