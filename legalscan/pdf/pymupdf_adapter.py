import pymupdf

from legalscan.pdf.base import PAGE_SEPARATOR, BasePdfExtractor, BasePdfRenderer
from legalscan.pdf.exceptions import PdfExtractionError, PdfRenderError


class PyMuPdfAdapter(BasePdfExtractor):
    """Reads the embedded text layer using PyMuPDF."""

    def extract(self, pdf_bytes: bytes) -> str:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                pages = [page.get_text().strip() for page in doc]
        except Exception as exc:
            raise PdfExtractionError(f"pymupdf extraction failed: {exc}") from exc
        return PAGE_SEPARATOR.join(page for page in pages if page)


class PyMuPdfRenderer(BasePdfRenderer):
    """Rasterizes PDF pages to PNG using PyMuPDF."""

    def render_pages(self, pdf_bytes: bytes, dpi: int) -> list[bytes]:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                return [page.get_pixmap(dpi=dpi).tobytes("png") for page in doc]
        except Exception as exc:
            raise PdfRenderError(f"pymupdf rendering failed: {exc}") from exc
