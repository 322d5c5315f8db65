from abc import ABC, abstractmethod

PAGE_SEPARATOR = "\n\n"


class BasePdfExtractor(ABC):
    """Contract for native (embedded text layer) PDF extraction adapters."""

    @abstractmethod
    def extract(self, pdf_bytes: bytes) -> str:
        """Extract the embedded text layer from PDF bytes.

        Args:
            pdf_bytes: Raw PDF file content.

        Returns:
            Page texts joined by a blank line, stripped. Empty for image-only PDFs.

        Raises:
            PdfExtractionError: if the PDF cannot be parsed.
        """


class BasePdfRenderer(ABC):
    """Contract for PDF-to-image adapters."""

    @abstractmethod
    def render_pages(self, pdf_bytes: bytes, dpi: int) -> list[bytes]:
        """Rasterize every page.

        Args:
            pdf_bytes: Raw PDF file content.
            dpi: Render density.

        Returns:
            PNG-encoded page images in page order.

        Raises:
            PdfRenderError: if the document cannot be opened or rendered.
        """
