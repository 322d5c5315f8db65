from legalscan.config.settings import Settings
from legalscan.pdf.base import BasePdfExtractor, BasePdfRenderer
from legalscan.pdf.pdfplumber_adapter import PdfPlumberAdapter
from legalscan.pdf.pymupdf_adapter import PyMuPdfAdapter, PyMuPdfRenderer


class PdfExtractorFactory:
    """Creates the configured PDF text extractor and the page renderer."""

    ADAPTERS: dict[str, type[BasePdfExtractor]] = {
        "pdfplumber": PdfPlumberAdapter,
        "pymupdf": PyMuPdfAdapter,
    }

    @classmethod
    def create(cls, settings: Settings) -> BasePdfExtractor:
        engine = settings.pdf_engine.lower()
        adapter_cls = cls.ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {list(cls.ADAPTERS)}"
            )
        return adapter_cls()

    @classmethod
    def create_renderer(cls) -> BasePdfRenderer:
        # rasterizing always goes through PyMuPDF, whatever the text engine
        return PyMuPdfRenderer()
