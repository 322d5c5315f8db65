from legalscan.config.settings import Settings
from legalscan.ocr.base import BaseOcrEngine
from legalscan.ocr.tesseract_adapter import TesseractAdapter


class OcrEngineFactory:
    """Creates the configured OCR adapter."""

    ADAPTERS: dict[str, type[TesseractAdapter]] = {
        "tesseract": TesseractAdapter,
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseOcrEngine:
        engine = settings.ocr_engine.lower()
        adapter_cls = cls.ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown OCR engine '{engine}'. Choose from: {list(cls.ADAPTERS)}"
            )
        return adapter_cls(timeout_seconds=settings.ocr_page_timeout_seconds)
