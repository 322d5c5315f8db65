import time
from unittest.mock import MagicMock

import pytest

from legalscan.extraction.exceptions import ExtractionError, UnsupportedMediaTypeError
from legalscan.extraction.extractor import TextExtractor, join_pages
from legalscan.extraction.models import (
    METHOD_IMAGE,
    METHOD_NATIVE,
    METHOD_OCR,
    PageResult,
    SourceDocument,
)
from legalscan.imaging.exceptions import ImageDecodeError
from legalscan.imaging.preprocessor import ImagePreprocessor
from legalscan.ocr.base import BaseOcrEngine
from legalscan.ocr.exceptions import OcrError, OcrTimeoutError
from legalscan.pdf.base import BasePdfExtractor, BasePdfRenderer
from legalscan.pdf.exceptions import PdfExtractionError, PdfRenderError

PAGE_TEXT = {b"img-1": "page one", b"img-2": "page two", b"img-3": "page three"}


def _make_extractor(
    native_text: str = "",
    pages: list[bytes] | None = None,
    page_workers: int = 1,
) -> tuple[TextExtractor, MagicMock, MagicMock, MagicMock, MagicMock]:
    """Create a TextExtractor whose preprocessor passes bytes straight to OCR."""
    pdf_extractor = MagicMock(spec=BasePdfExtractor)
    pdf_renderer = MagicMock(spec=BasePdfRenderer)
    preprocessor = MagicMock(spec=ImagePreprocessor)
    ocr_engine = MagicMock(spec=BaseOcrEngine)

    pdf_extractor.extract.return_value = native_text
    pdf_renderer.render_pages.return_value = pages if pages is not None else []
    preprocessor.preprocess.side_effect = lambda image: image
    ocr_engine.recognize.side_effect = lambda buffer, *_: PAGE_TEXT[buffer]

    extractor = TextExtractor(
        pdf_extractor,
        pdf_renderer,
        preprocessor,
        ocr_engine,
        page_workers=page_workers,
    )
    return extractor, pdf_extractor, pdf_renderer, preprocessor, ocr_engine


def _pdf(content: bytes = b"%PDF-fake") -> SourceDocument:
    return SourceDocument(content=content, media_type="application/pdf")


class TestNativeExtraction:
    def test_returns_embedded_text_without_ocr(self) -> None:
        extractor, pdf_extractor, renderer, preprocessor, ocr = _make_extractor(
            native_text="Case No. 12-3456, filed 01-02-2020"
        )

        result = extractor.extract(_pdf())

        assert result.text == "Case No. 12-3456, filed 01-02-2020"
        assert result.method == METHOD_NATIVE
        assert result.pages == ()
        pdf_extractor.extract.assert_called_once_with(b"%PDF-fake")
        renderer.render_pages.assert_not_called()
        preprocessor.preprocess.assert_not_called()
        ocr.recognize.assert_not_called()

    def test_accepts_short_pdf_media_type(self) -> None:
        extractor, *_ = _make_extractor(native_text="text")
        result = extractor.extract(SourceDocument(content=b"%PDF", media_type="pdf"))
        assert result.method == METHOD_NATIVE

    def test_whitespace_only_text_falls_back_to_ocr(self) -> None:
        extractor, _pdf_extractor, renderer, _pre, _ocr = _make_extractor(
            native_text="  \n\n ", pages=[b"img-1"]
        )

        result = extractor.extract(_pdf())

        assert result.method == METHOD_OCR
        assert result.text == "page one"
        renderer.render_pages.assert_called_once_with(b"%PDF-fake", 300)

    def test_native_failure_falls_back_to_ocr(self) -> None:
        extractor, pdf_extractor, _renderer, _pre, _ocr = _make_extractor(pages=[b"img-1"])
        pdf_extractor.extract.side_effect = PdfExtractionError("broken text layer")

        result = extractor.extract(_pdf())

        assert result.method == METHOD_OCR
        assert result.text == "page one"


class TestOcrExtraction:
    def test_joins_pages_in_order(self) -> None:
        extractor, *_ = _make_extractor(pages=[b"img-1", b"img-2", b"img-3"])

        result = extractor.extract(_pdf())

        assert result.text == "page one\n\npage two\n\npage three"
        assert result.page_count == 3
        assert result.failed_pages == []

    def test_passes_language_and_segmentation_mode(self) -> None:
        extractor, _pdf_extractor, _renderer, _pre, ocr = _make_extractor(pages=[b"img-1"])
        extractor.extract(_pdf())
        ocr.recognize.assert_called_once_with(b"img-1", "eng", 6)

    def test_undecodable_page_is_skipped(self) -> None:
        extractor, _pdf_extractor, _renderer, preprocessor, _ocr = _make_extractor(
            pages=[b"img-1", b"img-2", b"img-3"]
        )

        def preprocess(image: bytes) -> bytes:
            if image == b"img-2":
                raise ImageDecodeError("Cannot decode image")
            return image

        preprocessor.preprocess.side_effect = preprocess

        result = extractor.extract(_pdf())

        assert result.text == "page one\n\npage three"
        assert result.failed_pages == [2]
        assert result.is_partial
        assert result.pages[1] == PageResult(number=2, error="Cannot decode image")

    def test_ocr_failure_is_isolated_to_its_page(self) -> None:
        extractor, _pdf_extractor, _renderer, _pre, ocr = _make_extractor(
            pages=[b"img-1", b"img-2"]
        )

        def recognize(buffer: bytes, *_: object) -> str:
            if buffer == b"img-1":
                raise OcrTimeoutError("Tesseract exceeded 30s")
            return PAGE_TEXT[buffer]

        ocr.recognize.side_effect = recognize

        result = extractor.extract(_pdf())

        assert result.text == "page two"
        assert result.failed_pages == [1]

    def test_all_pages_failing_yields_empty_text(self) -> None:
        extractor, _pdf_extractor, _renderer, _pre, ocr = _make_extractor(
            pages=[b"img-1", b"img-2"]
        )
        ocr.recognize.side_effect = OcrError("engine unavailable")

        result = extractor.extract(_pdf())

        assert result.text == ""
        assert result.failed_pages == [1, 2]

    def test_empty_page_text_is_not_joined(self) -> None:
        extractor, _pdf_extractor, _renderer, _pre, ocr = _make_extractor(
            pages=[b"img-1", b"img-2", b"img-3"]
        )
        ocr.recognize.side_effect = lambda buffer, *_: "" if buffer == b"img-2" else PAGE_TEXT[buffer]

        result = extractor.extract(_pdf())

        assert result.text == "page one\n\npage three"
        assert result.failed_pages == []

    def test_render_failure_is_fatal(self) -> None:
        extractor, _pdf_extractor, renderer, _pre, _ocr = _make_extractor()
        renderer.render_pages.side_effect = PdfRenderError("pymupdf rendering failed")

        with pytest.raises(ExtractionError, match="Cannot read PDF"):
            extractor.extract(_pdf())

    def test_parallel_pages_keep_page_order(self) -> None:
        extractor, _pdf_extractor, _renderer, _pre, ocr = _make_extractor(
            pages=[b"img-1", b"img-2", b"img-3"], page_workers=3
        )
        delays = {b"img-1": 0.05, b"img-2": 0.02, b"img-3": 0.0}

        def recognize(buffer: bytes, *_: object) -> str:
            time.sleep(delays[buffer])
            return PAGE_TEXT[buffer]

        ocr.recognize.side_effect = recognize

        result = extractor.extract(_pdf())

        assert result.text == "page one\n\npage two\n\npage three"
        assert [page.number for page in result.pages] == [1, 2, 3]


class TestImageExtraction:
    def test_recognizes_single_image(self) -> None:
        extractor, pdf_extractor, renderer, _pre, _ocr = _make_extractor()

        result = extractor.extract(SourceDocument(content=b"img-1", media_type="image/png"))

        assert result.text == "page one"
        assert result.method == METHOD_IMAGE
        assert result.page_count == 1
        pdf_extractor.extract.assert_not_called()
        renderer.render_pages.assert_not_called()

    def test_undecodable_image_yields_empty_text(self) -> None:
        extractor, _pdf_extractor, _renderer, preprocessor, _ocr = _make_extractor()
        preprocessor.preprocess.side_effect = ImageDecodeError("Cannot decode image")

        result = extractor.extract(SourceDocument(content=b"junk", media_type="image/jpeg"))

        assert result.text == ""
        assert result.failed_pages == [1]


class TestInvalidSources:
    def test_empty_payload_raises(self) -> None:
        extractor, *_ = _make_extractor()
        with pytest.raises(ExtractionError, match="empty"):
            extractor.extract(_pdf(b""))

    def test_unsupported_media_type_raises(self) -> None:
        extractor, *_ = _make_extractor()
        with pytest.raises(UnsupportedMediaTypeError, match="text/plain"):
            extractor.extract(SourceDocument(content=b"hello", media_type="text/plain"))


class TestJoinPages:
    def test_skips_failed_and_empty_pages(self) -> None:
        pages = [
            PageResult(number=1, text="a"),
            PageResult(number=2, error="boom"),
            PageResult(number=3, text=""),
            PageResult(number=4, text="b"),
        ]
        assert join_pages(pages) == "a\n\nb"
