from collections.abc import Sequence

from legalscan.analysis.assembler import AnalysisAssembler
from legalscan.analysis.models import StructuredAnalysis
from legalscan.analysis.serializers import OutputFormat
from legalscan.classification.classifier import default_classifier
from legalscan.config.settings import Settings
from legalscan.database.repositories.analysis_repository import AnalysisRepository
from legalscan.entities.extractor import EntityExtractor
from legalscan.extraction.extractor import TextExtractor
from legalscan.extraction.models import SourceDocument
from legalscan.imaging import GaussianBlur, ImagePreprocessor, KernelCache
from legalscan.logging.logger import Log
from legalscan.ocr.factory import OcrEngineFactory
from legalscan.pdf.factory import PdfExtractorFactory
from legalscan.processor.exceptions import IncompletePipelineError
from legalscan.processor.pipeline import PipelineContext, PipelineStep
from legalscan.processor.steps import (
    AssembleStep,
    ClassifyStep,
    ExtractFieldsStep,
    ExtractTextStep,
    PersistAnalysisStep,
)


class Processor:
    """Runs the document analysis pipeline.

    Pipeline: extract text -> classify -> extract fields -> assemble [-> persist].
    """

    def __init__(self, steps: Sequence[PipelineStep]) -> None:
        self._steps = tuple(steps)

    def run(self, document: SourceDocument) -> PipelineContext:
        """Run every step and return the final context."""
        Log.info(
            f"Processing document {document.name or '<bytes>'}",
            media_type=document.media_type,
            size=len(document.content),
        )
        context = PipelineContext(document=document)
        for step in self._steps:
            try:
                context = step.run(context)
            except Exception as exc:
                Log.error(f"Step {type(step).__name__} failed: {exc}")
                raise
        return context

    def process(self, document: SourceDocument) -> StructuredAnalysis:
        """Analyze one document and return its structured analysis."""
        context = self.run(document)
        if context.analysis is None:
            raise IncompletePipelineError("Pipeline finished without assembling an analysis")
        return context.analysis


def build_text_extractor(settings: Settings, kernel_cache: KernelCache) -> TextExtractor:
    preprocessor = ImagePreprocessor(
        GaussianBlur(kernel_cache),
        max_dimension=settings.preprocess_max_dimension,
        blur_radius=settings.preprocess_blur_radius,
    )
    return TextExtractor(
        pdf_extractor=PdfExtractorFactory.create(settings),
        pdf_renderer=PdfExtractorFactory.create_renderer(),
        preprocessor=preprocessor,
        ocr_engine=OcrEngineFactory.create(settings),
        language=settings.ocr_language,
        page_segmentation_mode=settings.ocr_page_segmentation_mode,
        render_dpi=settings.pdf_render_dpi,
        page_workers=settings.ocr_page_workers,
    )


def build_processor(
    settings: Settings,
    record_store: AnalysisRepository | None = None,
    kernel_cache: KernelCache | None = None,
) -> Processor:
    """Build a Processor with the configured adapters.

    Persistence is appended only when a record store is given.
    """
    text_extractor = build_text_extractor(settings, kernel_cache or KernelCache())
    steps: list[PipelineStep] = [
        ExtractTextStep(text_extractor),
        ClassifyStep(default_classifier()),
        ExtractFieldsStep(EntityExtractor()),
        AssembleStep(AnalysisAssembler()),
    ]
    if record_store is not None:
        steps.append(
            PersistAnalysisStep(record_store, OutputFormat.parse(settings.output_format))
        )
    return Processor(steps)
