from dataclasses import asdict

from legalscan.analysis.assembler import AnalysisAssembler
from legalscan.analysis.serializers import OutputFormat
from legalscan.classification.classifier import NaiveBayesClassifier
from legalscan.database.repositories.analysis_repository import AnalysisRepository
from legalscan.entities.extractor import EntityExtractor
from legalscan.extraction.extractor import TextExtractor
from legalscan.logging.logger import Log
from legalscan.processor.pipeline import PipelineContext, PipelineStep


class ExtractTextStep(PipelineStep):
    def __init__(self, text_extractor: TextExtractor) -> None:
        self._text_extractor = text_extractor

    def run(self, context: PipelineContext) -> PipelineContext:
        context.extraction = self._text_extractor.extract(context.document)
        Log.info(
            f"Extracted {len(context.extraction.text)} chars",
            method=context.extraction.method,
            pages=context.extraction.page_count,
        )
        return context


class ClassifyStep(PipelineStep):
    def __init__(self, classifier: NaiveBayesClassifier) -> None:
        self._classifier = classifier

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.extraction is None:
            raise ValueError("PipelineContext.extraction must be set before classification")
        context.classification = self._classifier.classify(context.extraction.text)
        Log.info(
            f"Classified document as {context.classification.label}",
            confidence=round(context.classification.confidence, 4),
        )
        return context


class ExtractFieldsStep(PipelineStep):
    def __init__(self, entity_extractor: EntityExtractor) -> None:
        self._entity_extractor = entity_extractor

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.extraction is None:
            raise ValueError("PipelineContext.extraction must be set before field extraction")
        context.fields = self._entity_extractor.extract_fields(context.extraction.text)
        found = [name for name, value in asdict(context.fields).items() if value]
        Log.info(f"Extracted {len(found)} case fields", fields=",".join(found) or "-")
        return context


class AssembleStep(PipelineStep):
    def __init__(self, assembler: AnalysisAssembler) -> None:
        self._assembler = assembler

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.extraction is None or context.classification is None or context.fields is None:
            raise ValueError(
                "PipelineContext extraction, classification and fields must be set before assembly"
            )
        context.analysis = self._assembler.assemble(
            context.extraction,
            context.classification,
            context.fields,
            media_type=context.document.media_type,
        )
        return context


class PersistAnalysisStep(PipelineStep):
    def __init__(self, repository: AnalysisRepository, fmt: OutputFormat) -> None:
        self._repository = repository
        self._fmt = fmt

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.analysis is None:
            raise ValueError("PipelineContext.analysis must be set before persist")
        context.record_id = self._repository.save(
            context.analysis,
            original_name=context.document.name,
            fmt=self._fmt,
        )
        Log.info(f"Persisted analysis as record {context.record_id}")
        return context
