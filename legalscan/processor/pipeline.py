from abc import ABC, abstractmethod
from dataclasses import dataclass

from legalscan.analysis.models import StructuredAnalysis
from legalscan.classification.models import ClassificationResult
from legalscan.entities.models import CaseFields
from legalscan.extraction.models import ExtractionResult, SourceDocument


@dataclass(slots=True)
class PipelineContext:
    document: SourceDocument
    extraction: ExtractionResult | None = None
    classification: ClassificationResult | None = None
    fields: CaseFields | None = None
    analysis: StructuredAnalysis | None = None
    record_id: int | None = None


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
