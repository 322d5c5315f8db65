from collections.abc import Callable
from datetime import datetime, timezone

from legalscan.analysis.models import AnalysisMetadata, StructuredAnalysis
from legalscan.classification.models import ClassificationResult
from legalscan.entities.models import CaseFields
from legalscan.extraction.models import ExtractionResult


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class AnalysisAssembler:
    """Merges extraction, classification and case fields into one record."""

    def __init__(self, clock: Callable[[], datetime] = _utc_now) -> None:
        self._clock = clock

    def assemble(
        self,
        extraction: ExtractionResult,
        classification: ClassificationResult,
        fields: CaseFields,
        media_type: str,
    ) -> StructuredAnalysis:
        return StructuredAnalysis(
            text=extraction.text,
            classification=classification,
            fields=fields,
            metadata=AnalysisMetadata(
                processed_at=self._clock(),
                media_type=media_type,
                extraction_method=extraction.method,
                page_count=extraction.page_count,
                failed_pages=tuple(extraction.failed_pages),
            ),
        )
