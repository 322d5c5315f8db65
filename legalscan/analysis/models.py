from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from legalscan.classification.models import ClassificationResult, LabelScore
from legalscan.entities.models import CaseFields

DEFAULT_TITLE = "Legal Document Analysis"


@dataclass(frozen=True)
class AnalysisMetadata:
    """Fixed-shape processing metadata attached to every analysis."""

    processed_at: datetime
    media_type: str
    extraction_method: str
    page_count: int = 0
    failed_pages: tuple[int, ...] = ()


@dataclass(frozen=True)
class StructuredAnalysis:
    """Classification, case fields and raw text for one document."""

    text: str
    classification: ClassificationResult
    fields: CaseFields
    metadata: AnalysisMetadata
    title: str = field(default=DEFAULT_TITLE)

    def to_dict(self) -> dict[str, Any]:
        """Default JSON shape; absent fields are ``None``."""
        return {
            "title": self.title,
            "extractedText": self.text,
            "analysis": {
                "type": self.classification.label,
                "confidence": self.classification.confidence,
                "scores": [
                    {"label": s.label, "score": s.score} for s in self.classification.scores
                ],
                "location": self.fields.location,
                "amounts": list(self.fields.amounts),
                "caseNumber": self.fields.case_number,
                "plaintiffs": self.fields.plaintiffs,
                "defendants": self.fields.defendants,
                "claimants": self.fields.claimants,
                "filingDate": self.fields.filing_date,
                "judgeName": self.fields.judge_name,
            },
            "metadata": {
                "processedAt": self.metadata.processed_at.isoformat(),
                "mediaType": self.metadata.media_type,
                "extractionMethod": self.metadata.extraction_method,
                "pageCount": self.metadata.page_count,
                "failedPages": list(self.metadata.failed_pages),
            },
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "StructuredAnalysis":
        analysis = data["analysis"]
        metadata = data["metadata"]
        return cls(
            title=data["title"],
            text=data["extractedText"],
            classification=ClassificationResult(
                label=analysis["type"],
                confidence=float(analysis["confidence"]),
                scores=tuple(
                    LabelScore(label=s["label"], score=float(s["score"]))
                    for s in analysis.get("scores", [])
                ),
            ),
            fields=CaseFields(
                case_number=analysis.get("caseNumber"),
                plaintiffs=analysis.get("plaintiffs"),
                defendants=analysis.get("defendants"),
                claimants=analysis.get("claimants"),
                filing_date=analysis.get("filingDate"),
                judge_name=analysis.get("judgeName"),
                location=analysis.get("location"),
                amounts=tuple(analysis.get("amounts", [])),
            ),
            metadata=AnalysisMetadata(
                processed_at=datetime.fromisoformat(metadata["processedAt"]),
                media_type=metadata["mediaType"],
                extraction_method=metadata["extractionMethod"],
                page_count=int(metadata.get("pageCount", 0)),
                failed_pages=tuple(int(p) for p in metadata.get("failedPages", [])),
            ),
        )
