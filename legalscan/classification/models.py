from dataclasses import dataclass


@dataclass(frozen=True)
class LabelScore:
    """Normalized posterior for one label."""

    label: str
    score: float


@dataclass(frozen=True)
class ClassificationResult:
    """Best label, its confidence, and every label's score sorted descending."""

    label: str
    confidence: float
    scores: tuple[LabelScore, ...] = ()
