"""Multinomial naive-Bayes document-type classifier.

Scoring: log P(label) + sum over tokens of log P(token | label), where
P(token | label) = (count + alpha) / (label_total + alpha * |vocabulary|).
Tokens never seen in training are ignored. Log-scores are normalized with a
softmax so the reported confidences sum to 1.
"""

import math
import re
from collections import Counter
from collections.abc import Iterable, Mapping
from functools import lru_cache
from types import MappingProxyType

from legalscan.classification.corpus import DEFAULT_CORPUS
from legalscan.classification.models import ClassificationResult, LabelScore
from legalscan.logging.logger import Log

_TOKEN_RE = re.compile(r"[a-z]+")

STOP_WORDS = frozenset(
    {
        "a", "an", "and", "are", "as", "at", "be", "by", "for", "from", "in",
        "is", "it", "of", "on", "or", "that", "the", "this", "to", "was", "with",
    }
)


def tokenize(text: str) -> list[str]:
    """Lowercase alphabetic tokens with stop words removed."""
    return [token for token in _TOKEN_RE.findall(text.lower()) if token not in STOP_WORDS]


class NaiveBayesClassifier:
    """Immutable classifier; build one with ``NaiveBayesClassifier.train``."""

    def __init__(
        self,
        *,
        labels: tuple[str, ...],
        log_priors: Mapping[str, float],
        token_counts: Mapping[str, Mapping[str, int]],
        label_totals: Mapping[str, int],
        vocabulary: frozenset[str],
        alpha: float,
    ) -> None:
        self._labels = labels
        self._log_priors = MappingProxyType(dict(log_priors))
        self._token_counts = MappingProxyType(
            {label: MappingProxyType(dict(counts)) for label, counts in token_counts.items()}
        )
        self._label_totals = MappingProxyType(dict(label_totals))
        self._vocabulary = vocabulary
        self._alpha = alpha

    @classmethod
    def train(
        cls,
        corpus: Iterable[tuple[str, str]],
        alpha: float = 1.0,
    ) -> "NaiveBayesClassifier":
        """Fit a model on (text, label) pairs.

        Labels keep the order of their first appearance in the corpus; that
        order breaks score ties.
        """
        if alpha <= 0:
            raise ValueError(f"alpha must be positive, got {alpha}")

        doc_counts: Counter[str] = Counter()
        token_counts: dict[str, Counter[str]] = {}
        for text, label in corpus:
            doc_counts[label] += 1
            token_counts.setdefault(label, Counter()).update(tokenize(text))

        if not doc_counts:
            raise ValueError("Cannot train a classifier on an empty corpus")

        total_docs = sum(doc_counts.values())
        labels = tuple(doc_counts)
        vocabulary = frozenset(token for counts in token_counts.values() for token in counts)

        Log.debug(
            "Trained document classifier",
            labels=len(labels),
            documents=total_docs,
            vocabulary=len(vocabulary),
        )
        return cls(
            labels=labels,
            log_priors={label: math.log(doc_counts[label] / total_docs) for label in labels},
            token_counts=token_counts,
            label_totals={label: sum(token_counts[label].values()) for label in labels},
            vocabulary=vocabulary,
            alpha=alpha,
        )

    @property
    def labels(self) -> tuple[str, ...]:
        return self._labels

    def log_scores(self, text: str) -> dict[str, float]:
        """Unnormalized log-posterior per label."""
        tokens = [token for token in tokenize(text) if token in self._vocabulary]
        smoothing = self._alpha * len(self._vocabulary)
        scores: dict[str, float] = {}
        for label in self._labels:
            counts = self._token_counts[label]
            denominator = self._label_totals[label] + smoothing
            score = self._log_priors[label]
            for token in tokens:
                score += math.log((counts.get(token, 0) + self._alpha) / denominator)
            scores[label] = score
        return scores

    def classify(self, text: str) -> ClassificationResult:
        """Return the best label with normalized confidences for every label."""
        log_scores = self.log_scores(text)
        peak = max(log_scores.values())
        exps = {label: math.exp(score - peak) for label, score in log_scores.items()}
        total = sum(exps.values())

        ranked = sorted(
            (LabelScore(label=label, score=exps[label] / total) for label in self._labels),
            key=lambda item: item.score,
            reverse=True,
        )
        best = ranked[0]
        return ClassificationResult(
            label=best.label,
            confidence=best.score,
            scores=tuple(ranked),
        )


@lru_cache(maxsize=1)
def default_classifier() -> NaiveBayesClassifier:
    """Process-wide classifier trained once on the built-in corpus."""
    return NaiveBayesClassifier.train(DEFAULT_CORPUS)
