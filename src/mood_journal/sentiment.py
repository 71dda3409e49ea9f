"""Display-only sentiment analysis of diary text."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

from textblob import TextBlob

from mood_journal.storage.models import MoodCategory

logger = logging.getLogger(__name__)

NEGATIVE_THRESHOLD = -0.25
POSITIVE_THRESHOLD = 0.25

_ANALYSIS_EMOJI = {
    MoodCategory.SAD: "😢",
    MoodCategory.NEUTRAL: "😐",
    MoodCategory.HAPPY: "😊",
}


class SentimentScorer(Protocol):
    """Anything that maps text to a polarity roughly within ``[-1, 1]``."""

    def score(self, text: str) -> float:
        """Return the sentiment polarity of ``text``."""


class TextBlobScorer:
    """Scores text with TextBlob's pattern-based polarity analyser."""

    def score(self, text: str) -> float:
        return float(TextBlob(text).sentiment.polarity)


@dataclass(frozen=True, slots=True)
class SentimentResult:
    """Outcome of analysing a diary entry; never written to the mood record."""

    score: float
    category: MoodCategory

    @property
    def message(self) -> str:
        return f"{_ANALYSIS_EMOJI[self.category]} Your mood is: {self.category.value}"


def classify_sentiment(score: float) -> MoodCategory:
    """Bucket a polarity score into Sad, Neutral or Happy."""
    if score < NEGATIVE_THRESHOLD:
        return MoodCategory.SAD
    if score < POSITIVE_THRESHOLD:
        return MoodCategory.NEUTRAL
    return MoodCategory.HAPPY


def analyze_entry(text: str, scorer: SentimentScorer) -> SentimentResult | None:
    """Score a diary entry, returning ``None`` when the text is blank.

    Args:
        text: Diary text as typed by the user.
        scorer: Sentiment backend.

    Returns:
        The score and its display category, or ``None`` for blank input.

    """
    clean = text.strip()
    if not clean:
        return None
    score = scorer.score(clean)
    logger.debug("Sentiment score %.3f for %d characters", score, len(clean))
    return SentimentResult(score=score, category=classify_sentiment(score))


__all__ = [
    "SentimentScorer",
    "TextBlobScorer",
    "SentimentResult",
    "classify_sentiment",
    "analyze_entry",
]
