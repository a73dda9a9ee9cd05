"""Blending of independently-sourced sentiment readings."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Mapping, Optional

from signal_factory.errors import InvalidConfigError
from signal_factory.regime.types import Sentiment

COMPONENTS = ("news", "social", "technical")

_BUCKET_SCORES = {
    Sentiment.VERY_BEARISH: -1.0,
    Sentiment.BEARISH: -0.5,
    Sentiment.NEUTRAL: 0.0,
    Sentiment.BULLISH: 0.5,
    Sentiment.VERY_BULLISH: 1.0,
}


@dataclass(frozen=True)
class SentimentWeights:
    """Blend weights per sentiment source."""

    news: float = 0.4
    social: float = 0.3
    technical: float = 0.3

    def __post_init__(self) -> None:
        for name in COMPONENTS:
            if getattr(self, name) < 0:
                raise InvalidConfigError(f"sentiment weight '{name}' must be >= 0")


@dataclass(frozen=True)
class SentimentComponents:
    """One reading per source, each clamped to [-1, 1]."""

    news: float = 0.0
    social: float = 0.0
    technical: float = 0.0

    @classmethod
    def from_mapping(cls, raw: Optional[Mapping[str, Optional[float]]]) -> SentimentComponents:
        """Build from a source payload; missing, ``None`` or non-finite components are neutral."""
        raw = raw or {}
        values = {}
        for name in COMPONENTS:
            value = raw.get(name)
            value = None if value is None else float(value)
            values[name] = _clamp(value) if value is not None and math.isfinite(value) else 0.0
        return cls(**values)

    def blend(self, weights: SentimentWeights = SentimentWeights()) -> float:
        return (
            self.news * weights.news
            + self.social * weights.social
            + self.technical * weights.technical
        )


def bucket_sentiment(score: float) -> Sentiment:
    if score > 0.6:
        return Sentiment.VERY_BULLISH
    if score > 0.2:
        return Sentiment.BULLISH
    if score > -0.2:
        return Sentiment.NEUTRAL
    if score > -0.6:
        return Sentiment.BEARISH
    return Sentiment.VERY_BEARISH


def sentiment_score(sentiment: Sentiment) -> float:
    """Representative score of a bucket, from -1 (very bearish) to +1."""
    return _BUCKET_SCORES[sentiment]


def _clamp(value: float) -> float:
    return max(-1.0, min(1.0, value))
