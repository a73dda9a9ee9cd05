"""Discrete market-condition descriptor."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Trend(str, Enum):
    BULLISH = "bullish"
    BEARISH = "bearish"
    SIDEWAYS = "sideways"
    VOLATILE = "volatile"


class Volatility(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    EXTREME = "extreme"


class VolumeLevel(str, Enum):
    LOW = "low"
    AVERAGE = "average"
    HIGH = "high"
    EXTREME = "extreme"


class Liquidity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Sentiment(str, Enum):
    VERY_BEARISH = "very_bearish"
    BEARISH = "bearish"
    NEUTRAL = "neutral"
    BULLISH = "bullish"
    VERY_BULLISH = "very_bullish"


class MarketPhase(str, Enum):
    ACCUMULATION = "accumulation"
    MARKUP = "markup"
    DISTRIBUTION = "distribution"
    MARKDOWN = "markdown"


@dataclass(frozen=True)
class RegimeDescriptor:
    """Market state for one symbol at one evaluation.

    Recomputed on every call; nothing here is persisted.
    """

    trend: Trend
    volatility: Volatility
    volume: VolumeLevel
    liquidity: Liquidity
    sentiment: Sentiment
    market_phase: MarketPhase
    sentiment_score: float = 0.0  # blended score the bucket came from

    def to_dict(self) -> dict:
        return {
            "trend": self.trend.value,
            "volatility": self.volatility.value,
            "volume": self.volume.value,
            "liquidity": self.liquidity.value,
            "sentiment": self.sentiment.value,
            "market_phase": self.market_phase.value,
            "sentiment_score": self.sentiment_score,
        }
