"""Regime package: market-condition classification."""

from signal_factory.regime.classifier import (
    classify_phase,
    classify_regime,
    classify_trend,
    classify_volatility,
    classify_volume,
)
from signal_factory.regime.sentiment import (
    SentimentComponents,
    SentimentWeights,
    bucket_sentiment,
    sentiment_score,
)
from signal_factory.regime.types import (
    Liquidity,
    MarketPhase,
    RegimeDescriptor,
    Sentiment,
    Trend,
    Volatility,
    VolumeLevel,
)

__all__ = [
    "classify_phase",
    "classify_regime",
    "classify_trend",
    "classify_volatility",
    "classify_volume",
    "SentimentComponents",
    "SentimentWeights",
    "bucket_sentiment",
    "sentiment_score",
    "Liquidity",
    "MarketPhase",
    "RegimeDescriptor",
    "Sentiment",
    "Trend",
    "Volatility",
    "VolumeLevel",
]
