"""Market regime classification from an indicator snapshot and sentiment."""

from __future__ import annotations

import logging

from signal_factory.indicators import IndicatorSnapshot
from signal_factory.regime.sentiment import (
    SentimentComponents,
    SentimentWeights,
    bucket_sentiment,
)
from signal_factory.regime.types import (
    Liquidity,
    MarketPhase,
    RegimeDescriptor,
    Trend,
    Volatility,
    VolumeLevel,
)

log = logging.getLogger(__name__)

RSI_OVERBOUGHT = 70.0
RSI_OVERSOLD = 30.0
SIDEWAYS_BAND = 0.01
PHASE_MOVE = 0.1
PHASE_FLAT = 0.05


def classify_trend(snap: IndicatorSnapshot) -> Trend:
    price = snap.last_close
    if price > snap.sma_fast > snap.sma_slow and snap.rsi < RSI_OVERBOUGHT:
        return Trend.BULLISH
    if price < snap.sma_fast < snap.sma_slow and snap.rsi > RSI_OVERSOLD:
        return Trend.BEARISH
    if snap.sma_fast != 0 and abs(price - snap.sma_fast) / snap.sma_fast < SIDEWAYS_BAND:
        return Trend.SIDEWAYS
    return Trend.VOLATILE


def classify_volatility(annualized: float) -> Volatility:
    if annualized < 0.15:
        return Volatility.LOW
    if annualized < 0.25:
        return Volatility.MEDIUM
    if annualized < 0.40:
        return Volatility.HIGH
    return Volatility.EXTREME


def classify_volume(ratio: float) -> VolumeLevel:
    if ratio < 0.5:
        return VolumeLevel.LOW
    if ratio < 1.5:
        return VolumeLevel.AVERAGE
    if ratio < 2.5:
        return VolumeLevel.HIGH
    return VolumeLevel.EXTREME


def classify_phase(price_change: float, volume_trend: float) -> MarketPhase:
    if price_change > PHASE_MOVE and volume_trend > 0:
        return MarketPhase.MARKUP
    if price_change < -PHASE_MOVE and volume_trend > 0:
        return MarketPhase.MARKDOWN
    if abs(price_change) < PHASE_FLAT and volume_trend < 0:
        return MarketPhase.ACCUMULATION
    return MarketPhase.DISTRIBUTION


def classify_regime(
    snap: IndicatorSnapshot,
    sentiment: SentimentComponents,
    weights: SentimentWeights = SentimentWeights(),
) -> RegimeDescriptor:
    """Combine indicator outputs and blended sentiment into a RegimeDescriptor.

    Liquidity is always ``HIGH``: there is no order-book input to measure it.
    """
    score = sentiment.blend(weights)
    regime = RegimeDescriptor(
        trend=classify_trend(snap),
        volatility=classify_volatility(snap.volatility),
        volume=classify_volume(snap.volume_ratio),
        liquidity=Liquidity.HIGH,
        sentiment=bucket_sentiment(score),
        market_phase=classify_phase(snap.price_change, snap.volume_trend),
        sentiment_score=score,
    )
    log.debug("Regime: %s", regime.to_dict())
    return regime
