import dataclasses

import pytest

from signal_factory.errors import InvalidConfigError
from signal_factory.indicators import IndicatorSnapshot, compute_snapshot
from signal_factory.regime import (
    Liquidity,
    MarketPhase,
    Sentiment,
    SentimentComponents,
    SentimentWeights,
    Trend,
    Volatility,
    VolumeLevel,
    bucket_sentiment,
    classify_phase,
    classify_regime,
    classify_trend,
    classify_volatility,
    classify_volume,
    sentiment_score,
)


def _snap(**overrides) -> IndicatorSnapshot:
    base = IndicatorSnapshot(
        n_bars=60,
        first_close=100.0,
        last_close=100.0,
        last_volume=100.0,
        sma_fast=100.0,
        sma_slow=100.0,
        rsi=50.0,
        macd=0.0,
        macd_signal=0.0,
        macd_histogram=0.0,
        bb_upper=104.0,
        bb_middle=100.0,
        bb_lower=96.0,
        atr=2.0,
        volatility=0.1,
        volume_ratio=1.0,
        volume_trend=0.0,
        recent_high=102.0,
        recent_low=98.0,
        recent_avg_volume=100.0,
    )
    return dataclasses.replace(base, **overrides)


class TestTrend:
    def test_bullish(self):
        assert classify_trend(_snap(last_close=110, sma_fast=105, sma_slow=100, rsi=60)) is Trend.BULLISH

    def test_bullish_needs_rsi_below_overbought(self):
        snap = _snap(last_close=110, sma_fast=105, sma_slow=100, rsi=75)
        assert classify_trend(snap) is Trend.VOLATILE

    def test_bearish(self):
        assert classify_trend(_snap(last_close=90, sma_fast=95, sma_slow=100, rsi=40)) is Trend.BEARISH

    def test_sideways_within_one_percent(self):
        assert classify_trend(_snap(last_close=100.5, sma_fast=100, sma_slow=101)) is Trend.SIDEWAYS

    def test_volatile_otherwise(self):
        assert classify_trend(_snap(last_close=103, sma_fast=100, sma_slow=101)) is Trend.VOLATILE


@pytest.mark.parametrize(
    "vol, expected",
    [
        (0.0, Volatility.LOW),
        (0.149, Volatility.LOW),
        (0.15, Volatility.MEDIUM),
        (0.25, Volatility.HIGH),
        (0.39, Volatility.HIGH),
        (0.40, Volatility.EXTREME),
    ],
)
def test_volatility_buckets(vol, expected):
    assert classify_volatility(vol) is expected


@pytest.mark.parametrize(
    "ratio, expected",
    [
        (0.4, VolumeLevel.LOW),
        (0.5, VolumeLevel.AVERAGE),
        (1.49, VolumeLevel.AVERAGE),
        (1.5, VolumeLevel.HIGH),
        (2.5, VolumeLevel.EXTREME),
    ],
)
def test_volume_buckets(ratio, expected):
    assert classify_volume(ratio) is expected


class TestPhase:
    def test_markup(self):
        assert classify_phase(0.2, 0.1) is MarketPhase.MARKUP

    def test_markdown(self):
        assert classify_phase(-0.2, 0.1) is MarketPhase.MARKDOWN

    def test_accumulation(self):
        assert classify_phase(0.01, -0.1) is MarketPhase.ACCUMULATION

    def test_distribution_is_fallback(self):
        assert classify_phase(0.2, -0.1) is MarketPhase.DISTRIBUTION
        assert classify_phase(0.0, 0.0) is MarketPhase.DISTRIBUTION


class TestSentiment:
    @pytest.mark.parametrize(
        "score, expected",
        [
            (0.61, Sentiment.VERY_BULLISH),
            (0.6, Sentiment.BULLISH),
            (0.21, Sentiment.BULLISH),
            (0.2, Sentiment.NEUTRAL),
            (-0.19, Sentiment.NEUTRAL),
            (-0.2, Sentiment.BEARISH),
            (-0.6, Sentiment.VERY_BEARISH),
        ],
    )
    def test_buckets(self, score, expected):
        assert bucket_sentiment(score) is expected

    def test_default_weights_blend(self):
        comp = SentimentComponents(news=1.0, social=0.0, technical=-1.0)
        assert comp.blend() == pytest.approx(0.1)

    def test_missing_components_are_neutral(self):
        comp = SentimentComponents.from_mapping({"news": 0.5, "social": None})
        assert comp == SentimentComponents(news=0.5, social=0.0, technical=0.0)

    @pytest.mark.parametrize("bad", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_components_are_neutral(self, bad):
        comp = SentimentComponents.from_mapping({"news": bad, "social": 0.5})
        assert comp == SentimentComponents(news=0.0, social=0.5, technical=0.0)
        assert bucket_sentiment(comp.blend()) is Sentiment.NEUTRAL

    def test_components_clamped(self):
        comp = SentimentComponents.from_mapping({"news": 3.0, "social": -7.0})
        assert comp.news == 1.0
        assert comp.social == -1.0

    def test_custom_weights(self):
        comp = SentimentComponents(news=1.0, social=1.0, technical=-1.0)
        assert comp.blend(SentimentWeights(news=1.0, social=0.0, technical=0.0)) == 1.0

    def test_negative_weight_rejected(self):
        with pytest.raises(InvalidConfigError, match="news"):
            SentimentWeights(news=-0.1)

    def test_bucket_scores(self):
        assert sentiment_score(Sentiment.VERY_BULLISH) == 1.0
        assert sentiment_score(Sentiment.BEARISH) == -0.5


def test_classify_regime_fields(flat_bars):
    snap = compute_snapshot(flat_bars)
    regime = classify_regime(snap, SentimentComponents(news=1.0, social=1.0, technical=1.0))

    assert regime.trend is Trend.SIDEWAYS
    assert regime.volatility is Volatility.LOW
    assert regime.volume is VolumeLevel.AVERAGE
    assert regime.liquidity is Liquidity.HIGH
    assert regime.sentiment is Sentiment.VERY_BULLISH
    assert regime.sentiment_score == pytest.approx(1.0)


def test_classify_regime_is_deterministic(breakout_frame):
    snap = compute_snapshot(breakout_frame)
    comp = SentimentComponents(news=0.3)
    assert classify_regime(snap, comp) == classify_regime(snap, comp)
