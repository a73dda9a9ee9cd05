import dataclasses

import pandas as pd
import pytest

from signal_factory.errors import ModelUnavailable
from signal_factory.indicators import IndicatorSnapshot
from signal_factory.regime import (
    Liquidity,
    MarketPhase,
    RegimeDescriptor,
    Sentiment,
    Trend,
    Volatility,
    VolumeLevel,
)
from signal_factory.sources import Prediction
from signal_factory.strategy import (
    BreakoutStrategy,
    CandidateSignal,
    Direction,
    EvaluationContext,
    MeanReversionStrategy,
    ModelDrivenStrategy,
    MomentumStrategy,
    SentimentContrarianStrategy,
    StrategyEvaluator,
    TimeHorizon,
    clamp01,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

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
        atr=4.0,
        volatility=0.1,
        volume_ratio=1.0,
        volume_trend=0.0,
        recent_high=102.0,
        recent_low=98.0,
        recent_avg_volume=100.0,
    )
    return dataclasses.replace(base, **overrides)


def _regime(**overrides) -> RegimeDescriptor:
    base = RegimeDescriptor(
        trend=Trend.SIDEWAYS,
        volatility=Volatility.MEDIUM,
        volume=VolumeLevel.AVERAGE,
        liquidity=Liquidity.HIGH,
        sentiment=Sentiment.NEUTRAL,
        market_phase=MarketPhase.DISTRIBUTION,
    )
    return dataclasses.replace(base, **overrides)


def _ctx(snap=None, regime=None, bars=None, **kwargs) -> EvaluationContext:
    return EvaluationContext(
        symbol="BTCUSDT",
        bars=bars if bars is not None else pd.DataFrame(),
        snapshot=snap or _snap(),
        regime=regime or _regime(),
        as_of="2024-01-01T00:00:00+00:00",
        **kwargs,
    )


class _FixedPredictor:
    def __init__(self, price, confidence):
        self.prediction = Prediction(predicted_price=price, confidence=confidence)
        self.calls = []

    def predict(self, symbol, bars):
        self.calls.append((symbol, len(bars)))
        return self.prediction


class _BrokenPredictor:
    def predict(self, symbol, bars):
        raise ModelUnavailable("model offline")


class _CrashingPredictor:
    def predict(self, symbol, bars):
        raise ConnectionError("connection reset")


# ---------------------------------------------------------------------------
# Protocol
# ---------------------------------------------------------------------------

@pytest.mark.parametrize(
    "cls",
    [
        MomentumStrategy,
        MeanReversionStrategy,
        BreakoutStrategy,
        SentimentContrarianStrategy,
        ModelDrivenStrategy,
    ],
)
def test_evaluators_satisfy_protocol(cls):
    assert isinstance(cls(), StrategyEvaluator)


def test_clamp01():
    assert clamp01(1.3) == 1.0
    assert clamp01(-0.2) == 0.0
    assert clamp01(float("nan")) == 0.0


# ---------------------------------------------------------------------------
# Momentum
# ---------------------------------------------------------------------------

class TestMomentum:
    def test_buy_in_bullish_trend(self):
        ctx = _ctx(_snap(rsi=50.0, macd_histogram=0.5), _regime(trend=Trend.BULLISH))
        sig = MomentumStrategy().evaluate(ctx)

        assert sig.direction is Direction.BUY
        assert sig.confidence == pytest.approx(0.8)
        assert sig.stop_loss == pytest.approx(98.0)
        assert sig.take_profit == pytest.approx(102.0)
        assert sig.expected_return == pytest.approx(0.02)
        assert sig.risk_score == pytest.approx(0.3)
        assert sig.horizon is TimeHorizon.SCALP
        assert sig.strategy == "momentum"

    def test_confidence_capped(self):
        ctx = _ctx(_snap(rsi=31.0, macd_histogram=0.5), _regime(trend=Trend.BULLISH))
        assert MomentumStrategy().evaluate(ctx).confidence == pytest.approx(0.9)

    def test_sell_in_bearish_trend(self):
        ctx = _ctx(_snap(rsi=40.0, macd_histogram=-0.5), _regime(trend=Trend.BEARISH))
        sig = MomentumStrategy().evaluate(ctx)

        assert sig.direction is Direction.SELL
        assert sig.confidence == pytest.approx(0.55)
        assert sig.stop_loss == pytest.approx(102.0)
        assert sig.take_profit == pytest.approx(98.0)

    def test_no_signal_without_trend(self):
        ctx = _ctx(_snap(rsi=50.0, macd_histogram=0.5), _regime(trend=Trend.SIDEWAYS))
        assert MomentumStrategy().evaluate(ctx) is None

    def test_no_signal_when_histogram_disagrees(self):
        ctx = _ctx(_snap(rsi=50.0, macd_histogram=-0.5), _regime(trend=Trend.BULLISH))
        assert MomentumStrategy().evaluate(ctx) is None


# ---------------------------------------------------------------------------
# Mean reversion
# ---------------------------------------------------------------------------

class TestMeanReversion:
    def test_buy_below_lower_band(self):
        ctx = _ctx(_snap(last_close=95.0, rsi=25.0))
        sig = MeanReversionStrategy().evaluate(ctx)

        assert sig.direction is Direction.BUY
        # (104 - 95) / 8 + 0.3 capped at 0.8
        assert sig.confidence == pytest.approx(0.8)
        assert sig.stop_loss == pytest.approx(95.0 * 0.95)
        assert sig.take_profit == pytest.approx(100.0)
        assert sig.expected_return == pytest.approx(5.0 / 95.0)
        assert sig.horizon is TimeHorizon.DAY

    def test_sell_above_upper_band(self):
        ctx = _ctx(_snap(last_close=105.0, rsi=75.0))
        sig = MeanReversionStrategy().evaluate(ctx)

        assert sig.direction is Direction.SELL
        assert sig.stop_loss == pytest.approx(105.0 * 1.05)
        assert sig.take_profit == pytest.approx(100.0)
        assert sig.risk_score == pytest.approx(0.4)

    def test_needs_rsi_confirmation(self):
        ctx = _ctx(_snap(last_close=95.0, rsi=45.0))
        assert MeanReversionStrategy().evaluate(ctx) is None

    def test_stands_aside_in_extreme_volatility(self):
        ctx = _ctx(_snap(last_close=95.0, rsi=25.0), _regime(volatility=Volatility.EXTREME))
        assert MeanReversionStrategy().evaluate(ctx) is None

    def test_zero_width_bands(self):
        ctx = _ctx(_snap(bb_upper=100.0, bb_middle=100.0, bb_lower=100.0, rsi=10.0))
        assert MeanReversionStrategy().evaluate(ctx) is None


# ---------------------------------------------------------------------------
# Breakout
# ---------------------------------------------------------------------------

class TestBreakout:
    def test_bullish_breakout(self):
        snap = _snap(last_close=104.0, recent_high=102.0, last_volume=200.0, atr=4.0)
        sig = BreakoutStrategy().evaluate(_ctx(snap))

        assert sig.direction is Direction.BUY
        assert sig.confidence == pytest.approx(0.75)
        assert sig.stop_loss == pytest.approx(102.0 - 8.0)
        assert sig.take_profit == pytest.approx(104.0 + 12.0)
        assert sig.expected_return == pytest.approx(12.0 / 104.0)
        assert sig.risk_score == pytest.approx(0.35)
        assert sig.horizon is TimeHorizon.SWING
        assert sig.indicators["breakout_level"] == 102.0

    def test_bearish_breakout(self):
        snap = _snap(last_close=96.0, recent_low=98.0, last_volume=200.0, atr=4.0)
        sig = BreakoutStrategy().evaluate(_ctx(snap))

        assert sig.direction is Direction.SELL
        assert sig.stop_loss == pytest.approx(98.0 + 8.0)
        assert sig.take_profit == pytest.approx(96.0 - 12.0)

    def test_confidence_capped(self):
        snap = _snap(last_close=120.0, recent_high=102.0, last_volume=200.0, atr=4.0)
        assert BreakoutStrategy().evaluate(_ctx(snap)).confidence == pytest.approx(0.85)

    def test_needs_volume_confirmation(self):
        snap = _snap(last_close=104.0, recent_high=102.0, last_volume=150.0)
        assert BreakoutStrategy().evaluate(_ctx(snap)) is None

    def test_needs_meaningful_atr(self):
        snap = _snap(last_close=104.0, recent_high=102.0, last_volume=200.0, atr=1.0)
        assert BreakoutStrategy().evaluate(_ctx(snap)) is None

    def test_inside_range(self):
        snap = _snap(last_close=101.0, last_volume=500.0)
        assert BreakoutStrategy().evaluate(_ctx(snap)) is None


# ---------------------------------------------------------------------------
# Sentiment contrarian
# ---------------------------------------------------------------------------

class TestSentimentContrarian:
    def test_very_bullish_against_trend(self):
        ctx = _ctx(regime=_regime(sentiment=Sentiment.VERY_BULLISH, trend=Trend.BEARISH))
        sig = SentimentContrarianStrategy().evaluate(ctx)

        assert sig.direction is Direction.BUY
        assert sig.confidence == pytest.approx(0.75)
        assert sig.risk_score == pytest.approx(0.45)
        assert sig.stop_loss == pytest.approx(97.0)
        assert sig.take_profit == pytest.approx(103.0)
        assert sig.expected_return == pytest.approx(0.03)
        assert sig.indicators["sentiment_score"] == 1.0

    def test_very_bearish_against_trend(self):
        ctx = _ctx(regime=_regime(sentiment=Sentiment.VERY_BEARISH, trend=Trend.SIDEWAYS))
        sig = SentimentContrarianStrategy().evaluate(ctx)

        assert sig.direction is Direction.SELL
        assert sig.stop_loss == pytest.approx(103.0)

    def test_confirmed_sentiment_is_ignored(self):
        ctx = _ctx(regime=_regime(sentiment=Sentiment.VERY_BULLISH, trend=Trend.BULLISH))
        assert SentimentContrarianStrategy().evaluate(ctx) is None

    def test_mild_sentiment_is_ignored(self):
        ctx = _ctx(regime=_regime(sentiment=Sentiment.BULLISH, trend=Trend.BEARISH))
        assert SentimentContrarianStrategy().evaluate(ctx) is None


# ---------------------------------------------------------------------------
# Model-driven
# ---------------------------------------------------------------------------

class TestModelDriven:
    def test_buy_on_confident_upside(self, flat_bars):
        predictor = _FixedPredictor(110.0, 0.8)
        ctx = _ctx(bars=flat_bars, predictor=predictor, min_confidence=0.6, prediction_bars=50)
        sig = ModelDrivenStrategy().evaluate(ctx)

        assert sig.direction is Direction.BUY
        assert sig.confidence == pytest.approx(0.8)
        assert sig.take_profit == pytest.approx(110.0)
        assert sig.stop_loss == pytest.approx(95.0)
        assert sig.expected_return == pytest.approx(0.1)
        assert sig.risk_score == pytest.approx(0.25)
        assert predictor.calls == [("BTCUSDT", 50)]

    def test_sell_on_downside(self, flat_bars):
        ctx = _ctx(bars=flat_bars, predictor=_FixedPredictor(90.0, 0.95))
        sig = ModelDrivenStrategy().evaluate(ctx)

        assert sig.direction is Direction.SELL
        assert sig.confidence == pytest.approx(0.9)
        assert sig.stop_loss == pytest.approx(105.0)

    def test_below_min_confidence(self, flat_bars):
        ctx = _ctx(bars=flat_bars, predictor=_FixedPredictor(110.0, 0.5), min_confidence=0.6)
        assert ModelDrivenStrategy().evaluate(ctx) is None

    def test_small_move_ignored(self, flat_bars):
        ctx = _ctx(bars=flat_bars, predictor=_FixedPredictor(100.5, 0.9))
        assert ModelDrivenStrategy().evaluate(ctx) is None

    def test_no_predictor_raises(self):
        with pytest.raises(ModelUnavailable):
            ModelDrivenStrategy().evaluate(_ctx())

    def test_predictor_failure_propagates(self, flat_bars):
        ctx = _ctx(bars=flat_bars, predictor=_BrokenPredictor())
        with pytest.raises(ModelUnavailable, match="offline"):
            ModelDrivenStrategy().evaluate(ctx)

    def test_predictor_errors_become_model_unavailable(self, flat_bars):
        ctx = _ctx(bars=flat_bars, predictor=_CrashingPredictor())
        with pytest.raises(ModelUnavailable, match="connection reset") as exc:
            ModelDrivenStrategy().evaluate(ctx)
        assert isinstance(exc.value.__cause__, ConnectionError)

    def test_non_finite_prediction_rejected(self, flat_bars):
        ctx = _ctx(bars=flat_bars, predictor=_FixedPredictor(float("nan"), 0.9))
        with pytest.raises(ModelUnavailable, match="non-finite"):
            ModelDrivenStrategy().evaluate(ctx)


# ---------------------------------------------------------------------------
# Signal value objects
# ---------------------------------------------------------------------------

def _candidate(**overrides) -> CandidateSignal:
    fields = dict(
        symbol="ETHUSDT",
        strategy="momentum",
        direction=Direction.BUY,
        confidence=0.7,
        price=100.0,
        stop_loss=98.0,
        take_profit=102.0,
        expected_return=0.02,
        risk_score=0.3,
        horizon=TimeHorizon.SCALP,
        regime=_regime(),
        rationale="test",
        as_of="2024-01-01T00:00:00+00:00",
    )
    fields.update(overrides)
    return CandidateSignal(**fields)


def test_signal_id_is_deterministic():
    assert _candidate().signal_id == "momentum:ETHUSDT:2024-01-01T00:00:00+00:00"
    assert _candidate(as_of=None).signal_id == "momentum:ETHUSDT:latest"


def test_confidence_out_of_range_rejected():
    with pytest.raises(ValueError, match="confidence"):
        _candidate(confidence=1.2)


def test_hold_direction_rejected():
    with pytest.raises(ValueError, match="buy or sell"):
        _candidate(direction="hold")


def test_to_dict_flattens_enums():
    d = _candidate().to_dict()
    assert d["direction"] == "buy"
    assert d["horizon"] == "scalp"
    assert d["regime"]["trend"] == "sideways"
