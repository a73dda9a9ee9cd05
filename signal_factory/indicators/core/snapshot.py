from dataclasses import dataclass

import pandas as pd

from signal_factory.errors import InsufficientData
from .interfaces import validate_ohlcv
from ..impl.ma import sma
from ..impl.oscillators import macd, rsi
from ..impl.volatility import annualized_volatility, atr, bollinger
from ..impl.volume import volume_ratio, volume_trend

SMA_FAST = 20
SMA_SLOW = 50
RSI_PERIOD = 14
BOLLINGER_PERIOD = 20
BOLLINGER_K = 2.0
ATR_PERIOD = 14
BREAKOUT_LOOKBACK = 20

# Longest window any indicator in the snapshot needs.
MIN_BARS = max(SMA_SLOW, 26 + 9 - 1, BREAKOUT_LOOKBACK + 1, ATR_PERIOD + 1)


@dataclass(frozen=True)
class IndicatorSnapshot:
    """Every indicator value the classifier and evaluators read, at the latest bar."""

    n_bars: int
    first_close: float
    last_close: float
    last_volume: float

    sma_fast: float
    sma_slow: float
    rsi: float
    macd: float
    macd_signal: float
    macd_histogram: float
    bb_upper: float
    bb_middle: float
    bb_lower: float
    atr: float
    volatility: float
    volume_ratio: float
    volume_trend: float

    # Breakout references exclude the latest bar.
    recent_high: float
    recent_low: float
    recent_avg_volume: float

    @property
    def price_change(self) -> float:
        """Relative change from the first to the last close of the window."""
        if self.first_close == 0:
            return 0.0
        return (self.last_close - self.first_close) / self.first_close


def compute_snapshot(bars: pd.DataFrame) -> IndicatorSnapshot:
    """
    Computes the indicator snapshot for one symbol's bar history.

    Args:
        bars: OHLCV DataFrame ordered oldest first.

    Raises:
        InsufficientData: If the history is shorter than ``MIN_BARS``.
    """
    validate_ohlcv(bars)
    n = len(bars)
    if n < MIN_BARS:
        raise InsufficientData("indicator_snapshot", MIN_BARS, n)

    close = bars["close"].to_numpy(dtype="float64")
    high = bars["high"].to_numpy(dtype="float64")
    low = bars["low"].to_numpy(dtype="float64")
    volume = bars["volume"].to_numpy(dtype="float64")

    m = macd(close)
    bb = bollinger(close, BOLLINGER_PERIOD, BOLLINGER_K)
    prior_close = close[-(BREAKOUT_LOOKBACK + 1):-1]
    prior_volume = volume[-(BREAKOUT_LOOKBACK + 1):-1]

    return IndicatorSnapshot(
        n_bars=n,
        first_close=float(close[0]),
        last_close=float(close[-1]),
        last_volume=float(volume[-1]),
        sma_fast=sma(close, SMA_FAST),
        sma_slow=sma(close, SMA_SLOW),
        rsi=rsi(close, RSI_PERIOD),
        macd=m.macd,
        macd_signal=m.signal,
        macd_histogram=m.histogram,
        bb_upper=bb.upper,
        bb_middle=bb.middle,
        bb_lower=bb.lower,
        atr=atr(high, low, close, ATR_PERIOD),
        volatility=annualized_volatility(close),
        volume_ratio=volume_ratio(volume),
        volume_trend=volume_trend(volume),
        recent_high=float(prior_close.max()),
        recent_low=float(prior_close.min()),
        recent_avg_volume=float(prior_volume.mean()),
    )
