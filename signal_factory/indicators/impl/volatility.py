import math
from dataclasses import dataclass

import numpy as np

from ..core.interfaces import ArrayLike, as_array, require_window
from .ma import sma
from .oscillators import returns

TRADING_DAYS = 252


@dataclass(frozen=True)
class BollingerBands:
    upper: float
    middle: float
    lower: float

    @property
    def width(self) -> float:
        return self.upper - self.lower


def bollinger(prices: ArrayLike, period: int = 20, k: float = 2.0) -> BollingerBands:
    """
    Bollinger bands: ``sma(period) +/- k * population std`` of the last ``period`` prices.
    """
    values = as_array(prices)
    require_window(f"bollinger_{period}", values, period)
    window = values[-period:]
    middle = float(window.mean())
    band = k * float(window.std(ddof=0))
    return BollingerBands(upper=middle + band, middle=middle, lower=middle - band)


def true_range(highs: ArrayLike, lows: ArrayLike, closes: ArrayLike) -> np.ndarray:
    """
    True range per step: ``max(high - low, |high - prev_close|, |low - prev_close|)``.

    The first bar has no previous close, so the result is one shorter
    than the inputs.
    """
    high = as_array(highs)
    low = as_array(lows)
    close = as_array(closes)
    if not (len(high) == len(low) == len(close)):
        raise ValueError("highs, lows and closes must have equal length")
    require_window("true_range", close, 2)

    prev_close = close[:-1]
    h = high[1:]
    l = low[1:]
    return np.maximum.reduce([h - l, np.abs(h - prev_close), np.abs(l - prev_close)])


def atr(highs: ArrayLike, lows: ArrayLike, closes: ArrayLike, period: int = 14) -> float:
    """Average true range: simple mean of the last ``period`` true ranges."""
    close = as_array(closes)
    require_window(f"atr_{period}", close, period + 1)
    return sma(true_range(highs, lows, close), period)


def std_dev_annualized(step_returns: ArrayLike) -> float:
    """Population standard deviation of step returns scaled by ``sqrt(252)``."""
    values = as_array(step_returns)
    require_window("std_dev_annualized", values, 2)
    return float(values.std(ddof=0)) * math.sqrt(TRADING_DAYS)


def annualized_volatility(prices: ArrayLike) -> float:
    """:func:`std_dev_annualized` of the step returns of ``prices``."""
    return std_dev_annualized(returns(prices))
