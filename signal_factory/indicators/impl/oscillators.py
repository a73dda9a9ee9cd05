from dataclasses import dataclass

import numpy as np

from ..core.interfaces import ArrayLike, as_array, require_window
from .ma import ema_series


def returns(prices: ArrayLike) -> np.ndarray:
    """Single-step simple returns ``(p[i] - p[i-1]) / p[i-1]``."""
    values = as_array(prices)
    require_window("returns", values, 2)
    return np.diff(values) / values[:-1]


def rsi(prices: ArrayLike, period: int = 14) -> float:
    """
    Relative Strength Index over the trailing ``period`` returns.

    Gains and losses are averaged over the whole window (a step with no
    gain contributes zero to the gain average). Returns 100 when the
    average loss is zero.

    Raises:
        InsufficientData: If fewer than ``period + 1`` prices are supplied.
    """
    values = as_array(prices)
    require_window(f"rsi_{period}", values, period + 1)
    window = returns(values[-(period + 1):])

    avg_gain = float(np.clip(window, 0.0, None).mean())
    avg_loss = float(np.clip(-window, 0.0, None).mean())

    if avg_loss == 0:
        return 100.0
    rs = avg_gain / avg_loss
    return 100.0 - 100.0 / (1.0 + rs)


@dataclass(frozen=True)
class MACD:
    macd: float
    signal: float
    histogram: float


def macd(
    prices: ArrayLike,
    fast: int = 12,
    slow: int = 26,
    signal_period: int = 9,
) -> MACD:
    """
    MACD line, signal line and histogram at the latest bar.

    The signal line is a rolling EMA over the MACD line history, so at
    least ``slow + signal_period - 1`` prices are required.
    """
    values = as_array(prices)
    require_window("macd", values, slow + signal_period - 1)

    line = ema_series(values, fast) - ema_series(values, slow)
    signal_line = line.ewm(span=signal_period, adjust=False).mean()

    macd_value = float(line.iloc[-1])
    signal_value = float(signal_line.iloc[-1])
    return MACD(
        macd=macd_value,
        signal=signal_value,
        histogram=macd_value - signal_value,
    )
