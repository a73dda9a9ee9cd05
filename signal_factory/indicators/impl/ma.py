import pandas as pd

from ..core.interfaces import ArrayLike, as_array, require_window


def sma(prices: ArrayLike, period: int) -> float:
    """
    Simple moving average of the last ``period`` values.

    Raises:
        InsufficientData: If fewer than ``period`` values are supplied.
    """
    values = as_array(prices)
    require_window(f"sma_{period}", values, period)
    return float(values[-period:].mean())


def ema_series(prices: ArrayLike, period: int) -> pd.Series:
    """
    Full exponential moving average path, seeded with the first value.

    Equivalent to folding ``ema = p * k + ema * (1 - k)`` with
    ``k = 2 / (period + 1)`` over the inputs in order.
    """
    values = as_array(prices)
    require_window(f"ema_{period}", values, period)
    return pd.Series(values).ewm(span=period, adjust=False).mean()


def ema(prices: ArrayLike, period: int) -> float:
    """Latest value of :func:`ema_series`."""
    return float(ema_series(prices, period).iloc[-1])
