from .core.interfaces import OHLCV_COLUMNS, validate_ohlcv
from .core.snapshot import MIN_BARS, IndicatorSnapshot, compute_snapshot
from .impl.ma import ema, ema_series, sma
from .impl.oscillators import MACD, macd, returns, rsi
from .impl.volatility import (
    BollingerBands,
    annualized_volatility,
    atr,
    bollinger,
    std_dev_annualized,
    true_range,
)
from .impl.volume import volume_ratio, volume_trend

__all__ = [
    "OHLCV_COLUMNS",
    "validate_ohlcv",
    "MIN_BARS",
    "IndicatorSnapshot",
    "compute_snapshot",
    "sma",
    "ema",
    "ema_series",
    "returns",
    "rsi",
    "MACD",
    "macd",
    "BollingerBands",
    "bollinger",
    "true_range",
    "atr",
    "std_dev_annualized",
    "annualized_volatility",
    "volume_trend",
    "volume_ratio",
]
