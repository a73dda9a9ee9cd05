"""
signal_factory.sources: boundary to market data, sentiment and prediction.

The engine only talks to the three protocols below; the bundled
implementations serve CSV snapshots and fixed sentiment readings.
"""

from ._csv_source import CsvMarketDataSource
from ._protocols import (
    BarsPayload,
    MarketDataSource,
    Prediction,
    PriceBar,
    PricePredictor,
    SentimentSource,
)
from ._static import StaticSentimentSource
from .validation import normalize_bars, validate_bars

__all__ = [
    "BarsPayload",
    "MarketDataSource",
    "Prediction",
    "PriceBar",
    "PricePredictor",
    "SentimentSource",
    "CsvMarketDataSource",
    "StaticSentimentSource",
    "normalize_bars",
    "validate_bars",
]
