"""Protocol definitions for the engine's external collaborators."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional, Protocol, Sequence, Union, runtime_checkable

import pandas as pd


@dataclass(frozen=True)
class PriceBar:
    """One OHLCV bar as delivered by a market-data provider."""

    time: pd.Timestamp
    open: float
    high: float
    low: float
    close: float
    volume: float


@dataclass(frozen=True)
class Prediction:
    """Output of a price-prediction model."""

    predicted_price: float
    confidence: float


BarsPayload = Union[pd.DataFrame, Sequence[PriceBar]]


@runtime_checkable
class MarketDataSource(Protocol):
    """Abstraction over any bar-data provider (exchange API, CSV snapshot, mock).

    Implementations raise ``DataUnavailable`` when the symbol cannot be served.
    """

    def fetch_bars(self, symbol: str, timeframe: str, limit: int) -> BarsPayload: ...


@runtime_checkable
class SentimentSource(Protocol):
    """Abstraction over news / social / technical sentiment feeds.

    Returns a mapping with any of the keys ``news``, ``social``,
    ``technical``; each value in [-1, 1]. Missing keys are read as neutral.
    """

    def fetch_components(self, symbol: str) -> Mapping[str, Optional[float]]: ...


@runtime_checkable
class PricePredictor(Protocol):
    """Abstraction over a price-prediction model.

    Implementations raise ``ModelUnavailable`` when no prediction can be made.
    """

    def predict(self, symbol: str, bars: pd.DataFrame) -> Prediction: ...
