"""Fixed sentiment readings, e.g. supplied in a YAML run config."""

from __future__ import annotations

from typing import Mapping, Optional


class StaticSentimentSource:
    """Returns pre-recorded sentiment components per symbol.

    Unknown symbols get an empty mapping, which the classifier reads as
    neutral on every component.
    """

    def __init__(self, readings: Optional[Mapping[str, Mapping[str, float]]] = None) -> None:
        self._readings = {sym: dict(vals or {}) for sym, vals in (readings or {}).items()}

    def fetch_components(self, symbol: str) -> Mapping[str, Optional[float]]:
        return dict(self._readings.get(symbol, {}))
