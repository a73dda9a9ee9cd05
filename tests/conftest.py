"""Shared synthetic-bar helpers."""

from __future__ import annotations

import pandas as pd
import pytest


def make_bars(closes, volumes=None, spread: float = 3.0, start: str = "2024-01-01") -> pd.DataFrame:
    """Build an OHLCV frame: open = previous close, high/low = body +/- spread."""
    closes = [float(c) for c in closes]
    n = len(closes)
    if volumes is None:
        volumes = [100.0] * n
    opens = [closes[0]] + closes[:-1]
    return pd.DataFrame({
        "time": pd.date_range(start, periods=n, freq="1h", tz="UTC"),
        "open": opens,
        "high": [max(o, c) + spread for o, c in zip(opens, closes)],
        "low": [min(o, c) - spread for o, c in zip(opens, closes)],
        "close": closes,
        "volume": [float(v) for v in volumes],
    })


def breakout_bars() -> pd.DataFrame:
    """59 flat bars at 100 then a jump to 110 on 5x volume."""
    closes = [100.0] * 59 + [110.0]
    volumes = [100.0] * 59 + [500.0]
    return make_bars(closes, volumes)


@pytest.fixture
def flat_bars() -> pd.DataFrame:
    return make_bars([100.0] * 60)


@pytest.fixture
def bars_factory():
    return make_bars


@pytest.fixture
def breakout_frame() -> pd.DataFrame:
    return breakout_bars()
