"""Fail-fast data-integrity checks for bar DataFrames."""

from __future__ import annotations

from dataclasses import asdict

import pandas as pd

from signal_factory.indicators import OHLCV_COLUMNS
from signal_factory.sources._protocols import BarsPayload, PriceBar


def validate_bars(df: pd.DataFrame) -> None:
    """Validate a raw bar DataFrame *before* any indicator math.

    Raises ``ValueError`` immediately on the first problem found so that
    corrupt / malformed data never silently enters the indicators.
    """

    # 1. Timestamp column exists with no nulls ──────────────────────────
    if "time" not in df.columns:
        raise ValueError("Missing 'time' column")
    if df["time"].isna().any():
        n = int(df["time"].isna().sum())
        raise ValueError(f"Null timestamps found: {n} rows")

    # 2. Strictly increasing time ───────────────────────────────────────
    times = pd.to_datetime(df["time"], utc=True)

    n_dupes = int(times.duplicated().sum())
    if n_dupes > 0:
        raise ValueError(f"Duplicate timestamps found: {n_dupes}")

    if not times.is_monotonic_increasing:
        raise ValueError("Timestamps not monotonic increasing")

    # 3. OHLCV present, no NaNs ────────────────────────────────────────
    missing = [c for c in OHLCV_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Missing OHLCV columns: {missing}")
    na_cols = [c for c in OHLCV_COLUMNS if df[c].isna().any()]
    if na_cols:
        raise ValueError(f"NaN values in {na_cols}")

    # 4. Volume sanity ─────────────────────────────────────────────────
    neg = int((df["volume"] < 0).sum())
    if neg > 0:
        raise ValueError(f"Negative volume found: {neg} rows")


def normalize_bars(payload: BarsPayload) -> pd.DataFrame:
    """Turn a provider payload into a validated OHLCV DataFrame.

    Accepts either a DataFrame or a sequence of :class:`PriceBar`.  Volume
    is aliased from ``tick_volume`` / ``real_volume`` when absent.
    """
    if isinstance(payload, pd.DataFrame):
        df = payload.copy()
    else:
        bars = list(payload)
        if bars and not all(isinstance(b, PriceBar) for b in bars):
            raise ValueError("bar sequence must contain PriceBar items")
        df = pd.DataFrame(
            [asdict(b) for b in bars],
            columns=["time", *OHLCV_COLUMNS],
        )

    if "volume" not in df.columns:
        for alias in ("tick_volume", "real_volume"):
            if alias in df.columns:
                df["volume"] = df[alias]
                break

    validate_bars(df)
    df["time"] = pd.to_datetime(df["time"], utc=True)
    for col in OHLCV_COLUMNS:
        df[col] = df[col].astype("float64")
    return df.reset_index(drop=True)
