"""Market data from CSV snapshot folders (one or more files per symbol)."""

from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd

from signal_factory.errors import DataUnavailable
from signal_factory.sources.validation import normalize_bars

log = logging.getLogger(__name__)


class CsvMarketDataSource:
    """Serves bars from ``<snapshot_dir>/<SYMBOL>.csv`` or ``<SYMBOL>_<year>*.csv``.

    Split files (e.g. one per year) are concatenated in name order.
    ``timeframe`` is informational: a snapshot holds a single timeframe.
    """

    def __init__(self, snapshot_dir: str | Path) -> None:
        self._dir = Path(snapshot_dir)

    def files_for(self, symbol: str) -> list[Path]:
        exact = self._dir / f"{symbol}.csv"
        files = sorted(self._dir.glob(f"{symbol}_[0-9]*.csv"))
        if exact.exists():
            files.insert(0, exact)
        return files

    def fetch_bars(self, symbol: str, timeframe: str, limit: int) -> pd.DataFrame:
        files = self.files_for(symbol)
        if not files:
            raise DataUnavailable(f"no CSV data for {symbol} in {self._dir}")

        try:
            frames = [pd.read_csv(f) for f in files]
            df = normalize_bars(pd.concat(frames, ignore_index=True))
        except (OSError, ValueError) as exc:
            raise DataUnavailable(f"unreadable data for {symbol}: {exc}") from exc

        log.debug(
            "Loaded %s bars for %s (%s) from %d file(s)",
            f"{len(df):,}", symbol, timeframe, len(files),
        )
        if limit > 0:
            df = df.tail(limit).reset_index(drop=True)
        return df
