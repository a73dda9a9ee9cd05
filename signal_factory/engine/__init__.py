"""Engine package — fusion, ranking and batch orchestration."""

from signal_factory.engine.core import (
    BatchResult,
    SignalEngine,
    SymbolFailure,
    clean_symbols,
    evaluate_symbol,
    generate_signals,
)
from signal_factory.engine.fusion import fuse_group, fuse_signals
from signal_factory.engine.ranking import rank_key, rank_signals

__all__ = [
    "BatchResult",
    "SignalEngine",
    "SymbolFailure",
    "clean_symbols",
    "evaluate_symbol",
    "generate_signals",
    "fuse_group",
    "fuse_signals",
    "rank_key",
    "rank_signals",
]
