"""signal-factory — multi-strategy trading-signal generation and fusion."""

from signal_factory.config import EngineConfig
from signal_factory.engine import BatchResult, SignalEngine, SymbolFailure, generate_signals
from signal_factory.errors import (
    DataUnavailable,
    InsufficientData,
    InvalidConfigError,
    ModelUnavailable,
    SignalEngineError,
    ZeroPriceError,
)
from signal_factory.risk import RiskConfig, SizedSignal

__all__ = [
    "EngineConfig",
    "BatchResult",
    "SignalEngine",
    "SymbolFailure",
    "generate_signals",
    "DataUnavailable",
    "InsufficientData",
    "InvalidConfigError",
    "ModelUnavailable",
    "SignalEngineError",
    "ZeroPriceError",
    "RiskConfig",
    "SizedSignal",
]
