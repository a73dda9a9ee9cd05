"""Risk package: risk budget and position sizing."""

from signal_factory.risk.sizing import (
    DEFAULT_HORIZON_MULTIPLIERS,
    RiskConfig,
    SizedSignal,
    position_quantity,
    size_signal,
)

__all__ = [
    "DEFAULT_HORIZON_MULTIPLIERS",
    "RiskConfig",
    "SizedSignal",
    "position_quantity",
    "size_signal",
]
