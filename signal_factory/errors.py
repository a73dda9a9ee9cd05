"""Exception hierarchy for the signal engine.

Containment rules: an evaluator failure drops that evaluator, a data
failure drops that symbol, and only config errors abort a batch.
"""

from __future__ import annotations


class SignalEngineError(Exception):
    """Base class for every error raised by ``signal_factory``."""


class InsufficientData(SignalEngineError, ValueError):
    """An indicator was asked to compute over fewer values than its window."""

    def __init__(self, indicator: str, required: int, available: int) -> None:
        self.indicator = indicator
        self.required = required
        self.available = available
        super().__init__(
            f"{indicator} needs at least {required} values, got {available}"
        )


class DataUnavailable(SignalEngineError):
    """Market-data or sentiment retrieval failed for a symbol."""


class ZeroPriceError(SignalEngineError, ValueError):
    """Sizing was attempted against a non-positive reference price."""


class ModelUnavailable(SignalEngineError):
    """The price-prediction collaborator failed or is not configured."""


class InvalidConfigError(SignalEngineError, ValueError):
    """Engine or risk configuration is malformed."""
