from dataclasses import dataclass
from typing import Any, Optional, Protocol, runtime_checkable

import pandas as pd

from signal_factory.indicators import IndicatorSnapshot
from signal_factory.regime.types import RegimeDescriptor
from .signal import CandidateSignal


@dataclass(frozen=True)
class EvaluationContext:
    """
    Read-only inputs every evaluator sees for one symbol.
    """
    symbol: str
    bars: pd.DataFrame              # OHLCV history, oldest first
    snapshot: IndicatorSnapshot     # indicators at the latest bar
    regime: RegimeDescriptor
    min_confidence: float = 0.0     # from RiskConfig
    predictor: Optional[Any] = None  # PricePredictor or None
    prediction_bars: int = 100
    as_of: Optional[str] = None

    @property
    def price(self) -> float:
        return self.snapshot.last_close


@runtime_checkable
class StrategyEvaluator(Protocol):
    """
    Protocol for a strategy evaluator.
    """
    @property
    def name(self) -> str: ...

    def evaluate(self, ctx: EvaluationContext) -> Optional[CandidateSignal]:
        """
        Returns a buy/sell candidate, or None when the trigger is unmet.
        """
        ...


def clamp01(value: float) -> float:
    """
    Clamp ``value`` into [0, 1]; NaN maps to 0.
    """
    if value != value:
        return 0.0
    return max(0.0, min(1.0, value))
