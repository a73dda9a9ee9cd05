"""Signal value objects produced by the strategy layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from signal_factory.regime.types import RegimeDescriptor


class Direction(str, Enum):
    """Trade direction. There is deliberately no ``hold`` member."""

    BUY = "buy"
    SELL = "sell"


class TimeHorizon(str, Enum):
    SCALP = "scalp"
    DAY = "day"
    SWING = "swing"
    POSITION = "position"


@dataclass(frozen=True)
class CandidateSignal:
    """One strategy's advisory recommendation, not an execution instruction.

    Attributes
    ----------
    confidence : float
        Belief in the recommendation, 0.0 to 1.0.
    expected_return : float
        Expected move as a fraction of ``price``.
    risk_score : float
        0.0 (safe) to 1.0 (risky).
    indicators : dict
        Named indicator values the strategy looked at.
    as_of : str or None
        ISO timestamp of the bar the signal was computed on.
    """

    symbol: str
    strategy: str
    direction: Direction
    confidence: float
    price: float
    stop_loss: float
    take_profit: float
    expected_return: float
    risk_score: float
    horizon: TimeHorizon
    regime: RegimeDescriptor
    rationale: str
    indicators: dict = field(default_factory=dict)
    as_of: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.direction, Direction):
            raise ValueError(f"direction must be buy or sell, got {self.direction!r}")
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"confidence {self.confidence} outside [0, 1]")
        if not 0.0 <= self.risk_score <= 1.0:
            raise ValueError(f"risk_score {self.risk_score} outside [0, 1]")

    @property
    def signal_id(self) -> str:
        return f"{self.strategy}:{self.symbol}:{self.as_of or 'latest'}"

    def to_dict(self) -> dict:
        return {
            "signal_id": self.signal_id,
            "symbol": self.symbol,
            "strategy": self.strategy,
            "direction": self.direction.value,
            "confidence": self.confidence,
            "price": self.price,
            "stop_loss": self.stop_loss,
            "take_profit": self.take_profit,
            "expected_return": self.expected_return,
            "risk_score": self.risk_score,
            "horizon": self.horizon.value,
            "rationale": self.rationale,
            "indicators": dict(self.indicators),
            "regime": self.regime.to_dict(),
            "as_of": self.as_of,
        }


@dataclass(frozen=True)
class FusedSignal(CandidateSignal):
    """Confidence-weighted merge of all candidates for one (symbol, direction)."""

    contributors: tuple = ()

    def __post_init__(self) -> None:
        super().__post_init__()
        if len(self.contributors) < 1:
            raise ValueError("a fused signal needs at least one contributing strategy")

    @classmethod
    def from_candidate(cls, candidate: CandidateSignal) -> FusedSignal:
        return cls(
            symbol=candidate.symbol,
            strategy=candidate.strategy,
            direction=candidate.direction,
            confidence=candidate.confidence,
            price=candidate.price,
            stop_loss=candidate.stop_loss,
            take_profit=candidate.take_profit,
            expected_return=candidate.expected_return,
            risk_score=candidate.risk_score,
            horizon=candidate.horizon,
            regime=candidate.regime,
            rationale=candidate.rationale,
            indicators=dict(candidate.indicators),
            as_of=candidate.as_of,
            contributors=(candidate.strategy,),
        )

    def to_dict(self) -> dict:
        d = super().to_dict()
        d["contributors"] = list(self.contributors)
        return d
