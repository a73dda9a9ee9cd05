from dataclasses import dataclass
from typing import Optional

from signal_factory.regime.types import Volatility
from .base import EvaluationContext, clamp01
from .signal import CandidateSignal, Direction, TimeHorizon


@dataclass(frozen=True)
class MeanReversionStrategy:
    """
    Fades moves outside the Bollinger bands when RSI confirms the extreme.
    Stands aside in extreme volatility.
    """
    rsi_oversold: float = 30.0
    rsi_overbought: float = 70.0
    max_confidence: float = 0.8
    stop_pct: float = 0.05
    risk_score: float = 0.4
    _name: str = "mean_reversion"

    @property
    def name(self) -> str:
        return self._name

    def evaluate(self, ctx: EvaluationContext) -> Optional[CandidateSignal]:
        if ctx.regime.volatility is Volatility.EXTREME:
            return None

        snap = ctx.snapshot
        price = ctx.price
        width = snap.bb_upper - snap.bb_lower
        if width <= 0 or price <= 0:
            return None

        if price <= snap.bb_lower and snap.rsi < self.rsi_oversold:
            direction = Direction.BUY
            confidence = min(self.max_confidence, (snap.bb_upper - price) / width + 0.3)
            stop_loss = price * (1 - self.stop_pct)
            rationale = "Oversold: price at or below lower Bollinger band with RSI confirmation"
        elif price >= snap.bb_upper and snap.rsi > self.rsi_overbought:
            direction = Direction.SELL
            confidence = min(self.max_confidence, (price - snap.bb_lower) / width + 0.3)
            stop_loss = price * (1 + self.stop_pct)
            rationale = "Overbought: price at or above upper Bollinger band with RSI confirmation"
        else:
            return None

        return CandidateSignal(
            symbol=ctx.symbol,
            strategy=self.name,
            direction=direction,
            confidence=clamp01(confidence),
            price=price,
            stop_loss=stop_loss,
            take_profit=snap.bb_middle,
            expected_return=abs(snap.bb_middle - price) / price,
            risk_score=clamp01(self.risk_score),
            horizon=TimeHorizon.DAY,
            regime=ctx.regime,
            rationale=rationale,
            indicators={
                "bb_upper": snap.bb_upper,
                "bb_middle": snap.bb_middle,
                "bb_lower": snap.bb_lower,
                "rsi": snap.rsi,
            },
            as_of=ctx.as_of,
        )


def build(params: dict) -> MeanReversionStrategy:
    """Build a MeanReversionStrategy from config params."""
    return MeanReversionStrategy(
        rsi_oversold=params.get("rsi_oversold", 30.0),
        rsi_overbought=params.get("rsi_overbought", 70.0),
        max_confidence=params.get("max_confidence", 0.8),
        stop_pct=params.get("stop_pct", 0.05),
    )
