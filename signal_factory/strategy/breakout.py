from dataclasses import dataclass
from typing import Optional

from .base import EvaluationContext, clamp01
from .signal import CandidateSignal, Direction, TimeHorizon


@dataclass(frozen=True)
class BreakoutStrategy:
    """
    Close beyond the prior 20-bar range, confirmed by volume and ATR.

    Stops sit 2 ATR behind the broken level, targets 3 ATR beyond price.
    """
    volume_multiple: float = 1.5
    min_atr_pct: float = 0.02
    max_confidence: float = 0.85
    stop_atr: float = 2.0
    target_atr: float = 3.0
    risk_score: float = 0.35
    _name: str = "breakout"

    @property
    def name(self) -> str:
        return self._name

    def evaluate(self, ctx: EvaluationContext) -> Optional[CandidateSignal]:
        snap = ctx.snapshot
        price = ctx.price
        atr = snap.atr
        if price <= 0 or atr <= 0 or snap.recent_avg_volume <= 0:
            return None

        volume_ratio = snap.last_volume / snap.recent_avg_volume
        if volume_ratio <= self.volume_multiple:
            return None
        if atr / price <= self.min_atr_pct:
            return None

        if price > snap.recent_high:
            level = snap.recent_high
            direction = Direction.BUY
            confidence = min(self.max_confidence, (price - level) / atr * 0.5 + 0.5)
            stop_loss = level - atr * self.stop_atr
            take_profit = price + atr * self.target_atr
            rationale = "Bullish breakout above 20-bar high with volume confirmation"
        elif price < snap.recent_low:
            level = snap.recent_low
            direction = Direction.SELL
            confidence = min(self.max_confidence, (level - price) / atr * 0.5 + 0.5)
            stop_loss = level + atr * self.stop_atr
            take_profit = price - atr * self.target_atr
            rationale = "Bearish breakout below 20-bar low with volume confirmation"
        else:
            return None

        return CandidateSignal(
            symbol=ctx.symbol,
            strategy=self.name,
            direction=direction,
            confidence=clamp01(confidence),
            price=price,
            stop_loss=stop_loss,
            take_profit=take_profit,
            expected_return=atr * self.target_atr / price,
            risk_score=clamp01(self.risk_score),
            horizon=TimeHorizon.SWING,
            regime=ctx.regime,
            rationale=rationale,
            indicators={
                "breakout_level": level,
                "atr": atr,
                "volume_ratio": volume_ratio,
            },
            as_of=ctx.as_of,
        )


def build(params: dict) -> BreakoutStrategy:
    """Build a BreakoutStrategy from config params."""
    return BreakoutStrategy(
        volume_multiple=params.get("volume_multiple", 1.5),
        min_atr_pct=params.get("min_atr_pct", 0.02),
        max_confidence=params.get("max_confidence", 0.85),
        stop_atr=params.get("stop_atr", 2.0),
        target_atr=params.get("target_atr", 3.0),
    )
