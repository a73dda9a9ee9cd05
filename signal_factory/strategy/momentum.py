from dataclasses import dataclass
from typing import Optional

from signal_factory.regime.types import Trend
from .base import EvaluationContext, clamp01
from .signal import CandidateSignal, Direction, TimeHorizon


@dataclass(frozen=True)
class MomentumStrategy:
    """
    Trend-confirmed momentum scalper: RSI away from extremes plus MACD histogram.
    """
    rsi_upper: float = 70.0
    rsi_lower: float = 30.0
    max_confidence: float = 0.9
    offset_pct: float = 0.02
    risk_score: float = 0.3
    _name: str = "momentum"

    @property
    def name(self) -> str:
        return self._name

    def evaluate(self, ctx: EvaluationContext) -> Optional[CandidateSignal]:
        snap = ctx.snapshot
        rsi = snap.rsi
        hist = snap.macd_histogram
        price = ctx.price
        band = self.rsi_upper - self.rsi_lower

        if rsi < self.rsi_upper and hist > 0 and ctx.regime.trend is Trend.BULLISH:
            direction = Direction.BUY
            confidence = min(self.max_confidence, (self.rsi_upper - rsi) / band + 0.3)
            stop_loss = price * (1 - self.offset_pct)
            take_profit = price * (1 + self.offset_pct)
            rationale = "Bullish momentum: MACD histogram positive, RSI below overbought, trend bullish"
        elif rsi > self.rsi_lower and hist < 0 and ctx.regime.trend is Trend.BEARISH:
            direction = Direction.SELL
            confidence = min(self.max_confidence, (rsi - self.rsi_lower) / band + 0.3)
            stop_loss = price * (1 + self.offset_pct)
            take_profit = price * (1 - self.offset_pct)
            rationale = "Bearish momentum: MACD histogram negative, RSI above oversold, trend bearish"
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
            expected_return=self.offset_pct,
            risk_score=clamp01(self.risk_score),
            horizon=TimeHorizon.SCALP,
            regime=ctx.regime,
            rationale=rationale,
            indicators={"rsi": rsi, "macd_histogram": hist},
            as_of=ctx.as_of,
        )


def build(params: dict) -> MomentumStrategy:
    """Build a MomentumStrategy from config params."""
    return MomentumStrategy(
        rsi_upper=params.get("rsi_upper", 70.0),
        rsi_lower=params.get("rsi_lower", 30.0),
        max_confidence=params.get("max_confidence", 0.9),
        offset_pct=params.get("offset_pct", 0.02),
    )
