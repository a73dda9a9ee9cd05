from dataclasses import dataclass
from typing import Optional

from signal_factory.regime.sentiment import sentiment_score
from signal_factory.regime.types import Sentiment, Trend
from .base import EvaluationContext, clamp01
from .signal import CandidateSignal, Direction, TimeHorizon


@dataclass(frozen=True)
class SentimentContrarianStrategy:
    """Trades extreme sentiment that the price trend has not confirmed yet."""

    confidence: float = 0.75
    offset_pct: float = 0.03
    risk_score: float = 0.45
    _name: str = "sentiment_contrarian"

    @property
    def name(self) -> str:
        return self._name

    def evaluate(self, ctx: EvaluationContext) -> Optional[CandidateSignal]:
        regime = ctx.regime
        price = ctx.price

        if regime.sentiment is Sentiment.VERY_BULLISH and regime.trend is not Trend.BULLISH:
            direction = Direction.BUY
            stop_loss = price * (1 - self.offset_pct)
            take_profit = price * (1 + self.offset_pct)
            rationale = "Very bullish sentiment diverging from a non-bullish trend"
        elif regime.sentiment is Sentiment.VERY_BEARISH and regime.trend is not Trend.BEARISH:
            direction = Direction.SELL
            stop_loss = price * (1 + self.offset_pct)
            take_profit = price * (1 - self.offset_pct)
            rationale = "Very bearish sentiment diverging from a non-bearish trend"
        else:
            return None

        return CandidateSignal(
            symbol=ctx.symbol,
            strategy=self.name,
            direction=direction,
            confidence=clamp01(self.confidence),
            price=price,
            stop_loss=stop_loss,
            take_profit=take_profit,
            expected_return=self.offset_pct,
            risk_score=clamp01(self.risk_score),
            horizon=TimeHorizon.DAY,
            regime=regime,
            rationale=rationale,
            indicators={
                "sentiment_score": sentiment_score(regime.sentiment),
                "sentiment_blend": regime.sentiment_score,
            },
            as_of=ctx.as_of,
        )


def build(params: dict) -> SentimentContrarianStrategy:
    """Build a SentimentContrarianStrategy from config params."""
    return SentimentContrarianStrategy(
        confidence=params.get("confidence", 0.75),
        offset_pct=params.get("offset_pct", 0.03),
    )
