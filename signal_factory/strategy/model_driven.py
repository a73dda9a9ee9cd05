import logging
import math
from dataclasses import dataclass
from typing import Optional

from signal_factory.errors import ModelUnavailable
from .base import EvaluationContext, clamp01
from .signal import CandidateSignal, Direction, TimeHorizon

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ModelDrivenStrategy:
    """
    Follows an external price prediction when it is confident and moves
    price by more than ``min_move``.

    Raises ``ModelUnavailable`` when no predictor is configured or the
    predictor fails; the engine treats that as "this evaluator is off"
    for the symbol.
    """
    min_move: float = 0.01
    max_confidence: float = 0.9
    stop_pct: float = 0.05
    risk_score: float = 0.25
    _name: str = "model_driven"

    @property
    def name(self) -> str:
        return self._name

    def evaluate(self, ctx: EvaluationContext) -> Optional[CandidateSignal]:
        if ctx.predictor is None:
            raise ModelUnavailable("no price predictor configured")

        price = ctx.price
        if price <= 0:
            return None

        recent = ctx.bars.tail(ctx.prediction_bars).reset_index(drop=True)
        try:
            prediction = ctx.predictor.predict(ctx.symbol, recent)
            predicted = float(prediction.predicted_price)
            model_conf = float(prediction.confidence)
        except ModelUnavailable:
            raise
        except Exception as exc:
            log.warning("%s: price predictor failed (%s: %s)", ctx.symbol, type(exc).__name__, exc)
            raise ModelUnavailable(f"prediction failed for {ctx.symbol}: {exc}") from exc
        if not (math.isfinite(predicted) and math.isfinite(model_conf)):
            raise ModelUnavailable(f"non-finite prediction for {ctx.symbol}")
        expected = (predicted - price) / price

        log.debug(
            "%s prediction %.6f (conf %.3f, move %.4f)",
            ctx.symbol, predicted, model_conf, expected,
        )

        if model_conf <= ctx.min_confidence or abs(expected) <= self.min_move:
            return None

        if expected > 0:
            direction = Direction.BUY
            stop_loss = price * (1 - self.stop_pct)
        else:
            direction = Direction.SELL
            stop_loss = price * (1 + self.stop_pct)

        return CandidateSignal(
            symbol=ctx.symbol,
            strategy=self.name,
            direction=direction,
            confidence=clamp01(min(self.max_confidence, model_conf)),
            price=price,
            stop_loss=stop_loss,
            take_profit=predicted,
            expected_return=abs(expected),
            risk_score=clamp01(self.risk_score),
            horizon=TimeHorizon.SWING,
            regime=ctx.regime,
            rationale=f"Model predicts {direction.value} with {model_conf:.2f} confidence",
            indicators={"prediction": predicted, "model_confidence": model_conf},
            as_of=ctx.as_of,
        )


def build(params: dict) -> ModelDrivenStrategy:
    """Build a ModelDrivenStrategy from config params."""
    return ModelDrivenStrategy(
        min_move=params.get("min_move", 0.01),
        max_confidence=params.get("max_confidence", 0.9),
        stop_pct=params.get("stop_pct", 0.05),
    )
