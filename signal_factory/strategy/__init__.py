from .signal import CandidateSignal, Direction, FusedSignal, TimeHorizon
from .base import EvaluationContext, StrategyEvaluator, clamp01
from .momentum import MomentumStrategy
from .mean_reversion import MeanReversionStrategy
from .breakout import BreakoutStrategy
from .sentiment_contrarian import SentimentContrarianStrategy
from .model_driven import ModelDrivenStrategy
from .registry import (
    DEFAULT_STRATEGIES,
    StrategyKind,
    build_strategies,
    build_strategy,
    resolve_kind,
)

__all__ = [
    "CandidateSignal",
    "Direction",
    "FusedSignal",
    "TimeHorizon",
    "EvaluationContext",
    "StrategyEvaluator",
    "clamp01",
    "MomentumStrategy",
    "MeanReversionStrategy",
    "BreakoutStrategy",
    "SentimentContrarianStrategy",
    "ModelDrivenStrategy",
    "DEFAULT_STRATEGIES",
    "StrategyKind",
    "build_strategies",
    "build_strategy",
    "resolve_kind",
]
