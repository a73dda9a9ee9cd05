"""Strategy registry — maps strategy kinds to builder functions.

The engine resolves the caller's selection into evaluators once, at
construction, and then calls them through the resulting tuple.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, Sequence, Union

from .base import StrategyEvaluator
from .breakout import build as _build_breakout
from .mean_reversion import build as _build_mean_reversion
from .model_driven import build as _build_model_driven
from .momentum import build as _build_momentum
from .sentiment_contrarian import build as _build_sentiment


class StrategyKind(str, Enum):
    MOMENTUM = "momentum"
    MEAN_REVERSION = "mean_reversion"
    BREAKOUT = "breakout"
    SENTIMENT_CONTRARIAN = "sentiment_contrarian"
    MODEL_DRIVEN = "model_driven"


StrategyBuilder = Callable[[dict], StrategyEvaluator]
StrategySelection = Union[str, StrategyKind, dict]

_REGISTRY: dict[StrategyKind, StrategyBuilder] = {
    StrategyKind.MOMENTUM: _build_momentum,
    StrategyKind.MEAN_REVERSION: _build_mean_reversion,
    StrategyKind.BREAKOUT: _build_breakout,
    StrategyKind.SENTIMENT_CONTRARIAN: _build_sentiment,
    StrategyKind.MODEL_DRIVEN: _build_model_driven,
}

# Names used by older dashboard configs.
_ALIASES: dict[str, StrategyKind] = {
    "momentum_scalper": StrategyKind.MOMENTUM,
    "breakout_hunter": StrategyKind.BREAKOUT,
    "sentiment_master": StrategyKind.SENTIMENT_CONTRARIAN,
    "machine_learning_predictor": StrategyKind.MODEL_DRIVEN,
}

DEFAULT_STRATEGIES: tuple[str, ...] = tuple(kind.value for kind in StrategyKind)


def resolve_kind(name: Union[str, StrategyKind]) -> StrategyKind:
    """Map a strategy name (case-insensitive, aliases allowed) to its kind."""
    if isinstance(name, StrategyKind):
        return name
    key = str(name).strip().lower()
    if key in _ALIASES:
        return _ALIASES[key]
    try:
        return StrategyKind(key)
    except ValueError:
        raise ValueError(
            f"Unknown strategy type '{name}'. "
            f"Registered: {sorted(k.value for k in _REGISTRY)}"
        ) from None


def build_strategy(strategy_cfg: StrategySelection) -> StrategyEvaluator:
    """Build one evaluator from a name or a config block.

    Parameters
    ----------
    strategy_cfg : str, StrategyKind or dict
        A dict must contain a ``type`` key; remaining keys are passed as
        ``params`` to the builder.
    """
    if isinstance(strategy_cfg, dict):
        cfg = dict(strategy_cfg)  # shallow copy so we don't mutate caller's dict
        strategy_type = cfg.pop("type", None)
        if strategy_type is None:
            raise ValueError("strategy config must contain a 'type' key")
    else:
        strategy_type, cfg = strategy_cfg, {}
    return _REGISTRY[resolve_kind(strategy_type)](cfg)


def build_strategies(selection: Sequence[StrategySelection]) -> tuple[StrategyEvaluator, ...]:
    """Build the dispatch table for a strategy selection.

    Duplicates of the same kind are ignored after the first occurrence.
    """
    evaluators: list[StrategyEvaluator] = []
    seen: set[StrategyKind] = set()
    for item in selection:
        raw = item.get("type") if isinstance(item, dict) else item
        if raw is None:
            raise ValueError("strategy config must contain a 'type' key")
        kind = resolve_kind(raw)
        if kind in seen:
            continue
        seen.add(kind)
        evaluators.append(build_strategy(item))
    return tuple(evaluators)
