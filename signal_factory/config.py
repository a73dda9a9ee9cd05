"""Immutable engine configuration, loadable from YAML."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

import yaml

from signal_factory.errors import InvalidConfigError
from signal_factory.regime.sentiment import SentimentWeights
from signal_factory.risk.sizing import RiskConfig
from signal_factory.strategy.registry import DEFAULT_STRATEGIES


@dataclass(frozen=True)
class EngineConfig:
    """Immutable bag of settings for one signal batch."""

    strategies: tuple = DEFAULT_STRATEGIES
    timeframe: str = "1m"
    bar_limit: int = 500
    prediction_bars: int = 100
    max_workers: int = 4
    timeout_sec: float = 30.0  # wall-clock budget for one batch
    sentiment_weights: SentimentWeights = field(default_factory=SentimentWeights)
    risk: RiskConfig = field(default_factory=RiskConfig)

    def __post_init__(self) -> None:
        if isinstance(self.strategies, (str, dict)):
            object.__setattr__(self, "strategies", (self.strategies,))
        else:
            object.__setattr__(self, "strategies", tuple(self.strategies))
        if not self.strategies:
            raise InvalidConfigError("at least one strategy must be selected")
        if self.bar_limit < 1:
            raise InvalidConfigError(f"bar_limit must be >= 1, got {self.bar_limit}")
        if self.prediction_bars < 1:
            raise InvalidConfigError(
                f"prediction_bars must be >= 1, got {self.prediction_bars}"
            )
        if self.max_workers < 1:
            raise InvalidConfigError(f"max_workers must be >= 1, got {self.max_workers}")
        if not self.timeout_sec > 0:
            raise InvalidConfigError(
                f"timeout_sec must be > 0, got {self.timeout_sec}"
            )

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> EngineConfig:
        """Build a config from a plain mapping (e.g. parsed YAML).

        Keys that are not engine settings are ignored so that a run
        config can carry runner-only keys next to them.
        """
        known = {f.name for f in dataclasses.fields(cls)}
        kwargs = {k: v for k, v in raw.items() if k in known}

        if "risk" in kwargs and not isinstance(kwargs["risk"], RiskConfig):
            kwargs["risk"] = RiskConfig.from_dict(kwargs["risk"] or {})
        if "sentiment_weights" in kwargs and not isinstance(
            kwargs["sentiment_weights"], SentimentWeights
        ):
            try:
                kwargs["sentiment_weights"] = SentimentWeights(**(kwargs["sentiment_weights"] or {}))
            except TypeError as exc:
                raise InvalidConfigError(f"bad sentiment_weights: {exc}") from exc
        try:
            return cls(**kwargs)
        except TypeError as exc:
            raise InvalidConfigError(str(exc)) from exc

    @classmethod
    def from_yaml(cls, path: str | Path) -> EngineConfig:
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
        if not isinstance(raw, dict):
            raise InvalidConfigError(f"{path}: top level must be a mapping")
        return cls.from_dict(raw)

    def with_overrides(self, **changes: Any) -> EngineConfig:
        """Return a copy with *changes* applied (and re-validated)."""
        return dataclasses.replace(self, **changes)
