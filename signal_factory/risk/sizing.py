"""Position sizing under a per-trade risk budget.

``quantity = max_position_notional * risk_per_trade * horizon_multiplier / price``
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields
from typing import Mapping

from signal_factory.errors import InvalidConfigError, ZeroPriceError
from signal_factory.strategy.signal import FusedSignal, TimeHorizon

log = logging.getLogger(__name__)

DEFAULT_HORIZON_MULTIPLIERS: dict[TimeHorizon, float] = {
    TimeHorizon.SCALP: 0.5,
    TimeHorizon.DAY: 0.75,
    TimeHorizon.SWING: 1.0,
    TimeHorizon.POSITION: 1.5,
}


@dataclass(frozen=True)
class RiskConfig:
    """Caller-supplied risk budget and eligibility thresholds.

    ``max_open_positions``, ``max_daily_risk`` and the leverage settings
    are validated and passed through for the caller; sizing itself only
    reads the notional, risk fraction and horizon multipliers.
    """

    max_position_notional: float = 10_000.0
    risk_per_trade: float = 0.02
    min_confidence: float = 0.6
    max_open_positions: int = 5
    max_daily_risk: float = 0.05
    enable_leverage: bool = False
    max_leverage: float = 1.0
    horizon_multipliers: Mapping[TimeHorizon, float] = field(
        default_factory=lambda: dict(DEFAULT_HORIZON_MULTIPLIERS)
    )

    def __post_init__(self) -> None:
        if not self.max_position_notional > 0:
            raise InvalidConfigError(
                f"max_position_notional must be > 0, got {self.max_position_notional}"
            )
        if not 0 < self.risk_per_trade <= 1:
            raise InvalidConfigError(
                f"risk_per_trade must be in (0, 1], got {self.risk_per_trade}"
            )
        if not 0 <= self.min_confidence <= 1:
            raise InvalidConfigError(
                f"min_confidence must be in [0, 1], got {self.min_confidence}"
            )
        if self.max_open_positions < 1:
            raise InvalidConfigError(
                f"max_open_positions must be >= 1, got {self.max_open_positions}"
            )
        if not 0 < self.max_daily_risk <= 1:
            raise InvalidConfigError(
                f"max_daily_risk must be in (0, 1], got {self.max_daily_risk}"
            )
        if self.max_leverage < 1:
            raise InvalidConfigError(f"max_leverage must be >= 1, got {self.max_leverage}")

        multipliers = dict(DEFAULT_HORIZON_MULTIPLIERS)
        for key, value in dict(self.horizon_multipliers).items():
            try:
                horizon = TimeHorizon(key)
            except ValueError:
                raise InvalidConfigError(f"unknown time horizon '{key}'") from None
            if value < 0:
                raise InvalidConfigError(f"horizon multiplier for '{key}' must be >= 0")
            multipliers[horizon] = float(value)
        object.__setattr__(self, "horizon_multipliers", multipliers)

    @classmethod
    def from_dict(cls, raw: Mapping) -> RiskConfig:
        known = {f.name for f in fields(cls)}
        unknown = set(raw) - known
        if unknown:
            raise InvalidConfigError(f"unknown risk config keys: {sorted(unknown)}")
        return cls(**dict(raw))

    def multiplier(self, horizon: TimeHorizon) -> float:
        return self.horizon_multipliers[horizon]


@dataclass(frozen=True)
class SizedSignal(FusedSignal):
    """A fused signal with a concrete trade quantity in base-asset units."""

    quantity: float = 0.0
    notional: float = 0.0

    def to_dict(self) -> dict:
        d = super().to_dict()
        d["quantity"] = self.quantity
        d["notional"] = self.notional
        return d


def position_quantity(price: float, horizon: TimeHorizon, config: RiskConfig) -> float:
    """Return the base-asset quantity for one trade.

    Raises
    ------
    ZeroPriceError
        When *price* <= 0.
    """
    if price <= 0:
        raise ZeroPriceError(f"cannot size a position at price {price}")
    notional = config.max_position_notional * config.risk_per_trade * config.multiplier(horizon)
    return max(notional, 0.0) / price


def size_signal(signal: FusedSignal, config: RiskConfig) -> SizedSignal:
    """Attach a position size to *signal*."""
    quantity = position_quantity(signal.price, signal.horizon, config)
    values = {f.name: getattr(signal, f.name) for f in fields(FusedSignal)}
    return SizedSignal(**values, quantity=quantity, notional=quantity * signal.price)
