"""Global ordering of signals across symbols."""

from __future__ import annotations

from typing import Iterable, TypeVar

from signal_factory.strategy.signal import CandidateSignal

S = TypeVar("S", bound=CandidateSignal)


def rank_key(signal: CandidateSignal) -> tuple[float, float, float]:
    """Higher confidence first, then higher expected return, then lower risk."""
    return (-signal.confidence, -signal.expected_return, signal.risk_score)


def rank_signals(signals: Iterable[S]) -> list[S]:
    """Return *signals* sorted by :func:`rank_key`.

    The sort is stable, so full ties keep their input order.
    """
    return sorted(signals, key=rank_key)
