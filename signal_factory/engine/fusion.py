"""Signal fusion: one signal per (symbol, direction)."""

from __future__ import annotations

import dataclasses
from typing import Sequence

from signal_factory.strategy.signal import CandidateSignal, FusedSignal

COMBINED = "combined"


def fuse_group(group: Sequence[CandidateSignal]) -> FusedSignal:
    """Merge candidates that share symbol and direction.

    * confidence: plain mean of the contributors' confidences
    * price: confidence-weighted mean of their prices
    * indicators: union, later strategies overwrite same-named keys
    * everything else: taken from the first contributor
    """
    if not group:
        raise ValueError("cannot fuse an empty group")

    first = FusedSignal.from_candidate(group[0])
    if len(group) == 1:
        return first

    total_conf = sum(s.confidence for s in group)
    confidence = total_conf / len(group)
    if total_conf > 0:
        price = sum(s.price * s.confidence for s in group) / total_conf
    else:
        price = sum(s.price for s in group) / len(group)

    indicators: dict = {}
    for s in group:
        indicators.update(s.indicators)

    names = tuple(s.strategy for s in group)
    return dataclasses.replace(
        first,
        strategy=COMBINED,
        confidence=confidence,
        price=price,
        indicators=indicators,
        rationale=f"Combined signal from {len(group)} strategies: {', '.join(names)}",
        contributors=names,
    )


def fuse_signals(candidates: Sequence[CandidateSignal]) -> list[FusedSignal]:
    """Group *candidates* by (symbol, direction) and fuse each group.

    Groups are emitted in the order their first member appears.
    """
    groups: dict[tuple, list[CandidateSignal]] = {}
    for candidate in candidates:
        groups.setdefault((candidate.symbol, candidate.direction), []).append(candidate)
    return [fuse_group(group) for group in groups.values()]
