"""SignalEngine — per-symbol pipeline fan-out and global ranking.

Per symbol (concurrently across symbols):
  market data → indicator snapshot → sentiment → regime
  → strategy evaluators → fusion → sizing

Then all sized signals are flattened and ranked. A failing symbol is
logged and recorded, never fatal to the batch.
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

from signal_factory.config import EngineConfig
from signal_factory.engine.fusion import fuse_signals
from signal_factory.engine.ranking import rank_signals
from signal_factory.errors import (
    DataUnavailable,
    InsufficientData,
    InvalidConfigError,
    ModelUnavailable,
    ZeroPriceError,
)
from signal_factory.indicators import compute_snapshot
from signal_factory.regime import SentimentComponents, classify_regime
from signal_factory.risk import SizedSignal, size_signal
from signal_factory.sources import (
    MarketDataSource,
    PricePredictor,
    SentimentSource,
    StaticSentimentSource,
    normalize_bars,
)
from signal_factory.strategy import (
    CandidateSignal,
    EvaluationContext,
    StrategyEvaluator,
    build_strategies,
)

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class SymbolFailure:
    """Why one symbol contributed no signals."""

    symbol: str
    reason: str  # exception class name, or "timeout"
    message: str = ""


@dataclass(frozen=True)
class BatchResult:
    """Ranked signals plus the symbols that were dropped along the way."""

    signals: list[SizedSignal] = field(default_factory=list)
    failures: list[SymbolFailure] = field(default_factory=list)


@dataclass(frozen=True)
class BatchContext:
    """Read-only inputs shared by every symbol pipeline in one batch."""

    config: EngineConfig
    evaluators: tuple
    market_data: MarketDataSource
    sentiment: SentimentSource
    predictor: Optional[PricePredictor] = None


class SignalEngine:
    """Turns per-symbol market data into ranked, sized signals.

    Parameters
    ----------
    config : EngineConfig
        Strategy selection, data settings and risk budget.
    market_data : MarketDataSource
        Bar provider.
    sentiment : SentimentSource, optional
        Sentiment provider; defaults to neutral readings for every symbol.
    predictor : PricePredictor, optional
        Price model for the model-driven strategy. Without it that strategy
        is skipped.
    """

    def __init__(
        self,
        config: EngineConfig,
        market_data: MarketDataSource,
        sentiment: Optional[SentimentSource] = None,
        predictor: Optional[PricePredictor] = None,
    ) -> None:
        if not isinstance(config, EngineConfig):
            raise InvalidConfigError(
                f"config must be an EngineConfig, got {type(config).__name__}"
            )
        self.config = config
        self.market_data = market_data
        self.sentiment = sentiment if sentiment is not None else StaticSentimentSource()
        self.predictor = predictor
        self._evaluators: tuple[StrategyEvaluator, ...] = build_strategies(config.strategies)

        log.info(
            "Signal engine ready: %d strategies (%s)",
            len(self._evaluators), ", ".join(self.active_strategies),
        )

    @property
    def active_strategies(self) -> list[str]:
        return [e.name for e in self._evaluators]

    # -- public API ----------------------------------------------------------

    def run(self, symbols: Sequence[str]) -> BatchResult:
        """Evaluate *symbols* concurrently and return ranked signals + failures."""
        requested = clean_symbols(symbols)
        if not requested:
            return BatchResult()

        batch = BatchContext(
            config=self.config,
            evaluators=self._evaluators,
            market_data=self.market_data,
            sentiment=self.sentiment,
            predictor=self.predictor,
        )

        start = time.perf_counter()
        log.info("Generating signals for %d symbols", len(requested))

        signals: list[SizedSignal] = []
        failures: list[SymbolFailure] = []

        workers = min(self.config.max_workers, len(requested))
        pool = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="signal")
        try:
            futures = {sym: pool.submit(evaluate_symbol, batch, sym) for sym in requested}
            done, _ = wait(futures.values(), timeout=self.config.timeout_sec)

            # Collect in request order so output never depends on completion order.
            for sym, fut in futures.items():
                if fut not in done:
                    fut.cancel()
                    log.warning("%s: timed out after %.1fs", sym, self.config.timeout_sec)
                    failures.append(SymbolFailure(sym, "timeout"))
                    continue
                try:
                    signals.extend(fut.result())
                except (DataUnavailable, InsufficientData) as exc:
                    log.warning("%s: skipped (%s)", sym, exc)
                    failures.append(SymbolFailure(sym, type(exc).__name__, str(exc)))
                except Exception as exc:
                    log.exception("%s: signal pipeline failed", sym)
                    failures.append(SymbolFailure(sym, type(exc).__name__, str(exc)))
        finally:
            pool.shutdown(wait=False, cancel_futures=True)

        ranked = rank_signals(signals)
        log.info(
            "Generated %d signals (%d/%d symbols failed) in %.3fs",
            len(ranked), len(failures), len(requested), time.perf_counter() - start,
        )
        return BatchResult(signals=ranked, failures=failures)

    def generate_signals(self, symbols: Sequence[str]) -> list[SizedSignal]:
        return self.run(symbols).signals


# -- symbol pipeline ----------------------------------------------------------


def evaluate_symbol(batch: BatchContext, symbol: str) -> list[SizedSignal]:
    """Run the full pipeline for one symbol.

    Raises
    ------
    DataUnavailable
        Bars or sentiment could not be retrieved or are malformed.
    InsufficientData
        The history is too short for the indicators.
    """
    cfg = batch.config

    payload = batch.market_data.fetch_bars(symbol, cfg.timeframe, cfg.bar_limit)
    try:
        bars = normalize_bars(payload)
    except ValueError as exc:
        raise DataUnavailable(f"malformed bars for {symbol}: {exc}") from exc

    snapshot = compute_snapshot(bars)
    components = SentimentComponents.from_mapping(batch.sentiment.fetch_components(symbol))
    regime = classify_regime(snapshot, components, cfg.sentiment_weights)

    ctx = EvaluationContext(
        symbol=symbol,
        bars=bars,
        snapshot=snapshot,
        regime=regime,
        min_confidence=cfg.risk.min_confidence,
        predictor=batch.predictor,
        prediction_bars=cfg.prediction_bars,
        as_of=bars["time"].iloc[-1].isoformat(),
    )

    candidates = list(_evaluate_all(batch.evaluators, ctx))
    sized: list[SizedSignal] = []
    for fused in fuse_signals(candidates):
        try:
            sized.append(size_signal(fused, cfg.risk))
        except ZeroPriceError as exc:
            log.warning("%s: dropped %s signal (%s)", symbol, fused.direction.value, exc)

    log.debug(
        "%s: %d candidates -> %d sized signals (trend=%s, sentiment=%s)",
        symbol, len(candidates), len(sized), regime.trend.value, regime.sentiment.value,
    )
    return sized


def _evaluate_all(
    evaluators: Iterable[StrategyEvaluator], ctx: EvaluationContext,
) -> Iterable[CandidateSignal]:
    for evaluator in evaluators:
        try:
            candidate = evaluator.evaluate(ctx)
        except ModelUnavailable as exc:
            log.debug("%s: %s skipped (%s)", ctx.symbol, evaluator.name, exc)
            continue
        if candidate is not None:
            yield candidate


def clean_symbols(symbols: Sequence[str]) -> list[str]:
    """Strip, de-duplicate and validate a symbol request.

    An empty request is fine; a non-empty one with no usable symbol is not.
    """
    if isinstance(symbols, str):
        symbols = [symbols]
    symbols = list(symbols or [])
    cleaned: list[str] = []
    for sym in symbols:
        if not isinstance(sym, str) or not sym.strip():
            log.warning("Ignoring invalid symbol %r", sym)
            continue
        sym = sym.strip()
        if sym not in cleaned:
            cleaned.append(sym)
    if symbols and not cleaned:
        raise ValueError(f"no valid symbols in request: {symbols!r}")
    return cleaned


def generate_signals(
    symbols: Sequence[str],
    market_data: MarketDataSource,
    sentiment: Optional[SentimentSource] = None,
    predictor: Optional[PricePredictor] = None,
    config: Optional[EngineConfig] = None,
) -> list[SizedSignal]:
    """Rank sized signals for *symbols*; partial failures are logged, not raised."""
    engine = SignalEngine(
        config if config is not None else EngineConfig(),
        market_data,
        sentiment=sentiment,
        predictor=predictor,
    )
    return engine.generate_signals(symbols)
