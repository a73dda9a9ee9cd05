"""Signal batch runner — orchestrates config → data → engine → artifacts."""

from __future__ import annotations

import json
import logging
import shutil
from datetime import datetime, timezone
from pathlib import Path

import pandas as pd
import yaml

from signal_factory.config import EngineConfig
from signal_factory.engine.core import BatchResult, SignalEngine
from signal_factory.errors import InvalidConfigError
from signal_factory.risk import SizedSignal
from signal_factory.sources import CsvMarketDataSource, StaticSentimentSource

log = logging.getLogger(__name__)

SIGNAL_COLUMNS = [
    "signal_id",
    "symbol",
    "strategy",
    "direction",
    "confidence",
    "price",
    "quantity",
    "notional",
    "stop_loss",
    "take_profit",
    "expected_return",
    "risk_score",
    "horizon",
    "contributors",
    "trend",
    "volatility",
    "sentiment",
    "market_phase",
    "as_of",
    "rationale",
]


def run_signals(config_path: str) -> str:
    """Generate one ranked signal batch and write all run artifacts.

    Parameters
    ----------
    config_path : str
        Path to a YAML run config. Relative ``snapshot_dir`` /
        ``output_dir`` entries are resolved against the config's folder.

    Returns
    -------
    str
        The generated ``run_id``.
    """
    cfg_path = Path(config_path).resolve()
    with open(cfg_path, "r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f) or {}

    base_dir = cfg_path.parent
    try:
        symbols: list[str] = list(cfg["symbols"])
        snapshot_dir = base_dir / cfg["snapshot_dir"]
        output_dir = base_dir / cfg.get("output_dir", "runs")
    except KeyError as exc:
        raise InvalidConfigError(f"{cfg_path}: missing required key {exc}") from exc

    engine_cfg = EngineConfig.from_dict(cfg)

    # ── Generate run_id ──────────────────────────────────────────────
    run_id = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
    run_dir = output_dir / run_id
    suffix = 1
    while run_dir.exists():
        run_dir = output_dir / f"{run_id}_{suffix}"
        suffix += 1
    run_id = run_dir.name
    run_dir.mkdir(parents=True)

    log.info("Run ID   : %s", run_id)
    log.info("Output   : %s", run_dir)
    log.info("Symbols  : %s", ", ".join(symbols))

    # ── Run engine ───────────────────────────────────────────────────
    engine = SignalEngine(
        engine_cfg,
        market_data=CsvMarketDataSource(snapshot_dir),
        sentiment=StaticSentimentSource(cfg.get("sentiment")),
    )
    result = engine.run(symbols)

    # ── Write artifacts ──────────────────────────────────────────────
    # 1. config.yaml
    shutil.copy2(cfg_path, run_dir / "config.yaml")

    # 2. signals.csv
    signals_df = signals_frame(result.signals)
    signals_df.to_csv(run_dir / "signals.csv", index=False)
    log.info("Wrote signals.csv  (%s signals)", f"{len(signals_df):,}")

    # 3. summary.json
    summary = build_summary(run_id, symbols, engine, result)
    (run_dir / "summary.json").write_text(
        json.dumps(summary, indent=2), encoding="utf-8",
    )
    log.info("Wrote summary.json")

    for failure in result.failures:
        log.warning("Dropped %s: %s %s", failure.symbol, failure.reason, failure.message)

    log.info("✓ Run complete: %s", run_dir)
    return run_id


def signals_frame(signals: list[SizedSignal]) -> pd.DataFrame:
    """Flatten sized signals into one row each, in ranked order."""
    rows = []
    for s in signals:
        rows.append({
            "signal_id": s.signal_id,
            "symbol": s.symbol,
            "strategy": s.strategy,
            "direction": s.direction.value,
            "confidence": s.confidence,
            "price": s.price,
            "quantity": s.quantity,
            "notional": s.notional,
            "stop_loss": s.stop_loss,
            "take_profit": s.take_profit,
            "expected_return": s.expected_return,
            "risk_score": s.risk_score,
            "horizon": s.horizon.value,
            "contributors": "|".join(s.contributors),
            "trend": s.regime.trend.value,
            "volatility": s.regime.volatility.value,
            "sentiment": s.regime.sentiment.value,
            "market_phase": s.regime.market_phase.value,
            "as_of": s.as_of,
            "rationale": s.rationale,
        })
    return pd.DataFrame(rows, columns=SIGNAL_COLUMNS)


def build_summary(
    run_id: str,
    symbols: list[str],
    engine: SignalEngine,
    result: BatchResult,
) -> dict:
    risk = engine.config.risk
    return {
        "run_id": run_id,
        "symbols_requested": symbols,
        "strategies": engine.active_strategies,
        "timeframe": engine.config.timeframe,
        "n_signals": len(result.signals),
        "n_buy": sum(1 for s in result.signals if s.direction.value == "buy"),
        "n_sell": sum(1 for s in result.signals if s.direction.value == "sell"),
        "failures": [
            {"symbol": f.symbol, "reason": f.reason, "message": f.message}
            for f in result.failures
        ],
        "risk": {
            "max_position_notional": risk.max_position_notional,
            "risk_per_trade": risk.risk_per_trade,
            "min_confidence": risk.min_confidence,
            "max_open_positions": risk.max_open_positions,
        },
        "top_signal": result.signals[0].to_dict() if result.signals else None,
    }
