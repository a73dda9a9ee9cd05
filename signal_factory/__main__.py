"""Unified entry point for signal-factory command-line modules."""

import argparse
import logging
import sys

log = logging.getLogger(__name__)


def main(argv=None):
    argv = sys.argv[1:] if argv is None else list(argv)
    if not argv:
        logging.basicConfig(level=logging.INFO)
        log.error("Usage: python -m signal_factory <module> [args...]")
        log.error("Available modules:")
        log.error("  signals   - Generate a ranked signal batch from a YAML run config")
        sys.exit(1)

    module = argv[0]

    if module == "signals":
        logging.basicConfig(
            level=logging.INFO,
            format="%(asctime)s  %(levelname)-8s  %(message)s",
            datefmt="%H:%M:%S",
        )
        p = argparse.ArgumentParser(
            prog="signal-factory signals",
            description="Generate ranked, sized trading signals",
        )
        p.add_argument("--config", required=True, help="Path to YAML run config")
        p.add_argument("--verbose", action="store_true", help="Log per-symbol detail")
        args = p.parse_args(argv[1:])
        if args.verbose:
            logging.getLogger("signal_factory").setLevel(logging.DEBUG)
        from signal_factory.engine.runner import run_signals
        run_id = run_signals(args.config)
        log.info("Finished — run_id: %s", run_id)
    else:
        logging.basicConfig(level=logging.INFO)
        log.error("Unknown module: %s", module)
        sys.exit(1)


if __name__ == "__main__":
    main()
