"""Entry point: draw a visualization from a JSON config and report the plan."""

import argparse
import logging
from pathlib import Path

from vizsteps.infrastructure.config_manager import apply_config, load_config
from vizsteps.schemas import VizState
from vizsteps.services.engine import DrawEngine

logger = logging.getLogger("vizsteps")


def configure_logging(level: int = logging.INFO, log_file: Path | None = None) -> None:
    """Attach stream (and optional file) handlers to the package logger."""
    logger.setLevel(level)
    if logger.handlers:
        logger.handlers.clear()

    formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)


def run_config(filename: str, redraws: int = 1) -> None:
    """Draw a config, then redraw it ``redraws - 1`` more times.

    Args:
        filename: Config file name (under configs/) or path.
        redraws: Total number of draw cycles to run.
    """
    config = load_config(filename)
    state = VizState()
    apply_config(state, config)
    engine = DrawEngine(state, progress=lambda message: logger.debug(message))

    for cycle in range(redraws):
        report = engine.draw_sync()
        print(f"--- Draw {cycle + 1} of {config.name} ({config.type}) ---")
        for step in engine.last_plan:
            if step.name in report.skipped:
                status = "skipped"
            elif step.name in report.executed:
                status = "ran"
            else:
                status = "not reached"
            print(f"  {step.name:<16} {status:<12} {step.message}")
        if not report.succeeded:
            print(f"  Aborted at {report.failed}: {report.error}")
            return
        if state.error.value:
            print(f"  Warning: {state.error.value}")
    print("\n")


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("config", help="Config file name (under configs/) or path")
    parser.add_argument("--redraws", type=int, default=1, help="Draw cycles to run")
    parser.add_argument("--log-file", type=Path, default=None)
    parser.add_argument("--debug", action="store_true")
    args = parser.parse_args()

    configure_logging(logging.DEBUG if args.debug else logging.INFO, args.log_file)
    run_config(args.config, args.redraws)


if __name__ == "__main__":
    main()
