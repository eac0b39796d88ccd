"""BITBUFFER CLI entry point.

Runs the randomized fill / drain / refill exercise against every
configured value range and reports mismatches.

Usage:
    python -m bitbuffer                          # Default config, all ranges
    python -m bitbuffer --config custom.yaml     # Custom config
    python -m bitbuffer --range 512 --range 8    # Only these value ranges
    python -m bitbuffer --capacity 5 --seed 7    # Fixed capacity, new seed
    python -m bitbuffer --set bitbuffer.exercise.max_capacity=8
"""

from __future__ import annotations

import argparse
import logging
import sys

import numpy as np
import structlog

from bitbuffer.core.config import BitBufferConfig
from bitbuffer.core.types import RangeCode
from bitbuffer.fifo.config import ExerciseConfig
from bitbuffer.fifo.exercise import run_exercise
from bitbuffer.utils.logging import setup_logging

logger = logging.getLogger("bitbuffer.cli")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="bitbuffer",
        description="BITBUFFER - bit-packed FIFO exercise runner",
    )
    parser.add_argument(
        "--config",
        "-c",
        default="config/default.yaml",
        help="Path to configuration YAML file (default: config/default.yaml)",
    )
    parser.add_argument(
        "--range",
        "-r",
        dest="ranges",
        type=int,
        action="append",
        default=None,
        help="Value range to exercise (power of two, 2..32768); repeatable",
    )
    parser.add_argument(
        "--capacity",
        type=int,
        default=None,
        help="Fixed buffer capacity instead of a random one per range",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Override the random seed",
    )
    parser.add_argument(
        "--set",
        dest="overrides",
        action="append",
        default=None,
        metavar="KEY=VALUE",
        help="Override a config value, e.g. bitbuffer.exercise.max_capacity=8; repeatable",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Set logging level",
    )
    parser.add_argument(
        "--validate-config",
        action="store_true",
        default=False,
        help="Validate config against Pydantic schema before starting",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Path to log file (default: no file logging)",
    )
    parser.add_argument(
        "--log-json",
        action="store_true",
        default=False,
        help="Output logs as JSON instead of human-readable",
    )
    args = parser.parse_args(argv)

    # Load config
    config = BitBufferConfig(args.config)
    try:
        config.load(validate=args.validate_config, overrides=args.overrides)
    except FileNotFoundError:
        print(f"Error: Config file not found: {args.config}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Error: Config validation failed:\n{e}", file=sys.stderr)
        return 1

    # Apply CLI overrides
    if args.seed is not None:
        config.override("bitbuffer.exercise.seed", args.seed)
    if args.ranges:
        config.override("bitbuffer.exercise.ranges", args.ranges)

    try:
        system = config.section("system")
        log_level = args.log_level or system.get("log_level", "INFO")
        log_file = args.log_file or system.get("log_file", None)
        log_json = args.log_json or system.get("log_json", False)
        setup_logging(str(log_level), log_file=log_file, log_json=bool(log_json))

        exercise = config.exercise_config()
    except (TypeError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    if args.capacity is not None and args.capacity < 1:
        print(f"Error: --capacity must be >= 1, got {args.capacity}", file=sys.stderr)
        return 1

    return _run(exercise, args.capacity)


def _run(exercise: ExerciseConfig, capacity: int | None) -> int:
    rng = np.random.default_rng(exercise.seed)
    failures = 0
    for code in exercise.ranges:
        cap = capacity or int(rng.integers(1, exercise.max_capacity))
        # range and capacity ride along on every record emitted by the run
        with structlog.contextvars.bound_contextvars(value_range=code.name, capacity=cap):
            report = run_exercise(RangeCode(code), cap, rng)
            if report.ok:
                logger.info(
                    "%s capacity=%d pushed=%d popped=%d ok %s",
                    code.name,
                    cap,
                    report.pushed,
                    report.popped,
                    report.dump,
                )
            else:
                failures += 1
                for msg in report.mismatches:
                    logger.error("%s capacity=%d: %s", code.name, cap, msg)

    logger.info(
        "Exercised %d ranges, %d failed", len(exercise.ranges), failures
    )
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
