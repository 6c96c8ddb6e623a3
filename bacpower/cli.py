"""Command-line interface for bacpower power simulations."""

from __future__ import annotations

import argparse
import json
import logging
from dataclasses import asdict, replace
from pathlib import Path
from typing import Iterable

from bacpower.aggregate import COUNT_COLUMNS, detection_distribution, summarize_table
from bacpower.config import load_run_config
from bacpower.core.types import BACKENDS
from bacpower.io import atomic_write_csv, ensure_dir, json_safe, read_table, write_json
from bacpower.pipeline_utils import close_logger, setup_logger
from bacpower.runner import run_from_settings


def _max_count(column: str, n: int, N: int) -> int:
    return N if column == "fdr_detected" else n


def run_main(argv: Iterable[str] | None = None) -> int:
    """Run a replicate sweep from a JSON config and write tables.

    Args:
        argv: Command-line arguments (if None, uses sys.argv).

    Returns:
        Exit code (0 for success).
    """
    parser = argparse.ArgumentParser(description="bacpower replicate simulation")
    parser.add_argument("--config", required=True, help="Path to JSON run config")
    parser.add_argument("--outdir", required=True, help="Output directory root")
    parser.add_argument(
        "--n-jobs", type=int, default=None, help="Worker count (default: config, else all cores)"
    )
    parser.add_argument("--backend", choices=list(BACKENDS), default=None, help="joblib backend")
    parser.add_argument("--seed", type=int, default=None, help="Override the master seed")
    parser.add_argument("--replicates", type=int, default=None, help="Override R")
    parser.add_argument("--verbose", action="store_true", help="Log diagnostics at DEBUG level")
    args = parser.parse_args(list(argv) if argv is not None else None)

    architecture, settings = load_run_config(args.config)
    overrides = {
        key: value
        for key, value in (
            ("n_jobs", args.n_jobs),
            ("backend", args.backend),
            ("seed", args.seed),
            ("R", args.replicates),
        )
        if value is not None
    }
    if overrides:
        settings = replace(settings, **overrides)

    outdir = ensure_dir(args.outdir)
    logger = setup_logger(
        outdir / "logs" / "run.log",
        "bacpower.run",
        level=logging.DEBUG if args.verbose else logging.INFO,
    )
    try:
        write_json(
            outdir / "config" / "params.json",
            {"architecture": architecture.to_dict(), "simulation": asdict(settings)},
        )
        table = run_from_settings(architecture, settings, logger=logger)

        table_dir = outdir / "tables"
        atomic_write_csv(table_dir / "replicates.csv", table, index=True)
        for column in COUNT_COLUMNS:
            dist = detection_distribution(
                table, column, _max_count(column, architecture.n, architecture.N)
            )
            atomic_write_csv(table_dir / f"distribution_{column}.csv", dist)

        summary = summarize_table(table, architecture.n, architecture.N)
        write_json(outdir / "summary.json", summary)
        logger.info(
            "Bonferroni power=%.4f FDR power=%.4f. Results in %s",
            summary["bonferroni_power"],
            summary["fdr_power"],
            outdir.as_posix(),
        )
    finally:
        close_logger(logger)
    return 0


def summarize_main(argv: Iterable[str] | None = None) -> int:
    """Print the aggregate summary of an existing replicate table."""
    parser = argparse.ArgumentParser(description="bacpower table summary")
    parser.add_argument("--table", required=True, help="Path to replicates.csv")
    parser.add_argument("--n", type=int, required=True, help="Number of causal genes")
    parser.add_argument("--N", type=int, required=True, help="Number of tested genes")
    args = parser.parse_args(list(argv) if argv is not None else None)

    table = read_table(Path(args.table))
    summary = json_safe(summarize_table(table, args.n, args.N))
    print(json.dumps(summary, indent=2, sort_keys=True, allow_nan=False))
    return 0


def main(argv: Iterable[str] | None = None) -> int:
    """Main CLI entry point.

    Args:
        argv: Command-line arguments (if None, uses sys.argv).

    Returns:
        Exit code.
    """
    parser = argparse.ArgumentParser(description="bacpower CLI")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("run", help="Run a replicate simulation from a JSON config")
    sub.add_parser("summarize", help="Summarize an existing replicate table")

    args, remainder = parser.parse_known_args(list(argv) if argv is not None else None)
    if args.command == "run":
        return run_main(remainder)
    if args.command == "summarize":
        return summarize_main(remainder)
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
