"""Command line entry for inspecting engine statistics snapshots."""
from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path
from typing import List

import yaml

from frame_monitor.application.configuration import FAIL_ON_CHOICES, MonitorSettings
from frame_monitor.monitor.models import SamplerConfigError, StatsData, ValueCheck
from frame_monitor.monitor.registry import SamplerRegistry
from frame_monitor.monitor.report import overall_check, render_report, sample_all
from frame_monitor.utils.logging import configure, get_logger

logger = get_logger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="frame-monitor",
        description="Classify rendering engine statistics with the performance monitor samplers",
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--snapshot", help="JSON or YAML file holding a single statistics snapshot")
    source.add_argument("--trace", help="CSV, JSON or JSONL recording with one snapshot per tick")
    source.add_argument("--list", action="store_true", help="List the registered samplers and exit")
    parser.add_argument(
        "--config",
        help="YAML configuration file (default: frame_monitor.yaml or FRAME_MONITOR_CONFIG)",
    )
    parser.add_argument("--log-level", help="Log level (DEBUG/INFO/WARNING/ERROR)")
    parser.add_argument(
        "--details",
        action="store_true",
        default=None,
        help="Show the breakdown of samplers that expose details, like draw calls",
    )
    parser.add_argument(
        "--fail-on",
        choices=FAIL_ON_CHOICES,
        help="Exit with status 1 when the overall check reaches this level (default: none)",
    )
    return parser


def _load_snapshot(path: Path) -> StatsData:
    with open(path, "r", encoding="utf-8") as f:
        if path.suffix.lower() == ".json":
            payload = json.load(f)
        else:
            payload = yaml.safe_load(f)
    if not isinstance(payload, dict):
        raise ValueError(f"Snapshot file {path} must contain a mapping of counters")
    return StatsData.from_mapping(payload)


def _list_samplers(registry: SamplerRegistry) -> None:
    width = max((len(name) for name in registry.names()), default=0)
    for name, sampler in registry.items():
        print(
            f"{name:<{width}}  {sampler.label}"
            f" (warn={sampler.warn_threshold:g}, error={sampler.err_threshold:g})"
        )


def _report_snapshot(settings: MonitorSettings, registry: SamplerRegistry, path: Path) -> ValueCheck:
    stats = _load_snapshot(path)
    readings = sample_all(registry, stats, include_details=settings.include_details)
    print(render_report(readings))
    return overall_check(readings)


def _report_trace(registry: SamplerRegistry, path: Path) -> ValueCheck:
    from frame_monitor.monitor.trace import evaluate_trace, load_trace, summarize_trace

    snapshots = load_trace(path)
    summary = summarize_trace(evaluate_trace(registry, snapshots), registry)
    print(f"=== {len(snapshots)} tick(s) from {path} ===")
    if summary.empty:
        print("No samplers registered")
        return ValueCheck.CORRECT
    printable = summary.assign(worst=summary["worst"].map(lambda check: check.value))
    print(printable.to_string())
    return ValueCheck.worst(summary["worst"])


def main(argv: List[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure(args.log_level or os.environ.get("FRAME_MONITOR_LOG_LEVEL") or "INFO")
    try:
        settings = MonitorSettings.from_cli_args(args)
        configure(settings.log_level)
        registry = settings.build_registry()

        if args.list:
            _list_samplers(registry)
            return 0
        if args.snapshot:
            overall = _report_snapshot(settings, registry, Path(args.snapshot))
        else:
            overall = _report_trace(registry, Path(args.trace))
    except (
        OSError,
        OverflowError,
        RuntimeError,
        SamplerConfigError,
        TypeError,
        ValueError,
        yaml.YAMLError,
    ) as exc:
        print(f"frame-monitor: {exc}", file=sys.stderr)
        return 2

    if settings.fails(overall):
        logger.warning("Overall check %s reached fail level %s", overall.value, settings.fail_on)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry
    raise SystemExit(main())
