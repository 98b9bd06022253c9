#!/usr/bin/env python3

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]

# Allow running as "python tools/run_calc.py" (so repo root is importable)
sys.path.insert(0, str(ROOT))

from app.validation import cables_from_dataframe, read_cables_csv, results_to_dataframe  # noqa: E402
from cable_core.conductors import parse_material  # noqa: E402
from cable_core.validation import validate_all_cables  # noqa: E402
from cable_core.voltage_drop import (  # noqa: E402
    DEFAULT_POWER_FACTOR,
    VoltageDropCalculation,
    calculate_current_from_power,
    calculate_minimum_conductor_size,
    calculate_voltage_drop,
)

EXIT_FINDINGS = 1
EXIT_ENGINE_ERROR = 2


def _cmd_vd(args: argparse.Namespace) -> int:
    res = calculate_voltage_drop(
        VoltageDropCalculation(
            voltage=args.voltage,
            current=args.current,
            distance=args.distance,
            conductor_size=args.size,
            material=parse_material(args.material),
            power_factor=args.power_factor,
        )
    )
    print("drop_v:", round(res.voltage_drop_volts, 4))
    print("drop_pct:", round(res.voltage_drop_percentage, 4))
    print("severity:", res.severity.value)
    print("status:", res.compliance_status)
    return 0


def _cmd_min_size(args: argparse.Namespace) -> int:
    size = calculate_minimum_conductor_size(
        args.voltage,
        args.current,
        args.distance,
        parse_material(args.material),
        args.max_drop_pct,
        args.power_factor,
    )
    print("min_size:", size)
    return 0


def _cmd_current(args: argparse.Namespace) -> int:
    amps = calculate_current_from_power(args.power, args.voltage, args.power_factor, args.phases)
    print("current_a:", round(amps, 4))
    return 0


def _cmd_validate(args: argparse.Namespace) -> int:
    df = read_cables_csv(args.csv)
    summary = validate_all_cables(cables_from_dataframe(df))
    print("cables:", summary.total_cables)
    print("errors:", summary.error_count)
    print("warnings:", summary.warning_count)
    print("info:", summary.info_count)
    if summary.results:
        out = results_to_dataframe(summary.results)
        print(out[["cable_tag", "severity", "validation_type", "message"]].to_string(index=False))
    if args.out:
        results_to_dataframe(summary.results).to_csv(args.out, index=False)
        print("results_csv:", args.out)
    return EXIT_FINDINGS if summary.has_errors else 0


def _add_run_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--voltage", type=float, required=True, help="Nominal voltage, V.")
    p.add_argument("--current", type=float, required=True, help="Load current, A.")
    p.add_argument("--distance", type=float, required=True, help="One-way run length, ft.")
    p.add_argument(
        "--material",
        default="copper",
        help="copper|cu|aluminum|al (default: copper; unknown values mean copper).",
    )
    p.add_argument(
        "--power-factor",
        type=float,
        default=DEFAULT_POWER_FACTOR,
        help=f"Power factor (default: {DEFAULT_POWER_FACTOR}; <= 0 means default).",
    )


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        description="Voltage drop, conductor sizing and cable schedule validation."
    )
    ap.add_argument(
        "--log-level",
        default="WARNING",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        help="Logging level (default: WARNING).",
    )
    sub = ap.add_subparsers(dest="command", required=True)

    vd = sub.add_parser("vd", help="Voltage drop for one run.")
    _add_run_args(vd)
    vd.add_argument("--size", required=True, help='Conductor size, e.g. "12 AWG", "#10", "250 MCM".')
    vd.set_defaults(func=_cmd_vd)

    ms = sub.add_parser("min-size", help="Smallest standard conductor within a drop budget.")
    _add_run_args(ms)
    ms.add_argument("--max-drop-pct", type=float, default=3.0, help="Voltage drop budget, %% (default: 3).")
    ms.set_defaults(func=_cmd_min_size)

    cur = sub.add_parser("current", help="Current from real power.")
    cur.add_argument("--power", type=float, required=True, help="Real power, W.")
    cur.add_argument("--voltage", type=float, required=True, help="Voltage, V.")
    cur.add_argument("--power-factor", type=float, default=DEFAULT_POWER_FACTOR)
    cur.add_argument("--phases", type=int, default=1, help="1 or 3 (others use the 1-phase formula).")
    cur.set_defaults(func=_cmd_current)

    val = sub.add_parser("validate", help="Validate a cable schedule CSV.")
    val.add_argument("--csv", required=True, help="CSV with cable columns (tag, function, voltage, ...).")
    val.add_argument("--out", default=None, help="Optional CSV path for the findings.")
    val.set_defaults(func=_cmd_validate)
    return ap


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")
    try:
        return args.func(args)
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_ENGINE_ERROR


if __name__ == "__main__":
    raise SystemExit(main())
