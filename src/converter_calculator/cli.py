from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from .engine import evaluate_all
from .io import load_converter_set
from .report import (
    ConverterResult,
    CounterTypeAdcResult,
    FlashAdcResult,
    R2RLadderDacResult,
    Report,
    WeightedResistorDacResult,
)
from .units import format_frequency, format_ohms, format_time


def _existing_path(value: str) -> Path:
    path = Path(value)
    if not path.exists():
        raise argparse.ArgumentTypeError(f"File not found: {value}")
    return path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="converter-calc", add_help=True)
    parser.add_argument(
        "--config",
        required=True,
        type=_existing_path,
        help="Path to a converter list (json|yaml)",
    )
    parser.add_argument(
        "--format",
        choices=("json", "text"),
        default="json",
        help="Report format (default: json)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write the report to this path (default: stdout)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def _render_result(entry: ConverterResult) -> list[str]:
    r = entry.result
    lines = [f"[{entry.architecture}] {entry.config.resolution}-bit"]
    if isinstance(r, WeightedResistorDacResult):
        lines += [
            f"  input          {r.bits} (decimal {r.decimal_value} of {r.max_value})",
            f"  output         {r.output_voltage_magnitude:.4f} V",
            f"  resistors      {format_ohms(r.resistor_values[0])} .. {format_ohms(r.resistor_range)}"
            f" (ratio {r.range_ratio:g}:1)",
        ]
        if r.high_ratio:
            lines.append("  warning        resistor ratio above 1000:1 is hard to manufacture accurately")
    elif isinstance(r, R2RLadderDacResult):
        lines += [
            f"  input          {r.bits} (decimal {r.decimal_value} of {r.max_value})",
            f"  output         {r.output_voltage:.4f} V",
            f"  resistors      {format_ohms(r.resistor_values['r'])} / {format_ohms(r.resistor_values['2r'])}",
        ]
    elif isinstance(r, CounterTypeAdcResult):
        lines += [
            f"  delay/step     {format_time(r.total_delay_per_step)}",
            f"  steps          max {r.max_steps}, avg {r.avg_steps:g}",
            f"  T_conv         max {format_time(r.max_conversion_time)}, avg {format_time(r.avg_conversion_time)}",
            f"  f_signal       max {format_frequency(r.max_frequency)}, avg {format_frequency(r.avg_frequency)}",
        ]
    elif isinstance(r, FlashAdcResult):
        lines += [
            f"  comparators    {r.num_comparators}",
            f"  resistors      {r.num_resistors}",
            f"  encoder bits   {r.encoder_outputs}",
            f"  T_conv         {format_time(r.conversion_time)}",
            f"  f_signal       {format_frequency(r.max_frequency)}",
        ]
        if r.high_component_count:
            lines.append("  warning        more than 100 comparators")
    return lines


def render_text(report: Report) -> str:
    lines: list[str] = []
    if report.name:
        lines.append(report.name)
    for entry in report.results:
        lines.extend(_render_result(entry))
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        converter_set = load_converter_set(args.config)
        report = evaluate_all(converter_set, path=str(args.config))
    except Exception as exc:  # noqa: BLE001
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if args.format == "text":
        text = render_text(report)
    else:
        payload = report.model_dump(mode="json")
        text = json.dumps(payload, indent=2, sort_keys=True)

    if args.output is None:
        print(text)
        return 0

    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_text(text + "\n", encoding="utf-8")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
