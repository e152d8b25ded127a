from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from cargo_optimizer.bundling import calculate_bundling_options
from cargo_optimizer.config import configure_logging
from cargo_optimizer.filler import calculate_filler_options
from cargo_optimizer.io.schemas import BundlingRequestSchema, FillerRequestSchema, OptimizeRequestSchema
from cargo_optimizer.planner import build_plan

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def load_input(path: Path) -> dict[str, Any]:
    return json.loads(path.read_text(encoding="utf-8"))


def write_plan(plan: Any, path: str = "plan.json") -> None:
    """
    Write a plan to a JSON file.

    Creates parent folders if needed, writes JSON with indent=2 and sort_keys=True,
    and overwrites the file on every run.
    """
    output_path = Path(path).resolve()
    output_path.parent.mkdir(parents=True, exist_ok=True)
    logger.debug("write_plan: writing to %s", output_path)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(plan, f, indent=2, sort_keys=True)


def run_optimize(data: dict[str, Any], render: bool = False) -> dict[str, Any]:
    return build_plan(OptimizeRequestSchema.model_validate(data), include_render=render)


def run_bundle(data: dict[str, Any]) -> list[dict[str, Any]]:
    request = BundlingRequestSchema.model_validate(data)
    if not request.containers:
        logger.warning("no containers given; bundle sizes are not checked against any container")
    return [c.model_dump() for c in calculate_bundling_options(request.item, request.containers)]


def run_filler(data: dict[str, Any]) -> list[dict[str, Any]]:
    request = FillerRequestSchema.model_validate(data)
    options = calculate_filler_options(request.container, request.result, request.catalog)
    return [o.model_dump() for o in options]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Cargo Optimizer CLI")
    parser.add_argument(
        "--log-level",
        default=None,
        type=str.upper,
        choices=LOG_LEVELS,
        help="Override CARGO_OPTIMIZER_LOG_LEVEL",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    optimize = sub.add_parser("optimize", help="Allocate cargo across a container pool")
    optimize.add_argument("--render", action="store_true", help="Include rendering data")

    sub.add_parser("bundle", help="List bundling configurations for one cargo line")
    sub.add_parser("filler", help="Suggest filler cargo for a packed container")

    for command in sub.choices.values():
        command.add_argument("--input", required=True, help="Input JSON file")
        command.add_argument("--output", required=True, help="Output JSON file")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    try:
        data = load_input(Path(args.input))
        if args.command == "optimize":
            output: Any = run_optimize(data, render=args.render)
        elif args.command == "bundle":
            output = run_bundle(data)
        else:
            output = run_filler(data)
        write_plan(output, args.output)
    except (OSError, json.JSONDecodeError, ValidationError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    if args.command == "optimize":
        print(output["summary"])
    logger.info("%s output written to %s", args.command, args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
