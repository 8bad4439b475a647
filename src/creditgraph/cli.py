import argparse
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .version import __version__


@dataclass
class ParsedArgs:
    dataset: Path
    output_file: Optional[Path]
    output_format: str
    verbosity: int
    alpha: Optional[float]
    damping: Optional[float]
    pool: float
    sweep: Optional[list[float]]
    exclude: list[str]


EPILOG = """
Dataset format (YAML or JSON):
  nodes:   [{id, type: agent|artifact|outcome, weight?, metadata?}, ...]
  edges:   [{from, to, type, weight?, confidence?}, ...]
  config:  {alpha?, damping?, normalization?, weights?}   (optional)

Examples:
  creditgraph oss.yaml --pool 5000
  creditgraph oss.yaml --sweep 0,0.25,0.5,0.75,1 -f txt
  creditgraph grant.yaml --exclude grant --pool 5000
"""


def _parse_unit(value: str, flag: str) -> float:
    try:
        number = float(value)
    except ValueError:
        print(f"Error: {flag} must be a number, got '{value}'", file=sys.stderr)
        sys.exit(1)
    if not 0.0 <= number <= 1.0:
        print(f"Error: {flag} must be in [0, 1], got {number}", file=sys.stderr)
        sys.exit(1)
    return number


def parse_args(argv: Optional[list[str]] = None) -> ParsedArgs:
    parser = argparse.ArgumentParser(
        prog="creditgraph",
        description="Attribute credit to agents in an agent/artifact/outcome graph and split a reward pool.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument("-v", "--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("dataset", help="Dataset file (.yaml, .yml or .json)")
    parser.add_argument("--alpha", default=None, help="Forward/reverse balance in [0, 1] (overrides dataset config)")
    parser.add_argument("--damping", default=None, help="PageRank damping in [0, 1] (overrides dataset config)")
    parser.add_argument("--pool", type=float, default=1.0, help="Reward pool to split (default: 1)")
    parser.add_argument("--sweep", default=None, metavar="A,B,...", help="Comma-separated alphas; report rewards per alpha")
    parser.add_argument(
        "--exclude",
        action="append",
        default=[],
        metavar="NODE_ID",
        help="Counterfactual: drop every edge touching NODE_ID and report the payout delta (repeatable)",
    )
    parser.add_argument("-o", "--output-file", default=None, help="Output file (default: stdout)")
    parser.add_argument(
        "-f",
        "--format",
        choices=["yaml", "yml", "json", "txt", "md"],
        default="yaml",
        help="Output format (default: yaml)",
    )
    parser.add_argument(
        "--log-level",
        choices=["error", "warning", "info", "debug"],
        default="error",
        help="Log level (default: error)",
    )

    args = parser.parse_args(argv)

    if args.sweep is not None and args.exclude:
        print("Error: --sweep and --exclude cannot be combined", file=sys.stderr)
        sys.exit(1)

    alpha = _parse_unit(args.alpha, "--alpha") if args.alpha is not None else None
    damping = _parse_unit(args.damping, "--damping") if args.damping is not None else None

    sweep = None
    if args.sweep is not None:
        parts = [p for p in args.sweep.split(",") if p.strip()]
        if not parts:
            print("Error: --sweep needs at least one alpha", file=sys.stderr)
            sys.exit(1)
        sweep = [_parse_unit(p.strip(), "--sweep") for p in parts]

    dataset = Path(args.dataset)
    if not dataset.is_file():
        print(f"Error: Dataset file '{args.dataset}' does not exist.", file=sys.stderr)
        sys.exit(1)

    output_file = None
    if args.output_file is not None and args.output_file != "-":
        output_file = Path(args.output_file).resolve()
        if output_file.is_dir():
            print(f"Error: '{args.output_file}' is a directory, not a file.", file=sys.stderr)
            sys.exit(1)

    log_level_map = {"error": 0, "warning": 1, "info": 2, "debug": 3}

    return ParsedArgs(
        dataset=dataset.resolve(),
        output_file=output_file,
        output_format="yaml" if args.format == "yml" else args.format,
        verbosity=log_level_map[args.log_level],
        alpha=alpha,
        damping=damping,
        pool=args.pool,
        sweep=sweep,
        exclude=args.exclude,
    )
