from __future__ import annotations

import io
import json
import logging
import sys
from collections.abc import Mapping
from pathlib import Path
from typing import Any, TextIO

import yaml

Row = dict[str, Any]


def build_rows(scores: Mapping[str, float], rewards: Mapping[str, float]) -> list[Row]:
    ordered = sorted(scores.items(), key=lambda item: (-item[1], item[0]))
    return [{"agent": agent, "score": score, "reward": rewards.get(agent, 0.0)} for agent, score in ordered]


def build_sweep_rows(sweep: Mapping[str, Mapping[float, float]]) -> list[Row]:
    return [{"agent": agent, "rewards": {f"alpha={a:g}": v for a, v in sweep[agent].items()}} for agent in sorted(sweep)]


def write_results_yaml(file: TextIO, rows: list[Row]) -> None:
    yaml.safe_dump({"results": rows}, file, sort_keys=False, allow_unicode=True)


def write_results_json(file: TextIO, rows: list[Row]) -> None:
    json.dump({"results": rows}, file, ensure_ascii=False, indent=2)
    file.write("\n")


def _format_value(value: Any) -> str:
    if isinstance(value, float):
        return f"{value:.6f}"
    if isinstance(value, Mapping):
        return "  ".join(f"{k}: {_format_value(v)}" for k, v in value.items())
    return str(value)


def write_results_text(file: TextIO, rows: list[Row]) -> None:
    if not rows:
        return
    width = max(len(str(row["agent"])) for row in rows)
    for row in rows:
        fields = [_format_value(v) for k, v in row.items() if k != "agent"]
        file.write(f"{str(row['agent']).ljust(width)}  {'  '.join(fields)}\n")


def write_results_markdown(file: TextIO, rows: list[Row]) -> None:
    if not rows:
        file.write("_(no agents)_\n")
        return
    columns = list(rows[0])
    file.write("| " + " | ".join(columns) + " |\n")
    file.write("|" + "|".join("---" for _ in columns) + "|\n")
    for row in rows:
        file.write("| " + " | ".join(_format_value(row[c]) for c in columns) + " |\n")


def results_to_string(rows: list[Row], output_format: str = "yaml") -> str:
    buf = io.StringIO()
    if output_format == "json":
        write_results_json(buf, rows)
    elif output_format == "txt":
        write_results_text(buf, rows)
    elif output_format == "md":
        write_results_markdown(buf, rows)
    else:
        write_results_yaml(buf, rows)
    return buf.getvalue()


def write_string_to_file(content: str, output_file: Path | None, output_format: str = "yaml") -> None:
    if output_file is None:
        try:
            sys.stdout.write(content)
            sys.stdout.flush()
        except BrokenPipeError:
            pass
        logging.info("Results written to stdout in %s format", output_format)
        return

    try:
        output_file.parent.mkdir(parents=True, exist_ok=True)
        with output_file.open("w", encoding="utf-8") as f:
            f.write(content)
        logging.info("Results saved to %s in %s format", output_file, output_format)
    except OSError as e:
        logging.error("Unable to write to file '%s': %s", output_file, e)
        raise
