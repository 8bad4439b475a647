# tests/conftest.py
import os
import subprocess
import sys
from pathlib import Path

import pytest
import yaml

from creditgraph import Edge, Node

PROJECT_ROOT = Path(__file__).parent.parent
SRC_DIR = PROJECT_ROOT / "src"


@pytest.fixture
def simple_nodes():
    return [
        Node("alice", "agent"),
        Node("bob", "agent"),
        Node("library", "artifact"),
        Node("downloads", "outcome"),
    ]


@pytest.fixture
def simple_edges():
    return [
        Edge("alice", "library", "creates", weight=1.0),
        Edge("bob", "library", "creates", weight=0.5),
        Edge("downloads", "library", "generates", weight=50.0),
    ]


@pytest.fixture
def oss_dataset():
    """Small open-source ecosystem: two libraries, an app, docs and three outcomes."""
    return {
        "nodes": [
            {"id": "alice", "type": "agent", "metadata": {"label": "Alice (Core Maintainer)"}},
            {"id": "bob", "type": "agent"},
            {"id": "carol", "type": "agent"},
            {"id": "eric", "type": "agent"},
            {"id": "llm-core", "type": "artifact"},
            {"id": "web-app", "type": "artifact"},
            {"id": "docs", "type": "artifact"},
            {"id": "downloads", "type": "outcome", "weight": 5000},
            {"id": "grant", "type": "outcome", "weight": 200000},
            {"id": "stars", "type": "outcome", "weight": 6000},
        ],
        "edges": [
            {"from": "alice", "to": "llm-core", "type": "creates", "weight": 12},
            {"from": "bob", "to": "web-app", "type": "creates", "weight": 7},
            {"from": "carol", "to": "llm-core", "type": "creates", "weight": 3},
            {"from": "eric", "to": "docs", "type": "creates", "weight": 10},
            {"from": "web-app", "to": "llm-core", "type": "depends", "weight": 2.5},
            {"from": "docs", "to": "llm-core", "type": "references", "weight": 1},
            {"from": "downloads", "to": "web-app", "type": "generates", "weight": 1},
            {"from": "grant", "to": "llm-core", "type": "funds", "weight": 1},
            {"from": "stars", "to": "llm-core", "type": "generates", "weight": 0.7},
            {"from": "stars", "to": "docs", "type": "generates", "weight": 0.3},
        ],
        "config": {
            "alpha": 0.5,
            "damping": 0.85,
            "normalization": {"edgeWeight": "perTypeMax", "transform": "log1p"},
            "weights": {
                "edges": {"creates": 1.0, "depends": 0.8, "generates": 1.0, "funds": 1.0},
                "nodesByType": {"outcome": 0.001},
            },
        },
    }


@pytest.fixture
def dataset_file(tmp_path, oss_dataset):
    path = tmp_path / "oss.yaml"
    path.write_text(yaml.safe_dump(oss_dataset, sort_keys=False), encoding="utf-8")
    return path


def run_creditgraph_subprocess(args, cwd=None, **kwargs):
    """Run ``python -m creditgraph`` with ``src`` on PYTHONPATH."""
    command = [sys.executable, "-m", "creditgraph"] + args

    env = os.environ.copy()
    pythonpath = str(SRC_DIR)
    if "PYTHONPATH" in env:
        pythonpath = f"{pythonpath}{os.pathsep}{env['PYTHONPATH']}"
    env["PYTHONPATH"] = pythonpath

    if "env" in kwargs:
        env.update(kwargs["env"])
    kwargs["env"] = env

    kwargs.setdefault("capture_output", True)
    kwargs.setdefault("text", True)
    kwargs.setdefault("encoding", "utf-8")
    kwargs.setdefault("errors", "replace")

    return subprocess.run(command, cwd=cwd, **kwargs)
