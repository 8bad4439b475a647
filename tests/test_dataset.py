import json

import pytest
import yaml

from creditgraph import AttributionEngine
from creditgraph.dataset import load_dataset, parse_dataset
from creditgraph.errors import DatasetError, InvalidGraphInput
from creditgraph.types import Edge, Node


class TestLoad:
    def test_dataset_001_yaml(self, dataset_file):
        dataset = load_dataset(dataset_file)
        assert len(dataset.nodes) == 10
        assert len(dataset.edges) == 10
        assert dataset.nodes[0] == Node("alice", "agent")
        assert dataset.nodes[0].metadata == {"label": "Alice (Core Maintainer)"}
        assert dataset.edges[0] == Edge("alice", "llm-core", "creates", weight=12.0)
        assert dataset.config.normalization.edge_weight == "perTypeMax"
        assert dataset.config.normalization.transform == "log1p"
        assert dataset.config.weights.edge_multiplier("depends") == 0.8
        assert dataset.config.weights.nodes_by_type["agent"] == 1.0

    def test_dataset_002_json(self, tmp_path, oss_dataset):
        path = tmp_path / "oss.json"
        path.write_text(json.dumps(oss_dataset), encoding="utf-8")
        assert load_dataset(path).nodes == load_dataset(_yaml(tmp_path, oss_dataset)).nodes

    def test_dataset_003_config_is_optional(self, tmp_path):
        path = _yaml(tmp_path, {"nodes": [{"id": "a", "type": "agent"}], "edges": []})
        dataset = load_dataset(path)
        assert dataset.config.alpha == 0.5
        assert dataset.edges == []

    def test_dataset_004_loaded_dataset_evaluates(self, dataset_file):
        dataset = load_dataset(dataset_file)
        engine = AttributionEngine(dataset.config)
        payout = engine.reward(engine.evaluate(dataset.nodes, dataset.edges), 5000)
        assert set(payout) == {"alice", "bob", "carol", "eric"}
        assert sum(payout.values()) == pytest.approx(5000)
        assert payout["alice"] > payout["carol"]


class TestErrors:
    def test_dataset_010_missing_file(self, tmp_path):
        with pytest.raises(DatasetError, match="does not exist"):
            load_dataset(tmp_path / "nope.yaml")

    def test_dataset_011_unparsable_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("nodes: [unclosed\n", encoding="utf-8")
        with pytest.raises(DatasetError, match="Cannot parse"):
            load_dataset(path)

    def test_dataset_012_unparsable_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{nodes:", encoding="utf-8")
        with pytest.raises(DatasetError):
            load_dataset(path)

    def test_dataset_013_top_level_must_be_mapping(self):
        with pytest.raises(DatasetError):
            parse_dataset([1, 2, 3])

    def test_dataset_014_duplicate_node_ids(self):
        doc = {"nodes": [{"id": "a", "type": "agent"}, {"id": "a", "type": "artifact"}]}
        with pytest.raises(DatasetError, match="Duplicate"):
            parse_dataset(doc)

    def test_dataset_015_unknown_node_type(self):
        with pytest.raises(InvalidGraphInput, match="unknown type"):
            parse_dataset({"nodes": [{"id": "a", "type": "robot"}]})

    def test_dataset_016_edge_missing_endpoint(self):
        with pytest.raises(InvalidGraphInput, match="'to'"):
            parse_dataset({"edges": [{"from": "a", "type": "creates"}]})

    def test_dataset_017_non_numeric_weight(self):
        with pytest.raises(InvalidGraphInput, match="weight"):
            parse_dataset({"edges": [{"from": "a", "to": "b", "type": "creates", "weight": "heavy"}]})

    def test_dataset_018_non_mapping_entries(self):
        with pytest.raises(DatasetError):
            parse_dataset({"nodes": ["alice"]})


def _yaml(tmp_path, doc):
    path = tmp_path / "doc.yml"
    path.write_text(yaml.safe_dump(doc), encoding="utf-8")
    return path
