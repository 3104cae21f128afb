"""
End-to-end tests for Cytoscape document generation.
"""

import json
from pathlib import Path

import pytest

from servicegraph_toolkit.graph.traffic import GraphNode, TrafficGraph
from servicegraph_toolkit.shared.exceptions import GraphStructureError, RenderError
from servicegraph_toolkit.shared.hashing import edge_hash, node_hash
from servicegraph_toolkit.shared.models import GraphOptions, GraphType, GroupBy
from servicegraph_toolkit.visualization import new_config, write_config
from servicegraph_toolkit.visualization.core.grouping import group_id
from servicegraph_toolkit.visualization.cytoscape import assemble_config


def edge_by_ids(config, source: str, target: str, protocol: str = "http") -> dict:
    edge_id = edge_hash(node_hash(source), node_hash(target), protocol)
    for edge in config.to_dict()["elements"]["edges"]:
        if edge["data"]["id"] == edge_id:
            return edge["data"]
    raise AssertionError(f"edge {source}->{target} not found")


def node_by_id(config, node_id: str) -> dict:
    for node in config.to_dict()["elements"]["nodes"]:
        if node["data"]["id"] == node_hash(node_id):
            return node["data"]
    raise AssertionError(f"node {node_id} not found")


class TestNewConfig:
    """Tests for new_config."""

    def test_single_node(self, fixed_options: GraphOptions) -> None:
        """Test a lone node without metadata yields only identity fields."""
        graph = TrafficGraph([GraphNode(id="svcA", node_type="app", namespace="ns1", app="svcA")])

        config = new_config(graph, fixed_options)

        assert config.to_dict()["elements"] == {
            "nodes": [
                {
                    "data": {
                        "id": node_hash("svcA"),
                        "nodeType": "app",
                        "namespace": "ns1",
                        "app": "svcA",
                    }
                }
            ],
            "edges": [],
        }

    def test_document_shape(
        self, bookinfo_graph: TrafficGraph, fixed_options: GraphOptions
    ) -> None:
        """Test run metadata and element counts."""
        data = new_config(bookinfo_graph, fixed_options).to_dict()

        assert list(data) == ["timestamp", "duration", "graphType", "elements"]
        assert data["timestamp"] == 1523364075
        assert data["duration"] == 600
        assert data["graphType"] == "versionedApp"
        assert len(data["elements"]["nodes"]) == 7
        assert len(data["elements"]["edges"]) == 6
        assert all(list(node) == ["data"] for node in data["elements"]["nodes"])

    def test_empty_graph(self, fixed_options: GraphOptions) -> None:
        data = new_config(TrafficGraph(), fixed_options).to_dict()

        assert data["elements"] == {"nodes": [], "edges": []}

    def test_default_options(self, bookinfo_graph: TrafficGraph) -> None:
        """Test defaults apply when no options are given."""
        data = new_config(bookinfo_graph).to_dict()

        assert data["graphType"] == "versionedApp"
        assert data["duration"] == 600
        assert data["timestamp"] > 0

    def test_edge_decoration(
        self, bookinfo_graph: TrafficGraph, fixed_options: GraphOptions
    ) -> None:
        """Test edges carry rates, percentages and flags."""
        config = new_config(bookinfo_graph, fixed_options)

        reviews = edge_by_ids(config, "productpage_v1", "reviews_v1")
        assert reviews == {
            "id": edge_hash(node_hash("productpage_v1"), node_hash("reviews_v1"), "http"),
            "source": node_hash("productpage_v1"),
            "target": node_hash("reviews_v1"),
            "http": "15.00",
            "http5XX": "1.50",
            "httpPercentErr": "10.0",
            "httpPercentReq": "75.0",
            "isMTLS": True,
        }

        ingress = edge_by_ids(config, "ingress", "productpage_v1")
        assert ingress["http"] == "20.00"
        assert ingress["responseTime"] == "31"
        assert "httpPercentReq" not in ingress

        mysql = edge_by_ids(config, "reviews_v2", "mysql", "tcp")
        assert mysql["tcp"] == "350.00"
        assert "http" not in mysql

        details = edge_by_ids(config, "productpage_v1", "details_v1")
        assert set(details) == {"id", "source", "target"}

    def test_node_decoration(
        self, bookinfo_graph: TrafficGraph, fixed_options: GraphOptions
    ) -> None:
        """Test nodes carry rates and flags."""
        config = new_config(bookinfo_graph, fixed_options)

        assert node_by_id(config, "reviews_v1") == {
            "id": node_hash("reviews_v1"),
            "nodeType": "app",
            "namespace": "bookinfo",
            "app": "reviews",
            "version": "v1",
            "httpIn": "15.00",
            "httpIn5XX": "1.50",
            "hasMissingSC": True,
        }
        mysql = node_by_id(config, "mysql")
        assert mysql["service"] == "mysqldb"
        assert mysql["tcpIn"] == "350.00"
        assert mysql["isServiceEntry"] == "MESH_EXTERNAL"
        assert node_by_id(config, "details_v1")["isUnused"] is True
        assert node_by_id(config, "ingress")["isRoot"] is True

    def test_node_order(self, bookinfo_graph: TrafficGraph) -> None:
        """Test nodes are ordered by namespace, group, then app and version."""
        options = GraphOptions(group_by=GroupBy.VERSION, query_time=0)
        nodes = new_config(bookinfo_graph, options).to_dict()["elements"]["nodes"]

        expected = [
            group_id("bookinfo/reviews"),
            node_hash("mysql"),
            node_hash("details_v1"),
            node_hash("productpage_v1"),
            node_hash("ratings_v1"),
            node_hash("reviews_v1"),
            node_hash("reviews_v2"),
            node_hash("ingress"),
        ]
        assert [node["data"]["id"] for node in nodes] == expected

    def test_edge_order(self, bookinfo_graph: TrafficGraph, fixed_options: GraphOptions) -> None:
        edges = new_config(bookinfo_graph, fixed_options).to_dict()["elements"]["edges"]

        keys = [(e["data"]["source"], e["data"]["target"], e["data"]["id"]) for e in edges]
        assert keys == sorted(keys)

    def test_parents_precede_children(self, bookinfo_graph: TrafficGraph) -> None:
        """Test every compound node is listed before its members."""
        options = GraphOptions(group_by=GroupBy.APP, query_time=0)
        nodes = new_config(bookinfo_graph, options).to_dict()["elements"]["nodes"]

        position = {node["data"]["id"]: i for i, node in enumerate(nodes)}
        children = [node["data"] for node in nodes if "parent" in node["data"]]
        assert children
        for child in children:
            assert position[child["parent"]] < position[child["id"]]

    def test_version_grouping(self, versioned_app_pair: TrafficGraph) -> None:
        """Test two versions of one app get a single compound parent."""
        options = GraphOptions(group_by=GroupBy.VERSION, query_time=0)
        data = new_config(versioned_app_pair, options).to_dict()
        nodes = [n["data"] for n in data["elements"]["nodes"]]

        assert len(nodes) == 3
        group = nodes[0]
        assert group == {
            "id": group_id("ns1/svcA"),
            "nodeType": "app",
            "namespace": "ns1",
            "app": "svcA",
            "isGroup": "version",
        }
        assert [n["parent"] for n in nodes[1:]] == [group["id"], group["id"]]
        assert [n["version"] for n in nodes[1:]] == ["v1", "v2"]

    def test_version_grouping_needs_versioned_graph(
        self, versioned_app_pair: TrafficGraph
    ) -> None:
        options = GraphOptions(graph_type=GraphType.APP.value, group_by=GroupBy.VERSION)

        nodes = new_config(versioned_app_pair, options).elements.nodes

        assert len(nodes) == 2
        assert all(nd.parent == "" for nd in nodes)

    def test_unknown_group_by_disables_grouping(self, versioned_app_pair: TrafficGraph) -> None:
        """Test an unrecognized grouping value is treated as none."""
        options = GraphOptions(group_by="namespace")  # type: ignore[arg-type]

        nodes = new_config(versioned_app_pair, options).elements.nodes

        assert len(nodes) == 2

    def test_deterministic(self, bookinfo_graph_data: dict) -> None:
        """Test identical input produces byte-identical output regardless of input order."""
        options = GraphOptions(group_by=GroupBy.VERSION, query_time=1, duration=60)
        reordered = dict(bookinfo_graph_data)
        reordered["nodes"] = list(reversed(bookinfo_graph_data["nodes"]))
        reordered["edges"] = list(reversed(bookinfo_graph_data["edges"]))

        first = new_config(TrafficGraph.from_dict(bookinfo_graph_data), options).to_json()
        second = new_config(TrafficGraph.from_dict(bookinfo_graph_data), options).to_json()
        third = new_config(TrafficGraph.from_dict(reordered), options).to_json()

        assert first == second == third

    def test_input_not_modified(
        self, bookinfo_graph: TrafficGraph, bookinfo_graph_data: dict
    ) -> None:
        new_config(bookinfo_graph, GraphOptions(group_by=GroupBy.APP))

        assert bookinfo_graph.to_dict() == bookinfo_graph_data

    def test_dangling_edge_rejected(self, fixed_options: GraphOptions) -> None:
        """Test an edge to a node outside the graph fails the whole conversion."""
        source = GraphNode(id="a")
        source.add_edge(GraphNode(id="b"), {"http": 1.0})
        graph = TrafficGraph([source])

        with pytest.raises(GraphStructureError) as exc_info:
            new_config(graph, fixed_options)

        assert exc_info.value.context["target"] == "b"

    def test_parallel_protocols_distinct(self, fixed_options: GraphOptions) -> None:
        """Test edges between the same nodes differ by protocol."""
        graph = TrafficGraph([GraphNode(id="a"), GraphNode(id="b")])
        graph.add_edge("a", "b", {"protocol": "http", "http": 1.0})
        graph.add_edge("a", "b", {"protocol": "tcp", "tcp": 1.0})

        edges = new_config(graph, fixed_options).elements.edges

        assert len({ed.id for ed in edges}) == 2


class TestAssembleConfig:
    def test_wraps_elements(self, fixed_options: GraphOptions) -> None:
        config = assemble_config([], [], fixed_options)

        assert config.timestamp == 1523364075
        assert config.duration == 600
        assert config.graph_type == "versionedApp"
        assert config.elements.nodes == []


class TestWriteConfig:
    """Tests for write_config."""

    def test_writes_json(
        self, temp_dir: Path, bookinfo_graph: TrafficGraph, fixed_options: GraphOptions
    ) -> None:
        config = new_config(bookinfo_graph, fixed_options)
        output_path = temp_dir / "out" / "graph.json"

        result = write_config(config, output_path)

        assert result == output_path
        text = output_path.read_text(encoding="utf-8")
        assert text.endswith("\n")
        assert json.loads(text) == config.to_dict()

    def test_compact(self, temp_dir: Path, fixed_options: GraphOptions) -> None:
        config = new_config(TrafficGraph(), fixed_options)
        output_path = temp_dir / "graph.json"

        write_config(config, output_path, indent=None)

        assert output_path.read_text(encoding="utf-8").count("\n") == 1

    def test_unwritable_path(self, temp_dir: Path, fixed_options: GraphOptions) -> None:
        """Test write failures surface as RenderError."""
        config = new_config(TrafficGraph(), fixed_options)

        with pytest.raises(RenderError):
            write_config(config, temp_dir)
