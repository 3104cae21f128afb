"""
Traffic graph model.

A ``TrafficGraph`` maps logical node ids to ``GraphNode`` objects; each node
owns its outgoing ``GraphEdge`` list. Graphs are built by an upstream telemetry
collaborator and are treated as read-only by the rendering code.
"""

import json
import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

import networkx as nx

from ..shared.exceptions import GraphLoadError, GraphStructureError, create_error_context
from ..shared.models import NodeType
from .metadata import Metadata

logger = logging.getLogger(__name__)

# Node attribute name in the JSON file -> GraphNode field
_NODE_FIELDS = {
    "nodeType": "node_type",
    "namespace": "namespace",
    "workload": "workload",
    "app": "app",
    "version": "version",
    "service": "service",
}


@dataclass(eq=False)
class GraphNode:
    """A workload, service or app observed in the traffic graph."""

    id: str
    node_type: str = NodeType.UNKNOWN.value
    namespace: str = ""
    workload: str = ""
    app: str = ""
    version: str = ""
    service: str = ""
    metadata: Metadata = field(default_factory=Metadata)
    edges: list["GraphEdge"] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        if isinstance(self.node_type, Enum):
            self.node_type = self.node_type.value
        if not isinstance(self.metadata, Metadata):
            self.metadata = Metadata(self.metadata)

    def add_edge(
        self, dest: "GraphNode", metadata: Metadata | Mapping[str, Any] | None = None
    ) -> "GraphEdge":
        """Append an outgoing edge to ``dest``."""
        edge = GraphEdge(source=self, dest=dest, metadata=metadata)  # type: ignore[arg-type]
        self.edges.append(edge)
        return edge


@dataclass(eq=False)
class GraphEdge:
    """Observed traffic from one node to another."""

    source: GraphNode = field(repr=False)
    dest: GraphNode = field(repr=False)
    metadata: Metadata = field(default_factory=Metadata)

    def __post_init__(self) -> None:
        if not isinstance(self.metadata, Metadata):
            self.metadata = Metadata(self.metadata)

    @property
    def protocol(self) -> str:
        """Protocol label, empty when not recorded."""
        return self.metadata.get_label("protocol") or ""


class TrafficGraph(Mapping[str, GraphNode]):
    """Mapping of logical node id to GraphNode."""

    def __init__(self, nodes: Iterable[GraphNode] | None = None):
        self._nodes: dict[str, GraphNode] = {}
        for node in nodes or ():
            self.add_node(node)

    def __getitem__(self, node_id: str) -> GraphNode:
        return self._nodes[node_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    def __repr__(self) -> str:
        return f"TrafficGraph(nodes={len(self._nodes)}, edges={self.edge_count})"

    @property
    def edge_count(self) -> int:
        return sum(len(node.edges) for node in self._nodes.values())

    def add_node(self, node: GraphNode) -> GraphNode:
        """Add a node, rejecting duplicate ids.

        Raises:
            GraphStructureError: If a node with the same id exists
        """
        if not node.id:
            raise GraphStructureError("Node id must not be empty")
        if node.id in self._nodes:
            raise GraphStructureError(
                "Duplicate node id", create_error_context(node_id=node.id)
            )
        self._nodes[node.id] = node
        return node

    def add_edge(
        self,
        source_id: str,
        dest_id: str,
        metadata: Metadata | Mapping[str, Any] | None = None,
    ) -> GraphEdge:
        """Add an edge between two existing nodes.

        Raises:
            GraphStructureError: If either endpoint is not in the graph
        """
        for node_id in (source_id, dest_id):
            if node_id not in self._nodes:
                raise GraphStructureError(
                    "Edge references unknown node",
                    create_error_context(source=source_id, target=dest_id, missing=node_id),
                )
        return self._nodes[source_id].add_edge(self._nodes[dest_id], metadata)

    def validate(self) -> None:
        """Check that every edge belongs to its node and targets a node of this graph.

        Raises:
            GraphStructureError: On the first violation found
        """
        for node_id, node in self._nodes.items():
            if node.id != node_id:
                raise GraphStructureError(
                    "Node registered under a different id",
                    create_error_context(key=node_id, node_id=node.id),
                )
            for edge in node.edges:
                if edge.source is not node:
                    raise GraphStructureError(
                        "Edge source does not match owning node",
                        create_error_context(node_id=node_id),
                    )
                if self._nodes.get(edge.dest.id) is not edge.dest:
                    raise GraphStructureError(
                        "Edge destination is not a node of the graph",
                        create_error_context(source=node_id, target=edge.dest.id),
                    )

    @classmethod
    def from_dict(cls, data: Any) -> "TrafficGraph":
        """Build a graph from its JSON representation.

        Args:
            data: Object with a ``nodes`` list and an optional ``edges`` list

        Returns:
            Loaded traffic graph

        Raises:
            GraphStructureError: If the data does not describe a valid graph
        """
        if not isinstance(data, dict):
            raise GraphStructureError(
                f"Invalid traffic graph format: expected dict, got {type(data).__name__}"
            )
        nodes = data.get("nodes")
        edges = data.get("edges") or []
        if not isinstance(nodes, list) or not isinstance(edges, list):
            raise GraphStructureError(
                "Invalid traffic graph format: 'nodes' and 'edges' must be lists"
            )

        graph = cls()
        for index, raw in enumerate(nodes):
            if not isinstance(raw, dict) or not isinstance(raw.get("id"), str):
                raise GraphStructureError(
                    "Node entry without a string id", create_error_context(index=index)
                )
            attrs = {attr: str(raw.get(key) or "") for key, attr in _NODE_FIELDS.items()}
            attrs["node_type"] = attrs["node_type"] or NodeType.UNKNOWN.value
            graph.add_node(GraphNode(id=raw["id"], metadata=_raw_metadata(raw), **attrs))

        for index, raw in enumerate(edges):
            if not isinstance(raw, dict):
                raise GraphStructureError(
                    "Edge entry is not an object", create_error_context(index=index)
                )
            graph.add_edge(str(raw.get("source")), str(raw.get("target")), _raw_metadata(raw))

        logger.debug(f"Loaded {graph!r}")
        return graph

    def to_dict(self) -> dict[str, Any]:
        """JSON representation accepted by ``from_dict``."""
        nodes = []
        edges = []
        for node in self._nodes.values():
            entry: dict[str, Any] = {"id": node.id}
            for key, attr in _NODE_FIELDS.items():
                value = getattr(node, attr)
                if value:
                    entry[key] = value
            if node.metadata:
                entry["metadata"] = node.metadata.to_dict()
            nodes.append(entry)

            for edge in node.edges:
                edge_entry: dict[str, Any] = {"source": node.id, "target": edge.dest.id}
                if edge.metadata:
                    edge_entry["metadata"] = edge.metadata.to_dict()
                edges.append(edge_entry)

        return {"nodes": nodes, "edges": edges}

    @classmethod
    def from_networkx(cls, nx_graph: nx.DiGraph) -> "TrafficGraph":
        """Build a graph from a networkx directed (multi)graph.

        Node attributes use the JSON names (``nodeType``, ``namespace``, ...)
        plus an optional ``metadata`` dict; edges carry an optional
        ``metadata`` dict.
        """
        if not nx_graph.is_directed():
            raise GraphStructureError("Traffic graphs must be directed")

        graph = cls()
        for node_id, attrs in nx_graph.nodes(data=True):
            fields = {attr: str(attrs.get(key) or "") for key, attr in _NODE_FIELDS.items()}
            fields["node_type"] = fields["node_type"] or NodeType.UNKNOWN.value
            graph.add_node(GraphNode(id=str(node_id), metadata=_raw_metadata(attrs), **fields))

        for source, target, attrs in nx_graph.edges(data=True):
            graph.add_edge(str(source), str(target), _raw_metadata(attrs))

        return graph

    def to_networkx(self) -> nx.MultiDiGraph:
        """Convert to a networkx MultiDiGraph, keeping parallel edges."""
        nx_graph = nx.MultiDiGraph()
        for node in self._nodes.values():
            attrs = {key: getattr(node, attr) for key, attr in _NODE_FIELDS.items()}
            nx_graph.add_node(node.id, metadata=node.metadata.to_dict(), **attrs)
        for node in self._nodes.values():
            for edge in node.edges:
                nx_graph.add_edge(
                    node.id, edge.dest.id, protocol=edge.protocol, metadata=edge.metadata.to_dict()
                )
        return nx_graph


def _raw_metadata(attrs: Mapping[str, Any]) -> Metadata:
    raw = attrs.get("metadata")
    if raw is None:
        return Metadata()
    if not isinstance(raw, Mapping):
        logger.warning(f"Ignoring metadata of type {type(raw).__name__}")
        return Metadata()
    return Metadata(raw)


def load_traffic_graph(graph_file: Path) -> TrafficGraph:
    """Load a traffic graph from a JSON file.

    Args:
        graph_file: Path to traffic graph JSON file

    Returns:
        Loaded traffic graph

    Raises:
        GraphLoadError: If the file cannot be read or parsed
        GraphStructureError: If the file does not describe a valid graph
    """
    try:
        with open(graph_file) as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise GraphLoadError(f"Failed to parse JSON file {graph_file}: {e}") from e
    except FileNotFoundError as e:
        raise GraphLoadError(f"Traffic graph file not found: {graph_file}") from e
    except OSError as e:
        raise GraphLoadError(f"Error reading traffic graph from {graph_file}: {e}") from e

    return TrafficGraph.from_dict(data)
