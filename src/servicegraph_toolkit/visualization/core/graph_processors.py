"""
Core graph processing: traffic graph to Cytoscape node and edge records.
"""

import logging

from ...graph.traffic import TrafficGraph
from ...shared.hashing import edge_hash, node_hash
from .elements import EdgeData, NodeData
from .telemetry import add_edge_telemetry, add_node_flags, add_node_telemetry


class CytoscapeGraphProcessor:
    """Builds one node record per graph node and one edge record per graph edge."""

    def __init__(self):
        """Initialize the graph processor."""
        self.logger = logging.getLogger(__name__)

    def build(self, graph: TrafficGraph) -> tuple[list[NodeData], list[EdgeData]]:
        """Walk the traffic graph once, emitting decorated records.

        The graph is not modified. Output order follows graph iteration order;
        callers sort afterwards.

        Args:
            graph: Traffic graph to convert

        Returns:
            Tuple of (nodes, edges)

        Raises:
            GraphStructureError: If an edge points outside the graph
        """
        graph.validate()

        nodes: list[NodeData] = []
        edges: list[EdgeData] = []

        for node_id, node in graph.items():
            source_hash = node_hash(node_id)

            nd = NodeData(
                id=source_hash,
                node_type=node.node_type,
                namespace=node.namespace,
                workload=node.workload,
                app=node.app,
                version=node.version,
                service=node.service,
            )
            add_node_telemetry(node, nd)
            add_node_flags(node, nd)
            nodes.append(nd)

            for edge in node.edges:
                dest_hash = node_hash(edge.dest.id)
                ed = EdgeData(
                    id=edge_hash(source_hash, dest_hash, edge.protocol),
                    source=source_hash,
                    target=dest_hash,
                )
                add_edge_telemetry(edge, ed)
                edges.append(ed)

        self.logger.debug(f"Built {len(nodes)} nodes and {len(edges)} edges")
        return nodes, edges
