"""
Service Graph Toolkit - Convert service mesh traffic graphs for visualization.

This toolkit provides functionality for:
- Loading traffic graphs from JSON files or networkx graphs
- Converting them into CytoscapeJS documents with telemetry decoration
- Grouping app versions and app workloads into compound nodes
"""

from .graph import GraphEdge, GraphNode, Metadata, TrafficGraph, load_traffic_graph
from .shared.exceptions import ServiceGraphError
from .shared.models import GraphOptions, GraphType, GroupBy, NodeType
from .visualization import CytoscapeConfig, new_config

__version__ = "0.1.0"

__all__ = [
    "GraphEdge",
    "GraphNode",
    "Metadata",
    "TrafficGraph",
    "load_traffic_graph",
    "GraphOptions",
    "GraphType",
    "GroupBy",
    "NodeType",
    "ServiceGraphError",
    "CytoscapeConfig",
    "new_config",
]
