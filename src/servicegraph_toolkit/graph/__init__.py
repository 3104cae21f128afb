"""
Traffic graph input model: nodes, edges and typed metadata.
"""

from .metadata import Metadata, MetadataKind, MetadataValue
from .traffic import GraphEdge, GraphNode, TrafficGraph, load_traffic_graph

__all__ = [
    "Metadata",
    "MetadataKind",
    "MetadataValue",
    "GraphNode",
    "GraphEdge",
    "TrafficGraph",
    "load_traffic_graph",
]
