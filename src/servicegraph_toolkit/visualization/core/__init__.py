"""
Core visualization components.

This module provides the building blocks for the Cytoscape document: element
records, telemetry decoration, graph processing, grouping and ordering.
"""

from .elements import CytoscapeConfig, EdgeData, Elements, NodeData
from .graph_processors import CytoscapeGraphProcessor
from .grouping import add_group_nodes, group_by_app, group_by_version, group_id
from .sorting import sort_edges, sort_nodes

__all__ = [
    "CytoscapeConfig",
    "Elements",
    "NodeData",
    "EdgeData",
    "CytoscapeGraphProcessor",
    "add_group_nodes",
    "group_by_app",
    "group_by_version",
    "group_id",
    "sort_nodes",
    "sort_edges",
]
