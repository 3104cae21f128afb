"""
Service Graph Visualization Module

This module converts traffic graphs into CytoscapeJS documents, including
compound nodes for app and version grouping.
"""

from .core import CytoscapeConfig, CytoscapeGraphProcessor, EdgeData, NodeData
from .cytoscape import assemble_config, new_config, write_config

__all__ = [
    # Primary interface
    "new_config",
    "assemble_config",
    "write_config",
    # Core components
    "CytoscapeConfig",
    "CytoscapeGraphProcessor",
    "NodeData",
    "EdgeData",
]
