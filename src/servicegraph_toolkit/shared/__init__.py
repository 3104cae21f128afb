"""
Shared module for core functionality.

Contains configuration models, exceptions, identity hashing and logging
shared across the toolkit.
"""

from .exceptions import (
    ConfigurationError,
    GraphError,
    GraphLoadError,
    GraphStructureError,
    MetadataError,
    RenderError,
    ServiceGraphError,
    create_error_context,
    wrap_external_error,
)
from .hashing import edge_hash, node_hash
from .logging import get_logger, setup_logging
from .models import GraphOptions, GraphType, GroupBy, NodeType

__all__ = [
    # Core models
    "GraphOptions",
    "GraphType",
    "GroupBy",
    "NodeType",
    # Core exceptions
    "ServiceGraphError",
    "GraphError",
    "GraphStructureError",
    "GraphLoadError",
    "ConfigurationError",
    "MetadataError",
    "RenderError",
    "wrap_external_error",
    "create_error_context",
    # Utils
    "node_hash",
    "edge_hash",
    "setup_logging",
    "get_logger",
]
