"""
Cytoscape document entry point for the service graph toolkit.

Converts a traffic graph into the CytoscapeJS elements JSON consumed by the
graph UI. Algorithm: process the graph adding nodes and edges, decorating each
with the telemetry provided; an optional second pass generates compound nodes
for app or version grouping; finally both lists are sorted.

Useful references:

    Main page:   http://js.cytoscape.org/
    JSON config: http://js.cytoscape.org/#notation/elements-json
"""

import logging
from pathlib import Path

from ..graph.traffic import TrafficGraph
from ..shared.exceptions import RenderError, create_error_context
from ..shared.models import GraphOptions, parse_group_by
from .core.elements import CytoscapeConfig, EdgeData, Elements, NodeData
from .core.graph_processors import CytoscapeGraphProcessor
from .core.grouping import add_group_nodes
from .core.sorting import sort_edges, sort_nodes

logger = logging.getLogger(__name__)


def new_config(graph: TrafficGraph, options: GraphOptions | None = None) -> CytoscapeConfig:
    """Convert a traffic graph into a Cytoscape document.

    Each call builds fresh node and edge lists; the input graph is only read.

    Args:
        graph: Traffic graph to convert
        options: Grouping, graph type and run metadata (defaults when omitted)

    Returns:
        Sorted Cytoscape document

    Raises:
        GraphStructureError: If the graph is structurally invalid

    Example:
        >>> from servicegraph_toolkit import GraphOptions, GroupBy, load_traffic_graph
        >>> from servicegraph_toolkit.visualization import new_config
        >>> graph = load_traffic_graph(Path("traffic.json"))
        >>> config = new_config(graph, GraphOptions(group_by=GroupBy.VERSION))
        >>> print(config.to_json(indent=2))
    """
    options = options or GraphOptions()

    nodes, edges = CytoscapeGraphProcessor().build(graph)

    group_by = parse_group_by(options.group_by)
    groups = add_group_nodes(nodes, group_by, options.graph_type)
    if groups:
        logger.debug(f"Added {groups} '{group_by.value}' group nodes")

    # compound nodes must come before the nodes referencing them as parent
    sort_nodes(nodes)
    sort_edges(edges)

    return assemble_config(nodes, edges, options)


def assemble_config(
    nodes: list[NodeData], edges: list[EdgeData], options: GraphOptions
) -> CytoscapeConfig:
    """Wrap sorted elements with the run metadata."""
    return CytoscapeConfig(
        timestamp=options.query_time,
        duration=options.duration,
        graph_type=options.graph_type,
        elements=Elements(nodes=nodes, edges=edges),
    )


def write_config(config: CytoscapeConfig, output_path: Path, indent: int | None = 2) -> Path:
    """Write a Cytoscape document as JSON.

    Args:
        config: Document to write
        output_path: Destination file, parent directories are created
        indent: JSON indentation, None for compact output

    Returns:
        Path of the written file

    Raises:
        RenderError: If the file cannot be written
    """
    output_path = Path(output_path)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(config.to_json(indent=indent) + "\n", encoding="utf-8")
    except OSError as e:
        raise RenderError(
            f"Failed to write Cytoscape document: {e}",
            create_error_context(path=str(output_path)),
        ) from e

    logger.debug(f"Wrote Cytoscape document to {output_path}")
    return output_path
