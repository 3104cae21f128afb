"""
Conversion command: traffic graph JSON to Cytoscape JSON.
"""

import sys
from pathlib import Path

import click

from ...graph.traffic import load_traffic_graph
from ...shared.exceptions import ServiceGraphError, create_error_context, wrap_external_error
from ...shared.logging import get_logger
from ...shared.models import GraphOptions, GraphType, GroupBy
from ...visualization import new_config, write_config
from ..utils import get_output_manager_from_context

logger = get_logger(__name__)


@click.command()
@click.argument("graph_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output file for the Cytoscape document (default: stdout)",
)
@click.option(
    "--group-by",
    "-g",
    type=click.Choice([mode.value for mode in GroupBy]),
    default=GroupBy.NONE.value,
    show_default=True,
    help="Compound node grouping",
)
@click.option(
    "--graph-type",
    "-t",
    type=click.Choice([graph_type.value for graph_type in GraphType]),
    default=GraphType.VERSIONED_APP.value,
    show_default=True,
    help="Graph type the traffic graph was built for",
)
@click.option("--query-time", help="Query time in epoch seconds (default: now)")
@click.option("--duration", "-d", default="10m", show_default=True, help="Query duration")
@click.option("--indent", type=int, default=2, show_default=True, help="JSON indentation")
@click.option("--compact", is_flag=True, help="Write compact JSON (overrides --indent)")
@click.pass_context
def convert(ctx, graph_file, output, group_by, graph_type, query_time, duration, indent, compact):
    """Convert a traffic graph file into a Cytoscape elements document.

    Examples:
        servicegraph convert traffic.json
        servicegraph convert traffic.json -g version -o graph.json
        servicegraph convert traffic.json -t workload -g app --duration 1h
    """
    out = get_output_manager_from_context(ctx)

    try:
        options = GraphOptions.from_mapping(
            {
                "graphType": graph_type,
                "groupBy": group_by,
                "queryTime": query_time,
                "duration": duration,
            }
        )

        graph = load_traffic_graph(graph_file)
        out.debug(f"Loaded {len(graph)} nodes and {graph.edge_count} edges from {graph_file}")

        config = new_config(graph, options)
        json_indent = None if compact else indent

        if output:
            write_config(config, output, indent=json_indent)
            out.success(
                f"Cytoscape document written: {output} "
                f"({len(config.elements.nodes)} nodes, {len(config.elements.edges)} edges)"
            )
            logger.info(f"Converted {graph_file} to {output}")
        else:
            out.print_raw(config.to_json(indent=json_indent))

    except ServiceGraphError as e:
        logger.error(f"Conversion failed: {e}")
        out.error(f"Error: {e}")
        sys.exit(1)
    except Exception as e:
        error = wrap_external_error(
            e, create_error_context(command="convert", graph_file=str(graph_file))
        )
        logger.error(f"Conversion failed: {error}")
        out.error(f"Error: {error}")
        sys.exit(1)
