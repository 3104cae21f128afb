"""
Traffic Graph Summary Generator

Generates high-level summaries of a traffic graph: node type and namespace
counts, root nodes, connectivity, and total request rates.
"""

import json
import sys
from collections import Counter
from pathlib import Path
from typing import Any

import click
import networkx as nx
from rich.table import Table

from ...graph.traffic import TrafficGraph, load_traffic_graph
from ...shared.exceptions import (
    RenderError,
    ServiceGraphError,
    create_error_context,
    wrap_external_error,
)
from ...shared.logging import get_logger
from ..utils import get_output_manager_from_context

logger = get_logger(__name__)


class TrafficGraphSummary:
    """Generates summaries of traffic graph structure and telemetry."""

    def __init__(self, graph: TrafficGraph):
        """Initialize with a traffic graph.

        Args:
            graph: Traffic graph to summarize
        """
        self.graph = graph
        self.nx_graph = graph.to_networkx()

    def generate_summary(self) -> dict[str, Any]:
        """Generate the summary as a JSON-friendly dictionary."""
        node_types = Counter(node.node_type for node in self.graph.values())
        namespaces = Counter(node.namespace for node in self.graph.values())
        protocols = Counter(
            edge.protocol or "unknown" for node in self.graph.values() for edge in node.edges
        )

        http_total = 0.0
        tcp_total = 0.0
        for node in self.graph.values():
            for edge in node.edges:
                http_total += edge.metadata.get_number("http") or 0.0
                tcp_total += edge.metadata.get_number("tcp") or 0.0

        root_nodes = sorted(
            node_id for node_id, degree in self.nx_graph.in_degree() if degree == 0
        )

        return {
            "overview": {
                "total_nodes": self.nx_graph.number_of_nodes(),
                "total_edges": self.nx_graph.number_of_edges(),
                "connected_components": nx.number_weakly_connected_components(self.nx_graph),
                "http_rate": round(http_total, 2),
                "tcp_rate": round(tcp_total, 2),
            },
            "node_types": dict(sorted(node_types.items())),
            "namespaces": dict(sorted(namespaces.items())),
            "protocols": dict(sorted(protocols.items())),
            "root_nodes": root_nodes,
        }

    def build_tables(self, summary: dict[str, Any]) -> list[Table]:
        """Render the summary as rich tables."""
        overview = Table(title="Traffic Graph Overview")
        overview.add_column("Metric")
        overview.add_column("Value", justify="right")
        for key, value in summary["overview"].items():
            overview.add_row(key.replace("_", " ").title(), f"{value:,}")

        tables = [overview]
        for section in ("node_types", "namespaces", "protocols"):
            counts = summary[section]
            if not counts:
                continue
            table = Table(title=section.replace("_", " ").title())
            table.add_column("Name")
            table.add_column("Count", justify="right")
            table.add_column("%", justify="right")
            total = sum(counts.values())
            for name, count in counts.items():
                table.add_row(name or "(none)", str(count), f"{count / total * 100:.1f}")
            tables.append(table)

        return tables


@click.command()
@click.argument("graph_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--json-output",
    "-j",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Save summary as JSON file",
)
@click.pass_context
def summary(ctx, graph_file: Path, json_output: Path | None) -> None:
    """Summarize the structure and traffic of a traffic graph file.

    Examples:
        servicegraph summary traffic.json
        servicegraph summary traffic.json --json-output summary.json
    """
    out = get_output_manager_from_context(ctx)

    try:
        graph = load_traffic_graph(graph_file)
        graph.validate()

        generator = TrafficGraphSummary(graph)
        summary_data = generator.generate_summary()

        for table in generator.build_tables(summary_data):
            out.console.print(table)

        roots = summary_data["root_nodes"]
        if roots:
            out.info(f"Root nodes: {', '.join(roots)}")

        if json_output:
            try:
                with open(json_output, "w") as f:
                    json.dump(summary_data, f, indent=2)
            except OSError as e:
                raise RenderError(f"Failed to write summary to {json_output}: {e}") from e
            out.success(f"Summary saved to {json_output}")

    except ServiceGraphError as e:
        logger.error(f"Traffic graph summary failed: {e}")
        out.error(f"Error: {e}")
        sys.exit(1)
    except Exception as e:
        error = wrap_external_error(
            e, create_error_context(command="summary", graph_file=str(graph_file))
        )
        logger.error(f"Traffic graph summary failed: {error}")
        out.error(f"Error: {error}")
        sys.exit(1)
