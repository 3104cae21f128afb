"""
Pytest configuration and shared fixtures for service graph toolkit tests.
"""

import json
import logging
import tempfile
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest

from servicegraph_toolkit.graph.traffic import GraphNode, TrafficGraph
from servicegraph_toolkit.shared.logging import LOGGER_NAME
from servicegraph_toolkit.shared.models import GraphOptions, GraphType, GroupBy, NodeType


@pytest.fixture(autouse=True)
def reset_toolkit_logger() -> Generator[None]:
    """Drop handlers installed by setup_logging during a test."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def temp_dir() -> Generator[Path]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def bookinfo_graph_data() -> dict[str, Any]:
    """Return a versioned-app traffic graph in the JSON file format."""
    return {
        "nodes": [
            {
                "id": "ingress",
                "nodeType": "app",
                "namespace": "istio-system",
                "app": "istio-ingressgateway",
                "metadata": {"httpOut": 20.0, "isRoot": True, "isOutside": True},
            },
            {
                "id": "productpage_v1",
                "nodeType": "app",
                "namespace": "bookinfo",
                "app": "productpage",
                "version": "v1",
                "metadata": {"httpIn": 20.0, "httpOut": 20.0, "hasVS": True},
            },
            {
                "id": "reviews_v1",
                "nodeType": "app",
                "namespace": "bookinfo",
                "app": "reviews",
                "version": "v1",
                "metadata": {"httpIn": 15.0, "httpIn5xx": 1.5, "hasMissingSC": True},
            },
            {
                "id": "reviews_v2",
                "nodeType": "app",
                "namespace": "bookinfo",
                "app": "reviews",
                "version": "v2",
                "metadata": {"httpIn": 5.0, "httpOut": 5.0},
            },
            {
                "id": "ratings_v1",
                "nodeType": "app",
                "namespace": "bookinfo",
                "app": "ratings",
                "version": "v1",
                "metadata": {"httpIn": 5.0, "hasCB": True},
            },
            {
                "id": "details_v1",
                "nodeType": "app",
                "namespace": "bookinfo",
                "app": "details",
                "version": "v1",
                "metadata": {"isUnused": True},
            },
            {
                "id": "mysql",
                "nodeType": "service",
                "namespace": "bookinfo",
                "service": "mysqldb",
                "metadata": {"tcpIn": 350.0, "isServiceEntry": "MESH_EXTERNAL"},
            },
        ],
        "edges": [
            {
                "source": "ingress",
                "target": "productpage_v1",
                "metadata": {"protocol": "http", "http": 20.0, "responseTime": 31.4},
            },
            {
                "source": "productpage_v1",
                "target": "reviews_v1",
                "metadata": {"protocol": "http", "http": 15.0, "http5xx": 1.5, "isMTLS": True},
            },
            {
                "source": "productpage_v1",
                "target": "reviews_v2",
                "metadata": {"protocol": "http", "http": 5.0},
            },
            {
                "source": "productpage_v1",
                "target": "details_v1",
                "metadata": {"protocol": "http"},
            },
            {
                "source": "reviews_v2",
                "target": "ratings_v1",
                "metadata": {"protocol": "http", "http": 5.0},
            },
            {
                "source": "reviews_v2",
                "target": "mysql",
                "metadata": {"protocol": "tcp", "tcp": 350.0},
            },
        ],
    }


@pytest.fixture
def bookinfo_graph(bookinfo_graph_data: dict[str, Any]) -> TrafficGraph:
    """Return the bookinfo traffic graph."""
    return TrafficGraph.from_dict(bookinfo_graph_data)


@pytest.fixture
def bookinfo_graph_file(temp_dir: Path, bookinfo_graph_data: dict[str, Any]) -> Path:
    """Write the bookinfo traffic graph to a file and return its path."""
    graph_path = temp_dir / "traffic.json"
    with open(graph_path, "w") as f:
        json.dump(bookinfo_graph_data, f)
    return graph_path


@pytest.fixture
def versioned_app_pair() -> TrafficGraph:
    """Return two versions of the same app in one namespace."""
    return TrafficGraph(
        [
            GraphNode(
                id="svcA_v1", node_type=NodeType.APP, namespace="ns1", app="svcA", version="v1"
            ),
            GraphNode(
                id="svcA_v2", node_type=NodeType.APP, namespace="ns1", app="svcA", version="v2"
            ),
        ]
    )


@pytest.fixture
def fixed_options() -> GraphOptions:
    """Return options with fixed run metadata."""
    return GraphOptions(
        graph_type=GraphType.VERSIONED_APP.value,
        group_by=GroupBy.NONE,
        query_time=1523364075,
        duration=600,
    )
