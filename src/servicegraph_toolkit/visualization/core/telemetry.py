"""
Telemetry decoration for Cytoscape elements.

Copies rates and classification flags already present in traffic graph metadata
onto node and edge records. Rates are written only when greater than zero;
flags and labels only when present. Nothing here computes new metrics beyond
the per-edge percentages.
"""

from ...graph.metadata import Metadata
from ...graph.traffic import GraphEdge, GraphNode
from .elements import EdgeData, NodeData

# metadata key -> NodeData attribute
_NODE_FLAGS = (
    ("isDead", "is_dead"),  # node may have a deployment but no pods running
    ("isRoot", "is_root"),
    ("isUnused", "is_unused"),
    ("isInaccessible", "is_inaccessible"),
    ("hasCB", "has_cb"),
    ("hasVS", "has_vs"),
    ("hasMissingSC", "has_missing_sc"),
    ("isOutside", "is_outside"),
)
_NODE_LABELS = (
    ("isMisconfigured", "is_misconfigured"),
    ("isServiceEntry", "is_service_entry"),
)


def get_rate(metadata: Metadata, key: str) -> float:
    """Return the numeric value for ``key``, or 0.0 when absent or not numeric."""
    rate = metadata.get_number(key)
    return rate if rate is not None else 0.0


def format_rate(rate: float) -> str:
    return f"{rate:.2f}"


def format_percent(percent: float) -> str:
    return f"{percent:.1f}"


def add_node_telemetry(node: GraphNode, nd: NodeData) -> None:
    """Decorate a node record with its aggregate traffic rates."""
    md = node.metadata

    http_in = get_rate(md, "httpIn")
    if http_in > 0.0:
        nd.http_in = format_rate(http_in)

        http_in_3xx = get_rate(md, "httpIn3xx")
        http_in_4xx = get_rate(md, "httpIn4xx")
        http_in_5xx = get_rate(md, "httpIn5xx")

        if http_in_3xx > 0.0:
            nd.http_in_3xx = format_rate(http_in_3xx)
        if http_in_4xx > 0.0:
            nd.http_in_4xx = format_rate(http_in_4xx)
        if http_in_5xx > 0.0:
            nd.http_in_5xx = format_rate(http_in_5xx)

    http_out = get_rate(md, "httpOut")
    if http_out > 0.0:
        nd.http_out = format_rate(http_out)

    tcp_in = get_rate(md, "tcpIn")
    tcp_out = get_rate(md, "tcpOut")
    if tcp_in > 0.0:
        nd.tcp_in = format_rate(tcp_in)
    if tcp_out > 0.0:
        nd.tcp_out = format_rate(tcp_out)


def add_node_flags(node: GraphNode, nd: NodeData) -> None:
    """Copy classification flags and labels present in node metadata."""
    md = node.metadata

    for key, attr in _NODE_FLAGS:
        flag = md.get_flag(key)
        if flag is not None:
            setattr(nd, attr, flag)

    for key, attr in _NODE_LABELS:
        label = md.get_label(key)
        if label is not None:
            setattr(nd, attr, label)

    dest_services = md.get_labels("destServices")
    if dest_services is not None:
        nd.dest_services = dest_services


def add_edge_telemetry(edge: GraphEdge, ed: EdgeData) -> None:
    """Decorate an edge record with its rates, percentages and flags."""
    md = edge.metadata

    http = get_rate(md, "http")
    if http > 0.0:
        http_3xx = get_rate(md, "http3xx")
        http_4xx = get_rate(md, "http4xx")
        http_5xx = get_rate(md, "http5xx")
        http_percent_err = (http_4xx + http_5xx) / http * 100.0

        ed.http = format_rate(http)
        if http_3xx > 0.0:
            ed.http_3xx = format_rate(http_3xx)
        if http_4xx > 0.0:
            ed.http_4xx = format_rate(http_4xx)
        if http_5xx > 0.0:
            ed.http_5xx = format_rate(http_5xx)
        if http_percent_err > 0.0:
            ed.http_percent_err = format_percent(http_percent_err)

        response_time = md.get_number("responseTime")
        if response_time is not None:
            ed.response_time = f"{response_time:.0f}"

        # an edge carrying all of the source's requests is implicitly 100%
        source_http_out = get_rate(edge.source.metadata, "httpOut")
        if source_http_out > 0.0:
            http_percent_req = http / source_http_out * 100.0
            if http_percent_req < 100.0:
                ed.http_percent_req = format_percent(http_percent_req)
    else:
        # declared but never exercised route
        is_unused = edge.source.metadata.get_flag("isUnused")
        if is_unused is not None:
            ed.is_unused = is_unused

    is_mtls = md.get_flag("isMTLS")
    if is_mtls is not None:
        ed.is_mtls = is_mtls

    tcp = get_rate(md, "tcp")
    if tcp > 0.0:
        ed.tcp = format_rate(tcp)
