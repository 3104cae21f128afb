"""
CytoscapeJS element records.

See http://js.cytoscape.org/#notation/elements-json for the elements notation.
Field order and JSON names below are the compatibility surface with the UI;
optional fields are omitted from the JSON when empty, zero or false.
"""

import json
from dataclasses import dataclass, field
from typing import Any


@dataclass
class NodeData:
    """Cytoscape node data."""

    # Cytoscape fields
    id: str  # hashed logical node id
    parent: str = ""  # compound node parent id

    # App fields (not required by Cytoscape)
    node_type: str = ""
    namespace: str = ""
    workload: str = ""
    app: str = ""
    version: str = ""
    service: str = ""  # requested service for service nodes
    dest_services: frozenset[str] = frozenset()  # requested services for [dest] node
    http_in: str = ""  # incoming edge aggregate, requests per second, 2 digit precision
    http_in_3xx: str = ""
    http_in_4xx: str = ""
    http_in_5xx: str = ""
    http_out: str = ""  # outgoing edge aggregate, requests per second, 2 digit precision
    tcp_in: str = ""  # incoming edge aggregate, bytes per second, 2 digit precision
    tcp_out: str = ""
    has_cb: bool = False  # has circuit breaker
    has_missing_sc: bool = False  # has missing sidecar
    has_vs: bool = False  # has virtual service
    is_dead: bool = False  # has no pods
    is_group: str = ""  # grouping mode: 'app' | 'version'
    is_inaccessible: bool = False  # lives in a namespace the user cannot access
    is_misconfigured: str = ""  # misconfiguration list, e.g. 'labels'
    is_outside: bool = False  # lives outside the requested namespaces
    is_root: bool = False
    is_service_entry: str = ""  # location: 'MESH_EXTERNAL' | 'MESH_INTERNAL'
    is_unused: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Cytoscape ``data`` object with empty optional fields omitted."""
        data: dict[str, Any] = {"id": self.id}
        _put(data, "parent", self.parent)
        data["nodeType"] = self.node_type
        data["namespace"] = self.namespace
        _put(data, "workload", self.workload)
        _put(data, "app", self.app)
        _put(data, "version", self.version)
        _put(data, "service", self.service)
        if self.dest_services:
            data["destServices"] = {name: True for name in sorted(self.dest_services)}
        _put(data, "httpIn", self.http_in)
        _put(data, "httpIn3XX", self.http_in_3xx)
        _put(data, "httpIn4XX", self.http_in_4xx)
        _put(data, "httpIn5XX", self.http_in_5xx)
        _put(data, "httpOut", self.http_out)
        _put(data, "tcpIn", self.tcp_in)
        _put(data, "tcpOut", self.tcp_out)
        _put(data, "hasCB", self.has_cb)
        _put(data, "hasMissingSC", self.has_missing_sc)
        _put(data, "hasVS", self.has_vs)
        _put(data, "isDead", self.is_dead)
        _put(data, "isGroup", self.is_group)
        _put(data, "isInaccessible", self.is_inaccessible)
        _put(data, "isMisconfigured", self.is_misconfigured)
        _put(data, "isOutside", self.is_outside)
        _put(data, "isRoot", self.is_root)
        _put(data, "isServiceEntry", self.is_service_entry)
        _put(data, "isUnused", self.is_unused)
        return data


@dataclass
class EdgeData:
    """Cytoscape edge data."""

    # Cytoscape fields
    id: str  # hash of source.target.protocol
    source: str  # hashed source node id
    target: str  # hashed target node id

    # App fields (not required by Cytoscape)
    http: str = ""  # requests per second, 2 digit precision
    http_3xx: str = ""
    http_4xx: str = ""
    http_5xx: str = ""
    http_percent_err: str = ""  # percent of error responses, 1 digit precision
    http_percent_req: str = ""  # percent of total parent requests, 1 digit precision
    response_time: str = ""  # millis
    is_mtls: bool = False  # mutual TLS connection
    is_unused: bool = False
    tcp: str = ""  # bytes per second, 2 digit precision

    def to_dict(self) -> dict[str, Any]:
        """Cytoscape ``data`` object with empty optional fields omitted."""
        data: dict[str, Any] = {"id": self.id, "source": self.source, "target": self.target}
        _put(data, "http", self.http)
        _put(data, "http3XX", self.http_3xx)
        _put(data, "http4XX", self.http_4xx)
        _put(data, "http5XX", self.http_5xx)
        _put(data, "httpPercentErr", self.http_percent_err)
        _put(data, "httpPercentReq", self.http_percent_req)
        _put(data, "responseTime", self.response_time)
        _put(data, "isMTLS", self.is_mtls)
        _put(data, "isUnused", self.is_unused)
        _put(data, "tcp", self.tcp)
        return data


@dataclass
class Elements:
    nodes: list[NodeData] = field(default_factory=list)
    edges: list[EdgeData] = field(default_factory=list)


@dataclass
class CytoscapeConfig:
    """The complete document handed to the graph UI."""

    timestamp: int
    duration: int
    graph_type: str
    elements: Elements = field(default_factory=Elements)

    def to_dict(self) -> dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "duration": self.duration,
            "graphType": self.graph_type,
            "elements": {
                "nodes": [{"data": node.to_dict()} for node in self.elements.nodes],
                "edges": [{"data": edge.to_dict()} for edge in self.elements.edges],
            },
        }

    def to_json(self, indent: int | None = None) -> str:
        """Serialize the document; identical configs give identical strings."""
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)


def _put(data: dict[str, Any], key: str, value: str | bool) -> None:
    # omitempty: skip "" and False
    if value:
        data[key] = value
