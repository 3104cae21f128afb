"""
Deterministic ordering of Cytoscape elements.

Compound nodes must precede the nodes that reference them as ``parent``, and
output must be reproducible for testing and caching, so both lists get a total
order.
"""

from functools import cmp_to_key

from .elements import EdgeData, NodeData


def _cmp(a: str, b: str) -> int:
    return (a > b) - (a < b)


def compare_nodes(a: NodeData, b: NodeData) -> int:
    """Order by namespace, group nodes first, then app/version/service/workload/id."""
    if a.namespace != b.namespace:
        return _cmp(a.namespace, b.namespace)
    if a.is_group != b.is_group:
        # descending: any grouping mode sorts before ""
        return _cmp(b.is_group, a.is_group)
    for attr in ("app", "version", "service", "workload", "id"):
        result = _cmp(getattr(a, attr), getattr(b, attr))
        if result:
            return result
    return 0


def sort_nodes(nodes: list[NodeData]) -> None:
    nodes.sort(key=cmp_to_key(compare_nodes))


def sort_edges(edges: list[EdgeData]) -> None:
    edges.sort(key=lambda ed: (ed.source, ed.target, ed.id))
