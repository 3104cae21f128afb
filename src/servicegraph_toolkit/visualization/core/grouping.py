"""
Compound (group) node generation.

Group nodes box sibling nodes that share a namespace and app. They are added
after the regular nodes are built, and members are pointed at them through
their ``parent`` field.
"""

import logging
from collections import defaultdict

from ...shared.hashing import node_hash
from ...shared.models import GraphType, GroupBy, NodeType
from .elements import NodeData

logger = logging.getLogger(__name__)

UNKNOWN_APP = "unknown"


def group_key(namespace: str, app: str) -> str:
    return f"{namespace}/{app}"


def group_id(key: str) -> str:
    """Hashed id of the compound node for ``key``, kept apart from logical node ids."""
    return node_hash(f"box_{key}")


def add_group_nodes(nodes: list[NodeData], group_by: GroupBy, graph_type: str) -> int:
    """Apply the requested grouping mode to ``nodes`` in place.

    Args:
        nodes: Node records, mutated in place
        group_by: Grouping mode
        graph_type: Graph type of the request

    Returns:
        Number of group nodes added
    """
    if group_by == GroupBy.APP:
        return group_by_app(nodes)
    if group_by == GroupBy.VERSION:
        if graph_type == GraphType.VERSIONED_APP:
            return group_by_version(nodes)
        logger.debug(f"Version grouping skipped for graph type '{graph_type}'")
    return 0


def group_by_version(nodes: list[NodeData]) -> int:
    """Group the versions of each app into one compound node."""
    app_box: dict[str, list[int]] = defaultdict(list)

    for index, nd in enumerate(nodes):
        if nd.node_type == NodeType.APP:
            app_box[group_key(nd.namespace, nd.app)].append(index)

    return generate_group_compound_nodes(app_box, nodes, GroupBy.VERSION)


def group_by_app(nodes: list[NodeData]) -> int:
    """Group all nodes of each app into one compound node."""
    app_box: dict[str, list[int]] = defaultdict(list)

    for index, nd in enumerate(nodes):
        if nd.app and nd.app != UNKNOWN_APP:
            app_box[group_key(nd.namespace, nd.app)].append(index)

    return generate_group_compound_nodes(app_box, nodes, GroupBy.APP)


def generate_group_compound_nodes(
    app_box: dict[str, list[int]], nodes: list[NodeData], group_by: GroupBy
) -> int:
    """Create a compound node for every key with more than one member.

    Args:
        app_box: Group key to indices of member nodes
        nodes: Node records; members get ``parent`` set, groups are appended
        group_by: Grouping mode recorded in the group's ``isGroup`` field

    Returns:
        Number of group nodes added
    """
    added = 0
    for key, members in app_box.items():
        if len(members) < 2:
            continue

        first = nodes[members[0]]
        group = NodeData(
            id=group_id(key),
            node_type=NodeType.APP.value,
            namespace=first.namespace,
            app=first.app,
            is_group=group_by.value,
        )

        for index in members:
            member = nodes[index]
            member.parent = group.id

            group.has_missing_sc = group.has_missing_sc or member.has_missing_sc
            group.is_inaccessible = group.is_inaccessible or member.is_inaccessible
            group.is_outside = group.is_outside or member.is_outside

        nodes.append(group)
        added += 1

    return added
