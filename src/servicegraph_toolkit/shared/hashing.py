"""
Stable identity hashing for presentation ids.

Node and edge ids in the output document are MD5 hex digests of their logical
identity, so the same graph always renders with the same element ids.
"""

import hashlib


def node_hash(node_id: str) -> str:
    """Compute the presentation id for a logical node id.

    Args:
        node_id: Logical node identifier

    Returns:
        32 character lowercase hex digest
    """
    return hashlib.md5(node_id.encode(), usedforsecurity=False).hexdigest()


def edge_hash(source_hash: str, dest_hash: str, protocol: str = "") -> str:
    """Compute the presentation id for an edge.

    Args:
        source_hash: Hashed id of the source node
        dest_hash: Hashed id of the destination node
        protocol: Edge protocol label, empty when unknown

    Returns:
        32 character lowercase hex digest
    """
    key = f"{source_hash}.{dest_hash}.{protocol}"
    return hashlib.md5(key.encode(), usedforsecurity=False).hexdigest()
