"""Pair nodes between a "from" frame and a "to" frame.

Matching is layered:

1. Same display name, paired positionally by ascending z-index
2. Same identity, among nodes not matched by name
3. Leftover from-nodes exit, leftover to-nodes enter

The result is sorted by the z-index of each pairing's defining node (the
to-node when present), which fixes paint order and stagger order.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional

from framemotion.scene.nodes import Node


class MatchKind(str, Enum):
    """How a pairing was established."""

    NAME = "name"
    ID = "id"
    ENTER = "enter"
    EXIT = "exit"


@dataclass(frozen=True)
class Pairing:
    """A node's classification across two frames."""

    match: MatchKind
    from_node: Optional[Node] = None
    to_node: Optional[Node] = None

    @property
    def node(self) -> Node:
        """Defining node: the to-node if present, else the from-node."""
        return self.to_node if self.to_node is not None else self.from_node

    @property
    def is_matched(self) -> bool:
        return self.from_node is not None and self.to_node is not None

    @property
    def is_stale_duplicate(self) -> bool:
        """Name match whose two sides are different node identities."""
        return (
            self.match is MatchKind.NAME
            and self.is_matched
            and self.from_node.id != self.to_node.id
        )


def index_nodes(nodes: Iterable[Node]) -> Dict[str, Node]:
    """Index nodes by identity; a repeated identity keeps the later node."""
    return {node.id: node for node in nodes}


def _group_by_name(nodes: Iterable[Node]) -> Dict[str, List[Node]]:
    groups: Dict[str, List[Node]] = {}
    for node in nodes:
        groups.setdefault(node.name, []).append(node)
    return groups


def match_nodes(from_nodes: Iterable[Node], to_nodes: Iterable[Node]) -> List[Pairing]:
    """Pair from-frame nodes with to-frame nodes.

    Args:
        from_nodes: Node list of the source frame
        to_nodes: Node list of the destination frame

    Returns:
        Pairings sorted (stably) by the defining node's z-index
    """
    from_map = index_nodes(from_nodes)
    to_map = index_nodes(to_nodes)
    to_by_name = _group_by_name(to_map.values())

    used_from: set[str] = set()
    used_to: set[str] = set()
    pairs: List[Pairing] = []

    for name, from_group in _group_by_name(from_map.values()).items():
        to_group = to_by_name.get(name)
        if not to_group:
            continue
        ordered_from = sorted(from_group, key=lambda n: n.z_index)
        ordered_to = sorted(to_group, key=lambda n: n.z_index)
        for from_node, to_node in zip(ordered_from, ordered_to):
            used_from.add(from_node.id)
            used_to.add(to_node.id)
            pairs.append(Pairing(MatchKind.NAME, from_node, to_node))

    for node_id, from_node in from_map.items():
        if node_id in used_from or node_id in used_to:
            continue
        to_node = to_map.get(node_id)
        if to_node is None:
            continue
        used_from.add(node_id)
        used_to.add(node_id)
        pairs.append(Pairing(MatchKind.ID, from_node, to_node))

    for node_id, from_node in from_map.items():
        if node_id not in used_from:
            pairs.append(Pairing(MatchKind.EXIT, from_node=from_node))

    for node_id, to_node in to_map.items():
        if node_id not in used_to:
            pairs.append(Pairing(MatchKind.ENTER, to_node=to_node))

    pairs.sort(key=lambda pairing: pairing.node.z_index)
    return pairs
