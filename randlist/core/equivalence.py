from typing import Any

from randlist.core.codec.frames import index_nodes
from randlist.core.codec.wire import NULL_MARKER
from randlist.core.models.node import ListNode, walk


def random_positions(head: ListNode | None) -> list[int]:
    """
    Position of each node's random target, head to tail, -1 when absent.
    A random link leaving the list has no position and raises ValueError.
    """
    positions = index_nodes(head)
    out = []
    for position, node in enumerate(positions):
        if node.random is None:
            out.append(NULL_MARKER)
        elif node.random in positions:
            out.append(positions[node.random])
        else:
            raise ValueError(
                f"Node at position {position} has a random link outside the list"
            )
    return out


def are_equivalent(first: ListNode | None, second: ListNode | None) -> bool:
    """
    Structural equality of two lists: same length, same payload at each
    position and the same random target position at each position.
    Node identities are not compared. A list holding a random link to a
    node outside itself is never equivalent to anything.
    """
    first_nodes = list(walk(first))
    second_nodes = list(walk(second))

    if len(first_nodes) != len(second_nodes):
        return False

    for a, b in zip(first_nodes, second_nodes):
        if a.data != b.data:
            return False

    try:
        return random_positions(first) == random_positions(second)
    except ValueError:
        return False


def describe(head: ListNode | None) -> list[dict[str, Any]]:
    """Plain, renderable view of a list: one record per node."""
    return [
        {
            "position": position,
            "data": node.data,
            "random": None if target == NULL_MARKER else target,
        }
        for position, (node, target) in enumerate(zip(walk(head), random_positions(head)))
    ]


def are_disjoint(first: ListNode | None, second: ListNode | None) -> bool:
    """True when no node of `second`, nor any of its random targets, belongs to `first`."""
    seen = {id(node) for node in walk(first)}
    for node in walk(second):
        if id(node) in seen:
            return False
        if node.random is not None and id(node.random) in seen:
            return False
    return True
