from typing import Any, Iterable

from randlist.core.codec.frames import link_nodes, resolve_random
from randlist.core.codec.wire import NULL_MARKER
from randlist.core.equivalence import random_positions
from randlist.core.models.node import ListNode, walk


def build_list(records: Iterable[tuple[str | None, int | None]]) -> ListNode | None:
    """
    Build a list from (data, random_position) records.

    Example: [("a", 2), ("b", None), ("c", 2)]
        a.random -> c, b.random absent, c.random -> c
    """
    records = list(records)
    nodes = [ListNode(data=data) for data, _ in records]

    targets = []
    for position, (_, target) in enumerate(records):
        if target is None:
            targets.append(NULL_MARKER)
        elif 0 <= target < len(nodes):
            targets.append(target)
        else:
            raise ValueError(
                f"Record {position} has random position {target} "
                f"outside [0, {len(nodes)})"
            )

    head = link_nodes(nodes)
    resolve_random(nodes, targets, strict=True)
    return head


def to_records(head: ListNode | None) -> list[tuple[str | None, int | None]]:
    """Inverse of `build_list`."""
    return [
        (node.data, None if target == NULL_MARKER else target)
        for node, target in zip(walk(head), random_positions(head))
    ]


def records_from_dicts(items: Iterable[dict[str, Any]]) -> list[tuple[str | None, int | None]]:
    """
    Read records from mappings shaped like {"data": ..., "random": ...},
    as loaded from a YAML or JSON document. Missing keys mean absent.
    """
    records = []
    for position, item in enumerate(items):
        if not isinstance(item, dict):
            raise ValueError(f"Record {position} must be a mapping, got {type(item).__name__}")

        data = item.get("data")
        target = item.get("random")
        if data is not None and not isinstance(data, str):
            raise ValueError(f"Record {position}: 'data' must be a string or null")
        if target is not None and (isinstance(target, bool) or not isinstance(target, int)):
            raise ValueError(f"Record {position}: 'random' must be an integer or null")

        records.append((data, target))

    return records
