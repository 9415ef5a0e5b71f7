from dataclasses import dataclass, field
from typing import Iterator


@dataclass(eq=False)
class ListNode:
    """
    A node of a doubly-linked list carrying an extra arbitrary link.

    `next` and `previous` form the chain. `random` may point to any node
    of the same list, to the node itself, or to nothing. Nodes compare and
    hash by identity, so they can key identity-based lookups.
    """
    data: str | None = None
    """
    Opaque text payload. None (absent) is distinct from "" (empty).
    """

    next: "ListNode | None" = field(default=None, repr=False)
    previous: "ListNode | None" = field(default=None, repr=False)
    random: "ListNode | None" = field(default=None, repr=False)


def walk(head: ListNode | None) -> Iterator[ListNode]:
    """Yield every node of the chain starting at `head`, head to tail."""
    current = head
    while current is not None:
        yield current
        current = current.next
