import logging

from randlist.core.models.node import ListNode, walk

logger = logging.getLogger("core.clone")


def deep_copy(head: ListNode | None) -> ListNode | None:
    """
    Return the head of an independent copy of the list starting at `head`.

    The copy is built by weaving: each copy is spliced into the original
    chain right after its source node, so the copy of any node X is
    always X.next. That adjacency resolves random links without an
    identity map. The two chains are then split apart and the original
    is left exactly as it was.

    The original chain is temporarily modified. If anything interrupts
    the weave, the original links are restored before the error
    propagates.
    """
    if head is None:
        return None

    try:
        _weave(head)
        _wire_random(head)
    except BaseException:
        _unweave(head)
        raise

    new_head = _split(head)
    logger.debug("Deep copy completed")
    return new_head


def mapped_copy(head: ListNode | None) -> ListNode | None:
    """
    Same result as `deep_copy`, using an explicit original -> copy map.
    Never touches the original nodes, at the cost of O(n) extra memory.
    """
    copies: dict[ListNode, ListNode] = {}
    previous = None

    for node in walk(head):
        copy = ListNode(data=node.data, previous=previous)
        if previous is not None:
            previous.next = copy
        copies[node] = copy
        previous = copy

    for node, copy in copies.items():
        if node.random is not None:
            copy.random = copies[node.random]

    return copies[head] if head is not None else None


def _weave(head: ListNode) -> None:
    # original -> copy -> next original -> ...
    current = head
    while current is not None:
        copy = ListNode(data=current.data, next=current.next)
        current.next = copy
        current = copy.next


def _wire_random(head: ListNode) -> None:
    current = head
    while current is not None:
        copy = current.next
        if current.random is not None:
            copy.random = current.random.next
        current = copy.next


def _split(head: ListNode) -> ListNode:
    new_head = head.next
    current = head
    previous_copy = None

    while current is not None:
        copy = current.next
        following = copy.next

        current.next = following
        copy.previous = previous_copy
        copy.next = following.next if following is not None else None

        previous_copy = copy
        current = following

    return new_head


def _unweave(head: ListNode) -> None:
    """
    Drop every spliced copy from the chain. Copies are recognized by
    their previous link, which is always unset while weaving, whereas
    every original after the head still points back to its predecessor.
    """
    current = head
    while current is not None:
        following = current.next
        if following is not None and following.previous is not current:
            following = following.next
        current.next = following
        current = following
