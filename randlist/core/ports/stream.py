from typing import Protocol

from randlist.core.models.node import ListNode


class ByteSink(Protocol):
    """
    Sequential destination for encoded bytes, such as a binary file or
    an io.BytesIO. Errors raised by `write` propagate to the caller.
    """

    def write(self, data: bytes, /) -> int | None:
        """Accept all of `data` or raise."""


class ByteSource(Protocol):
    """
    Sequential origin of encoded bytes. `read(n)` returns at most `n`
    bytes and may return fewer before the data ends, as unbuffered pipes
    and sockets do. Only b"" means the source is exhausted.
    """

    def read(self, size: int, /) -> bytes:
        """Return up to `size` bytes from the source."""


class ListSerializer(Protocol):
    """
    The three operations offered to callers.

    Implementations must:
    - never modify the list passed to `serialize`
    - return a list owning only fresh nodes from `deserialize` and `deep_copy`
    - raise FormatError when a source does not hold a complete encoding
    """

    def serialize(self, head: ListNode | None, sink: ByteSink) -> None:
        """Write the encoding of the list starting at `head` into `sink`."""

    def deserialize(self, source: ByteSource) -> ListNode | None:
        """Read one list from `source` and return its head."""

    def deep_copy(self, head: ListNode | None) -> ListNode | None:
        """Return the head of an independent copy of the list."""
