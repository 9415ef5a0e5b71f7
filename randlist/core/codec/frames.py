import enum
import logging
from typing import Iterator

from randlist.core.codec.wire import (
    INT32_SIZE,
    NULL_MARKER,
    FormatError,
    decode_payload,
    encode_payload,
    pack_int32,
    unpack_int32,
)
from randlist.core.models.config import CodecConfig
from randlist.core.models.node import ListNode, walk


def index_nodes(head: ListNode | None) -> dict[ListNode, int]:
    """Map every node of the chain to its zero-based position."""
    return {node: position for position, node in enumerate(walk(head))}


def encode_list(head: ListNode | None) -> Iterator[bytes]:
    """
    Encode the list starting at `head` as a sequence of byte chunks:

        count:4
        repeat count times, head to tail:
            len(payload):4 || payload    (len = -1 => payload absent)
            random_position:4            (-1 => random absent)

    The first chunk is always the node count. Positions are computed,
    and every random target checked, before the first chunk is produced.
    """
    positions = index_nodes(head)

    for node, position in positions.items():
        if node.random is not None and node.random not in positions:
            raise ValueError(
                f"Node at position {position} has a random link outside the list"
            )

    yield pack_int32(len(positions))

    for node in positions:
        if node.random is None:
            random_position = NULL_MARKER
        else:
            random_position = positions[node.random]

        yield encode_payload(node.data) + pack_int32(random_position)


def link_nodes(nodes: list[ListNode]) -> ListNode | None:
    """Chain `nodes` in order through next/previous and return the head."""
    previous = None
    for node in nodes:
        node.previous = previous
        node.next = None
        if previous is not None:
            previous.next = node
        previous = node

    return nodes[0] if nodes else None


def resolve_random(
    nodes: list[ListNode],
    random_positions: list[int],
    strict: bool = False
) -> int:
    """
    Wire each node's random link from its recorded position.

    Returns the number of positions that were out of range and left
    unresolved. In strict mode the first such position raises instead.
    """
    count = len(nodes)
    unresolved = 0

    for position, (node, target) in enumerate(zip(nodes, random_positions)):
        if 0 <= target < count:
            node.random = nodes[target]
        elif target != NULL_MARKER:
            if strict:
                raise FormatError(
                    f"Node {position} has random position {target} "
                    f"outside [0, {count})"
                )
            unresolved += 1

    return unresolved


class _State(enum.Enum):
    COUNT = enum.auto()
    LENGTH = enum.auto()
    PAYLOAD = enum.auto()
    RANDOM = enum.auto()
    DONE = enum.auto()


class ListDecoder:
    """
    Incremental decoder for the list encoding produced by `encode_list`.

    The decoder performs no I/O. Bytes are pushed with `feed()` in chunks
    of any size; they are accumulated in an internal buffer until the
    current field is complete. `needed` reports how many more bytes the
    current field requires, so a pull-based reader can ask its source for
    exactly that amount.

    Nodes are allocated as soon as the count is known. Payloads and raw
    random positions are recorded while reading. Once the last node has
    been read the chain is linked and the random links are resolved, in
    that order, and `result()` returns the head.

    Any inconsistency raises FormatError and leaves the decoder unusable.
    Bytes received after the end of the list are kept in `unused_data`.
    """

    def __init__(self, config: CodecConfig | None = None) -> None:
        self._config = config or CodecConfig()
        self._buffer = bytearray()
        self._state = _State.COUNT
        self._count = 0
        self._index = 0
        self._payload_length = 0
        self._nodes: list[ListNode] = []
        self._random_positions: list[int] = []
        self._head: ListNode | None = None
        self._logger = logging.getLogger("core.codec.decoder")

    @property
    def done(self) -> bool:
        return self._state is _State.DONE

    @property
    def needed(self) -> int:
        """Number of bytes still missing to complete the current field."""
        if self.done:
            return 0
        return max(self._field_size() - len(self._buffer), 0)

    @property
    def unused_data(self) -> bytes:
        return bytes(self._buffer) if self.done else b""

    def feed(self, data: bytes) -> None:
        self._buffer.extend(data)

        while not self.done:
            size = self._field_size()
            if len(self._buffer) < size:
                return

            field = bytes(self._buffer[:size])
            del self._buffer[:size]
            self._consume(field)

    def result(self) -> ListNode | None:
        if not self.done:
            if self._state is _State.COUNT:
                raise FormatError("Stream ended before the node count was read")
            raise FormatError(
                f"Stream ended after {self._index} of {self._count} nodes"
            )
        return self._head

    def _field_size(self) -> int:
        if self._state is _State.PAYLOAD:
            return self._payload_length
        return INT32_SIZE

    def _consume(self, field: bytes) -> None:
        if self._state is _State.COUNT:
            self._read_count(unpack_int32(field))
        elif self._state is _State.LENGTH:
            self._read_length(unpack_int32(field))
        elif self._state is _State.PAYLOAD:
            self._nodes[self._index].data = decode_payload(field)
            self._state = _State.RANDOM
        elif self._state is _State.RANDOM:
            self._read_random(unpack_int32(field))

    def _read_count(self, count: int) -> None:
        if count < 0:
            raise FormatError(f"Invalid node count: {count}")

        limit = self._config.max_node_count
        if limit is not None and count > limit:
            raise FormatError(f"Node count {count} exceeds the limit of {limit}")

        self._count = count
        if count == 0:
            self._state = _State.DONE
            return

        self._nodes = [ListNode() for _ in range(count)]
        self._state = _State.LENGTH

    def _read_length(self, length: int) -> None:
        if length == NULL_MARKER:
            self._nodes[self._index].data = None
            self._state = _State.RANDOM
            return

        if length < 0:
            raise FormatError(
                f"Invalid payload length {length} for node {self._index}"
            )

        limit = self._config.max_payload_size
        if limit is not None and length > limit:
            raise FormatError(
                f"Payload of node {self._index} is {length} bytes, "
                f"above the limit of {limit}"
            )

        self._payload_length = length
        self._state = _State.PAYLOAD

    def _read_random(self, position: int) -> None:
        self._random_positions.append(position)
        self._index += 1

        if self._index < self._count:
            self._state = _State.LENGTH
            return

        self._head = link_nodes(self._nodes)
        unresolved = resolve_random(
            self._nodes,
            self._random_positions,
            strict=self._config.strict_random_positions
        )
        if unresolved:
            self._logger.warning(
                f"{unresolved} random position(s) out of range, left unset"
            )

        self._state = _State.DONE
        self._logger.debug(f"Decoded list of {self._count} nodes")
