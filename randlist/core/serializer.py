import io
import logging

from randlist.core.clone import deep_copy
from randlist.core.codec.frames import ListDecoder, encode_list
from randlist.core.codec.wire import FormatError
from randlist.core.models.config import CodecConfig
from randlist.core.models.node import ListNode
from randlist.core.ports.stream import ByteSink, ByteSource, ListSerializer


class StreamListSerializer(ListSerializer):
    """
    Blocking serializer working on file-like byte sinks and sources.

    `serialize` writes the count first, then one chunk per node. Nothing
    is buffered beyond a single node and nothing is rolled back: if the
    sink fails halfway, the bytes already accepted stay written.

    `deserialize` asks the source for at most the number of bytes the
    decoder still needs for its current field, so it never reads past the
    end of the list and the source can hold further data afterwards.
    Short reads are retried; only an empty read ends the stream.
    """

    def __init__(self, config: CodecConfig | None = None) -> None:
        self._config = config or CodecConfig()
        self._logger = logging.getLogger("core.serializer")

    def serialize(self, head: ListNode | None, sink: ByteSink) -> None:
        written = 0
        for chunk in encode_list(head):
            sink.write(chunk)
            written += len(chunk)

        self._logger.debug(f"Serialized list into {written} bytes")

    def deserialize(self, source: ByteSource) -> ListNode | None:
        decoder = ListDecoder(self._config)

        while not decoder.done:
            chunk = source.read(decoder.needed)
            if not chunk:
                break
            decoder.feed(chunk)

        return decoder.result()

    def deep_copy(self, head: ListNode | None) -> ListNode | None:
        return deep_copy(head)


def dumps(head: ListNode | None) -> bytes:
    """Encode a list into a bytes object."""
    buffer = io.BytesIO()
    StreamListSerializer().serialize(head, buffer)
    return buffer.getvalue()


def loads(data: bytes, config: CodecConfig | None = None) -> ListNode | None:
    """
    Decode a list from a bytes object. The whole object must be one
    encoding: trailing bytes are rejected.
    """
    decoder = ListDecoder(config)
    decoder.feed(data)
    head = decoder.result()

    if decoder.unused_data:
        raise FormatError(
            f"{len(decoder.unused_data)} trailing bytes after the end of the list"
        )
    return head
