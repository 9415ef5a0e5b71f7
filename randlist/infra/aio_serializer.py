import asyncio
import logging

from randlist.core.clone import deep_copy
from randlist.core.codec.frames import ListDecoder, encode_list
from randlist.core.codec.wire import FormatError
from randlist.core.models.config import CodecConfig
from randlist.core.models.node import ListNode


class AsyncStreamListSerializer:
    """
    asyncio flavour of the list serializer, bound to StreamReader and
    StreamWriter objects.

    Only the I/O suspends. Encoding, decoding and copying are the same
    synchronous walks used by the blocking serializer; the coroutines
    merely hand bytes to and from the streams.

    `serialize` awaits `drain()` after every chunk so that a slow peer
    applies backpressure instead of growing the write buffer without
    bound. `deserialize` uses `readexactly()`; a stream that ends early
    raises FormatError, any other transport error propagates unchanged.
    """

    def __init__(self, config: CodecConfig | None = None) -> None:
        self._config = config or CodecConfig()
        self._logger = logging.getLogger("infra.aio_serializer")

    async def serialize(self, head: ListNode | None, writer: asyncio.StreamWriter) -> None:
        written = 0
        for chunk in encode_list(head):
            writer.write(chunk)
            await writer.drain()
            written += len(chunk)

        self._logger.debug(f"Serialized list into {written} bytes")

    async def deserialize(self, reader: asyncio.StreamReader) -> ListNode | None:
        decoder = ListDecoder(self._config)

        while not decoder.done:
            try:
                chunk = await reader.readexactly(decoder.needed)
            except asyncio.IncompleteReadError as exc:
                decoder.feed(exc.partial)
                break
            decoder.feed(chunk)

        try:
            return decoder.result()
        except FormatError as exc:
            self._logger.warning(f"Invalid list stream: {exc}")
            raise

    async def deep_copy(self, head: ListNode | None) -> ListNode | None:
        return deep_copy(head)
