from dataclasses import dataclass


@dataclass(frozen=True)
class CodecConfig:
    """
    Runtime limits and policies applied while decoding a list.

    The defaults accept every well-formed encoding. Nodes are allocated as
    soon as the count is read, so without `max_node_count` a four-byte
    header such as ff ff ff 7f makes the decoder allocate about 2**31
    nodes before any truncation can be noticed. Set the limits whenever
    the stream is untrusted.
    """
    max_node_count: int | None = None
    """
    Largest node count accepted from a stream. None disables the check.
    """

    max_payload_size: int | None = None
    """
    Largest payload, in encoded bytes, accepted for a single node.
    None disables the check.
    """

    strict_random_positions: bool = False
    """
    When False, a random position outside [0, count) leaves the random
    link absent. When True, such a position is rejected as a FormatError.
    """
