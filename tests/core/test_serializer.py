import io

import pytest

from randlist.core.codec.wire import FormatError, pack_int32
from randlist.core.equivalence import are_disjoint, are_equivalent
from randlist.core.models.config import CodecConfig
from randlist.core.models.node import walk
from randlist.core.serializer import StreamListSerializer, dumps, loads
from tests.fake.fake_stream import FakeSink, FakeSource
from tests.helpers import chain, snapshot


def roundtrip(serializer, head):
    buffer = io.BytesIO()
    serializer.serialize(head, buffer)
    buffer.seek(0)
    return serializer.deserialize(buffer)


@pytest.mark.ut
def test_basic(serializer, sample_list, cloner):
    restored = roundtrip(serializer, sample_list)
    assert are_equivalent(sample_list, restored)

    copied = cloner(sample_list)
    assert are_equivalent(sample_list, copied)

    copied.data = "Mutated Head Data"
    assert sample_list.data != copied.data


@pytest.mark.ut
def test_empty_list(serializer, cloner):
    sink = FakeSink()
    serializer.serialize(None, sink)
    assert sink.buffer == b"\x00\x00\x00\x00"

    source = FakeSource(sink.buffer + b"after")
    assert serializer.deserialize(source) is None
    assert source.requests == [4]
    assert source.remaining == b"after"

    assert cloner(None) is None


@pytest.mark.ut
def test_single_node(serializer, cloner):
    (node,) = chain("Single")

    restored = roundtrip(serializer, node)
    assert restored.data == "Single"
    assert restored.next is None
    assert restored.previous is None
    assert restored.random is None

    copied = cloner(node)
    assert copied is not node
    assert copied.data == "Single"


@pytest.mark.ut
def test_single_node_self_random(serializer, cloner):
    (node,) = chain("SelfRandom")
    node.random = node

    restored = roundtrip(serializer, node)
    assert restored.data == "SelfRandom"
    assert restored.random is restored

    copied = cloner(node)
    assert copied.random is copied
    assert copied is not node


@pytest.mark.ut
def test_random_various_positions(serializer, mixed_random_list, cloner):
    restored = roundtrip(serializer, mixed_random_list)
    assert are_equivalent(mixed_random_list, restored)

    copied = cloner(mixed_random_list)
    assert are_equivalent(mixed_random_list, copied)
    assert are_disjoint(mixed_random_list, copied)


@pytest.mark.ut
def test_all_random_null(serializer, cloner):
    head = chain("A1", "A2", "A3", "A4")[0]

    assert are_equivalent(head, roundtrip(serializer, head))
    assert are_equivalent(head, cloner(head))


@pytest.mark.ut
def test_empty_null_and_unicode_payloads(serializer, cloner):
    node1, node2, node3 = chain("", None, "Some Unicode ☺")
    node1.random = node3
    node3.random = node2

    restored = roundtrip(serializer, node1)
    assert are_equivalent(node1, restored)
    assert [n.data for n in walk(restored)] == ["", None, "Some Unicode ☺"]

    assert are_equivalent(node1, cloner(node1))


@pytest.mark.ut
def test_repeated_cycles_are_stable(serializer, sample_list):
    first = roundtrip(serializer, sample_list)
    second = roundtrip(serializer, first)

    assert are_equivalent(sample_list, first)
    assert are_equivalent(first, second)
    assert dumps(first) == dumps(second)


@pytest.mark.ut
def test_serialize_leaves_the_list_untouched(serializer, mixed_random_list):
    before = snapshot(mixed_random_list)
    serializer.serialize(mixed_random_list, FakeSink())
    assert snapshot(mixed_random_list) == before


@pytest.mark.ut
def test_sink_failure_propagates_without_rollback(serializer, sample_list):
    sink = FakeSink(fail_after=2)

    with pytest.raises(OSError):
        serializer.serialize(sample_list, sink)

    assert len(sink.writes) == 2
    assert sink.writes[0] == pack_int32(3)


@pytest.mark.ut
def test_source_failure_propagates(serializer, sample_list):
    source = FakeSource(dumps(sample_list), fail_at=10)

    with pytest.raises(OSError):
        serializer.deserialize(source)


@pytest.mark.ut
def test_deserialize_reads_exactly_one_list(serializer, sample_list):
    data = dumps(sample_list)
    source = FakeSource(data + dumps(None))

    assert are_equivalent(sample_list, serializer.deserialize(source))
    assert sum(source.requests) == len(data)
    assert serializer.deserialize(source) is None


@pytest.mark.ut
def test_truncated_source_is_a_format_error(serializer, sample_list):
    data = dumps(sample_list)

    with pytest.raises(FormatError):
        serializer.deserialize(FakeSource(data[:-1]))

    with pytest.raises(FormatError):
        serializer.deserialize(FakeSource(b""))


@pytest.mark.ut
def test_config_is_applied():
    serializer = StreamListSerializer(CodecConfig(max_node_count=2))
    head = chain("a", "b", "c")[0]

    with pytest.raises(FormatError):
        serializer.deserialize(io.BytesIO(dumps(head)))


@pytest.mark.ut
def test_deep_copy_delegates_to_weaving_cloner(serializer, mixed_random_list):
    before = snapshot(mixed_random_list)
    copied = serializer.deep_copy(mixed_random_list)

    assert are_equivalent(mixed_random_list, copied)
    assert are_disjoint(mixed_random_list, copied)
    assert snapshot(mixed_random_list) == before


@pytest.mark.ut
def test_loads_rejects_trailing_bytes(sample_list):
    with pytest.raises(FormatError, match="trailing"):
        loads(dumps(sample_list) + b"\x00")

    assert are_equivalent(sample_list, loads(dumps(sample_list)))


@pytest.mark.ut
@pytest.mark.parametrize("max_chunk", [1, 3, 5])
def test_short_reads_are_not_end_of_stream(serializer, mixed_random_list, max_chunk):
    data = dumps(mixed_random_list)
    source = FakeSource(data + b"next", max_chunk=max_chunk)

    restored = serializer.deserialize(source)

    assert are_equivalent(mixed_random_list, restored)
    assert source.remaining == b"next"


@pytest.mark.ut
def test_short_reads_then_end_of_stream_is_a_format_error(serializer, sample_list):
    source = FakeSource(dumps(sample_list)[:-1], max_chunk=2)

    with pytest.raises(FormatError):
        serializer.deserialize(source)
