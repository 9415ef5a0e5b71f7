import os
from typing import Generator

import pytest
import yaml

from randlist.bootstrap.config import loader
from randlist.bootstrap import deps
from randlist.bootstrap.config.settings import RandListConfig
from randlist.core.clone import deep_copy, mapped_copy
from randlist.core.models.node import ListNode
from randlist.core.serializer import StreamListSerializer
from tests.helpers import FakeRandListConfig, chain


@pytest.fixture
def serializer():
    return StreamListSerializer()


@pytest.fixture(params=[deep_copy, mapped_copy], ids=["weave", "mapped"])
def cloner(request):
    return request.param


@pytest.fixture
def sample_list() -> ListNode:
    node1, node2, node3 = chain("Node 1", "Node 2", "Node 3")
    node1.random = node3
    node2.random = node1
    node3.random = None
    return node1


@pytest.fixture
def mixed_random_list() -> ListNode:
    node1, node2, node3, node4 = chain("N1", "N2", "N3", "N4")
    node1.random = node1
    node2.random = node4
    node3.random = None
    node4.random = node1
    return node1


@pytest.fixture
def config_file(tmp_path):
    file = tmp_path / "randlist.yaml"

    data = {
        "codec": {
            "max_node_count": 16,
            "max_payload_size": 64,
            "strict_random_positions": True,
        },
        "logging": {
            "level": "DEBUG",
        },
        "output": {
            "format": "json",
        },
    }

    file.write_text(yaml.dump(data))
    return file


@pytest.fixture
def randlist_config(config_file) -> Generator[RandListConfig, None, None]:
    backup = os.environ.copy()

    try:
        os.environ["TEST_RANDLISTCONFIG"] = str(config_file)
        yield FakeRandListConfig()
    finally:
        os.environ.clear()
        os.environ.update(backup)


@pytest.fixture
def clear_caches():
    caches = (
        loader.get_cli_args,
        loader.get_configfile,
        deps.get_config,
        deps.get_codec_config,
        deps.get_serializer,
        deps.get_renderer,
    )
    for cached in caches:
        cached.cache_clear()
    yield
    for cached in caches:
        cached.cache_clear()
