import os

from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, YamlConfigSettingsSource

from randlist.bootstrap.config.settings import RandListConfig
from randlist.core.models.node import ListNode


class FakeRandListConfig(RandListConfig, BaseSettings):
    model_config = RandListConfig.model_config

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            YamlConfigSettingsSource(settings_cls, yaml_file=os.environ["TEST_RANDLISTCONFIG"]),
        )


def chain(*payloads: str | None) -> list[ListNode]:
    """Create linked nodes by hand, without going through the builder."""
    nodes = [ListNode(data=payload) for payload in payloads]
    for left, right in zip(nodes, nodes[1:]):
        left.next = right
        right.previous = left
    return nodes


def snapshot(head: ListNode | None) -> list[tuple[int, int | None, int | None, int | None]]:
    """Identity of every link of every node, to detect any modification."""
    out = []
    current = head
    while current is not None:
        out.append((
            id(current),
            id(current.next) if current.next else None,
            id(current.previous) if current.previous else None,
            id(current.random) if current.random else None,
        ))
        current = current.next
    return out
