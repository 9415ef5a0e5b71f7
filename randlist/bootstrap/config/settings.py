from typing import Annotated, Literal

from pydantic import BaseModel, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from randlist.bootstrap.config.loader import get_configfile
from randlist.core.models.config import CodecConfig


class CodecSettings(BaseModel):
    max_node_count: Annotated[
        int | None,
        Field(
            description=(
                "Largest node count accepted when decoding a stream.\n"
                "Streams declaring more nodes are rejected before any node is\n"
                "allocated. Leave unset to accept any count, only for trusted\n"
                "input: nodes are allocated as soon as the count is read."
            ),
            default=None,
            ge=0
        )
    ]

    max_payload_size: Annotated[
        int | None,
        Field(
            description=(
                "Largest payload, in UTF-8 bytes, accepted for a single node.\n"
                "Leave unset to accept any size."
            ),
            default=None,
            ge=0
        )
    ]

    strict_random_positions: Annotated[
        bool,
        Field(
            description=(
                "Reject streams holding a random position outside the list.\n"
                "When disabled, such a position leaves the random link unset\n"
                "and a warning is logged."
            ),
            default=False
        )
    ]

    def to_config(self) -> CodecConfig:
        return CodecConfig(
            max_node_count=self.max_node_count,
            max_payload_size=self.max_payload_size,
            strict_random_positions=self.strict_random_positions
        )


class LoggingSettings(BaseModel):
    level: Annotated[
        Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        Field(
            description="Logging verbosity, overridden by --log-level.",
            default="INFO"
        )
    ]


class OutputSettings(BaseModel):
    format: Annotated[
        Literal["yaml", "json"],
        Field(
            description="Format used to print decoded lists.",
            default="yaml"
        )
    ]


class RandListConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="RANDLIST_",
        env_nested_delimiter="__",
        extra="ignore"
    )

    codec: Annotated[
        CodecSettings,
        Field(
            description=(
                "Decoding limits and policies.\n"
                "Encoding is not configurable: the binary layout is fixed."
            ),
            default_factory=CodecSettings
        )
    ]

    logging: Annotated[
        LoggingSettings,
        Field(
            description="Logging configuration.",
            default_factory=LoggingSettings
        )
    ]

    output: Annotated[
        OutputSettings,
        Field(
            description="Rendering of lists printed by the command line.",
            default_factory=OutputSettings
        )
    ]

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
            YamlConfigSettingsSource(settings_cls, yaml_file=get_configfile()),
        )
