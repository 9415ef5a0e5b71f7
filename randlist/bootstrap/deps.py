import json
from functools import lru_cache

from pydantic import ValidationError

from randlist.bootstrap.config.settings import RandListConfig
from randlist.core.models.config import CodecConfig
from randlist.core.ports.render import Renderer
from randlist.core.serializer import StreamListSerializer
from randlist.infra.format_renderer import JsonRenderer, YamlRenderer


@lru_cache
def get_config() -> RandListConfig:
    try:
        return RandListConfig()
    except ValidationError as ex:
        msg = ["Configuration validation failed:"]
        errs = json.loads(ex.json())
        for err in errs:
            msg.append(f"  {'.'.join(str(part) for part in err['loc'])}: {err['msg']}")
        raise SystemExit("\n".join(msg))


@lru_cache
def get_codec_config() -> CodecConfig:
    return get_config().codec.to_config()


@lru_cache
def get_serializer() -> StreamListSerializer:
    return StreamListSerializer(get_codec_config())


@lru_cache
def get_renderer() -> Renderer:
    if get_config().output.format == "json":
        return JsonRenderer()
    return YamlRenderer()
