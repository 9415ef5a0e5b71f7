import json
from typing import Any

import yaml

from randlist.core.ports.render import Renderer


class JsonRenderer(Renderer):
    def render(self, data: Any) -> str:
        return json.dumps(data, indent=2, ensure_ascii=False, sort_keys=False)


class YamlRenderer(Renderer):
    def render(self, data: Any) -> str:
        return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
