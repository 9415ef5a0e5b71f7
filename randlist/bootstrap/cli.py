import argparse
import io
import logging
from pathlib import Path
from typing import Any, Callable

import yaml

from randlist.bootstrap.config.loader import get_cli_args
from randlist.bootstrap.deps import get_config, get_renderer, get_serializer
from randlist.core.builder import build_list, records_from_dicts
from randlist.core.codec.wire import FormatError
from randlist.core.equivalence import are_disjoint, are_equivalent, describe
from randlist.core.helpers.utils import setup_logging
from randlist.core.models.node import ListNode, walk

logger = logging.getLogger("bootstrap.cli")


def load_list(path: Path) -> ListNode | None:
    try:
        document = yaml.safe_load(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise SystemExit(f"List description not found: '{path}'")
    except yaml.YAMLError as ex:
        raise SystemExit(f"List description '{path}' is not valid YAML: {ex}")

    if document is None:
        return None
    if not isinstance(document, list):
        raise SystemExit(f"List description '{path}' must be a YAML sequence")

    try:
        return build_list(records_from_dicts(document))
    except ValueError as ex:
        raise SystemExit(f"Invalid list description '{path}': {ex}")


def cmd_encode(args: argparse.Namespace) -> None:
    head = load_list(args.source)

    with open(args.target, "wb") as sink:
        get_serializer().serialize(head, sink)

    count = sum(1 for _ in walk(head))
    print(f"Encoded {count} node(s) into {args.target}")


def cmd_decode(args: argparse.Namespace) -> None:
    try:
        with open(args.source, "rb") as source:
            head = get_serializer().deserialize(source)
    except FileNotFoundError:
        raise SystemExit(f"Encoded list not found: '{args.source}'")
    except FormatError as ex:
        raise SystemExit(f"'{args.source}' does not hold a valid list: {ex}")

    print(get_renderer().render(describe(head)), end="")


def cmd_copy(args: argparse.Namespace) -> None:
    head = load_list(args.source)
    copy = get_serializer().deep_copy(head)

    report: dict[str, Any] = {
        "equivalent": are_equivalent(head, copy),
        "disjoint": are_disjoint(head, copy),
        "nodes": describe(copy),
    }
    print(get_renderer().render(report), end="")


def cmd_demo(args: argparse.Namespace) -> None:
    serializer = get_serializer()
    head = build_list([("Node 1", 2), ("Node 2", 0), ("Node 3", None)])

    buffer = io.BytesIO()
    serializer.serialize(head, buffer)
    buffer.seek(0)

    restored = serializer.deserialize(buffer)
    print(f"Deserialization completed. Head data: {restored.data}")

    copied = serializer.deep_copy(head)
    print(f"Deep copy completed. Copied head data: {copied.data}")

    if not (are_equivalent(head, restored) and are_equivalent(head, copied)):
        raise SystemExit("Round-trip or deep copy produced a different list")


COMMANDS: dict[str, Callable[[argparse.Namespace], None]] = {
    "encode": cmd_encode,
    "decode": cmd_decode,
    "copy": cmd_copy,
    "demo": cmd_demo,
}


def main():
    args = get_cli_args()
    config = get_config()

    setup_logging(args.log_level or config.logging.level)
    logger.debug(f"Running command '{args.command}'")

    COMMANDS[args.command](args)


if __name__ == "__main__":
    main()
