import argparse
import os
from functools import lru_cache
from pathlib import Path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="randlist",
        description=(
            "Serialize, deserialize and deep-copy doubly-linked lists whose\n"
            "nodes carry an extra random link.\n\n"
            "Lists are described in YAML as a sequence of records:\n"
            "  - {data: \"a\", random: 2}\n"
            "  - {data: null, random: null}\n"
            "  - {data: \"c\", random: 0}"
        ),
        formatter_class=argparse.RawTextHelpFormatter
    )

    parser.add_argument(
        "-c", "--config",
        type=str,
        help="Path to a randlist configuration file"
    )

    parser.add_argument(
        "-l", "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help=(
            "Logging verbosity.\n"
            "Overrides the 'logging.level' entry of the configuration file.\n\n"
            "Example:\n"
            "  --log-level DEBUG"
        ),
    )

    commands = parser.add_subparsers(dest="command", required=True)

    encode = commands.add_parser(
        "encode",
        help="Build a list from a YAML file and write its binary encoding."
    )
    encode.add_argument("source", type=Path, help="YAML list description")
    encode.add_argument("target", type=Path, help="Binary output file")

    decode = commands.add_parser(
        "decode",
        help="Read a binary encoding and print the list as YAML."
    )
    decode.add_argument("source", type=Path, help="Binary input file")

    copy = commands.add_parser(
        "copy",
        help="Deep-copy a list described in YAML and check the copy."
    )
    copy.add_argument("source", type=Path, help="YAML list description")

    commands.add_parser(
        "demo",
        help="Run a round-trip and a deep copy on a built-in three-node list."
    )

    return parser


@lru_cache
def get_cli_args() -> argparse.Namespace:
    return build_parser().parse_args()


def resolve_configfile(cli_path: str | None) -> Path | None:
    """
    Priority: CLI > ENV > default file in current working directory.

    An explicitly requested file must exist. The default file is optional:
    when it is missing, None is returned and built-in defaults apply.
    """
    raw = cli_path or os.getenv("RANDLISTCONFIG")

    if raw is None:
        file = Path.cwd() / "randlist.yaml"
        return file if file.is_file() else None

    file = Path(raw)
    if not file.is_file():
        raise SystemExit(
            f"[config] Configuration file not found: '{file}'.\n"
            "  - Use --config <file.yaml>\n"
            "  - Or set the RANDLISTCONFIG environment variable\n"
            "  - Or place a 'randlist.yaml' file in the current working directory."
        )

    return file


@lru_cache
def get_configfile() -> Path | None:
    return resolve_configfile(get_cli_args().config)
