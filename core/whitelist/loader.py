"""
Module 03 - Whitelist Loader

Reads a whitelist from a JSON or YAML file. Accepted shapes:

    [["0x5B38...DDC4", 1], ["0x5A64...9D99", 1]]
    [{"address": "0x5B38...DDC4", "amount": 1}]
    {"whitelist": [...]}   or   {"entries": [...]}

File order is leaf order.
"""
from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from core.schemas.errors import WhitelistLoadError
from core.schemas.whitelist import Whitelist


logger = logging.getLogger(__name__)

_YAML_SUFFIXES = {".yaml", ".yml"}

_YAML_INT_TAG = "tag:yaml.org,2002:int"


class WhitelistYamlLoader(yaml.SafeLoader):
    """
    SafeLoader that only resolves plain decimal integers.

    YAML 1.1 reads an unquoted 0x5B38...DDC4 as a hex int, which would
    turn every handwritten address into a number. Here it stays a string.
    """


WhitelistYamlLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != _YAML_INT_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
WhitelistYamlLoader.add_implicit_resolver(
    _YAML_INT_TAG,
    re.compile(r"^[-+]?(?:0|[1-9][0-9_]*)$"),
    list("-+0123456789"),
)


def parse_whitelist(data: Any, source: str = "<memory>") -> Whitelist:
    """
    Validate already-parsed whitelist data.

    Raises:
        WhitelistLoadError: If the data has the wrong shape or any entry
            is invalid
    """
    if isinstance(data, dict):
        for key in ("whitelist", "entries"):
            if key in data:
                data = data[key]
                break
        else:
            raise WhitelistLoadError(
                "Whitelist mapping must contain a 'whitelist' or 'entries' list",
                path=source,
            )

    if not isinstance(data, list):
        raise WhitelistLoadError(
            f"Whitelist must be a list, got {type(data).__name__}",
            path=source,
        )

    try:
        whitelist = Whitelist(entries=data)
    except ValidationError as e:
        raise WhitelistLoadError(
            f"Invalid whitelist entry: {e.errors()[0].get('msg', str(e))}",
            path=source,
            details={"errors": [err.get("msg") for err in e.errors()]},
        ) from e

    logger.info(f"Loaded {len(whitelist)} whitelist entries from {source}")
    return whitelist


def load_whitelist(path: str | Path) -> Whitelist:
    """
    Load a whitelist from a .json, .yaml or .yml file.

    Raises:
        WhitelistLoadError: If the file is missing, unparsable or invalid
    """
    path = Path(path)
    if not path.exists():
        raise WhitelistLoadError(f"Whitelist file not found: {path}", path=str(path))

    try:
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix.lower() in _YAML_SUFFIXES:
                data = yaml.load(f, Loader=WhitelistYamlLoader)
            else:
                data = json.load(f)
    except (json.JSONDecodeError, yaml.YAMLError, UnicodeDecodeError) as e:
        raise WhitelistLoadError(
            f"Could not parse whitelist file {path}: {e}",
            path=str(path),
        ) from e
    except OSError as e:
        raise WhitelistLoadError(
            f"Could not read whitelist file {path}: {e}",
            path=str(path),
        ) from e

    return parse_whitelist(data, source=str(path))


__all__ = [
    "WhitelistYamlLoader",
    "parse_whitelist",
    "load_whitelist",
]
