"""
Output formatters — turn a bound object graph into JSON or YAML.
"""

import dataclasses
import json
from enum import Enum, Flag
from typing import Any

import yaml

from .converter import flag_names
from .errors import BindError


def to_plain(value: Any) -> Any:
    """Recursively convert a bound object graph to JSON/YAML-safe data.

    Enums become member names and flags become lists of names.
    """
    if isinstance(value, Flag):
        return flag_names(value)
    if isinstance(value, Enum):
        return value.name
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_plain(getattr(value, f.name))
                for f in dataclasses.fields(value)}
    if isinstance(value, dict):
        return {str(k): to_plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_plain(v) for v in value]
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    if hasattr(value, "__dict__"):
        return {k: to_plain(v) for k, v in vars(value).items()
                if not k.startswith("_")}
    return str(value)


def errors_to_plain(errors: list[BindError]) -> list[dict[str, str]]:
    return [{"member": e.member, "kind": e.kind, "message": e.message}
            for e in errors]


# ---------------------------------------------------------------------------
# JSON
# ---------------------------------------------------------------------------

def to_json(data: Any, pretty: bool = True) -> str:
    indent = 2 if pretty else None
    return json.dumps(to_plain(data), indent=indent, default=str,
                      ensure_ascii=False)


# ---------------------------------------------------------------------------
# YAML
# ---------------------------------------------------------------------------

def to_yaml(data: Any) -> str:
    return yaml.safe_dump(to_plain(data), sort_keys=False, allow_unicode=True)


FORMATTERS = {"json": to_json, "yaml": to_yaml}
