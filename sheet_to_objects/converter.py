"""
Conversion of raw cell text into typed values.

Supported target kinds are ``str``, ``int``, ``float``, ``bool``, plain
``Enum`` subclasses (matched by member name with the same three-tier
fallback used for headers) and ``Flag`` subclasses (several member names
separated by ``,`` or ``|``).  Any other callable is invoked with the raw
string.
"""

import re
from enum import Enum, Flag
from typing import Any

from .errors import ConversionError, EnumValueNotFound
from .matching import find_match

_TRUE = {"true", "yes"}
_FALSE = {"false", "no"}

_FLAG_SEPARATORS = re.compile(r"[,|]")

# ASCII digits only, "." as the decimal point
_INT_TEXT = re.compile(r"[+-]?[0-9]+")
_FLOAT_TEXT = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


# ---------------------------------------------------------------------------
# Primitives
# ---------------------------------------------------------------------------

def _to_bool(raw: str) -> bool:
    text = raw.strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ConversionError(f"'{raw}' is not a boolean (true/false/yes/no)")


def _to_int(raw: str) -> int:
    text = raw.strip()
    if not _INT_TEXT.fullmatch(text):
        raise ConversionError(f"'{raw}' is not an integer")
    return int(text)


def _to_float(raw: str) -> float:
    text = raw.strip()
    if not _FLOAT_TEXT.fullmatch(text):
        raise ConversionError(f"'{raw}' is not a number")
    return float(text)


_PRIMITIVES = {
    str: lambda raw: raw,
    int: _to_int,
    float: _to_float,
    bool: _to_bool,
}


# ---------------------------------------------------------------------------
# Enums and flags
# ---------------------------------------------------------------------------

def parse_enum(raw: str, enum_type: type) -> Enum:
    """Match *raw* against the member names of *enum_type*."""
    names = list(enum_type.__members__)
    found = find_match(enumerate(names), raw.strip())
    if found is None:
        raise EnumValueNotFound(raw, enum_type)
    return enum_type.__members__[names[found[0]]]


def parse_flag(raw: str, flag_type: type) -> Flag:
    """Combine every member named in *raw* with bitwise OR.

    Blank input gives the zero value.
    """
    value = flag_type(0)
    for token in _FLAG_SEPARATORS.split(raw):
        token = token.strip()
        if token:
            value |= parse_enum(token, flag_type)
    return value


def _is_single_bit(n: int) -> bool:
    return n > 0 and n & (n - 1) == 0


def flag_names(value: Flag) -> list[str]:
    """Names of the single-bit members set in *value*, in declaration order."""
    names = []
    for name, member in type(value).__members__.items():
        if member.name != name:
            continue  # alias
        bits = member.value
        if _is_single_bit(bits) and value.value & bits == bits:
            names.append(name)
    return names


def format_flag(value: Flag) -> str:
    return ", ".join(flag_names(value))


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------

def convert(raw: str, kind: Any = str) -> Any:
    """Convert *raw* to *kind*.

    Raises:
        EnumValueNotFound: no enum member matched.
        ConversionError: any other conversion failure.
    """
    if kind in _PRIMITIVES:
        return _PRIMITIVES[kind](raw)
    if isinstance(kind, type) and issubclass(kind, Flag):
        return parse_flag(raw, kind)
    if isinstance(kind, type) and issubclass(kind, Enum):
        return parse_enum(raw, kind)
    try:
        return kind(raw)
    except (ValueError, TypeError) as exc:
        name = getattr(kind, "__name__", repr(kind))
        raise ConversionError(f"'{raw}' cannot be converted to {name}: {exc}") from exc
