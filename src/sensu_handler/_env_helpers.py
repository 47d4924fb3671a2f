from __future__ import annotations

import logging
from enum import Enum
from typing import TypeVar

from ._constants import MAX_UINT64


E = TypeVar('E', bound=Enum)


def parse_uint64(v: str) -> int:
    """
    Parse a base-10 unsigned 64-bit integer.

    Only ASCII digits are accepted: no sign, whitespace, underscores or
    non-ASCII digits, all of which :func:`int` would otherwise allow.

    :raises ValueError: if `v` is not a valid unsigned 64-bit integer
    """
    if not v or not (v.isascii() and v.isdigit()):
        raise ValueError(f'invalid syntax: {v!r}')

    n = int(v)
    if n > MAX_UINT64:
        raise ValueError(f'value out of range: {v!r}')

    return n


def parse_bool(v: str) -> bool:
    """
    Parse exactly ``'true'`` or ``'false'`` (case-sensitive).

    :raises ValueError: for any other token
    """
    if v == 'true':
        return True

    if v == 'false':
        return False

    raise ValueError(f'invalid syntax: {v!r}')


def parse_enum(v: str | None, *, enum: type[E], default: E) -> E:
    if v is None:
        return default

    s = v.strip().lower()

    # match by value (recommended for env vars)
    for member in enum:
        if member.value == s:
            return member

    # fallback: match by name (JSON / PLAIN)
    try:
        return enum[s.upper()]
    except KeyError:
        return default


def parse_level(v: str | None, *, default: int) -> int:
    if not v:
        return default
    s = v.strip().upper()
    if s.isdigit():
        return int(s)
    # noinspection PyUnresolvedReferences,PyProtectedMember
    return logging._nameToLevel.get(s, default)
