"""
Sensu event model, decoding and structural validation.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from ._errors import (InvalidCheckName,
                      InvalidEntityName,
                      InvalidTimestamp,
                      MissingCheck,
                      MissingEntity,
                      MissingEvent,
                      UnmarshalError)


def _json_type(v: Any) -> str:
    if v is None:
        return 'null'
    if isinstance(v, bool):
        return 'bool'
    if isinstance(v, (int, float)):
        return 'number'
    if isinstance(v, str):
        return 'string'
    if isinstance(v, list):
        return 'array'
    return 'object'


def _field(d: dict[str, Any], key: str, expected: type, where: str) -> Any:
    """Return ``d[key]`` if it has the `expected` JSON type, None if absent."""
    v = d.get(key)
    if v is None:
        return None

    # bool is a subclass of int, but never a valid JSON number
    if not isinstance(v, expected) or (expected is int and isinstance(v, bool)):
        raise UnmarshalError(
            f'cannot unmarshal {_json_type(v)} into field '
            f'{where}.{key} of type {expected.__name__}')

    return v


def _string_map(d: dict[str, Any], key: str, where: str) -> dict[str, str]:
    m = _field(d, key, dict, where)
    if not m:
        return {}

    for k, v in m.items():
        if not isinstance(v, str):
            raise UnmarshalError(
                f'cannot unmarshal {_json_type(v)} into field '
                f'{where}.{key}[{k!r}] of type str')
    return dict(m)


@dataclass(slots=True)
class Entity:
    name: str = ''
    namespace: str = ''
    entity_class: str = ''
    annotations: dict[str, str] = field(default_factory=dict)
    labels: dict[str, str] = field(default_factory=dict)
    raw: dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Entity:
        meta = _field(d, 'metadata', dict, 'entity') or {}
        return cls(
            name=_field(meta, 'name', str, 'entity.metadata') or '',
            namespace=_field(meta, 'namespace', str, 'entity.metadata') or '',
            entity_class=_field(d, 'entity_class', str, 'entity') or '',
            annotations=_string_map(meta, 'annotations', 'entity.metadata'),
            labels=_string_map(meta, 'labels', 'entity.metadata'),
            raw=d,
        )


@dataclass(slots=True)
class Check:
    name: str = ''
    namespace: str = ''
    status: int = 0
    output: str = ''
    annotations: dict[str, str] = field(default_factory=dict)
    labels: dict[str, str] = field(default_factory=dict)
    raw: dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Check:
        meta = _field(d, 'metadata', dict, 'check') or {}
        return cls(
            name=_field(meta, 'name', str, 'check.metadata') or '',
            namespace=_field(meta, 'namespace', str, 'check.metadata') or '',
            status=_field(d, 'status', int, 'check') or 0,
            output=_field(d, 'output', str, 'check') or '',
            annotations=_string_map(meta, 'annotations', 'check.metadata'),
            labels=_string_map(meta, 'labels', 'check.metadata'),
            raw=d,
        )


@dataclass(slots=True)
class Event:
    timestamp: int = 0
    entity: Entity | None = None
    check: Check | None = None
    id: str | None = None
    # full decoded document, for fields this model does not map
    raw: dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Event:
        entity = _field(d, 'entity', dict, 'event')
        check = _field(d, 'check', dict, 'event')
        return cls(
            timestamp=_field(d, 'timestamp', int, 'event') or 0,
            entity=Entity.from_dict(entity) if entity is not None else None,
            check=Check.from_dict(check) if check is not None else None,
            id=_field(d, 'id', str, 'event'),
            raw=d,
        )


def parse_event(data: str | bytes) -> Event | None:
    """
    Decode a serialized event.

    A JSON ``null`` document decodes to None, which :func:`validate_event`
    then rejects.

    :raises UnmarshalError: if `data` is not a JSON object of the event shape
    """
    try:
        obj = json.loads(data)
    except (ValueError, RecursionError) as e:
        # JSONDecodeError and UnicodeDecodeError are ValueErrors;
        # RecursionError comes from deeply nested arrays or objects
        raise UnmarshalError(str(e)) from e

    if obj is None:
        return None

    if not isinstance(obj, dict):
        raise UnmarshalError(
            f'cannot unmarshal {_json_type(obj)} into event of type object')

    return Event.from_dict(obj)


def validate_event(event: Event | None) -> None:
    """
    Check that `event` carries everything a handler relies on.

    Rules are checked in order and the first violation is raised:
    timestamp, entity, entity name, check, check name.
    """
    if event is None:
        raise MissingEvent

    if event.timestamp <= 0:
        raise InvalidTimestamp

    if event.entity is None:
        raise MissingEntity

    if not event.entity.name:
        raise InvalidEntityName

    if event.check is None:
        raise MissingCheck

    if not event.check.name:
        raise InvalidCheckName
