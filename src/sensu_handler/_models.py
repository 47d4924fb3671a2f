from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class OptionKind(str, Enum):
    STRING = 'string'
    UINT64 = 'uint64'
    BOOL = 'bool'

    @classmethod
    def for_type(cls, type_: type) -> OptionKind | None:
        # exact match: bool is a subclass of int
        return _KIND_BY_TYPE.get(type_)


_KIND_BY_TYPE = {
    str: OptionKind.STRING,
    int: OptionKind.UINT64,
    bool: OptionKind.BOOL,
}


class OptionSource(str, Enum):
    ARGUMENT = 'argument'
    ENV = 'env'
    CHECK_ANNOTATION = 'check-annotation'
    ENTITY_ANNOTATION = 'entity-annotation'
    DEFAULT = 'default'


class OptionValue:
    """
    Caller-owned slot that receives the resolved value of one option.

    The slot's Python type (``str``, ``int`` or ``bool``) decides how
    textual sources are coerced. A slot can be written only once.

    Example::

        timeout = OptionValue(int)
        ...
        handler.execute()
        timeout.value  # 30
    """
    __slots__ = (
        'type',
        '_value',
        '_source',
    )

    def __init__(self, type_: type):
        self.type = type_
        self._value: Any = _zero(type_)
        self._source: OptionSource | None = None

    def __repr__(self) -> str:
        return (f'{self.__class__.__name__}({self.type.__name__}, '
                f'value={self._value!r}, source={self._source})')

    @property
    def kind(self) -> OptionKind | None:
        return OptionKind.for_type(self.type)

    @property
    def value(self) -> Any:
        return self._value

    @property
    def source(self) -> OptionSource | None:
        return self._source

    @property
    def is_set(self) -> bool:
        return self._source is not None

    def set(self, value: Any, source: OptionSource) -> None:
        if self._source is not None:
            raise RuntimeError(
                f'option value already assigned (from {self._source.value})')
        self._value = value
        self._source = source


def _zero(type_: type) -> Any:
    try:
        return type_()
    except TypeError:
        return None


@dataclass(slots=True)
class HandlerConfig:
    name: str
    short: str = ''
    # seconds; enforced by whatever runs the handler, not by this library
    timeout: int = 10
    # prefix for annotation lookups, empty disables them
    keyspace: str = ''


@dataclass(slots=True)
class HandlerConfigOption:
    argument: str
    default: str | int | bool
    value: OptionValue | None = None
    shorthand: str = ''
    usage: str = ''
    env: str = ''
    path: str = ''

    def __post_init__(self):
        if not self.argument:
            raise ValueError('option argument must not be empty')
        if len(self.shorthand) > 1:
            raise ValueError(
                f'shorthand {self.shorthand!r} for option {self.argument} '
                'must be a single character')
