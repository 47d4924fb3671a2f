"""
Resolve handler options from their sources, highest priority first:

    1. command-line argument
    2. environment variable
    3. check annotation   ``<keyspace>/<path>``
    4. entity annotation  ``<keyspace>/<path>``
    5. default
"""
from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from ._constants import ANNOTATION_SEPARATOR, MAX_UINT64
from ._env_helpers import parse_bool, parse_uint64
from ._errors import InvalidOptionValue, MissingValueSlot, UnsupportedOptionType
from ._event import Event
from ._log import LOG
from ._models import (HandlerConfig,
                      HandlerConfigOption,
                      OptionKind,
                      OptionSource,
                      OptionValue)
from ._redact import redact


def annotation_key(keyspace: str, path: str) -> str:
    return f'{keyspace}{ANNOTATION_SEPARATOR}{path}'


def _slot(option: HandlerConfigOption) -> OptionValue:
    if option.value is None:
        raise MissingValueSlot(option.argument)
    return option.value


def _kind(option: HandlerConfigOption) -> OptionKind:
    slot = _slot(option)
    kind = slot.kind
    if kind is None:
        raise UnsupportedOptionType(option.argument, slot.type)
    return kind


def coerce(option: HandlerConfigOption, raw: str) -> Any:
    """Convert a textual value to the type of the option's slot."""
    kind = _kind(option)

    if kind is OptionKind.STRING:
        return raw

    try:
        if kind is OptionKind.UINT64:
            return parse_uint64(raw)
        return parse_bool(raw)
    except ValueError:
        raise InvalidOptionValue(option.argument, raw, kind.value) from None


def set_option_value(option: HandlerConfigOption,
                     raw: str,
                     source: OptionSource = OptionSource.ARGUMENT) -> None:
    """
    Coerce `raw` and write it to the option's slot.

    The slot is left untouched when coercion fails.
    """
    value = coerce(option, raw)
    _slot(option).set(value, source)


def _typed_default(option: HandlerConfigOption) -> Any:
    kind = _kind(option)
    default = option.default

    if kind is OptionKind.STRING:
        ok = isinstance(default, str)
    elif kind is OptionKind.UINT64:
        ok = (isinstance(default, int) and not isinstance(default, bool)
              and 0 <= default <= MAX_UINT64)
    else:
        ok = isinstance(default, bool)

    if not ok:
        raise InvalidOptionValue(option.argument, default, kind.value)

    return default


def lookup(config: HandlerConfig,
           option: HandlerConfigOption,
           event: Event,
           *,
           args: Mapping[str, str],
           environ: Mapping[str, str]) -> tuple[OptionSource, str] | None:
    """
    Return the first textual source that has a value for `option`, or None
    when only the default applies.
    """
    if option.argument in args:
        return OptionSource.ARGUMENT, args[option.argument]

    # a variable set to the empty string still counts as set
    if option.env and option.env in environ:
        return OptionSource.ENV, environ[option.env]

    if config.keyspace:
        key = annotation_key(config.keyspace, option.path)

        if event.check is not None and key in event.check.annotations:
            return OptionSource.CHECK_ANNOTATION, event.check.annotations[key]

        if event.entity is not None and key in event.entity.annotations:
            return OptionSource.ENTITY_ANNOTATION, event.entity.annotations[key]

    return None


def resolve_option(config: HandlerConfig,
                   option: HandlerConfigOption,
                   event: Event,
                   *,
                   args: Mapping[str, str],
                   environ: Mapping[str, str]) -> Any:
    found = lookup(config, option, event, args=args, environ=environ)

    if found is None:
        source, value = OptionSource.DEFAULT, _typed_default(option)
    else:
        source, raw = found
        value = coerce(option, raw)

    _slot(option).set(value, source)

    LOG.debug('Option %s resolved from %s: %r',
              option.argument, source.value,
              redact(option.argument, value))
    return value


def resolve_options(config: HandlerConfig,
                    options: Iterable[HandlerConfigOption],
                    event: Event,
                    *,
                    args: Mapping[str, str] | None = None,
                    environ: Mapping[str, str] | None = None) -> dict[str, Any]:
    """
    Resolve every option and write each value to its slot.

    :param args: flags explicitly given on the command line, keyed by
                 option argument
    :param environ: environment to read `env` variables from
    :return: resolved values keyed by option argument
    :raises MissingValueSlot: if any option has no slot; checked for all
                              options before anything is resolved
    :raises InvalidOptionValue: if a value cannot be coerced
    :raises UnsupportedOptionType: if a slot has an unsupported type
    """
    options = list(options)
    args = args or {}
    environ = environ if environ is not None else {}

    for option in options:
        _slot(option)

    return {
        option.argument: resolve_option(config, option, event,
                                        args=args, environ=environ)
        for option in options
    }
