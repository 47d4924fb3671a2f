"""Top-level package for Sensu Handler."""
from __future__ import annotations

__all__ = [
    'Handler',
    # models
    'HandlerConfig',
    'HandlerConfigOption',
    'OptionKind',
    'OptionSource',
    'OptionValue',
    'Event',
    'Entity',
    'Check',
    # functions
    'parse_event',
    'validate_event',
    'resolve_options',
    'set_option_value',
    'annotation_key',
    'configure_logging',
    # errors
    'HandlerError',
    'UnmarshalError',
    'EventValidationError',
    'MissingEvent',
    'InvalidTimestamp',
    'MissingEntity',
    'InvalidEntityName',
    'MissingCheck',
    'InvalidCheckName',
    'OptionError',
    'MissingValueSlot',
    'InvalidOptionValue',
    'UnsupportedOptionType',
    'CallbackError',
    'ValidationCallbackError',
    'ExecutionCallbackError',
]

from logging import NullHandler

from ._errors import (CallbackError,
                      EventValidationError,
                      ExecutionCallbackError,
                      HandlerError,
                      InvalidCheckName,
                      InvalidEntityName,
                      InvalidOptionValue,
                      InvalidTimestamp,
                      MissingCheck,
                      MissingEntity,
                      MissingEvent,
                      MissingValueSlot,
                      OptionError,
                      UnmarshalError,
                      UnsupportedOptionType,
                      ValidationCallbackError)
from ._event import Check, Entity, Event, parse_event, validate_event
from ._handler import Handler
from ._log import LOG, configure_logging
from ._models import (HandlerConfig,
                      HandlerConfigOption,
                      OptionKind,
                      OptionSource,
                      OptionValue)
from ._resolver import annotation_key, resolve_options, set_option_value


# Set up logging to ``/dev/null`` like a library is supposed to.
# http://docs.python.org/3.3/howto/logging.html#configuring-logging-for-a-library
LOG.addHandler(NullHandler())


def version():
    from importlib.metadata import version
    __version__ = version('sensu-handler')
    return __version__
