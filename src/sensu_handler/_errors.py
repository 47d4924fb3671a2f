"""Exceptions raised while running a handler."""
from __future__ import annotations

from typing import Any


class HandlerError(Exception):
    """Base class for every failure that stops a handler run."""


class UnmarshalError(HandlerError):

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f'Failed to unmarshal STDIN data: {detail}')


# Event validation

class EventValidationError(HandlerError):
    message = 'event is invalid'

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)


class MissingEvent(EventValidationError):
    message = 'event is missing'


class InvalidTimestamp(EventValidationError):
    message = 'timestamp is missing or must be greater than zero'


class MissingEntity(EventValidationError):
    message = 'entity is missing from event'


class InvalidEntityName(EventValidationError):
    message = 'entity name must not be empty'


class MissingCheck(EventValidationError):
    message = 'check is missing from event'


class InvalidCheckName(EventValidationError):
    message = 'check name must not be empty'


# Option resolution

class OptionError(HandlerError):

    def __init__(self, argument: str, message: str):
        self.argument = argument
        super().__init__(message)


class MissingValueSlot(OptionError):

    def __init__(self, argument: str):
        super().__init__(
            argument,
            f'option value must not be None for option {argument}')


class InvalidOptionValue(OptionError):

    def __init__(self, argument: str, value: Any, expected: str):
        self.value = value
        self.expected = expected
        super().__init__(
            argument,
            f'invalid value {value!r} for option {argument}: '
            f'expected {expected}')


class UnsupportedOptionType(OptionError):

    def __init__(self, argument: str, type_: type):
        self.type = type_
        super().__init__(
            argument,
            f'unsupported type {type_.__name__!r} for option {argument}')


# Callbacks

def _describe(cause: BaseException) -> str:
    # str(KeyError('x')) is the repr of the key, "'x'"
    if isinstance(cause, KeyError) and len(cause.args) == 1:
        return str(cause.args[0])
    return str(cause)


class CallbackError(HandlerError):
    prefix = ''

    def __init__(self, cause: BaseException):
        self.cause = cause
        super().__init__(f'{self.prefix}{_describe(cause)}')


class ValidationCallbackError(CallbackError):
    prefix = 'error validating input: '


class ExecutionCallbackError(CallbackError):
    prefix = 'error executing handler: '
