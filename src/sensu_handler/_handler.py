from __future__ import annotations

import os
import sys
from collections.abc import Callable, Mapping, Sequence
from typing import IO, Any, NoReturn

import click
from rich.console import Console

from ._constants import EXIT_FAILURE
from ._errors import (ExecutionCallbackError,
                      HandlerError,
                      UnmarshalError,
                      ValidationCallbackError)
from ._event import Event, parse_event, validate_event
from ._flags import parse_args
from ._log import LOG, configure_logging
from ._models import HandlerConfig, HandlerConfigOption
from ._resolver import resolve_options

EventCallback = Callable[[Event], Any]


class Handler:
    """
    Runs one Sensu event handler.

    A run:
        * parses command-line flags
        * reads and decodes the event from `event_reader` (stdin)
        * validates the event
        * resolves every option into its `OptionValue` slot
        * calls `validation_function(event)`, then `execute_function(event)`

    Callbacks signal failure by raising; the exception is wrapped in
    :class:`ValidationCallbackError` or :class:`ExecutionCallbackError`.
    """
    __slots__ = (
        'config',
        'options',
        'validation_function',
        'execute_function',
        'event',
        'event_reader',
        'args',
        'environ',
    )

    def __init__(
        self,
        config: HandlerConfig,
        options: Sequence[HandlerConfigOption],
        validation_function: EventCallback,
        execute_function: EventCallback,
        *,
        event_reader: IO | None = None,
        args: Sequence[str] | None = None,
        environ: Mapping[str, str] | None = None,
    ):
        self.config = config
        self.options = list(options)
        self.validation_function = validation_function
        self.execute_function = execute_function
        self.event: Event | None = None
        self.event_reader = event_reader if event_reader is not None else sys.stdin
        self.args = list(args) if args is not None else sys.argv[1:]
        self.environ = environ if environ is not None else os.environ

    def set_args(self, args: Sequence[str]) -> None:
        self.args = list(args)

    def _read_event(self) -> Event | None:
        # prefer the binary stream, so invalid UTF-8 surfaces from the decoder
        reader = getattr(self.event_reader, 'buffer', self.event_reader)
        try:
            data = reader.read()
        except (OSError, ValueError) as e:
            # a failed read is reported like undecodable input
            raise UnmarshalError(str(e)) from e

        return parse_event(data)

    def execute(self) -> None:
        """
        Run the handler once.

        :raises HandlerError: on the first failing step; callbacks are not
                              called after a failure
        :raises click.UsageError: for invalid command-line flags
        :raises click.exceptions.Exit: when ``--help`` was requested
        """
        args = parse_args(self.config, self.options, self.args)

        event = self.event = self._read_event()
        validate_event(event)

        resolve_options(self.config, self.options, event,
                        args=args, environ=self.environ)

        LOG.debug('Handler %s: validating event for %s/%s',
                  self.config.name, event.entity.name, event.check.name)
        try:
            self.validation_function(event)
        except Exception as e:
            raise ValidationCallbackError(e) from e

        LOG.debug('Handler %s: executing', self.config.name)
        try:
            self.execute_function(event)
        except Exception as e:
            raise ExecutionCallbackError(e) from e

    def run(self) -> NoReturn:
        """
        Process entry point: run the handler and exit.

        Exits 0 on success, 1 when the handler fails, and with click's
        status for usage errors or ``--help``.
        """
        configure_logging()
        console = Console(stderr=True)

        try:
            self.execute()

        except click.exceptions.Exit as e:
            sys.exit(e.exit_code)

        except click.ClickException as e:
            e.show()
            sys.exit(e.exit_code)

        except HandlerError as e:
            LOG.error('Handler %s failed: %s', self.config.name, e,
                      extra={'sensu_handler': {
                          'handler': self.config.name,
                          'error': type(e).__name__,
                      }})
            console.print(f'Error: {e}', style='bold red',
                          markup=False, highlight=False)
            sys.exit(EXIT_FAILURE)

        sys.exit(0)
