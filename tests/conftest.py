"""Shared fixtures: handler config, options and event files."""
from __future__ import annotations

import io
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from sensu_handler import (Handler,
                           HandlerConfig,
                           HandlerConfigOption,
                           OptionValue)

FIXTURES = Path(__file__).parent / 'fixtures'

KEYSPACE = 'sensu.io/plugins/segp/config'

DEFAULT_CMD_LINE_ARGS = ['--arg1', 'value-arg1', '--arg2', '7531', '--arg3=false']

ENVIRONMENT = {
    'ENV_1': 'value-env1',
    'ENV_2': '9753',
    'ENV_3': 'true',
}


def read_fixture(name: str) -> bytes:
    return (FIXTURES / name).read_bytes()


def default_options() -> list[HandlerConfigOption]:
    return [
        HandlerConfigOption(
            argument='arg1',
            default='Default1',
            env='ENV_1',
            path='path1',
            shorthand='d',
            usage='First argument',
        ),
        HandlerConfigOption(
            argument='arg2',
            default=33333,
            env='ENV_2',
            path='path2',
            shorthand='e',
            usage='Second argument',
        ),
        HandlerConfigOption(
            argument='arg3',
            default=False,
            env='ENV_3',
            path='path3',
            shorthand='f',
            usage='Third argument',
        ),
    ]


@dataclass
class HandlerValues:
    arg1: OptionValue = field(default_factory=lambda: OptionValue(str))
    arg2: OptionValue = field(default_factory=lambda: OptionValue(int))
    arg3: OptionValue = field(default_factory=lambda: OptionValue(bool))

    def as_tuple(self):
        return self.arg1.value, self.arg2.value, self.arg3.value


@dataclass
class CallbackRecorder:
    """Records callback calls, raising `fail_validate` / `fail_execute` if set."""
    fail_validate: Exception | None = None
    fail_execute: Exception | None = None
    validate_called: bool = False
    execute_called: bool = False
    events: list = field(default_factory=list)

    def validate(self, event):
        self.validate_called = True
        self.events.append(event)
        if self.fail_validate is not None:
            raise self.fail_validate

    def execute(self, event):
        self.execute_called = True
        self.events.append(event)
        if self.fail_execute is not None:
            raise self.fail_execute


@pytest.fixture
def handler_config() -> HandlerConfig:
    return HandlerConfig(
        name='TestHandler',
        short='Short Description',
        timeout=10,
        keyspace=KEYSPACE,
    )


@pytest.fixture
def values() -> HandlerValues:
    return HandlerValues()


@pytest.fixture
def options(values) -> list[HandlerConfigOption]:
    opts = default_options()
    opts[0].value = values.arg1
    opts[1].value = values.arg2
    opts[2].value = values.arg3
    return opts


@pytest.fixture
def callbacks() -> CallbackRecorder:
    return CallbackRecorder()


@pytest.fixture
def make_handler(handler_config, options, callbacks):
    """
    Factory for a handler reading `event_file` from the fixtures directory,
    with explicit command-line args and environment.
    """
    def _make(event_file: str,
              args: list[str] | None = None,
              environ: dict[str, str] | None = None,
              config: HandlerConfig | None = None) -> Handler:
        return Handler(
            config or handler_config,
            options,
            callbacks.validate,
            callbacks.execute,
            event_reader=io.BytesIO(read_fixture(event_file)),
            args=args or [],
            environ=environ or {},
        )

    return _make
