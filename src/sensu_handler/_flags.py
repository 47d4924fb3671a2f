from __future__ import annotations

from collections.abc import Sequence

import click
from click.core import ParameterSource

from ._models import HandlerConfig, HandlerConfigOption


def _param_name(index: int) -> str:
    # internal parameter names, so arguments like `dry-run` or `class`
    # never collide after click's identifier mangling
    return f'option_{index}'


def _flag(index: int, option: HandlerConfigOption) -> click.Option:
    decls = [_param_name(index), f'--{option.argument}']
    if option.shorthand:
        decls.append(f'-{option.shorthand}')

    help_text = option.usage
    if option.env:
        help_text = f'{help_text} [env: {option.env}]'.strip()

    return click.Option(
        decls,
        type=str,
        default=None,
        metavar=(option.value.kind.value.upper()
                 if option.value is not None and option.value.kind else 'TEXT'),
        help=help_text,
        show_default=_show_default(option.default),
    )


def _show_default(default: object) -> str:
    if isinstance(default, bool):
        return 'true' if default else 'false'
    return str(default)


def build_command(config: HandlerConfig,
                  options: Sequence[HandlerConfigOption]) -> click.Command:
    """
    Build the command-line interface of a handler: one flag per option plus
    ``--help``, which renders the name, description and timeout.
    """
    return click.Command(
        name=config.name,
        help=config.short,
        epilog=f'Timeout: {config.timeout} seconds',
        params=[_flag(i, option) for i, option in enumerate(options)],
    )


def supplied_flags(ctx: click.Context,
                   options: Sequence[HandlerConfigOption]) -> dict[str, str]:
    """
    Return the flags given explicitly on the command line, keyed by option
    argument.
    """
    supplied = {}
    for i, option in enumerate(options):
        name = _param_name(i)
        if ctx.get_parameter_source(name) is ParameterSource.COMMANDLINE:
            supplied[option.argument] = ctx.params[name]
    return supplied


def parse_args(config: HandlerConfig,
               options: Sequence[HandlerConfigOption],
               args: Sequence[str]) -> dict[str, str]:
    """
    Parse `args` and return the flags they supply.

    :raises click.UsageError: for unknown flags or missing flag values
    :raises click.exceptions.Exit: after printing ``--help``
    """
    command = build_command(config, options)
    with command.make_context(config.name, list(args)) as ctx:
        return supplied_flags(ctx, options)
