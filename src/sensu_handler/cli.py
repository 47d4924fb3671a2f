"""Console script for sensu-handler."""

import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from sensu_handler import (Event,
                           HandlerError,
                           UnmarshalError,
                           annotation_key,
                           parse_event,
                           validate_event)

app = typer.Typer(help='Inspect Sensu events the way a handler sees them.')
console = Console()
err_console = Console(stderr=True)

EVENT_FILE = typer.Argument(
    None,
    help='Event JSON file; reads STDIN when omitted.',
)


def _load_event(file: Optional[Path]) -> Event:
    stdin = getattr(sys.stdin, 'buffer', sys.stdin)
    try:
        data = file.read_bytes() if file is not None else stdin.read()
    except (OSError, ValueError) as e:
        raise UnmarshalError(str(e)) from e

    event = parse_event(data)
    validate_event(event)
    return event


def _fail(e: HandlerError) -> typer.Exit:
    err_console.print(f'Error: {e}', style='bold red',
                      markup=False, highlight=False)
    return typer.Exit(code=1)


@app.command()
def validate(file: Optional[Path] = EVENT_FILE):
    """Check that an event is complete enough to be handled."""
    try:
        event = _load_event(file)
    except HandlerError as e:
        raise _fail(e)

    table = Table(title='Event', show_header=False)
    table.add_column('field', style='bold')
    table.add_column('value')
    table.add_row('entity', escape(event.entity.name))
    table.add_row('check', escape(event.check.name))
    table.add_row('timestamp', str(event.timestamp))
    if event.id:
        table.add_row('id', escape(event.id))
    table.add_row('check annotations', str(len(event.check.annotations)))
    table.add_row('entity annotations', str(len(event.entity.annotations)))

    console.print(table)
    console.print('Event is valid.', style='green')


@app.command()
def annotations(
    keyspace: str = typer.Option(
        ..., '--keyspace', '-k',
        help='Handler keyspace, e.g. sensu.io/plugins/my-handler/config',
    ),
    file: Optional[Path] = EVENT_FILE,
):
    """List option annotations under a keyspace, check before entity."""
    if not keyspace:
        raise typer.BadParameter('keyspace must not be empty',
                                 param_hint="'--keyspace'")
    try:
        event = _load_event(file)
    except HandlerError as e:
        raise _fail(e)

    prefix = annotation_key(keyspace, '')
    check = event.check.annotations
    entity = event.entity.annotations
    keys = sorted(k for k in {*check, *entity} if k.startswith(prefix))

    if not keys:
        console.print(f'No annotations under {prefix}', markup=False)
        return

    table = Table(title=escape(prefix))
    table.add_column('path', style='bold')
    table.add_column('check')
    table.add_column('entity')
    table.add_column('used')
    for key in keys:
        table.add_row(
            escape(key[len(prefix):]),
            escape(check.get(key, '')),
            escape(entity.get(key, '')),
            'check' if key in check else 'entity',
        )

    console.print(table)


if __name__ == "__main__":
    app()
