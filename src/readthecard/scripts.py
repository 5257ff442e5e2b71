# filename : scripts.py


import logging

import click

from readthecard.core.smartcard.errors import CardError
from readthecard.core.smartcard.logging import PROTOCOL, TRACE

lg = logging.getLogger(__name__)


@click.command()
@click.option("-v", "--verbose", is_flag=True, help="TRACE level (show raw APDUs).")
@click.option(
    "-l",
    "--list-readers",
    "list_only",
    is_flag=True,
    help="List readers and exit.",
)
@click.option(
    "-r",
    "--reader",
    envvar="READTHECARD_READER",
    default=None,
    help="Reader name (default: first reader found).",
)
@click.option("-p", "--pin", default=None, help="4-digit PIN (prompted if omitted).")
@click.option("--exclusive", is_flag=True, help="Open the reader in exclusive mode.")
@click.option(
    "--encoding",
    default="utf-8",
    show_default=True,
    help="Text encoding of the card's fields.",
)
@click.option("--speak/--no-speak", default=True, help="Read the result aloud.")
@click.option(
    "--voicevox-dir",
    envvar="READTHECARD_VOICEVOX_DIR",
    type=click.Path(exists=True, file_okay=False),
    default=None,
    help="Directory holding VOICEVOX Core and its dictionary.",
)
@click.option("--mock", is_flag=True, help="Use the built-in simulated card.")
def readthecard(verbose, list_only, reader, pin, exclusive, encoding, speak, voicevox_dir, mock):

    logging.basicConfig(
        level=TRACE if verbose else PROTOCOL,
        format="%(levelname)-8s %(name)s: %(message)s",
    )

    from readthecard.app.kenhojo.display import format_record
    from readthecard.app.main import main, readers

    try:
        if list_only:
            names = readers(mock=mock)
            if not names:
                click.echo("no readers found", err=True)
            for name in names:
                click.echo(name)
            return

        if pin is None:
            pin = click.prompt("PIN", hide_input=True)

        record = main(
            pin,
            reader=reader,
            exclusive=exclusive,
            encoding=encoding,
            speak=speak,
            voicevox_dir=voicevox_dir,
            mock=mock,
        )
    except CardError as exc:
        raise click.ClickException(str(exc)) from exc

    click.echo(format_record(record))
