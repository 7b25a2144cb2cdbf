"""Codec and service commands."""

import asyncio
import sys

import click

from . import cli
from .shared import console, _get_settings, _load_document, _print_payload


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
def encode(path):
    """Encode a template file into an inline reference."""
    from promptshare.codec import TemplateCodec

    doc = _load_document(path)
    click.echo(TemplateCodec().encode(doc.to_payload()))


@cli.command()
@click.argument("reference")
def decode(reference):
    """Decode an inline reference into template JSON."""
    from promptshare.codec import TemplateCodec
    from promptshare.errors import ShareCodecError, classify_error

    try:
        payload = TemplateCodec().loads(reference.strip())
    except ShareCodecError as e:
        console.print(f"[red]{classify_error(e)}[/red]")
        sys.exit(1)
    _print_payload(payload)


@cli.command()
@click.argument("code")
@click.option("--raw", is_flag=True, help="Print the stored inline string instead of decoding it")
@click.pass_context
def lookup(ctx, code, raw):
    """Look up a short code on the share service."""
    from promptshare.client import ShareApiClient
    from promptshare.codec import TemplateCodec
    from promptshare.errors import ShareError, classify_error

    settings = _get_settings(ctx)
    client = ShareApiClient.from_settings(settings)

    try:
        data = asyncio.run(client.lookup(code.strip()))
        payload = data if raw else TemplateCodec().loads(data)
    except ShareError as e:
        console.print(f"[red]{classify_error(e)}[/red]")
        sys.exit(1)

    if raw:
        click.echo(payload)
    else:
        _print_payload(payload)
