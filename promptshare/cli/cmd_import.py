"""Import commands: resolve share links and tokens."""

import asyncio
import json
import sys

import click

from . import cli
from .shared import console, _get_settings, _print_payload


def _build_resolver(settings):
    from promptshare.client import ShareApiClient
    from promptshare.codec import TemplateCodec
    from promptshare.resolver import ReferenceResolver

    client = ShareApiClient.from_settings(settings)
    return ReferenceResolver(client, TemplateCodec(), language=settings.language)


@cli.command()
@click.argument("url")
@click.pass_context
def resolve(ctx, url):
    """Resolve a share link the way the app does on page load."""
    from promptshare.location import MemoryLocation

    settings = _get_settings(ctx)
    resolver = _build_resolver(settings)
    location = MemoryLocation(url)

    result = asyncio.run(resolver.resolve_location(location))

    if result is None:
        console.print("[dim]No share reference in this URL.[/dim]")
        return

    console.print(f"[bold]Reference:[/bold] {result.reference} [dim]({result.kind.value})[/dim]", soft_wrap=True)
    if result.found:
        _print_payload(result.document.to_payload())
    else:
        console.print(f"[dim]Nothing imported ({result.status.value}).[/dim]")
    console.print(f"[bold]Cleaned URL:[/bold] {location.href}", soft_wrap=True)


@cli.command(name="import")
@click.argument("token")
@click.option("--out", "-o", type=click.Path(dir_okay=False, writable=True), help="Write the imported template here")
@click.pass_context
def import_token(ctx, token, out):
    """Import a pasted share token, share link or short code."""
    from promptshare.models import build_imported_template

    settings = _get_settings(ctx)
    resolver = _build_resolver(settings)

    outcome = asyncio.run(resolver.resolve_token(token))

    if outcome.message:
        console.print(f"[red]{outcome.message}[/red]")
        sys.exit(1)
    if outcome.document is None:
        return

    template = build_imported_template(outcome.document, settings.default_author)
    if out:
        with open(out, "w", encoding="utf-8") as f:
            json.dump(template, f, ensure_ascii=False, indent=2)
        console.print(f"[green]Template saved to {out}[/green]")
    else:
        _print_payload(template)
