"""Share commands: publish templates as links or tokens."""

import asyncio
import sys

import click

from . import cli
from .shared import console, _get_settings, _load_document


def _build_publisher(settings, print_only: bool):
    from promptshare.client import ShareApiClient
    from promptshare.clipboard import MemoryClipboard, SystemClipboard
    from promptshare.codec import TemplateCodec
    from promptshare.publisher import SharePublisher

    clipboard = MemoryClipboard() if print_only else SystemClipboard()
    return SharePublisher(ShareApiClient.from_settings(settings), TemplateCodec(), clipboard, settings)


def _report(outcome, print_only: bool):
    kind = "short code" if outcome.artifact.is_short else "inline"
    console.print(f"[dim]Reference: {kind}[/dim]")
    if print_only:
        console.print(outcome.text, markup=False, highlight=False, soft_wrap=True)
        return
    if outcome.copied:
        console.print(f"[green]{outcome.message}[/green]")
    else:
        console.print(f"[yellow]{outcome.message}[/yellow]")
        console.print(outcome.text, markup=False, highlight=False, soft_wrap=True)


@cli.group()
def share():
    """Publish a template file."""
    pass


@share.command("link")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--base", default=None, help="Public origin for the link")
@click.option("--print-only", is_flag=True, help="Print instead of copying to the clipboard")
@click.pass_context
def share_link(ctx, path, base, print_only):
    """Publish a template as a share link."""
    settings = _get_settings(ctx, public_share_url=base)
    if not settings.public_share_url:
        console.print("[red]No public URL to link to. Pass --base or set PROMPTSHARE_PUBLIC_SHARE_URL.[/red]")
        sys.exit(1)
    doc = _load_document(path)
    publisher = _build_publisher(settings, print_only)
    outcome = asyncio.run(publisher.publish_link(doc))
    _report(outcome, print_only)


@share.command("token")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--name", default=None, help="Display name in the token message")
@click.option("--print-only", is_flag=True, help="Print instead of copying to the clipboard")
@click.pass_context
def share_token(ctx, path, name, print_only):
    """Publish a template as a chat-friendly share token."""
    settings = _get_settings(ctx)
    doc = _load_document(path)
    publisher = _build_publisher(settings, print_only)
    outcome = asyncio.run(publisher.publish_token(doc, display_name=name))
    _report(outcome, print_only)
