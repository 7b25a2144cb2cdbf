"""promptshare CLI: command line interface."""

import logging

import click

from promptshare import __version__
from .shared import console

_log_format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="promptshare")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option("--language", "-l", default=None, help="Message language (cn/en)")
@click.pass_context
def cli(ctx, verbose, language):
    """promptshare: share links and share tokens for prompt templates"""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format=_log_format)
    ctx.ensure_object(dict)
    ctx.obj["language"] = language
    if ctx.invoked_subcommand is None:
        _show_help()


def _show_help():
    """Show all available commands grouped by category."""
    console.print(f"[bold]promptshare v{__version__}[/bold]: share links and share tokens for prompt templates\n")

    groups = {
        "Import": [
            ("resolve", "Resolve a share link (URL or hash)"),
            ("import", "Import a pasted share token, link or code"),
            ("lookup", "Look up a short code on the share service"),
        ],
        "Export": [
            ("share link", "Publish a template file as a share link"),
            ("share token", "Publish a template file as a share token"),
        ],
        "Codec": [
            ("encode", "Encode a template file into an inline reference"),
            ("decode", "Decode an inline reference into template JSON"),
        ],
    }

    for category, commands in groups.items():
        console.print(f"  [bold cyan]{category}[/bold cyan]")
        for name, desc in commands:
            console.print(f"    [bold]promptshare {name:12s}[/bold] {desc}")
        console.print()

    console.print("[dim]Run 'promptshare <command> --help' for details on a specific command.[/dim]")


# Import all command modules (registers commands onto cli group)
from . import cmd_import  # noqa: E402, F401
from . import cmd_share  # noqa: E402, F401
from . import cmd_codec  # noqa: E402, F401


@cli.command(name="help", hidden=True)
def help_cmd():
    """Show all available commands."""
    _show_help()
