"""Shared utilities for promptshare CLI commands."""

import json
import sys

import click
from rich.console import Console

console = Console()


def _get_settings(ctx: click.Context, **overrides):
    """Load settings, applying the global --language flag."""
    from promptshare.config import load_settings

    language = (ctx.find_root().obj or {}).get("language")
    return load_settings(language=language, **overrides)


def _load_document(path: str):
    """Read a template JSON file into a Document, exiting on bad input."""
    from promptshare.models import Document

    try:
        with open(path, encoding="utf-8") as f:
            payload = json.load(f)
    except (OSError, ValueError) as e:
        console.print(f"[red]Cannot read template file {path}: {e}[/red]")
        sys.exit(1)

    doc = Document.from_payload(payload)
    if doc is None:
        console.print("[red]Template needs a non-empty 'name' and 'content'.[/red]")
        sys.exit(1)
    return doc


def _print_payload(payload) -> None:
    console.print_json(json.dumps(payload, ensure_ascii=False))
