"""Command-line interface for epubread."""
from __future__ import annotations

import logging
from pathlib import Path

import click

from .assembler import read_book
from .config import ReaderOptions
from .errors import EpubError
from .models import Book, NavOl


def _load(ctx: click.Context, epub: Path) -> Book:
    try:
        return read_book(epub, ctx.obj)
    except EpubError as exc:
        raise click.ClickException(exc.message) from exc


@click.group()
@click.option("--strict/--lenient", default=False, help="Fail on spine entries that match no manifest item.")
@click.option("--workers", default=1, type=click.IntRange(min=1), help="Threads used to load content.")
@click.option("--encoding", default="utf-8", help="Encoding of text content.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging.")
@click.pass_context
def cli(ctx, strict: bool, workers: int, encoding: str, verbose: bool):
    """Inspect EPUB publications."""
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO, format="%(levelname)s: %(message)s")
    try:
        ctx.obj = ReaderOptions(strict=strict, max_workers=workers, encoding=encoding)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="--encoding") from exc


@cli.command("info", help="Show metadata and content summary.")
@click.argument("epub", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def info(ctx, epub: Path):
    book = _load(ctx, epub)
    metadata = book.package.metadata

    click.echo(f"Title:         {book.title}")
    click.echo(f"Authors:       {', '.join(book.authors)}")
    if metadata.identifiers:
        click.echo(f"Identifier:    {metadata.identifiers[0].value}")
    if metadata.languages:
        click.echo(f"Languages:     {', '.join(metadata.languages)}")
    if book.description:
        click.echo(f"Description:   {book.description}")
    click.echo(f"Cover:         {len(book.cover_image)} bytes" if book.cover_image else "Cover:         none")
    click.echo(f"Reading order: {len(book.reading_order)}")

    content = book.content
    click.echo(
        f"Content:       {len(content.html)} html, {len(content.css)} css, {len(content.images)} images, "
        f"{len(content.fonts)} fonts, {len(content.audios)} audio, {len(content.all_files)} files total"
    )


def _echo_ol(ol: NavOl, depth: int) -> None:
    indent = "  " * depth
    if ol.hidden:
        click.echo(f"{indent}(hidden)")
    for li in ol.lis:
        anchor = li.anchor
        click.echo(f"{indent}- {li.text}" + (f"  [{anchor.href}]" if anchor else ""))
        if li.child_ol is not None:
            _echo_ol(li.child_ol, depth + 1)


@cli.command("toc", help="Print the navigation outlines.")
@click.argument("epub", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def toc(ctx, epub: Path):
    book = _load(ctx, epub)
    for nav in book.navigation:
        click.echo(f"[{nav.type or 'nav'}] {nav.header}".rstrip())
        _echo_ol(nav.ol, 1)


@cli.command("files", help="List manifest files with their content type.")
@click.argument("epub", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def files(ctx, epub: Path):
    book = _load(ctx, epub)
    for entry in book.content.all_files:
        click.echo(f"{entry.file_path}\t{entry.content_type.value}\t{entry.mime_type}")
    for entry in book.content.remote_files:
        click.echo(f"{entry.key}\t{entry.content_type.value}\t{entry.mime_type}\t(remote)")


if __name__ == "__main__":  # pragma: no cover
    cli()
