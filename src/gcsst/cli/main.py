"""gcsst CLI entry point: transmute CSS files or inline CSS into spell JSON."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from gcsst import __version__
from gcsst.config import DEFAULT_OUTPUT, PATH_SEPARATOR, TransmuteConfig
from gcsst.errors import TransmuteError
from gcsst.transmute import transmute_content, transmute_paths


def _write_output(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="gcsst")
@click.option(
    "-p", "--paths", default=None, help="Comma-separated CSS file paths or glob patterns"
)
@click.option("-c", "--content", default=None, help="CSS content to transmute")
@click.option(
    "-o",
    "--output",
    default=None,
    help=f"Output file (default: ./{DEFAULT_OUTPUT.as_posix()} with --paths, "
    "stdout with --content; '-' for stdout)",
)
@click.option(
    "-l", "--with-oneliner", is_flag=True, help="Include a reconstructed CSS oneliner per class"
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(
    ctx: click.Context,
    paths: str | None,
    content: str | None,
    output: str | None,
    with_oneliner: bool,
    verbose: bool,
) -> None:
    """Grimoire CSS Transmute - convert CSS classes into Grimoire CSS spells.

    \b
    Examples:
      gcsst -p styles.css,components.css
      gcsst -c '.button { color: red; }' -l
      gcsst -p '*.css' -o custom_output.json --with-oneliner
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if paths is None and content is None:
        click.echo(ctx.get_help())
        return
    if paths is not None and content is not None:
        raise click.UsageError("Use either --paths or --content, not both.")

    config = TransmuteConfig(with_oneliner=with_oneliner)
    try:
        if paths is not None:
            patterns = [p.strip() for p in paths.split(PATH_SEPARATOR)]
            duration, json_text = transmute_paths(patterns, config=config)
            target = output or str(DEFAULT_OUTPUT)
        else:
            duration, json_text = transmute_content(content or "", config=config)
            target = output
    except TransmuteError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    if target is None or target == "-":
        click.echo(json_text)
        click.echo(f"Transmutation complete in {duration:.2f} seconds", err=True)
        return

    path = Path(target)
    try:
        _write_output(path, json_text)
    except OSError as exc:
        click.echo(f"Error: failed to write {path}: {exc}", err=True)
        sys.exit(1)
    click.echo(
        f"Transmutation complete in {duration:.2f} seconds. Output written to {path}", err=True
    )
