"""CLI entry point for the PO catalog tools."""

import logging
from pathlib import Path
from typing import Optional

import click

from . import __version__
from .config import CatalogConfig
from .po import CatalogParser, CatalogWriter, PluralMessage, PoSyntaxError, catalog_stats


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Verbose output')
@click.pass_context
def cli(ctx: click.Context, verbose: bool):
    """Read, check and rewrite gettext PO catalogs."""
    config = CatalogConfig(verbose=verbose)
    logging.basicConfig(level=config.log_level, format="%(levelname)s %(name)s: %(message)s")
    ctx.obj = config


def _load(file: Path, config: CatalogConfig) -> list:
    parser = CatalogParser(config)
    try:
        return list(parser.parse_file(file))
    except PoSyntaxError as e:
        click.secho(f"Error: {file}: {e}", fg='red', err=True)
        raise SystemExit(1)


@cli.command()
@click.argument('file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_obj
def show(config: CatalogConfig, file: Path):
    """Parse and display messages from a PO file.

    FILE is the path to the .po file to parse.
    """
    messages = _load(file, config)

    if not messages:
        click.secho("No messages found.", fg='yellow')
        return

    click.echo(f"Messages ({len(messages)} total):\n")

    for message in messages:
        header = message.header
        for comment in header.comments:
            click.secho(f"# {comment}", fg='cyan')
        for location in header.locations:
            click.secho(f"#: {location}", fg='cyan')
        if header.flags:
            click.secho(f"#, {', '.join(str(f) for f in header.sorted_flags())}", fg='yellow')
        if message.context is not None:
            click.echo(f"[{message.context}]")

        click.echo(f'"{message.message_id}"')
        if isinstance(message, PluralMessage):
            click.echo(f'  plural: "{message.plural_id}"')
            for i, translation in enumerate(message.translations):
                click.echo(f'  [{i}] "{translation}"')
        else:
            click.echo(f'  -> "{message.translation}"')
        click.echo()


@cli.command()
@click.argument('file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_obj
def stats(config: CatalogConfig, file: Path):
    """Show message counts for a PO file."""
    result = catalog_stats(_load(file, config))

    click.echo(f"Messages:     {result.total}")
    click.echo(f"Plural:       {result.plural}")
    click.secho(f"Fuzzy:        {result.fuzzy}", fg='yellow' if result.fuzzy else None)
    click.secho(f"Untranslated: {result.untranslated}", fg='red' if result.untranslated else None)


@cli.command()
@click.argument('file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--output', '-o', type=click.Path(dir_okay=False, path_type=Path),
              help='Write to this file instead of rewriting FILE')
@click.pass_obj
def normalize(config: CatalogConfig, file: Path, output: Optional[Path]):
    """Rewrite a PO file in canonical form.

    FILE is the path to the .po file to rewrite.
    """
    messages = _load(file, config)
    target = output or file

    CatalogWriter(config).write(messages, target)
    click.secho(f"Wrote {len(messages)} messages to {target}", fg='green')


@cli.command()
@click.argument('file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_obj
def check(config: CatalogConfig, file: Path):
    """Check that a PO file parses."""
    messages = _load(file, config)
    click.secho(f"OK ({len(messages)} messages)", fg='green')


if __name__ == '__main__':
    cli()
