"""CLI commands for docmark.

Provides the Click-based command group 'docmark' with subcommands for
rendering doc comments as Markdown and dumping them as JSON.
"""

import logging
from typing import Optional

import click
import yaml

from docmark import __version__
from docmark.errors import ConfigError, MissingSeparatorError
from docmark.output.markdown import MarkdownWriter
from docmark.output.serialize import load_json, render_json
from docmark.parsers.extractor import DocCommentParser
from docmark.parsers.structure import DocFile
from docmark.utils.config import MISSING_SEPARATOR_POLICIES, AppConfig, load_config
from docmark.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def _parse_files(
    parser: DocCommentParser, files: tuple[str, ...]
) -> tuple[list[DocFile], bool]:
    """Parse every file, reporting the ones that cannot be read.

    Args:
        parser: The configured parser.
        files: Paths given on the command line.

    Returns:
        The parsed files and whether any file failed.
    """
    parsed = []
    failed = False
    for file_path in files:
        try:
            parsed.append(parser.parse_file(file_path))
        except (OSError, UnicodeDecodeError) as e:
            click.echo(f"Error: cannot read {file_path}: {e}", err=True)
            logger.debug("Read failure for %s", file_path, exc_info=True)
            failed = True
    return parsed, failed


def _load_json_files(files: tuple[str, ...]) -> tuple[list[DocFile], bool]:
    """Load records previously written by the inspect command.

    Args:
        files: Paths of JSON documents.

    Returns:
        The loaded files and whether any input failed.
    """
    loaded = []
    failed = False
    for file_path in files:
        try:
            with open(file_path, encoding="utf-8") as f:
                loaded.extend(load_json(f.read()))
        except (OSError, UnicodeDecodeError) as e:
            click.echo(f"Error: cannot read {file_path}: {e}", err=True)
            failed = True
        except (ValueError, KeyError, TypeError) as e:
            click.echo(f"Error: {file_path} is not docmark JSON: {e}", err=True)
            failed = True
    return loaded, failed


def _make_parser(config: AppConfig, marker: Optional[str]) -> DocCommentParser:
    return DocCommentParser(
        marker=marker or config.parser.marker,
        tag_marker=config.parser.tag_marker,
        encoding=config.parser.encoding,
    )


@click.group(name="docmark")
@click.version_option(version=__version__, prog_name="docmark")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Path to a YAML config file.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[str]) -> None:
    """docmark: render /// doc comments as Markdown."""
    try:
        config = load_config(config_path)
    except (ConfigError, yaml.YAMLError) as e:
        raise click.ClickException(str(e)) from e
    setup_logging(
        level=config.logging.level,
        log_format=config.logging.format,
        log_file=config.logging.file,
    )
    ctx.obj = config


@cli.command()
@click.argument("files", nargs=-1, required=True, type=click.Path(dir_okay=False))
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Write one .md file per input plus an index.md instead of printing.",
)
@click.option(
    "--on-missing-separator",
    type=click.Choice(MISSING_SEPARATOR_POLICIES),
    default=None,
    help="What to do with a description that has no title separator.",
)
@click.option(
    "--from-json",
    is_flag=True,
    help="Treat FILES as JSON written by the inspect command.",
)
@click.option("--marker", default=None, help="Doc-comment marker token.")
@click.pass_obj
def render(
    config: AppConfig,
    files: tuple[str, ...],
    output_dir: Optional[str],
    on_missing_separator: Optional[str],
    marker: Optional[str],
    from_json: bool,
) -> None:
    """Render the doc comments of FILES as Markdown.

    Unreadable files are reported and skipped; the exit status is
    non-zero if any file could not be read.
    """
    if from_json:
        parsed, failed = _load_json_files(files)
    else:
        parsed, failed = _parse_files(_make_parser(config, marker), files)

    writer = MarkdownWriter(
        output_dir=output_dir or config.output.output_dir,
        title_separator=config.output.title_separator,
        on_missing_separator=on_missing_separator or config.output.on_missing_separator,
    )

    for doc_file in parsed:
        try:
            if output_dir:
                path = writer.write_file_doc(doc_file)
                click.echo(f"Wrote {path}")
            else:
                content = writer.render_file(doc_file)
                if content:
                    click.echo(content)
        except MissingSeparatorError as e:
            raise click.ClickException(f"{doc_file.file_path}: {e}") from e

    if output_dir and parsed:
        index = writer.write_index(parsed)
        click.echo(f"Wrote {index}")

    if failed:
        raise click.exceptions.Exit(1)


@cli.command()
@click.argument("files", nargs=-1, required=True, type=click.Path(dir_okay=False))
@click.option("--marker", default=None, help="Doc-comment marker token.")
@click.pass_obj
def inspect(config: AppConfig, files: tuple[str, ...], marker: Optional[str]) -> None:
    """Print the parsed doc comments of FILES as JSON."""
    parsed, failed = _parse_files(_make_parser(config, marker), files)
    click.echo(render_json(parsed))

    if failed:
        raise click.exceptions.Exit(1)
