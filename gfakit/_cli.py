#!/usr/bin/env python3

import functools
import click
from . import __version__, defaults, descs, config, main
from .errors import GfaError

# Shared by all of the commands that read a graph
graph_argument = click.argument(
    "graph",
    type=click.Path(exists=True, dir_okay=False, readable=True),
)

output_option = click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, writable=True),
    required=True,
    help=descs.OUTPUT,
)

validate_option = click.option(
    "--validate",
    type=click.IntRange(min=config.VALIDATE_NONE, max=config.VALIDATE_FULL),
    default=defaults.VALIDATE,
    show_default=True,
    help=descs.VALIDATE,
)

verbose_option = click.option(
    "--verbose/--no-verbose",
    is_flag=True,
    default=defaults.VERBOSE,
    show_default=True,
    help=descs.VERBOSE,
)


def reports_gfa_errors(f):
    """Makes a command report GfaErrors as ordinary CLI errors.

    Without this, a malformed input file would result in a traceback.
    """

    @functools.wraps(f)
    def wrapper(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except GfaError as err:
            raise click.ClickException(f"{type(err).__name__}: {err}")

    return wrapper


@click.group(
    context_settings={
        # Make gfak -h (or just gfak by itself) show the help text
        "help_option_names": ["-h", "--help"],
        "max_content_width": 87,
    },
    no_args_is_help=True,
)
@click.version_option(__version__, "-v", "--version")
def run_script() -> None:
    """Inspects and simplifies GFA (Graphical Fragment Assembly) graphs."""
    pass


@run_script.command()
@graph_argument
@click.option(
    "--short/--no-short",
    is_flag=True,
    default=defaults.SHORT,
    show_default=True,
    help=descs.SHORT,
)
@validate_option
@click.option(
    "--segments-first/--no-segments-first",
    is_flag=True,
    default=defaults.SEGMENTS_FIRST,
    show_default=True,
    help=descs.SEGMENTS_FIRST,
)
@verbose_option
@reports_gfa_errors
def info(
    graph: str,
    short: bool,
    validate: int,
    segments_first: bool,
    verbose: bool,
) -> None:
    """Prints statistics about a graph."""
    click.echo(
        main.info(
            graph,
            short=short,
            validate=validate,
            segments_first=segments_first,
            verbose=verbose,
        )
    )


@run_script.command()
@graph_argument
@click.option(
    "--segments-first/--no-segments-first",
    is_flag=True,
    default=defaults.SEGMENTS_FIRST,
    show_default=True,
    help=descs.SEGMENTS_FIRST,
)
@verbose_option
@reports_gfa_errors
def validate(graph: str, segments_first: bool, verbose: bool) -> None:
    """Checks that a graph is valid."""
    main.validate(graph, segments_first=segments_first, verbose=verbose)


@run_script.command()
@graph_argument
@output_option
@validate_option
@verbose_option
@reports_gfa_errors
def compact(graph: str, output: str, validate: int, verbose: bool) -> None:
    """Merges all linear paths in a graph."""
    main.compact(graph, output, validate=validate, verbose=verbose)


@run_script.command()
@graph_argument
@click.argument("segment")
@click.argument("factor", type=click.IntRange(min=1))
@output_option
@validate_option
@verbose_option
@reports_gfa_errors
def multiply(
    graph: str,
    segment: str,
    factor: int,
    output: str,
    validate: int,
    verbose: bool,
) -> None:
    """Replaces a segment with FACTOR copies of itself."""
    main.multiply(
        graph, segment, factor, output, validate=validate, verbose=verbose
    )


if __name__ == "__main__":
    run_script()
