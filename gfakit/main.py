#!/usr/bin/env python3
# The functions here are what the gfak commands (see _cli.py) run. Each one
# loads a graph, does something with it, and logs what it's doing.

import logging
from . import defaults
from .log_utils import start_log, log_lines_with_sep, ProgressLogger
from .misc_utils import pluralize
from .graph import GfaGraph


def _load(graph, validate, segments_first, verbose):
    start_log(verbose)
    logger = logging.getLogger(__name__)
    log_lines_with_sep(
        [
            "Settings:",
            f"Graph: {graph}",
            f"Validation level: {validate}",
            f"Segments first?: {segments_first}",
            f"Verbose?: {verbose}",
        ],
        logger.debug,
    )
    g = GfaGraph.from_file(
        graph,
        validate=validate,
        segments_first=segments_first,
        progress=ProgressLogger() if verbose else None,
    )
    logger.info(f"Loaded {g!r}.")
    return g


def info(
    graph: str,
    short: bool = defaults.SHORT,
    validate: int = defaults.VALIDATE,
    segments_first: bool = defaults.SEGMENTS_FIRST,
    verbose: bool = defaults.VERBOSE,
) -> str:
    """Loads a graph and returns its statistics report."""
    g = _load(graph, validate, segments_first, verbose)
    return g.info(short=short)


def validate(
    graph: str,
    segments_first: bool = defaults.SEGMENTS_FIRST,
    verbose: bool = defaults.VERBOSE,
) -> None:
    """Loads a graph with all checks turned on.

    Raises an error (see errors.py) if the graph isn't valid.
    """
    _load(graph, defaults.VALIDATE, segments_first, verbose)
    logging.getLogger(__name__).info("The graph is valid.")


def compact(
    graph: str,
    output: str,
    validate: int = defaults.VALIDATE,
    verbose: bool = defaults.VERBOSE,
) -> None:
    """Merges all linear paths in a graph, and writes the result."""
    logger = logging.getLogger(__name__)
    g = _load(graph, validate, defaults.SEGMENTS_FIRST, verbose)
    merged = g.merge_linear_paths()
    logger.info(
        f"Created {pluralize(len(merged), 'merged segment')}; the graph now "
        f"contains {pluralize(len(g.segments), 'segment')}."
    )
    g.to_file(output)
    logger.info(f'Wrote the compacted graph to "{output}".')


def multiply(
    graph: str,
    segment: str,
    factor: int,
    output: str,
    validate: int = defaults.VALIDATE,
    verbose: bool = defaults.VERBOSE,
) -> None:
    """Multiplies a segment in a graph, and writes the result."""
    logger = logging.getLogger(__name__)
    g = _load(graph, validate, defaults.SEGMENTS_FIRST, verbose)
    copies = g.multiply(segment, factor)
    logger.info(
        f"Replaced segment {segment} with "
        f"{', '.join(c.name for c in copies)}."
    )
    g.to_file(output)
    logger.info(f'Wrote the new graph to "{output}".')
