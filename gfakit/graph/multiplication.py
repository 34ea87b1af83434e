# Multiplication of segments, e.g. to resolve repeats.
#
# A segment that occurs several times in the underlying genome collapses into
# a single segment in an assembly graph. Multiplying it splits it into
# copies, each of which gets some of its links.

import logging
from gfakit import config
from gfakit.misc_utils import pluralize
from gfakit.errors import ArgumentError
from .segment import Segment
from .link import Link, Containment
from .path import Path


def default_copy_names(name, factor):
    return [f"{name}{config.COPY_NAME_SEP}{i}" for i in range(1, factor + 1)]


def _check_copy_names(graph, name, factor, copy_names):
    if copy_names is None:
        copy_names = default_copy_names(name, factor)
    else:
        copy_names = list(copy_names)
    if len(copy_names) != factor:
        raise ArgumentError(
            f"{pluralize(len(copy_names), 'copy name')} given, but "
            f"{name} is being multiplied by {factor}"
        )
    if len(set(copy_names)) != len(copy_names):
        raise ArgumentError(f"Copy names are not unique: {copy_names}")
    for cn in copy_names:
        if cn != name and graph.has_segment(cn):
            raise ArgumentError(
                f"Can't name a copy of {name} {cn}: there's already a segment "
                "with this name"
            )
    return copy_names


def _check_assignment(factor, num_links, link_assignment):
    if link_assignment is None:
        # Round-robin
        return [i % factor for i in range(num_links)]
    link_assignment = list(link_assignment)
    if len(link_assignment) != num_links:
        raise ArgumentError(
            f"The link assignment has {len(link_assignment):,} entries, but "
            f"there are {pluralize(num_links, 'link')} to assign"
        )
    for i in link_assignment:
        if type(i) is not int or i < 0 or i >= factor:
            raise ArgumentError(
                f"Invalid copy index {i!r} in link assignment: should be an "
                f"integer in the range [0, {factor - 1}]"
            )
    return link_assignment


def _renamed(name, old_name, new_name):
    return new_name if name == old_name else name


def multiply(
    graph,
    name,
    factor,
    copy_names=None,
    link_assignment=None,
    path_copy=0,
):
    """Replaces a segment with multiple copies of it.

    Each copy has the same sequence and tags as the original segment. Each
    link of the original segment is moved to exactly one of the copies;
    containments and paths involving the original are moved to a single
    copy.

    Parameters
    ----------
    graph: GfaGraph

    name: str
        Name of the segment to multiply.

    factor: int
        Number of copies to create (at least 1). The original segment is
        replaced by the first copy, in place.

    copy_names: list of str or None
        Names of the copies. Defaults to name_1, name_2, ..., name_factor.

    link_assignment: list of int or None
        The i-th entry is the index (in copy_names) of the copy that the i-th
        link of the segment (in graph order) is moved to. If None, links are
        assigned round-robin. A link from the segment to itself is moved
        as a whole: both of its ends go to the same copy.

    path_copy: int
        Index of the copy that paths and containments are moved to.

    Returns
    -------
    list of Segment
        The copies.

    Raises
    ------
    ArgumentError
        If the segment doesn't exist, if factor is less than 1, or if any of
        copy_names, link_assignment, and path_copy are invalid. The graph
        isn't modified in any of these cases.
    """
    logger = logging.getLogger(__name__)
    if not graph.has_segment(name):
        raise ArgumentError(f"There is no segment named {name}")
    if type(factor) is not int or factor < 1:
        raise ArgumentError(
            f"Invalid multiplication factor {factor!r}: should be an integer "
            ">= 1"
        )
    copy_names = _check_copy_names(graph, name, factor, copy_names)
    if type(path_copy) is not int or path_copy < 0 or path_copy >= factor:
        raise ArgumentError(
            f"Invalid path copy index {path_copy!r}: should be an integer in "
            f"the range [0, {factor - 1}]"
        )
    original = graph.get_segment(name)
    refs = graph.references_of(name)
    links = [r for r in refs if type(r) is Link]
    assignment = _check_assignment(factor, len(links), link_assignment)

    validate = graph.validation_level
    copies = [
        Segment(
            cn,
            original.sequence,
            tags=original.copy().tags,
            validate=validate,
        )
        for cn in copy_names
    ]
    new_refs = []
    for link, copy_idx in zip(links, assignment):
        cn = copy_names[copy_idx]
        new_refs.append(
            (
                link,
                Link(
                    _renamed(link.from_name, name, cn),
                    link.from_orient,
                    _renamed(link.to_name, name, cn),
                    link.to_orient,
                    link.overlap,
                    tags=link.copy().tags,
                    validate=validate,
                ),
            )
        )
    pcn = copy_names[path_copy]
    for r in refs:
        if type(r) is Containment:
            new_refs.append(
                (
                    r,
                    Containment(
                        _renamed(r.container_name, name, pcn),
                        r.container_orient,
                        _renamed(r.contained_name, name, pcn),
                        r.contained_orient,
                        r.pos,
                        r.overlap,
                        tags=r.copy().tags,
                        validate=validate,
                    ),
                )
            )
        elif type(r) is Path:
            new_refs.append(
                (
                    r,
                    Path(
                        r.name,
                        [
                            (_renamed(s.name, name, pcn), s.orient)
                            for s in r.steps
                        ],
                        r.overlaps if len(r.overlaps) > 0 else None,
                        tags=r.copy().tags,
                        validate=validate,
                    ),
                )
            )

    graph.replace_record(original, copies[0])
    for cpy in copies[1:]:
        graph.append(cpy)
    for old, new in new_refs:
        graph.replace_record(old, new)
    logger.debug(f"Multiplied segment {name} into {factor:,} copies.")
    return copies


def copy_number_from_coverage(
    segment,
    single_copy_coverage,
    count_tag=config.DEFAULT_COUNT_TAG,
    unit_length=config.DEFAULT_UNIT_LENGTH,
):
    """Estimates how many copies of a segment there are in the genome.

    The segment's coverage is computed from one of its count tags as
    count * unit_length / length; this is divided by the coverage expected
    for a single-copy segment, and rounded to the nearest integer (but never
    below 1, since the segment is in the graph after all).

    Parameters
    ----------
    segment: Segment

    single_copy_coverage: float
        Must be positive.

    count_tag: str
        E.g. "RC" (read count) or "KC" (k-mer count).

    unit_length: int
        Length of the units counted by count_tag (e.g. 1 for read counts
        expressed in bases, or the k-mer size for KC tags).

    Returns
    -------
    int

    Raises
    ------
    ArgumentError
        If single_copy_coverage isn't positive, if the segment doesn't have
        the count tag, or if its length is unknown or zero.
    """
    if single_copy_coverage <= 0:
        raise ArgumentError(
            f"Single-copy coverage must be positive; got {single_copy_coverage}"
        )
    count = segment.get_count(count_tag)
    if count is None:
        raise ArgumentError(
            f"Segment {segment.name} has no {count_tag} tag, so its coverage "
            "can't be computed"
        )
    length = segment.length_or_raise()
    if length == 0:
        raise ArgumentError(
            f"Segment {segment.name} has length 0, so its coverage can't be "
            "computed"
        )
    coverage = count * unit_length / length
    return max(1, int(coverage / single_copy_coverage + 0.5))
