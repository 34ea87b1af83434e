# Detection and merging ("compaction") of linear paths.
#
# A linear path is a chain of segments s1, s2, ..., sn in which each junction
# (si, si+1) is the only link at both of the segment ends it connects. Such a
# chain carries no branching information, so it can be replaced by a single
# segment whose sequence is the members' sequences glued together.

import logging
from gfakit import config, seq_utils
from gfakit.misc_utils import pluralize
from gfakit.errors import ArgumentError
from .segment import (
    Segment,
    SegmentEnd,
    OrientedSegment,
    invert_orient,
    opposite_end,
    entry_end,
    exit_end,
)
from .link import Link
from .path import Path


def _extend(graph, segment_end, visited):
    """Walks away from a segment end as long as the chain stays linear.

    Returns a list of the SegmentEnds through which each new segment was
    entered. Names of the new segments are added to visited.
    """
    chain = []
    curr_end = segment_end
    while True:
        links = graph.links_of(curr_end)
        if len(links) != 1:
            break
        next_end = links[0].other_end(curr_end)
        if next_end.name in visited or not graph.has_segment(next_end.name):
            break
        if len(graph.links_of(next_end)) != 1:
            break
        visited.add(next_end.name)
        chain.append(next_end)
        curr_end = SegmentEnd(next_end.name, opposite_end(next_end.end))
    return chain


def linear_path(graph, name):
    """Returns the maximal linear path going through a segment.

    Parameters
    ----------
    graph: GfaGraph

    name: str
        Name of a segment in the graph.

    Returns
    -------
    list of OrientedSegment
        The steps of the linear path. The given segment is traversed in the
        forward orientation. If the segment isn't part of a longer linear
        path, this list will just contain it.

    Raises
    ------
    ArgumentError
        If the segment isn't in the graph.
    """
    if not graph.has_segment(name):
        raise ArgumentError(f"There is no segment named {name}")
    visited = {name}
    fwd = _extend(graph, SegmentEnd(name, config.END), visited)
    bwd = _extend(graph, SegmentEnd(name, config.BEGIN), visited)
    # Walking backwards, we enter each segment at the end we'd leave it
    # through when reading the path forwards
    steps = [
        OrientedSegment(
            se.name, config.FWD if se.end == config.END else config.REV
        )
        for se in reversed(bwd)
    ]
    steps.append(OrientedSegment(name, config.FWD))
    steps.extend(
        OrientedSegment(
            se.name, config.FWD if se.end == config.BEGIN else config.REV
        )
        for se in fwd
    )
    return steps


def linear_paths(graph):
    """Returns all linear paths in the graph containing at least 2 segments.

    Each segment belongs to at most one of the returned paths.
    """
    seen = set()
    out = []
    for name in graph.segment_names:
        if name in seen:
            continue
        steps = linear_path(graph, name)
        seen.update(s.name for s in steps)
        if len(steps) > 1:
            out.append(steps)
    return out


def _junction_links(graph, steps):
    """Checks that steps are a linear path; returns the link of each junction.

    Raises
    ------
    ArgumentError
        If steps isn't a valid linear path in the graph.
    """
    if len(steps) < 2:
        raise ArgumentError("A linear path must contain at least 2 segments")
    names = [s.name for s in steps]
    if len(set(names)) != len(names):
        raise ArgumentError(
            f"Linear path {names} visits the same segment multiple times"
        )
    for s in steps:
        if not graph.has_segment(s.name):
            raise ArgumentError(f"There is no segment named {s.name}")
    junctions = []
    for prev_step, next_step in zip(steps[:-1], steps[1:]):
        prev_end = SegmentEnd(prev_step.name, exit_end(prev_step.orient))
        next_end = SegmentEnd(next_step.name, entry_end(next_step.orient))
        prev_links = graph.links_of(prev_end)
        if (
            len(prev_links) != 1
            or len(graph.links_of(next_end)) != 1
            or prev_links[0].other_end(prev_end) != next_end
        ):
            raise ArgumentError(
                f"{prev_step.name}{prev_step.orient} -> "
                f"{next_step.name}{next_step.orient} is not a linear junction"
            )
        junctions.append(prev_links[0])
    return junctions


def _merged_sequence(members, steps, junctions):
    """Returns (sequence, length) of the segment resulting from a merge.

    Each segment after the first is trimmed at its start by the length of its
    overlap with the previous segment. If any member has no sequence, the
    merged sequence is config.PLACEHOLDER; the length is computed anyway.
    """
    pieces = []
    length = 0
    for i, (seg, step) in enumerate(zip(members, steps)):
        trim = 0
        if i > 0:
            trim = junctions[i - 1].overlap_length_at(
                SegmentEnd(step.name, entry_end(step.orient))
            )
        length += seg.length_or_raise() - trim
        if seg.has_sequence():
            pieces.append(seg.oriented_sequence(step.orient)[trim:])
    if len(pieces) < len(members):
        return config.PLACEHOLDER, length
    return "".join(pieces), length


def _merged_tags(members, sequence, length):
    tags = {}
    if seq_utils.is_placeholder(sequence):
        tags[config.LENGTH_TAG] = length
    for count_tag in config.COUNT_TAGS:
        counts = [m.get_count(count_tag) for m in members]
        if all(c is not None for c in counts):
            tags[count_tag] = sum(counts)
    return tags


def _rewrite_link(link, end_map, validate):
    """Returns a copy of link with its ends moved according to end_map.

    end_map maps SegmentEnds of the merged segments to SegmentEnds of the
    new segment. Ends not in end_map are left alone.
    """
    from_end = end_map.get(link.from_end, link.from_end)
    to_end = end_map.get(link.to_end, link.to_end)
    return Link(
        from_end.name,
        config.FWD if from_end.end == config.END else config.REV,
        to_end.name,
        config.FWD if to_end.end == config.BEGIN else config.REV,
        link.overlap,
        tags=link.copy().tags,
        validate=validate,
    )


def _find_run(path_steps, i, run):
    return path_steps[i : i + len(run)] == run


def _rewrite_path(path, steps, merged_name, validate):
    """Returns a copy of path in which each traversal of steps (in either
    direction) is replaced by a single step through the merged segment.

    Raises
    ------
    ArgumentError
        If the path visits some of the merged segments without traversing
        the whole linear path.
    """
    member_names = set(s.name for s in steps)
    rc_steps = [
        OrientedSegment(s.name, invert_orient(s.orient))
        for s in reversed(steps)
    ]
    new_steps = []
    new_overlaps = []
    has_overlaps = len(path.overlaps) > 0
    i = 0
    while i < len(path.steps):
        if _find_run(path.steps, i, steps):
            new_steps.append(OrientedSegment(merged_name, config.FWD))
        elif _find_run(path.steps, i, rc_steps):
            new_steps.append(OrientedSegment(merged_name, config.REV))
        elif path.steps[i].name in member_names:
            raise ArgumentError(
                f"Path {path.name} only partially traverses the linear path "
                f"{','.join(s.name + s.orient for s in steps)}"
            )
        else:
            new_steps.append(path.steps[i])
            i += 1
            if has_overlaps and i < len(path.steps):
                new_overlaps.append(path.overlaps[i - 1])
            continue
        i += len(steps)
        if has_overlaps and i < len(path.steps):
            new_overlaps.append(path.overlaps[i - 1])
    return Path(
        path.name,
        new_steps,
        new_overlaps if has_overlaps else None,
        tags=path.copy().tags,
        validate=validate,
    )


def merge_linear_path(graph, steps, merged_name=None):
    """Merges the segments of a linear path into a single segment.

    The new segment takes the place of the first segment in the path. Links
    between consecutive segments of the path are removed; other links of the
    path's segments, and paths traversing it, are rewritten to refer to the
    new segment.

    Parameters
    ----------
    graph: GfaGraph

    steps: list of OrientedSegment (or of (name, orient) pairs)
        The linear path, e.g. as returned by linear_path().

    merged_name: str or None
        Name of the new segment. If None, this is the names of the merged
        segments joined with config.MERGED_NAME_SEP.

    Returns
    -------
    Segment
        The new segment.

    Raises
    ------
    ArgumentError
        If steps isn't a linear path of the graph, if the merged name is
        already taken, if one of the segments is part of a containment, if a
        path only partially traverses the linear path, or if some segment's
        length is unknown. The graph isn't modified in any of these cases.
    """
    logger = logging.getLogger(__name__)
    steps = [OrientedSegment(name, orient) for name, orient in steps]
    junctions = _junction_links(graph, steps)
    names = [s.name for s in steps]
    members = [graph.get_segment(n) for n in names]
    if merged_name is None:
        merged_name = config.MERGED_NAME_SEP.join(names)
    if graph.has_segment(merged_name) and merged_name != names[0]:
        raise ArgumentError(
            f"Can't name the merged segment {merged_name}: there's already a "
            "segment with this name"
        )
    for name in names:
        if len(graph.containments_of(name)) > 0:
            raise ArgumentError(
                f"Can't merge segment {name}, since it is part of a "
                "containment"
            )

    # Compute everything we'll change before changing anything
    validate = graph.validation_level
    sequence, length = _merged_sequence(members, steps, junctions)
    merged = Segment(
        merged_name,
        sequence,
        tags=None,
        validate=validate,
    )
    for name, value in _merged_tags(members, sequence, length).items():
        merged.set(name, value)
    end_map = {
        SegmentEnd(steps[0].name, entry_end(steps[0].orient)): SegmentEnd(
            merged_name, config.BEGIN
        ),
        SegmentEnd(steps[-1].name, exit_end(steps[-1].orient)): SegmentEnd(
            merged_name, config.END
        ),
    }
    junction_uids = set(j.uid for j in junctions)
    outer_links = []
    seen_uids = set()
    for name in names:
        for link in graph.references_of(name):
            if type(link) is not Link:
                continue
            if link.uid in junction_uids or link.uid in seen_uids:
                continue
            seen_uids.add(link.uid)
            outer_links.append(
                (link, _rewrite_link(link, end_map, validate))
            )
    path_names = set()
    new_paths = []
    for name in names:
        for path in graph.paths_of(name):
            if path.name not in path_names:
                path_names.add(path.name)
                new_paths.append(
                    (path, _rewrite_path(path, steps, merged_name, validate))
                )

    graph.replace_record(members[0], merged)
    for link in junctions:
        graph.delete_record(link)
    for old_link, new_link in outer_links:
        graph.replace_record(old_link, new_link)
    for old_path, new_path in new_paths:
        graph.replace_record(old_path, new_path)
    for seg in members[1:]:
        graph.delete_record(seg)
    logger.debug(
        f"Merged {pluralize(len(steps), 'segment')} into {merged_name}."
    )
    return merged


def merge_linear_paths(graph):
    """Merges every linear path in the graph.

    Linear paths that can't be merged (see merge_linear_path()) are skipped,
    with a warning.

    Returns
    -------
    list of Segment
        The new segments.
    """
    logger = logging.getLogger(__name__)
    merged = []
    for steps in linear_paths(graph):
        try:
            merged.append(merge_linear_path(graph, steps))
        except ArgumentError as err:
            logger.warning(f"Skipping linear path: {err}")
    logger.info(
        f"Merged {pluralize(len(merged), 'linear path')} in the graph."
    )
    return merged
