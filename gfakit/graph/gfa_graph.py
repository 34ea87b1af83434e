# Copyright (C) 2024-- The gfakit Development Team
#
# This file is part of gfakit.
#
# gfakit is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# gfakit is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with gfakit.  If not, see <http://www.gnu.org/licenses/>.

import logging
from collections import Counter
from copy import deepcopy
from gfakit import config
from gfakit.misc_utils import pluralize
from gfakit.errors import (
    GfaError,
    ArgumentError,
    LineMissingError,
    NotUniqueError,
)
from . import connectivity, linear_paths, multiplication
from .record import Header, Comment
from .segment import Segment
from .link import Link, Containment
from .path import Path
from .lines import parse_line

# States of named entities (segments and paths). An entity that is neither
# virtual nor real is absent: the graph doesn't store anything about it.
ABSENT = "absent"
VIRTUAL = "virtual"
REAL = "real"


class Entity(object):
    """Bookkeeping for a segment or path name.

    An entity is "real" if a record defining it is in the graph, and
    "virtual" if it's only referenced by other records (e.g. a link pointing
    to a segment that hasn't been added yet).

    Attributes
    ----------
    name: str

    uid: int or None
        Unique ID of the record defining this entity; None if it's virtual.

    refs: set of int
        Unique IDs of the records referring to this entity.
    """

    def __init__(self, name):
        self.name = name
        self.uid = None
        self.refs = set()

    @property
    def state(self):
        return REAL if self.uid is not None else VIRTUAL

    def __repr__(self):
        return f"Entity {self.name} ({self.state}, {len(self.refs)} refs)"


class GfaGraph(object):
    """In-memory representation of a GFA graph.

    The graph owns all of its records. Records are kept in the order in which
    they were added, and written out in that order.

    References between records don't need to be resolvable when they're
    added: a link can be added before the segments it connects. Names that
    are referenced but not defined yet are "virtual"; validate() raises an
    error if any virtual names remain, so that once a whole file has been
    loaded we can be sure every reference is satisfied.

    Records are identified inside the graph by integer unique IDs (their
    .uid attribute), and back-references (which records mention a segment)
    are stored as sets of these IDs.
    """

    def __init__(
        self,
        validate=config.DEFAULT_VALIDATE,
        segments_first=False,
        progress=None,
    ):
        """Initializes an empty GfaGraph.

        Parameters
        ----------
        validate: int
            Validation level (see config.py) used for lines added as text,
            and for the validation done at the end of read_file().

        segments_first: bool
            If True, links, containments and paths may only refer to
            segments that are already in the graph; referring to an unknown
            segment raises a LineMissingError right away.

        progress: callable or None
            If given, this is called as progress(operation, done, total)
            during long operations. See log_utils.ProgressLogger.
        """
        self.validation_level = validate
        self.segments_first = segments_first
        self.progress = progress
        # Maps unique IDs to records. Python dicts preserve insertion order,
        # and we never re-insert a key, so this is also the output order.
        self._records = {}
        self._next_uid = 0
        self._segments = {}
        self._paths = {}

    ###########################################################################
    # Adding and removing records
    ###########################################################################

    def _entity_table(self, record):
        if isinstance(record, Segment):
            return self._segments
        elif isinstance(record, Path):
            return self._paths
        return None

    def _check_addable(self, record, replacing=None):
        """Raises an error if record can't be added to the graph.

        If replacing is given, record will take the place of that record, so
        record may reuse its name.
        """
        if record.uid is not None:
            raise ArgumentError(
                f"{record!r} already belongs to a graph; add a copy of it "
                "instead."
            )
        table = self._entity_table(record)
        if table is not None:
            ent = table.get(record.name)
            if ent is not None and ent.uid is not None:
                if replacing is None or ent.uid != replacing.uid:
                    hr = config.RECORD_TYPE2HR[record.RECORD_TYPE]
                    raise NotUniqueError(
                        f"There is already a {hr} named {record.name} in the "
                        f"graph:\n{self._records[ent.uid]}"
                    )
        if self.segments_first:
            for name in record.references():
                if name not in self._segments:
                    raise LineMissingError(
                        f"Segment {name} does not exist (and segments must "
                        f"be added before the lines referring to them):\n"
                        f"{record}"
                    )

    def _attach(self, record, uid):
        record.uid = uid
        self._records[uid] = record
        table = self._entity_table(record)
        if table is not None:
            table.setdefault(record.name, Entity(record.name)).uid = uid
        for name in record.references():
            self._segments.setdefault(name, Entity(name)).refs.add(uid)

    def _detach(self, record):
        """Removes record from the name indices (but not from _records)."""
        table = self._entity_table(record)
        if table is not None:
            ent = table[record.name]
            ent.uid = None
            if len(ent.refs) == 0:
                del table[record.name]
        for name in record.references():
            ent = self._segments[name]
            ent.refs.discard(record.uid)
            if ent.uid is None and len(ent.refs) == 0:
                del self._segments[name]

    def append(self, line):
        """Adds a line to the graph.

        Parameters
        ----------
        line: str or Record
            Strings are parsed using the graph's validation level.

        Returns
        -------
        Record
            The record that was added.

        Raises
        ------
        FormatError, GfaTypeError
            If line is a str that can't be parsed.

        NotUniqueError
            If line defines a segment or path whose name is already defined.

        LineMissingError
            If segments_first is True and line refers to an unknown segment.

        ArgumentError
            If line is a record that already belongs to a graph.
        """
        if isinstance(line, str):
            record = parse_line(line, validate=self.validation_level)
        else:
            record = line
        self._check_addable(record)
        self._attach(record, self._next_uid)
        self._next_uid += 1
        return record

    def extend(self, lines):
        """Appends every line in an iterable of lines.

        If any line can't be added, none of them are: the graph is restored
        to its state before the call, and the error is re-raised.
        """
        checkpoint = self._checkpoint()
        try:
            for line in lines:
                self.append(line)
        except GfaError:
            self._rollback(checkpoint)
            raise

    def _checkpoint(self):
        return (
            dict(self._records),
            deepcopy(self._segments),
            deepcopy(self._paths),
            self._next_uid,
        )

    def _rollback(self, checkpoint):
        """Undoes all appends done since checkpoint was taken."""
        records, segments, paths, next_uid = checkpoint
        for uid, record in self._records.items():
            if uid not in records:
                record.uid = None
        self._records = records
        self._segments = segments
        self._paths = paths
        self._next_uid = next_uid

    def _get_own_record(self, record):
        if record.uid is None or self._records.get(record.uid) is not record:
            raise ArgumentError(f"{record!r} is not a line of this graph")
        return record

    def replace_record(self, old, new):
        """Puts new in the place of old (keeping old's position and uid).

        This is how records already in the graph should be edited if the
        edit touches their references or their name: copy, edit the copy,
        and replace.

        Raises
        ------
        ArgumentError
            If old isn't in this graph, or new is already in a graph.

        NotUniqueError
            If new defines a name already defined by another record.

        LineMissingError
            If segments_first is True and new refers to an unknown segment.
        """
        self._get_own_record(old)
        self._check_addable(new, replacing=old)
        uid = old.uid
        self._detach(old)
        old.uid = None
        self._attach(new, uid)
        return new

    def delete_record(self, record, cascade=False):
        """Removes a record from the graph.

        If record is a segment that other records still refer to, it becomes
        virtual (unless cascade is True, in which case those other records
        are removed as well).
        """
        self._get_own_record(record)
        to_delete = []
        if cascade and isinstance(record, Segment):
            to_delete = self.references_of(record.name)
        to_delete.append(record)
        for r in to_delete:
            self._detach(r)
            del self._records[r.uid]
            r.uid = None

    def delete(self, kind, name, cascade=False):
        """Removes the segment or path with a given name.

        Parameters
        ----------
        kind: str
            config.SEGMENT or config.PATH.

        name: str

        cascade: bool
            For segments: if True, also remove every link, containment, and
            path referring to the segment.

        Raises
        ------
        ArgumentError
            If kind isn't config.SEGMENT or config.PATH.

        LineMissingError
            If no such segment / path is defined.
        """
        if kind == config.SEGMENT:
            record = self.get_segment(name)
        elif kind == config.PATH:
            record = self.get_path(name)
        else:
            raise ArgumentError(
                f'Can only delete segments ("{config.SEGMENT}") and paths '
                f'("{config.PATH}") by name; got "{kind}".'
            )
        self.delete_record(record, cascade=cascade)

    def delete_segment(self, name, cascade=False):
        self.delete(config.SEGMENT, name, cascade=cascade)

    def delete_path(self, name):
        self.delete(config.PATH, name)

    ###########################################################################
    # Queries
    ###########################################################################

    @property
    def records(self):
        return list(self._records.values())

    def _records_of_type(self, cls):
        return [r for r in self._records.values() if type(r) is cls]

    @property
    def segments(self):
        return self._records_of_type(Segment)

    @property
    def links(self):
        return self._records_of_type(Link)

    @property
    def containments(self):
        return self._records_of_type(Containment)

    @property
    def paths(self):
        return self._records_of_type(Path)

    @property
    def headers(self):
        return self._records_of_type(Header)

    @property
    def comments(self):
        return self._records_of_type(Comment)

    @property
    def segment_names(self):
        return [s.name for s in self.segments]

    @property
    def path_names(self):
        return [p.name for p in self.paths]

    @property
    def header(self):
        """The merged contents of all H lines, as a single Header.

        If a tag occurs in multiple H lines, the last occurrence wins. The
        returned Header is a copy; use set_header_tag() to edit the graph's
        header.
        """
        merged = Header(validate=self.validation_level)
        for h in self.headers:
            for name, tag in h.copy().tags.items():
                merged.tags[name] = tag
        return merged

    def set_header_tag(self, name, value, datatype=None):
        """Sets a header tag.

        The tag is changed in the last H line defining it; if no H line
        defines it, it's added to the first H line (and if there are no H
        lines, a new one is added to the graph).
        """
        headers = self.headers
        target = None
        for h in headers:
            if name in h.tags:
                target = h
        if target is None:
            if len(headers) > 0:
                target = headers[0]
            else:
                target = self.append(Header(validate=self.validation_level))
        target.set(name, value, datatype=datatype)

    def _state(self, table, name):
        if name not in table:
            return ABSENT
        return table[name].state

    def segment_state(self, name):
        """Returns ABSENT, VIRTUAL, or REAL."""
        return self._state(self._segments, name)

    def path_state(self, name):
        return self._state(self._paths, name)

    def has_segment(self, name):
        return self.segment_state(name) == REAL

    def has_path(self, name):
        return self.path_state(name) == REAL

    def _get_defined(self, table, name, hr):
        ent = table.get(name)
        if ent is None or ent.uid is None:
            raise LineMissingError(f"There is no {hr} named {name}")
        return self._records[ent.uid]

    def get_segment(self, name):
        """Returns the Segment with a name.

        Raises
        ------
        LineMissingError
            If the segment is absent or virtual.
        """
        return self._get_defined(self._segments, name, "segment")

    def get_path(self, name):
        return self._get_defined(self._paths, name, "path")

    def references_of(self, name):
        """Returns the records referring to a segment name, in graph order."""
        ent = self._segments.get(name)
        if ent is None:
            return []
        return [self._records[uid] for uid in sorted(ent.refs)]

    def links_of(self, segment_end):
        """Returns the links incident on a SegmentEnd, in graph order."""
        return [
            r
            for r in self.references_of(segment_end.name)
            if type(r) is Link and segment_end in r.ends()
        ]

    def containments_of(self, name):
        return [
            r for r in self.references_of(name) if type(r) is Containment
        ]

    def paths_of(self, name):
        return [r for r in self.references_of(name) if type(r) is Path]

    ###########################################################################
    # Validation
    ###########################################################################

    def _validate_references(self):
        for table, hr in ((self._segments, "Segment"), (self._paths, "Path")):
            for ent in table.values():
                if ent.uid is None:
                    reflines = "\n".join(
                        str(self._records[uid]) for uid in sorted(ent.refs)
                    )
                    raise LineMissingError(
                        f"{hr} {ent.name} does not exist\nReferences to "
                        f"{ent.name} were found in the following lines:\n"
                        f"{reflines}"
                    )

    def _validate_path_links(self):
        supported = set()
        for link in self.links:
            supported.add((link.from_segment, link.to_segment))
            rc = link.reverse()
            supported.add((rc.from_segment, rc.to_segment))
        for path in self.paths:
            for step, next_step in path.implied_links():
                if (step, next_step) not in supported:
                    raise LineMissingError(
                        f"Link {step.name} {step.orient} {next_step.name} "
                        f"{next_step.orient} does not exist, but is required "
                        f"by the path:\n{path}"
                    )

    def validate(self):
        """Checks that every reference in the graph is satisfied.

        Raises
        ------
        LineMissingError
            If some segment or path is referenced but not defined, or if two
            consecutive steps of a path are not connected by a link (in
            either direction).
        """
        self._validate_references()
        self._validate_path_links()

    ###########################################################################
    # Comparison, copying, and I/O
    ###########################################################################

    def equals(self, other):
        """Order-insensitive comparison of two graphs.

        Returns True if the two graphs contain the same segment and link
        lines (in any order). Other line types are ignored.
        """
        return Counter(str(s) for s in self.segments) == Counter(
            str(s) for s in other.segments
        ) and Counter(str(l) for l in self.links) == Counter(
            str(l) for l in other.links
        )

    def __eq__(self, other):
        if not isinstance(other, GfaGraph):
            return NotImplemented
        return (
            self.segments == other.segments
            and self.links == other.links
            and self.containments == other.containments
            and self.headers == other.headers
            and self.paths == other.paths
        )

    def clone(self):
        """Returns a deep copy of this graph.

        The copy has the same records (in the same order, with the same
        uids), the same entity states, and the same settings. The progress
        observer is shared, not copied.
        """
        cpy = GfaGraph(
            validate=self.validation_level,
            segments_first=self.segments_first,
            progress=self.progress,
        )
        cpy._records = deepcopy(self._records)
        cpy._segments = deepcopy(self._segments)
        cpy._paths = deepcopy(self._paths)
        cpy._next_uid = self._next_uid
        return cpy

    def __str__(self):
        return "".join(f"{r}{config.LINE_SEP}" for r in self._records.values())

    def __repr__(self):
        return (
            f"GfaGraph ({pluralize(len(self.segments), 'segment')}, "
            f"{pluralize(len(self.links), 'link')}, "
            f"{pluralize(len(self.paths), 'path')})"
        )

    def to_file(self, filename):
        """Writes the graph to a GFA file (overwriting it if it exists)."""
        logger = logging.getLogger(__name__)
        with open(filename, "w") as f:
            for r in self._records.values():
                f.write(f"{r}{config.LINE_SEP}")
        logger.debug(
            f'Wrote {pluralize(len(self._records), "line")} to "{filename}".'
        )

    def read_file(self, filename):
        """Adds all lines of a GFA file to this graph.

        Empty lines are skipped. If the validation level is at least 1,
        validate() is called once the whole file has been read. If reading or
        validating fails, the lines read from the file are removed again (so
        the graph is left as it was before the call) and the error is
        re-raised.

        Returns
        -------
        GfaGraph
            This graph.
        """
        logger = logging.getLogger(__name__)
        logger.debug(f'Reading GFA file "{filename}"...')
        total = 0
        if self.progress is not None:
            with open(filename, "r") as f:
                total = sum(1 for _ in f)
        checkpoint = self._checkpoint()
        try:
            with open(filename, "r") as f:
                for i, line in enumerate(f, 1):
                    line = line.rstrip(config.LINE_SEP)
                    if len(line) > 0:
                        self.append(line)
                    if self.progress is not None:
                        self.progress("Reading GFA file", i, total)
            logger.debug(
                f"...Done. Read {pluralize(len(self._records), 'line')}."
            )
            if self.validation_level >= config.VALIDATE_FORMAT:
                self.validate()
        except GfaError:
            self._rollback(checkpoint)
            raise
        return self

    @classmethod
    def from_file(cls, filename, validate=config.DEFAULT_VALIDATE, **kwargs):
        """Creates a GfaGraph from a GFA file. See read_file()."""
        return cls(validate=validate, **kwargs).read_file(filename)

    ###########################################################################
    # Graph algorithms; see the corresponding modules for details
    ###########################################################################

    def dead_ends(self):
        return connectivity.dead_ends(self)

    def n_dead_ends(self):
        return connectivity.n_dead_ends(self)

    def connected_components(self):
        return connectivity.connected_components(self)

    def info(self, short=False):
        return connectivity.info(self, short=short)

    def linear_path(self, name):
        return linear_paths.linear_path(self, name)

    def linear_paths(self):
        return linear_paths.linear_paths(self)

    def merge_linear_path(self, steps, merged_name=None):
        return linear_paths.merge_linear_path(
            self, steps, merged_name=merged_name
        )

    def merge_linear_paths(self):
        return linear_paths.merge_linear_paths(self)

    def multiply(
        self,
        name,
        factor,
        copy_names=None,
        link_assignment=None,
        path_copy=0,
    ):
        return multiplication.multiply(
            self,
            name,
            factor,
            copy_names=copy_names,
            link_assignment=link_assignment,
            path_copy=path_copy,
        )
