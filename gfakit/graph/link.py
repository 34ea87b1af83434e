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

from gfakit import config
from gfakit.cigar import Overlap
from gfakit.errors import FormatError, WeirdError
from .record import Record, check_field
from .segment import (
    SegmentEnd,
    OrientedSegment,
    invert_orient,
    entry_end,
    exit_end,
)


def make_overlap(overlap, validate):
    if isinstance(overlap, Overlap):
        return overlap
    return Overlap(overlap, validate=validate)


def check_position(pos, record_type):
    if type(pos) is not int or pos < 0:
        raise FormatError(
            f"Invalid position {pos!r} in {config.RECORD_TYPE2HR[record_type]}"
            " line: should be a non-negative integer"
        )


class Link(Record):
    """An L line: an edge from one oriented segment to another.

    A link "A + B -" means that the end of A (read forwards) is followed by
    the reverse complement of B. Each link also implies its reverse
    complement ("B + A -" here); both describe the same edge.
    """

    RECORD_TYPE = config.LINK
    NUM_FIELDS = 5

    def __init__(
        self,
        from_name,
        from_orient,
        to_name,
        to_orient,
        overlap=config.PLACEHOLDER,
        tags=None,
        validate=config.DEFAULT_VALIDATE,
    ):
        super().__init__(tags=tags, validate=validate)
        self.from_name = from_name
        self.from_orient = from_orient
        self.to_name = to_name
        self.to_orient = to_orient
        self.overlap = make_overlap(overlap, validate)
        if validate >= config.VALIDATE_FORMAT:
            t = self.RECORD_TYPE
            check_field(from_name, config.NAME_PATT, "from name", t)
            check_field(
                from_orient, config.ORIENTATION_PATT, "from orientation", t
            )
            check_field(to_name, config.NAME_PATT, "to name", t)
            check_field(
                to_orient, config.ORIENTATION_PATT, "to orientation", t
            )

    @classmethod
    def _from_positional(cls, fields, tags, validate):
        return cls(*fields, tags=tags, validate=validate)

    def positional_fields(self):
        return [
            self.from_name,
            self.from_orient,
            self.to_name,
            self.to_orient,
            self.overlap,
        ]

    def references(self):
        if self.from_name == self.to_name:
            return [self.from_name]
        return [self.from_name, self.to_name]

    @property
    def from_segment(self):
        return OrientedSegment(self.from_name, self.from_orient)

    @property
    def to_segment(self):
        return OrientedSegment(self.to_name, self.to_orient)

    @property
    def from_end(self):
        """The segment end this link leaves from."""
        return SegmentEnd(self.from_name, exit_end(self.from_orient))

    @property
    def to_end(self):
        """The segment end this link arrives at."""
        return SegmentEnd(self.to_name, entry_end(self.to_orient))

    def ends(self):
        return [self.from_end, self.to_end]

    def other_end(self, segment_end):
        """Given one end of this link, returns the end at the other side.

        For a link connecting an end to itself, this returns that same end.
        """
        if segment_end == self.from_end:
            return self.to_end
        elif segment_end == self.to_end:
            return self.from_end
        else:
            raise WeirdError(f"{self} is not incident on {segment_end}")

    def is_self_loop(self):
        return self.from_name == self.to_name

    def connects(self, oseg1, oseg2):
        """Returns True if this link supports going from oseg1 to oseg2.

        Both the link as written and its reverse complement are considered:
        "A + B -" connects (A, +) to (B, -) and (B, +) to (A, -).
        """
        if (self.from_segment, self.to_segment) == (oseg1, oseg2):
            return True
        rc1 = OrientedSegment(oseg2.name, invert_orient(oseg2.orient))
        rc2 = OrientedSegment(oseg1.name, invert_orient(oseg1.orient))
        return (self.from_segment, self.to_segment) == (rc1, rc2)

    def reverse(self):
        """Returns a new Link: the reverse complement of this one."""
        return Link(
            self.to_name,
            invert_orient(self.to_orient),
            self.from_name,
            invert_orient(self.from_orient),
            self.overlap.complement(),
            tags=self.copy().tags,
            validate=self.validate,
        )

    def overlap_length_at(self, segment_end):
        """Length of the overlap on the segment at one end of this link.

        The "from" segment is the reference of the overlap's CIGAR, and the
        "to" segment is the query. A placeholder overlap has length 0.
        """
        if segment_end == self.to_end:
            return self.overlap.length_on_query()
        elif segment_end == self.from_end:
            return self.overlap.length_on_reference()
        else:
            raise WeirdError(f"{self} is not incident on {segment_end}")


class Containment(Record):
    """A C line: the contained segment lies within the container segment,
    starting at position pos (0-based, on the container's forward strand).
    """

    RECORD_TYPE = config.CONTAINMENT
    NUM_FIELDS = 6

    def __init__(
        self,
        container_name,
        container_orient,
        contained_name,
        contained_orient,
        pos,
        overlap=config.PLACEHOLDER,
        tags=None,
        validate=config.DEFAULT_VALIDATE,
    ):
        super().__init__(tags=tags, validate=validate)
        self.container_name = container_name
        self.container_orient = container_orient
        self.contained_name = contained_name
        self.contained_orient = contained_orient
        self.pos = pos
        self.overlap = make_overlap(overlap, validate)
        if validate >= config.VALIDATE_FORMAT:
            t = self.RECORD_TYPE
            check_field(container_name, config.NAME_PATT, "container name", t)
            check_field(
                container_orient,
                config.ORIENTATION_PATT,
                "container orientation",
                t,
            )
            check_field(contained_name, config.NAME_PATT, "contained name", t)
            check_field(
                contained_orient,
                config.ORIENTATION_PATT,
                "contained orientation",
                t,
            )
            check_position(pos, t)

    @classmethod
    def _from_positional(cls, fields, tags, validate):
        pos = fields[4]
        if config.POSITION_PATT.fullmatch(pos) is not None:
            pos = int(pos)
        elif validate >= config.VALIDATE_FORMAT:
            check_field(pos, config.POSITION_PATT, "position", cls.RECORD_TYPE)
        return cls(
            fields[0],
            fields[1],
            fields[2],
            fields[3],
            pos,
            fields[5],
            tags=tags,
            validate=validate,
        )

    def positional_fields(self):
        return [
            self.container_name,
            self.container_orient,
            self.contained_name,
            self.contained_orient,
            self.pos,
            self.overlap,
        ]

    def references(self):
        if self.container_name == self.contained_name:
            return [self.container_name]
        return [self.container_name, self.contained_name]
