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

from collections import namedtuple
from gfakit import config, seq_utils
from gfakit.errors import (
    ArgumentError,
    FormatError,
    InconsistencyError,
    GfaTypeError,
    WeirdError,
)
from .record import Record, check_field

# One of the two ends of a segment: end is config.BEGIN or config.END.
SegmentEnd = namedtuple("SegmentEnd", ["name", "end"])

# A segment as traversed in a given direction: orient is config.FWD or
# config.REV.
OrientedSegment = namedtuple("OrientedSegment", ["name", "orient"])


def invert_orient(orient):
    if orient == config.FWD:
        return config.REV
    elif orient == config.REV:
        return config.FWD
    else:
        raise FormatError(f"Unrecognized orientation: {orient}")


def opposite_end(end):
    if end == config.BEGIN:
        return config.END
    elif end == config.END:
        return config.BEGIN
    else:
        raise WeirdError(f"Unrecognized segment end: {end}")


def entry_end(orient):
    """Returns the end through which a segment is entered when traversed in
    the given orientation. (A segment read forwards is entered at its
    beginning.)"""
    return config.BEGIN if orient == config.FWD else config.END


def exit_end(orient):
    return opposite_end(entry_end(orient))


class Segment(Record):
    """An S line: a named sequence fragment (a vertex of the graph).

    Attributes
    ----------
    name: str

    sequence: str
        The sequence, or config.PLACEHOLDER ("*") if it isn't given.
    """

    RECORD_TYPE = config.SEGMENT
    NUM_FIELDS = 2

    def __init__(
        self,
        name,
        sequence=config.PLACEHOLDER,
        tags=None,
        validate=config.DEFAULT_VALIDATE,
    ):
        super().__init__(tags=tags, validate=validate)
        self.name = name
        self.sequence = sequence
        if validate >= config.VALIDATE_FORMAT:
            check_field(name, config.NAME_PATT, "name", self.RECORD_TYPE)
            check_field(
                sequence, config.SEQUENCE_PATT, "sequence", self.RECORD_TYPE
            )
            self.declared_length()
        if validate >= config.VALIDATE_FULL:
            self._check_consistency()

    @classmethod
    def _from_positional(cls, fields, tags, validate):
        return cls(fields[0], fields[1], tags=tags, validate=validate)

    def positional_fields(self):
        return [self.name, self.sequence]

    def has_sequence(self):
        return not seq_utils.is_placeholder(self.sequence)

    @property
    def length(self):
        """Length of the segment: its sequence length, or else the LN tag.

        Returns None if the sequence is "*" and there's no LN tag.
        """
        if self.has_sequence():
            return len(self.sequence)
        return self.declared_length()

    def declared_length(self):
        """Returns the LN tag as an int (None if the segment has no LN tag).

        Raises
        ------
        GfaTypeError
            At validation level >= 1, if the tag's type isn't "i".

        FormatError
            At level 0, if the tag's raw text isn't an integer.
        """
        tag = self.get_tag(config.LENGTH_TAG)
        if tag is None:
            return None
        if self.validate >= config.VALIDATE_FORMAT and tag.datatype != "i":
            raise GfaTypeError(
                f"The {config.LENGTH_TAG} tag of segment {self.name} has type "
                f'"{tag.datatype}", but it should be an integer ("i").'
            )
        if isinstance(tag.value, str):
            # At validation level 0 the tag value is still its raw text
            if config.TAG_INT_PATT.fullmatch(tag.value) is None:
                raise FormatError(
                    f"The {config.LENGTH_TAG} tag of segment {self.name} is "
                    f'not an integer: "{tag.value}"'
                )
            return int(tag.value)
        return tag.value

    def length_or_raise(self):
        length = self.length
        if length is None:
            raise ArgumentError(
                f"The length of segment {self.name} is unknown: its sequence "
                f"is {config.PLACEHOLDER} and it has no {config.LENGTH_TAG} "
                "tag."
            )
        return length

    def get_count(self, name):
        """Returns the numeric value of a count tag (e.g. RC), or None.

        At validation level 0 tag values are kept as text, so this converts
        them to an int or float first.
        """
        value = self.get(name)
        if not isinstance(value, str):
            return value
        for convert in (int, float):
            try:
                return convert(value)
            except ValueError:
                pass
        raise FormatError(
            f'Count tag {name} of segment {self.name} is not a number: "{value}"'
        )

    def _check_consistency(self):
        ln = self.declared_length()
        if ln is not None and self.has_sequence():
            if ln != len(self.sequence):
                raise InconsistencyError(
                    f"Segment {self.name} has a {config.LENGTH_TAG} tag of "
                    f"{ln}, but its sequence is {len(self.sequence):,} "
                    "characters long."
                )

    def oriented_sequence(self, orient):
        return seq_utils.oriented(self.sequence, orient)
