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
from gfakit.cigar import Overlap, parse_overlap_list
from gfakit.errors import FormatError
from .record import Record, check_field
from .segment import OrientedSegment


def parse_steps(text, validate=config.DEFAULT_VALIDATE):
    """Parses the segment names field of a path (e.g. "1+,4-").

    Returns
    -------
    list of OrientedSegment
    """
    if validate >= config.VALIDATE_FORMAT:
        check_field(
            text, config.PATH_STEPS_PATT, "segment names", config.PATH
        )
    return [
        OrientedSegment(token[:-1], token[-1:]) for token in text.split(",")
    ]


def format_steps(steps):
    return ",".join(f"{s.name}{s.orient}" for s in steps)


def format_overlaps(overlaps):
    if len(overlaps) == 0:
        return config.PLACEHOLDER
    return ",".join(str(o) for o in overlaps)


class Path(Record):
    """A P line: a named walk through a list of oriented segments.

    Attributes
    ----------
    name: str

    steps: list of OrientedSegment
        The oriented segments visited by the path, in order.

    overlaps: list of Overlap
        Either empty (the overlaps field was "*") or one overlap per junction
        between consecutive steps.
    """

    RECORD_TYPE = config.PATH
    NUM_FIELDS = 3

    def __init__(
        self,
        name,
        steps,
        overlaps=None,
        tags=None,
        validate=config.DEFAULT_VALIDATE,
    ):
        """Initializes this Path.

        Parameters
        ----------
        name: str

        steps: list of (name, orient) pairs, or str
            If a str, this is parsed like the second field of a P line.

        overlaps: list of (Overlap or str), or str, or None
            If a str, this is parsed like the third field of a P line. None
            is the same as "*".
        """
        super().__init__(tags=tags, validate=validate)
        if validate >= config.VALIDATE_FORMAT:
            check_field(name, config.NAME_PATT, "name", self.RECORD_TYPE)
        self.name = name
        if isinstance(steps, str):
            self.steps = parse_steps(steps, validate=validate)
        else:
            self.steps = [OrientedSegment(n, o) for n, o in steps]
        if overlaps is None:
            self.overlaps = []
        elif isinstance(overlaps, str):
            self.overlaps = parse_overlap_list(overlaps, validate=validate)
        else:
            self.overlaps = [
                o if isinstance(o, Overlap) else Overlap(o, validate=validate)
                for o in overlaps
            ]
        if validate >= config.VALIDATE_FORMAT:
            self._check_steps()

    def _check_steps(self):
        if len(self.steps) < 1:
            raise FormatError(f"Path {self.name} doesn't visit any segments")
        for step in self.steps:
            check_field(step.name, config.NAME_PATT, "step name", config.PATH)
            check_field(
                step.orient,
                config.ORIENTATION_PATT,
                "step orientation",
                config.PATH,
            )
        num_junctions = len(self.steps) - 1
        if len(self.overlaps) > 0 and len(self.overlaps) != num_junctions:
            raise FormatError(
                f"Path {self.name} visits {len(self.steps):,} segment(s), so "
                f"it should have {num_junctions:,} overlap(s) (or "
                f"{config.PLACEHOLDER}); it has {len(self.overlaps):,}."
            )

    @classmethod
    def _from_positional(cls, fields, tags, validate):
        return cls(fields[0], fields[1], fields[2], tags=tags, validate=validate)

    def positional_fields(self):
        return [
            self.name,
            format_steps(self.steps),
            format_overlaps(self.overlaps),
        ]

    def references(self):
        # Unique names, in the order in which they're first visited
        return list(dict.fromkeys(s.name for s in self.steps))

    def implied_links(self):
        """Returns the (step, next step) pairs this path needs links for."""
        return list(zip(self.steps[:-1], self.steps[1:]))
