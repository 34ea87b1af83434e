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

from copy import deepcopy
from gfakit import config
from gfakit.tags import Tag, decode_tag, decode_tags, encode_tag
from gfakit.errors import FormatError, GfaError, WeirdError


def check_field(value, patt, field_name, record_type):
    """Raises a FormatError if a positional field doesn't match its pattern.

    Parameters
    ----------
    value: str
        The text of the field.

    patt: re.Pattern
        Compiled pattern that the whole field should match.

    field_name: str
        Name of the field, used in the error message.

    record_type: str
        Record type letter, used in the error message.
    """
    if type(value) is not str or patt.fullmatch(value) is None:
        hr = config.RECORD_TYPE2HR[record_type]
        raise FormatError(
            f'Invalid {field_name} "{value}" in {hr} line: should match '
            f"{patt.pattern}"
        )


def coerce_tags(tags, validate):
    """Converts the various ways of passing tags to a name -> Tag dict.

    tags can be None, a dict mapping names to Tags (as produced by
    decode_tags()), or an iterable of Tags and/or "NAME:TYPE:VALUE" strings.
    """
    if tags is None:
        return {}
    if isinstance(tags, dict):
        return dict(tags)
    out = {}
    for t in tags:
        if isinstance(t, str):
            t = decode_tag(t, validate=validate)
        elif not isinstance(t, Tag):
            raise FormatError(f"{t!r} is not a tag")
        if t.name in out and validate >= config.VALIDATE_FORMAT:
            raise FormatError(f"Duplicate tag: {t.name}")
        out[t.name] = t
    return out


class Record(object):
    """Base class of the six kinds of GFA lines.

    Subclasses define RECORD_TYPE (the letter in the first field of the line)
    and NUM_FIELDS (the number of required positional fields following it),
    and implement _from_positional() and positional_fields().

    Each record also has a "uid" attribute. This is None until the record is
    appended to a GfaGraph, which assigns it an integer that is unique within
    that graph. A record belongs to at most one graph.
    """

    RECORD_TYPE = None
    NUM_FIELDS = 0

    def __init__(self, tags=None, validate=config.DEFAULT_VALIDATE):
        self.validate = validate
        self.tags = coerce_tags(tags, validate)
        self.uid = None

    @classmethod
    def from_fields(cls, fields, validate=config.DEFAULT_VALIDATE):
        """Creates a record from the tab-separated fields of a line.

        Parameters
        ----------
        fields: list of str
            The fields of the line, *excluding* the first (record type)
            field.

        validate: int
            Validation level.

        Raises
        ------
        FormatError
            If there are fewer fields than this record type requires, or if
            a field is malformed.
        """
        if len(fields) < cls.NUM_FIELDS:
            hr = config.RECORD_TYPE2HR[cls.RECORD_TYPE]
            raise FormatError(
                f"A {hr} line needs {cls.NUM_FIELDS} positional field(s), "
                f"but only {len(fields)} were given: "
                f"{config.FIELD_SEP.join([cls.RECORD_TYPE] + list(fields))!r}"
            )
        tags = decode_tags(fields[cls.NUM_FIELDS :], validate=validate)
        return cls._from_positional(
            fields[: cls.NUM_FIELDS], tags, validate=validate
        )

    @classmethod
    def _from_positional(cls, fields, tags, validate):
        raise WeirdError(f"{cls.__name__} doesn't implement _from_positional")

    def positional_fields(self):
        raise WeirdError(
            f"{type(self).__name__} doesn't implement positional_fields"
        )

    def references(self):
        """Returns the names of the segments this record refers to."""
        return []

    @property
    def tagnames(self):
        return list(self.tags.keys())

    def get(self, name, default=None):
        """Returns the value of a tag, or default if the tag isn't present."""
        if name in self.tags:
            return self.tags[name].value
        return default

    def get_tag(self, name):
        return self.tags.get(name)

    def get_datatype(self, name):
        if name in self.tags:
            return self.tags[name].datatype
        return None

    def set(self, name, value, datatype=None):
        """Sets the value of a tag, adding the tag if it isn't present yet.

        If datatype is None and the tag already exists, its current type is
        kept; if it doesn't exist, the type is inferred from value.

        If the new value is rejected, the record is left unchanged.
        """
        if datatype is None and name in self.tags:
            datatype = self.tags[name].datatype
        new_tag = Tag.from_value(
            name, value, datatype=datatype, validate=self.validate
        )
        old_tags = dict(self.tags)
        self.tags[name] = new_tag
        if self.validate >= config.VALIDATE_FULL:
            try:
                self._check_consistency()
            except GfaError:
                self.tags = old_tags
                raise

    def delete_tag(self, name):
        """Removes a tag. Does nothing if the tag isn't present."""
        self.tags.pop(name, None)

    def _check_consistency(self):
        pass

    def copy(self):
        """Returns a deep copy of this record that doesn't belong to a graph."""
        cpy = deepcopy(self)
        cpy.uid = None
        return cpy

    def __str__(self):
        return config.FIELD_SEP.join(
            [self.RECORD_TYPE]
            + [str(f) for f in self.positional_fields()]
            + [encode_tag(t) for t in self.tags.values()]
        )

    def __repr__(self):
        return f"{type(self).__name__}({str(self)!r})"

    def __eq__(self, other):
        if not isinstance(other, Record):
            return NotImplemented
        return type(self) is type(other) and str(self) == str(other)


class Header(Record):
    """An H line. Contains nothing but tags (e.g. VN:Z:1.0)."""

    RECORD_TYPE = config.HEADER
    NUM_FIELDS = 0

    @classmethod
    def _from_positional(cls, fields, tags, validate):
        return cls(tags=tags, validate=validate)

    def positional_fields(self):
        return []


class Comment(Record):
    """A comment line: "#" followed by arbitrary text.

    The text is kept exactly as given (including any tabs in it); comments
    don't have tags.
    """

    RECORD_TYPE = config.COMMENT

    def __init__(self, content="", validate=config.DEFAULT_VALIDATE):
        super().__init__(validate=validate)
        self.content = content

    def positional_fields(self):
        return [self.content]

    def set(self, name, value, datatype=None):
        raise FormatError("Comment lines can't have tags")

    def __str__(self):
        return self.RECORD_TYPE + self.content
