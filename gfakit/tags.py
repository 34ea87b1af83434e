# This module contains the codec for GFA tags (a.k.a. optional fields): the
# NAME:TYPE:VALUE triples that can follow the positional fields of any line.
#
# A Tag object remembers the raw text it was decoded from. As long as its value
# isn't replaced, encoding it gives back exactly that text -- so a graph that
# is read and written without changes is reproduced byte-for-byte, even if
# (for example) a float was written as "1.50" or an integer as "+3".

import json
import numpy
from . import config
from .numeric_array import (
    NumericArray,
    decode_numeric_array,
    encode_numeric_array,
)
from .errors import FormatError, GfaTypeError


class Tag(object):
    """A single typed tag.

    Attributes
    ----------
    name: str
        Two-character tag name, e.g. "LN".

    datatype: str
        One of config.TAG_TYPES.

    value
        The decoded value: str (A, Z), int (i), float (f), dict / list /
        other JSON value (J), bytes (H), or NumericArray (B). At validation
        level 0 this is just the raw text of the value.

    raw: str or None
        The text this tag's value was decoded from, or None if the value was
        set programmatically.
    """

    def __init__(self, name, datatype, value, raw=None):
        self.name = name
        self.datatype = datatype
        self.value = value
        self.raw = raw

    @classmethod
    def from_value(
        cls, name, value, datatype=None, validate=config.DEFAULT_VALIDATE
    ):
        """Creates a Tag from a Python value.

        Parameters
        ----------
        name: str

        value
            The tag's value.

        datatype: str or None
            If None, the type is inferred from value (see infer_datatype()).

        validate: int
            At level 1 or above the name and datatype are checked; at level 2
            or above value is also checked against datatype.

        Raises
        ------
        FormatError
            If the name or the datatype are invalid (validation level >= 1).

        GfaTypeError
            If value doesn't match datatype (validation level >= 2), or if
            no datatype can be inferred for value.
        """
        if datatype is None:
            datatype = infer_datatype(value)
        if validate >= config.VALIDATE_FORMAT:
            check_name(name)
            check_datatype(datatype, name)
        if validate >= config.VALIDATE_FULL:
            check_value(value, datatype, name)
        return cls(name, datatype, value)

    def __eq__(self, other):
        if not isinstance(other, Tag):
            return NotImplemented
        return encode_tag(self) == encode_tag(other)

    def __repr__(self):
        return f"Tag({encode_tag(self)!r})"


def check_name(name):
    if config.TAG_NAME_PATT.fullmatch(name) is None:
        raise FormatError(
            f'Invalid tag name "{name}". Tag names should be two characters '
            "long: a letter, followed by a letter or digit."
        )


def check_datatype(datatype, name):
    if datatype not in config.TAG_TYPES:
        raise FormatError(
            f'Tag {name} has invalid type "{datatype}". Should be one of '
            f"{', '.join(config.TAG_TYPES)}."
        )


def infer_datatype(value):
    """Picks a GFA tag type for a Python value."""
    # bool is a subclass of int, but True / False aren't GFA integers
    if isinstance(value, bool):
        raise GfaTypeError(f"Can't infer a tag type for the value {value!r}")
    if isinstance(value, (int, numpy.integer)):
        return "i"
    if isinstance(value, (float, numpy.floating)):
        return "f"
    if isinstance(value, str):
        return "Z"
    if isinstance(value, (bytes, bytearray)):
        return "H"
    if isinstance(value, NumericArray):
        return "B"
    if isinstance(value, (dict, list)):
        return "J"
    raise GfaTypeError(f"Can't infer a tag type for the value {value!r}")


def check_value(value, datatype, name):
    """Raises a GfaTypeError if a Python value doesn't fit a tag type."""
    ok = True
    if datatype == "A":
        ok = isinstance(value, str) and (
            config.TAG_CHAR_PATT.fullmatch(value) is not None
        )
    elif datatype == "i":
        ok = isinstance(value, (int, numpy.integer)) and not isinstance(
            value, bool
        )
    elif datatype == "f":
        ok = isinstance(
            value, (int, float, numpy.integer, numpy.floating)
        ) and not isinstance(value, bool)
    elif datatype == "Z":
        ok = isinstance(value, str) and (
            config.TAG_STRING_PATT.fullmatch(value) is not None
        )
    elif datatype == "J":
        try:
            text = json.dumps(value, separators=(",", ":"))
        except (TypeError, ValueError):
            ok = False
        else:
            ok = config.TAG_STRING_PATT.fullmatch(text) is not None
    elif datatype == "H":
        ok = isinstance(value, (bytes, bytearray))
    elif datatype == "B":
        ok = isinstance(value, NumericArray)
    if not ok:
        raise GfaTypeError(
            f"Value {value!r} of tag {name} does not match its declared "
            f'type "{datatype}".'
        )


def decode_value(raw, datatype, name="??", validate=config.DEFAULT_VALIDATE):
    """Decodes the raw text of a tag value according to its type.

    Raises
    ------
    FormatError
        If raw doesn't follow the grammar of datatype (level >= 1).

    GfaTypeError
        If raw follows the grammar but violates a range / charset
        restriction (level >= 2).
    """
    if validate < config.VALIDATE_FORMAT:
        return raw

    full = validate >= config.VALIDATE_FULL
    if datatype == "A":
        if len(raw) != 1:
            raise FormatError(
                f'Tag {name} has type A, but its value "{raw}" is not a '
                "single character."
            )
        if full and config.TAG_CHAR_PATT.fullmatch(raw) is None:
            raise GfaTypeError(
                f"Tag {name} has type A, but its value {raw!r} is not a "
                "printable character."
            )
        return raw
    elif datatype == "i":
        if config.TAG_INT_PATT.fullmatch(raw) is None:
            raise FormatError(
                f'Tag {name} has type i, but its value "{raw}" is not an '
                "integer."
            )
        return int(raw)
    elif datatype == "f":
        if config.TAG_FLOAT_PATT.fullmatch(raw) is None:
            raise FormatError(
                f'Tag {name} has type f, but its value "{raw}" is not a '
                "float."
            )
        return float(raw)
    elif datatype == "Z":
        if full and config.TAG_STRING_PATT.fullmatch(raw) is None:
            raise GfaTypeError(
                f"Tag {name} has type Z, but its value {raw!r} contains "
                "non-printable characters."
            )
        return raw
    elif datatype == "J":
        if full and config.TAG_STRING_PATT.fullmatch(raw) is None:
            raise GfaTypeError(
                f"Tag {name} has type J, but its value {raw!r} contains "
                "non-printable characters."
            )
        try:
            return json.loads(raw)
        except ValueError:
            raise FormatError(
                f'Tag {name} has type J, but its value "{raw}" is not valid '
                "JSON."
            )
    elif datatype == "H":
        if config.TAG_HEX_PATT.fullmatch(raw) is None:
            raise FormatError(
                f'Tag {name} has type H, but its value "{raw}" is not an '
                "even-length string of hexadecimal digits."
            )
        return bytes.fromhex(raw)
    elif datatype == "B":
        return decode_numeric_array(raw, validate=validate)
    else:
        raise FormatError(
            f'Tag {name} has invalid type "{datatype}". Should be one of '
            f"{', '.join(config.TAG_TYPES)}."
        )


def encode_value(value, datatype):
    """Encodes a Python value as the text of a tag of the given type."""
    if datatype == "i":
        return str(int(value))
    elif datatype == "f":
        return repr(float(value))
    elif datatype == "J":
        if isinstance(value, str):
            # Undecoded JSON (validation level 0)
            return value
        return json.dumps(value, separators=(",", ":"))
    elif datatype == "H":
        if isinstance(value, str):
            return value
        return bytes(value).hex().upper()
    elif datatype == "B":
        if isinstance(value, str):
            return value
        return encode_numeric_array(value)
    else:
        return str(value)


def decode_tag(text, validate=config.DEFAULT_VALIDATE):
    """Decodes a NAME:TYPE:VALUE field into a Tag.

    The field is split on its first two colons (so values may contain
    colons). At validation level 0 the name and type are not checked and the
    value is kept as raw text.

    Raises
    ------
    FormatError
        If text contains fewer than two colons (any level); if the name, the
        type, or the value are malformed (level >= 1).

    GfaTypeError
        At level >= 2, if the value violates its type's range / charset.
    """
    parts = text.split(":", 2)
    if len(parts) < 3:
        raise FormatError(
            f'The field "{text}" is not a valid tag. Tags should be formatted '
            "as NAME:TYPE:VALUE."
        )
    name, datatype, raw = parts
    if validate >= config.VALIDATE_FORMAT:
        check_name(name)
        check_datatype(datatype, name)
    value = decode_value(raw, datatype, name=name, validate=validate)
    return Tag(name, datatype, value, raw=raw)


def encode_tag(tag):
    """Encodes a Tag as NAME:TYPE:VALUE.

    If the tag was decoded from text and its value hasn't been replaced
    since, the original text is reproduced exactly.
    """
    if tag.raw is not None:
        raw = tag.raw
    else:
        raw = encode_value(tag.value, tag.datatype)
    return f"{tag.name}:{tag.datatype}:{raw}"


def decode_tags(fields, validate=config.DEFAULT_VALIDATE):
    """Decodes a list of tag fields into a dict mapping names to Tags.

    The dict preserves the order of the fields.

    Raises
    ------
    FormatError
        At level >= 1, if two fields share the same tag name. (At level 0
        the last one wins.)
    """
    tags = {}
    for field in fields:
        tag = decode_tag(field, validate=validate)
        if tag.name in tags and validate >= config.VALIDATE_FORMAT:
            raise FormatError(f"Duplicate tag: {tag.name}")
        tags[tag.name] = tag
    return tags
