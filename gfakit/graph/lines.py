from gfakit import config
from gfakit.errors import FormatError
from .record import Header, Comment
from .segment import Segment
from .link import Link, Containment
from .path import Path

# Maps the first field of a line to the class of record it describes. This is
# the complete set of record kinds we support.
RECORD_TYPES = {
    config.HEADER: Header,
    config.SEGMENT: Segment,
    config.LINK: Link,
    config.CONTAINMENT: Containment,
    config.PATH: Path,
    config.COMMENT: Comment,
}


def parse_line(line, validate=config.DEFAULT_VALIDATE):
    """Parses a single line of a GFA file into a record.

    Parameters
    ----------
    line: str
        The line. A trailing newline, if present, is ignored.

    validate: int
        Validation level.

    Returns
    -------
    Record
        An instance of one of the classes in RECORD_TYPES.

    Raises
    ------
    FormatError
        If the record type is unknown, if the line has too few positional
        fields, or (at level >= 1) if a field is malformed.

    GfaTypeError
        At level >= 2, if a tag's value doesn't match its declared type.
    """
    if line.endswith(config.LINE_SEP):
        line = line[:-1]
    if line.startswith(config.COMMENT):
        return Comment(line[len(config.COMMENT) :], validate=validate)
    fields = line.split(config.FIELD_SEP)
    record_type = fields[0]
    if record_type not in RECORD_TYPES:
        raise FormatError(
            f'Unknown record type "{record_type}" in line {line!r}. Should be '
            f"one of {', '.join(RECORD_TYPES)}."
        )
    return RECORD_TYPES[record_type].from_fields(fields[1:], validate=validate)
