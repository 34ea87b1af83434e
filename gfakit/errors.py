class GfaError(Exception):
    """Base class for all of the errors raised when handling GFA data."""

    pass


class FormatError(GfaError):
    """A line, field, or tag does not follow the GFA grammar.

    Examples: wrong number of positional fields for a record type, a tag that
    isn't formatted as NAME:TYPE:VALUE, an odd-length hex string.
    """

    pass


class GfaTypeError(GfaError, TypeError):
    """A tag value does not match its declared type.

    Only raised at validation level 2 or higher. This is also a subclass of
    the builtin TypeError, so code catching TypeError will catch it.
    """

    pass


class InconsistencyError(GfaError):
    """Two pieces of information in the same record contradict each other.

    (For example, a segment's LN tag not matching its sequence length.)
    """

    pass


class LineMissingError(GfaError):
    """A reference points to a segment, path, or link that doesn't exist."""

    pass


class NotUniqueError(GfaError):
    """A segment or path name is already used by another record."""

    pass


class ArgumentError(GfaError, ValueError):
    """The preconditions of a graph operation are not satisfied."""

    pass


class WeirdError(Exception):
    """Something happened that should never happen.

    Used for internal sanity checks; if you see one of these, it's a bug.
    """

    pass
