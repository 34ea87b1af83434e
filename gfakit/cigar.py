# Overlap descriptors: the overlap fields of links, containments and paths.
#
# We don't try to interpret alignments in any depth here. The graph code only
# needs to know how long an overlap is on each of the two sequences involved
# (e.g. to trim sequences when merging linear paths), so that's most of what
# this module provides.

from . import config
from .errors import FormatError

# Operations consuming the reference (the "from" / container sequence) and the
# query (the "to" / contained sequence).
REFERENCE_OPS = ("M", "D", "N", "=", "X")
QUERY_OPS = ("M", "I", "S", "=", "X")
COMPLEMENT_OPS = {"I": "D", "D": "I"}


class Overlap(object):
    """An overlap descriptor: either a CIGAR string or the placeholder "*".

    The original text is kept around and used as the text form of the
    overlap, so e.g. "0010M" is written back out as "0010M".
    """

    def __init__(self, text, validate=config.DEFAULT_VALIDATE):
        """Initializes this Overlap.

        Parameters
        ----------
        text: str
            A CIGAR string (e.g. "12M1I3M") or "*".

        validate: int
            At level 1 or above, text is checked right away. Otherwise the
            check happens the first time the operations are needed.

        Raises
        ------
        FormatError
            If validate >= 1 and text is neither a CIGAR string nor "*".
        """
        self.text = text
        self._operations = None
        if validate >= config.VALIDATE_FORMAT:
            self._parse()

    @classmethod
    def from_operations(cls, operations):
        """Creates an Overlap from a list of (length, op) pairs.

        An empty list gives the placeholder overlap.
        """
        if len(operations) == 0:
            return cls(config.PLACEHOLDER)
        return cls("".join(f"{length}{op}" for length, op in operations))

    def _parse(self):
        if self._operations is not None:
            return self._operations
        if self.is_placeholder():
            self._operations = []
        elif config.CIGAR_PATT.fullmatch(self.text) is None:
            raise FormatError(
                f'Invalid overlap "{self.text}": should be a CIGAR string '
                '(e.g. "10M") or "*".'
            )
        else:
            self._operations = [
                (int(length), op)
                for length, op in config.CIGAR_OP_PATT.findall(self.text)
            ]
        return self._operations

    @property
    def operations(self):
        return list(self._parse())

    def is_placeholder(self):
        return self.text == config.PLACEHOLDER

    def length_on_reference(self):
        return sum(n for n, op in self._parse() if op in REFERENCE_OPS)

    def length_on_query(self):
        return sum(n for n, op in self._parse() if op in QUERY_OPS)

    def complement(self):
        """Returns the overlap as seen from the other sequence's strand.

        This is the overlap to use when a link is read in the opposite
        direction (i.e. for its reverse complement): the operations are
        reversed, and insertions become deletions (and vice versa).
        """
        if self.is_placeholder():
            return Overlap(config.PLACEHOLDER)
        return Overlap.from_operations(
            [(n, COMPLEMENT_OPS.get(op, op)) for n, op in self._parse()[::-1]]
        )

    def __str__(self):
        return self.text

    def __repr__(self):
        return f"Overlap({self.text!r})"

    def __eq__(self, other):
        if not isinstance(other, Overlap):
            return NotImplemented
        return self.text == other.text


def parse_overlap(text, validate=config.DEFAULT_VALIDATE):
    return Overlap(text, validate=validate)


def parse_overlap_list(text, validate=config.DEFAULT_VALIDATE):
    """Parses the comma-separated overlaps field of a path.

    "*" gives an empty list.
    """
    if text == config.PLACEHOLDER:
        return []
    return [Overlap(part, validate=validate) for part in text.split(",")]
