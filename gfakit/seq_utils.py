from . import config
from .errors import WeirdError, FormatError

# Watson-Crick complements, plus IUPAC ambiguity codes. Characters not in
# this table (e.g. "=" and "." in GFA sequences) are their own complement.
COMPLEMENTS = str.maketrans(
    "ACGTUNRYSWKMBDHVacgtunryswkmbdhv",
    "TGCAANYRSWMKVHDBtgcaanyrswmkvhdb",
)


def is_placeholder(value):
    """Returns True if a sequence / overlap is the GFA placeholder ("*")."""
    return value == config.PLACEHOLDER


def reverse_complement(seq):
    """Returns the reverse complement of a sequence.

    The placeholder sequence ("*") is its own reverse complement.
    """
    if is_placeholder(seq):
        return seq
    return seq.translate(COMPLEMENTS)[::-1]


def oriented(seq, orientation):
    """Returns seq as read on the strand given by orientation."""
    if orientation == config.FWD:
        return seq
    elif orientation == config.REV:
        return reverse_complement(seq)
    else:
        raise FormatError(f"Unrecognized orientation: {orientation}")


def n50(seq_lengths):
    """Determines the N50 statistic of an assembly, given its seq lengths.

    Note that multiple definitions of the N50 statistic exist (see
    https://en.wikipedia.org/wiki/N50,_L50,_and_related_statistics for
    more information).

    Here, we sum lengths from the longest to the shortest, and report the
    length at which the running sum first reaches (or exceeds) half of the
    total length.
    """
    if len(seq_lengths) == 0:
        raise WeirdError("Can't compute the N50 of an empty list")
    sorted_lengths = sorted(seq_lengths, reverse=True)
    i = 0
    running_sum = 0
    half_total_length = 0.5 * sum(sorted_lengths)
    while running_sum < half_total_length:
        if i >= len(sorted_lengths):
            # This should never happen, but just in case
            raise WeirdError("Bizarre N50 error; should never happen")
        running_sum += sorted_lengths[i]
        i += 1
    # Return length of shortest seq that was used in the running sum
    return sorted_lengths[i - 1]


def quartiles(seq_lengths):
    """Returns (min, lower quartile, median, upper quartile, max) lengths.

    The three inner values are read from the ascending list of lengths at the
    0-indexed positions n//4 - 1, n//2 - 1, and 3n//4 - 1. For graphs with
    fewer than four segments some of these positions are -1, which (as with
    any Python list) refers to the longest length.
    """
    if len(seq_lengths) == 0:
        raise WeirdError("Can't compute the quartiles of an empty list")
    sl = sorted(seq_lengths)
    n = len(sl)
    return (
        sl[0],
        sl[(n // 4) - 1],
        sl[(n // 2) - 1],
        sl[((n * 3) // 4) - 1],
        sl[-1],
    )
