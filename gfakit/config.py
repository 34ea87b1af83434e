import re

###############################################################################
# Validation
###############################################################################

# Validation levels. Higher levels include all of the checks done by lower
# levels.
#
# 0: Nothing is checked. Positional fields are stored as given, and tag values
#    are kept as their raw text.
# 1: Positional fields and tag triples are checked against their grammars and
#    tag values are decoded. Reference errors are only reported by
#    GfaGraph.validate() (which bulk loading calls once, at the end).
# 2: Also performs range / charset checks on tag values (e.g. B array
#    overflows) and cross-field consistency checks (e.g. LN vs. sequence).
VALIDATE_NONE = 0
VALIDATE_FORMAT = 1
VALIDATE_FULL = 2
DEFAULT_VALIDATE = VALIDATE_FULL

###############################################################################
# Record types
###############################################################################

HEADER = "H"
SEGMENT = "S"
LINK = "L"
CONTAINMENT = "C"
PATH = "P"
COMMENT = "#"

RECORD_TYPE2HR = {
    HEADER: "header",
    SEGMENT: "segment",
    LINK: "link",
    CONTAINMENT: "containment",
    PATH: "path",
    COMMENT: "comment",
}

FIELD_SEP = "\t"
LINE_SEP = "\n"

# Placeholder used for omitted sequences and overlaps.
PLACEHOLDER = "*"

###############################################################################
# Orientations and segment ends
###############################################################################

FWD = "+"
REV = "-"
ORIENTATIONS = (FWD, REV)

# The two ends of a segment: its beginning and its end, with respect to the
# forward strand.
BEGIN = "B"
END = "E"

###############################################################################
# Positional field grammars
###############################################################################

NAME_PATT = re.compile(r"[!-)+-<>-~][!-~]*")
SEQUENCE_PATT = re.compile(r"\*|[A-Za-z=.]+")
ORIENTATION_PATT = re.compile(r"[+-]")
POSITION_PATT = re.compile(r"[0-9]+")
CIGAR_PATT = re.compile(r"([0-9]+[MIDNSHPX=])+")
CIGAR_OP_PATT = re.compile(r"([0-9]+)([MIDNSHPX=])")
OVERLAP_PATT = re.compile(r"\*|([0-9]+[MIDNSHPX=])+")
PATH_STEPS_PATT = re.compile(
    r"[!-)+-<>-~][!-~]*?[+-](,[!-)+-<>-~][!-~]*?[+-])*"
)

###############################################################################
# Tags
###############################################################################

TAG_NAME_PATT = re.compile(r"[A-Za-z][A-Za-z0-9]")
TAG_TYPES = ("A", "i", "f", "Z", "J", "H", "B")

TAG_INT_PATT = re.compile(r"[-+]?[0-9]+")
TAG_FLOAT_PATT = re.compile(r"[-+]?([0-9]*\.)?[0-9]+([eE][-+]?[0-9]+)?")
TAG_HEX_PATT = re.compile(r"([0-9A-Fa-f][0-9A-Fa-f])+")
# Used for the level 2 charset checks.
TAG_CHAR_PATT = re.compile(r"[!-~]")
TAG_STRING_PATT = re.compile(r"[ !-~]*")

# Element types of B (numeric array) tags, mapped to the numpy dtype used to
# store them. Ordered from the narrowest to the widest integer type, which is
# the order in which we try them when picking a type for a new array.
NUMERIC_ARRAY_SUBTYPES = {
    "c": "int8",
    "C": "uint8",
    "s": "int16",
    "S": "uint16",
    "i": "int32",
    "I": "uint32",
    "f": "float32",
}
INT_SUBTYPES = ("C", "c", "S", "s", "I", "i")

# Tags with a special meaning for segments.
LENGTH_TAG = "LN"
# Count tags (read count, fragment count, k-mer count). These are summed when
# merging linear paths.
COUNT_TAGS = ("RC", "FC", "KC")
DEFAULT_COUNT_TAG = "RC"
DEFAULT_UNIT_LENGTH = 1

###############################################################################
# Graph algorithms
###############################################################################

# Separates the names of merged segments in the default merged segment name
MERGED_NAME_SEP = "_"

# Separates a segment name from the copy number in default multiplied
# segment names
COPY_NAME_SEP = "_"

###############################################################################
# Logging
###############################################################################

# Used to create lines in logging output like =====
SEPBIG = "="
SEPSML = "-"

# Minimum fraction of an operation between two progress log messages
PROGRESS_STEP = 0.1
