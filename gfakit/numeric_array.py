import numpy
from . import config
from .errors import FormatError, GfaTypeError


def _int_bounds(subtype):
    info = numpy.iinfo(config.NUMERIC_ARRAY_SUBTYPES[subtype])
    return int(info.min), int(info.max)


def compute_subtype(values):
    """Returns the narrowest B element type able to hold all of values.

    Floats always get "f". For integers, we try unsigned types before signed
    types of the same width (so [0, 200] is "C" and [-1, 100] is "c").

    Raises
    ------
    GfaTypeError
        If some integer doesn't fit in any element type (i.e. it's outside
        of the int32 / uint32 ranges).
    """
    if any(isinstance(v, (float, numpy.floating)) for v in values):
        return "f"
    if len(values) == 0:
        return "C"
    lo = min(int(v) for v in values)
    hi = max(int(v) for v in values)
    for subtype in config.INT_SUBTYPES:
        smin, smax = _int_bounds(subtype)
        if lo >= smin and hi <= smax:
            return subtype
    raise GfaTypeError(
        f"Integer values in the range [{lo}, {hi}] do not fit in any numeric "
        "array element type."
    )


class NumericArray(object):
    """Homogeneous numeric array: the value of a B tag.

    Values are stored in a numpy array. The element type ("subtype") is one
    of the keys of config.NUMERIC_ARRAY_SUBTYPES.
    """

    def __init__(self, values, subtype=None, check_range=True):
        """Initializes this NumericArray.

        Parameters
        ----------
        values: list or numpy.ndarray
            The numbers in the array.

        subtype: str or None
            Element type of the array. If None, the narrowest element type
            that fits all of the values is used.

        check_range: bool
            If True, values are verified to fit in the element type and are
            stored using the element type's numpy dtype. If False, integers
            are stored as int64 and floats as float64, without checking
            anything; this is used at validation levels below 2.

        Raises
        ------
        FormatError
            If subtype is not a valid element type.

        GfaTypeError
            If check_range is True and some value doesn't fit in subtype.
        """
        values = list(values)
        if subtype is None:
            subtype = compute_subtype(values)
        if subtype not in config.NUMERIC_ARRAY_SUBTYPES:
            raise FormatError(
                f'Invalid numeric array element type "{subtype}". Should be '
                f"one of {list(config.NUMERIC_ARRAY_SUBTYPES)}."
            )
        self.subtype = subtype
        if subtype == "f":
            if check_range:
                fmax = float(numpy.finfo("float32").max)
                for v in values:
                    if numpy.isfinite(v) and abs(float(v)) > fmax:
                        raise GfaTypeError(
                            f"Value {v} is out of the range [{-fmax}, {fmax}] "
                            f'of numeric array element type "{subtype}".'
                        )
                dtype = "float32"
            else:
                dtype = "float64"
        else:
            if check_range:
                smin, smax = _int_bounds(subtype)
                for v in values:
                    if isinstance(v, (float, numpy.floating)):
                        raise GfaTypeError(
                            f"Value {v} is not an integer, but the numeric "
                            f'array has integer element type "{subtype}".'
                        )
                    if int(v) < smin or int(v) > smax:
                        raise GfaTypeError(
                            f"Value {v} is out of the range [{smin}, {smax}] "
                            f'of numeric array element type "{subtype}".'
                        )
                dtype = config.NUMERIC_ARRAY_SUBTYPES[subtype]
            else:
                dtype = "int64"
        try:
            self.values = numpy.array(values, dtype=dtype)
        except OverflowError:
            # Only reachable with check_range=False and gigantic integers
            raise FormatError(
                f"Numeric array values {values} can't be stored as 64-bit "
                "integers."
            )

    def __len__(self):
        return len(self.values)

    def __iter__(self):
        return iter(self.values.tolist())

    def __getitem__(self, i):
        return self.values.tolist()[i]

    def __eq__(self, other):
        if not isinstance(other, NumericArray):
            return NotImplemented
        return self.subtype == other.subtype and numpy.array_equal(
            self.values, other.values
        )

    def __repr__(self):
        return f"NumericArray({self.values.tolist()}, subtype={self.subtype!r})"

    def to_gfa_field(self):
        # str() of numpy scalars gives the shortest representation that
        # round-trips for that dtype (so float32 1.1 is "1.1", not
        # "1.100000023841858").
        return ",".join([self.subtype] + [str(v) for v in self.values])


def decode_numeric_array(raw, validate=config.DEFAULT_VALIDATE):
    """Decodes the value of a B tag (e.g. "c,1,-2,3") into a NumericArray.

    Raises
    ------
    FormatError
        If the element type is invalid or a token isn't a number of the
        right kind.

    GfaTypeError
        At validation level 2 or above, if a value overflows the element
        type.
    """
    parts = raw.split(",")
    subtype = parts[0]
    if subtype not in config.NUMERIC_ARRAY_SUBTYPES:
        raise FormatError(
            f'Numeric array "{raw}" has invalid element type "{subtype}".'
        )
    tokens = parts[1:]
    values = []
    for token in tokens:
        if subtype == "f":
            if config.TAG_FLOAT_PATT.fullmatch(token) is None:
                raise FormatError(
                    f'Numeric array "{raw}" contains the invalid float '
                    f'"{token}".'
                )
            values.append(float(token))
        else:
            if config.TAG_INT_PATT.fullmatch(token) is None:
                raise FormatError(
                    f'Numeric array "{raw}" contains the invalid integer '
                    f'"{token}".'
                )
            values.append(int(token))
    return NumericArray(
        values,
        subtype=subtype,
        check_range=(validate >= config.VALIDATE_FULL),
    )


def encode_numeric_array(array):
    return array.to_gfa_field()
