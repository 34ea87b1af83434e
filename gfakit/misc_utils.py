def pluralize(num, thing="link"):
    """Pluralizes an integer number of things.

    Parameters
    ----------
    num: int
        Number of things.

    thing: str
        Singular name of the thing.

    Returns
    -------
    str
        If num == 1, then this will be "1 [thing]."
        Otherwise, this will be "[num] [things]."
    """
    if num == 1:
        return f"1 {thing}"
    return f"{num:,} {thing}s"


def fmt_pct(numerator, denominator, na="N/A"):
    """Formats numerator / denominator as a percentage with two decimals."""
    if denominator == 0:
        return na
    return "{:.2f}%".format((numerator * 100) / denominator)
