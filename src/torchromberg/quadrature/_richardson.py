"""Richardson extrapolation over a Romberg table."""

from typing import List

from torch import Tensor


def richardson_extrapolate(row: List[Tensor]) -> Tensor:
    """
    Raise every entry of a Romberg table by one degree, in place.

    ``row`` is ordered newest first: ``row[0]`` is the trapezoid estimate at
    the current depth and ``row[1:]`` holds the table from the previous depth
    (entry ``td`` is the degree ``td`` estimate). After the pass, entry ``td``
    is the degree ``td`` estimate at the current depth:

    .. math::

        R_{td} \\leftarrow R_{td-1} + \\frac{R_{td-1} - R_{td}}{4^{td} - 1}

    Parameters
    ----------
    row : list of Tensor
        Table with ``split + 1`` entries.

    Returns
    -------
    Tensor
        ``row[-1]``, the Romberg estimate of degree ``split``.
    """
    pow4 = 4
    for td in range(1, len(row)):
        row[td] = row[td - 1] + (row[td - 1] - row[td]) / (pow4 - 1)
        pow4 *= 4
    return row[-1]
