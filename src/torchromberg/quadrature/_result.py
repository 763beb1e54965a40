from typing import List, NamedTuple

from torch import Tensor


class RombergStatus:
    """Terminal states of a Romberg call."""

    CONVERGED = "converged"
    PRECISION_FLOOR = "precision_floor"
    MAX_SPLIT = "max_split"


class RombergResult(NamedTuple):
    """Result of :func:`romberg_info`.

    Parameters
    ----------
    estimate : Tensor
        Integral estimate. 0-d, working dtype. Autograd gradients flow
        through this field.
    error : float
        Absolute difference between the last two Romberg estimates.
        ``inf`` if the call stopped before a second estimate existed.
    converged : bool
        True if either tolerance was met.
    status : str
        One of the :class:`RombergStatus` constants.
    num_points : int
        Distinct sample points used, ``2 ** num_splits + 1``.
    num_splits : int
        Refinement depth reached.
    estimates : list of float
        Romberg estimate at each depth ``0 .. num_splits``.
    """

    estimate: Tensor
    error: float
    converged: bool
    status: str
    num_points: int
    num_splits: int
    estimates: List[float]
