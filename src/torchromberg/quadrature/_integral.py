"""Romberg integration reporting through the process-wide abort flag."""

from typing import Callable, Optional, Tuple, Union

from torch import Tensor

from torchromberg.quadrature import _state
from torchromberg.quadrature._result import RombergStatus
from torchromberg.quadrature._romberg import _romberg


def integral(
    f: Callable[[Tensor], Union[Tensor, float]],
    x1: Union[float, Tensor],
    x2: Union[float, Tensor],
    rel_err: Optional[float] = None,
    abs_err: Optional[float] = None,
    max_split: Optional[int] = None,
    min_split: Optional[int] = None,
    *,
    return_point_count: Optional[bool] = None,
) -> Union[Tensor, Tuple[Tensor, int]]:
    """
    Estimate the integral of ``f`` over ``[x1, x2]`` using Romberg's method.

    Same algorithm and defaults as :func:`romberg`, but non-convergence is
    never raised or warned about. Instead, the sticky process-wide abort
    flag (see :func:`abort_flag`) is set whenever the call stops without
    meeting either tolerance, either because ``max_split`` was reached or
    because the step length hit the floating-point precision floor. The flag
    is never cleared here; call :func:`reset_abort` first if you need to know
    whether *this* call converged.

    Parameters
    ----------
    f : callable
        Integrand, finite at ``x1``, ``x2`` and every sampled midpoint.
    x1, x2 : float or Tensor
        Interval bounds in either order. The result is not negated when
        ``x1 > x2``.
    rel_err, abs_err, max_split, min_split
        As for :func:`romberg`. ``None`` or ``0`` selects the default.
    return_point_count : bool, optional
        If True, return ``(estimate, num_points)``. If None, use the
        process-wide preference set by :func:`set_return_point_count`.

    Returns
    -------
    Tensor or tuple of (Tensor, int)
        The 0-d estimate, optionally with the number of distinct sample
        points, ``2 ** k + 1`` for the depth ``k`` reached.

    Examples
    --------
    >>> reset_abort()
    >>> area, n = integral(lambda x: x**2, 0, 1, return_point_count=True)
    >>> n
    33
    >>> abort_flag()
    False
    """
    result = _romberg(f, x1, x2, rel_err, abs_err, max_split, min_split)

    if result.status != RombergStatus.CONVERGED:
        _state._set_abort()

    if return_point_count is None:
        return_point_count = _state.return_point_count()
    if return_point_count:
        return result.estimate, result.num_points
    return result.estimate
