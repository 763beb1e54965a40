"""Trapezoidal building blocks for Romberg integration."""

from typing import Callable, Union

import torch
from torch import Tensor


def _evaluate(f: Callable[[Tensor], Union[Tensor, float]], x: Tensor) -> Tensor:
    # Python and NumPy scalars are accepted; result is 0-d in x's dtype.
    y = f(x)
    if not isinstance(y, Tensor):
        return torch.as_tensor(y, dtype=x.dtype, device=x.device).reshape(())
    return y.to(dtype=x.dtype, device=x.device).reshape(())


def trapezoid_endpoints(
    f: Callable[[Tensor], Union[Tensor, float]],
    lo: Tensor,
    hi: Tensor,
) -> Tensor:
    """
    Start a trapezoid accumulator from the two interval endpoints.

    Parameters
    ----------
    f : callable
        Integrand. Receives a 0-d tensor, returns a scalar.
    lo, hi : Tensor
        0-d interval bounds, ``lo <= hi``.

    Returns
    -------
    Tensor
        ``(f(lo) + f(hi)) / 2``. Multiplying by ``hi - lo`` gives the
        single-panel trapezoid estimate.
    """
    return (_evaluate(f, lo) + _evaluate(f, hi)) / 2


def trapezoid_refine(
    f: Callable[[Tensor], Union[Tensor, float]],
    total: Tensor,
    lo: Tensor,
    step_len: Tensor,
    n: int,
) -> Tensor:
    """
    Add the integrand at the midpoints introduced by halving the step.

    Parameters
    ----------
    f : callable
        Integrand. Receives a 0-d tensor, returns a scalar.
    total : Tensor
        Accumulator from :func:`trapezoid_endpoints` or a previous refinement.
    lo : Tensor
        Lower bound.
    step_len : Tensor
        Step length *before* halving.
    n : int
        Number of panels before halving. One midpoint is added per panel.

    Returns
    -------
    Tensor
        Updated accumulator. The trapezoid estimate at the new depth is
        ``total * step_len / 2``.

    Notes
    -----
    Midpoints ``lo + (i + 1/2) * step_len`` are evaluated one at a time in
    increasing order, so ``f`` never sees a batch.

    Examples
    --------
    >>> lo = torch.tensor(0.0, dtype=torch.float64)
    >>> hi = torch.tensor(1.0, dtype=torch.float64)
    >>> total = trapezoid_endpoints(lambda x: x**2, lo, hi)
    >>> total = trapezoid_refine(lambda x: x**2, total, lo, hi - lo, 1)
    >>> float(total * (hi - lo) / 2)
    0.375
    """
    half = step_len / 2
    for i in range(n):
        total = total + _evaluate(f, lo + half + i * step_len)
    return total
