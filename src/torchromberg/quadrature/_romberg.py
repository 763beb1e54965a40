"""Adaptive Romberg integration."""

import logging
import math
import warnings
from typing import Callable, Optional, Tuple, Union

import torch
from torch import Tensor

from torchromberg.quadrature._exceptions import (
    IntegrationError,
    QuadratureWarning,
)
from torchromberg.quadrature._result import RombergResult, RombergStatus
from torchromberg.quadrature._richardson import richardson_extrapolate
from torchromberg.quadrature._trapezoid import (
    trapezoid_endpoints,
    trapezoid_refine,
)

logger = logging.getLogger(__name__)

DEFAULT_REL_ERR = 1e-15
DEFAULT_ABS_ERR = 1e-40
DEFAULT_MAX_SPLIT = 16
DEFAULT_MIN_SPLIT = 5


def _bounds(
    a: Union[float, Tensor], b: Union[float, Tensor]
) -> Tuple[Tensor, Tensor]:
    # Working dtype/device come from whichever bound is a floating tensor.
    dtype = torch.float64
    device = torch.device("cpu")
    for bound in (a, b):
        if isinstance(bound, Tensor) and bound.is_floating_point():
            dtype = bound.dtype
            device = bound.device
            break

    def to_tensor(bound):
        if isinstance(bound, Tensor):
            return bound.detach().to(dtype=dtype, device=device).reshape(())
        return torch.tensor(float(bound), dtype=dtype, device=device)

    lo, hi = to_tensor(a), to_tensor(b)
    if lo > hi:
        lo, hi = hi, lo
    return lo, hi


def _romberg(
    f: Callable[[Tensor], Union[Tensor, float]],
    a: Union[float, Tensor],
    b: Union[float, Tensor],
    rel_err: Optional[float],
    abs_err: Optional[float],
    max_split: Optional[int],
    min_split: Optional[int],
) -> RombergResult:
    rel_err = rel_err or DEFAULT_REL_ERR
    abs_err = abs_err or DEFAULT_ABS_ERR
    max_split = max_split or DEFAULT_MAX_SPLIT
    min_split = min_split or DEFAULT_MIN_SPLIT

    lo, hi = _bounds(a, b)

    step_len = hi - lo
    total = trapezoid_endpoints(f, lo, hi)
    estimate = total * step_len
    row = [estimate]
    estimates = [estimate.item()]

    split = 1
    steps = 2
    while True:
        # Past this point the new midpoints would coincide with the bounds.
        if bool(lo + step_len / steps == lo) or bool(hi - step_len / steps == hi):
            logger.debug(
                "romberg: precision floor reached at split=%d on [%r, %r]",
                split,
                lo.item(),
                hi.item(),
            )
            return RombergResult(
                estimate=estimate,
                error=_error(estimates),
                converged=False,
                status=RombergStatus.PRECISION_FLOOR,
                num_points=steps // 2 + 1,
                num_splits=split - 1,
                estimates=estimates,
            )

        total = trapezoid_refine(f, total, lo, step_len, steps // 2)
        row.insert(0, total * step_len / 2)
        new_estimate = richardson_extrapolate(row)

        old = estimates[-1]
        new = new_estimate.item()
        estimates.append(new)
        diff = abs(new - old)

        logger.debug(
            "romberg: split=%d points=%d estimate=%.17g diff=%.3g",
            split,
            steps + 1,
            new,
            diff,
        )

        if split >= min_split and (diff < abs_err or diff < rel_err * abs(old)):
            status = RombergStatus.CONVERGED
        elif split == max_split:
            logger.debug(
                "romberg: max_split=%d reached without convergence", max_split
            )
            status = RombergStatus.MAX_SPLIT
        else:
            estimate = new_estimate
            split += 1
            step_len = step_len / 2
            steps *= 2
            continue

        return RombergResult(
            estimate=new_estimate,
            error=diff,
            converged=status == RombergStatus.CONVERGED,
            status=status,
            num_points=steps + 1,
            num_splits=split,
            estimates=estimates,
        )


def _error(estimates) -> float:
    if len(estimates) < 2:
        return math.inf
    return abs(estimates[-1] - estimates[-2])


def _validate(a, b, max_split, min_split) -> None:
    for name, bound in (("a", a), ("b", b)):
        value = bound.detach() if isinstance(bound, Tensor) else bound
        if isinstance(value, Tensor) and value.numel() != 1:
            raise ValueError(
                f"{name} must be a scalar, got shape {tuple(value.shape)}"
            )
        if not math.isfinite(float(value)):
            raise ValueError(f"{name} must be finite, got {float(value)}")
    if max_split is not None and max_split < 0:
        raise ValueError(f"max_split must be non-negative, got {max_split}")
    if min_split is not None and min_split < 0:
        raise ValueError(f"min_split must be non-negative, got {min_split}")


def romberg_info(
    f: Callable[[Tensor], Union[Tensor, float]],
    a: Union[float, Tensor],
    b: Union[float, Tensor],
    *,
    rel_err: Optional[float] = None,
    abs_err: Optional[float] = None,
    max_split: Optional[int] = None,
    min_split: Optional[int] = None,
) -> RombergResult:
    """
    Like :func:`romberg`, but returns the full :class:`RombergResult`.

    Never raises or warns for non-convergence and never touches the
    process-wide abort flag; inspect ``result.status`` instead.

    Returns
    -------
    RombergResult
        ``estimate``, ``error``, ``converged``, ``status``, ``num_points``,
        ``num_splits`` and the per-depth ``estimates``.

    Raises
    ------
    ValueError
        If a bound is not a finite scalar or a split count is negative.

    Examples
    --------
    >>> result = romberg_info(lambda x: x**2, 0, 1)
    >>> result.status
    'converged'
    >>> result.num_points == 2**result.num_splits + 1
    True
    """
    _validate(a, b, max_split, min_split)
    return _romberg(f, a, b, rel_err, abs_err, max_split, min_split)


def romberg(
    f: Callable[[Tensor], Union[Tensor, float]],
    a: Union[float, Tensor],
    b: Union[float, Tensor],
    *,
    rel_err: Optional[float] = None,
    abs_err: Optional[float] = None,
    max_split: Optional[int] = None,
    min_split: Optional[int] = None,
) -> Tensor:
    """
    Compute a definite integral using Romberg's method.

    The interval is halved repeatedly; each halving adds one trapezoid
    estimate, and Richardson extrapolation over all estimates so far yields
    a degree ``2 * split`` polynomial fit. Refinement stops once
    ``min_split`` is reached and successive Romberg estimates agree to
    ``abs_err`` or ``rel_err``.

    Parameters
    ----------
    f : callable
        Integrand. Called once per sample point with a 0-d tensor of the
        working dtype; returns a 0-d tensor or a Python scalar. Must be
        finite at ``a``, ``b`` and every sampled midpoint.
    a, b : float or Tensor
        Interval bounds (scalars only, not batched). Order does not matter:
        the smaller bound is always the lower limit, so swapping ``a`` and
        ``b`` does *not* negate the result.
    rel_err : float, optional
        Relative tolerance on successive estimates. Default ``1e-15``.
    abs_err : float, optional
        Absolute tolerance on successive estimates. Default ``1e-40``.
    max_split : int, optional
        Maximum number of halvings; at most ``2 ** max_split + 1`` points
        are sampled. Default ``16``.
    min_split : int, optional
        Minimum number of halvings before the tolerances are checked.
        Default ``5``.

    ``None`` or ``0`` selects the default for any of the four options.

    Returns
    -------
    Tensor
        0-d integral estimate.

    Raises
    ------
    IntegrationError
        If ``max_split`` halvings do not meet either tolerance.
    ValueError
        If a bound is not a finite scalar or a split count is negative.

    Warns
    -----
    QuadratureWarning
        If the step length reaches the floating-point precision floor of the
        working dtype before the tolerances are met. The best estimate so
        far is returned.

    Notes
    -----
    The working dtype is that of a floating tensor bound, else ``float64``.
    Differentiable with respect to parameters captured in ``f``'s closure.
    Gradients through the bounds are not supported.

    Examples
    --------
    Simpson weights after one halving already integrate x**2 exactly, so
    the call stops at ``min_split``:

    >>> romberg(lambda x: x**2, 0, 1)  # 1/3
    >>> romberg_info(lambda x: x**2, 0, 1).num_points  # 2**5 + 1
    33

    >>> theta = torch.tensor(2.0, requires_grad=True, dtype=torch.float64)
    >>> result = romberg(lambda x: theta * x**2, 0, 1)
    >>> result.backward()  # theta.grad is approximately 1/3
    """
    result = romberg_info(
        f,
        a,
        b,
        rel_err=rel_err,
        abs_err=abs_err,
        max_split=max_split,
        min_split=min_split,
    )

    if result.status == RombergStatus.MAX_SPLIT:
        tolerance = max(
            abs_err or DEFAULT_ABS_ERR,
            (rel_err or DEFAULT_REL_ERR) * abs(result.estimates[-2]),
        )
        raise IntegrationError(
            f"Romberg integration failed to converge after {result.num_splits} splits "
            f"({result.num_points} points). Error estimate: {result.error:.2e}, "
            f"tolerance: {tolerance:.2e}",
            result=result,
        )

    if result.status == RombergStatus.PRECISION_FLOOR:
        warnings.warn(
            f"Step length reached the floating-point precision floor after "
            f"{result.num_splits} splits; returning the best estimate "
            f"(error estimate: {result.error:.2e}).",
            QuadratureWarning,
            stacklevel=2,
        )

    return result.estimate
