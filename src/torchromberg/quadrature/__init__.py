"""
Romberg integration module.

Function-based integration (evaluates callable):
    romberg, romberg_info, integral

Building blocks:
    trapezoid_endpoints, trapezoid_refine, richardson_extrapolate

Process-wide switches used by ``integral``:
    abort_flag, reset_abort, return_point_count, set_return_point_count

Results:
    RombergResult, RombergStatus

Exceptions:
    QuadratureWarning, IntegrationError
"""

from torchromberg.quadrature._exceptions import (
    IntegrationError,
    QuadratureWarning,
)
from torchromberg.quadrature._integral import integral
from torchromberg.quadrature._result import RombergResult, RombergStatus
from torchromberg.quadrature._richardson import richardson_extrapolate
from torchromberg.quadrature._romberg import (
    DEFAULT_ABS_ERR,
    DEFAULT_MAX_SPLIT,
    DEFAULT_MIN_SPLIT,
    DEFAULT_REL_ERR,
    romberg,
    romberg_info,
)
from torchromberg.quadrature._state import (
    abort_flag,
    reset_abort,
    return_point_count,
    set_return_point_count,
)
from torchromberg.quadrature._trapezoid import (
    trapezoid_endpoints,
    trapezoid_refine,
)

__all__ = [
    # Function-based
    "romberg",
    "romberg_info",
    "integral",
    # Building blocks
    "trapezoid_endpoints",
    "trapezoid_refine",
    "richardson_extrapolate",
    # Process-wide switches
    "abort_flag",
    "reset_abort",
    "return_point_count",
    "set_return_point_count",
    # Results
    "RombergResult",
    "RombergStatus",
    # Defaults
    "DEFAULT_REL_ERR",
    "DEFAULT_ABS_ERR",
    "DEFAULT_MAX_SPLIT",
    "DEFAULT_MIN_SPLIT",
    # Exceptions
    "QuadratureWarning",
    "IntegrationError",
]
