"""torchromberg: Romberg integration of scalar functions with PyTorch."""

import logging

from . import quadrature
from .quadrature import (
    IntegrationError,
    QuadratureWarning,
    RombergResult,
    RombergStatus,
    abort_flag,
    integral,
    reset_abort,
    return_point_count,
    romberg,
    romberg_info,
    set_return_point_count,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "quadrature",
    "IntegrationError",
    "QuadratureWarning",
    "RombergResult",
    "RombergStatus",
    "abort_flag",
    "integral",
    "reset_abort",
    "return_point_count",
    "romberg",
    "romberg_info",
    "set_return_point_count",
]

__version__ = "0.1.0"
