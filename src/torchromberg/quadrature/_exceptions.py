"""Exceptions for Romberg integration."""


class QuadratureWarning(UserWarning):
    """Step length reached the floating-point precision floor before the
    tolerances were met."""

    pass


class IntegrationError(Exception):
    """``max_split`` halvings did not meet either tolerance.

    Parameters
    ----------
    message : str
        Human-readable description.
    result : RombergResult, optional
        The unconverged result, including the last estimate and the
        per-depth ``estimates``.
    """

    def __init__(self, message, result=None):
        super().__init__(message)
        self.result = result
