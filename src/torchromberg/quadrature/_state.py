"""Process-wide switches read and written by :func:`integral`.

Two pieces of state are shared by every call in the process:

``abort``
    Sticky. Set to ``True`` whenever :func:`integral` stops without meeting
    either tolerance. Nothing in the package clears it; call
    :func:`reset_abort` before a call whose convergence you want to check.

``return_point_count``
    Fallback for :func:`integral` calls that do not pass
    ``return_point_count`` explicitly.

Neither is synchronized. Concurrent calls from several threads race on them;
use :func:`romberg_info` when the outcome of a single call matters.
"""

_abort = False
_return_point_count = False


def abort_flag() -> bool:
    """Return ``True`` if any :func:`integral` call since the last reset aborted."""
    return _abort


def reset_abort() -> None:
    """Clear the sticky abort flag."""
    global _abort
    _abort = False


def _set_abort() -> None:
    global _abort
    _abort = True


def return_point_count() -> bool:
    """Return the process-wide point-count preference."""
    return _return_point_count


def set_return_point_count(enabled: bool) -> None:
    """
    Set the process-wide point-count preference.

    Parameters
    ----------
    enabled : bool
        If True, :func:`integral` calls that leave ``return_point_count`` as
        ``None`` return ``(estimate, num_points)`` instead of ``estimate``.
    """
    global _return_point_count
    _return_point_count = bool(enabled)
