"""Test fixtures for quadrature tests."""

import pytest

from torchromberg.quadrature import reset_abort, set_return_point_count


@pytest.fixture(autouse=True)
def clean_process_state():
    """Every test starts with the abort flag cleared and point counts off."""
    reset_abort()
    set_return_point_count(False)
    yield
    reset_abort()
    set_return_point_count(False)


@pytest.fixture
def recording():
    """Wrap an integrand so every sampled x is recorded in order."""

    def wrap(f):
        calls = []

        def g(x):
            calls.append(x.item())
            return f(x)

        g.calls = calls
        return g

    return wrap
