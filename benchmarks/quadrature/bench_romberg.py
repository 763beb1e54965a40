"""Benchmarks for Romberg integration.

This module times torchromberg.quadrature.romberg against scipy.integrate.quad
and shows how the sample count grows with the requested tolerance.
"""

from __future__ import annotations

import math
import time
from typing import Any, Callable

import numpy as np
import scipy.integrate
import torch

from torchromberg.quadrature import romberg, romberg_info


def benchmark(
    func: Callable,
    *args: Any,
    warmup: int = 3,
    iterations: int = 10,
    **kwargs: Any,
) -> dict[str, float]:
    """Run a simple benchmark on a function.

    Parameters
    ----------
    func : callable
        Function to benchmark.
    *args : Any
        Positional arguments to pass to func.
    warmup : int, optional
        Number of warmup iterations. Default is 3.
    iterations : int, optional
        Number of timed iterations. Default is 10.
    **kwargs : Any
        Keyword arguments to pass to func.

    Returns
    -------
    dict
        Dictionary with timing statistics:
        - 'mean': Mean time in seconds
        - 'std': Standard deviation in seconds
    """
    for _ in range(warmup):
        func(*args, **kwargs)

    times = []
    for _ in range(iterations):
        start = time.perf_counter()
        func(*args, **kwargs)
        times.append(time.perf_counter() - start)

    return {
        "mean": np.mean(times),
        "std": np.std(times),
    }


def format_time(seconds: float) -> str:
    """Format time in appropriate units."""
    if seconds < 1e-3:
        return f"{seconds * 1e6:.3f}us"
    elif seconds < 1:
        return f"{seconds * 1e3:.3f}ms"
    else:
        return f"{seconds:.3f}s"


def print_comparison(
    name: str,
    times: dict[str, dict[str, float]],
) -> None:
    """Print benchmark comparison results for multiple methods."""
    print(f"\n{name}")
    print("-" * len(name))

    fastest_name = min(times.keys(), key=lambda k: times[k]["mean"])
    fastest_time = times[fastest_name]["mean"]

    for method_name, ts_time in times.items():
        slowdown = ts_time["mean"] / fastest_time
        if slowdown > 1.01:
            suffix = f" ({slowdown:.2f}x slower)"
        else:
            suffix = " (fastest)"
        print(
            f"  {method_name}: {format_time(ts_time['mean'])} "
            f"+/- {format_time(ts_time['std'])}{suffix}"
        )


INTEGRANDS = {
    "exp(x) on [0, 1]": (torch.exp, np.exp, 0.0, 1.0),
    "exp(-x^2) on [-2, 2]": (
        lambda x: torch.exp(-(x**2)),
        lambda x: np.exp(-(x**2)),
        -2.0,
        2.0,
    ),
    "1 / (1 + x^2) on [0, 1]": (
        lambda x: 1 / (1 + x**2),
        lambda x: 1 / (1 + x**2),
        0.0,
        1.0,
    ),
    "sin(20 x) on [0, pi]": (
        lambda x: torch.sin(20 * x),
        lambda x: np.sin(20 * x),
        0.0,
        math.pi,
    ),
}


class BenchRomberg:
    """Benchmarks for Romberg integration."""

    def __init__(self, warmup: int = 3, iterations: int = 10):
        self.warmup = warmup
        self.iterations = iterations

    def _bench(
        self, func: Callable, *args: Any, **kwargs: Any
    ) -> dict[str, float]:
        return benchmark(
            func,
            *args,
            warmup=self.warmup,
            iterations=self.iterations,
            **kwargs,
        )

    def bench_compare_scipy(self, rel_err: float = 1e-10) -> None:
        """Compare romberg with scipy.integrate.quad at a matching tolerance.

        Parameters
        ----------
        rel_err : float, optional
            Relative tolerance for both methods. Default is 1e-10.
        """
        for name, (f_torch, f_numpy, a, b) in INTEGRANDS.items():
            times = {
                "romberg": self._bench(
                    romberg_info, f_torch, a, b, rel_err=rel_err, abs_err=1e-12
                ),
                "scipy.quad": self._bench(
                    scipy.integrate.quad, f_numpy, a, b, epsrel=rel_err
                ),
            }
            print_comparison(name, times)

    def run_tolerance_scaling(self) -> None:
        """Print sample count and error as the tolerance tightens."""
        print("\n--- Tolerance Scaling (exp(x) on [0, 1]) ---")
        exact = math.e - 1
        for rel_err in [1e-4, 1e-8, 1e-12, 1e-15]:
            result = romberg_info(torch.exp, 0.0, 1.0, rel_err=rel_err)
            print(
                f"  rel_err={rel_err:.0e}: points={result.num_points:6d} "
                f"status={result.status:16s} "
                f"error={abs(result.estimate.item() - exact):.2e}"
            )

    def run_all(self) -> None:
        """Run all Romberg benchmarks."""
        print("=" * 60)
        print("ROMBERG BENCHMARKS")
        print("=" * 60)

        print("\n--- romberg vs scipy.integrate.quad ---")
        self.bench_compare_scipy()

        self.run_tolerance_scaling()

        print("\n--- Gradient Through Closure ---")
        theta = torch.tensor(2.0, requires_grad=True, dtype=torch.float64)

        def forward_backward():
            theta.grad = None
            romberg(lambda x: torch.exp(theta * x), 0.0, 1.0).backward()

        ts_time = self._bench(forward_backward)
        print(
            f"  exp(theta x): {format_time(ts_time['mean'])} "
            f"+/- {format_time(ts_time['std'])}"
        )


if __name__ == "__main__":
    bench = BenchRomberg(warmup=3, iterations=10)
    bench.run_all()
