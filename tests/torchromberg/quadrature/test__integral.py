import math

import pytest
import torch


class TestIntegral:
    def test_constant(self):
        """Constant integrand gives c * (b - a) without aborting"""
        from torchromberg.quadrature import abort_flag, integral

        area, n = integral(lambda x: 2.5, -1, 3, return_point_count=True)

        assert area.item() == 10.0
        assert n == 2**5 + 1
        assert not abort_flag()

    def test_quadratic(self):
        """x^2 over [0, 1] is 1/3 and leaves the abort flag clear"""
        from torchromberg.quadrature import abort_flag, integral

        area = integral(lambda x: x**2, 0, 1)

        assert math.isclose(area.item(), 1 / 3, rel_tol=1e-14)
        assert not abort_flag()

    @pytest.mark.parametrize("a, b", [(0.0, 1.0), (-2.0, 0.5), (1.0, 10.0)])
    def test_order_independent(self, a, b):
        """Reversed bounds give the same value; the sign is not flipped"""
        from torchromberg.quadrature import integral

        assert torch.equal(integral(torch.exp, a, b), integral(torch.exp, b, a))

    def test_returns_tensor_by_default(self):
        from torchromberg.quadrature import integral

        area = integral(torch.exp, 0, 1)

        assert isinstance(area, torch.Tensor)
        assert area.shape == ()

    def test_positional_options(self):
        """Tolerances and split limits may be passed positionally"""
        from torchromberg.quadrature import abort_flag, integral

        area, n = integral(
            torch.exp, 0, 1, 1e-6, 1e-10, 10, 2, return_point_count=True
        )

        assert math.isclose(area.item(), math.e - 1, rel_tol=1e-6)
        assert n <= 2**10 + 1
        assert not abort_flag()

    def test_falsy_options_select_defaults(self):
        from torchromberg.quadrature import integral

        assert torch.equal(
            integral(torch.exp, 0, 1, 0, 0, 0, 0),
            integral(torch.exp, 0, 1),
        )

    def test_never_raises_on_max_split(self):
        from torchromberg.quadrature import integral

        area = integral(torch.exp, 0, 1, max_split=2)

        assert math.isclose(area.item(), math.e - 1, rel_tol=1e-3)


class TestIntegralAbortFlag:
    def test_max_split_sets_flag(self):
        """Stopping at max_split sets the flag and returns an estimate"""
        from torchromberg.quadrature import abort_flag, integral

        area, n = integral(
            lambda x: torch.sin(50 * x), 0, 1, max_split=2, return_point_count=True
        )

        assert abort_flag()
        assert n == 5
        assert torch.isfinite(area)

    def test_precision_floor_sets_flag(self):
        from torchromberg.quadrature import abort_flag, integral

        area, n = integral(
            lambda x: x, 1.0, 1.0 + 2.0**-50, return_point_count=True
        )

        assert abort_flag()
        assert n == 3
        assert area.item() > 0

    def test_flag_is_sticky(self):
        """A converged call does not clear an earlier abort"""
        from torchromberg.quadrature import abort_flag, integral

        integral(torch.exp, 0, 1, max_split=2)
        assert abort_flag()

        integral(lambda x: x**2, 0, 1)
        assert abort_flag()

    def test_reset(self):
        from torchromberg.quadrature import abort_flag, integral, reset_abort

        integral(torch.exp, 0, 1, max_split=2)
        reset_abort()

        assert not abort_flag()
        integral(lambda x: x**2, 0, 1)
        assert not abort_flag()

    def test_romberg_info_leaves_flag_alone(self):
        from torchromberg.quadrature import abort_flag, romberg_info

        result = romberg_info(torch.exp, 0, 1, max_split=2)

        assert not result.converged
        assert not abort_flag()


class TestIntegralPointCount:
    def test_explicit_keyword(self):
        from torchromberg.quadrature import integral

        result = integral(lambda x: 1.0, 0, 1, return_point_count=True)

        assert isinstance(result, tuple)
        assert result[1] == 33

    def test_process_preference(self):
        from torchromberg.quadrature import integral, set_return_point_count

        set_return_point_count(True)
        area, n = integral(lambda x: 1.0, 0, 1, min_split=3)

        assert area.item() == 1.0
        assert n == 9

    def test_keyword_overrides_preference(self):
        from torchromberg.quadrature import integral, set_return_point_count

        set_return_point_count(True)
        area = integral(lambda x: 1.0, 0, 1, return_point_count=False)

        assert isinstance(area, torch.Tensor)

    def test_count_matches_evaluations(self, recording):
        """Reported count is the number of distinct x values sampled"""
        from torchromberg.quadrature import integral

        f = recording(torch.cos)
        _, n = integral(f, 0, 2, return_point_count=True)

        assert n == len(f.calls) == len(set(f.calls))
        assert math.log2(n - 1).is_integer()

    def test_aborted_count_is_depth_reached(self):
        from torchromberg.quadrature import integral

        _, n = integral(torch.exp, 0, 1, max_split=3, return_point_count=True)

        assert n == 2**3 + 1

    def test_gradient_through_estimate(self):
        from torchromberg.quadrature import integral

        theta = torch.tensor(0.5, requires_grad=True, dtype=torch.float64)
        area, _ = integral(
            lambda x: torch.sin(theta * x), 0, 1, return_point_count=True
        )
        area.backward()

        # d/dtheta of (1 - cos(theta)) / theta
        expected = math.sin(0.5) / 0.5 - (1 - math.cos(0.5)) / 0.25
        assert math.isclose(theta.grad.item(), expected, rel_tol=1e-10)
