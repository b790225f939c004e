"""
Unit tests for the bracketed scalar root finder.
"""

import math

import pytest

from hydrosolve.core.build.config import RootFinderConfig
from hydrosolve.core.models.errors import ConvergenceError
from hydrosolve.core.numerics.root_finder import expand_bracket, find_root


class TestFindRoot:
    """Brent solve on a valid bracket."""

    def test_sqrt_two(self):
        res = find_root(lambda x: x * x - 2.0, bracket=(0.0, 2.0))
        assert res.root == pytest.approx(math.sqrt(2.0), abs=1e-10)
        assert res.expansions == 0
        assert res.iterations > 0

    def test_initial_guess_builds_bracket(self):
        res = find_root(lambda x: x - 3.0, x0=1.0)
        assert res.root == pytest.approx(3.0, abs=1e-10)

    def test_root_on_bracket_end(self):
        res = find_root(lambda x: x - 1.0, bracket=(1.0, 2.0))
        assert res.root == 1.0
        assert res.iterations == 0

    def test_missing_bracket_and_guess(self):
        with pytest.raises(ValueError):
            find_root(lambda x: x)


class TestBracketExpansion:
    """Automatic expansion when the initial bracket has no sign change."""

    def test_expands_upward(self):
        res = find_root(lambda x: x - 100.0, bracket=(1.0, 2.0))
        assert res.root == pytest.approx(100.0, rel=1e-10)
        assert res.expansions > 0
        lo, hi = res.bracket
        assert lo <= 100.0 <= hi

    def test_expands_downward_toward_zero(self):
        res = find_root(lambda x: x - 1e-3, bracket=(1.0, 2.0), lower_limit=0.0)
        assert res.root == pytest.approx(1e-3, rel=1e-8)

    def test_respects_upper_limit(self):
        lo, hi, glo, ghi, k = expand_bracket(lambda x: x - 5.0, 1.0, 2.0, upper_limit=8.0)
        assert hi <= 8.0
        assert glo * ghi <= 0.0
        assert k >= 1

    def test_no_sign_change_raises(self):
        with pytest.raises(ConvergenceError) as exc:
            find_root(lambda x: x * x + 1.0, bracket=(0.0, 1.0), lower_limit=0.0, upper_limit=10.0)
        assert exc.value.bracket is not None

    def test_budget_exhausted(self):
        cfg = RootFinderConfig(max_expand=3)
        with pytest.raises(ConvergenceError) as exc:
            find_root(lambda x: x - 1e6, bracket=(1.0, 2.0), cfg=cfg)
        assert exc.value.expansions == 3


class TestFailureModes:
    """Never a partially converged value."""

    def test_iteration_budget(self):
        cfg = RootFinderConfig(max_iter=1)
        with pytest.raises(ConvergenceError):
            find_root(lambda x: x ** 3 - 2.0, bracket=(0.0, 10.0), cfg=cfg)

    def test_non_finite_residual(self):
        with pytest.raises(ConvergenceError):
            find_root(lambda x: float("nan"), bracket=(0.0, 1.0))
