"""
Unit tests for the Colebrook friction factor and Darcy-Weisbach helpers.
"""

import math

import pytest

from hydrosolve.core.hydraulics.friction import (
    colebrook_f,
    colebrook_residual,
    friction_factor,
    swamee_jain_f,
)
from hydrosolve.core.hydraulics.headloss import DarcyWeisbach
from hydrosolve.core.models.errors import InputError


RE_GRID = [4000.0, 2.0e4, 1.0e5, 1.0e6, 1.0e7, 1.0e8]
RR_GRID = [0.0, 1e-6, 1e-4, 1e-3, 1e-2, 0.05]


class TestColebrook:
    """Implicit Colebrook solve."""

    @pytest.mark.parametrize("Re", RE_GRID)
    @pytest.mark.parametrize("rr", RR_GRID)
    def test_residual_vanishes(self, Re, rr):
        """|residual(f)| < 1e-6 over the turbulent range."""
        f = colebrook_f(Re=Re, eps_over_D=rr)
        assert abs(colebrook_residual(f, Re=Re, eps_over_D=rr)) < 1e-6
        assert 0.005 < f < 0.1

    def test_smooth_pipe_reference(self):
        """Smooth pipe at Re=1e5: f ~ 0.018 (Moody chart)."""
        f = colebrook_f(Re=1.0e5, eps_over_D=0.0)
        assert f == pytest.approx(0.0180, rel=1e-2)

    def test_fully_rough_limit(self):
        """At very high Re, f tends to the von Karman rough-pipe value."""
        rr = 1e-2
        f_rough = (2.0 * math.log10(3.7 / rr)) ** -2
        f = colebrook_f(Re=1.0e8, eps_over_D=rr)
        assert f == pytest.approx(f_rough, rel=1e-3)

    def test_matches_swamee_jain(self):
        f = colebrook_f(Re=1.0e5, eps_over_D=1e-4)
        assert f == pytest.approx(swamee_jain_f(eps_over_D=1e-4, Re=1.0e5), rel=0.02)

    def test_low_re_still_returns_value(self):
        """Non-turbulent Re gives a nominal f; warnings are the caller's job."""
        f = colebrook_f(Re=1000.0, eps_over_D=1e-3)
        assert f > 0.0

    def test_invalid_reynolds(self):
        with pytest.raises(InputError):
            colebrook_f(Re=0.0, eps_over_D=1e-3)

    def test_negative_roughness(self):
        with pytest.raises(InputError):
            colebrook_f(Re=1e5, eps_over_D=-1e-3)


class TestFrictionFactorHelper:
    """f from V, D, ks, nu."""

    def test_same_as_colebrook(self):
        V, D, ks, nu = 1.5, 0.3, 1.5e-4, 1.0e-6
        expected = colebrook_f(Re=V * D / nu, eps_over_D=ks / D)
        assert friction_factor(ks=ks, V=V, D=D, nu=nu) == pytest.approx(expected, rel=1e-12)

    def test_rejects_zero_velocity(self):
        with pytest.raises(InputError):
            friction_factor(ks=1e-4, V=0.0, D=0.3, nu=1e-6)


class TestDarcyWeisbach:
    """hf = 8 f L Q^2 / (pi^2 g D^5)."""

    def test_headloss_formula(self):
        dw = DarcyWeisbach(g=9.81)
        f, L, D, Q = 0.02, 500.0, 0.25, 0.08
        expected = 8.0 * f * L * Q ** 2 / (math.pi ** 2 * 9.81 * D ** 5)
        assert dw.headloss(f=f, L=L, D=D, Q=Q) == pytest.approx(expected, rel=1e-12)

    def test_diameter_for_inverts_headloss(self):
        dw = DarcyWeisbach(g=32.2)
        hf = dw.headloss(f=0.02, L=1000.0, D=1.2, Q=5.0)
        assert dw.diameter_for(f=0.02, L=1000.0, Q=5.0, hf=hf) == pytest.approx(1.2, rel=1e-12)

    def test_invalid_geometry(self):
        with pytest.raises(ValueError):
            DarcyWeisbach().resistance(f=0.02, L=100.0, D=0.0)
