"""
Unit tests for the Hazen-Williams pipe solver.
"""

import math
from dataclasses import replace

import pytest

from hydrosolve.core.models.errors import InputError
from hydrosolve.core.models.pipe import HazenWilliamsInput
from hydrosolve.core.solver.hazen_williams_solver import solve_hazen_williams


@pytest.fixture
def hw_input():
    return HazenWilliamsInput(flow=None, diameter=0.3, headloss=5.0, length=1000.0, c_factor=130.0)


class TestHazenWilliams:
    """V = k C R^0.63 S^0.54 with R = D/4."""

    def test_flow_formula(self, hw_input):
        st = solve_hazen_williams(hw_input)
        D, S = 0.3, 5.0 / 1000.0
        V = 0.849 * 130.0 * (D / 4.0) ** 0.63 * S ** 0.54
        assert st.solved_for == "flow"
        assert st.velocity == pytest.approx(V, rel=1e-12)
        assert st.flow == pytest.approx(V * math.pi * D ** 2 / 4.0, rel=1e-12)
        assert st.slope == pytest.approx(S)
        assert st.reynolds is None

    def test_round_trip(self, hw_input):
        Q = solve_hazen_williams(hw_input).flow
        hf = solve_hazen_williams(replace(hw_input, flow=Q, headloss=None)).headloss
        D = solve_hazen_williams(replace(hw_input, flow=Q, diameter=None)).diameter
        assert hf == pytest.approx(5.0, rel=1e-10)
        assert D == pytest.approx(0.3, rel=1e-10)

    def test_english_units(self):
        inp = HazenWilliamsInput(flow=None, diameter=1.0, headloss=10.0, length=1000.0, c_factor=120.0, units="Eng")
        V = 1.318 * 120.0 * 0.25 ** 0.63 * 0.01 ** 0.54
        assert solve_hazen_williams(inp).velocity == pytest.approx(V, rel=1e-12)

    def test_reynolds_with_viscosity(self, hw_input):
        st = solve_hazen_williams(replace(hw_input, nu=1e-6))
        assert st.reynolds == pytest.approx(st.velocity * 0.3 / 1e-6)
        assert st.warnings == ()

    def test_low_reynolds_label_names_hazen_williams(self, hw_input):
        st = solve_hazen_williams(replace(hw_input, headloss=1e-6, nu=1e-3))
        assert st.reynolds < 4000.0
        assert any("Hazen-Williams assumptions" in w for w in st.warnings)
        assert not any("Colebrook" in w for w in st.warnings)

    def test_same_input_same_state(self, hw_input):
        assert solve_hazen_williams(hw_input) == solve_hazen_williams(hw_input)

    def test_two_unknowns(self, hw_input):
        with pytest.raises(InputError):
            solve_hazen_williams(replace(hw_input, diameter=None))

    def test_typed(self, hw_input):
        st = solve_hazen_williams(replace(hw_input, return_typed=True))
        assert st.flow.to("liter/second").magnitude > 0.0
