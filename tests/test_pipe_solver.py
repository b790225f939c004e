"""
Unit tests for the Darcy-Weisbach pipe solver (Q, D or hf unknown).
"""

import math
from dataclasses import replace

import pytest

from hydrosolve.core.hydraulics.friction import colebrook_f
from hydrosolve.core.hydraulics.water import kvisc
from hydrosolve.core.models.errors import InputError
from hydrosolve.core.models.pipe import PipeFlowInput
from hydrosolve.core.postprocess.typed import Q_
from hydrosolve.core.solver.pipe_solver import pipe_solve_mode, solve_pipe_flow


class TestSolveHeadloss:
    """Forward evaluation: hf from Q and D."""

    def test_eng_two_mile_line(self, eng_pipe_input):
        """4 cfs, 20 in, 2 mi, ks=0.0005 ft, water at 60 degF."""
        st = solve_pipe_flow(eng_pipe_input)

        # independent evaluation of the same formulas
        D = 20.0 / 12.0
        nu = kvisc(60.0, "Eng")
        V = 4.0 / (math.pi * D ** 2 / 4.0)
        Re = V * D / nu
        f = colebrook_f(Re=Re, eps_over_D=0.0005 / D)
        hf = f * (10560.0 / D) * V ** 2 / (2.0 * 32.2)

        assert st.solved_for == "headloss"
        assert st.units == "Eng"
        assert st.reynolds == pytest.approx(Re, rel=1e-12)
        assert st.friction_factor == pytest.approx(f, rel=1e-12)
        assert st.headloss == pytest.approx(hf, rel=1e-9)
        assert st.velocity == pytest.approx(V, rel=1e-12)

        # worked values: Re = 2.50e5, f = 0.0173, hf = 5.72 ft
        assert st.reynolds == pytest.approx(2.50e5, rel=5e-3)
        assert st.friction_factor == pytest.approx(0.0173, abs=5e-5)
        assert st.headloss == pytest.approx(5.72, abs=5e-3)
        assert st.warnings == ()

    def test_si_result(self, si_pipe_input):
        st = solve_pipe_flow(si_pipe_input)
        assert st.headloss > 0.0
        assert st.relative_roughness == pytest.approx(4.5e-5 / 0.2)
        assert st.area == pytest.approx(math.pi * 0.04 / 4.0)


class TestRoundTrip:
    """Solve hf, then recover Q and D from it."""

    def test_recover_flow(self, si_pipe_input):
        st = solve_pipe_flow(si_pipe_input)
        back = solve_pipe_flow(replace(si_pipe_input, flow=None, headloss=st.headloss))
        assert back.solved_for == "flow"
        assert back.flow == pytest.approx(0.05, rel=1e-7)
        assert back.friction_factor == pytest.approx(st.friction_factor, rel=1e-6)

    def test_recover_diameter(self, si_pipe_input):
        st = solve_pipe_flow(si_pipe_input)
        back = solve_pipe_flow(replace(si_pipe_input, diameter=None, headloss=st.headloss))
        assert back.solved_for == "diameter"
        assert back.diameter == pytest.approx(0.2, rel=1e-7)

    def test_recover_flow_eng(self, eng_pipe_input):
        st = solve_pipe_flow(eng_pipe_input)
        back = solve_pipe_flow(replace(eng_pipe_input, flow=None, headloss=st.headloss))
        assert back.flow == pytest.approx(4.0, rel=1e-7)

    def test_recover_diameter_eng(self, eng_pipe_input):
        st = solve_pipe_flow(eng_pipe_input)
        back = solve_pipe_flow(replace(eng_pipe_input, diameter=None, headloss=st.headloss))
        assert back.diameter == pytest.approx(20.0 / 12.0, rel=1e-7)


class TestInputErrors:
    """Validation happens before any root finding."""

    def test_no_unknown(self, si_pipe_input):
        with pytest.raises(InputError, match="exactly one"):
            solve_pipe_flow(replace(si_pipe_input, headloss=5.0))

    def test_two_unknowns(self, si_pipe_input):
        with pytest.raises(InputError, match="exactly one"):
            solve_pipe_flow(replace(si_pipe_input, flow=None, diameter=None))

    @pytest.mark.parametrize("field", ["length", "roughness", "nu"])
    def test_missing_required(self, si_pipe_input, field):
        with pytest.raises(InputError):
            solve_pipe_flow(replace(si_pipe_input, **{field: None}))

    @pytest.mark.parametrize("field,value", [("diameter", 0.0), ("flow", -1.0), ("roughness", 0.0)])
    def test_non_positive(self, si_pipe_input, field, value):
        with pytest.raises(InputError):
            solve_pipe_flow(replace(si_pipe_input, **{field: value}))

    def test_bad_units_label(self, si_pipe_input):
        with pytest.raises(InputError):
            solve_pipe_flow(replace(si_pipe_input, units="furlongs"))


class TestRegimeAndTyping:
    """Warning labels, pint inputs and typed outputs."""

    def test_low_reynolds_label(self, si_pipe_input):
        st = solve_pipe_flow(replace(si_pipe_input, flow=1e-5, diameter=0.1))
        assert st.reynolds < 4000.0
        assert any("Re < 4000" in w for w in st.warnings)

    def test_large_relative_roughness_warns(self, si_pipe_input):
        st = solve_pipe_flow(replace(si_pipe_input, roughness=0.02))
        assert any("ks/D" in w for w in st.warnings)

    def test_pint_inputs(self, si_pipe_input):
        tagged = replace(si_pipe_input, flow=Q_(50.0, "liter/second"), diameter=Q_(200.0, "mm"))
        assert solve_pipe_flow(tagged).headloss == pytest.approx(solve_pipe_flow(si_pipe_input).headloss, rel=1e-12)

    def test_return_typed(self, eng_pipe_input):
        st = solve_pipe_flow(replace(eng_pipe_input, return_typed=True))
        plain = solve_pipe_flow(eng_pipe_input)
        assert st.headloss.to("m").magnitude == pytest.approx(plain.headloss * 0.3048, rel=1e-9)
        assert st.flow.magnitude == pytest.approx(4.0)
        assert st.reynolds.dimensionless


class TestIdempotence:
    """Identical inputs give identical outputs."""

    def test_same_state(self, si_pipe_input):
        inp = replace(si_pipe_input, flow=None, headloss=10.0)
        assert solve_pipe_flow(inp) == solve_pipe_flow(inp)

    def test_mode_dispatch(self, si_pipe_input):
        assert pipe_solve_mode(si_pipe_input) == "headloss"
        assert pipe_solve_mode(replace(si_pipe_input, flow=None)) == "flow"
        assert pipe_solve_mode(replace(si_pipe_input, diameter=None)) == "diameter"

    def test_from_dict_aliases(self):
        inp = PipeFlowInput.from_dict({"Q": 0.05, "D": 0.2, "L": 1000, "ks": 4.5e-5, "nu": 1e-6})
        assert inp.flow == 0.05 and inp.headloss is None
        assert inp.units == "SI"
