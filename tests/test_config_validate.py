"""
Unit tests for solver configuration and input validation.
"""

import logging

import pytest

from hydrosolve.core.build.config import (
    DEFAULT_CONFIG,
    FluidConfig,
    RegimeConfig,
    RootFinderConfig,
    SolverConfig,
)
from hydrosolve.core.build.validate import (
    InputValidationError,
    ValidationIssue,
    issue_labels,
    raise_on_errors,
    validate_channel_input,
    validate_circular_input,
    validate_hazen_williams_input,
    validate_pipe_input,
)
from hydrosolve.core.models.channel import ChannelFlowInput, CircularChannelInput
from hydrosolve.core.models.errors import InputError
from hydrosolve.core.models.pipe import HazenWilliamsInput, PipeFlowInput


class TestSolverConfig:
    """from_dict aliases, defaults and validation."""

    def test_defaults(self):
        assert DEFAULT_CONFIG.root.max_iter == 100
        assert DEFAULT_CONFIG.regime.re_turbulent_pipe == 4000.0
        assert DEFAULT_CONFIG.regime.re_turbulent_channel == 2000.0
        assert DEFAULT_CONFIG.fluid.default_temperature("SI") == 20.0
        assert DEFAULT_CONFIG.fluid.default_temperature("Eng") == 68.0

    def test_from_dict_aliases(self):
        cfg = SolverConfig.from_dict({
            "maxiter": "50",
            "re_pipe": 2300,
            "warn": "sí",
            "T_C": 15,
            "config_version": 2,
        })
        assert cfg.root.max_iter == 50
        assert cfg.regime.re_turbulent_pipe == 2300.0
        assert cfg.regime.emit_warnings is True
        assert cfg.fluid.default_temperature_si == 15.0
        assert cfg.version == 2

    def test_string_false(self):
        assert RegimeConfig.from_dict({"warn_near_critical": "no"}).warn_near_critical is False

    @pytest.mark.parametrize(
        "bad",
        [{"xtol": 0}, {"max_iter": 0}, {"expand_factor": 1.0}, {"rtol": 1e-20}],
    )
    def test_invalid_root_config(self, bad):
        with pytest.raises(ValueError):
            RootFinderConfig.from_dict(bad)

    def test_invalid_temperature(self):
        with pytest.raises(ValueError):
            FluidConfig.from_dict({"default_temperature_si": 150})

    def test_invalid_version(self):
        with pytest.raises(ValueError):
            SolverConfig.from_dict({"version": 0})


class TestValidation:
    """Issue lists: errors block the solve, warnings travel with the result."""

    def test_valid_pipe_has_no_issues(self):
        inp = PipeFlowInput(flow=0.05, diameter=0.2, length=100.0, roughness=1e-4, nu=1e-6)
        assert validate_pipe_input(inp) == []

    def test_all_errors_collected(self):
        inp = PipeFlowInput(flow=None, diameter=None, length=-1.0, roughness=None, nu=1e-6)
        errors = [i for i in validate_pipe_input(inp) if i.level == "error"]
        assert len(errors) == 3
        with pytest.raises(InputValidationError) as exc:
            raise_on_errors(errors)
        assert isinstance(exc.value, InputError)
        assert len(exc.value.issues) == 3
        assert "length" in str(exc.value)

    def test_warnings_do_not_raise(self):
        raise_on_errors([ValidationIssue("warning", "just a note")])

    def test_issue_labels_keep_warnings_only(self, caplog):
        issues = [ValidationIssue("error", "bad"), ValidationIssue("warning", "just a note")]
        with caplog.at_level(logging.WARNING, logger="hydrosolve.core.build.validate"):
            assert issue_labels(issues) == ["just a note"]
        assert "just a note" in caplog.text

    def test_hazen_williams_unusual_c(self):
        inp = HazenWilliamsInput(flow=0.1, diameter=0.3, length=100.0, c_factor=20.0)
        issues = validate_hazen_williams_input(inp)
        assert [i.level for i in issues] == ["warning"]

    def test_channel_negative_side_slope(self):
        inp = ChannelFlowInput(flow=1.0, slope=0.001, bottom_width=2.0, side_slope=-1.0, n=0.013)
        assert any(i.level == "error" and "side_slope" in i.message for i in validate_channel_input(inp))

    def test_channel_zero_width_with_slope_ok(self):
        inp = ChannelFlowInput(flow=1.0, slope=0.001, bottom_width=0.0, side_slope=1.0, n=0.013)
        assert validate_channel_input(inp) == []

    def test_circular_depth_above_diameter(self):
        inp = CircularChannelInput(slope=0.001, depth=1.5, diameter=1.0, n=0.013)
        assert any("diameter" in i.message for i in validate_circular_input(inp))
