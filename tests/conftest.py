"""
Shared fixtures for the solver tests.
"""

import matplotlib

matplotlib.use("Agg")

import pytest

from hydrosolve.core.build.config import RegimeConfig, SolverConfig
from hydrosolve.core.hydraulics.water import kvisc
from hydrosolve.core.models.channel import ChannelFlowInput
from hydrosolve.core.models.pipe import PipeFlowInput


@pytest.fixture
def cfg():
    return SolverConfig()


@pytest.fixture
def warn_cfg():
    """Configuration that also issues RegimeWarning through the warnings module."""
    return SolverConfig(regime=RegimeConfig(emit_warnings=True, warn_near_critical=True))


@pytest.fixture
def eng_pipe_input():
    """4 cfs through 20 in pipe, 2 miles long, water at 60 degF."""
    return PipeFlowInput(
        flow=4.0,
        diameter=20.0 / 12.0,
        length=10560.0,
        roughness=0.0005,
        nu=kvisc(60.0, "Eng"),
        units="Eng",
    )


@pytest.fixture
def si_pipe_input():
    return PipeFlowInput(
        flow=0.05,
        diameter=0.2,
        length=1000.0,
        roughness=4.5e-5,
        nu=1.0e-6,
        units="SI",
    )


@pytest.fixture
def eng_channel_input():
    """Trapezoidal channel, b=20 ft, m=1, y=3 ft, 360 cfs; slope unknown."""
    return ChannelFlowInput(
        flow=360.0,
        depth=3.0,
        bottom_width=20.0,
        side_slope=1.0,
        n=0.015,
        units="Eng",
    )
