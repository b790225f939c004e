# hydrosolve/core/hydraulics/water.py
from __future__ import annotations

from typing import Any, Union

import numpy as np

from hydrosolve.core.models.errors import InputError
from hydrosolve.core.models.units import UnitSystem, unit_system


# Conversión SI -> Eng
RHO_SI_TO_ENG = 0.0019403203       # kg/m3 -> slug/ft3
MU_SI_TO_ENG = 0.020885434         # Pa*s  -> lbf*s/ft2

ArrayLike = Union[float, np.ndarray]


def _temperature_c(T: Any, us: UnitSystem) -> np.ndarray:
    t = np.asarray(T, dtype=float)
    lo, hi = (0.0, 100.0) if us.is_si else (32.0, 212.0)
    if np.any(~np.isfinite(t)) or np.any(t < lo) or np.any(t > hi):
        raise InputError(
            f"Water temperature out of range [{lo:g}, {hi:g}] {us.temperature_unit}: {T!r}"
        )
    return t if us.is_si else (t - 32.0) * 5.0 / 9.0


def _out(x: np.ndarray, unit: str, ret_units: bool) -> Any:
    val: Any = float(x) if x.ndim == 0 else x
    if ret_units:
        from hydrosolve.core.postprocess.typed import ureg
        return ureg.Quantity(val, unit)
    return val


def _dens_si(tc: np.ndarray) -> np.ndarray:
    return 999.9 + 2.034e-2 * tc - 6.162e-3 * tc ** 2 + 2.261e-5 * tc ** 3 - 4.657e-8 * tc ** 4


def _dvisc_si(tc: np.ndarray) -> np.ndarray:
    return 1.79e-3 / (1.0 + 0.03368 * tc + 0.000221 * tc ** 2)


def dens(T: ArrayLike, units: str = "SI", *, ret_units: bool = False) -> Any:
    """Density of water [kg/m3 | slug/ft3] at T [degC | degF]."""
    us = unit_system(units)
    rho = _dens_si(_temperature_c(T, us))
    if not us.is_si:
        rho = rho * RHO_SI_TO_ENG
    return _out(rho, us.density_unit, ret_units)


def dvisc(T: ArrayLike, units: str = "SI", *, ret_units: bool = False) -> Any:
    """Dynamic viscosity of water [Pa*s | lbf*s/ft2]."""
    us = unit_system(units)
    mu = _dvisc_si(_temperature_c(T, us))
    if not us.is_si:
        mu = mu * MU_SI_TO_ENG
    return _out(mu, us.dyn_viscosity_unit, ret_units)


def kvisc(T: ArrayLike, units: str = "SI", *, ret_units: bool = False) -> Any:
    """Kinematic viscosity of water [m2/s | ft2/s] = mu / rho."""
    us = unit_system(units)
    tc = _temperature_c(T, us)
    nu = _dvisc_si(tc) / _dens_si(tc)
    if not us.is_si:
        nu = nu * (MU_SI_TO_ENG / RHO_SI_TO_ENG)
    return _out(nu, us.viscosity_unit, ret_units)
