# hydrosolve/core/models/units.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Literal, Union

from hydrosolve.core.models.errors import InputError


FlowUnits = Literal["SI", "Eng"]


@dataclass(frozen=True, slots=True)
class UnitSystem:
    """
    Constantes por sistema de unidades.

    Notes:
    - g: gravitational acceleration [m/s2 | ft/s2]
    - manning_c: dimensional coefficient of Manning's equation (1.0 | 1.49)
    - v_max: upper plausible mean velocity, used to size root-finding brackets
    - v_min: lower plausible mean velocity (same purpose)
    - unit labels are pint-parsable strings, used when tagging results
    """
    name: FlowUnits
    g: float
    manning_c: float
    hazen_williams_k: float

    v_min: float
    v_max: float

    length_unit: str
    area_unit: str
    flow_unit: str
    velocity_unit: str
    viscosity_unit: str
    density_unit: str
    dyn_viscosity_unit: str
    temperature_unit: str

    @property
    def is_si(self) -> bool:
        return self.name == "SI"


SI = UnitSystem(
    name="SI",
    g=9.81,
    manning_c=1.0,
    hazen_williams_k=0.849,
    v_min=1e-4,
    v_max=30.0,
    length_unit="m",
    area_unit="m**2",
    flow_unit="m**3/s",
    velocity_unit="m/s",
    viscosity_unit="m**2/s",
    density_unit="kg/m**3",
    dyn_viscosity_unit="Pa*s",
    temperature_unit="degC",
)

ENG = UnitSystem(
    name="Eng",
    g=32.2,
    manning_c=1.49,
    hazen_williams_k=1.318,
    v_min=3e-4,
    v_max=100.0,
    length_unit="ft",
    area_unit="ft**2",
    flow_unit="ft**3/s",
    velocity_unit="ft/s",
    viscosity_unit="ft**2/s",
    density_unit="slug/ft**3",
    dyn_viscosity_unit="lbf*s/ft**2",
    temperature_unit="degF",
)


# Accepted labels -> canonical system
UNITS_ALIASES: Dict[str, UnitSystem] = {
    "si": SI,
    "metric": SI,
    "metrico": SI,
    "métrico": SI,
    "eng": ENG,
    "english": ENG,
    "us": ENG,
    "imperial": ENG,
}


def unit_system(units: Union[str, UnitSystem]) -> UnitSystem:
    """Resolve a units label ('SI', 'Eng', aliases) into its UnitSystem."""
    if isinstance(units, UnitSystem):
        return units
    key = str(units).strip().lower() if units is not None else ""
    if key not in UNITS_ALIASES:
        raise InputError(
            f"units: invalid label {units!r}. Allowed: 'SI' or 'Eng' "
            f"(aliases: {sorted(UNITS_ALIASES.keys())})"
        )
    return UNITS_ALIASES[key]
