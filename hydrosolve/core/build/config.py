# hydrosolve/core/build/config.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict


def _as_bool(x: Any) -> bool:
    if isinstance(x, str):
        return x.strip().lower() in ("1", "true", "yes", "si", "sí", "y")
    return bool(x)


# ============================================================
# RootFinderConfig (tolerancias / presupuesto de iteraciones)
# ============================================================

@dataclass(frozen=True)
class RootFinderConfig:
    """
    Configuración del buscador de raíces (Brent + expansión de intervalo).
    """
    xtol: float = 1e-12
    rtol: float = 1e-10
    max_iter: int = 100
    expand_factor: float = 2.0
    max_expand: int = 60

    @staticmethod
    def from_dict(cfg: Dict[str, Any]) -> "RootFinderConfig":
        out = RootFinderConfig(
            xtol=float(cfg.get("xtol", cfg.get("root_xtol", 1e-12))),
            rtol=float(cfg.get("rtol", cfg.get("root_rtol", 1e-10))),
            max_iter=int(cfg.get("max_iter", cfg.get("maxiter", cfg.get("max_iterations", 100)))),
            expand_factor=float(cfg.get("expand_factor", cfg.get("bracket_factor", 2.0))),
            max_expand=int(cfg.get("max_expand", cfg.get("max_expansions", 60))),
        )
        out.validate()
        return out

    def validate(self) -> None:
        if self.xtol <= 0:
            raise ValueError(f"RootFinderConfig.xtol debe ser > 0 (recibido {self.xtol})")
        # brentq rechaza rtol < 4*eps
        if self.rtol < 4 * 2.220446049250313e-16:
            raise ValueError(f"RootFinderConfig.rtol demasiado pequeño: {self.rtol}")
        if self.max_iter <= 0:
            raise ValueError(f"RootFinderConfig.max_iter debe ser > 0 (recibido {self.max_iter})")
        if self.expand_factor <= 1.0:
            raise ValueError(f"RootFinderConfig.expand_factor debe ser > 1 (recibido {self.expand_factor})")
        if self.max_expand < 0:
            raise ValueError(f"RootFinderConfig.max_expand debe ser >= 0 (recibido {self.max_expand})")


# ============================================================
# RegimeConfig (umbrales de turbulencia / Froude)
# ============================================================

@dataclass(frozen=True)
class RegimeConfig:
    """
    Umbrales del validador de régimen.
    """
    re_turbulent_pipe: float = 4000.0
    re_turbulent_channel: float = 2000.0
    froude_critical_tol: float = 0.01
    warn_near_critical: bool = False
    emit_warnings: bool = False

    @staticmethod
    def from_dict(cfg: Dict[str, Any]) -> "RegimeConfig":
        out = RegimeConfig(
            re_turbulent_pipe=float(cfg.get("re_turbulent_pipe", cfg.get("re_pipe", 4000.0))),
            re_turbulent_channel=float(cfg.get("re_turbulent_channel", cfg.get("re_channel", 2000.0))),
            froude_critical_tol=float(cfg.get("froude_critical_tol", cfg.get("fr_tol", 0.01))),
            warn_near_critical=_as_bool(cfg.get("warn_near_critical", False)),
            emit_warnings=_as_bool(cfg.get("emit_warnings", cfg.get("warn", False))),
        )
        out.validate()
        return out

    def validate(self) -> None:
        if self.re_turbulent_pipe <= 0:
            raise ValueError(f"RegimeConfig.re_turbulent_pipe debe ser > 0 (recibido {self.re_turbulent_pipe})")
        if self.re_turbulent_channel <= 0:
            raise ValueError(
                f"RegimeConfig.re_turbulent_channel debe ser > 0 (recibido {self.re_turbulent_channel})"
            )
        if not (0.0 <= self.froude_critical_tol < 1.0):
            raise ValueError(f"RegimeConfig.froude_critical_tol fuera de rango: {self.froude_critical_tol}")


# ============================================================
# FluidConfig
# ============================================================

@dataclass(frozen=True)
class FluidConfig:
    """
    Temperatura por defecto del agua cuando no se entrega nu (solo canales).
    """
    default_temperature_si: float = 20.0    # degC
    default_temperature_eng: float = 68.0   # degF

    @staticmethod
    def from_dict(cfg: Dict[str, Any]) -> "FluidConfig":
        out = FluidConfig(
            default_temperature_si=float(cfg.get("default_temperature_si", cfg.get("T_C", 20.0))),
            default_temperature_eng=float(cfg.get("default_temperature_eng", cfg.get("T_F", 68.0))),
        )
        out.validate()
        return out

    def validate(self) -> None:
        if not (0.0 <= self.default_temperature_si <= 100.0):
            raise ValueError(f"FluidConfig.default_temperature_si fuera de rango: {self.default_temperature_si}")
        if not (32.0 <= self.default_temperature_eng <= 212.0):
            raise ValueError(f"FluidConfig.default_temperature_eng fuera de rango: {self.default_temperature_eng}")

    def default_temperature(self, units_name: str) -> float:
        return self.default_temperature_si if units_name == "SI" else self.default_temperature_eng


# ============================================================
# SolverConfig (agregador)
# ============================================================

@dataclass(frozen=True)
class SolverConfig:
    root: RootFinderConfig = field(default_factory=RootFinderConfig)
    regime: RegimeConfig = field(default_factory=RegimeConfig)
    fluid: FluidConfig = field(default_factory=FluidConfig)
    version: int = 1

    @staticmethod
    def from_dict(cfg: Dict[str, Any]) -> "SolverConfig":
        out = SolverConfig(
            root=RootFinderConfig.from_dict(cfg),
            regime=RegimeConfig.from_dict(cfg),
            fluid=FluidConfig.from_dict(cfg),
            version=int(cfg.get("config_version", cfg.get("version", 1))),
        )
        out.validate()
        return out

    def validate(self) -> None:
        if self.version <= 0:
            raise ValueError(f"SolverConfig.version debe ser > 0 (recibido {self.version})")

        self.root.validate()
        self.regime.validate()
        self.fluid.validate()


DEFAULT_CONFIG = SolverConfig()
