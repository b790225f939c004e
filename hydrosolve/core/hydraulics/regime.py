# hydrosolve/core/hydraulics/regime.py
from __future__ import annotations

from typing import List, Optional
import logging
import math
import warnings

from hydrosolve.core.build.config import RegimeConfig
from hydrosolve.core.models.channel import FlowClass
from hydrosolve.core.models.errors import RegimeWarning


logger = logging.getLogger(__name__)


PIPE_TURBULENCE_LABEL = "Re < {re:g} — flow may not be turbulent; {model} assumptions may not hold"
CHANNEL_TURBULENCE_LABEL = "Re < {re:g} — flow may not be turbulent; Manning assumptions may not hold"
NEAR_CRITICAL_LABEL = "Fr = {fr:.3f} is within {tol:g} of 1 — flow is near critical and may be unstable"


def classify_froude(Fr: float, *, tol: float = 0.01) -> FlowClass:
    """subcritical (Fr<1), critical (|Fr-1| <= tol), supercritical (Fr>1)."""
    if abs(Fr - 1.0) <= tol:
        return "critical"
    return "subcritical" if Fr < 1.0 else "supercritical"


def pipe_regime_warnings(
    Re: Optional[float],
    cfg: Optional[RegimeConfig] = None,
    *,
    model: str = "Colebrook/Manning",
) -> List[str]:
    """Turbulence check on Re = V D / nu; `model` names the correlation in the label."""
    cfg = cfg or RegimeConfig()
    out: List[str] = []
    if Re is not None and math.isfinite(Re) and Re < cfg.re_turbulent_pipe:
        out.append(PIPE_TURBULENCE_LABEL.format(re=cfg.re_turbulent_pipe, model=model))
    _report(out, Re=Re, cfg=cfg)
    return out


def channel_regime_warnings(
    Re: Optional[float],
    Fr: float,
    cfg: Optional[RegimeConfig] = None,
) -> List[str]:
    """
    Reynolds check (hydraulic diameter 4R) for channels. Fr by itself only adds
    a label when cfg.warn_near_critical is set.
    """
    cfg = cfg or RegimeConfig()
    out: List[str] = []
    if Re is not None and math.isfinite(Re) and Re < cfg.re_turbulent_channel:
        out.append(CHANNEL_TURBULENCE_LABEL.format(re=cfg.re_turbulent_channel))
    if cfg.warn_near_critical and classify_froude(Fr, tol=cfg.froude_critical_tol) == "critical":
        out.append(NEAR_CRITICAL_LABEL.format(fr=Fr, tol=cfg.froude_critical_tol))
    _report(out, Re=Re, cfg=cfg)
    return out


def _report(labels: List[str], *, Re: Optional[float], cfg: RegimeConfig) -> None:
    for label in labels:
        logger.warning("%s (Re=%s)", label, f"{Re:.4g}" if Re is not None else "n/a")
        if cfg.emit_warnings:
            warnings.warn(label, RegimeWarning, stacklevel=4)
