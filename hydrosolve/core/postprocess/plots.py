from __future__ import annotations

from typing import Optional, Sequence
import math
import os

import numpy as np
import matplotlib.pyplot as plt

from hydrosolve.core.hydraulics.friction import colebrook_f
from hydrosolve.core.hydraulics.manning import specific_energy_curve
from hydrosolve.core.models.channel import ChannelFlowState
from hydrosolve.core.models.geometry import CircularSection
from hydrosolve.core.models.pipe import PipeFlowState
from hydrosolve.core.models.units import unit_system


DEFAULT_RR = (0.0, 1e-5, 1e-4, 1e-3, 5e-3, 1e-2, 5e-2)


def _prepare(out_png: str) -> None:
    os.makedirs(os.path.dirname(out_png) or ".", exist_ok=True)


def _mag(x):
    return float(getattr(x, "magnitude", x))


def plot_moody(
    *,
    out_png: str,
    relative_roughness: Sequence[float] = DEFAULT_RR,
    re_range: tuple[float, float] = (4e3, 1e8),
    npts: int = 80,
    state: Optional[PipeFlowState] = None,
    title: str = "Diagrama de Moody (Colebrook)",
) -> None:
    """
    Curvas f(Re) por rugosidad relativa; opcionalmente marca el punto de operación.
    """
    _prepare(out_png)
    Re = np.logspace(math.log10(re_range[0]), math.log10(re_range[1]), npts)

    plt.figure()
    for rr in relative_roughness:
        f = [colebrook_f(Re=float(r), eps_over_D=rr) for r in Re]
        plt.loglog(Re, f, label=f"ks/D={rr:g}")

    if state is not None:
        plt.loglog([_mag(state.reynolds)], [_mag(state.friction_factor)], "ko", label="operación")

    plt.xlabel("Re [-]")
    plt.ylabel("f [-]")
    plt.title(title)
    plt.grid(True, which="both")
    plt.legend(fontsize="small")
    plt.tight_layout()
    plt.savefig(out_png, dpi=150)
    plt.close()


def plot_cross_section(
    state: ChannelFlowState,
    *,
    out_png: str,
    title: Optional[str] = None,
) -> None:
    """Sección transversal con la superficie libre en el tirante resuelto."""
    _prepare(out_png)
    us = unit_system(state.units)
    y = _mag(state.depth)
    geom = state.geometry

    plt.figure()
    if isinstance(geom, CircularSection):
        d = geom.d
        t = np.linspace(0.0, 2.0 * math.pi, 200)
        plt.plot(0.5 * d * np.sin(t), 0.5 * d - 0.5 * d * np.cos(t), "k")
        half = 0.5 * geom.top_width(y)
        plt.plot([-half, half], [y, y], "b")
    else:
        b, m = geom.b, geom.m
        top = max(1.25 * y, _mag(state.critical_depth) * 1.1)
        xs = [-b / 2 - m * top, -b / 2, b / 2, b / 2 + m * top]
        ys = [top, 0.0, 0.0, top]
        plt.plot(xs, ys, "k")
        half = b / 2 + m * y
        plt.fill([-half, -b / 2, b / 2, half], [y, 0.0, 0.0, y], alpha=0.3)
        plt.plot([-half, half], [y, y], "b")

    plt.gca().set_aspect("equal", adjustable="datalim")
    plt.xlabel(f"x [{us.length_unit}]")
    plt.ylabel(f"y [{us.length_unit}]")
    plt.title(title or f"{geom.kind}: y={y:.3f}, yc={_mag(state.critical_depth):.3f}")
    plt.grid(True)
    plt.tight_layout()
    plt.savefig(out_png, dpi=150)
    plt.close()


def plot_specific_energy(
    state: ChannelFlowState,
    *,
    out_png: str,
    npts: int = 200,
    title: str = "Energía específica",
) -> None:
    """E(y) para el caudal resuelto, con yc y el tirante normal marcados."""
    _prepare(out_png)
    us = unit_system(state.units)
    Q = _mag(state.flow)
    y = _mag(state.depth)
    yc = _mag(state.critical_depth)
    geom = state.geometry

    y_max = 3.0 * max(y, yc)
    if isinstance(geom, CircularSection):
        y_max = min(y_max, geom.d * (1.0 - 1e-6))

    ys, E = specific_energy_curve(geom, Q=Q, g=us.g, y_max=y_max, npts=npts)
    Ec = yc + (Q / geom.area(yc)) ** 2 / (2.0 * us.g)

    plt.figure()
    plt.plot(E, ys, label="E(y)")
    plt.plot(ys, ys, "k--", linewidth=0.8, label="E = y")
    plt.plot([Ec], [yc], "rs", label="yc")
    plt.plot([_mag(state.specific_energy)], [y], "bo", label="y normal")
    plt.xlim(0.0, 2.0 * max(Ec, _mag(state.specific_energy)))
    plt.ylim(0.0, y_max)
    plt.xlabel(f"E [{us.length_unit}]")
    plt.ylabel(f"y [{us.length_unit}]")
    plt.title(title)
    plt.grid(True)
    plt.legend()
    plt.tight_layout()
    plt.savefig(out_png, dpi=150)
    plt.close()
