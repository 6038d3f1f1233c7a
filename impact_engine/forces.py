"""
Entry Force Model
=================
Aerodynamic loads on a body moving through the exponential atmosphere:

    F_drag = ½ ρ v² Cd A          (N)
    q      = ½ ρ v²               (Pa, dynamic pressure)
    Q      = ½ ρ v³ A             (W, heating rate)

A is the frontal area of a sphere of the current effective diameter.
Mass loss is the heating rate scaled by the material's ablation
coefficient and a global ablation scale.

All functions are pure and unchecked; the integrator guarantees a
positive diameter and non-negative velocity.
"""

from typing import Tuple

import numpy as np

from .atmosphere import air_density
from .materials import MaterialProperties


def reference_area(diameter: float) -> float:
    """Frontal area (m²) of a sphere."""
    return np.pi * (diameter / 2) ** 2


def drag_force(velocity: float, altitude: float, diameter: float,
               drag_coefficient: float) -> float:
    """
    Magnitude of the aerodynamic drag force (N).

    Parameters
    ----------
    velocity : float
        Speed relative to the air (m/s)
    altitude : float
        Geometric altitude (m)
    diameter : float
        Effective diameter (m)
    drag_coefficient : float
        Cd (dimensionless)
    """
    rho = air_density(altitude)
    return 0.5 * rho * velocity ** 2 * drag_coefficient * reference_area(diameter)


def dynamic_pressure(velocity: float, altitude: float) -> float:
    """Dynamic pressure q = ½ ρ v² (Pa)."""
    rho = air_density(altitude)
    return 0.5 * rho * velocity ** 2


def heating_rate(velocity: float, altitude: float, diameter: float) -> float:
    """Aerodynamic heating rate Q = ½ ρ v³ A (W)."""
    rho = air_density(altitude)
    return 0.5 * rho * velocity ** 3 * reference_area(diameter)


def ablation_rate(velocity: float, altitude: float, diameter: float,
                  material: MaterialProperties, ablation_scale: float) -> float:
    """Mass loss rate (kg/s) from aerodynamic heating."""
    return (heating_rate(velocity, altitude, diameter)
            * material.ablation_coefficient * ablation_scale)


def entry_derivatives(velocity: float, mass: float, altitude: float,
                      diameter: float, material: MaterialProperties,
                      sin_angle: float,
                      ablation_scale: float) -> Tuple[float, float, float]:
    """
    Time derivatives of the entry state along a straight flight path.

    Returns
    -------
    (dv/dt, dm/dt, dh/dt)
    """
    if mass > 0:
        dv = -drag_force(velocity, altitude, diameter,
                         material.drag_coefficient) / mass
    else:
        dv = 0.0
    dm = -ablation_rate(velocity, altitude, diameter, material, ablation_scale)
    dh = -velocity * sin_angle
    return dv, dm, dh
