"""
Impact Effects
==============
First-order scaling laws that turn the energy delivered by an entry
into ground effects:

  - Air blast radii at 20 / 5 / 1 psi overpressure (cube-root scaling)
  - Thermal radiation radius (3× fireball radius)
  - Crater diameter (energy scaling, land impacts)
  - Seismic magnitude (Gutenberg–Richter energy relation)
  - Tsunami wave height and reach (ocean impacts)

Energies are in joules unless a name says megatons
(1 Mt TNT = 4.184e15 J).

These are illustrative relations, not validated hazard models.
"""

import numpy as np
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .outcome import BURNUP, LAND_IMPACT, OCEAN_IMPACT


# ── Scaling Constants ──────────────────────────────────────────────────────
MEGATON_TNT_JOULES   = 4.184e15    # J per megaton TNT
BLAST_SCALE          = 1000.0      # m · Mt^(-1/3) · psi^(1/2)
FIREBALL_SCALE       = 440.0       # m · Mt^(-1/3)
THERMAL_FACTOR       = 3.0         # thermal reach in fireball radii
CRATER_COEFFICIENT   = 1.8
CRATER_EXPONENT      = 0.22
TARGET_DENSITY       = 2500.0      # kg/m³  (typical crustal rock)
TARGET_EXPONENT      = -0.33
SEISMIC_OFFSET       = 4.8         # log10(E) = 1.5 M + 4.8
SEISMIC_SLOPE        = 1.5
OCEAN_DEPTH          = 4000.0      # m  (mean ocean depth)
TSUNAMI_REF_ENERGY   = 1e15        # J
TSUNAMI_REACH_FACTOR = 1000.0 * 100.0

# Overpressure thresholds (psi)
BLAST_THRESHOLDS = {
    'severe': 20.0,    # reinforced structures destroyed
    'moderate': 5.0,   # most residential buildings collapse
    'light': 1.0,      # window breakage
}


def kinetic_energy(mass: float, velocity: float) -> float:
    """KE = ½ m v² (J)."""
    return 0.5 * mass * velocity ** 2


def joules_to_megatons(joules: float) -> float:
    return joules / MEGATON_TNT_JOULES


def blast_radius(energy_megatons: float, overpressure_psi: float) -> float:
    """
    Distance (m) at which the air blast falls to the given overpressure.

    R = 1000 · E^(1/3) / sqrt(P)
    """
    return BLAST_SCALE * float(np.cbrt(energy_megatons)) / float(np.sqrt(overpressure_psi))


def thermal_radius(energy_megatons: float) -> float:
    """Third-degree burn radius (m), three fireball radii."""
    fireball = FIREBALL_SCALE * float(np.cbrt(energy_megatons))
    return THERMAL_FACTOR * fireball


def crater_diameter(impact_energy: float, impactor_density: float) -> float:
    """
    Crater diameter (m).

    D = 1.8 · (E / ρ_i)^0.22 · ρ_t^−0.33
    """
    return (CRATER_COEFFICIENT
            * (impact_energy / impactor_density) ** CRATER_EXPONENT
            * TARGET_DENSITY ** TARGET_EXPONENT)


def seismic_magnitude(impact_energy: float) -> Optional[float]:
    """
    Richter-like magnitude M = (log10 E − 4.8) / 1.5.
    None when no energy reaches the ground.
    """
    if impact_energy <= 0:
        return None
    return (float(np.log10(impact_energy)) - SEISMIC_OFFSET) / SEISMIC_SLOPE


def equivalent_diameter(mass: float, density: float) -> float:
    """Diameter (m) of a sphere with the given mass and density."""
    return float(np.cbrt(6.0 * mass / (np.pi * density)))


def tsunami_height(impact_energy: float, water_depth: float = OCEAN_DEPTH) -> float:
    """Initial wave height (m): (E / 1e15)^¼ · sqrt(4000 / depth)."""
    base_height = (impact_energy / TSUNAMI_REF_ENERGY) ** 0.25
    depth_factor = np.sqrt(OCEAN_DEPTH / water_depth)
    return float(base_height * depth_factor)


def tsunami_radius(wave_height: float) -> float:
    """Distance (m) over which the wave stays significant."""
    return wave_height * TSUNAMI_REACH_FACTOR


@dataclass(frozen=True)
class BlastRadius:
    severe: float      # m  (20 psi)
    moderate: float    # m  (5 psi)
    light: float       # m  (1 psi)

    def to_dict(self) -> Dict[str, float]:
        return {'severe': self.severe, 'moderate': self.moderate, 'light': self.light}


@dataclass(frozen=True)
class ImpactEffects:
    """Ground effects of one run. Fields that do not apply are None."""
    blast_radius: Optional[BlastRadius] = None
    thermal_radius: Optional[float] = None
    crater_diameter: Optional[float] = None
    seismic_magnitude: Optional[float] = None
    tsunami_height: Optional[float] = None
    tsunami_radius: Optional[float] = None
    impactor_diameter: Optional[float] = None   # m, ocean impacts only; informational, not serialized

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        if self.blast_radius is not None:
            out['blastRadius'] = self.blast_radius.to_dict()
        for key, value in (('thermalRadius', self.thermal_radius),
                           ('craterDiameter', self.crater_diameter),
                           ('seismicMagnitude', self.seismic_magnitude),
                           ('tsunamiHeight', self.tsunami_height),
                           ('tsunamiRadius', self.tsunami_radius)):
            if value is not None:
                out[key] = value
        return out


def blast_radii(energy_megatons: float) -> BlastRadius:
    return BlastRadius(**{
        level: blast_radius(energy_megatons, psi)
        for level, psi in BLAST_THRESHOLDS.items()
    })


def compute_effects(outcome: str, impact_energy: float, energy_megatons: float,
                    final_mass: float, material_density: float,
                    is_ocean: bool = False) -> ImpactEffects:
    """
    Ground effects for a classified run.

    Parameters
    ----------
    outcome : one of the outcome constants
    impact_energy : kinetic energy delivered (J)
    energy_megatons : the same energy in Mt TNT
    final_mass : surviving mass (kg)
    material_density : impactor bulk density (kg/m³)
    is_ocean : ground point is ocean; the outcome already reflects it
    """
    if outcome == BURNUP:
        return ImpactEffects()

    blast = blast_radii(energy_megatons)
    thermal = thermal_radius(energy_megatons)

    if outcome == LAND_IMPACT:
        return ImpactEffects(
            blast_radius=blast,
            thermal_radius=thermal,
            crater_diameter=crater_diameter(impact_energy, material_density),
            seismic_magnitude=seismic_magnitude(impact_energy),
        )

    if outcome == OCEAN_IMPACT:
        height = tsunami_height(impact_energy)
        return ImpactEffects(
            blast_radius=blast,
            thermal_radius=thermal,
            seismic_magnitude=seismic_magnitude(impact_energy),
            tsunami_height=height,
            tsunami_radius=tsunami_radius(height),
            impactor_diameter=equivalent_diameter(final_mass, material_density),
        )

    # airburst
    return ImpactEffects(blast_radius=blast, thermal_radius=thermal)
