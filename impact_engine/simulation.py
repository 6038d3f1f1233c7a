"""
Impact Simulation
=================
Single entry point that chains the engine together:

    SimulationInput
        │  mass from diameter & composition, km/s → m/s
        ▼
    integrate()          — atmospheric entry, breakup, airburst
        ▼
    classify_outcome()   — burnup / airburst / land / ocean
        ▼
    compute_effects()    — blast, thermal, crater, seismic, tsunami
        ▼
    build_explanation()  — narrative lines
        ▼
    SimulationResult

No I/O and no shared mutable state: identical inputs give identical
results, and calls may run concurrently.
"""

from dataclasses import dataclass, replace
from typing import Any, Dict, Optional, Tuple

from .effects import ImpactEffects, compute_effects, joules_to_megatons, kinetic_energy
from .inputs import SimulationInput
from .integrator import EntryResult, IntegratorSettings, TrajectoryPoint, integrate
from .materials import body_mass, get_material
from .narrative import build_explanation
from .outcome import classify_outcome


@dataclass(frozen=True)
class SimulationResult:
    """Complete simulation output."""
    outcome: str
    energy_release: float              # Mt TNT
    impact_energy: float               # J
    impact_velocity: float             # m/s
    impact_effects: ImpactEffects
    trajectory: Tuple[TrajectoryPoint, ...]
    survived_mass: float               # kg
    initial_mass: float                # kg
    fragmentation_altitude: Optional[float] = None   # m
    airburst_altitude: Optional[float] = None        # m
    explanation: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        """Response shape of the simulation endpoint (camelCase keys)."""
        out = {
            'outcome': self.outcome,
            'energyRelease': self.energy_release,
            'impactEnergy': self.impact_energy,
            'impactVelocity': self.impact_velocity,
            'impactEffects': self.impact_effects.to_dict(),
            'trajectory': [p.to_dict() for p in self.trajectory],
            'explanation': list(self.explanation),
            'survivedMass': self.survived_mass,
        }
        if self.fragmentation_altitude is not None:
            out['fragmentationAltitude'] = self.fragmentation_altitude
        if self.airburst_altitude is not None:
            out['airburstAltitude'] = self.airburst_altitude
        return out

    def summary(self) -> str:
        """Human-readable summary string."""
        fx = self.impact_effects
        lines = [
            f"╔══════════════════════════════════════════════════════╗",
            f"║  IMPACT SUMMARY — {self.outcome.upper():<35s}║",
            f"╠══════════════════════════════════════════════════════╣",
            f"║  Energy       : {self.energy_release:>12.4g} Mt TNT{'':<17s} ║",
            f"║  Impact vel   : {self.impact_velocity / 1000:>12.2f} km/s{'':<19s} ║",
            f"║  Mass left    : {self.survived_mass:>12.4g} kg{'':<21s} ║",
        ]
        if fx.blast_radius is not None:
            lines += [
                f"╠══════════════════════════════════════════════════════╣",
                f"║  Blast 20 psi : {fx.blast_radius.severe / 1000:>12.2f} km{'':<21s} ║",
                f"║  Blast  5 psi : {fx.blast_radius.moderate / 1000:>12.2f} km{'':<21s} ║",
                f"║  Blast  1 psi : {fx.blast_radius.light / 1000:>12.2f} km{'':<21s} ║",
                f"║  Thermal      : {fx.thermal_radius / 1000:>12.2f} km{'':<21s} ║",
            ]
        if fx.crater_diameter is not None:
            lines.append(f"║  Crater       : {fx.crater_diameter:>12.1f} m{'':<22s} ║")
        if fx.seismic_magnitude is not None:
            lines.append(f"║  Seismic mag  : {fx.seismic_magnitude:>12.1f}{'':<24s} ║")
        if fx.tsunami_height is not None:
            lines.append(f"║  Tsunami      : {fx.tsunami_height:>12.1f} m{'':<22s} ║")
            lines.append(f"║  Tsunami reach: {fx.tsunami_radius / 1000:>12.0f} km{'':<21s} ║")
        lines.append(f"╚══════════════════════════════════════════════════════╝")
        return '\n'.join(lines)


def run_entry(inp: SimulationInput, settings: Optional[IntegratorSettings] = None,
              method: str = 'euler') -> EntryResult:
    """Atmospheric entry only, without classification or effects."""
    material = get_material(inp.composition)
    return integrate(
        diameter=inp.diameter,
        initial_mass=body_mass(inp.diameter, inp.composition),
        initial_velocity=inp.velocity_mps,
        angle_deg=inp.approach_angle,
        material=material,
        location=inp.impact_location,
        settings=settings,
        method=method,
    )


def simulate(inp: SimulationInput, settings: Optional[IntegratorSettings] = None,
             method: str = 'euler') -> SimulationResult:
    """
    Run one impact simulation.

    Parameters
    ----------
    inp : SimulationInput, already range-checked by the caller
    settings : IntegratorSettings, defaults to the module defaults
    method : 'euler' (default) or 'rk4'
    """
    material = get_material(inp.composition)
    entry = run_entry(inp, settings=settings, method=method)
    is_ocean = inp.impact_location.is_ocean

    outcome = classify_outcome(
        entry.final_mass,
        entry.initial_mass,
        entry.fragmentation_altitude,
        entry.airburst_altitude,
        is_ocean,
    )

    # Fully ablated bodies deliver nothing
    survived_mass = max(entry.final_mass, 0.0)
    impact_energy = kinetic_energy(survived_mass, entry.final_velocity)
    energy_megatons = joules_to_megatons(impact_energy)

    effects = compute_effects(
        outcome,
        impact_energy,
        energy_megatons,
        survived_mass,
        material.density,
        is_ocean,
    )

    result = SimulationResult(
        outcome=outcome,
        energy_release=energy_megatons,
        impact_energy=impact_energy,
        impact_velocity=entry.final_velocity,
        impact_effects=effects,
        trajectory=entry.trajectory,
        survived_mass=survived_mass,
        initial_mass=entry.initial_mass,
        fragmentation_altitude=entry.fragmentation_altitude,
        airburst_altitude=entry.airburst_altitude,
    )
    return replace(result, explanation=tuple(build_explanation(inp, result)))
