"""
Narrative explanation of a simulation result: an opening line, an
optional breakup line, outcome-specific lines and a fixed disclaimer.
"""

from typing import List, TYPE_CHECKING

from .inputs import SimulationInput
from .outcome import AIRBURST, BURNUP, LAND_IMPACT, OCEAN_IMPACT

if TYPE_CHECKING:
    from .simulation import SimulationResult


DISCLAIMER = ('⚠️ This is a simplified educational model. Real impacts involve '
              'complex physics not fully captured here.')


def _km(meters: float) -> str:
    return f"{meters / 1000:.1f}"


def build_explanation(inp: SimulationInput, result: 'SimulationResult') -> List[str]:
    lines = [
        f"A {inp.diameter:g}m {inp.composition} asteroid approaching at "
        f"{inp.velocity:.1f} km/s",
    ]

    if result.fragmentation_altitude is not None:
        lines.append(
            f"Began fragmenting at {_km(result.fragmentation_altitude)} km "
            f"altitude due to atmospheric stress"
        )

    mt = result.energy_release
    if result.outcome == BURNUP:
        lines += [
            'Object too small to survive atmospheric entry',
            'Completely ablated and vaporized before reaching the surface',
            'No significant ground effects expected',
        ]
    elif result.outcome == AIRBURST:
        lines += [
            f"Exploded in an airburst at {_km(result.airburst_altitude)} km altitude",
            f"Released approximately {mt:.2f} megatons of energy",
            'Similar to the Tunguska (1908) or Chelyabinsk (2013) events',
            'Shockwave and thermal effects at ground level',
        ]
    elif result.outcome == LAND_IMPACT:
        lines += [
            'Survived atmospheric entry and impacted the ground',
            f"Released {mt:.2f} megatons of energy on impact",
            'Created crater, blast wave, thermal radiation, and seismic effects',
            f"Approach angle of {inp.approach_angle:g}° affected impact efficiency",
        ]
    elif result.outcome == OCEAN_IMPACT:
        lines += [
            'Impacted ocean surface',
            f"Released {mt:.2f} megatons of energy",
            'Generated tsunami waves and steam explosion',
            'Coastal areas at risk from wave propagation',
        ]

    lines.append(DISCLAIMER)
    return lines
