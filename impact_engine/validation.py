"""
Input Validation & Historical Event Check
=========================================
Two kinds of checking live here, both outside the engine proper:

1. **Input ranges** enforced by the caller before `simulate()`:
     - diameter        1 m – 100 km
     - velocity        11 – 72 km/s  (Earth escape speed to the
                       maximum heliocentric encounter speed)
     - approach angle  0° – 90°
     - composition     rocky | metallic | carbonaceous

2. **Historical events** — each preset scenario is run and its outcome
   compared against what was actually observed (or, for the illustrative
   presets, intended):

     Chelyabinsk 2013   airburst
     Tunguska 1908      airburst
     Chicxulub          ocean impact (shallow sea)
     small meteor       burnup
     ocean scenario     ocean impact
"""

import numpy as np
from dataclasses import dataclass
from typing import List

from .inputs import SimulationInput
from .materials import COMPOSITIONS
from .outcome import AIRBURST, BURNUP, OCEAN_IMPACT
from .presets import get_preset
from .simulation import simulate


# ── Accepted input ranges ──────────────────────────────────────────────────
DIAMETER_RANGE = (1.0, 100000.0)       # m
VELOCITY_RANGE = (11.0, 72.0)          # km/s
ANGLE_RANGE    = (0.0, 90.0)           # degrees


class InputValidationError(ValueError):
    """Raised when a SimulationInput is outside the accepted ranges."""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__('; '.join(self.errors))


def validate_input(inp: SimulationInput) -> List[str]:
    """
    Check an input against the accepted ranges.

    Returns a list of human-readable reasons; empty when the input is valid.
    """
    errors = []

    numeric = {
        'Diameter': inp.diameter,
        'Velocity': inp.velocity,
        'Approach angle': inp.approach_angle,
        'Latitude': inp.impact_location.lat,
        'Longitude': inp.impact_location.lon,
    }
    for label, value in numeric.items():
        if not np.isfinite(value):
            errors.append(f"{label} must be a finite number")

    if np.isfinite(inp.diameter) and not (
            DIAMETER_RANGE[0] <= inp.diameter <= DIAMETER_RANGE[1]):
        errors.append('Diameter must be between 1m and 100km')

    if np.isfinite(inp.velocity) and not (
            VELOCITY_RANGE[0] <= inp.velocity <= VELOCITY_RANGE[1]):
        errors.append('Velocity must be between 11 km/s and 72 km/s')

    if np.isfinite(inp.approach_angle) and not (
            ANGLE_RANGE[0] <= inp.approach_angle <= ANGLE_RANGE[1]):
        errors.append('Approach angle must be between 0° and 90°')

    if inp.composition not in COMPOSITIONS:
        errors.append('Composition must be rocky, metallic, or carbonaceous')

    return errors


def check_input(inp: SimulationInput) -> SimulationInput:
    """Return the input unchanged, or raise InputValidationError."""
    errors = validate_input(inp)
    if errors:
        raise InputValidationError(errors)
    return inp


# ══════════════════════════════════════════════════════════════════════════
#  Reference outcomes for the preset scenarios
# ══════════════════════════════════════════════════════════════════════════

REFERENCE_EVENTS = {
    'chelyabinsk': AIRBURST,
    'tunguska': AIRBURST,
    'chicxulub': OCEAN_IMPACT,
    'small_burnup': BURNUP,
    'ocean_impact': OCEAN_IMPACT,
}


@dataclass
class EventValidation:
    """Result of one preset comparison."""
    preset_id: str
    name: str
    expected: str
    simulated: str
    energy_megatons: float
    fragmentation_altitude: float   # m, NaN when the body stayed intact
    airburst_altitude: float        # m, NaN when no airburst

    @property
    def matched(self) -> bool:
        return self.expected == self.simulated


def validate_against_events(verbose: bool = True, method: str = 'euler') -> List[EventValidation]:
    """
    Run every reference preset and compare its outcome with the
    expected one.

    Returns list of EventValidation, one per reference event.
    """
    results = []

    if verbose:
        print(f"\n{'='*75}")
        print(f"  VALIDATION: historical and reference events ({method.upper()})")
        print(f"{'='*75}")
        print(f"{'Event':<28} {'Expected':>13} {'Simulated':>13} "
              f"{'Energy (Mt)':>12} {'Breakup km':>11}")
        print("-" * 75)

    for preset_id, expected in REFERENCE_EVENTS.items():
        preset = get_preset(preset_id)
        res = simulate(preset.parameters, method=method)

        ev = EventValidation(
            preset_id=preset_id,
            name=preset.name,
            expected=expected,
            simulated=res.outcome,
            energy_megatons=res.energy_release,
            fragmentation_altitude=(res.fragmentation_altitude
                                    if res.fragmentation_altitude is not None
                                    else float('nan')),
            airburst_altitude=(res.airburst_altitude
                               if res.airburst_altitude is not None
                               else float('nan')),
        )
        results.append(ev)

        if verbose:
            mark = '✓' if ev.matched else '✗'
            print(f"{preset.name:<28.28} {expected:>13} {res.outcome:>13} "
                  f"{ev.energy_megatons:>12.4g} "
                  f"{ev.fragmentation_altitude / 1000:>11.1f} {mark}")

    if verbose:
        hits = sum(r.matched for r in results)
        print("-" * 75)
        print(f"  Matched {hits}/{len(results)} reference outcomes")
        status = "✓ PASS" if hits == len(results) else "✗ NEEDS TUNING"
        print(f"  Status: {status}")
        print(f"{'='*75}\n")

    return results


if __name__ == "__main__":
    validate_against_events(verbose=True)
