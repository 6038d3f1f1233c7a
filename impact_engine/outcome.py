"""
Outcome Classification
======================
Maps the end state of an entry run to one of four outcomes.

Rules are ordered, first match wins:

1. less than 1 % of the initial mass left   → 'burnup'
2. an airburst was recorded                 → 'airburst'
3. the ground point is ocean                → 'ocean_impact'
4. otherwise                                → 'land_impact'

Rule 1 precedes rule 2: a body that airburst after losing more than
99 % of its mass is reported as a burnup.
"""

from typing import Optional


BURNUP = 'burnup'
AIRBURST = 'airburst'
LAND_IMPACT = 'land_impact'
OCEAN_IMPACT = 'ocean_impact'

OUTCOMES = (BURNUP, AIRBURST, LAND_IMPACT, OCEAN_IMPACT)

BURNUP_MASS_RATIO = 0.01


def classify_outcome(final_mass: float, initial_mass: float,
                     fragmentation_altitude: Optional[float] = None,
                     airburst_altitude: Optional[float] = None,
                     is_ocean: bool = False) -> str:
    """
    Classify an entry run.

    `fragmentation_altitude` does not influence the result; it is accepted
    so callers can pass the integrator markers through unchanged.
    """
    if initial_mass <= 0 or final_mass / initial_mass < BURNUP_MASS_RATIO:
        return BURNUP
    if airburst_altitude is not None:
        return AIRBURST
    if is_ocean:
        return OCEAN_IMPACT
    return LAND_IMPACT
