"""
Asteroid Atmospheric Entry & Impact Effects Engine
==================================================
A computational tool that follows a small body from the top of the
atmosphere to the ground, then estimates what its arrival does:
  - Exponential atmosphere
  - Drag deceleration and ablative mass loss
  - Fragmentation when dynamic pressure exceeds material strength
  - Airburst once a fragmented body has lost 90 % of its mass
  - Blast, thermal, crater, seismic and tsunami scaling laws

Euler (default) and RK4 integration, preset historical scenarios
(Chelyabinsk, Tunguska, Chicxulub) and a check of their outcomes.

A simplified educational model, not a predictive tool.
"""

from .atmosphere import air_density, density_profile, SEA_LEVEL_DENSITY, SCALE_HEIGHT
from .materials import MaterialProperties, MATERIALS, COMPOSITIONS, get_material, body_mass
from .forces import drag_force, dynamic_pressure, heating_rate, reference_area
from .inputs import ImpactLocation, SimulationInput
from .integrator import (
    integrate, IntegratorSettings, DEFAULT_SETTINGS,
    EntryPhase, EntryState, EntryResult, TrajectoryPoint,
)
from .outcome import classify_outcome, BURNUP, AIRBURST, LAND_IMPACT, OCEAN_IMPACT
from .effects import (
    ImpactEffects, BlastRadius, compute_effects,
    kinetic_energy, joules_to_megatons, crater_diameter,
    blast_radius, thermal_radius, seismic_magnitude,
    tsunami_height, tsunami_radius,
)
from .simulation import simulate, run_entry, SimulationResult
from .presets import PRESETS, Preset, get_preset
from .validation import (
    validate_input, check_input, InputValidationError,
    validate_against_events, REFERENCE_EVENTS,
)

__version__ = "1.0.0"
__all__ = [
    'simulate', 'run_entry', 'SimulationInput', 'ImpactLocation', 'SimulationResult',
    'integrate', 'IntegratorSettings', 'DEFAULT_SETTINGS',
    'EntryPhase', 'EntryState', 'EntryResult', 'TrajectoryPoint',
    'air_density', 'density_profile', 'SEA_LEVEL_DENSITY', 'SCALE_HEIGHT',
    'MaterialProperties', 'MATERIALS', 'COMPOSITIONS', 'get_material', 'body_mass',
    'drag_force', 'dynamic_pressure', 'heating_rate', 'reference_area',
    'classify_outcome', 'BURNUP', 'AIRBURST', 'LAND_IMPACT', 'OCEAN_IMPACT',
    'ImpactEffects', 'BlastRadius', 'compute_effects',
    'kinetic_energy', 'joules_to_megatons', 'crater_diameter',
    'blast_radius', 'thermal_radius', 'seismic_magnitude',
    'tsunami_height', 'tsunami_radius',
    'PRESETS', 'Preset', 'get_preset',
    'validate_input', 'check_input', 'InputValidationError',
    'validate_against_events', 'REFERENCE_EVENTS',
]
