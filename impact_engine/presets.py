"""
Preset Scenarios
================
Named historical and illustrative entries, each a complete
SimulationInput. Served read-only by the surrounding service.
"""

from dataclasses import dataclass
from typing import Any, Dict

from .inputs import ImpactLocation, SimulationInput


@dataclass(frozen=True)
class Preset:
    id: str
    name: str
    description: str
    parameters: SimulationInput

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'parameters': self.parameters.to_dict(),
        }


PRESETS = (
    Preset(
        id='chelyabinsk',
        name='Chelyabinsk Meteor (2013)',
        description='20m asteroid that exploded over Russia',
        parameters=SimulationInput(
            diameter=20.0, composition='rocky', velocity=19.0, approach_angle=18.0,
            impact_location=ImpactLocation(lat=55.15, lon=61.41, is_ocean=False),
        ),
    ),
    Preset(
        id='tunguska',
        name='Tunguska Event (1908)',
        description='50-60m asteroid airburst over Siberia',
        parameters=SimulationInput(
            diameter=55.0, composition='rocky', velocity=15.0, approach_angle=30.0,
            impact_location=ImpactLocation(lat=60.886, lon=101.894, is_ocean=False),
        ),
    ),
    Preset(
        id='chicxulub',
        name='Chicxulub Impact (66 MYA)',
        description='10km asteroid that caused dinosaur extinction',
        parameters=SimulationInput(
            diameter=10000.0, composition='rocky', velocity=20.0, approach_angle=60.0,
            impact_location=ImpactLocation(lat=21.3, lon=-89.5, is_ocean=True),
        ),
    ),
    Preset(
        id='small_burnup',
        name='Small Meteor (Typical)',
        description='5m asteroid that burns up completely',
        parameters=SimulationInput(
            diameter=5.0, composition='rocky', velocity=17.0, approach_angle=45.0,
            impact_location=ImpactLocation(lat=40.7, lon=-74.0, is_ocean=False),
        ),
    ),
    Preset(
        id='ocean_impact',
        name='Ocean Impact Scenario',
        description='100m asteroid impacting the Pacific Ocean',
        parameters=SimulationInput(
            diameter=100.0, composition='metallic', velocity=25.0, approach_angle=45.0,
            impact_location=ImpactLocation(lat=0.0, lon=-140.0, is_ocean=True),
        ),
    ),
)

PRESETS_BY_ID = {p.id: p for p in PRESETS}


def get_preset(preset_id: str) -> Preset:
    if preset_id not in PRESETS_BY_ID:
        raise KeyError(
            f"Unknown preset '{preset_id}'. Available: {list(PRESETS_BY_ID)}"
        )
    return PRESETS_BY_ID[preset_id]
