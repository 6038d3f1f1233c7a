"""
Simulation Inputs
=================
The caller-supplied description of one entry scenario.

Units follow the request format of the surrounding service:
diameter in meters, entry velocity in km/s, approach angle in degrees
above the horizontal.
"""

from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass(frozen=True)
class ImpactLocation:
    """Ground point under the entry; `is_ocean` gates ocean effects."""
    lat: float = 0.0
    lon: float = 0.0
    is_ocean: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {'lat': self.lat, 'lon': self.lon, 'isOcean': self.is_ocean}


@dataclass(frozen=True)
class SimulationInput:
    """
    Complete description of one entry scenario.
    """
    diameter: float = 20.0            # m
    composition: str = 'rocky'        # 'rocky' | 'metallic' | 'carbonaceous'
    velocity: float = 19.0            # km/s  at the entry interface
    approach_angle: float = 45.0      # degrees from horizontal
    impact_location: ImpactLocation = field(default_factory=ImpactLocation)

    @property
    def velocity_mps(self) -> float:
        """Entry speed in m/s."""
        return self.velocity * 1000.0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SimulationInput':
        """
        Build an input from the camelCase request shape, e.g.

            {"diameter": 20, "composition": "rocky", "velocity": 19,
             "approachAngle": 18,
             "impactLocation": {"lat": 55.15, "lon": 61.41, "isOcean": false}}
        """
        loc = data.get('impactLocation') or {}
        return cls(
            diameter=float(data['diameter']),
            composition=str(data['composition']),
            velocity=float(data['velocity']),
            approach_angle=float(data['approachAngle']),
            impact_location=ImpactLocation(
                lat=float(loc.get('lat', 0.0)),
                lon=float(loc.get('lon', 0.0)),
                is_ocean=bool(loc.get('isOcean', False)),
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'diameter': self.diameter,
            'composition': self.composition,
            'velocity': self.velocity,
            'approachAngle': self.approach_angle,
            'impactLocation': self.impact_location.to_dict(),
        }
