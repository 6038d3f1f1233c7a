"""
Impactor Material Table
=======================
Bulk properties for the three broad asteroid composition classes:

- Rocky (S-type, ordinary chondrite)
- Metallic (M-type, iron-nickel)
- Carbonaceous (C-type, weak and porous)

Strength is the dynamic-pressure threshold at which the body breaks up.
The ablation coefficient scales heating into mass loss.
"""

from dataclasses import dataclass
from types import MappingProxyType

import numpy as np


@dataclass(frozen=True)
class MaterialProperties:
    """Bulk properties of one composition class."""
    name: str
    density: float               # kg/m³
    strength: float              # Pa
    drag_coefficient: float      # dimensionless
    ablation_coefficient: float  # dimensionless


ROCKY = MaterialProperties(
    name='Rocky (S-type)',
    density=2500.0,
    strength=1e7,
    drag_coefficient=0.47,
    ablation_coefficient=0.1,
)

METALLIC = MaterialProperties(
    name='Metallic (M-type)',
    density=7500.0,
    strength=5e8,
    drag_coefficient=0.47,
    ablation_coefficient=0.05,
)

CARBONACEOUS = MaterialProperties(
    name='Carbonaceous (C-type)',
    density=1500.0,
    strength=5e6,
    drag_coefficient=0.47,
    ablation_coefficient=0.15,
)

# Read-only so concurrent simulations can share it
MATERIALS = MappingProxyType({
    'rocky': ROCKY,
    'metallic': METALLIC,
    'carbonaceous': CARBONACEOUS,
})

COMPOSITIONS = tuple(MATERIALS.keys())


def get_material(composition: str) -> MaterialProperties:
    """
    Look up the properties for a composition key.

    Parameters
    ----------
    composition : str
        One of 'rocky', 'metallic', 'carbonaceous'
    """
    if composition not in MATERIALS:
        raise ValueError(
            f"Unknown composition '{composition}'. "
            f"Available: {list(COMPOSITIONS)}"
        )
    return MATERIALS[composition]


def body_mass(diameter: float, composition: str) -> float:
    """Mass (kg) of a sphere of the given diameter (m) and composition."""
    volume = (4.0 / 3.0) * np.pi * (diameter / 2) ** 3
    return volume * get_material(composition).density
