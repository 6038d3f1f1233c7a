"""
Exponential Atmosphere Model
============================
Air density as a function of geometric altitude using a single
isothermal layer:

    ρ(h) = ρ₀ · exp(−h / H)

with sea-level density ρ₀ = 1.225 kg/m³ and scale height H = 8.5 km.
Altitudes below sea level are clamped to ρ₀.

The model is deliberately first order: it is accurate to within a factor
of ~2 up to the 120 km entry interface, which is enough for an
illustrative entry simulation.
"""

import numpy as np


# ── Atmosphere Constants ───────────────────────────────────────────────────
SEA_LEVEL_DENSITY    = 1.225       # kg/m³
SCALE_HEIGHT         = 8500.0      # m
ENTRY_ALTITUDE       = 120000.0    # m  (entry interface, ~Kármán line)


def air_density(altitude: float) -> float:
    """
    Air density (kg/m³) at a given geometric altitude (m).
    """
    if altitude < 0:
        return SEA_LEVEL_DENSITY
    return SEA_LEVEL_DENSITY * float(np.exp(-altitude / SCALE_HEIGHT))


# ── Vectorized version for plotting ───────────────────────────────────────
def density_profile(alt_array: np.ndarray) -> dict:
    """
    Density profile for an array of altitudes.
    Returns dict with keys: 'altitude', 'density', 'relative_density'.
    """
    alt_array = np.asarray(alt_array, dtype=float)
    rho = SEA_LEVEL_DENSITY * np.exp(-np.clip(alt_array, 0.0, None) / SCALE_HEIGHT)
    return {
        'altitude': alt_array,
        'density': rho,
        'relative_density': rho / SEA_LEVEL_DENSITY,
    }


if __name__ == "__main__":
    print("Exponential Atmosphere")
    print("=" * 40)
    print(f"{'Alt (m)':>10} {'ρ (kg/m³)':>14} {'ρ/ρ₀':>12}")
    print("-" * 40)
    for h in [0, 5000, 10000, 20000, 50000, 80000, 120000]:
        rho = air_density(h)
        print(f"{h:>10.0f} {rho:>14.6e} {rho / SEA_LEVEL_DENSITY:>12.6f}")
