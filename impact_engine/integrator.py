"""
Atmospheric Entry Integrator
============================
Steps a single body from the entry interface down through the
atmosphere along a straight path at a fixed approach angle.

State advanced each step: velocity, mass, altitude, effective diameter.

    dv/dt = −F_drag / m
    dm/dt = −Q · σ_abl · k
    dh/dt = −v · sin(θ)

Two one-shot events change the course of a run:

1. **Fragmentation** — when dynamic pressure first exceeds the material
   strength, the effective diameter grows by 1.5× (debris cloud).
2. **Airburst** — once fragmented, when the remaining mass drops below
   10 % of the initial mass the body is destroyed and the run stops.

Both events are one-way transitions of `EntryPhase`:

    DESCENDING ──▶ FRAGMENTED ──▶ AIRBURST

Methods:
  - **Euler** (default) — explicit, dt = 0.1 s. Outcome thresholds are
    tuned against this method.
  - **RK4** — classical 4th order on the same derivatives, events checked
    at step boundaries.

A trajectory point is sampled on the first step and every 10th step
after it (≈ once per simulated second).
"""

import numpy as np
from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple

from scipy.interpolate import interp1d

from .atmosphere import ENTRY_ALTITUDE
from .forces import drag_force, dynamic_pressure, heating_rate, entry_derivatives
from .inputs import ImpactLocation
from .materials import MaterialProperties


@dataclass(frozen=True)
class IntegratorSettings:
    """
    Numerical and model parameters of the entry integration.
    """
    dt: float = 0.1                       # s
    entry_altitude: float = ENTRY_ALTITUDE
    max_time: float = 300.0               # s  hard cap on simulated time
    sample_every: int = 10                # steps between trajectory points
    ablation_scale: float = 2.27e-7       # mass loss per joule of heating
    fragmentation_spread: float = 1.5     # diameter multiplier on breakup
    airburst_mass_ratio: float = 0.1      # m/m0 that triggers an airburst


DEFAULT_SETTINGS = IntegratorSettings()

METHODS = ('euler', 'rk4')


class EntryPhase(Enum):
    DESCENDING = 'descending'
    FRAGMENTED = 'fragmented'
    AIRBURST = 'fragmented_airburst'


@dataclass(frozen=True)
class EntryState:
    """Snapshot of the body at one instant."""
    time: float
    altitude: float
    velocity: float
    mass: float
    diameter: float
    phase: EntryPhase = EntryPhase.DESCENDING
    fragmentation_altitude: Optional[float] = None
    airburst_altitude: Optional[float] = None

    @property
    def fragmented(self) -> bool:
        return self.phase is not EntryPhase.DESCENDING

    def fragment(self, spread: float) -> 'EntryState':
        """Break up at the current altitude. No-op once fragmented."""
        if self.phase is not EntryPhase.DESCENDING:
            return self
        return replace(self, phase=EntryPhase.FRAGMENTED,
                       fragmentation_altitude=self.altitude,
                       diameter=self.diameter * spread)

    def burst(self) -> 'EntryState':
        """Disintegrate at the current altitude. Only valid from FRAGMENTED."""
        if self.phase is not EntryPhase.FRAGMENTED:
            return self
        return replace(self, phase=EntryPhase.AIRBURST,
                       airburst_altitude=self.altitude)

    def advance(self, dt: float, velocity: float, mass: float,
                altitude: float) -> 'EntryState':
        return replace(self, time=self.time + dt, velocity=velocity,
                       mass=mass, altitude=altitude)

    def in_flight(self, max_time: float) -> bool:
        return (self.altitude > 0 and self.velocity > 0 and self.mass > 0
                and self.time <= max_time)


@dataclass(frozen=True)
class TrajectoryPoint:
    """One sampled point of the entry trajectory."""
    time: float        # s since entry interface
    altitude: float    # m
    velocity: float    # m/s
    lat: float
    lon: float
    mass: float        # kg

    def to_dict(self) -> Dict[str, float]:
        return {
            'time': self.time,
            'altitude': self.altitude,
            'velocity': self.velocity,
            'lat': self.lat,
            'lon': self.lon,
            'mass': self.mass,
        }


@dataclass(frozen=True)
class EntryResult:
    """Complete integrator output."""
    trajectory: Tuple[TrajectoryPoint, ...]
    initial_state: EntryState
    final_state: EntryState
    initial_mass: float
    method: str                # 'euler' or 'rk4'
    dt: float                  # timestep used
    steps: int                 # number of steps taken

    @property
    def final_mass(self) -> float:
        return self.final_state.mass

    @property
    def final_velocity(self) -> float:
        return self.final_state.velocity

    @property
    def final_altitude(self) -> float:
        return self.final_state.altitude

    @property
    def fragmentation_altitude(self) -> Optional[float]:
        return self.final_state.fragmentation_altitude

    @property
    def airburst_altitude(self) -> Optional[float]:
        return self.final_state.airburst_altitude

    @property
    def phase(self) -> EntryPhase:
        return self.final_state.phase

    @property
    def mass_fraction(self) -> float:
        """Fraction of the initial mass left at the end of the run."""
        if self.initial_mass <= 0:
            return 0.0
        return self.final_mass / self.initial_mass

    # ── Array views of the sampled trajectory ─────────────────────────────
    @property
    def time(self) -> np.ndarray:
        return np.array([p.time for p in self.trajectory])

    @property
    def altitude(self) -> np.ndarray:
        return np.array([p.altitude for p in self.trajectory])

    @property
    def velocity(self) -> np.ndarray:
        return np.array([p.velocity for p in self.trajectory])

    @property
    def mass(self) -> np.ndarray:
        return np.array([p.mass for p in self.trajectory])

    def resample(self, times: Sequence[float]) -> Dict[str, np.ndarray]:
        """
        Linearly interpolate the sampled trajectory at arbitrary times.
        Times outside the sampled span are held at the end values.
        """
        if len(self.trajectory) < 2:
            raise ValueError(
                f"Need at least 2 trajectory points to resample, "
                f"got {len(self.trajectory)}"
            )
        t = self.time
        times = np.asarray(times, dtype=float)
        out = {'time': times}
        for key, values in (('altitude', self.altitude),
                            ('velocity', self.velocity),
                            ('mass', self.mass)):
            f = interp1d(t, values, kind='linear', bounds_error=False,
                         fill_value=(values[0], values[-1]),
                         assume_sorted=True)
            out[key] = f(times)
        return out

    def summary(self) -> str:
        """Human-readable summary string."""
        frag = self.fragmentation_altitude
        burst = self.airburst_altitude
        frag_txt = f"{frag / 1000:>10.2f} km" if frag is not None else f"{'—':>10s}   "
        burst_txt = f"{burst / 1000:>10.2f} km" if burst is not None else f"{'—':>10s}   "
        lines = [
            f"╔══════════════════════════════════════════════════════╗",
            f"║  ENTRY SUMMARY — {self.method.upper():<36s}║",
            f"╠══════════════════════════════════════════════════════╣",
            f"║  Timestep     : {self.dt:<36.4f} ║",
            f"║  Steps        : {self.steps:<36d} ║",
            f"║  Samples      : {len(self.trajectory):<36d} ║",
            f"║  Final phase  : {self.phase.value:<36s} ║",
            f"╠══════════════════════════════════════════════════════╣",
            f"║  Duration     : {self.final_state.time:>10.1f} s{'':<24s} ║",
            f"║  End altitude : {self.final_altitude / 1000:>10.2f} km{'':<23s} ║",
            f"║  End velocity : {self.final_velocity:>10.1f} m/s{'':<22s} ║",
            f"║  Mass left    : {100 * self.mass_fraction:>10.2f} %{'':<24s} ║",
            f"║  Breakup alt  : {frag_txt}{'':<23s} ║",
            f"║  Airburst alt : {burst_txt}{'':<23s} ║",
            f"╚══════════════════════════════════════════════════════╝",
        ]
        return '\n'.join(lines)


def _euler_step(state: EntryState, material: MaterialProperties,
                sin_angle: float, settings: IntegratorSettings) -> EntryState:
    """
    One explicit Euler step.

    Drag is evaluated before a breakup in the same step can widen the
    body; heating uses the widened diameter and the starting velocity.
    The altitude update uses the already decelerated velocity.
    """
    dt = settings.dt
    drag = drag_force(state.velocity, state.altitude, state.diameter,
                      material.drag_coefficient)
    q = dynamic_pressure(state.velocity, state.altitude)

    if q > material.strength:
        state = state.fragment(settings.fragmentation_spread)

    deceleration = drag / state.mass
    mass_loss = (heating_rate(state.velocity, state.altitude, state.diameter)
                 * material.ablation_coefficient * settings.ablation_scale * dt)

    velocity = state.velocity - deceleration * dt
    mass = state.mass - mass_loss
    altitude = state.altitude - velocity * sin_angle * dt
    return state.advance(dt, velocity, mass, altitude)


def _rk4_step(state: EntryState, material: MaterialProperties,
              sin_angle: float, settings: IntegratorSettings) -> EntryState:
    """One classical RK4 step; breakup is decided at the step start."""
    dt = settings.dt
    if dynamic_pressure(state.velocity, state.altitude) > material.strength:
        state = state.fragment(settings.fragmentation_spread)

    def deriv(v, m, h):
        return entry_derivatives(v, m, h, state.diameter, material,
                                 sin_angle, settings.ablation_scale)

    v, m, h = state.velocity, state.mass, state.altitude
    k1 = deriv(v, m, h)
    k2 = deriv(v + 0.5 * dt * k1[0], m + 0.5 * dt * k1[1], h + 0.5 * dt * k1[2])
    k3 = deriv(v + 0.5 * dt * k2[0], m + 0.5 * dt * k2[1], h + 0.5 * dt * k2[2])
    k4 = deriv(v + dt * k3[0], m + dt * k3[1], h + dt * k3[2])

    velocity = v + (dt / 6.0) * (k1[0] + 2 * k2[0] + 2 * k3[0] + k4[0])
    mass = m + (dt / 6.0) * (k1[1] + 2 * k2[1] + 2 * k3[1] + k4[1])
    altitude = h + (dt / 6.0) * (k1[2] + 2 * k2[2] + 2 * k3[2] + k4[2])
    return state.advance(dt, velocity, mass, altitude)


_STEPPERS = {
    'euler': _euler_step,
    'rk4': _rk4_step,
}


def integrate(diameter: float, initial_mass: float, initial_velocity: float,
              angle_deg: float, material: MaterialProperties,
              location: Optional[ImpactLocation] = None,
              settings: Optional[IntegratorSettings] = None,
              method: str = 'euler') -> EntryResult:
    """
    Simulate atmospheric entry from the entry interface.

    Parameters
    ----------
    diameter : initial diameter (m)
    initial_mass : initial mass (kg)
    initial_velocity : entry speed (m/s)
    angle_deg : approach angle above the horizontal (degrees)
    material : MaterialProperties of the body
    location : ground point copied onto every trajectory sample
    settings : IntegratorSettings, defaults to DEFAULT_SETTINGS
    method : 'euler' or 'rk4'

    Returns
    -------
    EntryResult
    """
    if method not in _STEPPERS:
        raise ValueError(f"Unknown method '{method}'. Available: {list(METHODS)}")
    settings = settings or DEFAULT_SETTINGS
    location = location or ImpactLocation()
    step_fn = _STEPPERS[method]

    sin_angle = float(np.sin(np.radians(angle_deg)))
    burst_mass = settings.airburst_mass_ratio * initial_mass

    initial = EntryState(
        time=0.0,
        altitude=settings.entry_altitude,
        velocity=initial_velocity,
        mass=initial_mass,
        diameter=diameter,
    )
    state = initial
    trajectory: List[TrajectoryPoint] = []
    step = 0

    while state.in_flight(settings.max_time):
        state = step_fn(state, material, sin_angle, settings)

        if state.phase is EntryPhase.FRAGMENTED and state.mass < burst_mass:
            state = state.burst()
            step += 1
            break

        if step % settings.sample_every == 0:
            trajectory.append(TrajectoryPoint(
                time=state.time,
                altitude=state.altitude,
                velocity=state.velocity,
                lat=location.lat,
                lon=location.lon,
                mass=state.mass,
            ))
        step += 1

    return EntryResult(
        trajectory=tuple(trajectory),
        initial_state=initial,
        final_state=state,
        initial_mass=initial_mass,
        method=method,
        dt=settings.dt,
        steps=step,
    )
