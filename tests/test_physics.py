"""
Unit Tests for the Entry Physics
================================
Atmosphere, material table, force model and the entry integrator.
Run: python -m pytest tests/ -v
"""

import sys
import os
import numpy as np
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from impact_engine.atmosphere import (
    air_density, density_profile, SEA_LEVEL_DENSITY, SCALE_HEIGHT, ENTRY_ALTITUDE,
)
from impact_engine.materials import MATERIALS, COMPOSITIONS, get_material, body_mass
from impact_engine.forces import (
    reference_area, drag_force, dynamic_pressure, heating_rate,
    ablation_rate, entry_derivatives,
)
from impact_engine.inputs import ImpactLocation
from impact_engine.integrator import (
    integrate, IntegratorSettings, DEFAULT_SETTINGS,
    EntryPhase, EntryState,
)


def _entry(diameter, composition, velocity_kms, angle, method='euler',
           settings=None, location=None):
    return integrate(
        diameter=diameter,
        initial_mass=body_mass(diameter, composition),
        initial_velocity=velocity_kms * 1000.0,
        angle_deg=angle,
        material=get_material(composition),
        location=location,
        settings=settings,
        method=method,
    )


class TestAtmosphere:
    """Exponential atmosphere."""

    def test_sea_level_density(self):
        assert abs(air_density(0) - 1.225) < 1e-3

    def test_below_sea_level_clamped(self):
        assert air_density(-500.0) == SEA_LEVEL_DENSITY

    def test_scale_height(self):
        """Density falls by 1/e over one scale height."""
        assert air_density(SCALE_HEIGHT) == pytest.approx(1.225 / np.e, rel=1e-9)

    def test_density_decreases_with_altitude(self):
        altitudes = np.linspace(0, ENTRY_ALTITUDE, 200)
        rho = [air_density(h) for h in altitudes]
        assert all(a > b for a, b in zip(rho, rho[1:]))

    def test_profile_matches_scalar(self):
        alts = np.array([-100.0, 0.0, 10000.0, 80000.0])
        profile = density_profile(alts)
        expected = [air_density(h) for h in alts]
        assert np.allclose(profile['density'], expected)
        assert profile['relative_density'][1] == pytest.approx(1.0)


class TestMaterials:
    """Composition lookup and body mass."""

    def test_all_compositions_exist(self):
        for key in ['rocky', 'metallic', 'carbonaceous']:
            assert get_material(key).density > 0

    def test_unknown_composition(self):
        with pytest.raises(ValueError):
            get_material('icy')

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            MATERIALS['icy'] = MATERIALS['rocky']

    def test_rocky_mass(self):
        # (4/3)·π·10³ · 2500
        assert body_mass(20.0, 'rocky') == pytest.approx(10471975.5, rel=1e-6)

    def test_density_ordering(self):
        for d in [1.0, 10.0, 1000.0]:
            assert body_mass(d, 'metallic') > body_mass(d, 'rocky') > body_mass(d, 'carbonaceous')

    def test_mass_increases_with_diameter(self):
        for key in COMPOSITIONS:
            masses = [body_mass(d, key) for d in [1.0, 5.0, 20.0, 100.0, 1e4]]
            assert all(a < b for a, b in zip(masses, masses[1:]))


class TestForces:
    """Drag, dynamic pressure and heating."""

    def test_reference_area(self):
        assert reference_area(2.0) == pytest.approx(np.pi)

    def test_dynamic_pressure_sea_level(self):
        assert dynamic_pressure(1000.0, 0.0) == pytest.approx(612500.0)

    def test_drag_force(self):
        assert drag_force(1000.0, 0.0, 2.0, 0.47) == pytest.approx(904386.0, rel=1e-5)

    def test_heating_rate(self):
        assert heating_rate(1000.0, 0.0, 2.0) == pytest.approx(1.92423e9, rel=1e-5)

    def test_zero_velocity(self):
        assert drag_force(0.0, 0.0, 10.0, 0.47) == 0.0
        assert heating_rate(0.0, 0.0, 10.0) == 0.0

    def test_forces_drop_with_altitude(self):
        assert drag_force(2e4, 50000.0, 10.0, 0.47) < drag_force(2e4, 10000.0, 10.0, 0.47)

    def test_ablation_rate_scales_with_coefficient(self):
        rocky = ablation_rate(2e4, 20000.0, 10.0, get_material('rocky'), 1e-7)
        carb = ablation_rate(2e4, 20000.0, 10.0, get_material('carbonaceous'), 1e-7)
        assert carb == pytest.approx(1.5 * rocky)

    def test_derivatives_signs(self):
        dv, dm, dh = entry_derivatives(2e4, 1e6, 30000.0, 10.0,
                                       get_material('rocky'), 0.5, 1e-7)
        assert dv < 0 and dm < 0
        assert dh == pytest.approx(-1e4)

    def test_derivatives_without_mass(self):
        dv, _, _ = entry_derivatives(2e4, 0.0, 30000.0, 10.0,
                                     get_material('rocky'), 0.5, 1e-7)
        assert dv == 0.0


class TestEntryState:
    """One-way phase transitions."""

    def _state(self):
        return EntryState(time=0.0, altitude=30000.0, velocity=2e4,
                          mass=1e6, diameter=10.0)

    def test_fragment_records_altitude(self):
        s = self._state().fragment(1.5)
        assert s.phase is EntryPhase.FRAGMENTED
        assert s.fragmentation_altitude == 30000.0
        assert s.diameter == pytest.approx(15.0)

    def test_fragment_only_once(self):
        s = self._state().fragment(1.5)
        s = s.advance(0.1, 1.9e4, 9e5, 25000.0).fragment(1.5)
        assert s.fragmentation_altitude == 30000.0
        assert s.diameter == pytest.approx(15.0)

    def test_burst_requires_fragmentation(self):
        s = self._state()
        assert s.burst() is s

    def test_burst_after_fragmentation(self):
        s = self._state().fragment(1.5).advance(0.1, 1.9e4, 9e4, 20000.0).burst()
        assert s.phase is EntryPhase.AIRBURST
        assert s.airburst_altitude == 20000.0
        assert s.fragmentation_altitude == 30000.0
        assert s.burst() is s
        assert s.fragment(1.5) is s

    def test_original_state_untouched(self):
        s = self._state()
        s.fragment(1.5)
        assert s.phase is EntryPhase.DESCENDING
        assert s.fragmentation_altitude is None


class TestIntegrator:
    """Euler (default) and RK4 entry integration."""

    def test_defaults(self):
        assert DEFAULT_SETTINGS.dt == 0.1
        assert DEFAULT_SETTINGS.entry_altitude == 120000.0
        assert DEFAULT_SETTINGS.fragmentation_spread == 1.5
        assert DEFAULT_SETTINGS.airburst_mass_ratio == 0.1

    def test_sampling_once_per_second(self):
        r = _entry(100.0, 'rocky', 20.0, 60.0)
        assert r.steps == 70
        assert len(r.trajectory) == 7
        assert r.time[0] == pytest.approx(0.1)
        assert np.allclose(np.diff(r.time), 1.0)

    def test_mass_non_increasing(self):
        r = _entry(20.0, 'rocky', 19.0, 18.0)
        assert np.all(np.diff(r.mass) <= 0)

    def test_location_carried_through(self):
        loc = ImpactLocation(lat=55.15, lon=61.41)
        r = _entry(20.0, 'rocky', 19.0, 18.0, location=loc)
        assert all(p.lat == 55.15 and p.lon == 61.41 for p in r.trajectory)

    def test_land_impact_reaches_ground(self):
        r = _entry(100.0, 'rocky', 20.0, 60.0)
        assert r.final_altitude <= 0
        assert r.phase is EntryPhase.FRAGMENTED
        assert r.fragmentation_altitude == pytest.approx(26476.0, abs=5.0)
        assert r.airburst_altitude is None

    def test_strong_body_stays_intact(self):
        r = _entry(100.0, 'metallic', 25.0, 45.0)
        assert r.phase is EntryPhase.DESCENDING
        assert r.fragmentation_altitude is None
        assert r.final_altitude <= 0

    def test_airburst_truncates_run(self):
        r = _entry(20.0, 'rocky', 19.0, 18.0)
        assert r.phase is EntryPhase.AIRBURST
        assert r.final_altitude == r.airburst_altitude
        assert r.airburst_altitude > 0
        assert r.fragmentation_altitude > r.airburst_altitude
        assert r.final_mass < 0.1 * r.initial_mass
        assert r.trajectory[-1].time < r.final_state.time

    def test_zero_velocity_exits_immediately(self):
        r = _entry(20.0, 'rocky', 0.0, 45.0)
        assert r.steps == 0
        assert r.trajectory == ()
        assert r.final_state == r.initial_state

    def test_zero_mass_exits_immediately(self):
        r = integrate(0.0, 0.0, 2e4, 45.0, get_material('rocky'))
        assert r.steps == 0
        assert r.mass_fraction == 0.0

    def test_horizontal_entry_hits_time_cap(self):
        r = _entry(1.0, 'carbonaceous', 11.0, 0.0)
        assert r.final_altitude == ENTRY_ALTITUDE
        assert 300.0 < r.final_state.time < 300.25
        assert len(r.trajectory) == 301

    def test_custom_time_cap(self):
        r = _entry(100.0, 'rocky', 20.0, 10.0, settings=IntegratorSettings(max_time=1.0))
        assert r.final_state.time <= 1.1 + 1e-9
        assert r.final_altitude > 0

    def test_literal_ablation_scale_reaches_ground(self):
        """With 1e-9 the small body barely ablates and survives to the ground."""
        r = _entry(5.0, 'rocky', 17.0, 45.0,
                   settings=IntegratorSettings(ablation_scale=1e-9))
        assert r.final_altitude <= 0
        assert r.mass_fraction > 0.9

    def test_unknown_method(self):
        with pytest.raises(ValueError):
            _entry(20.0, 'rocky', 19.0, 18.0, method='leapfrog')

    def test_deterministic(self):
        a = _entry(55.0, 'rocky', 15.0, 30.0)
        b = _entry(55.0, 'rocky', 15.0, 30.0)
        assert a == b

    def test_rk4_agrees_with_euler(self):
        euler = _entry(100.0, 'rocky', 20.0, 60.0)
        rk4 = _entry(100.0, 'rocky', 20.0, 60.0, method='rk4')
        assert rk4.method == 'rk4'
        assert rk4.final_altitude <= 0
        assert rk4.phase is EntryPhase.FRAGMENTED
        assert rk4.final_velocity == pytest.approx(euler.final_velocity, rel=0.05)
        assert len(rk4.trajectory) == len(euler.trajectory)

    def test_rk4_intact_body(self):
        r = _entry(100.0, 'metallic', 25.0, 45.0, method='rk4')
        assert r.phase is EntryPhase.DESCENDING
        assert r.mass_fraction > 0.8

    def test_resample_hits_samples(self):
        r = _entry(100.0, 'rocky', 20.0, 60.0)
        track = r.resample(r.time)
        assert np.allclose(track['altitude'], r.altitude)
        assert np.allclose(track['mass'], r.mass)

    def test_resample_midpoint_and_bounds(self):
        r = _entry(100.0, 'rocky', 20.0, 60.0)
        mid = 0.5 * (r.time[0] + r.time[1])
        track = r.resample([mid, -5.0, 1e3])
        assert track['altitude'][0] == pytest.approx(0.5 * (r.altitude[0] + r.altitude[1]))
        assert track['altitude'][1] == r.altitude[0]
        assert track['altitude'][2] == r.altitude[-1]

    def test_resample_needs_two_points(self):
        r = _entry(20.0, 'rocky', 0.0, 45.0)
        with pytest.raises(ValueError):
            r.resample([0.0])

    def test_summary(self):
        text = _entry(20.0, 'rocky', 19.0, 18.0).summary()
        assert 'EULER' in text
        assert 'fragmented_airburst' in text


if __name__ == "__main__":
    pytest.main([__file__, '-v'])
