"""
Smoke Tests for the Plotting Layer
==================================
Each figure is rendered off-screen and written to a temporary directory.
"""

import sys
import os
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

from impact_engine.inputs import SimulationInput
from impact_engine.presets import get_preset
from impact_engine.simulation import simulate, run_entry
from impact_engine.validation import validate_against_events
from impact_engine.visualization import (
    plot_atmosphere, plot_entry_profile, plot_effect_radii,
    plot_euler_vs_rk4, plot_dashboard, plot_event_validation,
    create_entry_animation, ensure_output_dir, OUTCOME_COLORS,
)
from impact_engine.outcome import OUTCOMES


LAND = SimulationInput(diameter=100.0, composition='rocky', velocity=20.0,
                       approach_angle=60.0)


class TestFigures:

    def test_every_outcome_has_a_color(self):
        assert set(OUTCOME_COLORS) == set(OUTCOMES)

    def test_atmosphere(self, tmp_path):
        path = tmp_path / 'atm.png'
        fig = plot_atmosphere(save_path=str(path))
        plt.close(fig)
        assert path.exists()

    def test_entry_profile(self, tmp_path):
        entry = run_entry(get_preset('chelyabinsk').parameters)
        path = tmp_path / 'profile.png'
        fig = plot_entry_profile(entry, title='Chelyabinsk', save_path=str(path))
        plt.close(fig)
        assert path.exists()

    def test_effect_radii_for_each_outcome(self, tmp_path):
        for preset_id in ['small_burnup', 'chelyabinsk', 'ocean_impact']:
            result = simulate(get_preset(preset_id).parameters)
            path = tmp_path / f'{preset_id}.png'
            fig = plot_effect_radii(result, save_path=str(path))
            plt.close(fig)
            assert path.exists()

    def test_euler_vs_rk4(self, tmp_path):
        euler = run_entry(LAND)
        rk4 = run_entry(LAND, method='rk4')
        path = tmp_path / 'evr.png'
        fig = plot_euler_vs_rk4(euler, rk4, save_path=str(path))
        plt.close(fig)
        assert path.exists()

    def test_dashboard(self, tmp_path):
        path = tmp_path / 'dash.png'
        fig = plot_dashboard(simulate(LAND), run_entry(LAND), save_path=str(path))
        plt.close(fig)
        assert path.exists()

    def test_event_validation(self, tmp_path):
        path = tmp_path / 'events.png'
        fig = plot_event_validation(validate_against_events(verbose=False),
                                    save_path=str(path))
        plt.close(fig)
        assert path.exists()

    def test_output_dir_created(self, tmp_path):
        target = tmp_path / 'nested' / 'out'
        assert ensure_output_dir(str(target)) == str(target)
        assert target.is_dir()


class TestAnimation:

    def test_gif_written(self, tmp_path):
        path = tmp_path / 'descent.gif'
        out = create_entry_animation(run_entry(LAND), save_path=str(path), frames=5)
        assert out == str(path)
        assert path.exists()

    def test_short_trajectory_rejected(self, tmp_path):
        entry = run_entry(SimulationInput(velocity=0.0))
        with pytest.raises(ValueError):
            create_entry_animation(entry, save_path=str(tmp_path / 'x.gif'))
