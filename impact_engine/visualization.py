"""
Visualization Engine
====================
Plots for entry and impact analysis:
  1. Entry profile (altitude, velocity, mass vs time)
  2. Atmospheric density profile
  3. Effect radii map (blast rings, thermal, crater, tsunami)
  4. Euler vs RK4 comparison
  5. Dashboard with key metrics
  6. Historical event check
  7. Animated descent (saved as GIF)
"""

import numpy as np
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import matplotlib.gridspec as gridspec
from typing import List
import os

from .atmosphere import ENTRY_ALTITUDE, density_profile
from .integrator import EntryResult
from .outcome import OUTCOMES
from .simulation import SimulationResult
from .validation import EventValidation


# ── Style Configuration ───────────────────────────────────────────────────
STYLE = {
    'bg_color': '#0a0a0a',
    'text_color': '#e0e0e0',
    'grid_color': '#333333',
    'accent_colors': ['#00d4ff', '#ff6b35', '#00e676', '#ffeb3b',
                      '#e040fb', '#ff5252'],
    'font_family': 'monospace',
}

OUTCOME_COLORS = dict(zip(OUTCOMES, ['#ffeb3b', '#ff6b35', '#ff5252', '#00d4ff']))


def _apply_dark_style(fig, axes):
    """Apply consistent dark theme to figure and axes."""
    fig.patch.set_facecolor(STYLE['bg_color'])
    if not isinstance(axes, np.ndarray):
        axes = [axes]
    else:
        axes = axes.flatten()

    for ax in axes:
        ax.set_facecolor(STYLE['bg_color'])
        ax.tick_params(colors=STYLE['text_color'])
        ax.xaxis.label.set_color(STYLE['text_color'])
        ax.yaxis.label.set_color(STYLE['text_color'])
        ax.title.set_color(STYLE['text_color'])
        ax.grid(True, color=STYLE['grid_color'], alpha=0.4, linewidth=0.5)
        for spine in ax.spines.values():
            spine.set_color(STYLE['grid_color'])


def _legend(ax, **kwargs):
    ax.legend(facecolor='#1a1a1a', edgecolor='#444',
              labelcolor=STYLE['text_color'], **kwargs)


def _save(fig, save_path):
    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches='tight',
                    facecolor=STYLE['bg_color'])


def _mark_events(ax, entry: EntryResult, scale: float = 1000.0):
    """Horizontal markers at breakup and airburst altitude."""
    if entry.fragmentation_altitude is not None:
        ax.axhline(entry.fragmentation_altitude / scale, color='#e040fb',
                   linestyle='--', linewidth=1, label='Breakup')
    if entry.airburst_altitude is not None:
        ax.axhline(entry.airburst_altitude / scale, color='#ff5252',
                   linestyle=':', linewidth=1.5, label='Airburst')


def ensure_output_dir(path: str = 'outputs'):
    os.makedirs(path, exist_ok=True)
    return path


# ══════════════════════════════════════════════════════════════════════════
#  1. Entry Profile
# ══════════════════════════════════════════════════════════════════════════

def plot_entry_profile(entry: EntryResult, title: str = 'Atmospheric Entry',
                       save_path: str = None, show: bool = False) -> plt.Figure:
    """Altitude, velocity and remaining mass over the sampled trajectory."""
    fig, axes = plt.subplots(2, 2, figsize=(14, 9))
    _apply_dark_style(fig, axes)

    t = entry.time
    alt_km = entry.altitude / 1000
    mass_pct = 100 * entry.mass / entry.initial_mass if entry.initial_mass > 0 else entry.mass

    ax = axes[0, 0]
    ax.plot(t, alt_km, color=STYLE['accent_colors'][0], linewidth=2.5)
    _mark_events(ax, entry)
    ax.set_xlabel('Time (s)')
    ax.set_ylabel('Altitude (km)')
    ax.set_title('ALTITUDE', fontweight='bold')
    if entry.fragmentation_altitude is not None or entry.airburst_altitude is not None:
        _legend(ax, fontsize=9)

    ax = axes[0, 1]
    ax.plot(t, entry.velocity / 1000, color=STYLE['accent_colors'][1], linewidth=2.5)
    ax.set_xlabel('Time (s)')
    ax.set_ylabel('Velocity (km/s)')
    ax.set_title('VELOCITY', fontweight='bold')

    ax = axes[1, 0]
    ax.plot(t, mass_pct, color=STYLE['accent_colors'][2], linewidth=2.5)
    ax.axhline(10, color='#555', linestyle='--', alpha=0.6)
    ax.axhline(1, color='#555', linestyle=':', alpha=0.6)
    ax.set_xlabel('Time (s)')
    ax.set_ylabel('Mass remaining (%)')
    ax.set_title('ABLATION', fontweight='bold')

    ax = axes[1, 1]
    ax.plot(entry.velocity / 1000, alt_km, color=STYLE['accent_colors'][3], linewidth=2.5)
    _mark_events(ax, entry)
    ax.set_xlabel('Velocity (km/s)')
    ax.set_ylabel('Altitude (km)')
    ax.set_title('VELOCITY vs ALTITUDE', fontweight='bold')

    fig.suptitle(f'{title} ({entry.method.upper()}, dt={entry.dt}s)',
                 fontsize=14, fontweight='bold', color=STYLE['text_color'])
    plt.tight_layout()
    _save(fig, save_path)
    if show:
        plt.show()
    return fig


# ══════════════════════════════════════════════════════════════════════════
#  2. Atmospheric Profile
# ══════════════════════════════════════════════════════════════════════════

def plot_atmosphere(save_path: str = None) -> plt.Figure:
    """Exponential atmosphere from sea level to the entry interface."""
    altitudes = np.linspace(0, ENTRY_ALTITUDE, 500)
    profile = density_profile(altitudes)

    fig, axes = plt.subplots(1, 2, figsize=(13, 7), sharey=True)
    _apply_dark_style(fig, axes)
    alt_km = altitudes / 1000

    axes[0].plot(profile['density'], alt_km, color='#00e676', linewidth=2)
    axes[0].fill_betweenx(alt_km, 0, profile['density'], alpha=0.1, color='#00e676')
    axes[0].set_xlabel('Density (kg/m³)', fontsize=10)

    axes[1].semilogx(profile['relative_density'], alt_km, color='#00d4ff', linewidth=2)
    axes[1].set_xlabel('ρ / ρ₀ (log)', fontsize=10)

    axes[0].set_ylabel('Altitude (km)', fontsize=12)
    fig.suptitle('Exponential Atmosphere (H = 8.5 km)',
                 fontsize=14, fontweight='bold', color=STYLE['text_color'])
    plt.tight_layout()
    _save(fig, save_path)
    return fig


# ══════════════════════════════════════════════════════════════════════════
#  3. Effect Radii
# ══════════════════════════════════════════════════════════════════════════

def plot_effect_radii(result: SimulationResult, title: str = 'Impact Effects',
                      save_path: str = None) -> plt.Figure:
    """Concentric rings of each ground effect around ground zero."""
    fig, ax = plt.subplots(figsize=(9, 9))
    _apply_dark_style(fig, ax)
    fx = result.impact_effects

    rings = []
    if fx.tsunami_radius is not None:
        rings.append(('Tsunami reach', fx.tsunami_radius, '#26c6da'))
    if fx.blast_radius is not None:
        rings += [
            ('Thermal (3rd degree)', fx.thermal_radius, '#ffeb3b'),
            ('Blast 1 psi', fx.blast_radius.light, '#00e676'),
            ('Blast 5 psi', fx.blast_radius.moderate, '#ff6b35'),
            ('Blast 20 psi', fx.blast_radius.severe, '#ff5252'),
        ]
    if fx.crater_diameter is not None:
        rings.append(('Crater', fx.crater_diameter / 2, '#e040fb'))

    rings = [r for r in rings if r[1] > 0]
    if not rings:
        ax.text(0.5, 0.5, 'No ground effects\n(body burned up)',
                ha='center', va='center', transform=ax.transAxes,
                color=STYLE['text_color'], fontsize=14)
        ax.set_xticks([])
        ax.set_yticks([])
    else:
        # Largest first so smaller rings are drawn on top
        for label, radius, color in sorted(rings, key=lambda r: -r[1]):
            ax.add_patch(plt.Circle((0, 0), radius / 1000, color=color,
                                    alpha=0.25, label=f'{label}: {radius / 1000:.2f} km'))
            ax.add_patch(plt.Circle((0, 0), radius / 1000, color=color,
                                    fill=False, linewidth=1.5))
        extent = max(r[1] for r in rings) / 1000 * 1.1
        ax.set_xlim(-extent, extent)
        ax.set_ylim(-extent, extent)
        ax.set_aspect('equal')
        ax.set_xlabel('km')
        ax.set_ylabel('km')
        _legend(ax, fontsize=9, loc='upper right')

    ax.set_title(f'{title} — {result.outcome.replace("_", " ").upper()} '
                 f'({result.energy_release:.3g} Mt)',
                 fontsize=13, fontweight='bold')
    plt.tight_layout()
    _save(fig, save_path)
    return fig


# ══════════════════════════════════════════════════════════════════════════
#  4. Euler vs RK4 Comparison
# ══════════════════════════════════════════════════════════════════════════

def plot_euler_vs_rk4(euler_result: EntryResult, rk4_result: EntryResult,
                      save_path: str = None) -> plt.Figure:
    """Compare Euler and RK4 descents of the same body."""
    fig, axes = plt.subplots(1, 3, figsize=(18, 5))
    _apply_dark_style(fig, axes)

    ax = axes[0]
    ax.plot(euler_result.velocity / 1000, euler_result.altitude / 1000,
            color='#ff6b35', linewidth=2, linestyle='--', label=f'Euler (dt={euler_result.dt}s)')
    ax.plot(rk4_result.velocity / 1000, rk4_result.altitude / 1000,
            color='#00d4ff', linewidth=2, label=f'RK4 (dt={rk4_result.dt}s)')
    ax.set_xlabel('Velocity (km/s)')
    ax.set_ylabel('Altitude (km)')
    ax.set_title('Velocity vs Altitude', fontweight='bold')
    _legend(ax, fontsize=10)

    ax = axes[1]
    ax.plot(euler_result.time, 100 * euler_result.mass / euler_result.initial_mass,
            color='#ff6b35', linewidth=2, linestyle='--', label='Euler')
    ax.plot(rk4_result.time, 100 * rk4_result.mass / rk4_result.initial_mass,
            color='#00d4ff', linewidth=2, label='RK4')
    ax.set_xlabel('Time (s)')
    ax.set_ylabel('Mass remaining (%)')
    ax.set_title('Ablation', fontweight='bold')
    _legend(ax, fontsize=10)

    ax = axes[2]
    ax.axis('off')
    ax.set_facecolor('#111111')

    text_lines = [
        f"{'Metric':<18} {'Euler':>12} {'RK4':>12}",
        f"{'─'*44}",
        f"{'Duration (s)':<18} {euler_result.final_state.time:>12.1f} "
        f"{rk4_result.final_state.time:>12.1f}",
        f"{'End alt (km)':<18} {euler_result.final_altitude/1000:>12.2f} "
        f"{rk4_result.final_altitude/1000:>12.2f}",
        f"{'End vel (km/s)':<18} {euler_result.final_velocity/1000:>12.2f} "
        f"{rk4_result.final_velocity/1000:>12.2f}",
        f"{'Mass left (%)':<18} {100*euler_result.mass_fraction:>12.2f} "
        f"{100*rk4_result.mass_fraction:>12.2f}",
        f"{'Final phase':<18} {euler_result.phase.value[:12]:>12} "
        f"{rk4_result.phase.value[:12]:>12}",
    ]
    ax.text(0.02, 0.95, '\n'.join(text_lines), transform=ax.transAxes,
            fontsize=11, fontfamily='monospace', color=STYLE['text_color'],
            verticalalignment='top')
    ax.set_title('Summary', fontweight='bold', color=STYLE['text_color'])

    plt.tight_layout()
    _save(fig, save_path)
    return fig


# ══════════════════════════════════════════════════════════════════════════
#  5. Dashboard
# ══════════════════════════════════════════════════════════════════════════

def plot_dashboard(result: SimulationResult, entry: EntryResult,
                   title: str = 'Impact Simulation',
                   save_path: str = None) -> plt.Figure:
    """Descent plots, effect rings and the narrative on one page."""
    fig = plt.figure(figsize=(18, 11))
    fig.patch.set_facecolor(STYLE['bg_color'])
    gs = gridspec.GridSpec(2, 3, figure=fig, hspace=0.35, wspace=0.3)
    color = OUTCOME_COLORS.get(result.outcome, STYLE['accent_colors'][0])

    ax1 = fig.add_subplot(gs[0, 0:2])
    _apply_dark_style(fig, ax1)
    ax1.plot(entry.time, entry.altitude / 1000, color=color, linewidth=2.5)
    _mark_events(ax1, entry)
    ax1.set_xlabel('Time (s)')
    ax1.set_ylabel('Altitude (km)')
    ax1.set_title('DESCENT', fontweight='bold')
    if entry.fragmentation_altitude is not None:
        _legend(ax1, fontsize=9)

    ax2 = fig.add_subplot(gs[0, 2])
    _apply_dark_style(fig, ax2)
    ax2.axis('off')
    fx = result.impact_effects
    metrics = [
        f"Outcome      {result.outcome}",
        f"Energy       {result.energy_release:.4g} Mt",
        f"Impact vel   {result.impact_velocity/1000:.2f} km/s",
        f"Mass left    {result.survived_mass:.4g} kg",
    ]
    if fx.blast_radius is not None:
        metrics += [
            f"Blast 20psi  {fx.blast_radius.severe/1000:.2f} km",
            f"Blast 1psi   {fx.blast_radius.light/1000:.2f} km",
            f"Thermal      {fx.thermal_radius/1000:.2f} km",
        ]
    if fx.crater_diameter is not None:
        metrics.append(f"Crater       {fx.crater_diameter:.0f} m")
    if fx.seismic_magnitude is not None:
        metrics.append(f"Seismic      M{fx.seismic_magnitude:.1f}")
    if fx.tsunami_height is not None:
        metrics.append(f"Tsunami      {fx.tsunami_height:.1f} m")
    ax2.text(0.02, 0.95, '\n'.join(metrics), transform=ax2.transAxes,
             fontsize=12, fontfamily='monospace', color=STYLE['text_color'],
             verticalalignment='top')
    ax2.set_title('KEY METRICS', fontweight='bold', color=STYLE['text_color'])

    ax3 = fig.add_subplot(gs[1, 0])
    _apply_dark_style(fig, ax3)
    ax3.plot(entry.time, entry.velocity / 1000, color='#ff6b35', linewidth=2)
    ax3.set_xlabel('Time (s)')
    ax3.set_ylabel('Velocity (km/s)')
    ax3.set_title('VELOCITY', fontweight='bold')

    ax4 = fig.add_subplot(gs[1, 1])
    _apply_dark_style(fig, ax4)
    if entry.initial_mass > 0:
        ax4.plot(entry.time, 100 * entry.mass / entry.initial_mass,
                 color='#00e676', linewidth=2)
    ax4.set_xlabel('Time (s)')
    ax4.set_ylabel('Mass remaining (%)')
    ax4.set_title('ABLATION', fontweight='bold')

    ax5 = fig.add_subplot(gs[1, 2])
    _apply_dark_style(fig, ax5)
    ax5.axis('off')
    ax5.text(0.02, 0.95, '\n'.join(result.explanation), transform=ax5.transAxes,
             fontsize=9, color=STYLE['text_color'], verticalalignment='top', wrap=True)
    ax5.set_title('EXPLANATION', fontweight='bold', color=STYLE['text_color'])

    fig.suptitle(f'IMPACT DASHBOARD — {title}',
                 fontsize=16, fontweight='bold', color=color, y=0.98)
    _save(fig, save_path)
    return fig


# ══════════════════════════════════════════════════════════════════════════
#  6. Historical Event Check
# ══════════════════════════════════════════════════════════════════════════

def plot_event_validation(validations: List[EventValidation],
                          save_path: str = None) -> plt.Figure:
    """Energy of each reference event, colored by outcome match."""
    fig, ax = plt.subplots(figsize=(12, 6))
    _apply_dark_style(fig, ax)

    names = [v.name for v in validations]
    energies = [max(v.energy_megatons, 1e-9) for v in validations]
    colors = ['#00e676' if v.matched else '#ff5252' for v in validations]

    y = np.arange(len(names))
    ax.barh(y, energies, color=colors, alpha=0.8)
    ax.set_xscale('log')
    ax.set_yticks(y)
    ax.set_yticklabels(names)
    for yi, v in zip(y, validations):
        ax.text(energies[yi], yi, f'  {v.simulated} (expected {v.expected})',
                va='center', color=STYLE['text_color'], fontsize=9)
    ax.set_xlabel('Energy delivered (Mt TNT, log)')
    ax.set_title('Reference Events — green: outcome matched', fontweight='bold')

    plt.tight_layout()
    _save(fig, save_path)
    return fig


# ══════════════════════════════════════════════════════════════════════════
#  7. Animated Descent (GIF)
# ══════════════════════════════════════════════════════════════════════════

def create_entry_animation(entry: EntryResult,
                           save_path: str = 'outputs/entry_anim.gif',
                           frames: int = 100,
                           title: str = 'Atmospheric Entry') -> str:
    """Animated GIF of the descent, resampled to a uniform frame rate."""
    from matplotlib.animation import FuncAnimation, PillowWriter

    if len(entry.trajectory) < 2:
        raise ValueError("Trajectory too short to animate")
    times = np.linspace(entry.time[0], entry.time[-1], frames)
    track = entry.resample(times)
    alt_km = track['altitude'] / 1000
    vel_kms = track['velocity'] / 1000

    fig, ax = plt.subplots(figsize=(12, 6))
    fig.patch.set_facecolor(STYLE['bg_color'])
    ax.set_facecolor(STYLE['bg_color'])

    ax.set_xlim(0, times[-1] * 1.05)
    ax.set_ylim(min(0.0, alt_km.min()), max(alt_km) * 1.1)
    ax.set_xlabel('Time (s)', color=STYLE['text_color'], fontsize=12)
    ax.set_ylabel('Altitude (km)', color=STYLE['text_color'], fontsize=12)
    ax.set_title(f'Descent Animation — {title}',
                 color=STYLE['text_color'], fontsize=14, fontweight='bold')
    ax.tick_params(colors=STYLE['text_color'])
    ax.grid(True, color=STYLE['grid_color'], alpha=0.3)
    for spine in ax.spines.values():
        spine.set_color(STYLE['grid_color'])

    trail_line, = ax.plot([], [], color='#ff6b35', linewidth=1.5, alpha=0.6)
    point, = ax.plot([], [], 'o', color='#ffeb3b', markersize=8)
    time_text = ax.text(0.02, 0.95, '', transform=ax.transAxes,
                        color=STYLE['text_color'], fontsize=11, fontfamily='monospace')

    def animate(idx):
        trail_line.set_data(times[:idx+1], alt_km[:idx+1])
        point.set_data([times[idx]], [alt_km[idx]])
        time_text.set_text(
            f't={times[idx]:.1f}s | v={vel_kms[idx]:.2f} km/s | '
            f'alt={alt_km[idx]:.1f} km'
        )
        return trail_line, point, time_text

    anim = FuncAnimation(fig, animate, frames=frames, interval=50, blit=True)
    anim.save(save_path, writer=PillowWriter(fps=20),
              savefig_kwargs={'facecolor': STYLE['bg_color']})
    plt.close(fig)
    print(f"  Animation saved: {save_path}")
    return save_path
