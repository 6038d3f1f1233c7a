#!/usr/bin/env python3
"""
═══════════════════════════════════════════════════════════════════════════════
  ASTEROID ENTRY & IMPACT ENGINE — Main Runner
═══════════════════════════════════════════════════════════════════════════════

  Executes the complete simulation pipeline:
    1. Atmospheric model table
    2. Material table
    3. All preset scenarios
    4. Reference entry for one preset (profile + effect rings)
    5. Euler vs RK4 comparison
    6. Historical event check
    7. Full dashboard generation
    8. Animated descent GIF

  All outputs saved to outputs/ directory.

  Usage:
    python main.py                      # Run everything
    python main.py --quick              # Skip animation (faster)
    python main.py --preset tunguska    # Reference scenario for phases 4-8
═══════════════════════════════════════════════════════════════════════════════
"""

import sys
import os
import time

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from impact_engine.atmosphere import air_density, SEA_LEVEL_DENSITY
from impact_engine.materials import MATERIALS, body_mass
from impact_engine.presets import PRESETS, get_preset
from impact_engine.simulation import simulate, run_entry
from impact_engine.validation import check_input, validate_against_events
from impact_engine.visualization import (
    plot_atmosphere, plot_entry_profile, plot_effect_radii,
    plot_euler_vs_rk4, plot_dashboard, plot_event_validation,
    create_entry_animation, ensure_output_dir,
)

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt


def banner():
    print("""
╔═══════════════════════════════════════════════════════════════════════╗
║                                                                       ║
║     ASTEROID ATMOSPHERIC ENTRY & IMPACT EFFECTS ENGINE                ║
║     ─────────────────────────────────────────────────────             ║
║     Drag · Ablation · Fragmentation · Airburst                        ║
║     Blast · Thermal · Crater · Seismic · Tsunami                      ║
║                                                                       ║
║     Simplified educational model — not a predictive tool              ║
║                                                                       ║
╚═══════════════════════════════════════════════════════════════════════╝
""")


def section(title):
    print(f"\n{'─'*60}")
    print(f"  {title}")
    print(f"{'─'*60}")


def _arg_value(flag, default):
    if flag in sys.argv:
        idx = sys.argv.index(flag)
        if idx + 1 < len(sys.argv):
            return sys.argv[idx + 1]
    return default


def main():
    start_time = time.time()
    quick = '--quick' in sys.argv
    preset = get_preset(_arg_value('--preset', 'chelyabinsk'))
    inp = check_input(preset.parameters)

    banner()
    out = ensure_output_dir('outputs')

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 1: Atmosphere
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 1: Exponential Atmosphere")
    print(f"  {'Alt (km)':>9} {'ρ (kg/m³)':>13} {'ρ/ρ₀':>10}")
    for h in [0, 10000, 20000, 30000, 50000, 80000, 120000]:
        rho = air_density(h)
        print(f"  {h/1000:>9.0f} {rho:>13.4e} {rho/SEA_LEVEL_DENSITY:>10.5f}")

    fig_atm = plot_atmosphere(save_path=f'{out}/01_atmosphere_profile.png')
    plt.close(fig_atm)
    print(f"\n  ✓ Saved: {out}/01_atmosphere_profile.png")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 2: Materials
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 2: Impactor Materials")
    print(f"  {'Composition':<24} {'ρ (kg/m³)':>10} {'Strength':>10} "
          f"{'Cd':>6} {'Ablation':>9} {'Mass @20m':>12}")
    for key, mat in MATERIALS.items():
        print(f"  {mat.name:<24} {mat.density:>10.0f} {mat.strength:>10.1e} "
              f"{mat.drag_coefficient:>6.2f} {mat.ablation_coefficient:>9.2f} "
              f"{body_mass(20.0, key):>12.3e}")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 3: Preset Scenarios
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 3: Preset Scenarios")
    for p in PRESETS:
        r = simulate(p.parameters)
        print(f"  {p.name:<28s}  {r.outcome:<13s}  "
              f"Energy: {r.energy_release:>10.4g} Mt  "
              f"Survived: {100 * r.survived_mass / r.initial_mass:>6.2f} %")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 4: Reference Scenario
    # ══════════════════════════════════════════════════════════════════════
    section(f"PHASE 4: Reference Scenario ({preset.name})")
    entry = run_entry(inp)
    result = simulate(inp)
    print(entry.summary())
    print(result.summary())
    print()
    for line in result.explanation:
        print(f"  • {line}")

    fig_prof = plot_entry_profile(entry, title=preset.name,
                                  save_path=f'{out}/04_entry_profile.png')
    plt.close(fig_prof)
    fig_fx = plot_effect_radii(result, title=preset.name,
                               save_path=f'{out}/04b_effect_radii.png')
    plt.close(fig_fx)
    print(f"\n  ✓ Saved: {out}/04_entry_profile.png")
    print(f"  ✓ Saved: {out}/04b_effect_radii.png")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 5: Euler vs RK4
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 5: Euler vs RK4 Integration")
    entry_rk4 = run_entry(inp, method='rk4')
    res_rk4 = simulate(inp, method='rk4')
    print(f"  Euler  — {result.outcome:<13s} End vel: {entry.final_velocity/1000:.2f} km/s  |  "
          f"Mass left: {100*entry.mass_fraction:.2f} %")
    print(f"  RK4    — {res_rk4.outcome:<13s} End vel: {entry_rk4.final_velocity/1000:.2f} km/s  |  "
          f"Mass left: {100*entry_rk4.mass_fraction:.2f} %")

    fig_evr = plot_euler_vs_rk4(entry, entry_rk4,
                                save_path=f'{out}/05_euler_vs_rk4.png')
    plt.close(fig_evr)
    print(f"\n  ✓ Saved: {out}/05_euler_vs_rk4.png")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 6: Historical Event Check
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 6: Historical Event Check")
    events = validate_against_events(verbose=True)
    fig_val = plot_event_validation(events, save_path=f'{out}/06_event_validation.png')
    plt.close(fig_val)
    print(f"  ✓ Saved: {out}/06_event_validation.png")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 7: Dashboard
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 7: Full Dashboard")
    fig_dash = plot_dashboard(result, entry, title=preset.name,
                              save_path=f'{out}/07_dashboard.png')
    plt.close(fig_dash)
    print(f"  ✓ Saved: {out}/07_dashboard.png")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 8: Descent Animation
    # ══════════════════════════════════════════════════════════════════════
    if quick:
        section("PHASE 8: Animation SKIPPED (--quick mode)")
    elif len(entry.trajectory) < 2:
        section("PHASE 8: Animation SKIPPED (trajectory too short)")
    else:
        section("PHASE 8: Descent Animation (GIF)")
        create_entry_animation(entry, save_path=f'{out}/08_entry_animation.gif',
                               frames=120, title=preset.name)
        print(f"  ✓ Saved: {out}/08_entry_animation.gif")

    # ══════════════════════════════════════════════════════════════════════
    #  SUMMARY
    # ══════════════════════════════════════════════════════════════════════
    elapsed = time.time() - start_time
    section("COMPLETE")
    print(f"""
  All outputs saved to: {os.path.abspath(out)}/

  Generated files:
    01_atmosphere_profile.png    — density vs altitude
    04_entry_profile.png         — altitude, velocity, mass vs time
    04b_effect_radii.png         — blast / thermal / crater / tsunami rings
    05_euler_vs_rk4.png          — integration method comparison
    06_event_validation.png      — preset outcomes vs reference
    07_dashboard.png             — full dashboard
    {'08_entry_animation.gif      — animated descent' if not quick else '(animation skipped)'}

  Total runtime: {elapsed:.1f} seconds
""")


if __name__ == "__main__":
    main()
