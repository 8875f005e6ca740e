"""
Stage audit report for the shuttle ascent (transitions, propellant, separations).
"""

from __future__ import annotations

import argparse
from collections import OrderedDict
from pathlib import Path
import sys

import numpy as np

if __package__ in (None, ""):
    sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from shuttle_sim.config import create_default_config
from shuttle_sim.main import run_simulation
from shuttle_sim.stages import get_stage_label


def stage_transitions(times, stages, alts, vels):
    out = []
    prev = None
    for t, s, h, v in zip(times, stages, alts, vels):
        if s != prev:
            out.append((float(t), str(s), float(h), float(v)))
            prev = s
    return out


def propellant_by_stage(times, stages, fuel_percent, tank_mass):
    """Propellant burned (kg) per stage, ignoring the jump to zero at tank separation."""
    usage = OrderedDict()
    if len(times) < 2:
        return usage

    for i in range(1, len(times)):
        drop = float(fuel_percent[i - 1] - fuel_percent[i])
        if drop <= 0.0 or (fuel_percent[i] == 0.0 and drop > 1.0):
            continue
        s = str(stages[i])
        usage[s] = usage.get(s, 0.0) + drop / 100.0 * tank_mass
    return usage


def main(argv=None):
    parser = argparse.ArgumentParser(description="Run the ascent and print a stage audit summary.")
    parser.add_argument("--dt", type=float, default=1.0 / 60.0, help="Frame time step (s)")
    parser.add_argument("--duration", type=float, default=600.0, help="Simulated time (s)")
    args = parser.parse_args(argv)

    cfg = create_default_config()
    final, log, events = run_simulation(config=cfg, duration=args.duration, dt=args.dt, verbose=False)

    t = np.array(log.time)
    h = np.array(log.altitude)
    v = np.array(log.velocity)

    print("=" * 88)
    print("SHUTTLE STAGE AUDIT")
    print("=" * 88)
    print("Stage Transitions:")
    for ti, s, hi, vi in stage_transitions(t, log.stage_name, h, v):
        print(f"  t={ti:8.2f}s | {get_stage_label(s):22s} | alt={hi:8.2f} km | v={vi:8.1f} m/s")
    print("-" * 88)
    print("Propellant Usage by Stage:")
    for stage, burned in propellant_by_stage(t, log.stage_name, log.fuel_percent,
                                             cfg.fuel_tank_mass).items():
        print(f"  {get_stage_label(stage):22s} : {burned:10.1f} kg")
    print("-" * 88)
    print("Separations:")
    if not events:
        print("  none")
    for event in events:
        names = ", ".join(c.value for c in event.components)
        print(f"  t={event.time:8.2f}s | alt={event.altitude/1000:8.2f} km | "
              f"v={event.speed:8.1f} m/s | {names}")
    print("-" * 88)
    if len(h) > 0:
        peak_idx = int(np.argmax(h))
        print(f"Peak altitude: {h[peak_idx]:.2f} km at t={t[peak_idx]:.2f}s")
    print(f"Final: {final.stage_label} | alt={final.altitude/1000:.2f} km | "
          f"v={final.speed:.1f} m/s | fuel={final.fuel_percent:.2f}%")
    print("=" * 88)


if __name__ == "__main__":
    main()
