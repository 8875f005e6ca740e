"""
Shuttle Ascent Simulation - Telemetry Plots

Generates PNG plots from a SimulationLog:
- Altitude profile
- Speed (total and vertical)
- Mass and remaining propellant
- Thrust versus drag

Separation points are recovered from the log itself: booster separation is
the first LIFTOFF -> ATMOSPHERIC_ASCENT change in the stage column, tank
separation the first sample where the fuel drops to zero after burning.
"""

import logging
import os
from typing import List, Optional

import matplotlib
matplotlib.use('Agg')  # Non-interactive backend
import matplotlib.pyplot as plt
import numpy as np

logger = logging.getLogger(__name__)

COLORS = {
    'altitude': '#1f77b4',
    'velocity': '#2ca02c',
    'vertical': '#17becf',
    'mass': '#9467bd',
    'fuel': '#ff7f0e',
    'thrust': '#d62728',
    'drag': '#7f7f7f',
    'event': '#000000',
}


def configure_plot_style() -> None:
    """Configure matplotlib defaults for telemetry plots."""
    plt.rcParams.update({
        'figure.figsize': (10, 6),
        'savefig.dpi': 150,
        'axes.grid': True,
        'axes.axisbelow': True,
        'grid.alpha': 0.3,
        'grid.linewidth': 0.5,
        'font.size': 11,
        'axes.titlesize': 13,
        'axes.labelsize': 12,
        'legend.fontsize': 10,
        'legend.framealpha': 0.95,
        'lines.linewidth': 1.8,
        'xtick.direction': 'in',
        'ytick.direction': 'in',
    })


def find_booster_separation_index(log) -> Optional[int]:
    """Index of the first sample after the boosters were dropped, or None."""
    for i in range(1, len(log.stage_name)):
        if (log.stage_name[i - 1] == 'LIFTOFF'
                and log.stage_name[i] == 'ATMOSPHERIC_ASCENT'):
            return i
    return None


def find_tank_separation_index(log) -> Optional[int]:
    """Index where the fuel fraction first drops to zero, or None."""
    for i in range(1, len(log.fuel_percent)):
        if log.fuel_percent[i - 1] > 0.0 and log.fuel_percent[i] <= 0.0:
            return i
    return None


def _mark_events(ax, t: np.ndarray, y: np.ndarray, log) -> None:
    markers = [
        (find_booster_separation_index(log), 'SRB separation', 'o'),
        (find_tank_separation_index(log), 'Tank separation', 's'),
    ]
    for idx, label, marker in markers:
        if idx is None:
            continue
        ax.scatter(t[idx], y[idx], color=COLORS['event'], marker=marker,
                   s=50, zorder=5, label=label)


def _save(fig, output_dir: str, name: str) -> str:
    path = os.path.join(output_dir, name)
    plt.tight_layout()
    fig.savefig(path, bbox_inches='tight')
    plt.close(fig)
    logger.debug(f"Saved plot {path}")
    return path


def plot_altitude_profile(log, output_dir: str) -> str:
    """Altitude (km) versus time."""
    t = np.asarray(log.time)
    alt = np.asarray(log.altitude)

    fig, ax = plt.subplots()
    ax.plot(t, alt, color=COLORS['altitude'], label='Altitude')
    _mark_events(ax, t, alt, log)
    ax.set_xlabel('Time (s)')
    ax.set_ylabel('Altitude (km)')
    ax.set_title('Altitude Profile', fontweight='bold')
    ax.legend(loc='upper left')
    return _save(fig, output_dir, '01_altitude_profile.png')


def plot_velocity_profile(log, output_dir: str) -> str:
    """Total and vertical speed versus time."""
    t = np.asarray(log.time)
    v = np.asarray(log.velocity)

    fig, ax = plt.subplots()
    ax.plot(t, v, color=COLORS['velocity'], label='Speed')
    ax.plot(t, log.vertical_velocity, color=COLORS['vertical'],
            linestyle='--', label='Vertical velocity')
    _mark_events(ax, t, v, log)
    ax.set_xlabel('Time (s)')
    ax.set_ylabel('Velocity (m/s)')
    ax.set_title('Velocity Profile', fontweight='bold')
    ax.legend(loc='upper left')
    return _save(fig, output_dir, '02_velocity_profile.png')


def plot_mass_and_fuel(log, output_dir: str) -> str:
    """Total mass (t) and propellant remaining (%) on twin axes."""
    t = np.asarray(log.time)
    mass_t = np.asarray(log.mass) / 1000.0

    fig, ax = plt.subplots()
    ax.plot(t, mass_t, color=COLORS['mass'], label='Total mass')
    _mark_events(ax, t, mass_t, log)
    ax.set_xlabel('Time (s)')
    ax.set_ylabel('Mass (t)', color=COLORS['mass'])

    ax_fuel = ax.twinx()
    ax_fuel.plot(t, log.fuel_percent, color=COLORS['fuel'], label='Fuel')
    ax_fuel.set_ylabel('Fuel (%)', color=COLORS['fuel'])
    ax_fuel.set_ylim(0, 105)
    ax_fuel.grid(False)

    handles, labels = ax.get_legend_handles_labels()
    h2, l2 = ax_fuel.get_legend_handles_labels()
    ax.legend(handles + h2, labels + l2, loc='upper right')
    ax.set_title('Mass and Propellant', fontweight='bold')
    return _save(fig, output_dir, '03_mass_fuel.png')


def plot_forces(log, output_dir: str) -> str:
    """Thrust and drag magnitudes (MN) versus time."""
    t = np.asarray(log.time)
    thrust = np.asarray(log.thrust) / 1e6
    drag = np.asarray(log.drag) / 1e6

    fig, ax = plt.subplots()
    ax.plot(t, thrust, color=COLORS['thrust'], label='Thrust')
    ax.plot(t, drag, color=COLORS['drag'], label='Drag')
    _mark_events(ax, t, thrust, log)
    ax.set_xlabel('Time (s)')
    ax.set_ylabel('Force (MN)')
    ax.set_title('Thrust vs Drag', fontweight='bold')
    ax.legend(loc='upper right')
    return _save(fig, output_dir, '04_forces.png')


def generate_all_plots(log, output_dir: str = "plots") -> List[str]:
    """
    Generate every telemetry plot for a run.

    Args:
        log: SimulationLog from run_simulation
        output_dir: Directory to save plots (created if missing)

    Returns:
        List of paths to saved plot files
    """
    os.makedirs(output_dir, exist_ok=True)
    if len(log) == 0:
        logger.warning("Simulation log is empty; no plots generated.")
        return []

    configure_plot_style()

    saved_files = []
    plot_functions = [
        plot_altitude_profile,
        plot_velocity_profile,
        plot_mass_and_fuel,
        plot_forces,
    ]
    for plot_func in plot_functions:
        saved_files.append(plot_func(log, output_dir))

    logger.info(f"Generated {len(saved_files)} plots in {output_dir}")
    return saved_files
