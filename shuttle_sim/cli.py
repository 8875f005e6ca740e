"""
Shuttle Ascent Simulation - CLI

The single entry point for running the headless ascent, exporting telemetry
and state, and generating plots.
"""

import argparse
import logging
import os
import sys

from .config import ConfigurationError, create_default_config, print_config
from .main import DEFAULT_DURATION, DEFAULT_FRAME_DT, run_simulation
from .plotting import generate_all_plots
from .simulation import VehicleSimulation
from .state import load_state, save_state

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="shuttle-sim",
        description="Staged launch vehicle ascent simulation",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument(
        "--duration", "-t",
        type=float,
        default=DEFAULT_DURATION,
        help="Simulated seconds to run"
    )
    parser.add_argument(
        "--dt",
        type=float,
        default=DEFAULT_FRAME_DT,
        help="Frame time step (s); clamped to the stability ceiling"
    )
    parser.add_argument(
        "--launch-time",
        type=float,
        default=0.0,
        help="Issue the launch command at this time; negative waits for auto-launch"
    )
    parser.add_argument(
        "--csv",
        type=str,
        default=None,
        help="Write per-tick telemetry to this CSV file"
    )
    parser.add_argument(
        "--plots",
        type=str,
        default=None,
        metavar="DIR",
        help="Generate telemetry plots in DIR"
    )
    parser.add_argument(
        "--save-state",
        type=str,
        default=None,
        help="Write the final vehicle state to this JSON file"
    )
    parser.add_argument(
        "--resume",
        type=str,
        default=None,
        help="Resume from a vehicle state JSON file"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress verbose output"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log per-tick telemetry"
    )
    return parser.parse_args(argv)


def main(argv=None):
    """Main execution flow."""
    args = parse_args(argv)

    if args.debug:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.WARNING
    else:
        level = logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        config = create_default_config()
        if not args.quiet:
            print_config(config)
        if args.resume:
            logger.info(f"Resuming from {args.resume}")
            simulation = VehicleSimulation(config, load_state(args.resume))
        else:
            simulation = VehicleSimulation(config)

        launch_time = args.launch_time if args.launch_time >= 0.0 else None
        final, log, events = run_simulation(
            config=config,
            duration=args.duration,
            dt=args.dt,
            launch_time=launch_time,
            verbose=not args.quiet,
            simulation=simulation,
        )

        if not args.quiet:
            print("\n" + "=" * 60)
            print("SIMULATION SUMMARY")
            print("=" * 60)
            print(f"Final time: {final.time:.2f} s")
            print(f"Stage: {final.stage_label}")
            print(f"Final altitude: {final.altitude/1000:.2f} km")
            print(f"Final velocity: {final.speed:.2f} m/s")
            print(f"Fuel remaining: {final.fuel_percent:.2f} %")
            print(f"Total mass: {final.total_mass:.0f} kg")
            print(f"Detachment events: {len(events)}")
            for event in events:
                names = ", ".join(c.value for c in event.components)
                print(f"  t={event.time:8.2f}s | alt={event.altitude/1000:7.2f} km | {names}")
            print("=" * 60 + "\n")

        if args.csv:
            log.to_csv(args.csv)
            logger.info(f"Telemetry written to {args.csv}")

        if args.save_state:
            save_state(simulation.state, args.save_state)
            logger.info(f"Final state written to {args.save_state}")

        if args.plots and len(log) > 0:
            plot_dir = os.path.abspath(args.plots)
            logger.info(f"Generating plots in {plot_dir}")
            generate_all_plots(log, plot_dir)

    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(2)
    except Exception as e:
        logger.error(f"Simulation failed: {e}", exc_info=True)
        sys.exit(1)

    return 0


if __name__ == "__main__":
    main()
