"""
Main Entry Point

Run the flight dynamics engine headless: fly a fixed throttle setting for a
given duration, print a summary and optionally save the history.
"""

import argparse
import math
from pathlib import Path

from .aircraft import AircraftProperties
from .dynamics import FlightDynamicsEngine, SimulationConfig
from .data_import import load_aircraft_dat, apply_aircraft_data


def create_engine(
    aircraft_type: str = "F-16",
    aircraft_file: str = None,
    sim_config: SimulationConfig = None
) -> FlightDynamicsEngine:
    """
    Build an engine for a preset type, optionally overridden from a file.

    YAML files replace the properties outright; `.dat` files override the
    preset field-by-field.
    """
    engine = FlightDynamicsEngine(sim_config=sim_config)
    engine.set_aircraft_type(aircraft_type)

    if aircraft_file:
        path = Path(aircraft_file)
        if path.suffix.lower() in ('.yaml', '.yml'):
            engine = FlightDynamicsEngine(AircraftProperties.from_yaml(str(path)), sim_config=sim_config)
        else:
            apply_aircraft_data(engine, load_aircraft_dat(str(path)))

    return engine


def run_headless_simulation(
    engine: FlightDynamicsEngine,
    duration: float = 60.0,
    throttle: float = 0.5,
    altitude: float = 1000.0,
    heading_deg: float = 0.0,
    output_file: str = None,
    plot_file: str = None
) -> list:
    """Run headless simulation for batch processing."""
    engine.reset()
    engine.set_throttle(throttle)
    engine.set_control_surfaces(0.0, 0.0, 0.0)
    engine.initialize((0.0, altitude, 0.0), math.radians(heading_deg))

    print(f"Running {duration}s simulation of {engine.properties.name}...")

    history = engine.run(duration)

    print(f"Simulation complete. {len(history)} data points recorded.")
    print(engine.get_diagnostic_string())

    if output_file:
        from .data_export import export_history_csv, export_json
        metadata = {'aircraft': engine.properties.name, 'dt': engine.sim_config.dt}
        if output_file.endswith('.json'):
            export_json(history, output_file, metadata)
        else:
            export_history_csv(history, output_file, metadata)

    if plot_file and history:
        from .plotting import plot_flight_history
        plot_flight_history(history, title=engine.properties.name, save_path=plot_file)
        print(f"Saved plot to {plot_file}")

    return history


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Flight dynamics engine (headless)")

    parser.add_argument(
        '--aircraft-type', '-t',
        type=str,
        default='F-16',
        help='Named aircraft preset'
    )
    parser.add_argument(
        '--aircraft', '-a',
        type=str,
        help='Aircraft definition (.yaml or .dat)'
    )
    parser.add_argument(
        '--duration', '-d',
        type=float,
        default=60.0,
        help='Simulation duration (seconds)'
    )
    parser.add_argument(
        '--dt',
        type=float,
        default=1.0 / 60.0,
        help='Integration timestep (seconds)'
    )
    parser.add_argument(
        '--throttle',
        type=float,
        default=0.5,
        help='Throttle setting [0, 1]'
    )
    parser.add_argument(
        '--altitude',
        type=float,
        default=1000.0,
        help='Initial altitude (m)'
    )
    parser.add_argument(
        '--heading',
        type=float,
        default=0.0,
        help='Initial heading (deg)'
    )
    parser.add_argument(
        '--output', '-o',
        type=str,
        help='Output file for the history (.csv or .json)'
    )
    parser.add_argument(
        '--plot',
        type=str,
        help='Save a time-history plot to this path'
    )

    args = parser.parse_args()

    engine = create_engine(args.aircraft_type, args.aircraft, SimulationConfig(dt=args.dt))
    print(f"Using aircraft: {engine.properties.name}")

    run_headless_simulation(
        engine,
        duration=args.duration,
        throttle=args.throttle,
        altitude=args.altitude,
        heading_deg=args.heading,
        output_file=args.output,
        plot_file=args.plot
    )


if __name__ == "__main__":
    main()
