"""
flightcore

Deterministic flight dynamics engine for an interactive single-aircraft
simulator: scalar aerodynamics with stall, exponential atmosphere, fuel burn
feeding back into mass and inertia, and semi-implicit Euler integration.
"""

__version__ = "0.1.0"

# Core simulation modules
from .aircraft import AircraftProperties, AircraftType, PRESETS, f16_properties, induced_drag_factor
from .state import AircraftState, ControlInputs, ForcesAndMoments
from .environment import Environment
from .dynamics import FlightDynamicsEngine, SimulationConfig, EnginePhase
from .aerodynamics import (
    AeroState,
    air_density,
    dynamic_pressure,
    angle_of_attack,
    lift_coefficient,
    drag_coefficient,
    compute_aero_state,
    aerodynamic_forces,
    moments
)

# Aircraft data loading
from .data_import import AircraftData, parse_aircraft_dat, load_aircraft_dat, apply_aircraft_data

from .data_export import history_to_dataframe, export_history_csv, export_json
