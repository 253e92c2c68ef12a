"""
Flight Dynamics Engine

Advances one aircraft's state through time:
- Thrust and fuel burn (fuel mass feeds back into inertia)
- Aerodynamic forces and moments
- Gravity
- Semi-implicit Euler integration of translation and rotation
- Rate limiting, angle wrapping and pitch clamping

Integration is explicit with a caller-supplied timestep. Accuracy and
stability depend on that timestep; steps of 1/30 s or less are recommended,
or set SimulationConfig.max_substep to have large steps split internally.
"""

import math
import warnings
import numpy as np
from dataclasses import dataclass, replace
from enum import Enum, auto
from typing import Callable, Optional, List, Dict, Any

from .state import AircraftState, ControlInputs, ForcesAndMoments
from .aircraft import AircraftProperties, induced_drag_factor, preset_properties
from .environment import Environment
from .aerodynamics import AeroState, compute_aero_state, aerodynamic_forces, moments
from .frames import clamp, wrap_angle, forward_vector, horizontal_vector, rad_to_deg


class EnginePhase(Enum):
    """Operational phase of an engine instance."""
    UNINITIALIZED = auto()  # Constructed or reset; update() is rejected
    RUNNING = auto()        # initialize() has been called


@dataclass
class SimulationConfig:
    """Simulation parameters."""

    # Timestep used by run() (s)
    dt: float = 1.0 / 60.0

    # When set, update(dt) splits dt into equal substeps no longer than this
    max_substep: Optional[float] = None

    # Initial conditions applied by initialize()/reset()
    initial_speed: float = 100.0        # m/s along heading
    initial_fuel_fraction: float = 0.5  # of max fuel

    # Angular rate limits (rad/s)
    max_roll_rate: float = 5.0
    max_pitch_rate: float = 3.0
    max_yaw_rate: float = 2.0

    # Pitch limit (rad), keeps the Euler angles away from vertical
    pitch_limit: float = 0.45 * math.pi

    # Inertia approximation I = m·b²·factor
    roll_inertia_factor: float = 0.1
    pitch_inertia_factor: float = 0.2
    yaw_inertia_factor: float = 0.3

    # Record a history entry on every update()
    record_history: bool = False


class FlightDynamicsEngine:
    """
    Main flight dynamics simulation engine.

    Owns one aircraft state and one set of aircraft properties. Instances
    share nothing, so separate aircraft can be stepped independently.
    """

    def __init__(
        self,
        properties: Optional[AircraftProperties] = None,
        environment: Optional[Environment] = None,
        sim_config: Optional[SimulationConfig] = None
    ):
        self.properties = properties.copy() if properties is not None else AircraftProperties()
        self.environment = environment or Environment()
        self.sim_config = replace(sim_config) if sim_config is not None else SimulationConfig()

        self.state = AircraftState()
        self.phase = EnginePhase.UNINITIALIZED
        self.time = 0.0

        # Latest forces/moments and aero data (for telemetry)
        self.forces_moments = ForcesAndMoments()
        self.aero_state = AeroState()

        # History (optional, for analysis)
        self.history: List[Dict[str, Any]] = []
        self._recording = False

        self._fuel = 0.0
        self.reset()

    @property
    def fuel(self) -> float:
        """Fuel on board (kg)."""
        return self._fuel

    @property
    def is_initialized(self) -> bool:
        return self.phase is EnginePhase.RUNNING

    def initialize(self, position, heading: float):
        """
        Place the aircraft and start the engine running.

        Velocity is set along the heading at the configured initial speed and
        fuel is refilled to the initial fraction. Throttle and control
        surfaces are left as they are.

        Args:
            position: World position (m), any 3-sequence
            heading: Heading (rad)
        """
        self.state.position = np.array(position, dtype=np.float64)
        self.state.heading = heading
        self.state.altitude = float(self.state.position[1])
        self.state.velocity = horizontal_vector(heading, self.sim_config.initial_speed)
        self.state.airspeed = float(np.linalg.norm(self.state.velocity))

        self._fuel = self.properties.max_fuel * self.sim_config.initial_fuel_fraction
        self.state.fuel = self._fuel

        self.time = 0.0
        self.phase = EnginePhase.RUNNING

    def set_aircraft_type(self, name: str):
        """
        Switch to a named aircraft preset.

        Unknown names keep the current properties and emit a warning.
        """
        try:
            self.properties = preset_properties(name)
        except KeyError:
            warnings.warn(f"Unknown aircraft type '{name}', keeping {self.properties.name}")

    def set_aircraft_properties(
        self,
        empty_mass: float,
        max_fuel: float,
        wing_area: float,
        max_thrust: float,
        thrust_military: float,
        critical_aoa_positive: float,
        critical_aoa_negative: float,
        min_maneuverable_speed: float,
        max_speed: float
    ):
        """
        Override the active properties with values from loaded aircraft data.

        The induced drag factor is re-derived from the aspect ratio and the
        current mass is recomputed from the new empty mass.
        """
        props = self.properties
        props.empty_mass = empty_mass
        props.max_fuel = max_fuel
        props.wing_area = wing_area
        props.max_thrust = max_thrust
        props.thrust_military = thrust_military
        props.critical_aoa_positive = critical_aoa_positive
        props.critical_aoa_negative = critical_aoa_negative
        props.min_maneuverable_speed = min_maneuverable_speed
        props.max_speed = max_speed

        self.state.mass = empty_mass + self._fuel
        props.K = induced_drag_factor(props.wing_span, props.wing_area)

    def set_throttle(self, throttle: float):
        """Set throttle, clamped to [0, 1]."""
        self.state.throttle = clamp(throttle, 0.0, 1.0)

    def set_control_surfaces(self, aileron: float, elevator: float, rudder: float):
        """Set control surfaces, each clamped to [-1, 1]."""
        self.state.aileron = clamp(aileron, -1.0, 1.0)
        self.state.elevator = clamp(elevator, -1.0, 1.0)
        self.state.rudder = clamp(rudder, -1.0, 1.0)

    def apply_controls(self, controls: ControlInputs):
        """Apply a full set of pilot inputs."""
        self.set_throttle(controls.throttle)
        self.set_control_surfaces(controls.aileron, controls.elevator, controls.rudder)

    def get_state(self) -> AircraftState:
        """Snapshot of the current state, including fuel."""
        snapshot = self.state.copy()
        snapshot.fuel = self._fuel
        return snapshot

    def get_properties(self) -> AircraftProperties:
        """Snapshot of the active aircraft properties."""
        return self.properties.copy()

    def reset(self):
        """
        Return to the post-construction state.

        Properties are kept. The last initialize() position and heading are
        not reapplied; call initialize() again before stepping.
        """
        self.state = AircraftState()
        self._fuel = self.properties.max_fuel * self.sim_config.initial_fuel_fraction
        self.state.fuel = self._fuel

        self.phase = EnginePhase.UNINITIALIZED
        self.time = 0.0
        self.forces_moments = ForcesAndMoments()
        self.aero_state = AeroState()
        self.history = []

    def update(self, dt: float) -> AircraftState:
        """
        Advance simulation by dt seconds.

        Args:
            dt: Timestep (s), finite and positive

        Returns:
            The engine's current state

        Raises:
            RuntimeError: if initialize() has not been called
            ValueError: if dt is not a finite positive number
        """
        if self.phase is not EnginePhase.RUNNING:
            raise RuntimeError("Engine is not initialized; call initialize() before update()")
        if not math.isfinite(dt) or dt <= 0.0:
            raise ValueError(f"Timestep must be finite and positive, got {dt!r}")

        max_substep = self.sim_config.max_substep
        if max_substep is not None and dt > max_substep:
            n_steps = math.ceil(dt / max_substep)
            for _ in range(n_steps):
                self._step(dt / n_steps)
        else:
            self._step(dt)

        self.time += dt

        if self.sim_config.record_history or self._recording:
            self.history.append(self._history_record())

        return self.state

    def _step(self, dt: float):
        """One explicit integration step."""
        s = self.state
        props = self.properties
        cfg = self.sim_config

        # === MASS AND PROPULSION ===
        s.mass = props.empty_mass + self._fuel
        s.thrust = s.throttle * props.max_thrust

        # Fuel exhaustion stops the burn but not the thrust
        if s.thrust > 0 and self._fuel > 0:
            fuel_flow = s.thrust * props.thrust_sfc * dt
            self._fuel = max(0.0, self._fuel - fuel_flow)
        s.fuel = self._fuel

        # === FORCES ===
        rho = self.environment.density(s.altitude)
        self.aero_state = compute_aero_state(s, props, rho)

        F_thrust = forward_vector(s.heading, s.pitch) * s.thrust
        F_weight = np.array([0.0, -s.mass * self.environment.gravity, 0.0])
        F_aero = aerodynamic_forces(s, props, rho)
        F_total = F_thrust + F_weight + F_aero

        # === TRANSLATION (semi-implicit Euler) ===
        acceleration = F_total / s.mass
        s.velocity = s.velocity + acceleration * dt
        s.position = s.position + s.velocity * dt

        s.altitude = float(s.position[1])
        s.airspeed = float(np.linalg.norm(s.velocity))

        # === ROTATION ===
        # Moments see the post-translation altitude and airspeed
        M = moments(s, props, self.environment.density(s.altitude))

        b2 = props.wing_span ** 2
        Ixx = s.mass * b2 * cfg.roll_inertia_factor
        Iyy = s.mass * b2 * cfg.pitch_inertia_factor
        Izz = s.mass * b2 * cfg.yaw_inertia_factor

        s.roll_rate += M[0] / Ixx * dt
        s.pitch_rate += M[1] / Iyy * dt
        s.heading_rate += M[2] / Izz * dt

        s.roll_rate = clamp(s.roll_rate, -cfg.max_roll_rate, cfg.max_roll_rate)
        s.pitch_rate = clamp(s.pitch_rate, -cfg.max_pitch_rate, cfg.max_pitch_rate)
        s.heading_rate = clamp(s.heading_rate, -cfg.max_yaw_rate, cfg.max_yaw_rate)

        s.roll = wrap_angle(s.roll + s.roll_rate * dt)
        s.pitch = clamp(s.pitch + s.pitch_rate * dt, -cfg.pitch_limit, cfg.pitch_limit)
        s.heading = wrap_angle(s.heading + s.heading_rate * dt)

        self.forces_moments = ForcesAndMoments(
            force=F_total,
            thrust_force=F_thrust,
            weight=F_weight,
            aero_force=F_aero,
            moment=M
        )

    def _history_record(self) -> Dict[str, Any]:
        s = self.state
        return {
            'time': self.time,
            'position': s.position.copy(),
            'velocity': s.velocity.copy(),
            'heading': s.heading,
            'pitch': s.pitch,
            'roll': s.roll,
            'heading_rate': s.heading_rate,
            'pitch_rate': s.pitch_rate,
            'roll_rate': s.roll_rate,
            'altitude': s.altitude,
            'airspeed': s.airspeed,
            'throttle': s.throttle,
            'thrust': s.thrust,
            'controls': (s.aileron, s.elevator, s.rudder),
            'mass': s.mass,
            'fuel': self._fuel,
            'alpha': self.aero_state.alpha,
            'Cl': self.aero_state.Cl,
            'Cd': self.aero_state.Cd,
            'dynamic_pressure': self.aero_state.q_bar,
            'forces': self.forces_moments.force.copy(),
            'moments': self.forces_moments.moment.copy(),
        }

    def run(
        self,
        duration: float,
        control_callback: Optional[Callable[[AircraftState, float], ControlInputs]] = None
    ) -> List[Dict[str, Any]]:
        """
        Run simulation for a specified duration at sim_config.dt.

        Args:
            duration: Simulation duration (s)
            control_callback: Optional function(state, time) -> ControlInputs

        Returns:
            History list of per-step records
        """
        dt = self.sim_config.dt
        n_steps = int(round(duration / dt))

        self._recording = True
        try:
            for _ in range(n_steps):
                if control_callback is not None:
                    self.apply_controls(control_callback(self.get_state(), self.time))
                self.update(dt)

                # Safety check
                if not (np.all(np.isfinite(self.state.position)) and
                        np.all(np.isfinite(self.state.velocity))):
                    warnings.warn(f"Non-finite state at t={self.time:.3f}s, stopping run")
                    break
        finally:
            self._recording = False

        return self.history

    def get_diagnostic_string(self) -> str:
        """Get formatted diagnostic output for debugging."""
        s = self.state
        return (
            f"t={self.time:.2f}s | "
            f"Alt={s.altitude:.1f}m | "
            f"V={s.airspeed:.1f}m/s | "
            f"α={rad_to_deg(self.aero_state.alpha):.1f}° | "
            f"φ={rad_to_deg(s.roll):.1f}° θ={rad_to_deg(s.pitch):.1f}° "
            f"ψ={rad_to_deg(s.heading):.1f}° | "
            f"T={s.thrust / 1000.0:.1f}kN | "
            f"Fuel={self._fuel:.1f}kg"
        )
