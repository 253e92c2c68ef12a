"""
Aircraft State Representation

The state is a flat set of world-frame kinematic and energy quantities:
- Position (3) and velocity (3) in the Y-up world frame
- Orientation as heading, pitch, roll and their rates
- Engine and control surface settings
- Mass plus derived altitude and airspeed

One state belongs to one engine. Callers receive copies.
"""

import numpy as np
from dataclasses import dataclass, field
from typing import Dict, Any

from .frames import clamp


# Placeholder mass of a freshly constructed state (kg)
DEFAULT_MASS = 10000.0


@dataclass
class AircraftState:
    """
    Complete aircraft state.

    All values are in SI units (m, m/s, rad, rad/s, kg, N).
    """

    # World frame position (m) and velocity (m/s)
    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    velocity: np.ndarray = field(default_factory=lambda: np.zeros(3))

    # Orientation (rad)
    heading: float = 0.0
    pitch: float = 0.0
    roll: float = 0.0

    # Angular rates (rad/s)
    heading_rate: float = 0.0
    pitch_rate: float = 0.0
    roll_rate: float = 0.0

    # Engine
    throttle: float = 0.0   # 0 to 1
    thrust: float = 0.0     # N

    # Control surfaces, normalized -1 to 1
    aileron: float = 0.0
    elevator: float = 0.0
    rudder: float = 0.0

    mass: float = DEFAULT_MASS
    altitude: float = 0.0
    airspeed: float = 0.0

    # Fuel on board (kg). Owned by the engine; filled in on snapshots.
    fuel: float = 0.0

    def __post_init__(self):
        """Ensure arrays are numpy arrays."""
        self.position = np.asarray(self.position, dtype=np.float64)
        self.velocity = np.asarray(self.velocity, dtype=np.float64)

    @property
    def groundspeed(self) -> float:
        """Horizontal speed (m/s)."""
        return float(np.hypot(self.velocity[0], self.velocity[2]))

    @property
    def climb_rate(self) -> float:
        """Vertical speed, positive up (m/s)."""
        return float(self.velocity[1])

    def copy(self) -> 'AircraftState':
        """Create a deep copy of this state."""
        return AircraftState(
            position=self.position.copy(),
            velocity=self.velocity.copy(),
            heading=self.heading,
            pitch=self.pitch,
            roll=self.roll,
            heading_rate=self.heading_rate,
            pitch_rate=self.pitch_rate,
            roll_rate=self.roll_rate,
            throttle=self.throttle,
            thrust=self.thrust,
            aileron=self.aileron,
            elevator=self.elevator,
            rudder=self.rudder,
            mass=self.mass,
            altitude=self.altitude,
            airspeed=self.airspeed,
            fuel=self.fuel
        )

    def to_dict(self) -> Dict[str, Any]:
        """
        Outbound shape consumed by the renderer/HUD/telemetry.

        Keys follow the host-side camelCase convention; vectors become
        {x, y, z} mappings.
        """
        return {
            'position': _vec_dict(self.position),
            'velocity': _vec_dict(self.velocity),
            'heading': self.heading,
            'pitch': self.pitch,
            'roll': self.roll,
            'headingRate': self.heading_rate,
            'pitchRate': self.pitch_rate,
            'rollRate': self.roll_rate,
            'throttle': self.throttle,
            'thrust': self.thrust,
            'aileron': self.aileron,
            'elevator': self.elevator,
            'rudder': self.rudder,
            'altitude': self.altitude,
            'airspeed': self.airspeed,
            'mass': self.mass,
            'fuel': self.fuel,
        }


def _vec_dict(v: np.ndarray) -> Dict[str, float]:
    return {'x': float(v[0]), 'y': float(v[1]), 'z': float(v[2])}


@dataclass
class ControlInputs:
    """
    Pilot inputs for one step.

    Surfaces are normalized deflections, throttle is a fraction.
    Sign conventions:
        - Elevator: positive = nose up
        - Aileron: positive = roll right
        - Rudder: positive = nose right
    """

    aileron: float = 0.0
    elevator: float = 0.0
    rudder: float = 0.0
    throttle: float = 0.0

    def clip(self) -> 'ControlInputs':
        """
        Return clipped control inputs within limits.

        Returns:
            New ControlInputs with surfaces in [-1, 1] and throttle in [0, 1]
        """
        return ControlInputs(
            aileron=clamp(self.aileron, -1.0, 1.0),
            elevator=clamp(self.elevator, -1.0, 1.0),
            rudder=clamp(self.rudder, -1.0, 1.0),
            throttle=clamp(self.throttle, 0.0, 1.0)
        )


@dataclass
class ForcesAndMoments:
    """
    Forces and moments from the latest step.

    Forces in world frame (N). Moments are the scaled (roll, pitch, yaw)
    values actually applied to the rate integration.
    """

    force: np.ndarray = field(default_factory=lambda: np.zeros(3))
    thrust_force: np.ndarray = field(default_factory=lambda: np.zeros(3))
    weight: np.ndarray = field(default_factory=lambda: np.zeros(3))
    aero_force: np.ndarray = field(default_factory=lambda: np.zeros(3))
    moment: np.ndarray = field(default_factory=lambda: np.zeros(3))

    def __post_init__(self):
        """Ensure arrays are numpy arrays."""
        self.force = np.asarray(self.force, dtype=np.float64)
        self.thrust_force = np.asarray(self.thrust_force, dtype=np.float64)
        self.weight = np.asarray(self.weight, dtype=np.float64)
        self.aero_force = np.asarray(self.aero_force, dtype=np.float64)
        self.moment = np.asarray(self.moment, dtype=np.float64)
