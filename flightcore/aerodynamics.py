"""
Aerodynamics Module

Computes aerodynamic forces and moments based on:
- Flight condition (airspeed, altitude, angle of attack)
- Control surface deflections
- Angular rates (damping)
- Dynamic pressure

All functions are pure: they read a state and a set of aircraft properties
and return values without touching either. Forces come back in the world
frame; moments come back as (roll, pitch, yaw), already scaled.
"""

import numpy as np
from dataclasses import dataclass
from typing import Optional

from .state import AircraftState
from .aircraft import AircraftProperties
from .environment import SEA_LEVEL_DENSITY, SCALE_HEIGHT, exponential_density
from .frames import clamp, normalize, lift_direction, lateral_direction


# Below this speed (m/s) velocity-dependent directions are undefined
MIN_VELOCITY = 0.1

# Applied moments are the raw aerodynamic moments times this factor
MOMENT_SCALE = 0.001

# Stall onset as a fraction of the critical angle of attack
STALL_ONSET_FRACTION = 0.8
MIN_STALL_LIFT_FACTOR = 0.3

# Side force from rudder, as a fraction of q·S·rudder·effect
RUDDER_SIDE_FORCE_FACTOR = 0.2

# Damping coefficients
ROLL_DAMPING = 0.1
PITCH_DAMPING = 0.2
YAW_DAMPING = 0.15

# Yaw produced per unit of aileron effect
ADVERSE_YAW_FACTOR = 0.2


@dataclass
class AeroState:
    """Aerodynamic state variables for a single computation."""

    airspeed: float = 0.0           # m/s
    density: float = 0.0            # kg/m³
    q_bar: float = 0.0              # Pa
    alpha: float = 0.0              # rad, after envelope clamp
    Cl: float = 0.0
    Cd: float = 0.0


def air_density(altitude: float) -> float:
    """Air density (kg/m³) from the exponential atmosphere."""
    return exponential_density(altitude, SEA_LEVEL_DENSITY, SCALE_HEIGHT)


def dynamic_pressure(rho: float, airspeed: float) -> float:
    """q = ½ρV² (Pa)."""
    return 0.5 * rho * airspeed ** 2


def angle_of_attack(
    velocity: np.ndarray,
    pitch: float,
    props: AircraftProperties
) -> float:
    """
    Angle of attack from the flight path angle and pitch.

    The result is clamped into the critical AOA range. This clamp only keeps
    coefficients bounded; stall is modeled in the lift curve.

    Args:
        velocity: World frame velocity (m/s)
        pitch: Pitch angle (rad)
        props: Aircraft properties

    Returns:
        α (rad)
    """
    horizontal_speed = np.hypot(velocity[0], velocity[2])
    alpha = 0.0
    if horizontal_speed > MIN_VELOCITY:
        alpha = np.arctan2(-velocity[1], horizontal_speed) + pitch

    return clamp(float(alpha), props.critical_aoa_negative, props.critical_aoa_positive)


def lift_coefficient(alpha: float, props: AircraftProperties) -> float:
    """
    Lift coefficient with post-stall degradation.

    Args:
        alpha: Angle of attack (rad)
        props: Aircraft properties

    Returns:
        Cl, clamped to ±Cl_max
    """
    Cl = props.Cl0 + props.Cl_alpha * alpha

    crit = props.critical_aoa_positive
    onset = STALL_ONSET_FRACTION * crit
    if alpha > onset:
        stall_factor = 1.0 - (alpha - onset) / (0.2 * crit)
        Cl *= max(MIN_STALL_LIFT_FACTOR, stall_factor)

    return clamp(Cl, -props.Cl_max, props.Cl_max)


def drag_coefficient(Cl: float, airspeed: float, props: AircraftProperties) -> float:
    """
    Drag coefficient: parabolic polar plus a penalty near max speed.

    The penalty grows linearly from 0 at 80% of max speed to 0.1 at max speed
    (and keeps growing past it).
    """
    Cd = props.Cd0 + props.K * Cl ** 2

    threshold = 0.8 * props.max_speed
    if airspeed > threshold:
        speed_factor = (airspeed - threshold) / (0.2 * props.max_speed)
        Cd += speed_factor * 0.1

    return Cd


def compute_aero_state(
    state: AircraftState,
    props: AircraftProperties,
    rho: Optional[float] = None
) -> AeroState:
    """
    Compute aerodynamic state variables from flight state.

    Args:
        state: Current aircraft state
        props: Aircraft properties
        rho: Air density (kg/m³); defaults to the standard exponential
             atmosphere at the state's altitude

    Returns:
        AeroState with computed values
    """
    if rho is None:
        rho = air_density(state.altitude)

    q_bar = dynamic_pressure(rho, state.airspeed)
    alpha = angle_of_attack(state.velocity, state.pitch, props)
    Cl = lift_coefficient(alpha, props)
    Cd = drag_coefficient(Cl, state.airspeed, props)

    return AeroState(
        airspeed=state.airspeed,
        density=rho,
        q_bar=q_bar,
        alpha=alpha,
        Cl=Cl,
        Cd=Cd
    )


def aerodynamic_forces(
    state: AircraftState,
    props: AircraftProperties,
    rho: Optional[float] = None
) -> np.ndarray:
    """
    Compute total aerodynamic force (lift + drag + side force).

    Lift acts perpendicular to the velocity in the heading plane, drag
    opposes the velocity, and rudder side force acts laterally. When the
    aircraft is (nearly) at rest all three are zero.

    Args:
        state: Current aircraft state
        props: Aircraft properties
        rho: Air density (kg/m³), optional

    Returns:
        Force in world frame (N)
    """
    speed = np.linalg.norm(state.velocity)
    if speed <= MIN_VELOCITY:
        return np.zeros(3)

    aero = compute_aero_state(state, props, rho)
    qS = aero.q_bar * props.wing_area

    lift = qS * aero.Cl
    drag = qS * aero.Cd
    side_force = qS * state.rudder * props.rudder_effect * RUDDER_SIDE_FORCE_FACTOR

    velocity_dir = normalize(state.velocity)

    F_lift = lift_direction(velocity_dir, state.heading) * lift
    F_drag = velocity_dir * (-drag)
    F_side = lateral_direction(state.heading) * side_force

    return F_lift + F_drag + F_side


def moments(
    state: AircraftState,
    props: AircraftProperties,
    rho: Optional[float] = None
) -> np.ndarray:
    """
    Compute applied aerodynamic moments.

    Roll comes from ailerons minus roll damping. Pitch comes from the
    elevator minus pitch damping, with an extra nose-down term above 70% of
    max speed. Yaw comes from the rudder minus yaw damping, plus adverse yaw
    from the ailerons.

    Args:
        state: Current aircraft state
        props: Aircraft properties
        rho: Air density (kg/m³), optional

    Returns:
        (roll, pitch, yaw) moments (N·m), scaled by MOMENT_SCALE
    """
    if rho is None:
        rho = air_density(state.altitude)

    q = dynamic_pressure(rho, state.airspeed)
    S = props.wing_area
    b = props.wing_span
    c = props.mean_chord

    # Roll
    roll_moment = q * S * b * state.aileron * props.aileron_effect
    roll_moment -= q * S * b * b * state.roll_rate * ROLL_DAMPING

    adverse_yaw = -state.aileron * props.aileron_effect * ADVERSE_YAW_FACTOR

    # Pitch
    pitch_moment = q * S * c * state.elevator * props.elevator_effect
    pitch_moment -= q * S * c * c * state.pitch_rate * PITCH_DAMPING

    # Speed stability: nose-down tendency at high speed
    threshold = 0.7 * props.max_speed
    if state.airspeed > threshold:
        speed_factor = (state.airspeed - threshold) / (0.3 * props.max_speed)
        pitch_moment -= q * S * c * speed_factor * 0.1

    # Yaw
    yaw_moment = q * S * b * state.rudder * props.rudder_effect
    yaw_moment -= q * S * b * b * state.heading_rate * YAW_DAMPING
    yaw_moment += q * S * b * adverse_yaw

    return np.array([roll_moment, pitch_moment, yaw_moment]) * MOMENT_SCALE
