"""
World Frame Utilities

The engine works in a right-handed world frame with Y up:
- X, Z: horizontal plane (heading 0 points along +X, heading π/2 along +Z)
- Y: up, so altitude is simply position[1]

Orientation is carried as three scalar angles (heading, pitch, roll) rather
than a quaternion. The helpers here build direction vectors from those angles
and keep the angles inside their valid ranges.
"""

import numpy as np


def clamp(value: float, lower: float, upper: float) -> float:
    """Clamp a scalar into [lower, upper]."""
    return max(lower, min(upper, value))


def lerp(a: float, b: float, t: float) -> float:
    """Linear interpolation between a and b."""
    return a + (b - a) * t


def deg_to_rad(degrees: float) -> float:
    return degrees * np.pi / 180.0


def rad_to_deg(radians: float) -> float:
    return radians * 180.0 / np.pi


def wrap_angle(angle: float) -> float:
    """
    Wrap an angle into (-π, π].

    Args:
        angle: Angle in radians (any finite value)

    Returns:
        Equivalent angle in (-π, π]
    """
    wrapped = np.pi - np.fmod(np.pi - angle, 2.0 * np.pi)
    if wrapped > np.pi:
        wrapped -= 2.0 * np.pi
    elif wrapped <= -np.pi:
        wrapped += 2.0 * np.pi
    return float(wrapped)


def normalize(v: np.ndarray) -> np.ndarray:
    """Unit vector along v (zero vector is returned unchanged)."""
    norm = np.linalg.norm(v)
    if norm > 0:
        return v / norm
    return v.copy()


def forward_vector(heading: float, pitch: float) -> np.ndarray:
    """
    Body longitudinal axis in the world frame.

    Args:
        heading: Yaw about world up (rad)
        pitch: Nose-up angle (rad)

    Returns:
        Unit vector (x, y, z)
    """
    return np.array([
        np.cos(pitch) * np.cos(heading),
        np.sin(pitch),
        np.cos(pitch) * np.sin(heading)
    ])


def horizontal_vector(heading: float, magnitude: float = 1.0) -> np.ndarray:
    """Level vector along the heading."""
    return np.array([
        magnitude * np.cos(heading),
        0.0,
        magnitude * np.sin(heading)
    ])


def lift_direction(velocity_dir: np.ndarray, heading: float) -> np.ndarray:
    """
    Lift direction: perpendicular to the velocity, in the heading/vertical plane.

    Args:
        velocity_dir: Unit velocity vector (world frame)
        heading: Heading angle (rad)

    Returns:
        Unit lift direction (world frame)
    """
    ch = np.cos(heading)
    sh = np.sin(heading)
    lift_dir = np.array([
        -velocity_dir[1] * ch,
        velocity_dir[0] * ch + velocity_dir[2] * sh,
        -velocity_dir[1] * sh
    ])
    return normalize(lift_dir)


def lateral_direction(heading: float) -> np.ndarray:
    """Horizontal unit vector 90° to the right of the heading."""
    return np.array([-np.sin(heading), 0.0, np.cos(heading)])
