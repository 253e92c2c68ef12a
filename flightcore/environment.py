"""
Environment Model

Provides the atmosphere seen by the flight dynamics engine.

Uses a simple exponential atmosphere: density decays with altitude over a
fixed scale height. Gravity is uniform.
"""

import numpy as np
from dataclasses import dataclass
from typing import Optional


# Sea level constants
SEA_LEVEL_DENSITY = 1.225   # kg/m³
SCALE_HEIGHT = 8000.0       # m
GRAVITY = 9.81              # m/s²
SPEED_OF_SOUND = 340.29     # m/s at sea level


def exponential_density(
    altitude: float,
    sea_level_density: float = SEA_LEVEL_DENSITY,
    scale_height: float = SCALE_HEIGHT
) -> float:
    """
    Air density from the exponential atmosphere.

    No bounds are applied: negative altitude gives density above sea level.

    Args:
        altitude: Altitude above sea level (m)
        sea_level_density: ρ0 (kg/m³)
        scale_height: Density scale height (m)

    Returns:
        Air density (kg/m³)
    """
    return float(sea_level_density * np.exp(-altitude / scale_height))


@dataclass
class Environment:
    """
    Atmosphere and gravity used by the engine.
    """

    gravity: float = GRAVITY
    sea_level_density: float = SEA_LEVEL_DENSITY
    scale_height: float = SCALE_HEIGHT

    # Use constant atmosphere (for simplified sims and tests)
    constant_density: Optional[float] = None

    def density(self, altitude: float) -> float:
        """
        Get air density at altitude.

        Args:
            altitude: Altitude (m)

        Returns:
            Density (kg/m³)
        """
        if self.constant_density is not None:
            return self.constant_density

        return exponential_density(altitude, self.sea_level_density, self.scale_height)
