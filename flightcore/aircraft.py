"""
Aircraft Configuration

Defines the per-type properties of the aircraft:
- Mass and fuel capacity
- Aerodynamic reference dimensions
- Propulsion characteristics
- Scalar aerodynamic coefficients
- Control effectiveness and flight envelope

Named presets live in a small enum-keyed table. Arbitrary aircraft can be
loaded from YAML or overridden field-by-field through the engine.
"""

import numpy as np
import yaml
from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Dict, Any, Callable


# Oswald span efficiency assumed when K is derived from the aspect ratio
OSWALD_EFFICIENCY = 0.8


def induced_drag_factor(wing_span: float, wing_area: float,
                        oswald: float = OSWALD_EFFICIENCY) -> float:
    """
    Induced drag factor K = 1 / (π e AR).

    Args:
        wing_span: b (m)
        wing_area: S (m²)
        oswald: Span efficiency e

    Returns:
        K (dimensionless), 0 for a non-positive wing area
    """
    if wing_area <= 0.0:
        return 0.0
    aspect_ratio = wing_span ** 2 / wing_area
    return 1.0 / (np.pi * oswald * aspect_ratio)


@dataclass
class AircraftProperties:
    """Complete aircraft type definition. Defaults describe the F-16."""

    name: str = "F-16 Fighting Falcon"

    # Mass and geometry
    empty_mass: float = 8570.0      # kg
    max_fuel: float = 3175.0        # kg
    wing_area: float = 27.87        # S (m²)
    wing_span: float = 9.96         # b (m)

    # Propulsion
    max_thrust: float = 127000.0    # N (with afterburner)
    thrust_military: float = 76000.0  # N (military power)
    thrust_sfc: float = 0.00008     # kg fuel per N·s

    # Aerodynamics
    Cl0: float = 0.0        # Zero-alpha lift
    Cl_alpha: float = 5.5   # Lift curve slope (per rad)
    Cd0: float = 0.02       # Parasitic drag
    K: float = 0.042        # Induced drag factor (Cd = Cd0 + K*Cl²)
    Cl_max: float = 1.4     # Maximum |Cl|

    # Control effectiveness
    aileron_effect: float = 0.5
    elevator_effect: float = 0.4
    rudder_effect: float = 0.3

    # Envelope
    critical_aoa_positive: float = 0.384    # rad, ~22°
    critical_aoa_negative: float = -0.262   # rad, ~-15°
    min_maneuverable_speed: float = 20.0    # m/s
    max_speed: float = 686.0                # m/s, ~Mach 2 at sea level

    @property
    def mean_chord(self) -> float:
        """Mean aerodynamic chord c = S/b (m)."""
        return self.wing_area / self.wing_span

    @property
    def aspect_ratio(self) -> float:
        return self.wing_span ** 2 / self.wing_area

    def copy(self) -> 'AircraftProperties':
        return replace(self)

    @classmethod
    def from_yaml(cls, filepath: str) -> 'AircraftProperties':
        """Load aircraft properties from YAML file."""
        with open(filepath, 'r') as f:
            data = yaml.safe_load(f)

        return cls._from_dict(data or {})

    @classmethod
    def _from_dict(cls, data: Dict[str, Any]) -> 'AircraftProperties':
        """
        Create properties from dictionary.

        Missing keys fall back to the defaults; unknown keys are rejected so
        that typos in aircraft files do not go unnoticed.
        """
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown aircraft properties: {sorted(unknown)}")

        values = {
            key: (str(value) if key == 'name' else float(value))
            for key, value in data.items()
        }
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        """Convert properties to dictionary for serialization."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def to_host_dict(self) -> Dict[str, Any]:
        """Outbound shape consumed by the renderer/HUD (camelCase keys)."""
        return {
            'name': self.name,
            'emptyMass': self.empty_mass,
            'maxFuel': self.max_fuel,
            'wingArea': self.wing_area,
            'wingSpan': self.wing_span,
            'maxThrust': self.max_thrust,
            'thrustSFC': self.thrust_sfc,
            'Cl0': self.Cl0,
            'ClAlpha': self.Cl_alpha,
            'Cd0': self.Cd0,
            'K': self.K,
            'ClMax': self.Cl_max,
            'aileronEffect': self.aileron_effect,
            'elevatorEffect': self.elevator_effect,
            'rudderEffect': self.rudder_effect,
            'criticalAOAPositive': self.critical_aoa_positive,
            'criticalAOANegative': self.critical_aoa_negative,
            'minManeuverableSpeed': self.min_maneuverable_speed,
            'maxSpeed': self.max_speed,
        }

    def save_yaml(self, filepath: str):
        """Save properties to YAML file."""
        with open(filepath, 'w') as f:
            yaml.safe_dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)


def f16_properties() -> AircraftProperties:
    """F-16 Fighting Falcon (simplified)."""
    return AircraftProperties()


class AircraftType(Enum):
    """Named aircraft presets, keyed by the name hosts pass in."""
    F16 = "F-16"


PRESETS: Dict[AircraftType, Callable[[], AircraftProperties]] = {
    AircraftType.F16: f16_properties,
}


def preset_properties(name: str) -> AircraftProperties:
    """
    Look up a named preset.

    Args:
        name: Aircraft type name, e.g. "F-16"

    Returns:
        Fresh AircraftProperties for that type

    Raises:
        KeyError: if the name is not a known preset
    """
    try:
        aircraft_type = AircraftType(name)
    except ValueError:
        raise KeyError(name) from None
    return PRESETS[aircraft_type]()
