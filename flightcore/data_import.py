"""
Aircraft Data Import

Loads aircraft definitions from the keyword-per-line `.dat` format used by
the aircraft packs:

    IDENTIFY "F-16C_FIGHTINGFALCON"
    AFTBURNR TRUE
    THRAFTBN 12.0t
    WEIGHCLN 8.5t
    WINGAREA 300ft^2     # comment
    CRITAOAP 22deg
    MAXSPEED 2.0MACH

Values carry unit suffixes which are converted to SI on load. Lines starting
with REM or '#' are comments. Only the keys the flight model uses are kept;
the rest of the file (geometry, weapons, gear) is ignored.

The result converts to the argument set of
FlightDynamicsEngine.set_aircraft_properties().
"""

import math
import re
import warnings
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

from .aircraft import AircraftProperties
from .environment import GRAVITY, SPEED_OF_SOUND


# Unit conversions
FT2_TO_M2 = 0.092903
KT_TO_MS = 0.514444
MPH_TO_MS = 0.44704
KMH_TO_MS = 1.0 / 3.6

_NUMBER = re.compile(r'^[-+]?(\d+\.?\d*|\.\d+)([eE][-+]?\d+)?')


@dataclass
class AircraftData:
    """Flight-model subset of an aircraft `.dat` file, in SI units."""

    identify: str = ""
    category: str = ""

    has_afterburner: bool = False
    thrust_afterburner: Optional[float] = None   # kgf
    thrust_military: Optional[float] = None      # kgf

    weight_clean: Optional[float] = None   # kg
    weight_fuel: Optional[float] = None    # kg
    weight_payload: Optional[float] = None  # kg

    wing_area: Optional[float] = None      # m²
    critical_aoa_positive: Optional[float] = None  # rad
    critical_aoa_negative: Optional[float] = None  # rad
    critical_speed: Optional[float] = None  # m/s
    max_speed: Optional[float] = None       # m/s

    min_maneuverable_speed: Optional[float] = None    # m/s
    fully_maneuverable_speed: Optional[float] = None  # m/s

    strength: Optional[float] = None

    @property
    def max_thrust_kgf(self) -> Optional[float]:
        """Best available thrust rating (afterburner if fitted)."""
        if self.has_afterburner and self.thrust_afterburner is not None:
            return self.thrust_afterburner
        return self.thrust_military

    def to_property_overrides(
        self,
        base: Optional[AircraftProperties] = None
    ) -> Dict[str, float]:
        """
        Convert to keyword arguments for set_aircraft_properties().

        Values absent from the file are taken from `base` (default F-16).
        Thrust is converted from kgf to N.

        Args:
            base: Properties supplying fallback values

        Returns:
            Dictionary with the nine override arguments
        """
        base = base or AircraftProperties()

        max_thrust = self.max_thrust_kgf
        military = self.thrust_military

        return {
            'empty_mass': _or(self.weight_clean, base.empty_mass),
            'max_fuel': _or(self.weight_fuel, base.max_fuel),
            'wing_area': _or(self.wing_area, base.wing_area),
            'max_thrust': max_thrust * GRAVITY if max_thrust is not None else base.max_thrust,
            'thrust_military': military * GRAVITY if military is not None else base.thrust_military,
            'critical_aoa_positive': _or(self.critical_aoa_positive, base.critical_aoa_positive),
            'critical_aoa_negative': _or(self.critical_aoa_negative, base.critical_aoa_negative),
            'min_maneuverable_speed': _or(self.min_maneuverable_speed, base.min_maneuverable_speed),
            'max_speed': _or(self.max_speed, base.max_speed),
        }


def _or(value: Optional[float], default: float) -> float:
    return value if value is not None else default


def _leading_float(value: str) -> float:
    match = _NUMBER.match(value.strip())
    if match is None:
        raise ValueError(f"No numeric value in {value!r}")
    return float(match.group(0))


def parse_weight(value: str) -> float:
    """Weight in kg ('t' suffix = metric tons)."""
    value = value.lower()
    if value.endswith('kg'):
        return _leading_float(value)
    if value.endswith('t'):
        return _leading_float(value) * 1000.0
    return _leading_float(value)


def parse_area(value: str) -> float:
    """Area in m² ('ft^2' suffix converted)."""
    value = value.lower()
    if value.endswith('ft^2'):
        return _leading_float(value) * FT2_TO_M2
    return _leading_float(value)


def parse_angle(value: str) -> float:
    """Angle in rad. Bare numbers are degrees."""
    value = value.lower()
    if value.endswith('rad'):
        return _leading_float(value)
    return math.radians(_leading_float(value))


def parse_speed(value: str) -> float:
    """Speed in m/s from kt, km/h, mph, m/s or MACH. Bare numbers are m/s."""
    value = value.lower()
    if value.endswith('mach'):
        return _leading_float(value) * SPEED_OF_SOUND
    if value.endswith('kt'):
        return _leading_float(value) * KT_TO_MS
    if value.endswith('km/h'):
        return _leading_float(value) * KMH_TO_MS
    if value.endswith('mph'):
        return _leading_float(value) * MPH_TO_MS
    return _leading_float(value)


def parse_mach_speed(value: str) -> float:
    """Speed in m/s where bare numbers are Mach."""
    if re.search(r'[a-z]', value.lower()):
        return parse_speed(value)
    return _leading_float(value) * SPEED_OF_SOUND


def _parse_bool(value: str) -> bool:
    return value.strip().upper() == 'TRUE'


# keyword -> (attribute, converter)
_KEYWORDS: Dict[str, tuple] = {
    'AFTBURNR': ('has_afterburner', _parse_bool),
    'THRAFTBN': ('thrust_afterburner', parse_weight),
    'THRMILIT': ('thrust_military', parse_weight),
    'WEIGHCLN': ('weight_clean', parse_weight),
    'WEIGFUEL': ('weight_fuel', parse_weight),
    'WEIGLOAD': ('weight_payload', parse_weight),
    'WINGAREA': ('wing_area', parse_area),
    'CRITAOAP': ('critical_aoa_positive', parse_angle),
    'CRITAOAM': ('critical_aoa_negative', parse_angle),
    'CRITSPED': ('critical_speed', parse_mach_speed),
    'MAXSPEED': ('max_speed', parse_mach_speed),
    'MANESPD1': ('min_maneuverable_speed', parse_speed),
    'MANESPD2': ('fully_maneuverable_speed', parse_speed),
    'STRENGTH': ('strength', _leading_float),
}


def parse_aircraft_dat(content: str) -> AircraftData:
    """
    Parse the text of an aircraft `.dat` file.

    Unparsable values are skipped with a warning.

    Args:
        content: File contents

    Returns:
        AircraftData
    """
    data = AircraftData()

    for lineno, raw in enumerate(content.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith('REM') or line.startswith('#'):
            continue

        if '#' in line:
            line = line[:line.index('#')].strip()

        parts = line.split()
        if len(parts) < 2:
            continue

        command = parts[0]
        value = ' '.join(parts[1:])

        if command == 'IDENTIFY':
            data.identify = value.replace('"', '')
            continue
        if command == 'CATEGORY':
            data.category = value
            continue

        entry = _KEYWORDS.get(command)
        if entry is None:
            continue

        attr, converter = entry
        try:
            setattr(data, attr, converter(value))
        except ValueError:
            warnings.warn(f"Line {lineno}: could not parse {command} value {value!r}")

    return data


def load_aircraft_dat(filepath: str) -> AircraftData:
    """
    Load an aircraft `.dat` file.

    Args:
        filepath: Path to the file

    Returns:
        AircraftData
    """
    path = Path(filepath)
    with open(path, 'r', encoding='utf-8', errors='replace') as f:
        return parse_aircraft_dat(f.read())


def apply_aircraft_data(engine, data: AircraftData) -> None:
    """
    Push loaded aircraft data into an engine.

    Args:
        engine: FlightDynamicsEngine to update
        data: Parsed aircraft data
    """
    overrides = data.to_property_overrides(engine.get_properties())
    engine.set_aircraft_properties(**overrides)
    if data.identify:
        engine.properties.name = data.identify
