"""
Tests for aircraft `.dat` import.
"""

import math
import pytest
from flightcore.data_import import (
    AircraftData,
    parse_aircraft_dat,
    load_aircraft_dat,
    apply_aircraft_data,
    parse_weight,
    parse_area,
    parse_angle,
    parse_speed,
    parse_mach_speed
)
from flightcore.dynamics import FlightDynamicsEngine


SAMPLE_DAT = """REM Sample fighter
IDENTIFY "F-18E_SUPERHORNET"
CATEGORY FIGHTER
AFTBURNR TRUE
THRAFTBN 20t          # afterburner thrust
THRMILIT 12t
WEIGHCLN 14500kg
WEIGFUEL 6500kg
WINGAREA 500ft^2
CRITAOAP 25deg
CRITAOAM -15deg
MANESPD1 100kt
MANESPD2 150kt
MAXSPEED 1.8MACH
COCKPITP 0.0m 1.2m 5.0m
HRDPOINT 1.0m 0.0m 0.0m AIM9 AIM120
# full-line comment
"""


class TestUnitParsing:

    def test_weight(self):
        assert parse_weight("12t") == 12000.0
        assert parse_weight("850kg") == 850.0
        assert parse_weight("850") == 850.0

    def test_area(self):
        assert parse_area("300ft^2") == pytest.approx(300 * 0.092903)
        assert parse_area("27.87m^2") == pytest.approx(27.87)

    def test_angle(self):
        assert parse_angle("22deg") == pytest.approx(math.radians(22))
        assert parse_angle("0.4rad") == pytest.approx(0.4)
        assert parse_angle("10") == pytest.approx(math.radians(10))

    def test_speed(self):
        assert parse_speed("100kt") == pytest.approx(51.4444)
        assert parse_speed("36km/h") == pytest.approx(10.0)
        assert parse_speed("10mph") == pytest.approx(4.4704)
        assert parse_speed("55m/s") == 55.0
        assert parse_speed("2MACH") == pytest.approx(680.58)

    def test_bare_max_speed_is_mach(self):
        assert parse_mach_speed("2.0") == pytest.approx(680.58)
        assert parse_mach_speed("400kt") == pytest.approx(400 * 0.514444)

    def test_no_number(self):
        with pytest.raises(ValueError):
            parse_weight("heavy")


class TestParseDat:

    @pytest.fixture
    def data(self):
        return parse_aircraft_dat(SAMPLE_DAT)

    def test_identity(self, data):
        assert data.identify == "F-18E_SUPERHORNET"
        assert data.category == "FIGHTER"

    def test_values_in_si(self, data):
        assert data.has_afterburner
        assert data.thrust_afterburner == 20000.0
        assert data.thrust_military == 12000.0
        assert data.weight_clean == 14500.0
        assert data.weight_fuel == 6500.0
        assert data.wing_area == pytest.approx(500 * 0.092903)
        assert data.critical_aoa_positive == pytest.approx(math.radians(25))
        assert data.critical_aoa_negative == pytest.approx(math.radians(-15))
        assert data.min_maneuverable_speed == pytest.approx(100 * 0.514444)
        assert data.max_speed == pytest.approx(1.8 * 340.29)

    def test_bad_value_warns_and_skips(self):
        with pytest.warns(UserWarning, match="WEIGHCLN"):
            data = parse_aircraft_dat("WEIGHCLN lots\nWEIGFUEL 1t\n")
        assert data.weight_clean is None
        assert data.weight_fuel == 1000.0

    def test_unit_separated_by_space(self):
        data = parse_aircraft_dat("WEIGHCLN 8.5 t\nMANESPD1 100 kt\n")
        assert data.weight_clean == 8500.0
        assert data.min_maneuverable_speed == pytest.approx(100 * 0.514444)

    def test_load_from_file(self, tmp_path):
        path = tmp_path / "f18.dat"
        path.write_text(SAMPLE_DAT)
        assert load_aircraft_dat(str(path)).identify == "F-18E_SUPERHORNET"


class TestOverrides:

    def test_thrust_converted_to_newtons(self):
        overrides = parse_aircraft_dat(SAMPLE_DAT).to_property_overrides()
        assert overrides['max_thrust'] == pytest.approx(20000.0 * 9.81)
        assert overrides['thrust_military'] == pytest.approx(12000.0 * 9.81)

    def test_military_thrust_without_afterburner(self):
        data = AircraftData(has_afterburner=False, thrust_afterburner=20000.0, thrust_military=8000.0)
        assert data.to_property_overrides()['max_thrust'] == pytest.approx(8000.0 * 9.81)

    def test_missing_values_fall_back(self):
        overrides = AircraftData(weight_clean=1000.0).to_property_overrides()
        assert overrides['empty_mass'] == 1000.0
        assert overrides['max_fuel'] == 3175.0
        assert overrides['max_thrust'] == 127000.0
        assert len(overrides) == 9

    def test_apply_to_engine(self):
        engine = FlightDynamicsEngine()
        apply_aircraft_data(engine, parse_aircraft_dat(SAMPLE_DAT))

        props = engine.get_properties()
        assert props.name == "F-18E_SUPERHORNET"
        assert props.empty_mass == 14500.0
        assert props.max_fuel == 6500.0
        assert props.max_thrust == pytest.approx(196200.0)
        assert props.wing_span == 9.96

        engine.initialize((0.0, 1000.0, 0.0), 0.0)
        assert engine.fuel == pytest.approx(3250.0)
