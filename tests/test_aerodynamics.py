"""
Tests for the aerodynamic model.

Each coefficient function is checked against hand-computed values for the
default F-16 properties, then the force and moment assemblies are checked
for direction and for the zero-input cases.
"""

import numpy as np
import pytest
from flightcore.aircraft import AircraftProperties
from flightcore.state import AircraftState
from flightcore.aerodynamics import (
    MOMENT_SCALE,
    air_density,
    dynamic_pressure,
    angle_of_attack,
    lift_coefficient,
    drag_coefficient,
    compute_aero_state,
    aerodynamic_forces,
    moments
)


@pytest.fixture
def props():
    return AircraftProperties()


def level_state(speed=100.0, pitch=0.0, heading=0.0, **kwargs) -> AircraftState:
    """Sea-level state flying along the heading."""
    velocity = np.array([speed * np.cos(heading), 0.0, speed * np.sin(heading)])
    return AircraftState(
        velocity=velocity,
        heading=heading,
        pitch=pitch,
        airspeed=speed,
        altitude=0.0,
        **kwargs
    )


class TestAtmosphere:

    def test_sea_level_density(self):
        assert air_density(0.0) == pytest.approx(1.225)

    def test_scale_height(self):
        assert air_density(8000.0) == pytest.approx(1.225 / np.e)

    def test_negative_altitude(self):
        """Below sea level the density keeps increasing."""
        assert air_density(-500.0) > 1.225

    def test_dynamic_pressure(self):
        assert dynamic_pressure(1.225, 100.0) == pytest.approx(6125.0)


class TestAngleOfAttack:

    def test_level_flight_equals_pitch(self, props):
        alpha = angle_of_attack(np.array([100.0, 0.0, 0.0]), 0.1, props)
        assert alpha == pytest.approx(0.1)

    def test_descent_adds_flight_path(self, props):
        alpha = angle_of_attack(np.array([100.0, -10.0, 0.0]), 0.0, props)
        assert alpha == pytest.approx(np.arctan2(10.0, 100.0))

    def test_vertical_velocity_gives_zero(self, props):
        """Without horizontal speed α is 0, pitch is not added."""
        assert angle_of_attack(np.array([0.0, -50.0, 0.0]), 0.3, props) == 0.0

    def test_clamped_to_critical_range(self, props):
        v = np.array([100.0, 0.0, 0.0])
        assert angle_of_attack(v, 1.0, props) == pytest.approx(props.critical_aoa_positive)
        assert angle_of_attack(v, -1.0, props) == pytest.approx(props.critical_aoa_negative)


class TestLiftCoefficient:

    def test_linear_region(self, props):
        assert lift_coefficient(0.1, props) == pytest.approx(0.55)

    def test_zero_alpha(self, props):
        assert lift_coefficient(0.0, props) == 0.0

    def test_clamped_to_cl_max(self, props):
        """At stall onset the linear value exceeds Cl_max and is clamped."""
        assert lift_coefficient(0.8 * props.critical_aoa_positive, props) == pytest.approx(1.4)
        assert lift_coefficient(props.critical_aoa_negative, props) == pytest.approx(-1.4)

    def test_post_stall_degradation(self, props):
        crit = props.critical_aoa_positive
        alpha = 0.35
        factor = 1.0 - (alpha - 0.8 * crit) / (0.2 * crit)
        expected = props.Cl_alpha * alpha * factor
        assert lift_coefficient(alpha, props) == pytest.approx(expected)

    def test_post_stall_floor(self, props):
        """At the critical angle only 30% of the linear lift remains."""
        crit = props.critical_aoa_positive
        assert lift_coefficient(crit, props) == pytest.approx(0.3 * props.Cl_alpha * crit)

    def test_stall_reduces_lift(self, props):
        crit = props.critical_aoa_positive
        assert lift_coefficient(crit, props) < lift_coefficient(0.8 * crit, props)


class TestDragCoefficient:

    def test_parabolic_polar(self, props):
        assert drag_coefficient(0.5, 100.0, props) == pytest.approx(0.02 + 0.042 * 0.25)

    def test_no_penalty_below_threshold(self, props):
        cd = drag_coefficient(0.0, 0.8 * props.max_speed, props)
        assert cd == pytest.approx(props.Cd0)

    def test_penalty_at_max_speed(self, props):
        cd = drag_coefficient(0.0, props.max_speed, props)
        assert cd == pytest.approx(props.Cd0 + 0.1)

    def test_penalty_halfway(self, props):
        cd = drag_coefficient(0.0, 0.9 * props.max_speed, props)
        assert cd == pytest.approx(props.Cd0 + 0.05)


class TestAerodynamicForces:

    def test_zero_velocity(self, props):
        state = AircraftState(velocity=np.array([0.05, 0.0, 0.0]), airspeed=0.05, rudder=1.0)
        np.testing.assert_array_equal(aerodynamic_forces(state, props), np.zeros(3))

    def test_level_flight_components(self, props):
        state = level_state(pitch=0.1)
        F = aerodynamic_forces(state, props)

        qS = 6125.0 * props.wing_area
        Cl = 0.55
        Cd = props.Cd0 + props.K * Cl ** 2

        assert F[0] == pytest.approx(-qS * Cd)
        assert F[1] == pytest.approx(qS * Cl)
        assert abs(F[2]) < 1e-9

    def test_rudder_side_force(self, props):
        state = level_state(rudder=1.0)
        F = aerodynamic_forces(state, props)
        expected = 6125.0 * props.wing_area * props.rudder_effect * 0.2
        assert F[2] == pytest.approx(expected)

    def test_forces_follow_heading(self, props):
        """Drag opposes motion for any heading."""
        state = level_state(heading=np.pi / 2)
        F = aerodynamic_forces(state, props)
        assert F[2] < 0
        assert abs(F[0]) < 1e-6

    def test_explicit_density(self, props):
        state = level_state(pitch=0.1)
        half = aerodynamic_forces(state, props, rho=1.225 / 2)
        full = aerodynamic_forces(state, props, rho=1.225)
        np.testing.assert_allclose(half * 2, full)

    def test_aero_state(self, props):
        aero = compute_aero_state(level_state(pitch=0.1), props)
        assert aero.q_bar == pytest.approx(6125.0)
        assert aero.alpha == pytest.approx(0.1)
        assert aero.Cl == pytest.approx(0.55)


class TestMoments:

    def test_zero_inputs_give_zero_moments(self, props):
        M = moments(level_state(), props)
        np.testing.assert_array_equal(M, np.zeros(3))

    def test_aileron_roll_and_adverse_yaw(self, props):
        M = moments(level_state(aileron=1.0), props)
        qSb = 6125.0 * props.wing_area * props.wing_span
        assert M[0] == pytest.approx(qSb * props.aileron_effect * MOMENT_SCALE)
        assert M[1] == 0.0
        assert M[2] == pytest.approx(-qSb * props.aileron_effect * 0.2 * MOMENT_SCALE)

    def test_elevator_pitch(self, props):
        M = moments(level_state(elevator=1.0), props)
        qSc = 6125.0 * props.wing_area * props.mean_chord
        assert M[1] == pytest.approx(qSc * props.elevator_effect * MOMENT_SCALE)

    def test_rudder_yaw(self, props):
        M = moments(level_state(rudder=-1.0), props)
        assert M[2] < 0
        assert M[0] == 0.0

    def test_rate_damping(self, props):
        M = moments(level_state(roll_rate=1.0, pitch_rate=1.0, heading_rate=1.0), props)
        assert M[0] < 0
        assert M[1] < 0
        assert M[2] < 0

    def test_high_speed_nose_down(self, props):
        speed = 0.85 * props.max_speed
        M = moments(level_state(speed=speed), props)
        assert M[1] < 0

        q = dynamic_pressure(1.225, speed)
        factor = (speed - 0.7 * props.max_speed) / (0.3 * props.max_speed)
        expected = -q * props.wing_area * props.mean_chord * factor * 0.1 * MOMENT_SCALE
        assert M[1] == pytest.approx(expected)
