"""
Unit tests for the compiled physics kernels.
"""
import numpy as np
import pytest

from crane3d.core.physics_computations import (
    RAIL, RAIL_VEL, CART, CART_VEL, ALFA_VEL, BETA_VEL, LINE, LINE_VEL,
    STATE_SIZE, AUX_SIZE, D_ALFA_VEL, D_BETA_VEL,
    compute_driving_accelerations,
    compute_friction_ratios,
    compute_friction_acceleration,
    is_held_by_static_friction,
    compute_dry_friction_acceleration,
    compute_line_direction,
    compute_line_tension,
    compute_pendulum_accelerations,
    compute_linear_pendulum_accelerations,
    compute_line_acceleration,
    apply_limits,
    dampen_velocities,
)

G = 9.81


class TestAccelerations:

    def test_driving_accelerations_use_axis_masses(self) -> None:
        a_rail, a_cart, a_wind = compute_driving_accelerations(10.0, 5.0, 2.0, 1.0, 1.0, 4.0)

        assert a_rail == pytest.approx(2.0)  # rail carries rail and cart
        assert a_cart == pytest.approx(5.0)
        assert a_wind == pytest.approx(2.0)

    def test_friction_ratios(self) -> None:
        mu1, mu2 = compute_friction_ratios(1.0, 2.0, 2.0)

        assert mu1 == pytest.approx(0.5)
        assert mu2 == pytest.approx(0.25)

    def test_zero_mass_propagates_without_raising(self) -> None:
        a_rail, a_cart, a_wind = compute_driving_accelerations(1.0, 1.0, 1.0, 0.0, 0.0, 0.0)

        assert np.isinf(a_rail) and np.isinf(a_cart) and np.isinf(a_wind)


class TestFriction:

    def test_stationary_axis_has_no_friction(self) -> None:
        assert compute_friction_acceleration(100.0, 2.0, 0.0, 0.01) == 0.0

    def test_friction_follows_velocity_sign(self) -> None:
        assert compute_friction_acceleration(10.0, 2.0, 0.5, 0.01) == pytest.approx(2.5)
        assert compute_friction_acceleration(10.0, 2.0, -0.5, 0.01) == pytest.approx(-2.5)

    def test_friction_cannot_reverse_motion(self) -> None:
        # 100 * 1.0 / 1.0 would flip the velocity within a 0.1s step
        accel = compute_friction_acceleration(100.0, 1.0, 1.0, 0.1)

        assert accel == pytest.approx(10.0)
        assert 1.0 - accel * 0.1 == pytest.approx(0.0)

    def test_static_friction_holds_below_breakaway_force(self) -> None:
        assert is_held_by_static_friction(5.0, 1.0, 0.0, 0.0, G, 0.7, 0.6, 0.01)
        assert not is_held_by_static_friction(7.0, 1.0, 0.0, 0.0, G, 0.7, 0.6, 0.01)

    def test_moving_axis_is_caught_once_friction_stops_it(self) -> None:
        # kinetic friction alone removes 0.6 * 9.81 * 0.01 ~ 0.059 per step
        assert not is_held_by_static_friction(0.0, 1.0, 0.1, 0.0, G, 0.7, 0.6, 0.01)
        assert is_held_by_static_friction(0.0, 1.0, 0.05, 0.0, G, 0.7, 0.6, 0.01)
        assert is_held_by_static_friction(0.0, 1.0, -0.1, -5.0, G, 0.7, 0.6, 0.01)

    def test_drive_along_motion_keeps_axis_turning(self) -> None:
        assert not is_held_by_static_friction(6.0, 1.0, 0.05, 0.0, G, 0.7, 0.6, 0.01)

    def test_dry_friction_opposes_drive_at_breakaway(self) -> None:
        assert compute_dry_friction_acceleration(0.0, 10.0, 0.0, G, 0.6, 0.01) == pytest.approx(0.6 * G)
        assert compute_dry_friction_acceleration(0.0, -10.0, 0.0, G, 0.6, 0.01) == pytest.approx(-0.6 * G)

    def test_dry_friction_is_capped_for_slow_axis(self) -> None:
        accel = compute_dry_friction_acceleration(-0.001, 0.0, 0.0, G, 0.6, 0.01)

        assert accel == pytest.approx(-0.1)

    def test_dry_friction_shares_cap_with_viscous_friction(self) -> None:
        assert compute_dry_friction_acceleration(0.1, 0.0, 8.0, G, 0.6, 0.01) == pytest.approx(2.0)
        assert compute_dry_friction_acceleration(-0.1, 0.0, -8.0, G, 0.6, 0.01) == pytest.approx(-2.0)
        assert compute_dry_friction_acceleration(0.1, 0.0, 12.0, G, 0.6, 0.01) == 0.0


class TestPendulum:

    @pytest.mark.parametrize("alfa, beta", [(0.0, 0.0), (0.3, -0.2), (-1.0, 1.2), (0.5, 3.0)])
    def test_line_direction_is_unit(self, alfa, beta) -> None:
        direction = np.array(compute_line_direction(alfa, beta))

        assert np.linalg.norm(direction) == pytest.approx(1.0)

    def test_line_hangs_down_at_rest(self) -> None:
        assert compute_line_direction(0.0, 0.0) == pytest.approx((0.0, 0.0, -1.0))

    def test_rest_has_no_swing_acceleration(self) -> None:
        alfa_acc, beta_acc = compute_pendulum_accelerations(0.0, 0.0, 0.0, 0.0, 0.5, 0.0, 0.0, 0.0, G)

        assert alfa_acc == 0.0
        assert beta_acc == 0.0
        assert compute_line_acceleration(0.0, 0.0, 0.0, 0.0, 0.5, 0.0, 0.0, G) == 0.0

    def test_tension_at_rest_is_gravity(self) -> None:
        assert compute_line_tension(0.0, 0.0, 0.0, 0.0, 0.5, G) == pytest.approx(G)

    def test_small_angles_match_linear_approximation(self) -> None:
        alfa, beta, r = 1e-4, -2e-4, 0.8
        a_rail, a_cart = 0.3, -0.2

        full = compute_pendulum_accelerations(alfa, 0.0, beta, 0.0, r, 0.0, a_rail, a_cart, G)
        linear = compute_linear_pendulum_accelerations(alfa, beta, r, a_rail, a_cart, G)

        assert full == pytest.approx(linear, rel=1e-3)

    def test_accelerating_pivot_makes_payload_lag(self) -> None:
        alfa_acc, beta_acc = compute_pendulum_accelerations(0.0, 0.0, 0.0, 0.0, 0.5, 0.0, 1.0, 1.0, G)

        assert alfa_acc < 0.0
        assert beta_acc < 0.0

    def test_swinging_payload_pulls_line_outwards(self) -> None:
        # centripetal term at the bottom of the swing
        assert compute_line_acceleration(0.0, 2.0, 0.0, 0.0, 0.5, 0.0, 0.0, G) == pytest.approx(2.0)


class TestLimitsAndDamping:

    @pytest.fixture
    def state(self) -> np.ndarray:
        q = np.zeros(STATE_SIZE)
        q[RAIL], q[RAIL_VEL] = 0.5, 1.0
        q[CART], q[CART_VEL] = 0.1, -1.0
        q[LINE], q[LINE_VEL] = 0.01, -0.3
        return q

    def test_clamped_axes_lose_velocity(self, state: np.ndarray) -> None:
        apply_limits(state, -0.3, 0.3, -0.35, 0.35, 0.05, 0.9)

        assert state[RAIL] == 0.3 and state[RAIL_VEL] == 0.0
        assert state[LINE] == 0.05 and state[LINE_VEL] == 0.0

    def test_axes_within_limits_are_untouched(self, state: np.ndarray) -> None:
        apply_limits(state, -0.3, 0.3, -0.35, 0.35, 0.05, 0.9)

        assert state[CART] == 0.1 and state[CART_VEL] == -1.0

    def test_damping_scales_all_velocities(self) -> None:
        q = np.ones(STATE_SIZE)
        aux = np.ones(AUX_SIZE)

        dampen_velocities(q, aux, 0.5)

        for i in (RAIL_VEL, CART_VEL, ALFA_VEL, BETA_VEL, LINE_VEL):
            assert q[i] == 0.5
        assert q[RAIL] == 1.0 and q[LINE] == 1.0
        assert aux[D_ALFA_VEL] == 0.5 and aux[D_BETA_VEL] == 0.5
