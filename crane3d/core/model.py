# model.py
"""
Core model components for the crane simulation system.
"""
import logging

import numpy as np

from crane3d.core.base import ModelInterface, CraneBase
from crane3d.core.dynamics import ModelType, get_variant, seed_linear_state
from crane3d.core.integrator import Integrator
from crane3d.core.physics_computations import (
    RAIL, RAIL_VEL, CART, CART_VEL, ALFA, BETA, LINE, LINE_VEL,
    STATE_SIZE, AUX_SIZE,
    compute_driving_accelerations,
    compute_friction_acceleration,
    compute_friction_ratios,
    compute_line_direction,
    apply_limits,
    dampen_velocities,
)
from crane3d.core.state import ModelState
from crane3d.core.vector import Vec3d

logger = logging.getLogger(__name__)


class CraneModel(CraneBase, ModelInterface):
    """
    Dynamics engine of a 3-axis overhead crane.

    A rail moves forward and back (X), a cart moves left and right along the
    rail (Y) and carries a winch whose lift-line (R) suspends the payload as
    a spherical pendulum. The public attributes below are the customization
    parameters of the model; they may be changed between updates and are
    never modified by the model itself. No validation is performed:
    nonsensical values propagate as inf/NaN through the state.
    """

    def __init__(self, params: dict = None):
        """
        Initialize the crane model.

        Args:
            params: Configuration parameters, DEFAULT_PARAMS when omitted
        """
        super().__init__(params)

        # Which model to use? Linear is simple and foolproof
        self.type = ModelType.from_name(self.model_parameters['type'])

        masses = self.physical_parameters['masses']
        self.m_payload = float(masses['payload'])
        self.m_cart = float(masses['cart'])
        self.m_rail = float(masses['rail'])
        self.g = float(self.physical_parameters['gravity'])

        self.rail_friction = float(self.friction_parameters['rail'])
        self.cart_friction = float(self.friction_parameters['cart'])
        self.winding_friction = float(self.friction_parameters['winding'])
        self.mu_static = float(self.friction_parameters['static_dry_steel'])
        self.mu_kinetic = float(self.friction_parameters['kinetic_dry_steel'])
        self.damping = float(self.friction_parameters['damping'])

        self.rail_limit_min = float(self.limits_parameters['rail']['min'])
        self.rail_limit_max = float(self.limits_parameters['rail']['max'])
        self.cart_limit_min = float(self.limits_parameters['cart']['min'])
        self.cart_limit_max = float(self.limits_parameters['cart']['max'])
        self.line_limit_min = float(self.limits_parameters['line']['min'])
        self.line_limit_max = float(self.limits_parameters['line']['max'])

        self._integrate = Integrator.get_integrator(self.model_parameters['integration_method'])

        self.reset()

    def reset(self):
        """Restore the initial kinematic state and empty the fixed step time sink."""
        self._q = np.zeros(STATE_SIZE)
        self._aux = np.zeros(AUX_SIZE)

        initial = self.initial_conditions_parameters
        self._q[RAIL] = initial['rail_offset']
        self._q[CART] = initial['cart_offset']
        self._q[LINE] = initial['lift_line']
        self._q[ALFA] = initial['alfa']
        self._q[BETA] = initial['beta']

        self._active_type = None

        # simulation time sink for running the correct number of fixed steps every update
        self._simulation_time = 0.0
        self._simulation_counter = 0

    @property
    def simulation_time(self) -> float:
        """Simulated time received but not yet consumed by a fixed step."""
        return self._simulation_time

    @property
    def simulation_counter(self) -> int:
        """Number of fixed steps performed, for debugging."""
        return self._simulation_counter

    def update_fixed(self, fixed_time: float, delta_time: float,
                     f_rail: float, f_cart: float, f_wind: float) -> ModelState:
        """
        Updates the model using a fixed time step.

        delta_time is added to the time sink and as many steps of fixed_time as
        fit are taken; the remainder waits for the next call.

        Args:
            fixed_time: Size of the fixed time step. For example 0.01
            delta_time: Time since last update
            f_rail: Force driving the rail with the cart (Fx)
            f_cart: Force driving the cart along the rail (Fy)
            f_wind: Force winding the lift-line (Fr)

        Returns:
            New state of the crane model
        """
        self._simulation_time += delta_time
        steps = 0
        while self._simulation_time >= fixed_time:
            self._step(fixed_time, f_rail, f_cart, f_wind)
            self._simulation_time -= fixed_time
            self._simulation_counter += 1
            steps += 1

        if steps > 1:
            logger.debug(f"Took {steps} fixed steps of {fixed_time}s, {self._simulation_time:.6f}s left")
        return self.get_state()

    def update(self, delta_time: float, f_rail: float, f_cart: float, f_wind: float) -> ModelState:
        """
        Updates the model using delta_time as the time step. This can be unstable if delta_time varies.

        Args:
            delta_time: Time since last update
            f_rail: Force driving the rail with the cart (Fx)
            f_cart: Force driving the cart along the rail (Fy)
            f_wind: Force winding the lift-line (Fr)

        Returns:
            New state of the crane model
        """
        self._step(delta_time, f_rail, f_cart, f_wind)
        return self.get_state()

    def get_state(self) -> ModelState:
        """
        Returns:
            Current state of the crane: distance of the rail, cart, length of
            the lift-line, swing angles and position of the payload
        """
        q = self._q
        line = q[LINE]
        direction = Vec3d(*compute_line_direction(q[ALFA], q[BETA]))
        payload = Vec3d(q[RAIL], q[CART], 0.0) + Vec3d(line, line, line) * direction

        return ModelState(
            alfa=float(q[ALFA]),
            beta=float(q[BETA]),
            rail_offset=float(q[RAIL]),
            cart_offset=float(q[CART]),
            lift_line=float(line),
            payload_x=float(payload.x),
            payload_y=float(payload.y),
            payload_z=float(payload.z),
        )

    def _select_variant(self):
        model_type = ModelType.from_name(self.type)
        if model_type is not self._active_type:
            if self._active_type is not None:
                logger.info(f"Switching crane model from {self._active_type.value} to {model_type.value}")
            if model_type is ModelType.LINEAR:
                seed_linear_state(self._q, self._aux)
            self._active_type = model_type
        return get_variant(model_type)

    def _step(self, dt: float, f_rail: float, f_cart: float, f_wind: float):
        """Advance the state by one tick of length dt."""
        variant = self._select_variant()
        q = self._q
        m_railcart = self.m_cart + self.m_rail

        drive = np.array(compute_driving_accelerations(
            f_rail, f_cart, f_wind, self.m_payload, self.m_cart, self.m_rail))
        friction = np.array([
            compute_friction_acceleration(self.rail_friction, m_railcart, q[RAIL_VEL], dt),
            compute_friction_acceleration(self.cart_friction, self.m_cart, q[CART_VEL], dt),
            compute_friction_acceleration(self.winding_friction, self.m_payload, q[LINE_VEL], dt),
        ])
        net = drive - friction

        mu1, mu2 = compute_friction_ratios(self.m_payload, self.m_cart, self.m_rail)
        consts = np.array([self.g, mu1, mu2, self.m_payload, self.mu_static, self.mu_kinetic])

        variant(q, self._aux, drive, net, consts, dt, self._integrate)

        apply_limits(q, self.rail_limit_min, self.rail_limit_max,
                     self.cart_limit_min, self.cart_limit_max,
                     self.line_limit_min, self.line_limit_max)
        dampen_velocities(q, self._aux, self.damping)
