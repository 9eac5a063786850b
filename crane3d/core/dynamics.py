"""
Motion equations of the five crane model variants.

Every variant receives the same inputs and evolves the shared state vector
in place over one tick:

    variant(q, aux, drive, net, consts, dt, integrate)

    q:         state vector (see physics_computations for the layout)
    aux:       small-angle state of the basic linear model
    drive:     driving accelerations (rail, cart, wind)
    net:       driving minus viscous friction accelerations (rail, cart, wind)
    consts:    model constants (g, mu1, mu2, payload mass, dry friction)
    dt:        tick length
    integrate: integration step function from Integrator.get_integrator
"""
from enum import Enum

import numpy as np

from crane3d.core.physics_computations import (
    RAIL, RAIL_VEL, CART, CART_VEL, ALFA, ALFA_VEL, BETA, BETA_VEL, LINE, LINE_VEL,
    D_ALFA, D_ALFA_VEL, D_BETA, D_BETA_VEL,
    G, MU1, MU2, M_PAYLOAD, MU_STATIC, MU_KINETIC,
    compute_line_tension,
    compute_line_direction,
    compute_pendulum_accelerations,
    compute_linear_pendulum_accelerations,
    compute_line_acceleration,
    compute_dry_friction_acceleration,
    is_held_by_static_friction,
)

AXIS_RAIL, AXIS_CART, AXIS_WIND = 0, 1, 2


class ModelType(Enum):
    """Allows switching between different crane model dynamics."""

    # The most basic and foolproof crane model
    LINEAR = 'linear'

    # Variation of the first linear model
    LINEAR2 = 'linear2'

    # Non-linear model with constant pendulum length with 2 control forces, Fwind is ignored
    NONLINEAR_CONSTANT_LINE = 'nonlinear_constant_line'

    # Non-linear fully dynamic model with all 3 forces
    NONLINEAR_COMPLETE = 'nonlinear_complete'

    # Non-linear fully dynamic model with all 3 forces and refined winding friction
    NONLINEAR_ORIGINAL = 'nonlinear_original'

    @classmethod
    def from_name(cls, name) -> 'ModelType':
        """
        Resolve a model type from its value ('nonlinear_complete') or member
        name ('NONLINEAR_COMPLETE').

        Raises:
            ValueError: If the name matches no model type
        """
        if isinstance(name, cls):
            return name
        key = str(name).strip()
        for member in cls:
            if key.lower() == member.value or key.upper() == member.name:
                return member
        raise ValueError(f"Unknown model type: {name}")


def _integrate_carriages(q, a_rail, a_cart, dt, integrate):
    q[RAIL], q[RAIL_VEL] = integrate(q[RAIL], q[RAIL_VEL], a_rail, dt)
    q[CART], q[CART_VEL] = integrate(q[CART], q[CART_VEL], a_cart, dt)


def basic_linear_model(q, aux, drive, net, consts, dt, integrate):
    """
    Decoupled carriages with a small-angle pendulum evolved on the auxiliary
    angle pair. The lift-line keeps its length.
    """
    a_rail, a_cart = net[AXIS_RAIL], net[AXIS_CART]
    d_alfa_acc, d_beta_acc = compute_linear_pendulum_accelerations(
        aux[D_ALFA], aux[D_BETA], q[LINE], a_rail, a_cart, consts[G])

    _integrate_carriages(q, a_rail, a_cart, dt, integrate)
    aux[D_ALFA], aux[D_ALFA_VEL] = integrate(aux[D_ALFA], aux[D_ALFA_VEL], d_alfa_acc, dt)
    aux[D_BETA], aux[D_BETA_VEL] = integrate(aux[D_BETA], aux[D_BETA_VEL], d_beta_acc, dt)

    q[ALFA], q[ALFA_VEL] = aux[D_ALFA], aux[D_ALFA_VEL]
    q[BETA], q[BETA_VEL] = aux[D_BETA], aux[D_BETA_VEL]
    q[LINE_VEL] = 0.0


def basic_linear_model2(q, aux, drive, net, consts, dt, integrate):
    """
    Small-angle pendulum whose line tension (approximated by its weight) pulls
    back on the cart and the rail.
    """
    g = consts[G]
    a_rail = net[AXIS_RAIL] + consts[MU2] * g * q[BETA]
    a_cart = net[AXIS_CART] + consts[MU1] * g * q[ALFA]
    alfa_acc, beta_acc = compute_linear_pendulum_accelerations(
        q[ALFA], q[BETA], q[LINE], a_rail, a_cart, g)

    _integrate_carriages(q, a_rail, a_cart, dt, integrate)
    q[ALFA], q[ALFA_VEL] = integrate(q[ALFA], q[ALFA_VEL], alfa_acc, dt)
    q[BETA], q[BETA_VEL] = integrate(q[BETA], q[BETA_VEL], beta_acc, dt)
    q[LINE_VEL] = 0.0


def _nonlinear_model(q, n_rail, n_cart, n_wind, consts, dt, integrate, variable_line):
    """
    Spherical pendulum on a moving pivot. The carriages feel the line tension
    scaled by the payload mass ratios. With a constant line the length is
    frozen for the tick and the winding input is unused.
    """
    g = consts[G]
    alfa, alfa_vel = q[ALFA], q[ALFA_VEL]
    beta, beta_vel = q[BETA], q[BETA_VEL]
    r = q[LINE]
    r_vel = q[LINE_VEL] if variable_line else 0.0

    tension = compute_line_tension(alfa, alfa_vel, beta, beta_vel, r, g)
    dir_x, dir_y, _ = compute_line_direction(alfa, beta)
    a_rail = n_rail + consts[MU2] * tension * dir_x
    a_cart = n_cart + consts[MU1] * tension * dir_y

    alfa_acc, beta_acc = compute_pendulum_accelerations(
        alfa, alfa_vel, beta, beta_vel, r, r_vel, a_rail, a_cart, g)

    _integrate_carriages(q, a_rail, a_cart, dt, integrate)
    q[ALFA], q[ALFA_VEL] = integrate(alfa, alfa_vel, alfa_acc, dt)
    q[BETA], q[BETA_VEL] = integrate(beta, beta_vel, beta_acc, dt)

    if variable_line:
        r_acc = n_wind + compute_line_acceleration(alfa, alfa_vel, beta, beta_vel, r, a_rail, a_cart, g)
        q[LINE], q[LINE_VEL] = integrate(r, r_vel, r_acc, dt)
    else:
        q[LINE_VEL] = 0.0


def nonlinear_constant_pendulum(q, aux, drive, net, consts, dt, integrate):
    _nonlinear_model(q, net[AXIS_RAIL], net[AXIS_CART], 0.0, consts, dt, integrate,
                     variable_line=False)


def nonlinear_complete_model(q, aux, drive, net, consts, dt, integrate):
    _nonlinear_model(q, net[AXIS_RAIL], net[AXIS_CART], net[AXIS_WIND], consts, dt, integrate,
                     variable_line=True)


def nonlinear_original_model(q, aux, drive, net, consts, dt, integrate):
    """
    Complete model where the winch drum also carries dry steel-on-steel
    friction: a stationary drum holds until the winding force breaks away
    from static friction, a turning drum is slowed by kinetic friction and
    is caught again once it comes to rest under a force below breakaway.
    """
    g = consts[G]
    m_payload = consts[M_PAYLOAD]
    f_wind = drive[AXIS_WIND] * m_payload
    viscous = drive[AXIS_WIND] - net[AXIS_WIND]

    held = is_held_by_static_friction(f_wind, m_payload, q[LINE_VEL], viscous, g,
                                      consts[MU_STATIC], consts[MU_KINETIC], dt)
    n_wind = net[AXIS_WIND]
    if not held:
        n_wind -= compute_dry_friction_acceleration(
            q[LINE_VEL], drive[AXIS_WIND], viscous, g, consts[MU_KINETIC], dt)

    _nonlinear_model(q, net[AXIS_RAIL], net[AXIS_CART], n_wind, consts, dt, integrate,
                     variable_line=not held)


VARIANTS = {
    ModelType.LINEAR: basic_linear_model,
    ModelType.LINEAR2: basic_linear_model2,
    ModelType.NONLINEAR_CONSTANT_LINE: nonlinear_constant_pendulum,
    ModelType.NONLINEAR_COMPLETE: nonlinear_complete_model,
    ModelType.NONLINEAR_ORIGINAL: nonlinear_original_model,
}


def get_variant(model_type: ModelType):
    """
    Args:
        model_type: Model variant selector

    Returns:
        Motion equations of the variant
    """
    return VARIANTS[ModelType.from_name(model_type)]


def seed_linear_state(q: np.ndarray, aux: np.ndarray) -> None:
    """Start the auxiliary small-angle pair from the current swing."""
    aux[D_ALFA], aux[D_ALFA_VEL] = q[ALFA], q[ALFA_VEL]
    aux[D_BETA], aux[D_BETA_VEL] = q[BETA], q[BETA_VEL]
