"""
Core physics computations for the crane model.
These functions are optimized with Numba for performance.

All kernels are compiled with the numpy error model: a zero mass or a zero
line length yields inf/NaN instead of raising, and the values propagate
through the state untouched.
"""
import numpy as np
from numba import jit

# State vector layout, x1..x10 of the 3DCrane mathematical model
RAIL, RAIL_VEL = 0, 1
CART, CART_VEL = 2, 3
ALFA, ALFA_VEL = 4, 5
BETA, BETA_VEL = 6, 7
LINE, LINE_VEL = 8, 9
STATE_SIZE = 10

# Auxiliary small-angle state of the basic linear model
D_ALFA, D_ALFA_VEL = 0, 1
D_BETA, D_BETA_VEL = 2, 3
AUX_SIZE = 4

# Model constants vector layout
G, MU1, MU2, M_PAYLOAD, MU_STATIC, MU_KINETIC = 0, 1, 2, 3, 4, 5


@jit(nopython=True, error_model='numpy')
def compute_driving_accelerations(f_rail, f_cart, f_wind, m_payload, m_cart, m_rail):
    """
    Compute the acceleration each actuator force produces on its own axis.

    Args:
        f_rail: Force driving the rail with the cart
        f_cart: Force driving the cart along the rail
        f_wind: Force winding the lift-line
        m_payload: Payload mass
        m_cart: Cart mass
        m_rail: Rail mass

    Returns:
        Driving accelerations of the rail, cart and winch
    """
    return f_rail / (m_cart + m_rail), f_cart / m_cart, f_wind / m_payload


@jit(nopython=True, error_model='numpy')
def compute_friction_ratios(m_payload, m_cart, m_rail):
    """
    Returns:
        Tuple (mu1, mu2): payload/cart and payload/(cart + rail) mass ratios
    """
    return m_payload / m_cart, m_payload / (m_cart + m_rail)


@jit(nopython=True, error_model='numpy')
def compute_friction_acceleration(friction, mass, velocity, dt):
    """
    Compute the viscous friction deceleration of one axis.

    The result has the sign of the velocity and is subtracted from the driving
    acceleration. Its magnitude is capped so that a single step can bring the
    axis to rest but never reverse it. A stationary axis has no friction.

    Args:
        friction: Viscous friction coefficient of the axis
        mass: Mass moved by the axis
        velocity: Current velocity of the axis
        dt: Time step size

    Returns:
        Friction acceleration
    """
    if velocity == 0.0:
        return 0.0
    accel = friction * velocity / mass
    limit = np.abs(velocity) / dt
    if np.abs(accel) > limit:
        accel = np.copysign(limit, velocity)
    return accel


@jit(nopython=True, error_model='numpy')
def is_held_by_static_friction(f_applied, mass, velocity, viscous, g, mu_static, mu_kinetic, dt):
    """
    Check whether an axis loaded by the payload weight is held by static (dry)
    friction during this step.

    The applied force must stay below the breakaway force. A stationary axis
    is then held; a moving axis is caught once viscous and kinetic friction,
    net of the driving acceleration, bring it to rest within the step.

    Args:
        f_applied: Force applied to the axis
        mass: Mass loading the axis
        velocity: Current velocity of the axis
        viscous: Viscous friction acceleration of the axis
        g: Gravity acceleration
        mu_static: Static friction coefficient
        mu_kinetic: Kinetic friction coefficient
        dt: Time step size

    Returns:
        True if the axis ends the step at rest
    """
    if np.abs(f_applied) > mu_static * mass * g:
        return False
    if velocity == 0.0:
        return True
    drive = f_applied / mass
    braking = np.abs(viscous) + mu_kinetic * g - np.copysign(1.0, velocity) * drive
    return braking * dt >= np.abs(velocity)


@jit(nopython=True, error_model='numpy')
def compute_dry_friction_acceleration(velocity, drive, viscous, g, mu_kinetic, dt):
    """
    Compute the kinetic (Coulomb) friction deceleration of an axis loaded by
    the payload weight.

    A stationary axis that broke away from static friction is opposed along
    its driving acceleration. A moving axis is opposed along its velocity;
    together with the viscous term it is capped at |velocity| / dt, so the
    total friction can stop the axis but not reverse it.

    Args:
        velocity: Current velocity of the axis
        drive: Driving acceleration of the axis
        viscous: Viscous friction acceleration already applied to the axis
        g: Gravity acceleration
        mu_kinetic: Kinetic friction coefficient
        dt: Time step size

    Returns:
        Friction acceleration
    """
    accel = mu_kinetic * g
    if velocity == 0.0:
        return np.copysign(accel, drive)
    limit = np.abs(velocity) / dt - np.abs(viscous)
    if limit < 0.0:
        limit = 0.0
    if accel > limit:
        accel = limit
    return np.copysign(accel, velocity)


@jit(nopython=True, error_model='numpy')
def compute_line_direction(alfa, beta):
    """
    Unit vector from the cart towards the payload.

    Args:
        alfa: Lateral swing angle
        beta: Longitudinal swing angle

    Returns:
        Tuple (dx, dy, dz)
    """
    sin_a, cos_a = np.sin(alfa), np.cos(alfa)
    sin_b, cos_b = np.sin(beta), np.cos(beta)
    return sin_b * cos_a, sin_a, -cos_a * cos_b


@jit(nopython=True, error_model='numpy')
def compute_line_tension(alfa, alfa_vel, beta, beta_vel, r, g):
    """
    Line tension per unit payload mass: the gravity component along the line
    plus the centripetal term of the swing.
    """
    cos_a = np.cos(alfa)
    return g * cos_a * np.cos(beta) + r * (alfa_vel ** 2 + (cos_a * beta_vel) ** 2)


@jit(nopython=True, error_model='numpy')
def compute_pendulum_accelerations(alfa, alfa_vel, beta, beta_vel, r, r_vel, a_rail, a_cart, g):
    """
    Angular accelerations of a spherical pendulum hanging from a moving pivot
    on a line of varying length.

    Args:
        alfa: Lateral swing angle
        alfa_vel: Lateral swing rate
        beta: Longitudinal swing angle
        beta_vel: Longitudinal swing rate
        r: Line length
        r_vel: Line length rate
        a_rail: Pivot acceleration along X
        a_cart: Pivot acceleration along Y
        g: Gravity acceleration

    Returns:
        Tuple (alfa_acc, beta_acc)
    """
    sin_a, cos_a = np.sin(alfa), np.cos(alfa)
    sin_b, cos_b = np.sin(beta), np.cos(beta)

    alfa_acc = (-2.0 * r_vel * alfa_vel / r
                - sin_a * cos_a * beta_vel ** 2
                + (a_rail * sin_b * sin_a - a_cart * cos_a - g * sin_a * cos_b) / r)
    beta_acc = (-2.0 * r_vel * beta_vel / r
                + 2.0 * sin_a / cos_a * alfa_vel * beta_vel
                - (a_rail * cos_b + g * sin_b) / (r * cos_a))
    return alfa_acc, beta_acc


@jit(nopython=True, error_model='numpy')
def compute_linear_pendulum_accelerations(alfa, beta, r, a_rail, a_cart, g):
    """
    Small-angle approximation of compute_pendulum_accelerations for a line of
    constant length.
    """
    return -(a_cart + g * alfa) / r, -(a_rail + g * beta) / r


@jit(nopython=True, error_model='numpy')
def compute_line_acceleration(alfa, alfa_vel, beta, beta_vel, r, a_rail, a_cart, g):
    """
    Radial acceleration of the payload along the line, excluding the winch.

    The winch statically carries the payload weight, so a payload hanging at
    rest produces no radial acceleration.
    """
    sin_a, cos_a = np.sin(alfa), np.cos(alfa)
    sin_b, cos_b = np.sin(beta), np.cos(beta)
    return (r * (alfa_vel ** 2 + (cos_a * beta_vel) ** 2)
            + g * (cos_a * cos_b - 1.0)
            - a_rail * sin_b * cos_a
            - a_cart * sin_a)


@jit(nopython=True)
def _clamp_axis(q, pos, vel, low, high):
    if q[pos] < low:
        q[pos] = low
        q[vel] = 0.0
    elif q[pos] > high:
        q[pos] = high
        q[vel] = 0.0


@jit(nopython=True)
def apply_limits(q, rail_min, rail_max, cart_min, cart_max, line_min, line_max):
    """
    Apply travel limits to the state in place.

    A clamped position also has its velocity zeroed, so the axis does not
    accumulate velocity against the limit.

    Args:
        q: State vector
        rail_min: Minimum rail offset
        rail_max: Maximum rail offset
        cart_min: Minimum cart offset
        cart_max: Maximum cart offset
        line_min: Minimum lift-line length
        line_max: Maximum lift-line length

    Returns:
        Constrained state vector
    """
    _clamp_axis(q, RAIL, RAIL_VEL, rail_min, rail_max)
    _clamp_axis(q, CART, CART_VEL, cart_min, cart_max)
    _clamp_axis(q, LINE, LINE_VEL, line_min, line_max)
    return q


@jit(nopython=True)
def dampen_velocities(q, aux, factor):
    """
    Scale every velocity-like entry of the state and the auxiliary state.
    """
    for i in (RAIL_VEL, CART_VEL, ALFA_VEL, BETA_VEL, LINE_VEL):
        q[i] *= factor
    aux[D_ALFA_VEL] *= factor
    aux[D_BETA_VEL] *= factor
