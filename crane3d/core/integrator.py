from numba import jit


class Integrator:
    """
    Class that handles the integration methods for the crane simulation.
    Separates integration logic from the motion equations of the model.
    """

    @staticmethod
    def get_integrator(method: str):
        """
        Factory method to get the appropriate integration function.

        Args:
            method: Integration method name ('semi_implicit_euler' or 'explicit_euler')

        Returns:
            Integration step function (position, velocity, acceleration, h) -> (position, velocity)
        """
        if method.lower() == 'semi_implicit_euler':
            return semi_implicit_euler
        elif method.lower() == 'explicit_euler':
            return explicit_euler
        else:
            raise ValueError(f"Unknown integration method: {method}")


@jit(nopython=True)
def semi_implicit_euler(position, velocity, acceleration, h):
    """
    Symplectic Euler step: velocity is advanced first and the new velocity
    moves the position.

    Args:
        position: Current position
        velocity: Current velocity
        acceleration: Acceleration over the step
        h: Time step size

    Returns:
        Tuple (position, velocity) after the step
    """
    velocity = velocity + acceleration * h
    return position + velocity * h, velocity


@jit(nopython=True)
def explicit_euler(position, velocity, acceleration, h):
    """
    Forward Euler step: the position moves with the velocity at the start of the step.
    """
    return position + velocity * h, velocity + acceleration * h
