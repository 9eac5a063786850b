"""
Output state of the crane model.
"""
from dataclasses import dataclass, astuple

import numpy as np


@dataclass(frozen=True)
class ModelState:
    """
    One measured instant of the crane.

    Coordinate system: X is the forward movement of the rail, Y the left-right
    movement of the cart and Z the up-down movement of the payload.
    """
    alfa: float = 0.0  # lateral swing of the lift-line out of the rail/vertical plane
    beta: float = 0.0  # angle between the downward vertical and the line projected onto the xz plane

    rail_offset: float = 0.0  # distance of the rail with the cart from the center of the frame
    cart_offset: float = 0.0  # distance of the cart from the center of the rail
    lift_line: float = 0.0    # lift-line length

    payload_x: float = 0.0
    payload_y: float = 0.0
    payload_z: float = 0.0

    FIELDS = ('alfa', 'beta', 'rail_offset', 'cart_offset', 'lift_line',
              'payload_x', 'payload_y', 'payload_z')

    def as_array(self) -> np.ndarray:
        """
        Returns:
            Snapshot values as a vector, ordered as FIELDS
        """
        return np.array(astuple(self), dtype=np.float64)

    def __str__(self) -> str:
        return (
            f"alfa: {np.rad2deg(self.alfa):.3f} deg  beta: {np.rad2deg(self.beta):.3f} deg  "
            f"rail: {self.rail_offset:.4f} m  cart: {self.cart_offset:.4f} m  line: {self.lift_line:.4f} m  "
            f"payload: ({self.payload_x:.4f}, {self.payload_y:.4f}, {self.payload_z:.4f})"
        )
