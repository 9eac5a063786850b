"""
Minimal 3-component vector used for intermediate 3D computations.
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class Vec3d:
    """
    Component-wise arithmetic on three floats.

    Division by a zero component is left to the caller.
    """
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, v: 'Vec3d') -> 'Vec3d':
        return Vec3d(self.x + v.x, self.y + v.y, self.z + v.z)

    def __sub__(self, v: 'Vec3d') -> 'Vec3d':
        return Vec3d(self.x - v.x, self.y - v.y, self.z - v.z)

    def __mul__(self, v: 'Vec3d') -> 'Vec3d':
        return Vec3d(self.x * v.x, self.y * v.y, self.z * v.z)

    def __truediv__(self, v: 'Vec3d') -> 'Vec3d':
        return Vec3d(self.x / v.x, self.y / v.y, self.z / v.z)
