"""
Unit tests for the Vec3d helper.
"""
from crane3d.core.vector import Vec3d


class TestVec3d:
    """Component-wise arithmetic"""

    def test_default_is_zero(self) -> None:
        assert Vec3d() == Vec3d(0.0, 0.0, 0.0)

    def test_add_and_subtract(self) -> None:
        a = Vec3d(1.0, 2.0, 3.0)
        b = Vec3d(0.5, -1.0, 4.0)

        assert a + b == Vec3d(1.5, 1.0, 7.0)
        assert a - b == Vec3d(0.5, 3.0, -1.0)

    def test_multiply_and_divide_are_component_wise(self) -> None:
        a = Vec3d(2.0, 3.0, -4.0)
        b = Vec3d(0.5, 2.0, 2.0)

        assert a * b == Vec3d(1.0, 6.0, -8.0)
        assert a / b == Vec3d(4.0, 1.5, -2.0)

    def test_operations_return_new_values(self) -> None:
        a = Vec3d(1.0, 1.0, 1.0)
        _ = a + Vec3d(1.0, 1.0, 1.0)

        assert a == Vec3d(1.0, 1.0, 1.0)
