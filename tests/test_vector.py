import pytest

from spring_lab.core.vector import Vector2D


class TestVector2DArithmetic:
    """Vector2D behaves as an immutable value."""

    def test_components_are_floats(self):
        """Integer components are coerced to float."""
        v = Vector2D(1, 2)
        assert isinstance(v.x, float) and isinstance(v.y, float)

    def test_add_sub_mul(self):
        """Arithmetic returns new vectors."""
        a = Vector2D(1.0, 2.0)
        b = Vector2D(0.5, -1.0)
        assert a + b == Vector2D(1.5, 1.0)
        assert a - b == Vector2D(0.5, 3.0)
        assert a * 2 == Vector2D(2.0, 4.0)
        assert 2 * a == Vector2D(2.0, 4.0)
        assert -a == Vector2D(-1.0, -2.0)
        assert a == Vector2D(1.0, 2.0)

    def test_hash_matches_equality(self):
        """Equal vectors hash equally."""
        assert hash(Vector2D(0.3, 0.5)) == hash(Vector2D(0.3, 0.5))

    def test_with_components(self):
        """with_x / with_y replace one component only."""
        v = Vector2D(0.3, 0.5)
        assert v.with_x(0.9) == Vector2D(0.9, 0.5)
        assert v.with_y(0.1) == Vector2D(0.3, 0.1)
        assert v == Vector2D(0.3, 0.5)


class TestVector2DBlend:
    """Linear interpolation used by the return glide."""

    @pytest.mark.parametrize("ratio, expected", [
        (0.0, Vector2D(0.0, 1.0)),
        (0.5, Vector2D(0.5, 1.0)),
        (1.0, Vector2D(1.0, 1.0)),
    ])
    def test_blend(self, ratio, expected):
        """Blend hits both endpoints and the midpoint."""
        assert Vector2D(0.0, 1.0).blend(Vector2D(1.0, 1.0), ratio).is_close(expected)
