"""
Unit tests for the Size and Box value types.
"""

import pytest

from cashu_notes.core.models.geometry import Box, Size


class TestSize:
    def test_when_dimension_not_positive_then_raises(self):
        with pytest.raises(ValueError):
            Size(0, 10)
        with pytest.raises(ValueError):
            Size(10, -1)

    def test_when_swapped_then_exchanges_sides(self):
        assert Size(50, 90).swapped() == Size(90, 50)

    def test_when_taller_than_wide_then_is_portrait(self):
        assert Size(50, 90).is_portrait
        assert not Size(90, 50).is_portrait
        assert not Size(60, 60).is_portrait

    def test_when_dict_round_trip_then_equal(self):
        size = Size(80.0, 140.0)
        assert Size.from_dict(size.to_dict()) == size

    def test_area(self):
        assert Size(4, 5).area == 20


class TestBox:
    def test_edges(self):
        box = Box(10, 20, 30, 40)

        assert box.right == 40
        assert box.bottom == 60
