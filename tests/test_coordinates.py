"""Unit tests for coordinate normalization."""

# pylint: disable=missing-class-docstring,missing-function-docstring

import pytest

from immutable_table.coordinates import normalize_coordinates, normalize_index

# ===========================================================================
# normalize_index tests
# ===========================================================================


class TestNormalizeIndex:

    def test_in_range_unchanged(self):
        assert normalize_index(0, 3, "x") == 0
        assert normalize_index(2, 3, "x") == 2

    def test_negative_wraps_from_end(self):
        assert normalize_index(-1, 3, "x") == 2
        assert normalize_index(-3, 3, "y") == 0

    def test_too_large(self):
        with pytest.raises(IndexError, match="width 3"):
            normalize_index(3, 3, "x")

    def test_too_negative(self):
        with pytest.raises(IndexError, match="less than 0"):
            normalize_index(-4, 3, "y")

    def test_zero_size_rejects_everything(self):
        with pytest.raises(IndexError):
            normalize_index(0, 0, "x")
        with pytest.raises(IndexError):
            normalize_index(-1, 0, "x")


# ===========================================================================
# normalize_coordinates tests
# ===========================================================================


class TestNormalizeCoordinates:

    def test_pair(self):
        assert normalize_coordinates(-1, -2, 4, 5) == (3, 3)

    def test_message_names_axis(self):
        with pytest.raises(IndexError, match="^y index 5"):
            normalize_coordinates(0, 5, 4, 5)

    def test_x_checked_before_y(self):
        with pytest.raises(IndexError, match="^x index"):
            normalize_coordinates(9, 9, 4, 5)

    def test_upper_bounds_checked_before_negatives(self):
        with pytest.raises(IndexError, match="^y index 10 out of range"):
            normalize_coordinates(-10, 10, 3, 3)

    def test_negative_x_reported_before_negative_y(self):
        with pytest.raises(IndexError, match="^x index -10 less than 0"):
            normalize_coordinates(-10, -10, 3, 3)
