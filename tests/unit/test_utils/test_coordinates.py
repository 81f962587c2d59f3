"""
Unit tests for utils.coordinates module.
"""
import pytest
from utils.coordinates import (
    round_half_up,
    extent_size,
    pairs,
    normalized_to_display_pixel,
    ocr_pixel_to_normalized,
    ocr_pixel_to_display_pixel,
    ocr_box_to_normalized,
    ocr_box_to_display,
    normalized_box_to_display,
    bounding_box_from_flat
)


class TestRounding:
    """Tests for round_half_up function."""

    def test_halves_round_up(self):
        """Test .5 rounds up like the map widget does."""
        assert round_half_up(0.5) == 1
        assert round_half_up(2.5) == 3

    def test_nearest_integer(self):
        """Test ordinary rounding."""
        assert round_half_up(1.49) == 1
        assert round_half_up(1.51) == 2


class TestPairs:
    """Tests for pairs function."""

    def test_even_length(self):
        """Test flat list grouped into vertices."""
        assert pairs([1, 2, 3, 4]) == [(1, 2), (3, 4)]

    def test_odd_length_truncates_last_vertex(self):
        """Test an unpaired trailing value is dropped."""
        assert pairs([1, 2, 3]) == [(1, 2)]

    def test_empty(self):
        """Test empty list has no vertices."""
        assert pairs([]) == []


class TestPointTransforms:
    """Tests for single-point transforms."""

    def test_extent_size(self):
        """Test width and height of an extent."""
        assert extent_size((0, 0, 1000, 2000)) == (1000, 2000)
        assert extent_size((10, 20, 110, 220)) == (100, 200)

    def test_normalized_to_display_flips_y(self):
        """Test y is measured from the bottom on the display side."""
        assert normalized_to_display_pixel((0.1, 0.1), (0, 0, 1000, 2000)) == (100, 1800)
        assert normalized_to_display_pixel((0, 0), (0, 0, 1000, 2000)) == (0, 2000)
        assert normalized_to_display_pixel((1, 1), (0, 0, 1000, 2000)) == (1000, 0)

    def test_ocr_pixel_to_normalized(self):
        """Test OCR pixels divided by the OCR extent."""
        x, y = ocr_pixel_to_normalized((50, 40), (0, 0, 100, 200))

        assert x == pytest.approx(0.5)
        assert y == pytest.approx(0.2)

    def test_ocr_pixel_to_display(self):
        """Test OCR pixel goes through normalized space then the y-flip."""
        assert ocr_pixel_to_display_pixel((10, 20), (0, 0, 100, 200), (0, 0, 1000, 2000)) == (100, 1800)

    @pytest.mark.parametrize("point", [(0, 0), (100, 200), (37, 151), (99.5, 0.5)])
    def test_normalized_within_unit_square(self, point):
        """Test points inside the OCR extent normalize into [0, 1]."""
        x, y = ocr_pixel_to_normalized(point, (0, 0, 100, 200))

        assert 0 <= x <= 1
        assert 0 <= y <= 1


class TestBoxTransforms:
    """Tests for flat-box transforms."""

    def test_ocr_word_box_to_display(self):
        """Test the reference word box example."""
        box = [10, 20, 50, 20, 50, 40, 10, 40]

        display = ocr_box_to_display(box, (0, 0, 100, 200), (0, 0, 1000, 2000))

        assert display == [(100, 1800), (500, 1800), (500, 1600), (100, 1600)]

    def test_ocr_box_to_normalized(self):
        """Test each OCR box coordinate divided by its axis extent."""
        box = [10, 20, 50, 20, 50, 40, 10, 40]

        normalized = ocr_box_to_normalized(box, (0, 0, 100, 200))

        assert normalized == pytest.approx([0.1, 0.1, 0.5, 0.1, 0.5, 0.2, 0.1, 0.2])

    def test_normalized_box_matches_ocr_path(self):
        """Test both display paths agree for the same geometry."""
        box = [10, 20, 50, 20, 50, 40, 10, 40]
        image_extent = (0, 0, 1000, 2000)

        via_normalized = normalized_box_to_display(ocr_box_to_normalized(box, (0, 0, 100, 200)), image_extent)

        assert via_normalized == ocr_box_to_display(box, (0, 0, 100, 200), image_extent)

    def test_bounding_box_from_flat(self):
        """Test envelope of a quadrilateral."""
        envelope = bounding_box_from_flat([0.1, 0.1, 0.5, 0.1, 0.5, 0.2, 0.1, 0.2])

        assert envelope['left'] == pytest.approx(0.1)
        assert envelope['top'] == pytest.approx(0.1)
        assert envelope['width'] == pytest.approx(0.4)
        assert envelope['height'] == pytest.approx(0.1)
