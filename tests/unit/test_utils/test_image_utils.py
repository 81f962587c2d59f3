"""
Unit tests for utils.image_utils module.
"""
import pytest
from PIL import Image
from utils.image_utils import get_pdf_page_size, get_tiff_frame_size, get_image_dimensions


class TestGetImageDimensions:
    """Tests for get_image_dimensions function."""

    def test_from_path(self, sample_image_path):
        """Test size read from an image file."""
        assert get_image_dimensions(sample_image_path) == (800, 600)

    def test_from_image(self):
        """Test size read from an open image."""
        img = Image.new('RGB', (120, 80))

        assert get_image_dimensions(img) == (120, 80)


class TestGetTiffFrameSize:
    """Tests for get_tiff_frame_size function."""

    def test_first_frame(self, sample_tiff_path):
        """Test size of the first TIFF frame."""
        assert get_tiff_frame_size(sample_tiff_path, 1) == (300, 400, 2)

    def test_second_frame(self, sample_tiff_path):
        """Test size of the second TIFF frame."""
        assert get_tiff_frame_size(sample_tiff_path, 2) == (500, 600, 2)

    def test_missing_frame(self, sample_tiff_path):
        """Test seeking past the last frame raises."""
        with pytest.raises(EOFError):
            get_tiff_frame_size(sample_tiff_path, 3)


class TestGetPdfPageSize:
    """Tests for get_pdf_page_size function."""

    def test_scaled_size(self, sample_pdf_path):
        """Test pixel size is the point size times the render scale."""
        assert get_pdf_page_size(sample_pdf_path, 2, scale=2.0) == (600, 800, 3)

    def test_unit_scale(self, sample_pdf_path):
        """Test scale 1 reports point size."""
        assert get_pdf_page_size(sample_pdf_path, 1, scale=1.0) == (300, 400, 3)
