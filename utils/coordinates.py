"""
Coordinate transforms between the three spaces a region lives in.

- normalized: fractions of the image in [0, 1], top-left origin
  (stored in Region points and LabelValue bounding boxes)
- OCR pixel: pixels of the OCR page, whose width/height come from the OCR result
- display pixel: pixels of the rendered image, bottom-left origin
  (the vector-feature surface measures y from the bottom)

Extents are (min_x, min_y, max_x, max_y) tuples.
"""
import math
from typing import Dict, List, Sequence, Tuple

Extent = Tuple[float, float, float, float]
Coordinate = Tuple[float, float]
PixelCoordinate = Tuple[int, int]


def round_half_up(value: float) -> int:
    """Round to the nearest integer pixel, halves away from zero for positives."""
    return int(math.floor(value + 0.5))


def extent_size(extent: Extent) -> Tuple[float, float]:
    """Return (width, height) of an extent."""
    return extent[2] - extent[0], extent[3] - extent[1]


def pairs(flat: Sequence[float]) -> List[Coordinate]:
    """
    Group a flat [x0, y0, x1, y1, ...] list into (x, y) pairs.

    A trailing unpaired value is dropped; callers validate even length.
    """
    return [(flat[i], flat[i + 1]) for i in range(0, len(flat) - 1, 2)]


def normalized_to_display_pixel(point: Coordinate, image_extent: Extent) -> PixelCoordinate:
    image_width, image_height = extent_size(image_extent)
    x, y = point
    return round_half_up(x * image_width), round_half_up((1 - y) * image_height)


def ocr_pixel_to_normalized(point: Coordinate, ocr_extent: Extent) -> Coordinate:
    ocr_width, ocr_height = extent_size(ocr_extent)
    x, y = point
    return x / ocr_width, y / ocr_height


def ocr_pixel_to_display_pixel(
    point: Coordinate,
    ocr_extent: Extent,
    image_extent: Extent
) -> PixelCoordinate:
    return normalized_to_display_pixel(ocr_pixel_to_normalized(point, ocr_extent), image_extent)


def ocr_box_to_normalized(box: Sequence[float], ocr_extent: Extent) -> List[float]:
    """Convert a flat OCR-space box into a flat normalized box."""
    flat = []
    for point in pairs(box):
        flat.extend(ocr_pixel_to_normalized(point, ocr_extent))
    return flat


def ocr_box_to_display(
    box: Sequence[float],
    ocr_extent: Extent,
    image_extent: Extent
) -> List[PixelCoordinate]:
    return [ocr_pixel_to_display_pixel(point, ocr_extent, image_extent) for point in pairs(box)]


def normalized_box_to_display(box: Sequence[float], image_extent: Extent) -> List[PixelCoordinate]:
    return [normalized_to_display_pixel(point, image_extent) for point in pairs(box)]


def bounding_box_from_flat(flat: Sequence[float]) -> Dict[str, float]:
    """
    Axis-aligned envelope of a flat polygon.

    Returns:
        Dict with left, top, width, height in the polygon's own space
    """
    x_values = flat[0::2]
    y_values = flat[1::2]
    left = min(x_values)
    top = min(y_values)
    return {
        'left': left,
        'top': top,
        'width': max(x_values) - left,
        'height': max(y_values) - top
    }
