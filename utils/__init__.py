"""Utilities package - Coordinate transforms, region ids, and asset inspection."""

from .coordinates import (
    round_half_up,
    extent_size,
    pairs,
    normalized_to_display_pixel,
    ocr_pixel_to_normalized,
    ocr_pixel_to_display_pixel,
    ocr_box_to_normalized,
    ocr_box_to_display,
    normalized_box_to_display,
    bounding_box_from_flat,
)

from .region_id import (
    format_coordinate,
    encode,
    encode_points,
    decode,
)

__all__ = [
    # Coordinates
    'round_half_up',
    'extent_size',
    'pairs',
    'normalized_to_display_pixel',
    'ocr_pixel_to_normalized',
    'ocr_pixel_to_display_pixel',
    'ocr_box_to_normalized',
    'ocr_box_to_display',
    'normalized_box_to_display',
    'bounding_box_from_flat',

    # Region ids
    'format_coordinate',
    'encode',
    'encode_points',
    'decode',
]
