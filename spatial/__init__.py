"""Spatial package - Reading order of OCR regions and label/region mapping."""

from .region_order import (
    RegionOrder,
    RegionOrderIndex,
    DEFAULT_REGION_ORDER,
    should_display_ocr_word,
    iter_display_words,
    word_region_key,
    compare_region_order,
)

from .label_mapping import (
    document_name_from_asset,
    word_for_box,
    label_data_to_regions,
    regions_to_label_data,
    label_field_names_changed,
)

__all__ = [
    # Reading order
    'RegionOrder',
    'RegionOrderIndex',
    'DEFAULT_REGION_ORDER',
    'should_display_ocr_word',
    'iter_display_words',
    'word_region_key',
    'compare_region_order',

    # Label mapping
    'document_name_from_asset',
    'word_for_box',
    'label_data_to_regions',
    'regions_to_label_data',
    'label_field_names_changed',
]
