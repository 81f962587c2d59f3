"""
Constants shared by the region/label synchronization engine.
"""

# OCR service placeholder for unrecognized form blanks ("____")
OCR_PLACEHOLDER_PATTERN = r'^_+$'

# Fallback rank for regions missing from the order index (freshly drawn ones)
DEFAULT_ORDER_PAGE = 1
DEFAULT_ORDER_RANK = 0

CROSS_PAGE_TAG_MESSAGE = (
    "Sorry, we don't support cross-page regions with the same tag."
    ' You have regions with tag "{tag}" across {page_count} pages.'
)

OCR_ERROR_TITLE = 'Unable to load OCR results'
ASSET_LOAD_ERROR_TITLE = 'Unable to load page'
DEFAULT_ERROR_TITLE = 'Error'
