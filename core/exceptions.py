"""
Domain errors raised by the region/label synchronization engine.

None of them is fatal: each is scoped to the current document or operation.
"""
from .constants import ASSET_LOAD_ERROR_TITLE, CROSS_PAGE_TAG_MESSAGE, OCR_ERROR_TITLE


class RegionSyncError(Exception):
    """Base class for all engine errors."""


class CrossPageTagError(RegionSyncError):
    """A tag would end up labeling regions on more than one page."""

    def __init__(self, tag: str, page_count: int):
        self.tag = tag
        self.page_count = page_count
        super().__init__(CROSS_PAGE_TAG_MESSAGE.format(tag=tag, page_count=page_count))


class OcrFetchError(RegionSyncError):
    """Retrieving the OCR result of an asset failed."""

    def __init__(self, message: str, title: str = OCR_ERROR_TITLE):
        self.title = title
        self.message = message
        super().__init__(message)


class AssetLoadError(RegionSyncError):
    """Rendering or inspecting a page of an asset failed."""

    def __init__(self, message: str, title: str = ASSET_LOAD_ERROR_TITLE):
        self.title = title
        self.message = message
        super().__init__(message)


class PageOutOfRangeError(RegionSyncError):
    """Navigation target outside [1, num_pages] (only under the 'raise' policy)."""

    def __init__(self, target: int, num_pages: int):
        self.target = target
        self.num_pages = num_pages
        super().__init__(f"Page {target} is outside of 1..{num_pages}")
