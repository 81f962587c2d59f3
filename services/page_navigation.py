"""
Page Navigation - Coordinates page switches of multi-page assets.

Leaving a page discards unfinished (untagged) selected regions, renders the
target page through the asset loader, rebuilds the OCR overlay from the
already fetched whole-document OCR result, and reloads tagged regions from
the label data.
"""
import logging
from enum import Enum
from typing import Optional

from config.settings import settings
from core.exceptions import PageOutOfRangeError
from core.models import Asset, AssetKind
from core.schemas import OcrResult
from spatial.label_mapping import label_data_to_regions
from .asset_loader import AssetLoader
from .feature_surface import FeatureSurface, ocr_page_features
from .region_store import RegionStore

logger = logging.getLogger(__name__)


class PageBackend(Enum):
    """Multi-page backend of the active asset."""
    NONE = "none"
    PAGED_IMAGES = "paged_images"
    PAGED_DOCUMENT = "paged_document"


def backend_for_asset(asset: Optional[Asset]) -> PageBackend:
    if asset is None:
        return PageBackend.NONE
    if asset.kind == AssetKind.PDF:
        return PageBackend.PAGED_DOCUMENT
    if asset.kind == AssetKind.TIFF:
        return PageBackend.PAGED_IMAGES
    return PageBackend.NONE


class PageNavigator:
    """
    Page state machine of the open asset.

    `generation` changes on every asset switch and `page_request` on every
    page switch. A page load whose generation or request no longer matches
    when it completes is discarded.
    """

    def __init__(
        self,
        store: RegionStore,
        surface: FeatureSurface,
        loader: AssetLoader,
        out_of_range_policy: Optional[str] = None
    ):
        self.store = store
        self.surface = surface
        self.loader = loader
        self.out_of_range_policy = out_of_range_policy or settings.out_of_range_page_policy

        self.asset: Optional[Asset] = None
        self.ocr_result: Optional[OcrResult] = None
        self.current_page = 1
        self.num_pages = 1
        self.backend = PageBackend.NONE
        self.generation = 0
        self.page_request = 0

    def reset(self, asset: Optional[Asset]) -> int:
        """Start a new asset at page 1 and return its generation."""
        self.generation += 1
        self.asset = asset
        self.ocr_result = None
        self.current_page = 1
        self.num_pages = 1
        self.backend = backend_for_asset(asset)
        self.store.current_page = 1
        return self.generation

    def is_current(self, generation: int) -> bool:
        return generation == self.generation

    def is_latest_request(self, generation: int, page_request: int) -> bool:
        return self.is_current(generation) and page_request == self.page_request

    @property
    def is_multi_page(self) -> bool:
        return self.backend != PageBackend.NONE and self.num_pages > 1

    @property
    def can_go_previous(self) -> bool:
        return self.backend != PageBackend.NONE and self.current_page > 1

    @property
    def can_go_next(self) -> bool:
        return self.backend != PageBackend.NONE and self.current_page < self.num_pages

    def _resolve_target(self, target: int) -> Optional[int]:
        if 1 <= target <= self.num_pages:
            return target
        if self.out_of_range_policy == "clamp":
            return min(max(target, 1), self.num_pages)
        if self.out_of_range_policy == "raise":
            raise PageOutOfRangeError(target, self.num_pages)
        logger.info("Ignoring navigation to page %d of %d", target, self.num_pages)
        return None

    async def go_to_page(self, target: int) -> bool:
        """
        Switch to a 1-based page.

        Returns:
            True when the page was switched, False when the target was ignored,
            the asset changed, or another page was requested while loading

        Raises:
            PageOutOfRangeError: Only under the 'raise' policy
            AssetLoadError: The loader failed; the current page is kept but the
                untagged selection is already discarded
        """
        target = self._resolve_target(target)
        if target is None:
            return False

        generation = self.generation
        self.page_request += 1
        page_request = self.page_request

        # Untagged regions being drawn on the page we leave are discarded
        selected = self.store.clear_selection()
        untagged = [region for region in selected if not region.is_tagged]
        self.store.delete_regions(untagged)

        page = await self.loader.load_page(self.asset, target)
        if not self.is_latest_request(generation, page_request):
            logger.info("Discarding superseded load of page %d", target)
            return False

        self.current_page = target
        self.num_pages = page.num_pages
        self.store.current_page = target
        self.surface.set_image_size(page.pixel_width, page.pixel_height)

        self.surface.remove_all_features()
        self.draw_ocr()
        self.load_label_data()
        return True

    async def next_page(self) -> bool:
        if not self.can_go_next:
            return False
        return await self.go_to_page(self.current_page + 1)

    async def previous_page(self) -> bool:
        if not self.can_go_previous:
            return False
        return await self.go_to_page(self.current_page - 1)

    def draw_ocr(self) -> None:
        """Draw OCR candidates of the current page."""
        if self.ocr_result is None:
            return
        features = ocr_page_features(self.ocr_result.page(self.current_page), self.surface.get_image_extent())
        if features:
            self.surface.add_features(features)

    def load_label_data(self) -> None:
        """Bring back tagged regions recorded in the label data."""
        regions = label_data_to_regions(self.store.label_data)
        if regions:
            self.store.add_regions(regions)
