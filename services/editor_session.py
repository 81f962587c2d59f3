"""
Editor Session - Wires the region store, page navigation, asset loader and
OCR provider together for one open document at a time.

All entry points run on one event loop. Each async call compares the
navigator generation captured before awaiting with the current one and
drops its result when another asset was opened in the meantime.
"""
import logging
from typing import Callable, List, Optional

from core.constants import DEFAULT_ERROR_TITLE
from core.exceptions import AssetLoadError, CrossPageTagError, OcrFetchError
from core.models import AssetMetadata, ErrorNotice, OcrStatus, Region
from core.schemas import Label, LabelData
from spatial.label_mapping import label_data_to_regions, label_field_names_changed
from spatial.region_order import RegionOrderIndex
from .asset_loader import AssetLoader
from .feature_surface import FeatureState, FeatureSurface
from .ocr_provider import OcrProvider
from .page_navigation import PageNavigator
from .region_store import RegionRef, RegionStore

logger = logging.getLogger(__name__)


class EditorSession:
    """Region/label synchronization for the document being edited."""

    def __init__(
        self,
        loader: AssetLoader,
        ocr_provider: OcrProvider,
        surface: FeatureSurface,
        on_asset_metadata_changed: Optional[Callable[[AssetMetadata], None]] = None,
        on_selected_regions_changed: Optional[Callable[[List[Region]], None]] = None,
        on_running_ocr_status_changed: Optional[Callable[[bool], None]] = None,
        out_of_range_policy: Optional[str] = None
    ):
        self.loader = loader
        self.ocr_provider = ocr_provider
        self.surface = surface
        self.on_running_ocr_status_changed = on_running_ocr_status_changed

        self.store = RegionStore(
            surface=surface,
            on_asset_metadata_changed=on_asset_metadata_changed,
            on_selected_regions_changed=on_selected_regions_changed,
        )
        self.navigator = PageNavigator(self.store, surface, loader, out_of_range_policy)

        self.ocr_status = OcrStatus.DONE
        self.error: Optional[ErrorNotice] = None

    # ------------------------------------------------------------------
    # Asset lifecycle
    # ------------------------------------------------------------------

    async def open_asset(self, metadata: AssetMetadata) -> bool:
        """
        Switch to another asset: load page 1, its OCR, and its labeled regions.

        Returns:
            False if the first page failed to load, or yet another asset was
            opened before this one finished
        """
        asset = metadata.asset
        logger.info("Opening asset %s", asset.name if asset else None)

        generation = self.navigator.reset(asset)
        self.store.reset(asset, metadata.label_data, metadata.regions)
        self.surface.remove_all_features()

        try:
            page = await self.loader.load_page(asset, 1)
        except AssetLoadError as e:
            logger.warning("Opening %s failed: %s", asset.name, e.message)
            if self.navigator.is_current(generation):
                self.error = ErrorNotice(title=e.title, message=e.message)
            return False
        if not self.navigator.is_current(generation):
            logger.info("Discarding page load of a previous asset")
            return False
        self.navigator.num_pages = page.num_pages
        self.surface.set_image_size(page.pixel_width, page.pixel_height)

        if not await self.load_ocr(generation):
            return False
        self.navigator.load_label_data()
        return True

    async def load_ocr(self, generation: int) -> bool:
        """
        Fetch OCR, build the order index and draw the current page's candidates.

        Returns:
            False if the asset changed while OCR was being fetched
        """
        asset = self.navigator.asset
        if asset is None:
            return True
        if asset.is_running_ocr:
            # Loaded again once the running OCR job finishes and the asset is reopened
            logger.info("OCR is running for %s, skipping load", asset.name)
            return True

        try:
            ocr_result = await self.ocr_provider.get_recognized_text(
                asset.path, asset.name, self.set_ocr_status
            )
        except OcrFetchError as e:
            logger.warning("OCR fetch failed for %s: %s", asset.name, e.message)
            if self.navigator.is_current(generation):
                self.error = ErrorNotice(title=e.title, message=e.message)
            return self.navigator.is_current(generation)

        if not self.navigator.is_current(generation):
            logger.info("Discarding OCR of a previous asset: %s", asset.name)
            return False

        self.navigator.ocr_result = ocr_result
        self.store.order_index = RegionOrderIndex.build(ocr_result)
        self.navigator.draw_ocr()
        return True

    def set_ocr_status(self, status: OcrStatus) -> None:
        changed = status != self.ocr_status
        self.ocr_status = status
        if changed and self.on_running_ocr_status_changed:
            self.on_running_ocr_status_changed(status == OcrStatus.RUNNING)

    def on_label_data_changed(self, label_data: Optional[LabelData]) -> bool:
        """
        React to label data edited outside the canvas.

        Returns:
            True when the field set changed and regions were rebuilt
        """
        if not label_field_names_changed(label_data, self.store.label_data):
            return False
        self.store.replace_regions(label_data_to_regions(label_data))
        return True

    # ------------------------------------------------------------------
    # User actions
    # ------------------------------------------------------------------

    def apply_tag(self, tag: str) -> bool:
        """Tag the selection; a cross-page conflict becomes the session error."""
        try:
            return self.store.apply_tag(tag)
        except CrossPageTagError as e:
            self.error = ErrorNotice(title=DEFAULT_ERROR_TITLE, message=str(e))
            return False

    def toggle_select(self, region_id: RegionRef, text: str = "") -> Optional[Region]:
        return self.store.toggle_select(region_id, text)

    def delete_selected(self) -> None:
        self.store.delete_selected()

    def hover_label(self, label: Optional[Label]) -> None:
        self.store.highlight_label(label)

    def feature_state(self, region_id: RegionRef) -> FeatureState:
        return self.store.feature_state(region_id)

    async def go_to_page(self, target: int) -> bool:
        return await self._navigate(self.navigator.go_to_page(target))

    async def next_page(self) -> bool:
        return await self._navigate(self.navigator.next_page())

    async def previous_page(self) -> bool:
        return await self._navigate(self.navigator.previous_page())

    async def _navigate(self, switch) -> bool:
        # A page that fails to load leaves the current page in place
        generation = self.navigator.generation
        try:
            return await switch
        except AssetLoadError as e:
            logger.warning("Page switch failed: %s", e.message)
            if self.navigator.is_current(generation):
                self.error = ErrorNotice(title=e.title, message=e.message)
            return False

    def dismiss_error(self) -> None:
        self.error = None

    @property
    def current_page(self) -> int:
        return self.navigator.current_page

    @property
    def regions(self) -> List[Region]:
        return self.store.regions
