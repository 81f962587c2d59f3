"""
Region Store - Owns the region list and selection of the open document.

Every committed mutation recomputes the label data and fires
`on_asset_metadata_changed`; every selection change fires
`on_selected_regions_changed`.
"""
import logging
from typing import Callable, Dict, Iterable, List, Optional, Set, Union

from core.exceptions import CrossPageTagError
from core.models import Asset, AssetMetadata, Region, RegionKey
from core.schemas import Label, LabelData
from spatial.label_mapping import regions_to_label_data
from spatial.region_order import RegionOrderIndex
from .feature_surface import FeatureState, FeatureSurface, label_region_keys, region_to_feature

logger = logging.getLogger(__name__)

RegionRef = Union[str, RegionKey, Region]


def to_region_key(ref: RegionRef) -> RegionKey:
    """Accept a region, its key, or its id string."""
    if isinstance(ref, Region):
        return ref.key
    if isinstance(ref, RegionKey):
        return ref
    return RegionKey.from_id(ref)


class RegionStore:
    """Region list, selection set and the single-tag / cross-page rules."""

    def __init__(
        self,
        surface: Optional[FeatureSurface] = None,
        order_index: Optional[RegionOrderIndex] = None,
        on_asset_metadata_changed: Optional[Callable[[AssetMetadata], None]] = None,
        on_selected_regions_changed: Optional[Callable[[List[Region]], None]] = None
    ):
        """
        Initialize region store.

        Args:
            surface: Vector-feature surface that mirrors the current page (optional)
            order_index: Reading order used when merging tagged regions
            on_asset_metadata_changed: Called with the new metadata after each mutation
            on_selected_regions_changed: Called with the selected regions after selection changes
        """
        self.surface = surface
        self.order_index = order_index or RegionOrderIndex()
        self.on_asset_metadata_changed = on_asset_metadata_changed
        self.on_selected_regions_changed = on_selected_regions_changed

        self.asset: Optional[Asset] = None
        self.regions: List[Region] = []
        self.label_data: Optional[LabelData] = None
        self.selected: Set[RegionKey] = set()
        self.current_page = 1

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    @property
    def asset_name(self) -> str:
        return self.asset.name if self.asset else ""

    def find(self, ref: RegionRef) -> Optional[Region]:
        key = to_region_key(ref)
        for region in self.regions:
            if region.key == key:
                return region
        return None

    def is_selected(self, ref: RegionRef) -> bool:
        return to_region_key(ref) in self.selected

    def selected_regions(self) -> List[Region]:
        """Selected regions in region-list order."""
        return [region for region in self.regions if region.key in self.selected]

    def feature_state(self, ref: RegionRef) -> FeatureState:
        key = to_region_key(ref)
        if key in self.selected:
            return FeatureState.SELECTED
        region = self.find(key)
        if region is not None and region.is_tagged:
            return FeatureState.TAGGED
        return FeatureState.CANDIDATE

    # ------------------------------------------------------------------
    # Persistence hook
    # ------------------------------------------------------------------

    def reset(
        self,
        asset: Optional[Asset],
        label_data: Optional[LabelData] = None,
        regions: Optional[List[Region]] = None
    ) -> None:
        """Switch to another asset; no hooks fire."""
        self.asset = asset
        self.regions = list(regions or [])
        self.label_data = label_data
        self.selected = set()
        self.current_page = 1
        self.order_index = RegionOrderIndex()

    def update_asset_regions(self, regions: Iterable[Region]) -> AssetMetadata:
        """Commit a new region list and report the resulting metadata."""
        self.regions = list(regions)
        self.label_data = regions_to_label_data(self.regions, self.asset_name)
        metadata = AssetMetadata(asset=self.asset, regions=list(self.regions), label_data=self.label_data)
        if self.on_asset_metadata_changed:
            self.on_asset_metadata_changed(metadata)
        return metadata

    def _notify_selection(self) -> None:
        if self.on_selected_regions_changed:
            self.on_selected_regions_changed(self.selected_regions())

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add_regions(self, regions: List[Region]) -> None:
        """Add regions, replacing any with the same key, and draw those on the current page."""
        keys = {region.key for region in regions}
        kept = [region for region in self.regions if region.key not in keys]
        self.update_asset_regions(kept + list(regions))
        self.show_regions(regions)

    def show_regions(self, regions: Iterable[Region]) -> None:
        """Add features for regions of the current page that the surface lacks."""
        if self.surface is None:
            return
        existing = {feature.id for feature in self.surface.get_all_features()}
        image_extent = self.surface.get_image_extent()
        features = [
            region_to_feature(region, image_extent)
            for region in regions
            if region.page_number == self.current_page and region.id not in existing
        ]
        if features:
            self.surface.add_features(features)

    def update_regions(self, updates: List[Region]) -> None:
        """Merge updated regions into the list and re-sort by reading order."""
        positions: Dict[RegionKey, int] = {region.key: i for i, region in enumerate(self.regions)}
        merged = list(self.regions)
        for update in updates:
            position = positions.get(update.key)
            if position is None:
                positions[update.key] = len(merged)
                merged.append(update)
            else:
                merged[position] = update
        self.update_asset_regions(self.order_index.sort_regions(merged))

    def replace_regions(self, regions: List[Region]) -> None:
        """
        Replace the whole region list, as when label data changes outside the editor.

        The selection is cleared and features of regions that disappear are
        removed before the new current-page regions are drawn.
        """
        keys = {region.key for region in regions}
        dropped = {region.key for region in self.regions if region.key not in keys}
        self.clear_selection()
        self.update_asset_regions(regions)
        self._remove_features(dropped)
        self.show_regions(regions)

    def delete_regions(self, regions: Iterable[RegionRef]) -> None:
        """Remove regions from the selection, the list, and the surface."""
        keys = {to_region_key(ref) for ref in regions}
        if not keys:
            return
        self.selected -= keys
        self.update_asset_regions([region for region in self.regions if region.key not in keys])
        self._remove_features(keys)

    def delete_selected(self) -> None:
        self.delete_regions(self.selected_regions())
        self._notify_selection()

    def _remove_features(self, keys: Set[RegionKey]) -> None:
        # OCR proposals stay so the word can be selected again
        if self.surface is None:
            return
        ids = {key.id for key in keys}
        for feature in self.surface.get_all_features():
            if not feature.is_ocr_proposal and feature.id in ids:
                self.surface.remove_feature(feature)

    # ------------------------------------------------------------------
    # Tagging
    # ------------------------------------------------------------------

    def check_cross_page(self, tag: str, regions: List[Region]) -> None:
        """
        Raise if regions tagged `tag` would span more than one page.

        Raises:
            CrossPageTagError: With the tag and the number of pages involved
        """
        same_tag = [region for region in self.regions if region.tag == tag]
        pages = {region.page_number for region in same_tag + list(regions)}
        if len(pages) > 1:
            raise CrossPageTagError(tag, len(pages))

    def apply_tag(self, tag: str, selected_regions: Optional[List[Region]] = None) -> bool:
        """
        Tag regions, replacing any previous tag.

        Args:
            tag: Field name
            selected_regions: Regions to tag (default: current selection)

        Returns:
            False when there was nothing to do, True when tags were applied

        Raises:
            CrossPageTagError: Nothing is changed
        """
        regions = self.selected_regions() if selected_regions is None else list(selected_regions)
        if not tag or not regions:
            return False

        try:
            self.check_cross_page(tag, regions)
        except CrossPageTagError as e:
            logger.info("Rejected tag %r: %s", tag, e)
            raise

        for region in regions:
            region.tag = tag
        self.update_regions(regions)

        self.selected = set()
        self._notify_selection()
        return True

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def toggle_select(self, ref: RegionRef, text: str = "") -> Optional[Region]:
        """
        Select an unselected region or deselect a selected one.

        Returns:
            The selected region, or None after a deselect
        """
        key = to_region_key(ref)
        if key in self.selected:
            self.deselect(key)
            return None
        return self.select(key, text)

    def select(self, ref: RegionRef, text: str = "") -> Region:
        """Select a region, promoting an OCR candidate into the list on first touch."""
        key = to_region_key(ref)
        region = self.find(key)
        if key in self.selected and region is not None:
            return region

        if region is None:
            region = ref if isinstance(ref, Region) else Region(key=key, value=text)
            self.add_regions([region])

        self.selected.add(key)
        self._notify_selection()
        return region

    def deselect(self, ref: RegionRef) -> None:
        """Deselect a region; untagged regions are deleted outright."""
        key = to_region_key(ref)
        if key not in self.selected:
            return
        region = self.find(key)
        if region is not None and not region.is_tagged:
            self.delete_regions([key])
        self.selected.discard(key)
        self._notify_selection()

    def clear_selection(self) -> List[Region]:
        """Empty the selection and return what was selected."""
        selected = self.selected_regions()
        if self.selected:
            self.selected = set()
            self._notify_selection()
        return selected

    # ------------------------------------------------------------------
    # Highlighting
    # ------------------------------------------------------------------

    def highlight_label(self, label: Optional[Label]) -> None:
        """Mark the features of a hovered label; None clears all marks."""
        if self.surface is None:
            return
        keys = set(label_region_keys(label)) if label else set()
        for feature in self.surface.get_all_features():
            feature.properties['highlighted'] = RegionKey.from_id(feature.id) in keys
