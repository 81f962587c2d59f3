"""
Vector-feature surface interface.

The map widget draws features; the engine only hands it display-pixel
geometry plus a property bag keyed by region id.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Protocol

from config.settings import settings
from core.models import Region, RegionKey
from core.schemas import Label, OcrPage, OcrWord
from spatial.region_order import iter_display_words, ocr_page_extent, word_region_key
from utils.coordinates import Extent, PixelCoordinate, normalized_box_to_display, ocr_box_to_display
from utils.region_id import decode


class FeatureState(Enum):
    """How the rendering layer should present a feature."""
    SELECTED = "selected"
    TAGGED = "tagged"
    CANDIDATE = "candidate"


@dataclass
class Feature:
    """A polygon on the surface, in display pixels."""
    id: str
    coordinates: List[PixelCoordinate]
    properties: Dict[str, Any] = field(default_factory=dict)

    def get(self, name: str, default: Any = None) -> Any:
        return self.properties.get(name, default)

    @property
    def is_ocr_proposal(self) -> bool:
        return bool(self.properties.get('isOcrProposal'))


class FeatureSurface(Protocol):
    """Operations the engine needs from the map widget."""

    def add_features(self, features: List[Feature]) -> None: ...

    def remove_feature(self, feature: Feature) -> None: ...

    def remove_all_features(self) -> None: ...

    def get_all_features(self) -> List[Feature]: ...

    def get_image_extent(self) -> Extent: ...

    def set_image_size(self, width: int, height: int) -> None: ...


class InMemoryFeatureSurface:
    """Headless surface keeping features in insertion order."""

    def __init__(self, width: Optional[int] = None, height: Optional[int] = None):
        self.width = width or settings.default_image_width
        self.height = height or settings.default_image_height
        self._features: Dict[str, Feature] = {}

    def add_features(self, features: List[Feature]) -> None:
        for feature in features:
            self._features[feature.id] = feature

    def remove_feature(self, feature: Feature) -> None:
        self._features.pop(feature.id, None)

    def remove_all_features(self) -> None:
        self._features.clear()

    def get_all_features(self) -> List[Feature]:
        return list(self._features.values())

    def get_feature(self, feature_id: str) -> Optional[Feature]:
        return self._features.get(feature_id)

    def get_image_extent(self) -> Extent:
        return (0, 0, self.width, self.height)

    def set_image_size(self, width: int, height: int) -> None:
        self.width = width
        self.height = height


def region_to_feature(region: Region, image_extent: Extent, is_ocr_proposal: bool = False) -> Feature:
    """Feature of a region, geometry decoded from its id."""
    coords, _ = decode(region.id)
    return Feature(
        id=region.id,
        coordinates=normalized_box_to_display(coords, image_extent),
        properties={
            'id': region.id,
            'text': region.value,
            'highlighted': False,
            'isOcrProposal': is_ocr_proposal,
        },
    )


def ocr_word_to_feature(word: OcrWord, ocr_page: OcrPage, image_extent: Extent) -> Feature:
    """Candidate feature of an OCR word."""
    region_id = word_region_key(word, ocr_page).id
    return Feature(
        id=region_id,
        coordinates=ocr_box_to_display(word.bounding_box, ocr_page_extent(ocr_page), image_extent),
        properties={
            'id': region_id,
            'text': word.text,
            'boundingbox': list(word.bounding_box),
            'highlighted': False,
            'isOcrProposal': True,
        },
    )


def ocr_page_features(ocr_page: Optional[OcrPage], image_extent: Extent) -> List[Feature]:
    """Candidate features of every displayable word on a page."""
    if ocr_page is None:
        return []
    return [ocr_word_to_feature(word, ocr_page, image_extent) for word in iter_display_words(ocr_page)]


def label_region_keys(label: Label) -> List[RegionKey]:
    """Keys of the first box of each value of a label, as hovered in the field list."""
    return [
        RegionKey.from_flat(value.bounding_boxes[0], value.page)
        for value in label.value
        if value.bounding_boxes
    ]
