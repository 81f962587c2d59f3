"""
Core domain models for the region/label synchronization engine.

These are plain data structures; the store and the mapper hold the logic.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, NamedTuple, Optional, Sequence, Tuple

from utils.coordinates import bounding_box_from_flat, pairs
from utils.region_id import decode, encode

from .schemas import LabelData


class RegionType(Enum):
    """Shape of a region. Only polygons are produced."""
    POLYGON = "Polygon"


class AssetKind(Enum):
    """Kind of asset the external loader renders."""
    IMAGE = "image"
    TIFF = "tiff"
    PDF = "pdf"


class OcrStatus(Enum):
    """Status values reported by the OCR provider."""
    DONE = "done"
    RUNNING = "runningOCR"
    ERROR = "error"


class Point(NamedTuple):
    """Normalized vertex, top-left origin."""
    x: float
    y: float


@dataclass
class RegionBoundingBox:
    """Axis-aligned envelope in normalized coordinates."""
    left: float
    top: float
    width: float
    height: float

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            'left': self.left,
            'top': self.top,
            'width': self.width,
            'height': self.height
        }


@dataclass(frozen=True)
class RegionKey:
    """
    Identity of a region: its normalized geometry plus its page.

    Keys compare and hash by value, so they are the lookup key of every
    region map and selection set. Coincident geometry on the same page
    produces equal keys and those regions merge.
    """
    coords: Tuple[float, ...]
    page: int

    @classmethod
    def from_flat(cls, coords: Sequence[float], page: int) -> "RegionKey":
        return cls(coords=tuple(float(v) for v in coords), page=int(page))

    @classmethod
    def from_points(cls, points: Sequence[Tuple[float, float]], page: int) -> "RegionKey":
        flat = []
        for x, y in points:
            flat.extend((x, y))
        return cls.from_flat(flat, page)

    @classmethod
    def from_id(cls, region_id: str) -> "RegionKey":
        coords, page = decode(region_id)
        return cls.from_flat(coords, page)

    @property
    def id(self) -> str:
        """Geometry-derived string form, used by features and label data."""
        return encode(self.coords, self.page)


@dataclass
class Region:
    """
    A tagged or untagged polygon annotation on one page.

    A region carries at most one tag; `tags` is the list view used by the
    persisted formats.
    """
    key: RegionKey
    tag: Optional[str] = None
    value: str = ""
    region_type: RegionType = RegionType.POLYGON

    @property
    def id(self) -> str:
        return self.key.id

    @property
    def page_number(self) -> int:
        return self.key.page

    @property
    def tags(self) -> List[str]:
        return [self.tag] if self.tag else []

    @property
    def is_tagged(self) -> bool:
        return bool(self.tag)

    @property
    def points(self) -> List[Point]:
        return [Point(x, y) for x, y in pairs(self.key.coords)]

    @property
    def bounding_box(self) -> RegionBoundingBox:
        return RegionBoundingBox(**bounding_box_from_flat(self.key.coords))

    def to_dict(self) -> dict:
        """Convert to the dictionary shape of the asset metadata format."""
        return {
            'id': self.id,
            'type': self.region_type.value,
            'tags': self.tags,
            'boundingBox': self.bounding_box.to_dict(),
            'points': [{'x': p.x, 'y': p.y} for p in self.points],
            'value': self.value,
            'pageNumber': self.page_number
        }


@dataclass
class Asset:
    """Asset handle as provided by the surrounding application."""
    id: str
    name: str
    path: str
    kind: AssetKind = AssetKind.IMAGE
    is_running_ocr: bool = False


@dataclass
class AssetMetadata:
    """Regions and label data of one asset, reported after every mutation."""
    asset: Optional[Asset]
    regions: List[Region] = field(default_factory=list)
    label_data: Optional[LabelData] = None


@dataclass
class ErrorNotice:
    """User-facing error, dismissed by the UI."""
    title: str
    message: str
