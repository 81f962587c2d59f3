"""Core package - Domain models, schemas, constants and errors."""

from .models import (
    RegionType,
    AssetKind,
    OcrStatus,
    Point,
    RegionBoundingBox,
    RegionKey,
    Region,
    Asset,
    AssetMetadata,
    ErrorNotice,
)
from .schemas import LabelValue, Label, LabelData, OcrWord, OcrLine, OcrPage, OcrResult
from .exceptions import RegionSyncError, CrossPageTagError, OcrFetchError, AssetLoadError, PageOutOfRangeError
from .constants import OCR_PLACEHOLDER_PATTERN

__all__ = [
    'RegionType',
    'AssetKind',
    'OcrStatus',
    'Point',
    'RegionBoundingBox',
    'RegionKey',
    'Region',
    'Asset',
    'AssetMetadata',
    'ErrorNotice',
    'LabelValue',
    'Label',
    'LabelData',
    'OcrWord',
    'OcrLine',
    'OcrPage',
    'OcrResult',
    'RegionSyncError',
    'CrossPageTagError',
    'OcrFetchError',
    'AssetLoadError',
    'PageOutOfRangeError',
    'OCR_PLACEHOLDER_PATTERN'
]
