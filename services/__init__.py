"""Services package - Region store, page navigation and external collaborators."""

from .feature_surface import Feature, FeatureState, FeatureSurface, InMemoryFeatureSurface
from .region_store import RegionStore
from .page_navigation import PageBackend, PageNavigator
from .asset_loader import AssetLoader, LoadedPage, LocalAssetLoader
from .ocr_provider import OcrProvider, FileOcrProvider
from .editor_session import EditorSession

__all__ = [
    'Feature',
    'FeatureState',
    'FeatureSurface',
    'InMemoryFeatureSurface',
    'RegionStore',
    'PageBackend',
    'PageNavigator',
    'AssetLoader',
    'LoadedPage',
    'LocalAssetLoader',
    'OcrProvider',
    'FileOcrProvider',
    'EditorSession'
]
