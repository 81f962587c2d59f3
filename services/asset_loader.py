"""
Asset loader interface and a local-file implementation.

The engine only needs the pixel extent and page count of the page being
shown; rendering pixels is the UI's business.
"""
import asyncio
import logging
from dataclasses import dataclass
from typing import Optional, Protocol

from config.settings import settings
from core.exceptions import AssetLoadError
from core.models import Asset, AssetKind
from utils.image_utils import get_image_dimensions, get_pdf_page_size, get_tiff_frame_size

logger = logging.getLogger(__name__)


@dataclass
class LoadedPage:
    """Result of loading one page of an asset."""
    pixel_width: int
    pixel_height: int
    num_pages: int = 1


class AssetLoader(Protocol):
    """Loaders raise AssetLoadError when a page cannot be loaded."""

    async def load_page(self, asset: Asset, page_number: int) -> LoadedPage: ...


class LocalAssetLoader:
    """Loads pages of assets stored on the local filesystem."""

    def __init__(self, pdf_render_scale: Optional[float] = None):
        self.pdf_render_scale = pdf_render_scale or settings.pdf_render_scale

    async def load_page(self, asset: Asset, page_number: int) -> LoadedPage:
        """
        Load one page of an asset.

        Args:
            asset: Asset to load
            page_number: 1-indexed page number

        Returns:
            LoadedPage with pixel size and page count

        Raises:
            AssetLoadError: If the file is missing, unreadable, or lacks the page
        """
        try:
            width, height, num_pages = await asyncio.to_thread(self._inspect, asset, page_number)
        except (OSError, EOFError, RuntimeError, ValueError, IndexError) as e:
            logger.warning("Failed to load page %d of %s: %s", page_number, asset.name, e)
            raise AssetLoadError(f"Could not load page {page_number} of {asset.name}: {e}") from e
        logger.info("Loaded page %d/%d of %s (%dx%d)", page_number, num_pages, asset.name, width, height)
        return LoadedPage(pixel_width=width, pixel_height=height, num_pages=num_pages)

    def _inspect(self, asset: Asset, page_number: int):
        if asset.kind == AssetKind.PDF:
            return get_pdf_page_size(asset.path, page_number, self.pdf_render_scale)
        if asset.kind == AssetKind.TIFF:
            return get_tiff_frame_size(asset.path, page_number)
        width, height = get_image_dimensions(asset.path)
        return width, height, 1
