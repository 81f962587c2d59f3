"""
OCR Provider - Retrieves recognized text of an asset.

The engine never runs OCR; it reads the whole-document result the OCR
service produced and reports status transitions through a callback.
"""
import asyncio
import json
import logging
from pathlib import Path
from typing import Callable, Optional, Protocol

from pydantic import ValidationError

from config.settings import settings
from core.exceptions import OcrFetchError
from core.models import OcrStatus
from core.schemas import OcrResult

logger = logging.getLogger(__name__)

StatusCallback = Callable[[OcrStatus], None]


class OcrProvider(Protocol):
    async def get_recognized_text(
        self,
        asset_path: str,
        asset_name: str,
        on_status_change: Optional[StatusCallback] = None
    ) -> OcrResult: ...


class FileOcrProvider:
    """Reads cached OCR results stored next to the asset as `<asset><suffix>`."""

    def __init__(self, suffix: Optional[str] = None):
        """
        Initialize provider.

        Args:
            suffix: File suffix of cached results (default from settings)
        """
        self.suffix = suffix or settings.ocr_file_suffix

    def result_path(self, asset_path: str) -> Path:
        return Path(f"{asset_path}{self.suffix}")

    async def get_recognized_text(
        self,
        asset_path: str,
        asset_name: str,
        on_status_change: Optional[StatusCallback] = None
    ) -> OcrResult:
        """
        Load the OCR result of an asset.

        Args:
            asset_path: Path of the asset
            asset_name: Display name, used in messages
            on_status_change: Receives RUNNING, then DONE or ERROR

        Returns:
            Parsed OcrResult

        Raises:
            OcrFetchError: If the result is missing or malformed
        """
        notify = on_status_change or (lambda status: None)
        notify(OcrStatus.RUNNING)
        path = self.result_path(asset_path)
        try:
            payload = await asyncio.to_thread(self._read, path)
            result = OcrResult.from_payload(payload)
        except FileNotFoundError:
            notify(OcrStatus.ERROR)
            raise OcrFetchError(f"No OCR result found for {asset_name}")
        except (OSError, ValueError, AttributeError, ValidationError) as e:
            notify(OcrStatus.ERROR)
            raise OcrFetchError(f"Could not read OCR result for {asset_name}: {e}") from e

        notify(OcrStatus.DONE)
        logger.info("Loaded OCR for %s: %d pages", asset_name, len(result.pages))
        return result

    @staticmethod
    def _read(path: Path) -> dict:
        with open(path, encoding='utf-8') as f:
            return json.load(f)
