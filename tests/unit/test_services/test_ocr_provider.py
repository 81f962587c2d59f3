"""
Unit tests for services.ocr_provider module.
"""
import asyncio
import json

import pytest
from core.exceptions import OcrFetchError
from core.models import OcrStatus
from services.ocr_provider import FileOcrProvider


class TestFileOcrProvider:
    """Tests for FileOcrProvider."""

    def test_result_path(self):
        """Test cached result path is the asset path plus suffix."""
        assert str(FileOcrProvider().result_path("/data/a.pdf")) == "/data/a.pdf.ocr.json"
        assert str(FileOcrProvider(".json").result_path("/data/a.pdf")) == "/data/a.pdf.json"

    def test_loads_cached_result(self, temp_dir, sample_ocr_payload):
        """Test a cached result is parsed and status goes running then done."""
        asset_path = temp_dir / "invoice.pdf"
        (temp_dir / "invoice.pdf.ocr.json").write_text(json.dumps(sample_ocr_payload), encoding='utf-8')
        statuses = []

        result = asyncio.run(FileOcrProvider().get_recognized_text(str(asset_path), "invoice.pdf", statuses.append))

        assert len(result.pages) == 2
        assert statuses == [OcrStatus.RUNNING, OcrStatus.DONE]

    def test_missing_result(self, temp_dir):
        """Test missing result raises and reports error status."""
        statuses = []

        with pytest.raises(OcrFetchError) as exc_info:
            asyncio.run(FileOcrProvider().get_recognized_text(str(temp_dir / "x.pdf"), "x.pdf", statuses.append))

        assert "x.pdf" in exc_info.value.message
        assert statuses == [OcrStatus.RUNNING, OcrStatus.ERROR]

    def test_malformed_result(self, temp_dir):
        """Test unparseable JSON raises OcrFetchError."""
        (temp_dir / "x.pdf.ocr.json").write_text("{not json", encoding='utf-8')

        with pytest.raises(OcrFetchError):
            asyncio.run(FileOcrProvider().get_recognized_text(str(temp_dir / "x.pdf"), "x.pdf"))

    def test_invalid_schema(self, temp_dir):
        """Test payload failing validation raises OcrFetchError."""
        payload = {'recognitionResults': [{'page': 1, 'width': 'wide', 'height': 1}]}
        (temp_dir / "x.pdf.ocr.json").write_text(json.dumps(payload), encoding='utf-8')

        with pytest.raises(OcrFetchError):
            asyncio.run(FileOcrProvider().get_recognized_text(str(temp_dir / "x.pdf"), "x.pdf"))
