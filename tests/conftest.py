"""
Pytest configuration and global fixtures.
"""
import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.models import Asset, AssetKind, OcrStatus, RegionKey
from core.schemas import LabelData, OcrResult
from core.exceptions import OcrFetchError
from services.asset_loader import LoadedPage
from services.feature_surface import InMemoryFeatureSurface


OCR_WIDTH = 100
OCR_HEIGHT = 200

PAID_BOX = [10, 20, 50, 20, 50, 40, 10, 40]
AMOUNT_BOX = [60, 20, 90, 20, 90, 40, 60, 40]
TOTAL_BOX = [10, 60, 40, 60, 40, 80, 10, 80]
BLANK_BOX = [0, 0, 5, 0, 5, 5, 0, 5]
DUE_BOX = [10, 10, 30, 10, 30, 30, 10, 30]
DATE_BOX = [40, 10, 70, 10, 70, 30, 40, 30]


def ocr_key(box, page, width=OCR_WIDTH, height=OCR_HEIGHT) -> RegionKey:
    """Key of the candidate region an OCR box produces."""
    normalized = []
    for i in range(0, len(box), 2):
        normalized.extend((box[i] / width, box[i + 1] / height))
    return RegionKey.from_flat(normalized, page)


def ocr_payload() -> dict:
    """Two-page OCR payload in the analyzeResult layout."""
    return {
        'status': 'succeeded',
        'analyzeResult': {
            'readResults': [
                {
                    'page': 1,
                    'width': OCR_WIDTH,
                    'height': OCR_HEIGHT,
                    'lines': [
                        {
                            'text': '___ Paid $10',
                            'words': [
                                {'text': '___', 'boundingBox': BLANK_BOX},
                                {'text': 'Paid', 'boundingBox': PAID_BOX},
                                {'text': '$10', 'boundingBox': AMOUNT_BOX},
                            ]
                        },
                        {
                            'text': 'Total',
                            'words': [
                                {'text': 'Total', 'boundingBox': TOTAL_BOX},
                            ]
                        }
                    ]
                },
                {
                    'page': 2,
                    'width': OCR_WIDTH,
                    'height': OCR_HEIGHT,
                    'lines': [
                        {
                            'text': 'Due Date',
                            'words': [
                                {'text': 'Due', 'boundingBox': DUE_BOX},
                                {'text': 'Date', 'boundingBox': DATE_BOX},
                            ]
                        }
                    ]
                }
            ]
        }
    }


class FakeAssetLoader:
    """Asset loader returning fixed page sizes and recording calls."""

    def __init__(self, num_pages=2, width=1000, height=2000):
        self.num_pages = num_pages
        self.width = width
        self.height = height
        self.calls = []

    async def load_page(self, asset, page_number):
        self.calls.append((asset.name if asset else None, page_number))
        return LoadedPage(pixel_width=self.width, pixel_height=self.height, num_pages=self.num_pages)


class FakeOcrProvider:
    """OCR provider serving a fixed payload, or failing."""

    def __init__(self, payload=None, error=None):
        self.payload = payload
        self.error = error
        self.calls = []

    async def get_recognized_text(self, asset_path, asset_name, on_status_change=None):
        self.calls.append(asset_name)
        if on_status_change:
            on_status_change(OcrStatus.RUNNING)
        if self.error:
            if on_status_change:
                on_status_change(OcrStatus.ERROR)
            raise OcrFetchError(self.error)
        if on_status_change:
            on_status_change(OcrStatus.DONE)
        return OcrResult.from_payload(self.payload or {})


@pytest.fixture
def sample_ocr_payload():
    """Raw OCR payload covering two pages."""
    return ocr_payload()


@pytest.fixture
def sample_ocr_result():
    """Parsed OCR result covering two pages."""
    return OcrResult.from_payload(ocr_payload())


@pytest.fixture
def sample_label_data():
    """Label data with a single-word and a two-word field on page 1."""
    return LabelData.model_validate({
        'document': 'invoice.pdf',
        'labels': [
            {
                'label': 'Total',
                'key': None,
                'value': [
                    {'page': 1, 'text': '$10', 'boundingBoxes': [[0.6, 0.1, 0.9, 0.1, 0.9, 0.2, 0.6, 0.2]]}
                ]
            },
            {
                'label': 'Name',
                'key': None,
                'value': [
                    {
                        'page': 1,
                        'text': 'John Smith',
                        'boundingBoxes': [
                            [0.1, 0.5, 0.2, 0.5, 0.2, 0.55, 0.1, 0.55],
                            [0.25, 0.5, 0.4, 0.5, 0.4, 0.55, 0.25, 0.55]
                        ]
                    }
                ]
            }
        ]
    })


@pytest.fixture
def surface():
    """Headless feature surface sized 1000x2000."""
    return InMemoryFeatureSurface(width=1000, height=2000)


@pytest.fixture
def pdf_asset():
    return Asset(id='asset-1', name='invoice.pdf', path='/data/invoice.pdf', kind=AssetKind.PDF)


@pytest.fixture
def fake_loader():
    return FakeAssetLoader()


@pytest.fixture
def fake_ocr_provider():
    return FakeOcrProvider(payload=ocr_payload())


@pytest.fixture
def temp_dir(tmp_path):
    """Provide temporary directory for test files."""
    return tmp_path


@pytest.fixture
def sample_image_path(temp_dir):
    """Create a sample test image."""
    from PIL import Image

    img_path = temp_dir / "test_image.png"
    img = Image.new('RGB', (800, 600), color='white')
    img.save(img_path)

    return str(img_path)


@pytest.fixture
def sample_tiff_path(temp_dir):
    """Create a two-frame TIFF with different frame sizes."""
    from PIL import Image

    tiff_path = temp_dir / "scan.tiff"
    first = Image.new('RGB', (300, 400), color='white')
    second = Image.new('RGB', (500, 600), color='white')
    first.save(tiff_path, save_all=True, append_images=[second])

    return str(tiff_path)


@pytest.fixture
def sample_pdf_path(temp_dir):
    """Create a three-page PDF of 300x400 points."""
    import fitz

    pdf_path = temp_dir / "doc.pdf"
    doc = fitz.open()
    for _ in range(3):
        doc.new_page(width=300, height=400)
    doc.save(str(pdf_path))
    doc.close()

    return str(pdf_path)


@pytest.fixture
def failing_ocr_provider():
    return FakeOcrProvider(error='OCR service unavailable')


@pytest.fixture
def key_for():
    """Build the region key of an OCR box on the sample OCR pages."""
    return ocr_key


@pytest.fixture
def boxes():
    """OCR-space boxes of the sample OCR words."""
    return {
        'blank': BLANK_BOX,
        'paid': PAID_BOX,
        'amount': AMOUNT_BOX,
        'total': TOTAL_BOX,
        'due': DUE_BOX,
        'date': DATE_BOX,
    }
