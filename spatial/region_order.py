"""
Region Order Module

Reading order of OCR-derived regions. The index is built once per OCR fetch
for every page of the document, walking pages, lines and words in the order
the OCR service reports them, so switching pages never rebuilds it.
"""
import logging
import re
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from core.constants import DEFAULT_ORDER_PAGE, DEFAULT_ORDER_RANK, OCR_PLACEHOLDER_PATTERN
from core.models import Region, RegionKey
from core.schemas import OcrPage, OcrResult, OcrWord
from utils.coordinates import Extent, ocr_box_to_normalized

logger = logging.getLogger(__name__)

_PLACEHOLDER_RE = re.compile(OCR_PLACEHOLDER_PATTERN)


@dataclass(frozen=True)
class RegionOrder:
    """Position of a region in document reading order."""
    page: int
    order: int


DEFAULT_REGION_ORDER = RegionOrder(page=DEFAULT_ORDER_PAGE, order=DEFAULT_ORDER_RANK)


def should_display_ocr_word(text: str) -> bool:
    """False for underscore-only placeholders the OCR service emits for form blanks."""
    return not _PLACEHOLDER_RE.match(text)


def ocr_page_extent(ocr_page: OcrPage) -> Extent:
    return (0, 0, ocr_page.width, ocr_page.height)


def iter_display_words(ocr_page: OcrPage) -> Iterator[OcrWord]:
    """Yield the displayable words of a page, lines first then words."""
    for line in ocr_page.lines:
        for word in line.words:
            if should_display_ocr_word(word.text):
                yield word


def word_region_key(word: OcrWord, ocr_page: OcrPage) -> RegionKey:
    """Identity of the candidate region an OCR word produces."""
    normalized = ocr_box_to_normalized(word.bounding_box, ocr_page_extent(ocr_page))
    return RegionKey.from_flat(normalized, ocr_page.page)


class RegionOrderIndex:
    """
    Per-page reading-order rank of OCR candidate regions.

    Two-level mapping page -> RegionKey -> rank. Lookups return None for
    regions the OCR never produced; sorting places those at DEFAULT_REGION_ORDER.
    """

    def __init__(self, ranks: Optional[Dict[int, Dict[RegionKey, int]]] = None):
        self._ranks: Dict[int, Dict[RegionKey, int]] = ranks or {}

    @classmethod
    def build(cls, ocr_result: OcrResult) -> "RegionOrderIndex":
        """
        Rank every displayable word of every page.

        Args:
            ocr_result: Whole-document OCR result

        Returns:
            Index with ranks starting at 0 on each page
        """
        ranks: Dict[int, Dict[RegionKey, int]] = {}
        for ocr_page in ocr_result.pages:
            page_ranks: Dict[RegionKey, int] = {}
            for order, word in enumerate(iter_display_words(ocr_page)):
                page_ranks[word_region_key(word, ocr_page)] = order
            ranks[ocr_page.page] = page_ranks

        logger.info(
            "Built region order index: %d pages, %d regions",
            len(ranks), sum(len(page_ranks) for page_ranks in ranks.values())
        )
        return cls(ranks)

    def __len__(self) -> int:
        return sum(len(page_ranks) for page_ranks in self._ranks.values())

    def __contains__(self, key: RegionKey) -> bool:
        return self.rank_of(key) is not None

    @property
    def pages(self) -> List[int]:
        return sorted(self._ranks)

    def ranks_for_page(self, page: int) -> Dict[RegionKey, int]:
        return dict(self._ranks.get(page, {}))

    def rank_of(self, key: RegionKey) -> Optional[RegionOrder]:
        order = self._ranks.get(key.page, {}).get(key)
        if order is None:
            return None
        return RegionOrder(page=key.page, order=order)

    def sort_key(self, region: Region) -> Tuple[int, int]:
        position = self.rank_of(region.key) or DEFAULT_REGION_ORDER
        return position.page, position.order

    def compare(self, a: Region, b: Region) -> int:
        """Three-way comparison by (page, order)."""
        key_a = self.sort_key(a)
        key_b = self.sort_key(b)
        return (key_a > key_b) - (key_a < key_b)

    def sort_regions(self, regions: Iterable[Region]) -> List[Region]:
        """Stable sort; unindexed regions keep their relative order at the front of page 1."""
        return sorted(regions, key=self.sort_key)


def compare_region_order(a: Region, b: Region, index: RegionOrderIndex) -> int:
    return index.compare(a, b)
