"""
Pydantic schemas for the externally owned shapes: persisted label data and
OCR results.

Field aliases keep the camelCase names of the on-disk formats; dump with
`by_alias=True` to write them back.
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class LabelValue(BaseModel):
    """One labeled occurrence: a page, its text, and one box per word."""
    model_config = ConfigDict(populate_by_name=True)

    page: int
    text: str = ""
    bounding_boxes: List[List[float]] = Field(default_factory=list, alias="boundingBoxes")


class Label(BaseModel):
    """All occurrences of one field."""
    label: str
    key: Optional[Any] = None
    value: List[LabelValue] = Field(default_factory=list)


class LabelData(BaseModel):
    """Persisted label file of a document."""
    document: str = ""
    labels: List[Label] = Field(default_factory=list)

    def field_names(self) -> List[str]:
        return [label.label for label in self.labels]

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with the on-disk field names."""
        return self.model_dump(by_alias=True)


class OcrWord(BaseModel):
    """Recognized word; bounding box is 8 numbers in OCR pixel space."""
    model_config = ConfigDict(populate_by_name=True)

    text: str = ""
    bounding_box: List[float] = Field(default_factory=list, alias="boundingBox")


class OcrLine(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    text: str = ""
    bounding_box: List[float] = Field(default_factory=list, alias="boundingBox")
    words: List[OcrWord] = Field(default_factory=list)


class OcrPage(BaseModel):
    """OCR of one page; width/height give the extent of the OCR space."""
    page: int
    width: float
    height: float
    lines: List[OcrLine] = Field(default_factory=list)


class OcrResult(BaseModel):
    """Whole-document OCR result, one entry per page."""
    pages: List[OcrPage] = Field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "OcrResult":
        """
        Build from the raw OCR service payload.

        Accepts both layouts the service has produced:
        {"recognitionResults": [...]} and {"analyzeResult": {"readResults": [...]}}.
        """
        pages = payload.get('recognitionResults')
        if pages is None:
            pages = (payload.get('analyzeResult') or {}).get('readResults') or []
        return cls(pages=pages)

    def page(self, page_number: int) -> Optional[OcrPage]:
        """Return the entry of a 1-based page, or None."""
        for page in self.pages:
            if page.page == page_number:
                return page
        return None
