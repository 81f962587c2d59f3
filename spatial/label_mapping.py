"""
Label/Region Mapping Module

Converts between the persisted, field-oriented label data and the flat
region list the editor works on.

Label data stores one value per labeled occurrence, each with one bounding
box per word and the words joined in `text`. The region list holds one
region per box.
"""
from typing import Dict, List, Optional
from urllib.parse import unquote

from core.models import Region, RegionKey
from core.schemas import Label, LabelData, LabelValue
from utils.region_id import decode


def document_name_from_asset(asset_name: str) -> str:
    """URL-decode an asset name and keep its final path segment."""
    return unquote(asset_name).split("/")[-1]


def word_for_box(value: LabelValue, box_index: int) -> str:
    """
    Text of one box of a label value.

    Assumes one box per word, in order. Returns "" when the text has fewer
    words than boxes.
    """
    words = value.text.split()
    if box_index < len(words):
        return words[box_index]
    return ""


def label_data_to_regions(label_data: Optional[LabelData]) -> List[Region]:
    """
    Expand label data into one tagged region per bounding box.

    Args:
        label_data: Persisted label data (None yields no regions)

    Returns:
        Regions in label, value, box order
    """
    regions = []
    if label_data is None:
        return regions

    for label in label_data.labels:
        for value in label.value:
            for box_index, box in enumerate(value.bounding_boxes):
                regions.append(Region(
                    key=RegionKey.from_flat(box, value.page),
                    tag=label.label,
                    value=word_for_box(value, box_index),
                ))
    return regions


def regions_to_label_data(regions: List[Region], document_name: str) -> LabelData:
    """
    Collapse tagged regions into label data.

    Fields appear in the order their first region appears; untagged regions
    are skipped. Each region becomes one value whose single box is decoded
    from the region id.
    """
    labels: Dict[str, Label] = {}
    for region in regions:
        if not region.tag:
            continue
        label = labels.get(region.tag)
        if label is None:
            label = labels[region.tag] = Label(label=region.tag, key=None, value=[])
        box, _ = decode(region.id)
        label.value.append(LabelValue(
            page=region.page_number,
            text=region.value,
            bounding_boxes=[box],
        ))

    return LabelData(
        document=document_name_from_asset(document_name),
        labels=list(labels.values()),
    )


def label_field_names_changed(new: Optional[LabelData], old: Optional[LabelData]) -> bool:
    """True when the two label sets differ in size or in their field names."""
    new_names = new.field_names() if new else []
    old_names = old.field_names() if old else []
    if len(new_names) != len(old_names):
        return True
    return sorted(new_names) != sorted(old_names)
