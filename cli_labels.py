#!/usr/bin/env python3
"""
CLI for inspecting label files and OCR results.

Commands:
- regions: expand a label file into its region list
- normalize: rebuild a label file from its regions
- order: print OCR candidate regions of a page in reading order
"""
import argparse
import json
import logging
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent))

from config.logging_config import configure_logging
from core.schemas import LabelData, OcrResult
from spatial.label_mapping import label_data_to_regions, regions_to_label_data
from spatial.region_order import RegionOrderIndex

logger = logging.getLogger(__name__)


def load_json(path: str) -> dict:
    with open(path, encoding='utf-8') as f:
        return json.load(f)


def regions_cli(labels_path: str) -> list:
    """Print the regions of a label file as JSON."""
    label_data = LabelData.model_validate(load_json(labels_path))
    regions = label_data_to_regions(label_data)
    logger.info("%s: %d labels, %d regions", labels_path, len(label_data.labels), len(regions))
    output = [region.to_dict() for region in regions]
    print(json.dumps(output, indent=2))
    return output


def normalize_cli(labels_path: str, document_name: str = None, output: str = None) -> dict:
    """Round-trip a label file through the region list."""
    label_data = LabelData.model_validate(load_json(labels_path))
    name = document_name or label_data.document or Path(labels_path).name
    rebuilt = regions_to_label_data(label_data_to_regions(label_data), name).to_dict()

    text = json.dumps(rebuilt, indent=2)
    if output:
        Path(output).write_text(text, encoding='utf-8')
        logger.info("Wrote %s", output)
    else:
        print(text)
    return rebuilt


def order_cli(ocr_path: str, page: int = 1) -> list:
    """Print candidate region ids of one page by rank."""
    index = RegionOrderIndex.build(OcrResult.from_payload(load_json(ocr_path)))
    ranked = sorted(index.ranks_for_page(page).items(), key=lambda item: item[1])
    for key, rank in ranked:
        print(f"{rank:5d}  {key.id}")
    return ranked


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='Label file and OCR region inspection'
    )
    parser.add_argument('--log-level', type=str, default=None, help='Logging level (default from settings)')
    subparsers = parser.add_subparsers(dest='command', help='Command to run')

    regions_parser = subparsers.add_parser('regions', help='Expand a label file into regions')
    regions_parser.add_argument('labels', type=str, help='Label JSON file')

    normalize_parser = subparsers.add_parser('normalize', help='Rebuild a label file from its regions')
    normalize_parser.add_argument('labels', type=str, help='Label JSON file')
    normalize_parser.add_argument('--document', type=str, help='Document name to record')
    normalize_parser.add_argument('-o', '--output', type=str, help='Output file path')

    order_parser = subparsers.add_parser('order', help='Print OCR regions in reading order')
    order_parser.add_argument('ocr', type=str, help='OCR JSON file')
    order_parser.add_argument('--page', type=int, default=1, help='1-based page number')

    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if args.command == 'regions':
        regions_cli(args.labels)
    elif args.command == 'normalize':
        normalize_cli(args.labels, args.document, args.output)
    elif args.command == 'order':
        order_cli(args.ocr, args.page)
    else:
        parser.print_help()


if __name__ == '__main__':
    main()
