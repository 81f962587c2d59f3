"""
Image utilities for asset inspection.

Reports page count and pixel size of image, TIFF and PDF assets. Pixels are
never decoded beyond what Pillow and PyMuPDF need to answer.
"""
from typing import Tuple

import fitz  # PyMuPDF
from PIL import Image


def get_pdf_page_size(pdf_path: str, page_num: int, scale: float = 2.0) -> Tuple[int, int, int]:
    """
    Pixel size of a PDF page rendered at `scale`.

    Args:
        pdf_path: Path to the PDF file
        page_num: 1-indexed page number
        scale: Render scale relative to PDF points

    Returns:
        Tuple of (width, height, page_count)
    """
    doc = fitz.open(pdf_path)
    try:
        page = doc.load_page(page_num - 1)  # 0-indexed
        rect = page.rect
        return int(rect.width * scale), int(rect.height * scale), doc.page_count
    finally:
        doc.close()


def get_tiff_frame_size(tiff_path: str, page_num: int) -> Tuple[int, int, int]:
    """
    Pixel size of one TIFF frame.

    Args:
        tiff_path: Path to the TIFF file
        page_num: 1-indexed frame number

    Returns:
        Tuple of (width, height, frame_count)
    """
    with Image.open(tiff_path) as img:
        frame_count = getattr(img, 'n_frames', 1)
        img.seek(page_num - 1)
        width, height = img.size
    return width, height, frame_count


def get_image_dimensions(image_or_path) -> Tuple[int, int]:
    """
    Get image dimensions (width, height).

    Args:
        image_or_path: PIL Image or path to image file

    Returns:
        Tuple of (width, height)
    """
    if isinstance(image_or_path, str):
        with Image.open(image_or_path) as img:
            return img.size
    return image_or_path.size
