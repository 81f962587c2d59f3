"""
Geometry-derived region ids.

An id is every normalized coordinate joined by ',' followed by ':' and the
page number, e.g. "0.1,0.1,0.5,0.1,0.5,0.2,0.1,0.2:1". Two regions with the
same geometry on the same page get the same id.
"""
from typing import Iterable, List, Sequence, Tuple

COORD_SEPARATOR = ','
PAGE_SEPARATOR = ':'


def format_coordinate(value: float) -> str:
    """Integral values print without a fraction ("10"), others use repr."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def encode(coords: Sequence[float], page: int) -> str:
    """Encode a flat coordinate list and a page number into a region id."""
    joined = COORD_SEPARATOR.join(format_coordinate(v) for v in coords)
    return f"{joined}{PAGE_SEPARATOR}{int(page)}"


def encode_points(points: Iterable[Tuple[float, float]], page: int) -> str:
    """Encode (x, y) vertices and a page number into a region id."""
    flat = []
    for x, y in points:
        flat.extend((x, y))
    return encode(flat, page)


def decode(region_id: str) -> Tuple[List[float], int]:
    """
    Decode a region id back into its flat coordinate list and page.

    Raises:
        ValueError: If the id is not "<coords>:<page>"
    """
    coords_part, separator, page_part = region_id.rpartition(PAGE_SEPARATOR)
    if not separator:
        raise ValueError(f"Region id has no page suffix: {region_id!r}")
    coords = [float(token) for token in coords_part.split(COORD_SEPARATOR)]
    return coords, int(page_part)
