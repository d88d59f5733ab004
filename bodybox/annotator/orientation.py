"""
Orientation helpers.
"""
import re
from enum import Enum
from typing import Union

from .types import Orientation


class ImageOrientation(str, Enum):
    """How the captured sensor image must be rotated before detection."""
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


_IMAGE_ORIENTATIONS = {
    Orientation.PORTRAIT: ImageOrientation.RIGHT,
    Orientation.LANDSCAPE_RIGHT: ImageOrientation.DOWN,
    Orientation.PORTRAIT_UPSIDE_DOWN: ImageOrientation.LEFT,
}


def image_orientation(orientation: Orientation) -> ImageOrientation:
    """Orientation hint for the detector; landscape-left and flat devices use UP."""
    return _IMAGE_ORIENTATIONS.get(orientation, ImageOrientation.UP)


def snake_case(name: str) -> str:
    """'landscapeLeft', 'landscape-left' and 'Landscape Left' -> 'landscape_left'."""
    name = re.sub(r"(?<=[a-z])(?=[A-Z])", "_", name.strip())
    return name.replace("-", "_").replace(" ", "_").lower()


def parse_orientation(value: Union[str, Orientation, None]) -> Orientation:
    """
    Accept an Orientation or a name in snake, kebab or camel case.
    Anything unrecognised becomes UNKNOWN, which transforms like portrait.
    """
    if isinstance(value, Orientation):
        return value
    if not value:
        return Orientation.UNKNOWN

    try:
        return Orientation(snake_case(str(value)))
    except ValueError:
        return Orientation.UNKNOWN
