"""
Block category classification.

The editor paints every block with the color of its palette category, so the
category of a decoded block is recovered from its RGB value.
"""

from enum import Enum
from typing import TYPE_CHECKING, Dict, Tuple, Union

from .errors import UnrecognizedColorError
from .models.color import Color

if TYPE_CHECKING:
    from .models.block import Block


class BlockCategory(str, Enum):
    """Palette category of a block."""

    VARIABLE = "variable"
    LIST = "list"
    CONTROL = "control"
    OPERATOR = "operator"
    MATH = "math"
    FILE = "file"
    VIEW_FUNC = "view_func"
    COMPONENT_FUNC = "component_func"
    MORE_BLOCK = "more_block"


CATEGORY_COLORS: Dict[Tuple[int, int, int], BlockCategory] = {
    (0xEE, 0x7D, 0x16): BlockCategory.VARIABLE,
    (0xCC, 0x5B, 0x22): BlockCategory.LIST,
    (0xE1, 0xA9, 0x2A): BlockCategory.CONTROL,
    (0x5C, 0xB7, 0x22): BlockCategory.OPERATOR,
    (0x23, 0xB9, 0xA9): BlockCategory.MATH,
    (0xA1, 0x88, 0x7F): BlockCategory.FILE,
    (0x4A, 0x6C, 0xD4): BlockCategory.VIEW_FUNC,
    (0x2C, 0xA5, 0xE2): BlockCategory.COMPONENT_FUNC,
    (0x8A, 0x55, 0xD7): BlockCategory.MORE_BLOCK,
}


def categorize(target: Union["Block", Color]) -> BlockCategory:
    """
    Determine the category of a block (or of a bare color).

    Only the RGB channels are compared; alpha is ignored.

    Raises:
        UnrecognizedColorError: If the color matches none of the known categories
    """
    color = target if isinstance(target, Color) else target.color
    try:
        return CATEGORY_COLORS[color.rgb()]
    except KeyError:
        raise UnrecognizedColorError(color) from None


def category_color(category: BlockCategory) -> Color:
    """Return the opaque palette color of ``category``."""
    for rgb, known in CATEGORY_COLORS.items():
        if known is category:
            return Color.from_rgb(*rgb)
    raise ValueError(f"No color registered for {category}")
