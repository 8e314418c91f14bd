"""
Text style model.

The printer's print mode byte (ESC !) only understands bits 1-6. Bits 0
and 7 of a PrintingStyle mask request a thin or thick underline, which is
a separate command (ESC -). TextStyle splits a raw mask into those two
parts once, before anything is sent.
"""

from dataclasses import dataclass
from enum import IntEnum, IntFlag
from typing import Union


class PrintingStyle(IntFlag):
    """Style flags, combinable with ``|``."""
    NONE = 0
    UNDERLINE = 1 << 0         # Thin underline (not part of the style byte)
    REVERSE = 1 << 1           # White on black
    UPDOWN = 1 << 2            # Upside-down characters
    BOLD = 1 << 3
    DOUBLE_HEIGHT = 1 << 4
    DOUBLE_WIDTH = 1 << 5
    DELETE_LINE = 1 << 6       # Strike-through
    THICK_UNDERLINE = 1 << 7   # Thick underline (not part of the style byte)


class UnderlineHeight(IntEnum):
    """Underline height in dots."""
    NONE = 0
    THIN = 1
    THICK = 2


UNDERLINE_BITS = PrintingStyle.UNDERLINE | PrintingStyle.THICK_UNDERLINE

StyleLike = Union[int, PrintingStyle, "TextStyle"]


@dataclass(frozen=True)
class TextStyle:
    """A style mask split into underline height and visual flags."""
    underline: UnderlineHeight = UnderlineHeight.NONE
    visual: PrintingStyle = PrintingStyle.NONE

    def __post_init__(self):
        if self.visual & UNDERLINE_BITS:
            raise ValueError("Underline bits belong in 'underline', not 'visual'")

    @classmethod
    def from_mask(cls, mask: int) -> "TextStyle":
        """
        Split a raw style mask.

        Bit 0 is checked before bit 7, so a mask with both set ends up
        with a thick underline.
        """
        if mask < 0 or mask > 0xFF:
            raise ValueError(f"Style mask must fit in one byte: {mask}")

        style = PrintingStyle(mask)
        underline = UnderlineHeight.NONE

        if style & PrintingStyle.UNDERLINE:
            style &= ~PrintingStyle.UNDERLINE
            underline = UnderlineHeight.THIN

        if style & PrintingStyle.THICK_UNDERLINE:
            style &= ~PrintingStyle.THICK_UNDERLINE
            underline = UnderlineHeight.THICK

        return cls(underline=underline, visual=style)

    @classmethod
    def coerce(cls, style: StyleLike) -> "TextStyle":
        """Accept a TextStyle, a PrintingStyle or a plain int."""
        if isinstance(style, TextStyle):
            return style
        return cls.from_mask(int(style))

    @property
    def style_byte(self) -> int:
        """Value for the ESC ! command."""
        return int(self.visual) & ~int(UNDERLINE_BITS) & 0xFF
