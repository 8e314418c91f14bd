"""
ESC/POS Command Definitions.

Byte builders for every directive the printer understands. Each builder
is stateless and returns the complete command as bytes; the session in
printer.py decides when to send them.

Wire reference (decimal):
    ESC @               initialize
    ESC 7 n1 n2 n3      printing parameters (dots, heat time, heat interval)
    ESC ! n             print mode (style byte)
    ESC - n             underline height
    ESC 3 n             line spacing
    ESC a n             alignment
    ESC d n             feed n lines
    ESC J n             feed n dots
    ESC B n             indent
    ESC = n             online/offline
    ESC t n             codepage
    GS B n              white on black
    GS ! n              character size
    GS k m d... NUL     barcode
    GS w n              barcode module width
    GS x n              barcode left space
    DC2 v nL nH d...    raster bitmap, LSB first
"""

from enum import IntEnum

ESC = 0x1B
GS = 0x1D
DC2 = 0x12
LF = 0x0A
NUL = 0x00

# Box drawing "─" in the IBM codepages
HORIZONTAL_RULE_CHAR = 0xC4
MAX_RULE_LENGTH = 32
MAX_INDENT = 31


class Align(IntEnum):
    """Text alignment."""
    LEFT = 0
    CENTER = 1
    RIGHT = 2


class BarcodeWidth(IntEnum):
    """Barcode module width."""
    NORMAL = 2
    LARGE = 3


class Commands:
    """Command builders for ESC/POS thermal printers."""

    @staticmethod
    def initialize() -> bytes:
        """Reset the printer to its power-on state."""
        return bytes([ESC, 0x40])

    @staticmethod
    def printing_parameters(max_dots: int, heating_time: int, heating_interval: int) -> bytes:
        """
        Set the thermal head driver parameters.

        Args:
            max_dots: Max printing dots, unit (n+1)*8 dots
            heating_time: Heating time, unit 10us
            heating_interval: Heating interval, unit 10us
        """
        return bytes([ESC, 0x37, max_dots, heating_time, heating_interval])

    @staticmethod
    def style(mask: int) -> bytes:
        """Select the print mode byte."""
        return bytes([ESC, 0x21, mask])

    @staticmethod
    def underline(height: int) -> bytes:
        """Set underline height in dots (0 turns it off)."""
        return bytes([ESC, 0x2D, height])

    @staticmethod
    def bold(enabled: bool) -> bytes:
        """
        Toggle bold.

        Firmware variants disagree on which command means bold, so both
        are always sent together.
        """
        n = 1 if enabled else 0
        return bytes([ESC, 0x20, n, ESC, 0x45, n])

    @staticmethod
    def inverse(enabled: bool) -> bytes:
        """Toggle white-on-black printing."""
        return bytes([GS, 0x42, 1 if enabled else 0])

    @staticmethod
    def size(double_width: bool, double_height: bool) -> bytes:
        """Width lives in the high nibble, height in the low nibble."""
        value = (0xF0 if double_width else 0) + (0x0F if double_height else 0)
        return bytes([GS, 0x21, value])

    @staticmethod
    def line_spacing(dots: int) -> bytes:
        """Set line spacing in dots (printer default is 32)."""
        return bytes([ESC, 0x33, dots])

    @staticmethod
    def align(align: Align) -> bytes:
        """Set text alignment."""
        return bytes([ESC, 0x61, int(align)])

    @staticmethod
    def indent(columns: int) -> bytes:
        """Indent by columns; anything outside 0..31 becomes 0."""
        if columns < 0 or columns > MAX_INDENT:
            columns = 0
        return bytes([ESC, 0x42, columns])

    @staticmethod
    def line_feed() -> bytes:
        """Print the buffer and feed one line."""
        return bytes([LF])

    @staticmethod
    def feed_lines(lines: int) -> bytes:
        """Print the buffer and feed n lines."""
        return bytes([ESC, 0x64, lines])

    @staticmethod
    def feed_dots(dots: int) -> bytes:
        """Print the buffer and feed n dots."""
        return bytes([ESC, 0x4A, dots])

    @staticmethod
    def horizontal_line(length: int) -> bytes:
        """
        Build a horizontal rule.

        Args:
            length: Rule length in characters, clamped to 32

        Returns:
            Fill characters followed by a line feed, or nothing when
            length is not positive
        """
        if length <= 0:
            return b""
        length = min(length, MAX_RULE_LENGTH)
        return bytes([HORIZONTAL_RULE_CHAR]) * length + bytes([LF])

    @staticmethod
    def power(online: bool) -> bytes:
        """Put the printer online (wake) or offline (sleep)."""
        return bytes([ESC, 0x3D, 1 if online else 0])

    @staticmethod
    def select_codepage(code: int) -> bytes:
        """Select the device character table."""
        return bytes([ESC, 0x74, code])

    @staticmethod
    def barcode(type_code: int, payload: bytes) -> bytes:
        """Print a barcode; the payload is NUL terminated."""
        return bytes([GS, 0x6B, type_code]) + bytes(payload) + bytes([NUL])

    @staticmethod
    def barcode_width(width: BarcodeWidth) -> bytes:
        """Select the barcode module width."""
        return bytes([GS, 0x77, int(width)])

    @staticmethod
    def barcode_left_space(dots: int) -> bytes:
        """Set blank space in dots left of the barcode."""
        return bytes([GS, 0x78, dots])

    @staticmethod
    def raster_header(height: int) -> bytes:
        """
        Start an LSB-first bitmap of the given height.

        The height follows as a 16-bit little-endian value; the row data
        is streamed separately.
        """
        return bytes([DC2, 0x76, height & 0xFF, (height >> 8) & 0xFF])
