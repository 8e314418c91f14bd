"""Tests for ESC/POS command builders."""

import pytest

from thermalpos.commands import (
    HORIZONTAL_RULE_CHAR,
    Align,
    BarcodeWidth,
    Commands,
)


class TestConfigurationCommands:
    """Test printer setup commands."""

    def test_initialize(self):
        """ESC @"""
        assert Commands.initialize() == bytes([27, 64])

    def test_printing_parameters(self):
        """ESC 7 passes the three values through in order."""
        assert Commands.printing_parameters(7, 80, 2) == bytes([27, 55, 7, 80, 2])

    def test_printing_parameters_not_range_checked(self):
        """Heating time below the nominal minimum of 3 is still sent."""
        assert Commands.printing_parameters(0, 1, 0) == bytes([27, 55, 0, 1, 0])

    def test_line_spacing(self):
        assert Commands.line_spacing(32) == bytes([27, 51, 32])

    @pytest.mark.parametrize("align,value", [
        (Align.LEFT, 0),
        (Align.CENTER, 1),
        (Align.RIGHT, 2),
    ])
    def test_align(self, align, value):
        assert Commands.align(align) == bytes([27, 97, value])

    def test_power(self):
        """ESC = 0 sleeps, ESC = 1 wakes."""
        assert Commands.power(False) == bytes([27, 61, 0])
        assert Commands.power(True) == bytes([27, 61, 1])

    def test_select_codepage(self):
        assert Commands.select_codepage(1) == bytes([27, 116, 1])


class TestIndent:
    """Test indent coercion."""

    def test_indent_in_range(self):
        assert Commands.indent(5) == bytes([27, 66, 5])

    def test_indent_upper_bound(self):
        assert Commands.indent(31) == bytes([27, 66, 31])

    def test_indent_out_of_range_is_zero(self):
        """indent(50) behaves like indent(0)."""
        assert Commands.indent(50) == Commands.indent(0)
        assert Commands.indent(32) == bytes([27, 66, 0])

    def test_negative_indent_is_zero(self):
        assert Commands.indent(-1) == bytes([27, 66, 0])


class TestFeedCommands:
    """Test paper feed commands."""

    def test_line_feed(self):
        assert Commands.line_feed() == b"\n"

    def test_feed_lines(self):
        assert Commands.feed_lines(3) == bytes([27, 100, 3])

    def test_feed_dots(self):
        assert Commands.feed_dots(24) == bytes([27, 74, 24])


class TestHorizontalLine:
    """Test horizontal rule generation."""

    def test_short_rule(self):
        assert Commands.horizontal_line(3) == bytes([0xC4, 0xC4, 0xC4, 10])

    def test_rule_clamped_to_32(self):
        """horizontal_line(40) emits exactly 32 fill bytes and a line feed."""
        data = Commands.horizontal_line(40)
        assert len(data) == 33
        assert data[:32] == bytes([HORIZONTAL_RULE_CHAR]) * 32
        assert data[-1] == 10

    def test_zero_length_emits_nothing(self):
        assert Commands.horizontal_line(0) == b""

    def test_negative_length_emits_nothing(self):
        assert Commands.horizontal_line(-5) == b""


class TestTextCommands:
    """Test text formatting commands."""

    def test_style(self):
        assert Commands.style(0x38) == bytes([27, 33, 0x38])

    def test_underline(self):
        assert Commands.underline(2) == bytes([27, 45, 2])

    def test_bold_sends_both_commands(self):
        """Bold toggles ESC SP and ESC E together."""
        assert Commands.bold(True) == bytes([27, 32, 1, 27, 69, 1])
        assert Commands.bold(False) == bytes([27, 32, 0, 27, 69, 0])

    def test_inverse(self):
        assert Commands.inverse(True) == bytes([29, 66, 1])
        assert Commands.inverse(False) == bytes([29, 66, 0])

    @pytest.mark.parametrize("width,height,value", [
        (True, False, 0xF0),
        (False, True, 0x0F),
        (True, True, 0xFF),
        (False, False, 0x00),
    ])
    def test_size_nibbles(self, width, height, value):
        """Width and height occupy independent nibbles."""
        assert Commands.size(width, height) == bytes([29, 33, value])


class TestBarcodeCommands:
    """Test barcode framing commands."""

    def test_barcode_frame(self):
        assert Commands.barcode(2, b"1234567890128") == (
            bytes([29, 107, 2]) + b"1234567890128" + b"\x00"
        )

    def test_barcode_width(self):
        assert Commands.barcode_width(BarcodeWidth.NORMAL) == bytes([29, 119, 2])
        assert Commands.barcode_width(BarcodeWidth.LARGE) == bytes([29, 119, 3])

    def test_barcode_left_space(self):
        assert Commands.barcode_left_space(25) == bytes([29, 120, 25])


class TestRasterHeader:
    """Test raster image header."""

    def test_small_height(self):
        assert Commands.raster_header(2) == bytes([18, 118, 2, 0])

    def test_height_is_little_endian(self):
        assert Commands.raster_header(0x0203) == bytes([18, 118, 0x03, 0x02])

    def test_max_height(self):
        assert Commands.raster_header(65535) == bytes([18, 118, 0xFF, 0xFF])
