"""
High-Level Thermal Printer Interface.

Provides a simple API for printing receipts on an ESC/POS serial thermal
printer: styled text lines, native barcodes, raster images and printer
configuration. Commands are written to the transport in the order they
are produced.
"""

import logging
from dataclasses import replace
from pathlib import Path
from typing import Optional

from PIL import Image

from .barcode import BarcodeData, BarcodeType, encode_barcode
from .codepage import Transcoder
from .commands import Align, BarcodeWidth, Commands
from .config import PrinterConfig
from .errors import EncodingError, TransportError, ValidationError
from .image import ImageProcessor, ImageSource, RasterEncoder
from .style import PrintingStyle, StyleLike, TextStyle
from .transport import Transport

logger = logging.getLogger(__name__)

RESET_SETTLE_MS = 50


class ThermalPrinter:
    """
    One printer session.

    Not thread-safe: a session must be driven by a single thread.
    """

    def __init__(
        self,
        transport: Transport,
        config: Optional[PrinterConfig] = None,
        strict: bool = True,
    ):
        """
        Initialize the printer: reset, heating parameters, codepage.

        Args:
            transport: Where command bytes go
            config: Session settings, copied (defaults if omitted)
            strict: Raise on invalid barcodes and unknown codepages. With
                strict=False such requests are logged and dropped, which
                matches the behaviour of older drivers.
        """
        self.transport = transport
        # Own copy; configuration calls must not leak into other sessions
        self.config = replace(config) if config is not None else PrinterConfig()
        self.strict = strict
        self.transcoder = Transcoder(self.config.codepage)

        self.reset()
        self.set_printing_parameters(
            self.config.max_printing_dots,
            self.config.heating_time,
            self.config.heating_interval,
        )
        self._announce_codepage(self.config.codepage)

    # ---- Transport ----

    def _send(self, data: bytes) -> None:
        """Write one command to the transport."""
        if not data:
            return
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("TX: %s", data.hex() if len(data) < 50 else data[:50].hex() + "...")
        try:
            result = self.transport.write(data)
        except TransportError:
            raise
        except OSError as e:
            raise TransportError(f"Write failed: {e}") from e
        if result is False:
            raise TransportError(f"Write of {len(data)} bytes failed")

    def _sleep(self, milliseconds: float) -> None:
        try:
            self.transport.sleep(milliseconds)
        except TransportError:
            raise
        except OSError as e:
            raise TransportError(f"Sleep failed: {e}") from e

    def send_raw(self, data: bytes) -> None:
        """Send raw bytes, for commands this class does not cover."""
        self._send(bytes(data))

    # ---- Configuration ----

    def reset(self):
        """Initialize the printer and give it time to settle."""
        self._send(Commands.initialize())
        self._sleep(RESET_SETTLE_MS)

    def set_printing_parameters(self, max_dots: int, heating_time: int, heating_interval: int):
        """
        Set thermal head parameters. Values are sent as given.

        Args:
            max_dots: Max printing dots (0-255), unit (n+1)*8 dots
            heating_time: Heating time (3-255), unit 10us
            heating_interval: Heating interval (0-255), unit 10us
        """
        self._send(Commands.printing_parameters(max_dots, heating_time, heating_interval))
        self.config.max_printing_dots = max_dots
        self.config.heating_time = heating_time
        self.config.heating_interval = heating_interval

    def set_line_spacing(self, dots: int):
        """Set line spacing in dots (printer default: 32)."""
        self._send(Commands.line_spacing(dots))

    def set_align(self, align: Align):
        """Set text alignment."""
        self._send(Commands.align(Align(align)))

    def set_align_left(self):
        self.set_align(Align.LEFT)

    def set_align_center(self):
        self.set_align(Align.CENTER)

    def set_align_right(self):
        self.set_align(Align.RIGHT)

    def indent(self, columns: int):
        """Indent text; columns outside 0..31 reset the indent to 0."""
        self._send(Commands.indent(columns))

    def line_feed(self, lines: Optional[int] = None):
        """Print the buffer and feed one line, or `lines` lines."""
        if lines is None:
            self._send(Commands.line_feed())
        else:
            self._send(Commands.feed_lines(lines))

    def feed_dots(self, dots: int):
        """Print the buffer and feed `dots` dots."""
        self._send(Commands.feed_dots(dots))

    def horizontal_line(self, length: int):
        """Print a horizontal rule of up to 32 characters."""
        self._send(Commands.horizontal_line(length))

    def sleep(self):
        """Put the printer offline."""
        self._send(Commands.power(False))

    def wake_up(self):
        """Put the printer online."""
        self._send(Commands.power(True))

    # ---- Codepage ----

    def _announce_codepage(self, name: str) -> bool:
        command = Transcoder.select_command(name)
        if command is None:
            if self.strict:
                raise EncodingError(f"Printer has no character table for codepage {name!r}")
            logger.warning(
                "Codepage %r has no printer table; the printer keeps its previous table", name
            )
            return False
        self._send(command)
        return True

    def set_codepage(self, name: str) -> bool:
        """
        Switch the codepage used for text and announce it to the printer.

        Returns:
            True if the printer was told; False in non-strict mode when the
            printer has no table for the codepage

        Raises:
            EncodingError: Unknown codec, or (strict) no printer table
        """
        transcoder = Transcoder(name)
        announced = self._announce_codepage(name)
        self.transcoder = transcoder
        self.config.codepage = name
        return announced

    @property
    def encoding(self) -> str:
        """Name of the active codepage."""
        return self.transcoder.name

    # ---- Text ----

    def write_to_buffer(self, text: str):
        """
        Send text without printing it; the printer prints on line feed.

        Leading and trailing newlines, then carriage returns, are removed.
        """
        text = text.strip("\n").strip("\r")
        self._send(self.transcoder.encode(text))

    def write_line(self, text: str, style: Optional[StyleLike] = None):
        """
        Print a line of text.

        Args:
            text: Text to print
            style: Optional PrintingStyle flags, raw mask or TextStyle
        """
        if style is None:
            self._write_line(text)
            return

        text_style = TextStyle.coerce(style)
        # Encode before sending anything so a bad character leaves no styling behind
        payload = self.transcoder.encode(text.strip("\n").strip("\r"))

        if text_style.underline:
            self._send(Commands.underline(int(text_style.underline)))
        self._send(Commands.style(text_style.style_byte))

        self._send(payload)
        self._end_line()

        if text_style.underline:
            self._send(Commands.underline(0))
        self._send(Commands.style(0))

    def _write_line(self, text: str):
        self.write_to_buffer(text)
        self._end_line()

    def _end_line(self):
        self._send(Commands.line_feed())
        self._sleep(self.config.line_write_delay_ms)

    def write_line_inverted(self, text: str):
        """Print a line white on black."""
        self.transcoder.encode(text)
        self.white_on_black_on()
        self._write_line(text)
        self.white_on_black_off()
        self.line_feed()

    def write_line_bold(self, text: str):
        """Print a line in bold."""
        self.transcoder.encode(text)
        self.bold_on()
        self._write_line(text)
        self.bold_off()
        self.line_feed()

    def write_line_big(self, text: str):
        """Print a line double width, double height and bold."""
        self.transcoder.encode(text)
        big = PrintingStyle.DOUBLE_HEIGHT | PrintingStyle.DOUBLE_WIDTH | PrintingStyle.BOLD
        self._send(Commands.style(int(big)))
        self._write_line(text)
        self._send(Commands.style(0))

    def bold_on(self):
        self._send(Commands.bold(True))

    def bold_off(self):
        self._send(Commands.bold(False))

    def white_on_black_on(self):
        self._send(Commands.inverse(True))

    def white_on_black_off(self):
        self._send(Commands.inverse(False))

    def set_size(self, double_width: bool, double_height: bool):
        """Set character size for following text."""
        self._send(Commands.size(double_width, double_height))

    # ---- Barcodes ----

    def print_barcode(self, barcode_type: BarcodeType, data: BarcodeData) -> bool:
        """
        Print a barcode rendered by the printer.

        Args:
            barcode_type: Symbology
            data: Payload; bytes are accepted for CODE93 and CODE128

        Returns:
            True if the barcode was sent. False only in non-strict mode,
            when an invalid payload was dropped.

        Raises:
            ValidationError: Payload fails the symbology rules (strict)
            EncodingError: Payload cannot be encoded in the codepage
        """
        try:
            command = encode_barcode(BarcodeType(barcode_type), data, self.transcoder)
        except ValidationError as e:
            if self.strict:
                raise
            logger.warning("Barcode dropped: %s", e)
            return False

        self._send(command)
        return True

    def set_large_barcode(self, large: bool):
        """Select large or normal barcode module width."""
        self._send(Commands.barcode_width(BarcodeWidth.LARGE if large else BarcodeWidth.NORMAL))

    def set_barcode_left_space(self, dots: int):
        """Set blank space left of the barcode, in dots."""
        self._send(Commands.barcode_left_space(dots))

    # ---- Images ----

    def print_image(self, image: ImageSource):
        """
        Print a raster image. The image must be 384px wide.

        Rows are streamed one at a time with image_row_delay_ms before
        each, so the printer's buffer does not overflow.

        Args:
            image: PIL Image, or a path/bytes to load one from

        Raises:
            GeometryError: Wrong width or too tall; nothing is sent
            FileNotFoundError: Image path does not exist
        """
        if not isinstance(image, Image.Image):
            if isinstance(image, (str, Path)) and not Path(image).exists():
                raise FileNotFoundError(f"Image file not found: {image}")
            image = ImageProcessor().load(image)

        header = RasterEncoder.header(image)
        logger.debug("Printing image %dx%d", image.width, image.height)

        self._send(header)
        for row in RasterEncoder.rows(image):
            self._sleep(self.config.image_row_delay_ms)
            self._send(row)

    def __repr__(self) -> str:
        return (
            f"ThermalPrinter(transport={self.transport!r}, "
            f"max_printing_dots={self.config.max_printing_dots}, "
            f"heating_time={self.config.heating_time}, "
            f"heating_interval={self.config.heating_interval}, "
            f"image_row_delay_ms={self.config.image_row_delay_ms}, "
            f"line_write_delay_ms={self.config.line_write_delay_ms}, "
            f"encoding={self.encoding!r}, strict={self.strict})"
        )


