"""ESC/POS Serial Thermal Printer Driver."""

__version__ = "0.1.0"

from .barcode import BarcodeType
from .codepage import Transcoder
from .commands import Align, Commands
from .config import PrinterConfig
from .errors import (
    EncodingError,
    GeometryError,
    PrinterError,
    TransportError,
    ValidationError,
)
from .image import (
    MAX_IMAGE_HEIGHT,
    PRINT_WIDTH,
    ImageProcessor,
    ImageSizeError,
    RasterEncoder,
)
from .printer import ThermalPrinter
from .style import PrintingStyle, TextStyle, UnderlineHeight
from .transport import BufferTransport, SerialTransport, Transport

__all__ = [
    "ThermalPrinter",
    "PrinterConfig",
    "PrinterError",
    "TransportError",
    "EncodingError",
    "GeometryError",
    "ValidationError",
    "ImageSizeError",
    "MAX_IMAGE_HEIGHT",
    "PRINT_WIDTH",
    "ImageProcessor",
    "RasterEncoder",
    "BarcodeType",
    "Transcoder",
    "Align",
    "Commands",
    "PrintingStyle",
    "TextStyle",
    "UnderlineHeight",
    "Transport",
    "SerialTransport",
    "BufferTransport",
]
