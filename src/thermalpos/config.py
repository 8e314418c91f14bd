"""
Printer session configuration.
"""

from dataclasses import dataclass

from .codepage import DEFAULT_CODEPAGE


@dataclass
class PrinterConfig:
    """
    Settings owned by one printer session.

    Attributes:
        max_printing_dots: Max dots heated at once (0-255), unit (n+1)*8 dots
        heating_time: Heating time (nominally 3-255), unit 10us
        heating_interval: Heating interval (0-255), unit 10us
        codepage: Character table used for text and barcode payloads
        line_write_delay_ms: Pause after each printed text line
        image_row_delay_ms: Pause before each raster row
    """
    max_printing_dots: int = 7
    heating_time: int = 80
    heating_interval: int = 2
    codepage: str = DEFAULT_CODEPAGE
    line_write_delay_ms: int = 0
    image_row_delay_ms: int = 40
