"""
Exception hierarchy for the thermal printer encoder.

Every error raised by the package derives from PrinterError, so callers
can catch a single type around a print job.
"""


class PrinterError(Exception):
    """Base exception for all printer errors."""

    pass


class TransportError(PrinterError):
    """Writing to or sleeping on the transport failed."""

    pass


class EncodingError(PrinterError, ValueError):
    """Text cannot be represented in the active printer codepage."""

    pass


class GeometryError(PrinterError, ValueError):
    """Image dimensions are not printable."""

    pass


class ValidationError(PrinterError, ValueError):
    """Barcode payload does not satisfy its symbology rules."""

    pass
