"""
Native barcode encoding.

The printer renders 1D barcodes itself (GS k). This module knows each
symbology's type code and payload length rule and frames the payload.
"""

from enum import IntEnum
from typing import Callable, Union

from .codepage import Transcoder
from .commands import Commands
from .errors import ValidationError

BarcodeData = Union[str, bytes]


class BarcodeType(IntEnum):
    """Supported symbologies; the value is the GS k type code."""
    UPC_A = 0
    UPC_E = 1
    EAN13 = 2
    EAN8 = 3
    CODE39 = 4
    I25 = 5
    CODEBAR = 6
    CODE93 = 7
    CODE128 = 8
    CODE11 = 9
    MSI = 10


# Symbologies that carry arbitrary bytes and skip upper-casing/transcoding
RAW_PAYLOAD_TYPES = frozenset({BarcodeType.CODE93, BarcodeType.CODE128})


def _longer_than_one(length: int) -> bool:
    return length > 1


LENGTH_RULES: dict[BarcodeType, tuple[Callable[[int], bool], str]] = {
    BarcodeType.UPC_A: (lambda n: n in (11, 12), "11 or 12"),
    BarcodeType.UPC_E: (lambda n: n in (11, 12), "11 or 12"),
    BarcodeType.EAN13: (lambda n: n in (12, 13), "12 or 13"),
    BarcodeType.EAN8: (lambda n: n in (7, 8), "7 or 8"),
    BarcodeType.CODE39: (_longer_than_one, "more than 1"),
    # Kept as the printer vendor documents it; an even length of 0 passes
    BarcodeType.I25: (lambda n: n > 1 or n % 2 == 0, "more than 1 or even"),
    BarcodeType.CODEBAR: (_longer_than_one, "more than 1"),
    BarcodeType.CODE93: (_longer_than_one, "more than 1"),
    BarcodeType.CODE128: (_longer_than_one, "more than 1"),
    BarcodeType.CODE11: (_longer_than_one, "more than 1"),
    BarcodeType.MSI: (_longer_than_one, "more than 1"),
}


def parse_barcode_type(name: str) -> BarcodeType:
    """
    Look up a symbology by name ("ean13", "upc-a", "CODE128", ...).

    Raises:
        ValidationError: If the name is not a supported symbology
    """
    key = name.strip().upper().replace("-", "").replace("_", "")
    by_key = {t.name.replace("_", ""): t for t in BarcodeType}
    if key not in by_key:
        valid = ", ".join(t.name.lower() for t in BarcodeType)
        raise ValidationError(f"Unknown barcode type: {name!r}. Supported: {valid}")
    return by_key[key]


def is_valid_length(barcode_type: BarcodeType, data: BarcodeData) -> bool:
    """Check the payload length against the symbology rule."""
    rule, _ = LENGTH_RULES[BarcodeType(barcode_type)]
    return rule(len(data))


def validate(barcode_type: BarcodeType, data: BarcodeData) -> None:
    """
    Validate a barcode payload.

    Raises:
        ValidationError: If the length rule fails, or bytes were given for
            a symbology that is transcoded as text
    """
    barcode_type = BarcodeType(barcode_type)

    if isinstance(data, (bytes, bytearray)) and barcode_type not in RAW_PAYLOAD_TYPES:
        raise ValidationError(
            f"{barcode_type.name} payload must be text; "
            "only CODE93 and CODE128 accept bytes"
        )

    if not is_valid_length(barcode_type, data):
        _, description = LENGTH_RULES[barcode_type]
        raise ValidationError(
            f"{barcode_type.name} payload length must be {description}, got {len(data)}"
        )


def _upper_each(text: str) -> str:
    # Characters whose upper case is longer ("ß" -> "SS") are kept as is
    return "".join(c.upper() if len(c.upper()) == 1 else c for c in text)


def encode_payload(barcode_type: BarcodeType, data: BarcodeData, transcoder: Transcoder) -> bytes:
    """
    Convert a payload to the bytes sent after the type code.

    CODE93/CODE128 payloads go out as raw bytes. Everything else is
    upper-cased character by character and encoded in the active codepage. The result is cut to
    len(data), the length the rule was checked against.
    """
    barcode_type = BarcodeType(barcode_type)

    if barcode_type in RAW_PAYLOAD_TYPES:
        raw = bytes(data) if isinstance(data, (bytes, bytearray)) else data.encode("utf-8")
    else:
        raw = transcoder.encode(_upper_each(data))

    return raw[:len(data)]


def encode_barcode(barcode_type: BarcodeType, data: BarcodeData, transcoder: Transcoder) -> bytes:
    """
    Build the complete GS k command for a payload.

    Raises:
        ValidationError: If the payload fails validation
        EncodingError: If a text payload cannot be encoded
    """
    validate(barcode_type, data)
    payload = encode_payload(barcode_type, data, transcoder)
    return Commands.barcode(int(barcode_type), payload)
