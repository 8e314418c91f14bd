"""Tests for native barcode encoding."""

import pytest

from thermalpos.barcode import (
    BarcodeType,
    encode_barcode,
    encode_payload,
    is_valid_length,
    parse_barcode_type,
    validate,
)
from thermalpos.codepage import Transcoder
from thermalpos.errors import ValidationError


@pytest.fixture
def transcoder():
    return Transcoder("cp437")


class TestBarcodeType:
    """Test symbology type codes and name lookup."""

    def test_type_codes(self):
        """Test that type codes match the GS k values."""
        assert [(t.name, t.value) for t in BarcodeType] == [
            ("UPC_A", 0), ("UPC_E", 1), ("EAN13", 2), ("EAN8", 3),
            ("CODE39", 4), ("I25", 5), ("CODEBAR", 6), ("CODE93", 7),
            ("CODE128", 8), ("CODE11", 9), ("MSI", 10),
        ]

    @pytest.mark.parametrize("name,expected", [
        ("ean13", BarcodeType.EAN13),
        ("EAN-13", BarcodeType.EAN13),
        ("upc_a", BarcodeType.UPC_A),
        ("upc-e", BarcodeType.UPC_E),
        ("Code128", BarcodeType.CODE128),
    ])
    def test_parse_names(self, name, expected):
        """Test that common spellings resolve."""
        assert parse_barcode_type(name) == expected

    def test_parse_unknown(self):
        """Test that unknown names raise ValidationError."""
        with pytest.raises(ValidationError, match="Unknown barcode type"):
            parse_barcode_type("qr")


class TestLengthRules:
    """Test per-symbology payload length rules."""

    @pytest.mark.parametrize("barcode_type", [BarcodeType.UPC_A, BarcodeType.UPC_E])
    def test_upc(self, barcode_type):
        assert is_valid_length(barcode_type, "0" * 11)
        assert is_valid_length(barcode_type, "0" * 12)
        assert not is_valid_length(barcode_type, "0" * 10)
        assert not is_valid_length(barcode_type, "0" * 13)

    def test_ean13(self):
        assert is_valid_length(BarcodeType.EAN13, "0" * 12)
        assert is_valid_length(BarcodeType.EAN13, "0" * 13)
        assert not is_valid_length(BarcodeType.EAN13, "0" * 11)
        assert not is_valid_length(BarcodeType.EAN13, "0" * 14)

    def test_ean8(self):
        assert is_valid_length(BarcodeType.EAN8, "0" * 7)
        assert is_valid_length(BarcodeType.EAN8, "0" * 8)
        assert not is_valid_length(BarcodeType.EAN8, "0" * 6)
        assert not is_valid_length(BarcodeType.EAN8, "0" * 9)

    @pytest.mark.parametrize("barcode_type", [
        BarcodeType.CODE39,
        BarcodeType.CODEBAR,
        BarcodeType.CODE93,
        BarcodeType.CODE128,
        BarcodeType.CODE11,
        BarcodeType.MSI,
    ])
    def test_variable_length(self, barcode_type):
        """Test that variable-length symbologies need at least 2 characters."""
        assert is_valid_length(barcode_type, "AB")
        assert not is_valid_length(barcode_type, "A")
        assert not is_valid_length(barcode_type, "")

    def test_i25_rule(self):
        """Test I25: longer than one or even, so an empty payload passes."""
        assert is_valid_length(BarcodeType.I25, "1234")
        assert is_valid_length(BarcodeType.I25, "12345")
        assert is_valid_length(BarcodeType.I25, "")
        assert not is_valid_length(BarcodeType.I25, "1")


class TestValidate:
    """Test payload validation errors."""

    def test_bad_length_message(self):
        """Test that the error names the symbology and rule."""
        with pytest.raises(ValidationError, match="EAN13 payload length must be 12 or 13, got 5"):
            validate(BarcodeType.EAN13, "12345")

    def test_bytes_rejected_for_text_symbology(self):
        """Test that bytes are only accepted for CODE93/CODE128."""
        with pytest.raises(ValidationError, match="must be text"):
            validate(BarcodeType.CODE39, b"ABC")

    def test_bytes_accepted_for_code128(self):
        validate(BarcodeType.CODE128, b"\x01\x02\x03")

    def test_validation_error_is_value_error(self):
        with pytest.raises(ValueError):
            validate(BarcodeType.EAN8, "1")


class TestEncodePayload:
    """Test payload conversion."""

    def test_characters_with_longer_upper_case_kept(self, transcoder):
        """Test that "ß" is not expanded to "SS" and the payload is not cut."""
        assert encode_payload(BarcodeType.CODE39, "straße", transcoder) == b"STRA\xe1E"

    def test_text_symbology_is_uppercased(self, transcoder):
        """Test that CODE39 payloads are upper-cased."""
        assert encode_payload(BarcodeType.CODE39, "abc-1", transcoder) == b"ABC-1"

    def test_code128_keeps_case(self, transcoder):
        """Test that CODE128 payloads are sent as raw bytes."""
        assert encode_payload(BarcodeType.CODE128, "abc", transcoder) == b"abc"

    def test_code93_bytes_passthrough(self, transcoder):
        assert encode_payload(BarcodeType.CODE93, b"\x00\xffZ", transcoder) == b"\x00\xffZ"

    def test_raw_payload_cut_to_character_count(self, transcoder):
        """Test that multi-byte UTF-8 is cut to len(data) bytes."""
        assert encode_payload(BarcodeType.CODE128, "aé", transcoder) == b"a\xc3"


class TestEncodeBarcode:
    """Test complete GS k commands."""

    def test_ean13(self, transcoder):
        """Test the framed EAN13 command."""
        assert encode_barcode(BarcodeType.EAN13, "3350030103392", transcoder) == (
            bytes([29, 107, 2]) + b"3350030103392" + bytes([0])
        )

    def test_upc_a(self, transcoder):
        assert encode_barcode(BarcodeType.UPC_A, "03600029145", transcoder) == (
            bytes([29, 107, 0]) + b"03600029145" + bytes([0])
        )

    def test_invalid_payload_raises(self, transcoder):
        with pytest.raises(ValidationError):
            encode_barcode(BarcodeType.EAN8, "123", transcoder)

    def test_code39_lowercase(self, transcoder):
        assert encode_barcode(BarcodeType.CODE39, "hello", transcoder) == (
            bytes([29, 107, 4]) + b"HELLO" + bytes([0])
        )
