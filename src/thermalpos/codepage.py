"""
Codepage transcoding.

The printer interprets every text byte against a single-byte character
table selected with ESC t. Text is encoded host-side with the matching
Python codec; characters the table cannot represent are an error rather
than a silent '?'.
"""

import codecs
from typing import Optional

from .commands import Commands
from .errors import EncodingError

DEFAULT_CODEPAGE = "ibm850"

# Python codec name -> ESC t table number
DEVICE_CODEPAGES = {
    "cp437": 0,
    "cp850": 1,
}


def _codec_name(name: str) -> str:
    """Resolve any alias ("IBM437", "437", "cp437") to the codec name."""
    try:
        return codecs.lookup(name).name
    except LookupError:
        raise EncodingError(f"Unknown codepage: {name!r}") from None


class Transcoder:
    """Encode text for the active printer codepage."""

    def __init__(self, name: str = DEFAULT_CODEPAGE):
        """
        Args:
            name: Codepage name or any alias Python knows for it

        Raises:
            EncodingError: If Python has no codec with that name
        """
        self.codec = _codec_name(name)
        self.name = name

    def encode(self, text: str) -> bytes:
        """
        Encode text for the printer.

        Raises:
            EncodingError: If a character has no mapping in the codepage
        """
        try:
            return text.encode(self.codec)
        except UnicodeEncodeError as e:
            bad = e.object[e.start:e.end]
            raise EncodingError(
                f"Character {bad!r} at position {e.start} cannot be encoded "
                f"in codepage {self.name}"
            ) from e

    @property
    def device_code(self) -> Optional[int]:
        """ESC t table number, or None if the printer has no such table."""
        return DEVICE_CODEPAGES.get(self.codec)

    @staticmethod
    def select_command(name: str) -> Optional[bytes]:
        """
        Build the command announcing a codepage to the printer.

        Returns:
            ESC t command, or None when the name is not one of the
            printer's tables
        """
        try:
            code = Transcoder(name).device_code
        except EncodingError:
            return None
        if code is None:
            return None
        return Commands.select_codepage(code)

    def __repr__(self) -> str:
        return f"Transcoder(name={self.name!r}, codec={self.codec!r})"
