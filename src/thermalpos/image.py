"""
Image Processing for ESC/POS Thermal Printers.

Converts images to the printer's LSB-first raster format. The print head
is exactly 384 dots wide, so every raster row is 48 bytes.
"""

from io import BytesIO
from pathlib import Path
from typing import Iterator, Union

from PIL import Image, ImageDraw, ImageOps

from .commands import Commands
from .errors import GeometryError

PRINT_WIDTH = 384
ROW_BYTES = PRINT_WIDTH // 8

# Largest height the 16-bit raster header can carry
MAX_IMAGE_HEIGHT = 0xFFFF

# Refuse to decode anything larger than this
MAX_IMAGE_DIMENSION = 20000
MAX_IMAGE_PIXELS = 25_000_000

ImageSource = Union[str, Path, bytes, Image.Image]


class ImageSizeError(GeometryError):
    """Image is too large to load."""


def is_dark(r: int, g: int, b: int) -> bool:
    """
    True if a pixel should be printed.

    Uses HSL lightness, (max + min) / 2 on a 0-1 scale, against a 0.5
    threshold. Integer form of (max + min) / 510 < 0.5.
    """
    return max(r, g, b) + min(r, g, b) < 255


class RasterEncoder:
    """Pack 384-dot-wide images into DC2 v raster rows."""

    @staticmethod
    def validate(image: Image.Image) -> None:
        """
        Check that an image fits the raster command.

        Raises:
            GeometryError: If width is not 384 or height is out of range
        """
        if image.width != PRINT_WIDTH:
            raise GeometryError(
                f"Image width must be {PRINT_WIDTH}px, got {image.width}px"
            )
        if image.height > MAX_IMAGE_HEIGHT:
            raise GeometryError(
                f"Image height cannot exceed {MAX_IMAGE_HEIGHT}px, got {image.height}px"
            )

    @staticmethod
    def rows(image: Image.Image) -> Iterator[bytes]:
        """
        Iterate over image rows as packed bytes.

        Bit n of byte x is pixel x*8+n, so the leftmost pixel of each
        group is the least significant bit. Dark pixels are 1.
        """
        RasterEncoder.validate(image)

        rgb = image.convert("RGB")
        data = rgb.tobytes()
        stride = PRINT_WIDTH * 3

        for y in range(rgb.height):
            line = data[y * stride:(y + 1) * stride]
            row = bytearray(ROW_BYTES)
            for x in range(ROW_BYTES):
                value = 0
                for n in range(8):
                    i = (x * 8 + n) * 3
                    if is_dark(line[i], line[i + 1], line[i + 2]):
                        value |= 1 << n
                row[x] = value
            yield bytes(row)

    @staticmethod
    def header(image: Image.Image) -> bytes:
        """Raster command header for the image."""
        RasterEncoder.validate(image)
        return Commands.raster_header(image.height)


def _check_load_limits(width: int, height: int) -> None:
    if max(width, height) > MAX_IMAGE_DIMENSION:
        raise ImageSizeError(
            f"{width}x{height} image is larger than {MAX_IMAGE_DIMENSION}px on a side"
        )
    if width * height > MAX_IMAGE_PIXELS:
        raise ImageSizeError(
            f"{width}x{height} image has more than {MAX_IMAGE_PIXELS:,} pixels"
        )


class ImageProcessor:
    """Open arbitrary images and fit them to the print head."""

    def __init__(self, width: int = PRINT_WIDTH, threshold: int = 128):
        """
        Args:
            width: Output width in dots (default: the full print head)
            threshold: Grey levels below this print black (0-255)
        """
        self.width = width
        self.threshold = threshold

    def load(self, source: ImageSource) -> Image.Image:
        """
        Open an image from a path, encoded bytes or an existing Image.

        Raises:
            ImageSizeError: Larger than MAX_IMAGE_DIMENSION on a side or
                MAX_IMAGE_PIXELS in total
            ValueError: Unsupported source type
            FileNotFoundError: Path does not exist
        """
        if isinstance(source, Image.Image):
            image = source
        elif isinstance(source, bytes):
            image = Image.open(BytesIO(source))
        elif isinstance(source, (str, Path)):
            image = Image.open(Path(source))
        else:
            raise ValueError(f"Unsupported source type: {type(source).__name__}")

        _check_load_limits(image.width, image.height)
        return image

    def prepare(self, image: Image.Image, rotate: bool = False) -> Image.Image:
        """
        Greyscale, optionally rotate a quarter turn, scale to self.width
        keeping the aspect ratio, then threshold to 1-bit.
        """
        grey = ImageOps.grayscale(image)
        if rotate:
            grey = grey.transpose(Image.Transpose.ROTATE_90)

        if grey.width != self.width:
            height = max(1, grey.height * self.width // grey.width)
            grey = grey.resize((self.width, height), Image.Resampling.LANCZOS)

        table = [0 if level < self.threshold else 255 for level in range(256)]
        return grey.point(table, mode="1")


def create_test_pattern(height: int = 96) -> Image.Image:
    """Full-width border and both diagonals, for checking head alignment."""
    img = Image.new("1", (PRINT_WIDTH, height), 1)
    draw = ImageDraw.Draw(img)
    right, bottom = PRINT_WIDTH - 1, height - 1
    draw.rectangle([0, 0, right, bottom], outline=0)
    draw.line([0, 0, right, bottom], fill=0)
    draw.line([0, bottom, right, 0], fill=0)
    return img
