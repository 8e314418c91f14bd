"""
QR codes as raster images.

ESC/POS printers of this class have no QR command, so the code is drawn
module by module onto a full-width canvas that print_image() accepts.

Needs the optional qrcode package (pip install thermalpos[qr]).
"""

from typing import Literal

from PIL import Image, ImageDraw

from .image import PRINT_WIDTH

QRSize = Literal["small", "medium", "large"]
QRErrorCorrection = Literal["L", "M", "Q", "H"]

# Preset -> (dots per module, quiet zone in modules)
QR_SIZES = {
    "small": (4, 4),
    "medium": (6, 4),
    "large": (8, 4),
}

ERROR_CORRECTION_LEVELS = ("L", "M", "Q", "H")


def generate_qr(
    data: str,
    size: QRSize = "medium",
    error_correction: QRErrorCorrection = "M",
) -> Image.Image:
    """
    Render data as a QR code centred on a 384-dot wide 1-bit image.

    Args:
        data: Text or URL to encode
        size: Module size preset (small, medium, large)
        error_correction: L=7%, M=15%, Q=25%, H=30% recovery

    Raises:
        ImportError: qrcode is not installed
        ValueError: Unknown preset or level, or the code (quiet zone
            included) is wider than the print head
    """
    try:
        import qrcode
        from qrcode import constants
    except ImportError as e:
        raise ImportError(
            "QR codes need the qrcode package. Install with: pip install thermalpos[qr]"
        ) from e

    if size not in QR_SIZES:
        raise ValueError(f"Invalid size: {size!r}. Choose one of {', '.join(QR_SIZES)}")
    if error_correction not in ERROR_CORRECTION_LEVELS:
        raise ValueError(
            f"Invalid error correction: {error_correction!r}. "
            f"Choose one of {', '.join(ERROR_CORRECTION_LEVELS)}"
        )

    module, quiet_zone = QR_SIZES[size]
    code = qrcode.QRCode(
        error_correction=getattr(constants, f"ERROR_CORRECT_{error_correction}"),
        border=quiet_zone,
    )
    code.add_data(data)
    code.make(fit=True)

    # Includes the quiet zone
    matrix = code.get_matrix()
    side = len(matrix) * module
    if side > PRINT_WIDTH:
        raise ValueError(
            f"QR code is {side} dots wide, more than the {PRINT_WIDTH}-dot print head; "
            "use a smaller size or less data"
        )

    canvas = Image.new("1", (PRINT_WIDTH, side), 1)
    draw = ImageDraw.Draw(canvas)
    left = (PRINT_WIDTH - side) // 2
    for row, cells in enumerate(matrix):
        top = row * module
        for col, dark in enumerate(cells):
            if dark:
                x = left + col * module
                draw.rectangle([x, top, x + module - 1, top + module - 1], fill=0)
    return canvas
