"""
Command-Line Interface for ESC/POS Thermal Printers.

Usage:
    thermalpos text "Hello" --bold       - Print a line of text
    thermalpos barcode 3350030103392     - Print a native barcode
    thermalpos image IMAGE               - Print an image
    thermalpos qr DATA                   - Print a QR code
    thermalpos --dry-run rule            - Show the bytes instead of printing
"""

import logging
import sys
from contextlib import contextmanager
from typing import Callable, Iterator

import click

from .barcode import BarcodeType, parse_barcode_type
from .cache import clear_cache, load_cached_port, save_port
from .commands import Align
from .config import PrinterConfig
from .errors import PrinterError
from .image import ImageProcessor, create_test_pattern
from .printer import ThermalPrinter
from .qr import generate_qr
from .style import PrintingStyle
from .transport import BufferTransport, SerialTransport

BAUDRATES = ["1200", "2400", "4800", "9600", "19200", "38400", "57600", "115200"]

ALIGNMENTS = {
    "left": Align.LEFT,
    "center": Align.CENTER,
    "right": Align.RIGHT,
}


def resolve_port(ctx: click.Context) -> tuple[str, int]:
    """Pick the serial port: --port, else the cached one.

    Raises:
        click.UsageError: If neither is available
    """
    port = ctx.obj["port"]
    baudrate = ctx.obj["baudrate"]
    if port:
        return port, baudrate

    cached = load_cached_port()
    if cached is None:
        raise click.UsageError(
            "No serial port given. Use --port or set THERMALPOS_PORT."
        )
    click.echo(f"Using cached port {cached.port} ({cached.baudrate} baud)", err=True)
    return cached.port, cached.baudrate


@contextmanager
def open_printer(ctx: click.Context) -> Iterator[ThermalPrinter]:
    """Yield an initialized printer session for the CLI settings."""
    obj = ctx.obj
    config = PrinterConfig(
        max_printing_dots=obj["heating_dots"],
        heating_time=obj["heating_time"],
        heating_interval=obj["heating_interval"],
        codepage=obj["codepage"],
        line_write_delay_ms=obj["line_delay"],
        image_row_delay_ms=obj["row_delay"],
    )

    if obj["dry_run"]:
        transport = BufferTransport()
        yield ThermalPrinter(transport, config, strict=not obj["legacy"])
        click.echo(transport.data.hex(" "))
        return

    port, baudrate = resolve_port(ctx)
    with SerialTransport(port, baudrate=baudrate) as transport:
        try:
            save_port(port, baudrate)
        except OSError as e:
            click.echo(f"Warning: could not cache port: {e}", err=True)
        yield ThermalPrinter(transport, config, strict=not obj["legacy"])


def run_job(ctx: click.Context, job: Callable[[ThermalPrinter], None]) -> None:
    """Run a print job, turning printer errors into exit code 1."""
    try:
        with open_printer(ctx) as printer:
            job(printer)
    except PrinterError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@click.group()
@click.option("--port", "-p", envvar="THERMALPOS_PORT", help="Serial device (e.g. /dev/serial0)")
@click.option(
    "--baudrate",
    "-b",
    envvar="THERMALPOS_BAUDRATE",
    type=click.Choice(BAUDRATES),
    default="9600",
    show_default=True,
    help="Serial line speed",
)
@click.option("--codepage", default="ibm850", show_default=True, help="Printer codepage")
@click.option("--heating-dots", type=click.IntRange(0, 255), default=7, show_default=True,
              help="Max printing dots, unit (n+1)*8 dots")
@click.option("--heating-time", type=click.IntRange(0, 255), default=80, show_default=True,
              help="Heating time, unit 10us")
@click.option("--heating-interval", type=click.IntRange(0, 255), default=2, show_default=True,
              help="Heating interval, unit 10us")
@click.option("--line-delay", type=click.IntRange(min=0), default=0, show_default=True,
              help="Pause after each text line (ms)")
@click.option("--row-delay", type=click.IntRange(min=0), default=40, show_default=True,
              help="Pause before each image row (ms)")
@click.option("--legacy", is_flag=True, help="Drop invalid barcodes instead of failing")
@click.option("--dry-run", is_flag=True, help="Print the command bytes as hex instead of sending")
@click.option("--debug/--no-debug", default=False, help="Enable debug output")
@click.pass_context
def main(ctx, port, baudrate, codepage, heating_dots, heating_time, heating_interval,
         line_delay, row_delay, legacy, dry_run, debug):
    """ESC/POS thermal printer CLI."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="[%(name)s] %(levelname)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj.update(
        port=port,
        baudrate=int(baudrate),
        codepage=codepage,
        heating_dots=heating_dots,
        heating_time=heating_time,
        heating_interval=heating_interval,
        line_delay=line_delay,
        row_delay=row_delay,
        legacy=legacy,
        dry_run=dry_run,
        debug=debug,
    )


@main.command()
@click.argument("lines", nargs=-1, required=True)
@click.option("--bold", is_flag=True, help="Bold text")
@click.option("--underline", is_flag=True, help="Thin underline")
@click.option("--thick-underline", is_flag=True, help="Thick underline")
@click.option("--double-width", is_flag=True, help="Double width characters")
@click.option("--double-height", is_flag=True, help="Double height characters")
@click.option("--reverse", is_flag=True, help="Reverse (white on black) print mode")
@click.option("--updown", is_flag=True, help="Upside-down characters")
@click.option("--strike", is_flag=True, help="Strike-through")
@click.option("--invert", is_flag=True, help="White on black via GS B")
@click.option("--align", type=click.Choice(list(ALIGNMENTS)), default="left", help="Alignment")
@click.pass_context
def text(ctx, lines, bold, underline, thick_underline, double_width, double_height,
         reverse, updown, strike, invert, align):
    """Print each LINES argument as a line of text.

    Examples:
        thermalpos text "MY SHOP" --double-width --double-height --align center
        thermalpos text "Have a good day." --bold
    """
    flags = {
        PrintingStyle.BOLD: bold,
        PrintingStyle.UNDERLINE: underline,
        PrintingStyle.THICK_UNDERLINE: thick_underline,
        PrintingStyle.DOUBLE_WIDTH: double_width,
        PrintingStyle.DOUBLE_HEIGHT: double_height,
        PrintingStyle.REVERSE: reverse,
        PrintingStyle.UPDOWN: updown,
        PrintingStyle.DELETE_LINE: strike,
    }
    style = PrintingStyle.NONE
    for flag, enabled in flags.items():
        if enabled:
            style |= flag

    if invert and style:
        raise click.UsageError("--invert cannot be combined with style options")

    def job(printer: ThermalPrinter):
        if ALIGNMENTS[align] != Align.LEFT:
            printer.set_align(ALIGNMENTS[align])
        for line in lines:
            if invert:
                printer.write_line_inverted(line)
            elif style:
                printer.write_line(line, style)
            else:
                printer.write_line(line)
        if ALIGNMENTS[align] != Align.LEFT:
            printer.set_align(Align.LEFT)

    run_job(ctx, job)


@main.command()
@click.argument("length", type=int, default=32)
@click.pass_context
def rule(ctx, length):
    """Print a horizontal rule (at most 32 characters)."""
    run_job(ctx, lambda printer: printer.horizontal_line(length))


@main.command()
@click.argument("data")
@click.option(
    "--type",
    "barcode_type",
    type=click.Choice([t.name.lower() for t in BarcodeType]),
    default="ean13",
    show_default=True,
    help="Barcode symbology",
)
@click.option("--large", is_flag=True, help="Large barcode module width")
@click.option("--left-space", type=click.IntRange(0, 255), default=None,
              help="Blank dots left of the barcode")
@click.pass_context
def barcode(ctx, data, barcode_type, large, left_space):
    """Print a barcode rendered by the printer.

    Examples:
        thermalpos barcode 3350030103392
        thermalpos barcode "HELLO-42" --type code39 --large
    """
    symbology = parse_barcode_type(barcode_type)

    def job(printer: ThermalPrinter):
        if left_space is not None:
            printer.set_barcode_left_space(left_space)
        printer.set_large_barcode(large)
        if not printer.print_barcode(symbology, data):
            click.echo("Barcode dropped: invalid payload", err=True)
        printer.line_feed()

    run_job(ctx, job)


@main.command("image")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--no-prepare", is_flag=True, help="Send as is; the image must be 384px wide")
@click.option("--rotate", is_flag=True, help="Rotate 90 degrees before scaling")
@click.option("--threshold", type=click.IntRange(0, 255), default=128, show_default=True,
              help="Black/white threshold")
@click.pass_context
def print_image(ctx, path, no_prepare, rotate, threshold):
    """Print an image file, scaled to the 384-dot print head."""
    processor = ImageProcessor(threshold=threshold)
    try:
        img = processor.load(path)
        if not no_prepare:
            img = processor.prepare(img, rotate=rotate)
    except (PrinterError, OSError) as e:
        click.echo(f"Image error: {e}", err=True)
        sys.exit(1)

    def job(printer: ThermalPrinter):
        printer.print_image(img)
        printer.line_feed()

    run_job(ctx, job)


@main.command()
@click.argument("data")
@click.option(
    "--size",
    type=click.Choice(["small", "medium", "large"]),
    default="medium",
    help="QR code size (default: medium)",
)
@click.option(
    "--error-correction",
    type=click.Choice(["L", "M", "Q", "H"]),
    default="M",
    help="Error correction level (L=7%%, M=15%%, Q=25%%, H=30%%)",
)
@click.pass_context
def qr(ctx, data, size, error_correction):
    """Generate and print a QR code.

    Examples:
        thermalpos qr "https://example.com"
        thermalpos qr "Hello World" --size large
    """
    try:
        img = generate_qr(data, size=size, error_correction=error_correction)
    except ImportError as e:
        click.echo(str(e), err=True)
        sys.exit(1)
    except ValueError as e:
        click.echo(f"Invalid QR data: {e}", err=True)
        sys.exit(1)

    def job(printer: ThermalPrinter):
        printer.print_image(img)
        printer.line_feed()

    run_job(ctx, job)


@main.command()
@click.option("--height", type=click.IntRange(2, 2000), default=96, show_default=True,
              help="Pattern height in dots")
@click.pass_context
def test(ctx, height):
    """Print a full-width test pattern."""
    img = create_test_pattern(height=height)

    def job(printer: ThermalPrinter):
        printer.write_line("Test pattern:")
        printer.print_image(img)
        printer.line_feed()

    run_job(ctx, job)


@main.command()
@click.argument("lines", type=click.IntRange(0, 255), default=1)
@click.option("--dots", type=click.IntRange(0, 255), default=None, help="Feed dots instead of lines")
@click.pass_context
def feed(ctx, lines, dots):
    """Feed paper."""

    def job(printer: ThermalPrinter):
        if dots is not None:
            printer.feed_dots(dots)
        elif lines == 1:
            printer.line_feed()
        else:
            printer.line_feed(lines)

    run_job(ctx, job)


@main.command("sleep")
@click.pass_context
def sleep_printer(ctx):
    """Put the printer offline."""
    run_job(ctx, lambda printer: printer.sleep())


@main.command()
@click.pass_context
def wake(ctx):
    """Put the printer online."""
    run_job(ctx, lambda printer: printer.wake_up())


@main.command()
def forget():
    """Forget the cached serial port."""
    if clear_cache():
        click.echo("Cached port cleared.")
    else:
        click.echo("No cached port.")


@main.command()
@click.argument("hex_data")
@click.option(
    "--force",
    is_flag=True,
    help="Acknowledge risks and skip warning prompt",
)
@click.pass_context
def raw(ctx, hex_data, force):
    """Send raw hex data to printer (for debugging/testing).

    WARNING: This command bypasses all checks. Only use it if you know
    the ESC/POS command set of your printer.
    """
    try:
        data = bytes.fromhex(hex_data)
    except ValueError:
        click.echo("Invalid hex data!", err=True)
        sys.exit(1)

    if not force:
        click.echo(
            "WARNING: Raw mode sends arbitrary data directly to the printer.",
            err=True,
        )
        if not click.confirm("Do you want to continue?"):
            click.echo("Aborted.")
            return

    run_job(ctx, lambda printer: printer.send_raw(data))


if __name__ == "__main__":
    main()
