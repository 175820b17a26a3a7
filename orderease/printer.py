"""Guest check printing on a USB ESC/POS thermal printer."""

from __future__ import annotations

import os
from pathlib import Path

from orderease.config import (
    PRINTER_FONT_PATH,
    PRINTER_FONT_SIZE,
    PRINTER_LEFT_INDENT_PX,
    PRINTER_TAIL_SPACER_PX,
    PRINTER_USB_PRODUCT_ID,
    PRINTER_USB_VENDOR_ID,
    PRINTER_WIDTH_PX,
)
from orderease.errors import PrinterError

_SEPARATOR_HEIGHT_PX = 14
_SEPARATOR_THICKNESS_PX = 3
_RIGHT_GUTTER_PX = 8
# Extra vertical headroom to avoid descender clipping on thermal output.
_LINE_EXTRA_PX = 12
_FONT_OVERRIDE_ENV = "ORDEREASE_PRINTER_FONT_PATH"
_LINUX_FONT_FALLBACKS = (
    "/usr/share/fonts/TTF/DejaVuSans.ttf",
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/noto/NotoSans-Regular.ttf",
    "/usr/share/fonts/liberation/LiberationSans-Regular.ttf",
)


def resolve_printer_font_path() -> str:
    """
    Resolve a printer font path.

    Resolution order:
    1. ORDEREASE_PRINTER_FONT_PATH (if set)
    2. PRINTER_FONT_PATH
    3. Known Linux fallbacks
    """
    env_override = os.environ.get(_FONT_OVERRIDE_ENV, "").strip()
    candidates: list[str] = []
    if env_override:
        candidates.append(env_override)
    candidates.append(PRINTER_FONT_PATH)
    candidates.extend(_LINUX_FONT_FALLBACKS)

    seen: set[str] = set()
    for candidate in candidates:
        if not candidate or candidate in seen:
            continue
        seen.add(candidate)
        if Path(candidate).is_file():
            return candidate

    raise PrinterError(
        f"No usable printer font found. Set {_FONT_OVERRIDE_ENV} to a valid .ttf/.otf file. "
        f"Tried: {', '.join(seen)}"
    )


def check_printer_dependencies() -> tuple[bool, str]:
    """Check whether printer dependencies are importable."""
    try:
        from escpos.printer import Usb  # noqa: F401
        from PIL import ImageFont

        font_path = resolve_printer_font_path()
        ImageFont.truetype(font_path, PRINTER_FONT_SIZE)
    except Exception as exc:
        return (False, f"Printer unavailable: {exc}")
    return (True, "Printer ready")


def _fit_text_to_px(text: str, font: object, max_width_px: int) -> str:
    from PIL import Image, ImageDraw

    probe = Image.new("1", (1, 1), color=1)
    draw = ImageDraw.Draw(probe)
    if draw.textbbox((0, 0), text, font=font)[2] <= max_width_px:
        return text
    ellipsis = "..."
    trimmed = text
    while trimmed:
        candidate = f"{trimmed}{ellipsis}"
        if draw.textbbox((0, 0), candidate, font=font)[2] <= max_width_px:
            return candidate
        trimmed = trimmed[:-1]
    return ellipsis


def render_check_line(left: str, right: str, font: object) -> object:
    """Render ``left`` flush left and ``right`` flush right on one line."""
    from PIL import Image, ImageDraw

    canvas_height = PRINTER_FONT_SIZE + _LINE_EXTRA_PX
    img = Image.new("1", (PRINTER_WIDTH_PX, canvas_height), color=1)
    draw = ImageDraw.Draw(img)

    right_width = 0
    right_bbox = (0, 0, 0, 0)
    if right:
        right_bbox = draw.textbbox((0, 0), right, font=font)
        right_width = right_bbox[2] - right_bbox[0]

    max_left_px = PRINTER_WIDTH_PX - PRINTER_LEFT_INDENT_PX - _RIGHT_GUTTER_PX - right_width - 12
    left = _fit_text_to_px(left, font, max(40, max_left_px))
    bbox = draw.textbbox((0, 0), left or right, font=font)
    text_height = bbox[3] - bbox[1]
    # Offset by bbox top so descenders are not clipped.
    y = (canvas_height - text_height) // 2 - bbox[1]

    if left:
        draw.text((PRINTER_LEFT_INDENT_PX, y), left, font=font, fill=0)
    if right:
        x = PRINTER_WIDTH_PX - _RIGHT_GUTTER_PX - right_width - right_bbox[0]
        draw.text((x, y), right, font=font, fill=0)
    return img


def render_separator() -> object:
    from PIL import Image, ImageDraw

    img = Image.new("1", (PRINTER_WIDTH_PX, _SEPARATOR_HEIGHT_PX), color=1)
    draw = ImageDraw.Draw(img)
    top = max(0, (_SEPARATOR_HEIGHT_PX - _SEPARATOR_THICKNESS_PX) // 2)
    bottom = min(_SEPARATOR_HEIGHT_PX - 1, top + _SEPARATOR_THICKNESS_PX - 1)
    draw.rectangle((0, top, PRINTER_WIDTH_PX - 1, bottom), fill=0)
    return img


def render_spacer(height_px: int) -> object:
    from PIL import Image

    return Image.new("1", (PRINTER_WIDTH_PX, max(1, height_px)), color=1)


def render_check_images(
    table_number: int, lines: list[tuple[str, str]], total: str, server_name: str, font: object, header_font: object
) -> list[object]:
    """Build the image strips of a guest check in print order."""
    images = [render_check_line(f"Table {table_number}", "CHECK", header_font), render_separator()]
    if not lines:
        images.append(render_check_line("(no items)", "", font))
    for name, price in lines:
        images.append(render_check_line(name, price, font))
    images.append(render_separator())
    images.append(render_check_line("Total", total, header_font))
    images.append(render_check_line(f"Server: {server_name}", "", font))
    images.append(render_spacer(PRINTER_TAIL_SPACER_PX))
    return images


def print_guest_check(table_number: int, lines: list[tuple[str, str]], total: str, server_name: str) -> None:
    """Print one guest check and cut the ticket at the end."""
    try:
        from escpos.printer import Usb
        from PIL import ImageFont
    except Exception as exc:
        raise PrinterError(f"Printer dependencies unavailable: {exc}") from exc

    font_path = resolve_printer_font_path()
    font = ImageFont.truetype(font_path, PRINTER_FONT_SIZE)
    header_font = ImageFont.truetype(font_path, PRINTER_FONT_SIZE + 8)
    images = render_check_images(table_number, lines, total, server_name, font, header_font)

    printer = Usb(PRINTER_USB_VENDOR_ID, PRINTER_USB_PRODUCT_ID)
    for img in images:
        printer.image(img)
    printer.cut()
