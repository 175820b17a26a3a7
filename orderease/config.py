"""Runtime configuration defaults for persistence, logging and printing."""

from __future__ import annotations

import os

DATA_PATH = os.environ.get("ORDEREASE_DATA_PATH", "data/orderease.db")
DEBUG_LOG_PATH = "/tmp/orderease-debug.log"

PRINTER_USB_VENDOR_ID = 0x28E9
PRINTER_USB_PRODUCT_ID = 0x0289
PRINTER_WIDTH_PX = 384
PRINTER_FONT_SIZE = 32
PRINTER_FONT_PATH = "/System/Library/Fonts/SFNS.ttf"
PRINTER_LEFT_INDENT_PX = 16
PRINTER_TAIL_SPACER_PX = 70
