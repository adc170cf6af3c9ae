"""Runtime configuration defaults for persistence, pricing and printing."""

from __future__ import annotations

import os
from decimal import Decimal

DB_PATH = os.environ.get("CAFE_POS_DB_PATH", "data/cafe_pos.db")
DEBUG_LOG_PATH = os.environ.get("CAFE_POS_DEBUG_LOG", "/tmp/cafe-pos-debug.log")

# Storage keys for the two persisted snapshots.
PRODUCTS_KEY = "pos_products"
ORDERS_KEY = "pos_orders"

CURRENCY_SYMBOL = "€"
TAX_RATE = Decimal("0.10")
ORDER_NUMBER_BASE = 1000
READY_BOARD_LIMIT = 5
DASHBOARD_DEFAULT_DAYS = 7

PRINTER_USB_VENDOR_ID = 0x28E9
PRINTER_USB_PRODUCT_ID = 0x0289
PRINTER_WIDTH_PX = 384
PRINTER_FONT_SIZE = 24
PRINTER_FONT_PATH = "/System/Library/Fonts/SFNS.ttf"
PRINTER_LEFT_INDENT_PX = 8
PRINTER_CHARS_PER_LINE = 32
