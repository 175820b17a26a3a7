"""Tests for notification sinks and guest check printing."""

from decimal import Decimal

import pytest
from PIL import ImageFont

from orderease.config import PRINTER_WIDTH_PX
from orderease.errors import PrinterError
from orderease.models import MenuItem, Server, Table
from orderease.notifications import (
    ConsoleNotificationSink,
    EventKind,
    PrintingNotificationSink,
    RecordingNotificationSink,
    check_lines,
    describe_event,
)
from orderease.printer import render_check_images, resolve_printer_font_path


@pytest.fixture
def table_with_order(burger, pizza):
    table = Table(4)
    table.current_order.add_item(burger)
    table.current_order.add_item(pizza)
    return table


class TestConsoleSink:
    """Tests for console notifications."""

    @pytest.mark.parametrize(
        "kind, expected",
        [
            (EventKind.NEW_ORDER, "Server Alice notified of new order for Table 4"),
            (EventKind.CALL, "Server Alice notified of call from Table 4"),
            (EventKind.CHECK_REQUEST, "Server Alice notified of check request from Table 4"),
        ],
    )
    def test_messages(self, capsys, kind, expected):
        """Test each event prints its line."""
        ConsoleNotificationSink().notify(Table(4), kind, Server("Alice"))
        assert capsys.readouterr().out.strip() == expected
        assert describe_event(Table(4), kind, Server("Alice")) == expected


class TestRecordingSink:
    """Tests for the in-memory sink."""

    def test_history_is_bounded(self):
        """Test only the newest events are kept."""
        sink = RecordingNotificationSink(max_history=3)
        server = Server("Bob")
        for number in range(5):
            sink.notify(Table(number + 1), EventKind.CALL, server)

        assert [event.table_number for event in sink.events] == [3, 4, 5]
        assert sink.last().table_number == 5


class TestPrintingSink:
    """Tests for check printing on check requests."""

    def test_prints_only_on_check_request(self, table_with_order):
        """Test other events are forwarded without printing."""
        printed = []
        inner = RecordingNotificationSink()
        sink = PrintingNotificationSink(inner, print_check=lambda *args: printed.append(args))
        server = Server("Alice")

        sink.notify(table_with_order, EventKind.NEW_ORDER, server)
        sink.notify(table_with_order, EventKind.CHECK_REQUEST, server)

        assert [event.kind for event in inner.events] == [EventKind.NEW_ORDER, EventKind.CHECK_REQUEST]
        assert printed == [(4, [("Burger", "$8.99"), ("Pizza", "$12.99")], "$21.98", "Alice")]

    def test_printer_failure_becomes_printer_error(self, table_with_order):
        """Test printer exceptions surface as PrinterError."""

        def broken(*args):
            raise OSError("USB device not found")

        sink = PrintingNotificationSink(RecordingNotificationSink(), print_check=broken)
        with pytest.raises(PrinterError, match="Table 4"):
            sink.notify(table_with_order, EventKind.CHECK_REQUEST, Server("Alice"))

    def test_check_lines_empty_order(self):
        """Test an empty order gives no rows and a zero total."""
        assert check_lines(Table(1).current_order) == ([], "$0.00")


class TestCheckRendering:
    """Tests for guest check image rendering."""

    def test_render_check_images(self):
        """Test one strip per line plus header, separators, total and tail."""
        font = ImageFont.load_default()
        rows = [("Burger", "$8.99"), ("A very long dish name that will not fit on the paper roll", "$12.99")]

        images = render_check_images(4, rows, "$21.98", "Alice", font, font)

        assert len(images) == len(rows) + 6
        assert all(img.width == PRINTER_WIDTH_PX for img in images)
        assert all(img.mode == "1" for img in images)

    def test_render_empty_check(self):
        """Test an empty order still renders a placeholder line."""
        font = ImageFont.load_default()
        images = render_check_images(1, [], "$0.00", "Bob", font, font)
        assert len(images) == 7

    def test_font_override(self, tmp_path, monkeypatch):
        """Test the environment override wins when the file exists."""
        font_file = tmp_path / "font.ttf"
        font_file.write_bytes(b"")
        monkeypatch.setenv("ORDEREASE_PRINTER_FONT_PATH", str(font_file))
        assert resolve_printer_font_path() == str(font_file)

    def test_menu_item_price_formatting(self):
        """Test check rows format prices with two decimals."""
        table = Table(2)
        table.current_order.add_item(MenuItem("Tea", "", Decimal("2")))
        assert check_lines(table.current_order) == ([("Tea", "$2.00")], "$2.00")
