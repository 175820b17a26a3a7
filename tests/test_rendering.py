"""Tests for shell rendering helpers."""

from datetime import datetime, timedelta
from decimal import Decimal

from orderease.models import MenuItem, Order, Table
from orderease.rendering import (
    format_assigned_tables,
    format_menu,
    format_menu_line,
    format_order,
    format_popular_items,
    format_role_badge,
    format_table_line,
)


class TestRendering:
    """Tests for plain text produced by the rendering helpers."""

    def test_menu_line(self, burger):
        """Test availability is spelled out."""
        assert format_menu_line(burger).plain == "Burger - $8.99 : Available"
        salad = MenuItem("Salad", "Caesar salad", Decimal("6.99"), available=False)
        assert format_menu_line(salad).plain == "Salad - $6.99 : Not Available"

    def test_empty_menu(self):
        """Test an empty menu renders a placeholder."""
        assert format_menu([]).plain == "(menu is empty)"

    def test_order(self, burger, pizza):
        """Test order lines and the total."""
        order = Order()
        assert format_order(order).plain == "(no items yet)"

        order.add_item(burger)
        order.add_item(pizza)
        assert format_order(order).plain == "1. Burger  $8.99\n2. Pizza  $12.99\nTotal: $21.98"

    def test_table_line(self, burger):
        """Test the server's table summary."""
        seated = datetime(2024, 10, 8, 18, 0)
        table = Table(3)
        table.seat(seated)
        table.current_order.add_item(burger)
        now = seated + timedelta(minutes=25)

        expected = "Table 3 - Seated for: 25 minutes - Order Total: $8.99"
        assert format_table_line(table, now) == expected
        assert format_assigned_tables([table], now).plain == f"Assigned Tables:\n{expected}"

    def test_popular_items(self):
        """Test the ranking block."""
        assert format_popular_items([]).plain == "Popular Items:\n(no open orders)"
        assert format_popular_items(["Burger (2 orders)"]).plain == "Popular Items:\nBurger (2 orders)"

    def test_role_badge(self):
        """Test role labels."""
        assert format_role_badge("admin").plain == " Admin "
