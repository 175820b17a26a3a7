"""Tests for the domain models."""

import random
from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from orderease.models import MenuCatalog, MenuItem, Order, Server, ServerRegistry, Table


class TestMenuItem:
    """Tests for menu items."""

    def test_price_is_decimal(self):
        """Test prices given as strings are stored as Decimal."""
        item = MenuItem("Soup", "Tomato soup", "4.50")
        assert item.price == Decimal("4.50")

    def test_negative_price_rejected(self):
        """Test a negative price raises ValueError."""
        with pytest.raises(ValueError):
            MenuItem("Soup", "Tomato soup", Decimal("-1"))

    def test_identity_comparison(self):
        """Test equal fields still make distinct items."""
        a = MenuItem("Soup", "Tomato soup", Decimal("4.50"))
        b = MenuItem("Soup", "Tomato soup", Decimal("4.50"))
        assert a != b
        assert a == a


class TestOrder:
    """Tests for orders and their running total."""

    def test_empty_order(self):
        """Test a new order has no items and zero total."""
        order = Order()
        assert order.items == ()
        assert order.total_cost == Decimal("0")

    def test_add_item_updates_total(self, burger, pizza):
        """Test adding items keeps insertion order and sums prices."""
        order = Order()
        order.add_item(burger)
        order.add_item(pizza)
        order.add_item(burger)

        assert order.items == (burger, pizza, burger)
        assert order.total_cost == Decimal("30.97")

    def test_remove_first_occurrence(self, burger, pizza):
        """Test removing a duplicated item drops only the first one."""
        order = Order()
        order.add_item(burger)
        order.add_item(pizza)
        order.add_item(burger)

        assert order.remove_item(burger) is True
        assert order.items == (pizza, burger)
        assert order.total_cost == Decimal("21.98")

    def test_remove_absent_item_is_noop(self, burger, pizza):
        """Test removing an item not in the order changes nothing."""
        order = Order()
        order.add_item(burger)

        assert order.remove_item(pizza) is False
        assert order.items == (burger,)
        assert order.total_cost == Decimal("8.99")

    def test_remove_uses_identity(self, burger):
        """Test a lookalike item is not removed."""
        order = Order()
        order.add_item(burger)
        twin = MenuItem(burger.name, burger.description, burger.price)

        assert order.remove_item(twin) is False
        assert len(order) == 1

    def test_clear(self, burger, pizza):
        """Test clear empties the order and resets the total."""
        order = Order()
        order.add_item(burger)
        order.add_item(pizza)
        order.clear()

        assert order.items == ()
        assert order.total_cost == Decimal("0")

    def test_items_is_read_only_view(self, burger):
        """Test the items view cannot desynchronise the total."""
        order = Order()
        order.add_item(burger)
        items = order.items
        assert isinstance(items, tuple)
        assert order.total_cost == burger.price

    def test_total_matches_items_for_random_sequences(self):
        """Test the total equals the sum of prices after every operation."""
        rng = random.Random(20241008)
        menu = [MenuItem(f"Dish {idx}", "", Decimal(idx) + Decimal("0.99")) for idx in range(5)]
        order = Order()

        for _ in range(500):
            op = rng.random()
            if op < 0.55:
                order.add_item(rng.choice(menu))
            elif op < 0.95:
                order.remove_item(rng.choice(menu))
            else:
                order.clear()
            assert order.total_cost == sum((item.price for item in order.items), Decimal("0"))


class TestTable:
    """Tests for tables and seating time."""

    def test_new_table(self):
        """Test a new table is unseated, unassigned and has an empty order."""
        table = Table(3)
        assert table.table_number == 3
        assert table.assigned_server_id is None
        assert not table.is_seated
        assert table.current_order.items == ()

    def test_each_table_owns_its_order(self):
        """Test tables never share an order instance."""
        assert Table(1).current_order is not Table(2).current_order

    def test_seating_duration(self):
        """Test seating duration is whole elapsed minutes."""
        seated = datetime(2024, 10, 8, 18, 0)
        table = Table(1)
        table.seat(seated)

        assert table.is_seated
        assert table.seating_duration(seated + timedelta(minutes=42, seconds=59)) == 42

    def test_unseated_duration_is_zero(self):
        """Test an unseated table reports zero minutes."""
        assert Table(1).seating_duration() == 0

    def test_seat_defaults_to_now(self):
        """Test seat() without a time uses the current time."""
        table = Table(1)
        table.seat()
        assert table.seating_duration() == 0


class TestMenuCatalog:
    """Tests for the menu catalog."""

    def test_add_keeps_order_and_duplicates(self, burger, pizza):
        """Test add appends without dedup."""
        catalog = MenuCatalog()
        catalog.add(burger)
        catalog.add(pizza)
        catalog.add(burger)
        assert catalog.list() == [burger, pizza, burger]
        assert len(catalog) == 3

    def test_remove_absent_is_noop(self, burger, pizza):
        """Test removing an unknown item is not an error."""
        catalog = MenuCatalog([burger])
        assert catalog.remove(pizza) is False
        assert catalog.list() == [burger]

    def test_remove(self, burger, pizza):
        """Test remove drops the item by identity."""
        catalog = MenuCatalog([burger, pizza])
        assert catalog.remove(burger) is True
        assert catalog.list() == [pizza]

    def test_list_available_is_lazy_filter(self, burger, pizza):
        """Test only available items are produced, reflecting later toggles."""
        catalog = MenuCatalog([burger, pizza])
        available = catalog.list_available()
        pizza.available = False

        assert not isinstance(available, list)
        assert list(available) == [burger]


class TestServerRegistry:
    """Tests for the server registry."""

    def test_new_server_is_available(self):
        """Test servers start available with a generated id."""
        server = Server("Alice")
        assert server.available
        assert server.server_id
        assert server.server_id != Server("Alice").server_id

    def test_find_by_name_case_insensitive(self):
        """Test lookups ignore case."""
        alice = Server("Alice")
        registry = ServerRegistry([alice, Server("Bob")])

        assert registry.find_by_name("alice") is alice
        assert registry.find_by_name("ALICE") is alice
        assert registry.find_by_name("Alice") is alice

    def test_find_by_name_first_wins(self):
        """Test duplicate names resolve to the first registered server."""
        first = Server("Alice")
        second = Server("alice")
        registry = ServerRegistry([first, second])
        assert registry.find_by_name("ALICE") is first

    def test_find_by_name_missing(self):
        """Test an unknown name returns None."""
        assert ServerRegistry([Server("Alice")]).find_by_name("Carol") is None

    def test_get_by_id(self):
        """Test id lookups."""
        alice = Server("Alice")
        registry = ServerRegistry()
        registry.add(alice)

        assert registry.get(alice.server_id) is alice
        assert registry.get("missing") is None
        assert registry.get(None) is None
        assert registry.list() == [alice]
