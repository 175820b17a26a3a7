"""Shared fixtures."""

from decimal import Decimal

import pytest

from orderease.models import MenuItem, Server, Table
from orderease.notifications import RecordingNotificationSink
from orderease.service import RestaurantService


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def burger():
    return MenuItem("Burger", "Beef patty with cheese", Decimal("8.99"))


@pytest.fixture
def pizza():
    return MenuItem("Pizza", "Pepperoni pizza", Decimal("12.99"))


@pytest.fixture
def events():
    return RecordingNotificationSink()


@pytest.fixture
def service(events, burger, pizza):
    """Two tables, Alice and Bob, and a three item menu."""
    svc = RestaurantService(notifications=events)
    svc.add_menu_item(burger)
    svc.add_menu_item(pizza)
    svc.add_menu_item(MenuItem("Salad", "Caesar salad", Decimal("6.99"), available=False))
    svc.add_server(Server("Alice"))
    svc.add_server(Server("Bob"))
    svc.add_table(Table(1))
    svc.add_table(Table(2))
    return svc
