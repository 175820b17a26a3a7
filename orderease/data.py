"""Sample restaurant data."""

from __future__ import annotations

from decimal import Decimal

from orderease.constant import SAMPLE_MENU, SAMPLE_SERVER_NAMES, SAMPLE_TABLE_NUMBERS
from orderease.models import MenuItem, Server, Table
from orderease.service import RestaurantService


def sample_menu() -> list[MenuItem]:
    return [
        MenuItem(
            name=str(raw["name"]),
            description=str(raw["description"]),
            price=Decimal(str(raw["price"])),
            available=bool(raw["available"]),
        )
        for raw in SAMPLE_MENU
    ]


def populate_sample_data(service: RestaurantService) -> None:
    """Add the sample menu, servers and tables to ``service``."""
    for item in sample_menu():
        service.add_menu_item(item)
    for name in SAMPLE_SERVER_NAMES:
        service.add_server(Server(name))
    for number in SAMPLE_TABLE_NUMBERS:
        service.add_table(Table(number))
