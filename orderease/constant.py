"""Editable sample data used when no saved state can be loaded."""

from __future__ import annotations

SAMPLE_MENU: list[dict[str, str | bool]] = [
    {"name": "Burger", "description": "Beef patty with cheese", "price": "8.99", "available": True},
    {"name": "Pizza", "description": "Pepperoni pizza", "price": "12.99", "available": True},
    {"name": "Salad", "description": "Caesar salad", "price": "6.99", "available": False},
]

SAMPLE_SERVER_NAMES: list[str] = ["Alice", "Bob"]

SAMPLE_TABLE_NUMBERS: list[int] = [1, 2]

ROLE_LABELS: dict[str, str] = {
    "guest": "Guest",
    "server": "Server",
    "admin": "Admin",
}
