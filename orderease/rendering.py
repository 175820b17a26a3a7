"""Rendering helpers for the terminal shell."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Iterable

from rich.text import Text

from orderease.constant import ROLE_LABELS
from orderease.models import MenuItem, Order, Table


def format_price(price: Decimal) -> str:
    return f"${price:.2f}"


def badge_style(role: str) -> str:
    """Return a consistent badge style for role tags."""
    if role == "server":
        return "bold #ffffff on #b23a48"
    if role == "admin":
        return "bold #ffffff on #2f6db5"
    return "bold #0b1f0f on #5fbf72"


def format_role_badge(role: str) -> Text:
    text = Text()
    text.append(f" {ROLE_LABELS.get(role, role)} ", style=badge_style(role))
    return text


def format_menu_line(item: MenuItem) -> Text:
    """``Burger - $8.99 : Available`` with unavailable items dimmed."""
    status = "Available" if item.available else "Not Available"
    style = "white" if item.available else "dim"
    return Text(f"{item.name} - {format_price(item.price)} : {status}", style=style)


def format_menu(items: Iterable[MenuItem]) -> Text:
    text = Text()
    for idx, item in enumerate(items):
        if idx > 0:
            text.append("\n")
        text.append_text(format_menu_line(item))
    if not text.plain:
        text.append("(menu is empty)", style="dim")
    return text


def format_order(order: Order) -> Text:
    text = Text()
    if not order.items:
        text.append("(no items yet)", style="dim")
        return text
    for idx, item in enumerate(order.items):
        text.append(f"{idx + 1}. {item.name}  {format_price(item.price)}\n")
    text.append(f"Total: {format_price(order.total_cost)}", style="bold")
    return text


def format_table_line(table: Table, now: datetime | None = None) -> str:
    return (
        f"Table {table.table_number} - Seated for: {table.seating_duration(now)} minutes"
        f" - Order Total: {format_price(table.current_order.total_cost)}"
    )


def format_assigned_tables(tables: Iterable[Table], now: datetime | None = None) -> Text:
    text = Text("Assigned Tables:", style="bold")
    for table in tables:
        text.append("\n")
        text.append(format_table_line(table, now))
    return text


def format_popular_items(lines: list[str]) -> Text:
    text = Text("Popular Items:", style="bold")
    if not lines:
        text.append("\n(no open orders)", style="dim")
    for line in lines:
        text.append(f"\n{line}")
    return text
