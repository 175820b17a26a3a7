"""Domain models for OrderEase."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Iterator
from uuid import uuid4

ZERO = Decimal("0")


@dataclass(eq=False)
class MenuItem:
    """A dish offered by the restaurant.

    Items compare by identity, so two entries with the same name are still
    distinct catalog rows.
    """

    name: str
    description: str
    price: Decimal
    available: bool = True

    def __post_init__(self) -> None:
        self.price = Decimal(str(self.price))
        if self.price < ZERO:
            raise ValueError(f"price must be non-negative, got {self.price}")


@dataclass(eq=False)
class Server:
    """A member of the floor staff."""

    name: str
    available: bool = True
    server_id: str = field(default_factory=lambda: uuid4().hex)


class Order:
    """Ordered menu items for one seating with a running total."""

    def __init__(self) -> None:
        self._items: list[MenuItem] = []
        self._total_cost = ZERO

    @property
    def items(self) -> tuple[MenuItem, ...]:
        return tuple(self._items)

    @property
    def total_cost(self) -> Decimal:
        return self._total_cost

    def add_item(self, item: MenuItem) -> None:
        self._items.append(item)
        self._total_cost += item.price

    def remove_item(self, item: MenuItem) -> bool:
        """Remove the first occurrence of ``item``; return whether one was found."""
        for idx, candidate in enumerate(self._items):
            if candidate is item:
                del self._items[idx]
                self._total_cost -= item.price
                return True
        return False

    def clear(self) -> None:
        self._items.clear()
        self._total_cost = ZERO

    def __len__(self) -> int:
        return len(self._items)


@dataclass(eq=False)
class Table:
    """A seating unit with one live order.

    ``assigned_server_id`` is a handle into the server registry, the table
    does not own its server.
    """

    table_number: int
    assigned_server_id: str | None = None
    seating_time: datetime | None = None
    current_order: Order = field(default_factory=Order)

    @property
    def is_seated(self) -> bool:
        return self.seating_time is not None

    def seat(self, now: datetime | None = None) -> None:
        self.seating_time = now or datetime.now()

    def seating_duration(self, now: datetime | None = None) -> int:
        """Whole minutes since seating, 0 for an unseated table."""
        if self.seating_time is None:
            return 0
        elapsed = (now or datetime.now()) - self.seating_time
        return max(0, int(elapsed.total_seconds() // 60))


class MenuCatalog:
    """The restaurant menu in insertion order."""

    def __init__(self, items: list[MenuItem] | None = None) -> None:
        self._items: list[MenuItem] = list(items or [])

    def add(self, item: MenuItem) -> None:
        self._items.append(item)

    def remove(self, item: MenuItem) -> bool:
        for idx, candidate in enumerate(self._items):
            if candidate is item:
                del self._items[idx]
                return True
        return False

    def list(self) -> list[MenuItem]:
        return list(self._items)

    def list_available(self) -> Iterator[MenuItem]:
        return (item for item in self._items if item.available)

    def __iter__(self) -> Iterator[MenuItem]:
        return iter(self.list())

    def __len__(self) -> int:
        return len(self._items)


class ServerRegistry:
    """Floor staff in insertion order."""

    def __init__(self, servers: list[Server] | None = None) -> None:
        self._servers: list[Server] = list(servers or [])

    def add(self, server: Server) -> None:
        self._servers.append(server)

    def list(self) -> list[Server]:
        return list(self._servers)

    def get(self, server_id: str | None) -> Server | None:
        if server_id is None:
            return None
        for server in self._servers:
            if server.server_id == server_id:
                return server
        return None

    def find_by_name(self, name: str) -> Server | None:
        """Case-insensitive exact match; the first registered server wins."""
        wanted = name.casefold()
        for server in self._servers:
            if server.name.casefold() == wanted:
                return server
        return None

    def __iter__(self) -> Iterator[Server]:
        return iter(self.list())

    def __len__(self) -> int:
        return len(self._servers)
