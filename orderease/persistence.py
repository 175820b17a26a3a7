"""SQLite persistence for the full restaurant state."""

from __future__ import annotations

import os
import sqlite3
from contextlib import closing, suppress
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Protocol

from orderease.errors import PersistenceError
from orderease.models import MenuItem, Server, Table

SCHEMA_VERSION = "1"

_SCHEMA = """
CREATE TABLE meta (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL
);

CREATE TABLE servers (
    id TEXT PRIMARY KEY,
    position INTEGER NOT NULL,
    name TEXT NOT NULL,
    available INTEGER NOT NULL
);

CREATE TABLE menu_items (
    item_key INTEGER PRIMARY KEY,
    menu_position INTEGER,
    name TEXT NOT NULL,
    description TEXT NOT NULL,
    price TEXT NOT NULL,
    available INTEGER NOT NULL
);

CREATE TABLE tables (
    table_number INTEGER PRIMARY KEY,
    position INTEGER NOT NULL,
    assigned_server_id TEXT,
    seating_time TEXT
);

CREATE TABLE order_items (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    table_number INTEGER NOT NULL,
    line_index INTEGER NOT NULL,
    item_key INTEGER NOT NULL,
    FOREIGN KEY(table_number) REFERENCES tables(table_number) ON DELETE CASCADE,
    FOREIGN KEY(item_key) REFERENCES menu_items(item_key)
);
"""


@dataclass
class RestaurantState:
    """Everything that is saved: tables, servers and the menu."""

    tables: list[Table] = field(default_factory=list)
    servers: list[Server] = field(default_factory=list)
    menu: list[MenuItem] = field(default_factory=list)


class StateStore(Protocol):
    def save(self, state: RestaurantState) -> None: ...

    def load(self) -> RestaurantState: ...


class MemoryStateStore:
    """Keep the last saved state in memory."""

    def __init__(self) -> None:
        self._saved: RestaurantState | None = None

    def save(self, state: RestaurantState) -> None:
        self._saved = _copy_state(state)

    def load(self) -> RestaurantState:
        if self._saved is None:
            raise PersistenceError("No saved state in memory")
        return _copy_state(self._saved)


class SqliteStateStore:
    """Save and load restaurant state as a SQLite database file."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)

    def save(self, state: RestaurantState) -> None:
        """Write ``state`` to a sibling temp file, then swap it into place."""
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.unlink(missing_ok=True)
            with closing(sqlite3.connect(tmp_path)) as conn:
                with conn:
                    conn.executescript(_SCHEMA)
                    _write_state(conn, state)
            os.replace(tmp_path, self.path)
        except (OSError, sqlite3.Error) as exc:
            with suppress(OSError):
                tmp_path.unlink(missing_ok=True)
            raise PersistenceError(f"Could not save restaurant data to {self.path}: {exc}") from exc

    def load(self) -> RestaurantState:
        if not self.path.is_file():
            raise PersistenceError(f"No saved restaurant data at {self.path}")
        try:
            uri = f"{self.path.resolve().as_uri()}?mode=ro"
            with closing(sqlite3.connect(uri, uri=True)) as conn:
                return _read_state(conn)
        except PersistenceError:
            raise
        except (OSError, sqlite3.Error) as exc:
            raise PersistenceError(f"Could not read restaurant data from {self.path}: {exc}") from exc
        except (ValueError, TypeError, InvalidOperation, KeyError) as exc:
            raise PersistenceError(f"Invalid restaurant data in {self.path}: {exc!r}") from exc


def _write_state(conn: sqlite3.Connection, state: RestaurantState) -> None:
    conn.execute("INSERT INTO meta (key, value) VALUES ('schema_version', ?)", (SCHEMA_VERSION,))

    conn.executemany(
        "INSERT INTO servers (id, position, name, available) VALUES (?, ?, ?, ?)",
        [(server.server_id, idx, server.name, int(server.available)) for idx, server in enumerate(state.servers)],
    )

    # Items are keyed by object identity so shared references survive a reload.
    item_keys: dict[int, int] = {}

    def register_item(item: MenuItem, menu_position: int | None) -> int:
        key = item_keys.get(id(item))
        if key is not None:
            return key
        key = len(item_keys)
        item_keys[id(item)] = key
        conn.execute(
            """
            INSERT INTO menu_items (item_key, menu_position, name, description, price, available)
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            (key, menu_position, item.name, item.description, str(item.price), int(item.available)),
        )
        return key

    for idx, item in enumerate(state.menu):
        register_item(item, idx)

    for idx, table in enumerate(state.tables):
        conn.execute(
            "INSERT INTO tables (table_number, position, assigned_server_id, seating_time) VALUES (?, ?, ?, ?)",
            (
                table.table_number,
                idx,
                table.assigned_server_id,
                table.seating_time.isoformat() if table.seating_time else None,
            ),
        )
        for line_index, item in enumerate(table.current_order.items):
            conn.execute(
                "INSERT INTO order_items (table_number, line_index, item_key) VALUES (?, ?, ?)",
                (table.table_number, line_index, register_item(item, None)),
            )


def _read_state(conn: sqlite3.Connection) -> RestaurantState:
    meta = dict(conn.execute("SELECT key, value FROM meta"))
    version = meta.get("schema_version")
    if version != SCHEMA_VERSION:
        raise PersistenceError(f"Unsupported schema version {version!r}, expected {SCHEMA_VERSION!r}")

    servers = [
        Server(name=name, available=bool(available), server_id=server_id)
        for server_id, name, available in conn.execute(
            "SELECT id, name, available FROM servers ORDER BY position"
        )
    ]

    items: dict[int, MenuItem] = {}
    menu: list[MenuItem] = []
    for key, menu_position, name, description, price, available in conn.execute(
        "SELECT item_key, menu_position, name, description, price, available FROM menu_items "
        "ORDER BY menu_position IS NULL, menu_position, item_key"
    ):
        item = MenuItem(name=name, description=description, price=Decimal(price), available=bool(available))
        items[key] = item
        if menu_position is not None:
            menu.append(item)

    tables: list[Table] = []
    by_number: dict[int, Table] = {}
    for table_number, server_id, seating_time in conn.execute(
        "SELECT table_number, assigned_server_id, seating_time FROM tables ORDER BY position"
    ):
        table = Table(
            table_number=int(table_number),
            assigned_server_id=server_id,
            seating_time=datetime.fromisoformat(seating_time) if seating_time else None,
        )
        tables.append(table)
        by_number[table.table_number] = table

    for table_number, item_key in conn.execute(
        "SELECT table_number, item_key FROM order_items ORDER BY table_number, line_index"
    ):
        by_number[table_number].current_order.add_item(items[item_key])

    return RestaurantState(tables=tables, servers=servers, menu=menu)


def _copy_state(state: RestaurantState) -> RestaurantState:
    """Detached copy that keeps shared item references shared."""
    items: dict[int, MenuItem] = {}

    def copy_item(item: MenuItem) -> MenuItem:
        copied = items.get(id(item))
        if copied is None:
            copied = MenuItem(item.name, item.description, item.price, item.available)
            items[id(item)] = copied
        return copied

    menu = [copy_item(item) for item in state.menu]
    servers = [Server(server.name, server.available, server.server_id) for server in state.servers]
    tables: list[Table] = []
    for table in state.tables:
        copied = Table(table.table_number, table.assigned_server_id, table.seating_time)
        for item in table.current_order.items:
            copied.current_order.add_item(copy_item(item))
        tables.append(copied)
    return RestaurantState(tables=tables, servers=servers, menu=menu)
