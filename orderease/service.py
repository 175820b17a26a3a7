"""Restaurant service: cross-entity operations over tables, servers and the menu."""

from __future__ import annotations

from collections import Counter

from orderease.models import MenuCatalog, MenuItem, Server, ServerRegistry, Table
from orderease.notifications import ConsoleNotificationSink, EventKind, NotificationSink
from orderease.persistence import RestaurantState, StateStore


class RestaurantService:
    """Owns the menu, the servers and the tables of one restaurant.

    Single-threaded: every operation mutates in place and returns immediately.
    Business rules such as "only assign available servers" are checked by the
    caller, not here.
    """

    def __init__(
        self,
        menu: MenuCatalog | None = None,
        servers: ServerRegistry | None = None,
        tables: list[Table] | None = None,
        notifications: NotificationSink | None = None,
    ) -> None:
        self.menu = menu if menu is not None else MenuCatalog()
        self.servers = servers if servers is not None else ServerRegistry()
        self.tables: list[Table] = []
        for table in tables or []:
            self.add_table(table)
        self.notifications: NotificationSink = notifications or ConsoleNotificationSink()

    @classmethod
    def from_state(cls, state: RestaurantState, notifications: NotificationSink | None = None) -> RestaurantService:
        return cls(
            menu=MenuCatalog(state.menu),
            servers=ServerRegistry(state.servers),
            tables=state.tables,
            notifications=notifications,
        )

    # Bookkeeping

    def add_table(self, table: Table) -> None:
        if any(existing.table_number == table.table_number for existing in self.tables):
            raise ValueError(f"Table {table.table_number} already exists")
        self.tables.append(table)

    def add_server(self, server: Server) -> None:
        self.servers.add(server)

    def add_menu_item(self, item: MenuItem) -> None:
        self.menu.add(item)

    def remove_menu_item(self, item: MenuItem) -> bool:
        return self.menu.remove(item)

    # Assignment

    def assigned_server(self, table: Table) -> Server | None:
        return self.servers.get(table.assigned_server_id)

    def reassign_server(self, table: Table, new_server: Server) -> None:
        """Hand ``table`` to ``new_server``.

        The previous server is marked available even if it still serves other
        tables. Reassigning a table to its own server leaves that server
        unavailable.
        """
        current = self.assigned_server(table)
        if current is not None:
            current.available = True
        if self.servers.get(new_server.server_id) is None:
            self.servers.add(new_server)
        table.assigned_server_id = new_server.server_id
        new_server.available = False

    def find_table(self, table_number: int, required_server: Server | None = None) -> Table | None:
        for table in self.tables:
            if table.table_number != table_number:
                continue
            if required_server is not None and table.assigned_server_id != required_server.server_id:
                continue
            return table
        return None

    def tables_for_server(self, server: Server) -> list[Table]:
        wanted = server.name.casefold()
        result = []
        for table in self.tables:
            assigned = self.assigned_server(table)
            if assigned is not None and assigned.name.casefold() == wanted:
                result.append(table)
        return result

    # Guest actions

    def place_order(self, table: Table, item: MenuItem) -> Server | None:
        """Add ``item`` to the table's order and notify its server, if any."""
        table.current_order.add_item(item)
        return self._notify(table, EventKind.NEW_ORDER)

    def call_server(self, table: Table) -> Server | None:
        return self._notify(table, EventKind.CALL)

    def request_check(self, table: Table) -> Server | None:
        return self._notify(table, EventKind.CHECK_REQUEST)

    def _notify(self, table: Table, kind: EventKind) -> Server | None:
        server = self.assigned_server(table)
        if server is not None:
            self.notifications.notify(table, kind, server)
        return server

    # Server actions

    def check_in(self, table_number: int, server: Server) -> Table | None:
        return self.find_table(table_number, server)

    def mark_served(self, table_number: int, server: Server) -> Table | None:
        """Clear the order of the server's table; seating time is kept."""
        table = self.find_table(table_number, server)
        if table is not None:
            table.current_order.clear()
        return table

    # Analytics

    def popular_items(self) -> list[str]:
        """Item names ranked by count over every table's open order.

        Served orders are cleared, so only currently open orders count. Ties
        are ordered by name.
        """
        counts = Counter(item.name for table in self.tables for item in table.current_order.items)
        ranked = sorted(counts.items(), key=lambda entry: (-entry[1], entry[0]))
        return [f"{name} ({count} orders)" for name, count in ranked]

    # Persistence

    def snapshot(self) -> RestaurantState:
        return RestaurantState(tables=list(self.tables), servers=self.servers.list(), menu=self.menu.list())

    def save_data(self, store: StateStore) -> None:
        store.save(self.snapshot())

    def load_data(self, store: StateStore) -> None:
        """Replace tables, servers and menu from ``store``.

        Raises ``PersistenceError`` and leaves the current state untouched when
        the store cannot produce a complete state.
        """
        state = store.load()
        self.tables = list(state.tables)
        self.servers = ServerRegistry(state.servers)
        self.menu = MenuCatalog(state.menu)
