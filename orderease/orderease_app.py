"""Main Textual app class."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Callable

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.css.query import NoMatches
from textual.events import Key
from textual.reactive import reactive
from textual.screen import ModalScreen
from textual.widgets import Header, Static

from orderease.config import DATA_PATH, DEBUG_LOG_PATH
from orderease.data import populate_sample_data
from orderease.errors import PersistenceError, PrinterError
from orderease.models import MenuItem, Server, Table
from orderease.notifications import (
    NotificationSink,
    PrintingNotificationSink,
    RecordingNotificationSink,
)
from orderease.persistence import SqliteStateStore, StateStore
from orderease.picker_modal import PickerModal
from orderease.printer import check_printer_dependencies
from orderease.rendering import (
    format_assigned_tables,
    format_menu,
    format_order,
    format_popular_items,
    format_price,
    format_role_badge,
)
from orderease.service import RestaurantService
from orderease.text_prompt_modal import TextPromptModal

MAX_TABLE_NUMBER = 9999

_HELP_BY_ROLE: dict[str, str] = {
    "guest": "O place order  C call server  X request check  S server  A admin",
    "server": "I check in  M mark order served  G back to guest",
    "admin": "N add menu item  D remove menu item  T assign server  G back to guest",
}


def validate_price(value: str) -> str | None:
    try:
        price = Decimal(value)
    except InvalidOperation:
        return "Price must be a number."
    if not price.is_finite():
        return "Price must be a number."
    if price < 0:
        return "Price must not be negative."
    return None


def validate_table_number(value: str) -> str | None:
    if not value.isdecimal():
        return "Table number must be digits only."
    if not 1 <= int(value) <= MAX_TABLE_NUMBER:
        return f"Table number must be between 1 and {MAX_TABLE_NUMBER}."
    return None


def validate_yes_no(value: str) -> str | None:
    if value.lower() in {"yes", "y", "no", "n"}:
        return None
    return "Answer yes or no."


class OrderEaseApp(App):
    """A Textual app for guests, servers and admins of one restaurant."""

    TITLE = "OrderEase"
    SUB_TITLE = "Restaurant Orders"

    CSS = """
    Screen {
        layout: vertical;
    }

    #main-layout {
        height: 1fr;
    }

    #left-pane {
        width: 3fr;
        border: round $primary;
        padding: 1;
    }

    #right-pane {
        width: 2fr;
        border: round $secondary;
        padding: 1;
    }

    #status-bar {
        border: heavy $secondary;
        padding: 0 1;
        margin-bottom: 1;
        height: 4;
    }

    #left-body, #right-body {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    .pane-title {
        text-style: bold;
        margin-bottom: 1;
    }
    """

    role = reactive("guest")

    BINDINGS = [
        Binding("ctrl+s", "save", "Save", priority=True),
        Binding("ctrl+q", "save_and_quit", "Quit", priority=True),
    ]

    def __init__(self, store: StateStore | None = None, printer_enabled: bool = True) -> None:
        super().__init__()
        self._debug_log_path = Path(DEBUG_LOG_PATH)
        self.state_store: StateStore = store or SqliteStateStore(DATA_PATH)
        self.event_log = RecordingNotificationSink()
        self.printer_enabled = printer_enabled
        self.system_status = ""
        self.current_server: Server | None = None
        self.service = RestaurantService(notifications=self._notification_sink())
        try:
            self.service.load_data(self.state_store)
            self._log_debug("load_ok")
        except PersistenceError as exc:
            self._log_debug(f"load_failed error={exc!r} -> sample data")
            populate_sample_data(self.service)
        self.current_table: Table | None = None
        self._setup_guest_table()

    def _notification_sink(self) -> NotificationSink:
        if not self.printer_enabled:
            return self.event_log
        ready, msg = check_printer_dependencies()
        self._log_debug(f"printer_status={msg!r}")
        if not ready:
            return self.event_log
        return PrintingNotificationSink(self.event_log)

    def _log_debug(self, message: str) -> None:
        try:
            ts = datetime.now(timezone.utc).isoformat()
            self._debug_log_path.parent.mkdir(parents=True, exist_ok=True)
            with self._debug_log_path.open("a", encoding="utf-8") as fh:
                fh.write(f"{ts} {message}\n")
        except Exception:
            # Logging must never interfere with app flow.
            return

    def _setup_guest_table(self) -> None:
        """Seat the guest at the first table and give it a server."""
        if not self.service.tables:
            self.current_table = None
            return
        table = self.service.tables[0]
        if not table.is_seated:
            table.seat()
        if self.service.assigned_server(table) is None:
            servers = self.service.servers.list()
            if servers:
                self.service.reassign_server(table, servers[0])
        self.current_table = table

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="main-layout"):
            with Vertical(id="left-pane"):
                yield Static(id="left-title", classes="pane-title")
                yield Static(id="left-body")
            with Vertical(id="right-pane"):
                yield Static(id="status-bar")
                yield Static(id="right-title", classes="pane-title")
                yield Static(id="right-body")

    def on_mount(self) -> None:
        self._log_debug("on_mount")
        self._refresh_all()

    def watch_role(self, role: str) -> None:
        self._log_debug(f"role={role!r}")
        self._refresh_all()

    def on_key(self, event: Key) -> None:
        if isinstance(self.screen, ModalScreen):
            return
        if not event.is_printable or not event.character or not event.character.isalpha():
            return

        action = self._key_actions().get(event.character.lower())
        if action is None:
            return
        self._log_debug(f"on_key key={event.key!r} role={self.role!r}")
        action()
        event.stop()

    def _key_actions(self) -> dict[str, Callable[[], None]]:
        if self.role == "guest":
            return {
                "o": self._open_place_order,
                "c": self._call_server,
                "x": self._request_check,
                "s": self._choose_server_role,
                "a": self._enter_admin,
            }
        if self.role == "server":
            return {
                "i": self._check_in,
                "m": self._mark_served,
                "g": self._back_to_guest,
            }
        return {
            "n": self._add_menu_item,
            "d": self._remove_menu_item,
            "t": self._assign_server,
            "g": self._back_to_guest,
        }

    def _set_status(self, message: str) -> None:
        self.system_status = message
        self._refresh_all()

    def _prompt_table_number(self, prompt: str, callback: Callable[[int | None], None]) -> None:
        def on_value(value: str | None) -> None:
            callback(None if value is None else int(value))

        self.push_screen(
            TextPromptModal(prompt, validate_table_number, max_length=len(str(MAX_TABLE_NUMBER))),
            on_value,
        )

    # Guest

    def _open_place_order(self) -> None:
        if self.current_table is None:
            self._set_status("No tables configured.")
            return
        items = list(self.service.menu.list_available())

        def on_pick(index: int | None) -> None:
            if index is None:
                return
            self._place_order(items[index])

        rows = [f"{item.name} - {format_price(item.price)}" for item in items]
        self.push_screen(PickerModal("Place Order", rows), on_pick)

    def _place_order(self, item: MenuItem) -> None:
        if self.current_table is None:
            self._set_status("No tables configured.")
            return
        self.service.place_order(self.current_table, item)
        self._set_status("Item added to order. Server will be notified.")

    def _call_server(self) -> None:
        if self.current_table is None:
            self._set_status("No tables configured.")
            return
        server = self.service.call_server(self.current_table)
        if server is None:
            self._set_status("No server assigned to this table.")
            return
        self._set_status(f"Server {server.name} has been notified.")

    def _request_check(self) -> None:
        if self.current_table is None:
            self._set_status("No tables configured.")
            return
        try:
            self.service.request_check(self.current_table)
        except PrinterError as exc:
            self._log_debug(f"check_print_failed error={exc!r}")
            self._set_status(f"Check requested but print failed: {exc}")
            return
        self._set_status("Your check has been requested. A server will be with you shortly.")

    def _choose_server_role(self) -> None:
        def on_name(name: str | None) -> None:
            if name is None:
                return
            server = self.service.servers.find_by_name(name)
            if server is None:
                self._set_status("Server not found.")
                return
            self.current_server = server
            self.system_status = f"Signed in as {server.name}."
            self.role = "server"

        self.push_screen(TextPromptModal("Enter server name:"), on_name)

    def _enter_admin(self) -> None:
        self.system_status = ""
        self.role = "admin"

    def _back_to_guest(self) -> None:
        self.current_server = None
        self.system_status = ""
        self._setup_guest_table()
        self.role = "guest"

    # Server

    def _check_in(self) -> None:
        def on_number(number: int | None) -> None:
            if number is None or self.current_server is None:
                return
            if self.service.check_in(number, self.current_server) is None:
                self._set_status("Table not found or not assigned to you.")
                return
            self._set_status(f"Checked in with Table {number}.")

        self._prompt_table_number("Enter table number to check in:", on_number)

    def _mark_served(self) -> None:
        def on_number(number: int | None) -> None:
            if number is None or self.current_server is None:
                return
            if self.service.mark_served(number, self.current_server) is None:
                self._set_status("Table not found or not assigned to you.")
                return
            self._set_status(f"Order for Table {number} has been marked as served.")

        self._prompt_table_number("Enter table number to mark as served:", on_number)

    # Admin

    def _add_menu_item(self) -> None:
        draft: dict[str, str] = {}

        def on_available(answer: str | None) -> None:
            if answer is None:
                return
            item = MenuItem(
                name=draft["name"],
                description=draft["description"],
                price=Decimal(draft["price"]),
                available=answer.lower() in {"yes", "y"},
            )
            self.service.add_menu_item(item)
            self._set_status("Menu item added.")

        def on_price(price: str | None) -> None:
            if price is None:
                return
            draft["price"] = price
            self.push_screen(TextPromptModal("Is the item available? (yes/no)", validate_yes_no), on_available)

        def on_description(description: str | None) -> None:
            if description is None:
                return
            draft["description"] = description
            self.push_screen(TextPromptModal("Enter menu item price:", validate_price), on_price)

        def on_name(name: str | None) -> None:
            if name is None:
                return
            draft["name"] = name
            self.push_screen(TextPromptModal("Enter menu item description:"), on_description)

        self.push_screen(TextPromptModal("Enter menu item name:"), on_name)

    def _remove_menu_item(self) -> None:
        items = self.service.menu.list()

        def on_pick(index: int | None) -> None:
            if index is None:
                return
            item = items[index]
            self.service.remove_menu_item(item)
            self._set_status(f"Menu item '{item.name}' has been removed.")

        self.push_screen(PickerModal("Remove Menu Item", [item.name for item in items]), on_pick)

    def _assign_server(self) -> None:
        def on_server_name(table: Table, name: str | None) -> None:
            if name is None:
                return
            server = self.service.servers.find_by_name(name)
            if server is None or not server.available:
                self._set_status("Server not available.")
                return
            self.service.reassign_server(table, server)
            self._set_status("Server assigned to table.")

        def on_number(number: int | None) -> None:
            if number is None:
                return
            table = self.service.find_table(number)
            if table is None:
                self._set_status("Table not found.")
                return
            self.push_screen(
                TextPromptModal("Enter server name to assign:"),
                lambda name: on_server_name(table, name),
            )

        self._prompt_table_number("Enter table number:", on_number)

    # Persistence

    def action_save(self) -> None:
        try:
            self.service.save_data(self.state_store)
        except PersistenceError as exc:
            self._log_debug(f"save_failed error={exc!r}")
            self._set_status(f"Save failed: {exc}")
            return
        self._log_debug("save_ok")
        self._set_status("Restaurant data saved.")

    def action_save_and_quit(self) -> None:
        try:
            self.service.save_data(self.state_store)
        except PersistenceError as exc:
            self._log_debug(f"save_failed error={exc!r}")
        self.exit()

    # Rendering

    def _refresh_all(self) -> None:
        try:
            left_title = self.query_one("#left-title", Static)
            left_body = self.query_one("#left-body", Static)
            right_title = self.query_one("#right-title", Static)
            right_body = self.query_one("#right-body", Static)
        except NoMatches:
            return

        if self.role == "guest":
            left_title.update("Menu")
            left_body.update(format_menu(self.service.menu.list()))
            if self.current_table is None:
                right_title.update("No table")
                right_body.update("")
            else:
                right_title.update(f"Table {self.current_table.table_number} Order")
                right_body.update(format_order(self.current_table.current_order))
        elif self.role == "server":
            tables = self.service.tables_for_server(self.current_server) if self.current_server else []
            left_title.update(f"Server {self.current_server.name}" if self.current_server else "Server")
            left_body.update(format_assigned_tables(tables))
            right_title.update("Orders")
            right_body.update(self._orders_text(tables))
        else:
            left_title.update("Menu")
            left_body.update(format_menu(self.service.menu.list()))
            right_title.update("Servers")
            right_body.update(self._admin_text())

        self._refresh_status_bar()

    def _orders_text(self, tables: list[Table]) -> Text:
        text = Text()
        for idx, table in enumerate(tables):
            if idx > 0:
                text.append("\n\n")
            text.append(f"Table {table.table_number}\n", style="bold")
            text.append_text(format_order(table.current_order))
        return text

    def _admin_text(self) -> Text:
        text = Text()
        for server in self.service.servers.list():
            status = "available" if server.available else "busy"
            text.append(f"{server.name} ({status})\n")
        for table in self.service.tables:
            server = self.service.assigned_server(table)
            text.append(f"Table {table.table_number}: {server.name if server else '-'}\n", style="dim")
        text.append("\n")
        text.append_text(format_popular_items(self.service.popular_items()))
        return text

    def _refresh_status_bar(self) -> None:
        try:
            bar = self.query_one("#status-bar", Static)
        except NoMatches:
            return
        text = Text()
        text.append_text(format_role_badge(self.role))
        text.append(f" {_HELP_BY_ROLE[self.role]}  Ctrl+S save  Ctrl+Q quit\n")
        text.append(self.system_status or self._last_event_text() or "Ready")
        bar.update(text)

    def _last_event_text(self) -> str:
        event = self.event_log.last()
        if event is None:
            return ""
        return f"Last: {event.kind.value.replace('_', ' ')} from Table {event.table_number} ({event.server_name})"


def main() -> None:
    """Run the Textual application."""
    OrderEaseApp().run()


if __name__ == "__main__":
    main()
