"""Notification sinks for guest-to-server events."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Protocol

from orderease.errors import PrinterError
from orderease.models import Order, Server, Table


class EventKind(str, Enum):
    """Events a guest can raise towards the assigned server."""

    NEW_ORDER = "new_order"
    CALL = "call"
    CHECK_REQUEST = "check_request"


_CONSOLE_TEMPLATES: dict[EventKind, str] = {
    EventKind.NEW_ORDER: "Server {server} notified of new order for Table {table}",
    EventKind.CALL: "Server {server} notified of call from Table {table}",
    EventKind.CHECK_REQUEST: "Server {server} notified of check request from Table {table}",
}


class NotificationSink(Protocol):
    def notify(self, table: Table, kind: EventKind, server: Server) -> None: ...


def describe_event(table: Table, kind: EventKind, server: Server) -> str:
    """Human readable line for one notification."""
    return _CONSOLE_TEMPLATES[kind].format(server=server.name, table=table.table_number)


class ConsoleNotificationSink:
    """Print each notification to stdout."""

    def notify(self, table: Table, kind: EventKind, server: Server) -> None:
        print(describe_event(table, kind, server))


@dataclass(frozen=True)
class RecordedEvent:
    table_number: int
    kind: EventKind
    server_name: str


class RecordingNotificationSink:
    """Keep notifications in memory, newest last."""

    def __init__(self, max_history: int = 100) -> None:
        self.events: list[RecordedEvent] = []
        self.max_history = max_history

    def notify(self, table: Table, kind: EventKind, server: Server) -> None:
        self.events.append(RecordedEvent(table.table_number, kind, server.name))
        if len(self.events) > self.max_history:
            self.events = self.events[-self.max_history :]

    def last(self) -> RecordedEvent | None:
        if not self.events:
            return None
        return self.events[-1]


CheckPrinter = Callable[[int, list[tuple[str, str]], str, str], None]


class PrintingNotificationSink:
    """Forward events to ``inner`` and print the guest check on check requests."""

    def __init__(self, inner: NotificationSink, print_check: CheckPrinter | None = None) -> None:
        self.inner = inner
        if print_check is None:
            from orderease.printer import print_guest_check

            print_check = print_guest_check
        self.print_check = print_check

    def notify(self, table: Table, kind: EventKind, server: Server) -> None:
        self.inner.notify(table, kind, server)
        if kind is not EventKind.CHECK_REQUEST:
            return
        lines, total = check_lines(table.current_order)
        try:
            self.print_check(table.table_number, lines, total, server.name)
        except PrinterError:
            raise
        except Exception as exc:
            raise PrinterError(f"Check for Table {table.table_number} not printed: {exc}") from exc


def check_lines(order: Order) -> tuple[list[tuple[str, str]], str]:
    """Return ``(name, price)`` rows and the formatted total for a guest check."""
    rows = [(item.name, f"${item.price:.2f}") for item in order.items]
    return rows, f"${order.total_cost:.2f}"
