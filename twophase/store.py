"""Food store participant holding an item inventory."""

from __future__ import annotations

import threading
from typing import Mapping

from twophase.coordinator import TransactionError
from twophase.participant import BaseParticipant, OrderNotFoundError


class InsufficientItemsError(TransactionError):
    """Raised when the inventory cannot cover an order."""

    def __init__(self, message: str = "insufficient items") -> None:
        super().__init__(message)


class Store(BaseParticipant):
    """Inventory of items that reserves stock for transactions."""

    def __init__(self) -> None:
        super().__init__()
        self._items: dict[str, int] = {}
        self._orders: dict[str, dict[str, int]] = {}
        self._lock = threading.Lock()

    def _check_available(self, items: Mapping[str, int]) -> None:
        if any(self._items.get(item_id, 0) < qty for item_id, qty in items.items()):
            raise InsufficientItemsError()

    def add_item(self, item_id: str, quantity: int) -> None:
        """Add quantity of an item to the inventory."""
        with self._lock:
            self._items[item_id] = self._items.get(item_id, 0) + quantity

    def quantity(self, item_id: str) -> int:
        """Return the quantity of an item currently in the inventory."""
        with self._lock:
            return self._items.get(item_id, 0)

    def prepare(self, transaction_id: str) -> None:
        """Reserve the items recorded for the transaction."""
        with self._lock:
            order = self._orders.get(transaction_id)
            if order is None:
                raise OrderNotFoundError()
            self._check_available(order)
            for item_id, qty in order.items():
                self._items[item_id] = self._items.get(item_id, 0) - qty
            super().prepare(transaction_id)

    def commit(self, transaction_id: str) -> None:
        """Drop the order record and commit."""
        with self._lock:
            self._orders.pop(transaction_id, None)
            super().commit(transaction_id)

    def abort(self, transaction_id: str) -> None:
        """Return the order's items to the inventory and abort."""
        with self._lock:
            order = self._orders.pop(transaction_id, None)
            if order is not None:
                for item_id, qty in order.items():
                    self._items[item_id] = self._items.get(item_id, 0) + qty
            super().abort(transaction_id)

    def place_order(self, transaction_id: str, items: Mapping[str, int]) -> None:
        """Record an order if the inventory currently covers it."""
        with self._lock:
            self._check_available(items)
            self._orders[transaction_id] = dict(items)