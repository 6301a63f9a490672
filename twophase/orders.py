"""Order service that drives a two-phase commit across store and delivery."""

from __future__ import annotations

import secrets
import string
import threading
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Callable, Mapping

from twophase.coordinator import Coordinator
from twophase.delivery import Delivery
from twophase.participant import OrderNotFoundError
from twophase.store import Store

CHARSET = string.ascii_lowercase + string.ascii_uppercase + string.digits
TRANSACTION_TIMEOUT = timedelta(minutes=10)
STATUS_PENDING = "pending"
STATUS_CONFIRMED = "confirmed"


@dataclass
class Order:
    """A food order and its progress."""

    id: str
    items: dict[str, int]
    location: str
    status: str = STATUS_PENDING
    created_at: datetime = field(default_factory=datetime.now)


def random_string(length: int) -> str:
    """Return a random string of letters and digits of the given length."""
    if length < 0:
        raise ValueError("length must not be negative")
    return "".join(secrets.choice(CHARSET) for _ in range(length))


def generate_transaction_id() -> str:
    """Return a transaction id made of a timestamp and a random suffix."""
    return datetime.now().strftime("%Y%m%d%H%M%S") + "-" + random_string(8)


class OrderService:
    """Places orders by coordinating the store and the delivery service."""

    def __init__(
        self,
        coordinator: Coordinator,
        store: Store,
        delivery: Delivery,
        *,
        id_factory: Callable[[], str] = generate_transaction_id,
    ) -> None:
        self._coordinator = coordinator
        self._store = store
        self._delivery = delivery
        self._id_factory = id_factory
        self._orders: dict[str, Order] = {}
        self._lock = threading.Lock()

    def place_order(self, items: Mapping[str, int], location: str) -> Order:
        """Place an order and run it through prepare and commit.

        On any failure after the transaction has begun, the transaction is
        aborted and the error is raised again.
        """
        transaction_id = self._id_factory()
        order = Order(id=transaction_id, items=dict(items), location=location)

        with self._lock:
            self._orders[transaction_id] = order

        self._coordinator.begin_transaction(transaction_id, TRANSACTION_TIMEOUT)

        try:
            self._store.place_order(transaction_id, items)
            self._delivery.assign_agent(transaction_id, location)
            self._coordinator.prepare(transaction_id, ["store", "delivery"])
            self._coordinator.commit(transaction_id)
        except Exception:
            self._coordinator.abort(transaction_id)
            raise

        order.status = STATUS_CONFIRMED
        return order

    def get_order(self, order_id: str) -> Order:
        """Return the order with the given id."""
        with self._lock:
            try:
                return self._orders[order_id]
            except KeyError:
                raise OrderNotFoundError() from None