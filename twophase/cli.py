"""Command that places an example order and reports its status."""

from __future__ import annotations

import argparse
import sys
from typing import Mapping, Sequence

from twophase.coordinator import Coordinator, TransactionError
from twophase.delivery import Delivery
from twophase.orders import OrderService
from twophase.store import Store


def _format_items(items: Mapping[str, int]) -> str:
    body = " ".join(f"{key}:{items[key]}" for key in sorted(items))
    return f"map[{body}]"


def main(argv: Sequence[str] | None = None) -> int:
    """Set up the services, place an example order and print the result."""
    parser = argparse.ArgumentParser(
        prog="twophase",
        description="Place an example order through a two-phase commit.",
    )
    parser.parse_args(argv)

    coordinator = Coordinator()
    store = Store()
    delivery = Delivery()
    service = OrderService(coordinator, store, delivery)

    store.add_item("pizza", 5)
    store.add_item("burger", 10)
    delivery.add_agent("agent1", "location1")
    delivery.add_agent("agent2", "location2")

    items = {"pizza": 2, "burger": 1}

    try:
        order = service.place_order(items, "customer_location")
    except TransactionError as exc:
        print(f"Failed to place order: {exc}", file=sys.stderr)
        return 1

    print(f"Order placed successfully! Order ID: {order.id}")
    print(f"Order status: {order.status}")
    print(f"Order items: {_format_items(order.items)}")
    print(f"Delivery location: {order.location}")

    try:
        retrieved = service.get_order(order.id)
    except TransactionError as exc:
        print(f"Failed to get order: {exc}", file=sys.stderr)
        return 1

    print(f"\nRetrieved order status: {retrieved.status}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())