import re
from datetime import datetime, timedelta

import pytest

from twophase.coordinator import (
    Coordinator,
    TransactionExistsError,
    TransactionState,
)
from twophase.delivery import AgentUnavailableError, Delivery
from twophase.orders import (
    CHARSET,
    Order,
    OrderService,
    generate_transaction_id,
    random_string,
)
from twophase.participant import OrderNotFoundError
from twophase.store import InsufficientItemsError, Store


def _fixed_ids(*ids):
    remaining = list(ids)
    return lambda: remaining.pop(0)


@pytest.fixture
def parts():
    coord = Coordinator()
    store = Store()
    delivery = Delivery()
    store.add_item("pizza", 5)
    store.add_item("burger", 10)
    delivery.add_agent("agent1", "location1")
    return coord, store, delivery


def test_random_string_length_and_charset():
    value = random_string(32)
    assert len(value) == 32
    assert set(value) <= set(CHARSET)


def test_random_string_empty():
    assert random_string(0) == ""


def test_random_string_negative_length():
    with pytest.raises(ValueError):
        random_string(-1)


def test_generate_transaction_id_format():
    before = datetime.now().replace(microsecond=0)
    tid = generate_transaction_id()
    after = datetime.now()
    assert re.fullmatch(r"\d{14}-[A-Za-z0-9]{8}", tid)
    stamp = datetime.strptime(tid.split("-")[0], "%Y%m%d%H%M%S")
    assert before <= stamp <= after


def test_place_order_success(parts):
    coord, store, delivery = parts
    service = OrderService(coord, store, delivery)
    order = service.place_order({"pizza": 2, "burger": 1}, "customer_location")
    assert order.status == "confirmed"
    assert order.items == {"pizza": 2, "burger": 1}
    assert order.location == "customer_location"
    assert coord.get_transaction_state(order.id) is TransactionState.COMMITTED
    assert service.get_order(order.id) is order


def test_place_order_books_agent(parts):
    coord, store, delivery = parts
    service = OrderService(coord, store, delivery, id_factory=_fixed_ids("tx-1"))
    order = service.place_order({"pizza": 1}, "here")
    assert order.id == "tx-1"
    assert delivery.assigned_agent("tx-1") == "agent1"
    assert delivery.agent("agent1").available is False


def test_place_order_copies_items(parts):
    coord, store, delivery = parts
    service = OrderService(coord, store, delivery)
    items = {"pizza": 1}
    order = service.place_order(items, "here")
    items["pizza"] = 4
    assert order.items == {"pizza": 1}


def test_place_order_insufficient_items_aborts(parts):
    coord, store, delivery = parts
    service = OrderService(coord, store, delivery, id_factory=_fixed_ids("tx-2"))
    with pytest.raises(InsufficientItemsError):
        service.place_order({"pizza": 6}, "here")
    assert coord.get_transaction_state("tx-2") is TransactionState.ABORTED
    assert service.get_order("tx-2").status == "pending"
    assert delivery.agent("agent1").available is True


def test_place_order_no_agent_aborts(parts):
    coord, store, delivery = parts
    service = OrderService(
        coord, store, delivery, id_factory=_fixed_ids("tx-a", "tx-b")
    )
    service.place_order({"pizza": 1}, "here")
    with pytest.raises(AgentUnavailableError):
        service.place_order({"pizza": 1}, "there")
    assert coord.get_transaction_state("tx-b") is TransactionState.ABORTED
    assert service.get_order("tx-b").status == "pending"


def test_place_order_duplicate_id(parts):
    coord, store, delivery = parts
    delivery.add_agent("agent2", "location2")
    service = OrderService(
        coord, store, delivery, id_factory=_fixed_ids("same", "same")
    )
    service.place_order({"pizza": 1}, "here")
    with pytest.raises(TransactionExistsError):
        service.place_order({"burger": 1}, "there")
    assert coord.get_transaction_state("same") is TransactionState.COMMITTED


def test_get_order_unknown(parts):
    coord, store, delivery = parts
    service = OrderService(coord, store, delivery)
    with pytest.raises(OrderNotFoundError):
        service.get_order("missing")


def test_order_defaults():
    order = Order(id="x", items={"pizza": 1}, location="here")
    assert order.status == "pending"
    assert datetime.now() - order.created_at < timedelta(minutes=1)