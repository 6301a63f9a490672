# twophase

An in-memory two-phase commit (2PC) model of a food-ordering system.
A `Coordinator` tracks distributed transactions through their states
(`INITIALIZED`, `PREPARED`, `COMMITTED`, `ABORTED`), and two participants
take part in each order:

- `Store` records orders and reserves their items from its inventory on prepare.
- `Delivery` holds delivery agents and books the first available one for an order.

`OrderService` ties them together: it begins a transaction, records the order
with the store, books a delivery agent, then prepares and commits through the
coordinator. If any of these steps raises, the transaction is aborted in the
coordinator and the error is raised again.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Command line

```
twophase
```

Sets up a store holding 5 pizzas and 10 burgers and two delivery agents,
places an order for 2 pizzas and 1 burger to `customer_location`, and prints
the order's ID, status, items and delivery location, followed by the status
read back from the service. It takes no options besides `--help`. On failure
it prints the error to standard error and exits with status 1.

## Library use

```python
from twophase.coordinator import Coordinator, TransactionState
from twophase.store import Store
from twophase.delivery import Delivery
from twophase.orders import OrderService

coordinator = Coordinator()
store = Store()
delivery = Delivery()
service = OrderService(coordinator, store, delivery)

store.add_item("pizza", 5)
store.add_item("burger", 10)
delivery.add_agent("agent1", "location1")

order = service.place_order({"pizza": 2, "burger": 1}, "customer_location")
print(order.id, order.status)  # e.g. 20240101120000-abcdefgh confirmed

assert service.get_order(order.id) is order
assert coordinator.get_transaction_state(order.id) is TransactionState.COMMITTED
```

Order IDs come from `twophase.orders.generate_transaction_id()`: a
`YYYYmmddHHMMSS` timestamp, a dash and eight random letters and digits
(`random_string(8)`). `OrderService` accepts an `id_factory` keyword argument
to supply IDs another way. A new `Order` has status `"pending"`; a successful
`place_order` sets it to `"confirmed"`. The order is registered with the
service before the transaction begins, so a failed order stays retrievable
with status `"pending"`.

### Coordinator

`Coordinator.begin_transaction(transaction_id, timeout)` registers a
`Transaction` (`timeout` is a `datetime.timedelta`, stored but not enforced).
`prepare(transaction_id, participants)` moves an initialized transaction to
prepared, `commit` moves a prepared one to committed, `abort` marks any known
transaction aborted, and `get_transaction_state` returns its state.

### Participants

Participants follow the `twophase.participant.Participant` protocol:
`prepare`, `commit`, `abort` and `get_state`, each taking a transaction ID.
`BaseParticipant` keeps the per-transaction state and is the base of both
`Store` and `Delivery`.

- `Store.place_order(transaction_id, items)` records an order if the
  inventory currently covers it; `Store.prepare` deducts its items,
  `Store.abort` returns them, `Store.commit` drops the record.
  `Store.quantity(item_id)` reports the current stock.
- `Delivery.assign_agent(transaction_id, location)` books the first available
  agent (the location is not used to choose) and marks it unavailable;
  `Delivery.abort` frees it again. `Delivery.agent(agent_id)` returns a copy
  of a `DeliveryAgent` or `None`, and `Delivery.assigned_agent(transaction_id)`
  returns the booked agent's ID or `None`.

### Errors

Failures are raised as exceptions derived from
`twophase.coordinator.TransactionError`:

- `TransactionExistsError`: a transaction with that ID was already begun.
- `TransactionNotFoundError`: no transaction with that ID is known.
- `InvalidStateError`: the transaction is not in the state the step needs.
- `twophase.participant.OrderNotFoundError`: a participant or the order
  service has no record of the order.
- `twophase.store.InsufficientItemsError`: the store holds too few of an item.
- `twophase.delivery.AgentUnavailableError`: no delivery agent is free.

## What it does not do

- The coordinator does not call the participants: `Coordinator.prepare`,
  `commit` and `abort` only change the coordinator's own record, and
  `OrderService` does not call the participants' `prepare`, `commit` or
  `abort`. An aborted order therefore leaves the store's order record and the
  booked delivery agent as they were.
- Everything is kept in memory; nothing is stored or shared between processes,
  and there is no network service.
- Transaction timeouts are recorded but never expire a transaction.