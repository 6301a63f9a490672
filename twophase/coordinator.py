"""Transaction coordinator for two-phase commit."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import IntEnum
from typing import Iterable


class TransactionError(Exception):
    """Base class for all transaction errors."""


class TransactionExistsError(TransactionError):
    """Raised when a transaction with the same id is already registered."""

    def __init__(self, message: str = "transaction already exists") -> None:
        super().__init__(message)


class TransactionNotFoundError(TransactionError):
    """Raised when a transaction id is unknown."""

    def __init__(self, message: str = "transaction not found") -> None:
        super().__init__(message)


class InvalidStateError(TransactionError):
    """Raised when an operation is not allowed in the transaction's current state."""

    def __init__(self, message: str = "invalid transaction state") -> None:
        super().__init__(message)


class TransactionState(IntEnum):
    """State of a distributed transaction."""

    INITIALIZED = 0
    PREPARED = 1
    COMMITTED = 2
    ABORTED = 3


@dataclass
class Transaction:
    """A distributed transaction tracked by the coordinator."""

    id: str
    timeout: timedelta
    state: TransactionState = TransactionState.INITIALIZED
    created_at: datetime = field(default_factory=datetime.now)
    lock: threading.Lock = field(
        default_factory=threading.Lock, repr=False, compare=False
    )


class Coordinator:
    """Keeps track of distributed transactions and drives their state."""

    def __init__(self) -> None:
        self._transactions: dict[str, Transaction] = {}
        self._lock = threading.Lock()

    def _lookup(self, transaction_id: str) -> Transaction:
        with self._lock:
            try:
                return self._transactions[transaction_id]
            except KeyError:
                raise TransactionNotFoundError() from None

    def begin_transaction(self, transaction_id: str, timeout: timedelta) -> Transaction:
        """Register and return a new transaction in the initialized state."""
        with self._lock:
            if transaction_id in self._transactions:
                raise TransactionExistsError()
            tx = Transaction(id=transaction_id, timeout=timeout)
            self._transactions[transaction_id] = tx
            return tx

    def prepare(self, transaction_id: str, participants: Iterable[str]) -> None:
        """Move an initialized transaction to the prepared state.

        Preparation of the named participants is simulated as successful.
        """
        tx = self._lookup(transaction_id)
        with tx.lock:
            if tx.state is not TransactionState.INITIALIZED:
                raise InvalidStateError("invalid transaction state")
            tx.state = TransactionState.PREPARED

    def commit(self, transaction_id: str) -> None:
        """Finalize a prepared transaction."""
        tx = self._lookup(transaction_id)
        with tx.lock:
            if tx.state is not TransactionState.PREPARED:
                raise InvalidStateError("transaction not in prepared state")
            tx.state = TransactionState.COMMITTED

    def abort(self, transaction_id: str) -> None:
        """Cancel a transaction, whatever its current state."""
        tx = self._lookup(transaction_id)
        with tx.lock:
            tx.state = TransactionState.ABORTED

    def get_transaction_state(self, transaction_id: str) -> TransactionState:
        """Return the current state of a transaction."""
        tx = self._lookup(transaction_id)
        with tx.lock:
            return tx.state