"""Participants in a two-phase commit."""

from __future__ import annotations

import threading
from typing import Protocol, runtime_checkable

from twophase.coordinator import (
    InvalidStateError,
    TransactionError,
    TransactionNotFoundError,
    TransactionState,
)


class OrderNotFoundError(TransactionError):
    """Raised when a participant has no order recorded for a transaction."""

    def __init__(self, message: str = "order not found") -> None:
        super().__init__(message)


@runtime_checkable
class Participant(Protocol):
    """A service that can take part in a distributed transaction."""

    def prepare(self, transaction_id: str) -> None:
        """Prepare for commit."""

    def commit(self, transaction_id: str) -> None:
        """Commit the transaction."""

    def abort(self, transaction_id: str) -> None:
        """Abort the transaction."""

    def get_state(self, transaction_id: str) -> TransactionState:
        """Return this participant's state for the transaction."""


class BaseParticipant:
    """Tracks per-transaction state common to all participants."""

    def __init__(self) -> None:
        self._states: dict[str, TransactionState] = {}
        self._state_lock = threading.Lock()

    def prepare(self, transaction_id: str) -> None:
        """Mark the transaction prepared; allowed only if new or initialized."""
        with self._state_lock:
            state = self._states.get(transaction_id)
            if state is not None and state is not TransactionState.INITIALIZED:
                raise InvalidStateError("invalid transaction state")
            self._states[transaction_id] = TransactionState.PREPARED

    def commit(self, transaction_id: str) -> None:
        """Mark a prepared transaction committed."""
        with self._state_lock:
            if self._states.get(transaction_id) is not TransactionState.PREPARED:
                raise InvalidStateError("transaction not in prepared state")
            self._states[transaction_id] = TransactionState.COMMITTED

    def abort(self, transaction_id: str) -> None:
        """Mark the transaction aborted."""
        with self._state_lock:
            self._states[transaction_id] = TransactionState.ABORTED

    def get_state(self, transaction_id: str) -> TransactionState:
        """Return the recorded state for the transaction."""
        with self._state_lock:
            try:
                return self._states[transaction_id]
            except KeyError:
                raise TransactionNotFoundError() from None