"""Delivery participant that assigns agents to orders."""

from __future__ import annotations

import dataclasses
import threading
from dataclasses import dataclass

from twophase.coordinator import TransactionError
from twophase.participant import BaseParticipant, OrderNotFoundError


class AgentUnavailableError(TransactionError):
    """Raised when no suitable delivery agent is available."""

    def __init__(self, message: str = "delivery agent not available") -> None:
        super().__init__(message)


@dataclass
class DeliveryAgent:
    """A delivery agent and its availability."""

    id: str
    location: str
    available: bool = True


class Delivery(BaseParticipant):
    """Delivery service that books agents for transactions."""

    def __init__(self) -> None:
        super().__init__()
        self._agents: dict[str, DeliveryAgent] = {}
        self._orders: dict[str, str] = {}
        self._lock = threading.Lock()

    def add_agent(self, agent_id: str, location: str) -> None:
        """Register an available agent, replacing any with the same id."""
        with self._lock:
            self._agents[agent_id] = DeliveryAgent(id=agent_id, location=location)

    def agent(self, agent_id: str) -> DeliveryAgent | None:
        """Return a snapshot of the agent, or None if unknown."""
        with self._lock:
            found = self._agents.get(agent_id)
            return dataclasses.replace(found) if found is not None else None

    def assigned_agent(self, transaction_id: str) -> str | None:
        """Return the id of the agent booked for a transaction, if any."""
        with self._lock:
            return self._orders.get(transaction_id)

    def prepare(self, transaction_id: str) -> None:
        """Claim the booked agent for the transaction."""
        with self._lock:
            agent_id = self._orders.get(transaction_id)
            if agent_id is None:
                raise OrderNotFoundError()
            agent = self._agents.get(agent_id)
            if agent is None or not agent.available:
                raise AgentUnavailableError("delivery agent not available")
            agent.available = False
            super().prepare(transaction_id)

    def commit(self, transaction_id: str) -> None:
        """Drop the booking record and commit."""
        with self._lock:
            self._orders.pop(transaction_id, None)
            super().commit(transaction_id)

    def abort(self, transaction_id: str) -> None:
        """Release the booked agent and abort."""
        with self._lock:
            agent_id = self._orders.pop(transaction_id, None)
            if agent_id is not None:
                agent = self._agents.get(agent_id)
                if agent is not None:
                    agent.available = True
            super().abort(transaction_id)

    def assign_agent(self, transaction_id: str, location: str) -> None:
        """Book the first available agent for the transaction."""
        with self._lock:
            agent = next((a for a in self._agents.values() if a.available), None)
            if agent is None:
                raise AgentUnavailableError("no delivery agents available")
            agent.available = False
            self._orders[transaction_id] = agent.id