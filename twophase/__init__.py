"""In-memory two-phase commit coordinator with store and delivery participants."""

__version__ = "0.1.0"
__all__ = ["coordinator", "participant", "store", "delivery", "orders", "cli"]