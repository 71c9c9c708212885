"""Queue service adapter."""

from .adapter import QueueAdapter, QueueMessage

__all__ = ["QueueAdapter", "QueueMessage"]
