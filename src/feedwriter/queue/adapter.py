"""Queue service adapter that forwards to an injected queue client.

The client does the actual work. This module only keeps track of the queues
created through it, checks that a queue id is known before forwarding, and
turns client failures into ``FeedWriterError(kind=RUNTIME)``.

The client is expected to provide::

    client.create_queue(name, timeout) -> handle
    client.get_queues() -> list of queue ids

and each handle::

    handle.delete_queue() -> bool
    handle.get_options() -> dict
    handle.set_options(metadata)
    handle.send(body) -> message
    handle.receive(max_messages, timeout) -> message or iterable of messages
    handle.delete_message(message) -> bool

Received messages must have a ``body`` attribute.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Type

from feedwriter.exceptions import ErrorKind, FeedWriterError

logger = logging.getLogger("feedwriter")

TIMEOUT = "timeout"


@dataclass
class QueueMessage:
    """A received message: its body plus the client's own message object."""

    body: Any
    raw: Any = None

    def get_message(self) -> Any:
        return self.raw


class QueueAdapter:
    """Forward queue operations to a queue client.

    Queue handles are cached per name in a plain dict. The cache is
    process-local and not synchronized.
    """

    def __init__(self, client: Any, message_class: Type[QueueMessage] = QueueMessage):
        """Initialize the adapter.

        Args:
            client: Queue client doing the actual work.
            message_class: Class used to wrap received messages.
        """
        if client is None:
            raise FeedWriterError(ErrorKind.INVALID_ARGUMENT, "No queue client provided")
        self._client = client
        self._message_class = message_class
        self._queues: Dict[str, Any] = {}

    def get_client(self) -> Any:
        return self._client

    def _timeout(self, options: Optional[Dict[str, Any]]) -> Optional[Any]:
        return (options or {}).get(TIMEOUT)

    def _handle(self, queue_id: str) -> Any:
        if queue_id not in self._queues:
            raise FeedWriterError(ErrorKind.INVALID_ARGUMENT, f"No such queue: {queue_id}")
        return self._queues[queue_id]

    def _client_error(self, action: str, error: Exception) -> FeedWriterError:
        logger.error(f"Queue client failed on {action}: {error}")
        return FeedWriterError(ErrorKind.RUNTIME, f"Error on {action}: {error}", cause=error)

    def create_queue(self, name: str, options: Optional[Dict[str, Any]] = None) -> str:
        """Create a queue and start tracking it.

        Returns:
            The queue id, which is the queue name.
        """
        try:
            self._queues[name] = self._client.create_queue(name, self._timeout(options))
        except Exception as e:
            raise self._client_error("queue creation", e)
        logger.debug(f"Created queue '{name}'")
        return name

    def delete_queue(self, queue_id: str, options: Optional[Dict[str, Any]] = None) -> bool:
        """Delete a queue and all its messages.

        Returns:
            True if the client deleted the queue, False if the queue is not
            tracked or the client declined.
        """
        if queue_id not in self._queues:
            return False
        try:
            deleted = bool(self._queues[queue_id].delete_queue())
        except Exception as e:
            raise self._client_error("queue deletion", e)
        if deleted:
            del self._queues[queue_id]
            logger.debug(f"Deleted queue '{queue_id}'")
        return deleted

    def list_queues(self, options: Optional[Dict[str, Any]] = None) -> List[str]:
        try:
            return list(self._client.get_queues())
        except Exception as e:
            raise self._client_error("listing queues", e)

    def fetch_queue_metadata(self, queue_id: str, options: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        handle = self._handle(queue_id)
        try:
            return handle.get_options()
        except Exception as e:
            raise self._client_error("fetching queue metadata", e)

    def store_queue_metadata(self, queue_id: str, metadata: Dict[str, Any],
                             options: Optional[Dict[str, Any]] = None) -> Any:
        """Replace the queue's metadata. Existing keys not in metadata may be lost."""
        handle = self._handle(queue_id)
        try:
            return handle.set_options(metadata)
        except Exception as e:
            raise self._client_error("setting queue metadata", e)

    def send_message(self, queue_id: str, body: Any, options: Optional[Dict[str, Any]] = None) -> Any:
        """Send a message to a tracked queue.

        Returns:
            Whatever the client returns for the sent message (its id).
        """
        handle = self._handle(queue_id)
        try:
            return handle.send(body)
        except Exception as e:
            raise self._client_error("sending message", e)

    def receive_messages(self, queue_id: str, max_messages: int = 1,
                         options: Optional[Dict[str, Any]] = None) -> List[QueueMessage]:
        """Receive at most max_messages messages from a tracked queue."""
        handle = self._handle(queue_id)
        try:
            result = handle.receive(max_messages, self._timeout(options))
        except Exception as e:
            raise self._client_error("receiving messages", e)

        if result is None:
            return []
        if hasattr(result, "body"):
            result = [result]
        return [self._message_class(message.body, message) for message in result]

    def delete_message(self, queue_id: str, message: QueueMessage,
                       options: Optional[Dict[str, Any]] = None) -> Any:
        """Delete a message previously returned by receive_messages."""
        handle = self._handle(queue_id)
        if not isinstance(message, QueueMessage):
            raise FeedWriterError(
                ErrorKind.INVALID_ARGUMENT,
                "Cannot delete the message: a QueueMessage is required"
            )
        try:
            return handle.delete_message(message.get_message())
        except Exception as e:
            raise self._client_error("deleting a message", e)

    def peek_messages(self, queue_id: str, num: int = 1, options: Optional[Dict[str, Any]] = None):
        raise FeedWriterError(ErrorKind.NOT_AVAILABLE, "Message peeking is not supported by this adapter")
