"""Message registry: the authoritative, in-memory store of text posts.

All mutations go through one lock, so appends and deletes never interleave.
Reads copy the list under the same lock and sort the copy outside it.
"""
import logging
import threading
from typing import Optional

from localdrop.errors import NotFoundError, ValidationError
from localdrop.models.base import name_or_default, utcnow
from localdrop.models.message import Message
from localdrop.services.sequence import IdSequence, newest_first

logger = logging.getLogger(__name__)


class MessageRegistry:
    """Ordered store of Message entries with single-writer discipline."""

    def __init__(self, anonymous_name: str = "anonymous", max_length: int = 100_000):
        self.anonymous_name = anonymous_name
        self.max_length = max_length
        self._messages: list[Message] = []
        self._ids = IdSequence()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._messages)

    def append(
        self,
        content: Optional[str],
        author: Optional[str] = None,
        source_address: Optional[str] = None,
    ) -> Message:
        """Store a new message and return it.

        Raises ValidationError when the content is missing, blank or too long.
        """
        text = (content or "").strip()
        if not text:
            raise ValidationError("Message content must not be empty")
        if len(text) > self.max_length:
            raise ValidationError(f"Message content exceeds {self.max_length} characters")

        author = name_or_default(author, self.anonymous_name)

        with self._lock:
            message = Message(
                id=self._ids.next(),
                content=text,
                author=author,
                created_at=utcnow(),
                source_address=source_address,
            )
            self._messages.append(message)

        logger.info(f"Message {message.id} posted by {author!r} from {source_address}")
        return message

    def list_all(self) -> list[Message]:
        """Snapshot of all messages, newest first."""
        with self._lock:
            snapshot = list(self._messages)
        return newest_first(snapshot)

    def delete(self, message_id: int) -> Message:
        """Remove one message. Raises NotFoundError if the id is not present."""
        with self._lock:
            for index, message in enumerate(self._messages):
                if message.id == message_id:
                    del self._messages[index]
                    break
            else:
                raise NotFoundError("Message not found")

        logger.info(f"Message {message_id} deleted")
        return message

    def delete_all(self) -> int:
        """Remove every message and restart numbering at 1. Returns the count removed."""
        with self._lock:
            removed = len(self._messages)
            self._messages.clear()
            self._ids.reset()

        logger.info(f"Cleared {removed} message(s)")
        return removed
