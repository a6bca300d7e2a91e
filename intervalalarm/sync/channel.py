"""Outbound channel to companion devices.

The timer host receives a :class:`SyncChannel` by injection.  How the
messages actually reach a phone or watch is the transport's business;
:class:`OutboxChannel` just queues encoded envelopes for it to drain.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Any, Protocol

from .records import SyncMessage, encode_message

logger = logging.getLogger(__name__)


class SyncChannel(Protocol):
    def send(self, message: SyncMessage) -> None: ...


class NullChannel:
    """Drops everything.  Used when sync is switched off."""

    def send(self, message: SyncMessage) -> None:
        logger.debug("sync disabled, dropping %s", message.KIND)


class OutboxChannel:
    """Queue of encoded envelopes, oldest dropped once *maxlen* is hit."""

    def __init__(self, maxlen: int = 100) -> None:
        self._queue: deque[dict[str, Any]] = deque(maxlen=maxlen)

    def send(self, message: SyncMessage) -> None:
        if len(self._queue) == self._queue.maxlen:
            logger.warning("sync outbox full, dropping oldest message")
        self._queue.append(encode_message(message))
        logger.debug("queued %s", message.KIND)

    def drain(self) -> list[dict[str, Any]]:
        """Remove and return every queued envelope, oldest first."""
        items = list(self._queue)
        self._queue.clear()
        return items

    def __len__(self) -> int:
        return len(self._queue)
