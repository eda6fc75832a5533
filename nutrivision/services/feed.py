"""In-process live feed of a user's entries.

Subscribers always receive the complete current snapshot, never deltas, and
hold an explicit :class:`Subscription` handle that cancels delivery.
"""

from __future__ import annotations

import itertools
import logging
from functools import lru_cache
from typing import Callable, Dict, List, Sequence

from ..models.nutrition import FoodEntry

logger = logging.getLogger(__name__)

SnapshotCallback = Callable[[List[FoodEntry]], None]


class Subscription:
    """Handle returned by :meth:`EntryFeed.subscribe`."""

    def __init__(self, feed: "EntryFeed", user_id: str, token: int) -> None:
        self._feed = feed
        self.user_id = user_id
        self._token = token
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def cancel(self) -> None:
        """Stop delivery. Calling it again has no effect."""

        if self._active:
            self._active = False
            self._feed._remove(self.user_id, self._token)


class EntryFeed:
    """Fan out full snapshots of a user's entries to live subscribers."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, Dict[int, SnapshotCallback]] = {}
        self._tokens = itertools.count()

    def subscribe(self, user_id: str, callback: SnapshotCallback) -> Subscription:
        token = next(self._tokens)
        self._subscribers.setdefault(user_id, {})[token] = callback
        return Subscription(self, user_id, token)

    def subscriber_count(self, user_id: str) -> int:
        return len(self._subscribers.get(user_id, {}))

    def publish(self, user_id: str, entries: Sequence[FoodEntry]) -> None:
        """Deliver ``entries`` to every subscriber of ``user_id``.

        A failing callback is logged and does not prevent delivery to the
        remaining subscribers.
        """

        snapshot = list(entries)
        for token, callback in list(self._subscribers.get(user_id, {}).items()):
            try:
                callback(list(snapshot))
            except Exception:
                logger.exception("Entry feed subscriber %s for %s failed", token, user_id)

    def _remove(self, user_id: str, token: int) -> None:
        callbacks = self._subscribers.get(user_id)
        if callbacks is None:
            return
        callbacks.pop(token, None)
        if not callbacks:
            self._subscribers.pop(user_id, None)


@lru_cache()
def get_entry_feed() -> EntryFeed:
    """Process-wide feed shared by every request."""

    return EntryFeed()
