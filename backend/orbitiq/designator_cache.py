"""TTL memo for international designators (catalog id -> 'YYYY-NNNP')."""

from __future__ import annotations

import logging
import time
from typing import Callable

logger = logging.getLogger(__name__)

DEFAULT_TTL = 24 * 60 * 60  # seconds

Clock = Callable[[], float]


class DesignatorCache:
    """In-memory designator cache with lazy expiry.

    Entries live for exactly ``ttl`` seconds after insertion and are dropped
    on the first read past that point; there is no background sweep. Writes
    for the same id always carry the same derived value, so concurrent
    resolutions racing on a key are harmless.
    """

    def __init__(self, ttl: float = DEFAULT_TTL, clock: Clock = time.monotonic):
        self.ttl = ttl
        self._clock = clock
        self._entries: dict[int, tuple[str, float]] = {}

    def get(self, norad_id: int) -> str | None:
        entry = self._entries.get(norad_id)
        if entry is None:
            return None
        value, inserted_at = entry
        if self._clock() - inserted_at >= self.ttl:
            self._entries.pop(norad_id, None)
            logger.debug("Designator for %d expired", norad_id)
            return None
        return value

    def put(self, norad_id: int, designator: str) -> None:
        self._entries[norad_id] = (designator, self._clock())

    def __len__(self) -> int:
        return len(self._entries)
