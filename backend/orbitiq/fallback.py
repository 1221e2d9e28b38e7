"""Ordered fallback chains: try each attempt in turn, keep the first success."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Generic, Sequence, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

# An attempt returns a value on success, None for "nothing usable here",
# or raises (transport errors, ProviderError). Either way the tier ends.
Attempt = Callable[[], Awaitable[T | None]]


@dataclass
class ChainResult(Generic[T]):
    value: T | None = None
    tier: str | None = None
    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.value is not None

    @property
    def last_error(self) -> str | None:
        return self.errors[-1] if self.errors else None


async def first_success(
    attempts: Sequence[tuple[str, Attempt[T]]],
    label: str = "",
) -> ChainResult[T]:
    """Run attempts in order until one returns a value.

    Exceptions from an attempt are logged and recorded, never re-raised.
    """
    result: ChainResult[T] = ChainResult()
    for tier, attempt in attempts:
        try:
            value = await attempt()
        except Exception as exc:
            reason = str(exc) or type(exc).__name__
            logger.warning("%s tier %s failed: %s", label, tier, reason)
            result.errors.append(f"{tier}: {reason}")
            continue
        if value is not None:
            result.value = value
            result.tier = tier
            return result
        logger.info("%s tier %s returned nothing usable", label, tier)
        result.errors.append(f"{tier}: no usable data")
    return result
