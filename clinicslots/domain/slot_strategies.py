"""
Slot generation strategies.

A strategy turns one availability block into the ordered list of start times
a patient may book. Strategies are pure and hold no mutable state, so a single
instance can be shared between requests and threads.

Degenerate durations (zero or negative minutes) yield an empty list for every
strategy. A service that takes no time cannot be meaningfully placed in a
block, and returning nothing keeps "no slots" as the only failure signal.
"""

from datetime import date, time
from typing import List, Protocol

from pendulum import DateTime

from .models import at

DEFAULT_INTERVAL_MINUTES = 30


class SlotGenerationStrategy(Protocol):
    """Capability shared by every slot generator."""

    def generate_theoretical_slots(
        self,
        date: date,
        block_start: time,
        block_end: time,
        service_duration: int,
    ) -> List[DateTime]:
        """Return ascending, duplicate-free slot starts for one block."""


def fits(start: DateTime, duration_minutes: int, block_end: DateTime) -> bool:
    """Check whether a service starting at ``start`` ends within the block."""
    return start.add(minutes=duration_minutes) <= block_end


def _walk_block(
    day: date,
    block_start: time,
    block_end: time,
    service_duration: int,
    step_minutes: int,
) -> List[DateTime]:
    """
    Emit slot starts from ``block_start`` every ``step_minutes``.

    Scanning stops at the first start whose service would overrun the block.
    Starts only move forward, so no later start could fit either.
    """
    if service_duration <= 0:
        return []

    current = at(day, block_start)
    end = at(day, block_end)
    slots: List[DateTime] = []

    while current < end:
        if not fits(current, service_duration, end):
            break
        slots.append(current)
        current = current.add(minutes=step_minutes)

    return slots


class FixedIntervalSlotStrategy:
    """
    Offer slots on a fixed cadence, independent of the service length.

    Services of different lengths compete for the same canonical start times
    (e.g. everything starts on :00 or :30).
    """

    def __init__(self, interval_minutes: int = DEFAULT_INTERVAL_MINUTES):
        if interval_minutes <= 0:
            raise ValueError(
                f"interval_minutes must be greater than zero, got {interval_minutes}"
            )
        self.interval_minutes = interval_minutes

    def generate_theoretical_slots(
        self,
        date: date,
        block_start: time,
        block_end: time,
        service_duration: int,
    ) -> List[DateTime]:
        return _walk_block(
            date,
            block_start,
            block_end,
            service_duration,
            step_minutes=self.interval_minutes,
        )

    def __repr__(self) -> str:
        return f"FixedIntervalSlotStrategy(interval_minutes={self.interval_minutes})"


class DynamicDurationSlotStrategy:
    """
    Offer slots back-to-back, each exactly one service duration apart.

    A 45 minute service yields 08:00, 08:45, 09:30, ...
    """

    def generate_theoretical_slots(
        self,
        date: date,
        block_start: time,
        block_end: time,
        service_duration: int,
    ) -> List[DateTime]:
        return _walk_block(
            date,
            block_start,
            block_end,
            service_duration,
            step_minutes=service_duration,
        )

    def __repr__(self) -> str:
        return "DynamicDurationSlotStrategy()"
