"""
Domain models for availability blocks and generated slots.
"""

from dataclasses import dataclass
from datetime import date, time

import pendulum
from pendulum import DateTime


def at(day: date, moment: time) -> DateTime:
    """Combine a calendar date and a civil time into a naive DateTime."""
    return pendulum.naive(
        day.year,
        day.month,
        day.day,
        moment.hour,
        moment.minute,
        moment.second,
        moment.microsecond,
    )


@dataclass(frozen=True)
class AvailabilityBlock:
    """
    One contiguous interval during which a practitioner takes bookings.

    ``start_time < end_time`` is expected but not enforced here; strategies
    simply return no slots for an empty or inverted block.
    """
    date: date
    start_time: time
    end_time: time

    def is_valid(self) -> bool:
        """Check that the block opens before it closes."""
        return self.start_time < self.end_time

    def start(self) -> DateTime:
        return at(self.date, self.start_time)

    def end(self) -> DateTime:
        return at(self.date, self.end_time)

    def duration_minutes(self) -> int:
        """Return the block length in minutes (zero for invalid blocks)."""
        if not self.is_valid():
            return 0
        return int((self.end() - self.start()).total_seconds() / 60)

    def __str__(self) -> str:
        return (
            f"{self.start().format('DD.MM.YYYY HH:mm')} - "
            f"{self.end().format('HH:mm')}"
        )


@dataclass(frozen=True)
class OfferWindow:
    """Inclusive date range during which a treatment offer can be booked."""
    start_date: date
    end_date: date

    def contains(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date
