"""
Application service producing bookable slots for a practitioner and day.

The service wires three collaborators around the pure strategies: an
availability source supplying raw blocks, the strategy resolver, and a
booking filter that removes slots colliding with confirmed appointments.
Conflict detection itself lives behind ``BookingFilterProtocol``; the
default filter lets every slot through.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable, List, Optional, Protocol, Sequence

import pendulum
from pendulum import DateTime

from ..domain.models import AvailabilityBlock, OfferWindow
from .strategy_resolver import StrategyResolver

logger = logging.getLogger(__name__)


class AvailabilitySourceProtocol(Protocol):
    """Supplies raw availability blocks per practitioner and day."""

    def get_blocks(self, practitioner_id: str, day: date) -> List[AvailabilityBlock]:
        """Return the practitioner's blocks for ``day``."""


class BookingFilterProtocol(Protocol):
    """Removes slots that overlap already-confirmed appointments."""

    def filter_available(
        self,
        slots: List[DateTime],
        service_duration: int,
    ) -> List[DateTime]:
        """Return the subset of ``slots`` that is still free."""


class PassThroughBookingFilter:
    """Booking filter used when no booking data is wired in."""

    def filter_available(
        self,
        slots: List[DateTime],
        service_duration: int,
    ) -> List[DateTime]:
        return list(slots)


class CapacityCheckProtocol(Protocol):
    """Reports whether an offer has used up its quota of treatment cases."""

    def has_reached_capacity(self, practitioner_id: str, service_id: Optional[str]) -> bool:
        """Return True when completed plus in-progress cases meet the limit."""


class UnlimitedCapacity:
    """Capacity check used when offers carry no quota."""

    def has_reached_capacity(self, practitioner_id: str, service_id: Optional[str]) -> bool:
        return False


def _naive_now() -> DateTime:
    return pendulum.now().naive()


def merge_slots(slot_lists: Sequence[List[DateTime]]) -> List[DateTime]:
    """Merge several slot lists into one ascending list without duplicates."""
    ordered = sorted(slot for slots in slot_lists for slot in slots)
    return [
        slot for idx, slot in enumerate(ordered)
        if idx == 0 or slot != ordered[idx - 1]
    ]


def filter_past_slots(
    slots: List[DateTime],
    requested_date: date,
    now: DateTime,
) -> List[DateTime]:
    """
    Drop slots that have already started when ``requested_date`` is today.

    Slots for any other date are returned unchanged.
    """
    if requested_date != now.date():
        return slots
    return [slot for slot in slots if slot > now]


class AvailabilityService:
    """
    Orchestrates block retrieval, strategy resolution and filtering.
    """

    def __init__(
        self,
        availability_source: AvailabilitySourceProtocol,
        resolver: StrategyResolver,
        booking_filter: Optional[BookingFilterProtocol] = None,
        capacity_check: Optional[CapacityCheckProtocol] = None,
        clock: Callable[[], DateTime] = _naive_now,
    ) -> None:
        self._availability_source = availability_source
        self._resolver = resolver
        self._booking_filter = booking_filter or PassThroughBookingFilter()
        self._capacity_check = capacity_check or UnlimitedCapacity()
        self._clock = clock

    def generate_available_slots(
        self,
        *,
        practitioner_id: str,
        service_id: Optional[str],
        requested_date: date,
        service_duration: int,
        offer_window: Optional[OfferWindow] = None,
    ) -> List[DateTime]:
        """
        Compute the slots a patient can book on ``requested_date``.

        Returns an empty list when the date is outside the offer window, the
        offer has reached its case quota, or the practitioner has no usable
        block that day.
        """
        if offer_window is not None and not offer_window.contains(requested_date):
            logger.debug(
                "Date %s outside offer window %s..%s",
                requested_date,
                offer_window.start_date,
                offer_window.end_date,
            )
            return []

        if self._capacity_check.has_reached_capacity(practitioner_id, service_id):
            logger.debug(
                "Capacity reached for practitioner=%s service=%s",
                practitioner_id,
                service_id,
            )
            return []

        theoretical = self.generate_theoretical_slots(
            practitioner_id=practitioner_id,
            service_id=service_id,
            requested_date=requested_date,
            service_duration=service_duration,
        )
        if not theoretical:
            return []

        available = self._booking_filter.filter_available(theoretical, service_duration)
        available = filter_past_slots(available, requested_date, self._clock())

        logger.debug(
            "%d of %d slots bookable for practitioner=%s on %s",
            len(available),
            len(theoretical),
            practitioner_id,
            requested_date,
        )
        return available

    def generate_theoretical_slots(
        self,
        *,
        practitioner_id: str,
        service_id: Optional[str],
        requested_date: date,
        service_duration: int,
    ) -> List[DateTime]:
        """Run the resolved strategy over every block of the day."""
        blocks = self._availability_source.get_blocks(practitioner_id, requested_date)
        if not blocks:
            return []

        strategy = self._resolver.resolve(practitioner_id, service_id)
        per_block: List[List[DateTime]] = []

        for block in blocks:
            if block.date != requested_date:
                logger.warning(
                    "Skipping block %s: dated %s, requested %s",
                    block,
                    block.date,
                    requested_date,
                )
                continue

            if not block.is_valid():
                logger.warning("Skipping block %s: start is not before end", block)
                continue

            per_block.append(
                strategy.generate_theoretical_slots(
                    block.date,
                    block.start_time,
                    block.end_time,
                    service_duration,
                )
            )

        return merge_slots(per_block)
