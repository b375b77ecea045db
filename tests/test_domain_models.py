"""
Tests for domain models.
"""

from datetime import date, time

import pendulum

from clinicslots.domain.models import AvailabilityBlock, OfferWindow, at


class TestAvailabilityBlock:
    """Tests for AvailabilityBlock model."""

    def test_create_valid_block(self):
        """Test creating a valid availability block."""
        block = AvailabilityBlock(date(2024, 11, 25), time(9, 0), time(17, 0))

        assert block.is_valid()
        assert block.start() == pendulum.naive(2024, 11, 25, 9, 0)
        assert block.end() == pendulum.naive(2024, 11, 25, 17, 0)
        assert block.duration_minutes() == 480  # 8 hours

    def test_inverted_block_is_not_rejected(self):
        """Blocks are not validated on construction, only flagged."""
        block = AvailabilityBlock(date(2024, 11, 25), time(17, 0), time(9, 0))

        assert not block.is_valid()
        assert block.duration_minutes() == 0

    def test_empty_block_is_invalid(self):
        block = AvailabilityBlock(date(2024, 11, 25), time(9, 0), time(9, 0))

        assert not block.is_valid()

    def test_str(self):
        block = AvailabilityBlock(date(2024, 11, 25), time(9, 30), time(12, 0))

        assert str(block) == "25.11.2024 09:30 - 12:00"


class TestOfferWindow:
    """Tests for OfferWindow model."""

    def test_bounds_are_inclusive(self):
        window = OfferWindow(date(2025, 1, 1), date(2025, 6, 30))

        assert window.contains(date(2025, 1, 1))
        assert window.contains(date(2025, 6, 30))
        assert window.contains(date(2025, 3, 15))

    def test_outside_dates(self):
        window = OfferWindow(date(2025, 1, 1), date(2025, 6, 30))

        assert not window.contains(date(2024, 12, 31))
        assert not window.contains(date(2025, 7, 1))


def test_at_combines_date_and_time():
    moment = at(date(2024, 1, 1), time(8, 45))

    assert moment == pendulum.naive(2024, 1, 1, 8, 45)
    assert moment.tzinfo is None
