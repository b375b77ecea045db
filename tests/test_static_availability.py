"""
Tests for the config-backed availability source.
"""

from datetime import date, time

import pytest

from clinicslots.adapters.static_availability import StaticAvailabilitySource
from clinicslots.config import AppConfig
from clinicslots.domain.exceptions import ResourceNotFoundError


def _source() -> StaticAvailabilitySource:
    config = AppConfig(
        practitioners=[
            {
                "id": "dr-ana",
                "blocks": [
                    {"date": "2024-01-01", "start": "14:00", "end": "17:00"},
                    {"date": "2024-01-01", "start": "08:00", "end": "12:00"},
                    {"date": "2024-01-02", "start": "09:00", "end": "10:00"},
                ],
            }
        ]
    )
    return StaticAvailabilitySource(config)


def test_blocks_for_day_sorted_by_start():
    blocks = _source().get_blocks("dr-ana", date(2024, 1, 1))

    assert [(b.start_time, b.end_time) for b in blocks] == [
        (time(8, 0), time(12, 0)),
        (time(14, 0), time(17, 0)),
    ]
    assert all(b.date == date(2024, 1, 1) for b in blocks)


def test_day_without_blocks():
    assert _source().get_blocks("dr-ana", date(2024, 1, 3)) == []


def test_unknown_practitioner():
    with pytest.raises(ResourceNotFoundError, match="Practitioner with id 'dr-x' not found"):
        _source().get_blocks("dr-x", date(2024, 1, 1))
