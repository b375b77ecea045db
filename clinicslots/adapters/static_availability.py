"""
Availability source backed by the practitioners listed in the YAML config.
"""

from datetime import date
from typing import List

from ..config import AppConfig
from ..domain.exceptions import ResourceNotFoundError
from ..domain.models import AvailabilityBlock


class StaticAvailabilitySource:
    """
    Serves availability blocks straight from configuration.

    Useful for local runs and tests, without requiring an availability
    database behind the engine.
    """

    def __init__(self, config: AppConfig):
        self.config = config

    def get_blocks(self, practitioner_id: str, day: date) -> List[AvailabilityBlock]:
        """
        Return the configured blocks of a practitioner for one day.

        Raises:
            ResourceNotFoundError: If the practitioner is not configured
        """
        practitioner = self.config.find_practitioner(practitioner_id)
        if practitioner is None:
            raise ResourceNotFoundError("Practitioner", "id", practitioner_id)

        blocks = [
            AvailabilityBlock(date=block.date, start_time=block.start, end_time=block.end)
            for block in practitioner.blocks
            if block.date == day
        ]
        return sorted(blocks, key=lambda b: b.start_time)
