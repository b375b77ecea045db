"""
Application services layer.
"""

from .availability import (
    AvailabilityService,
    AvailabilitySourceProtocol,
    BookingFilterProtocol,
    CapacityCheckProtocol,
)
from .strategy_resolver import StrategyResolver

__all__ = [
    "AvailabilityService",
    "AvailabilitySourceProtocol",
    "BookingFilterProtocol",
    "CapacityCheckProtocol",
    "StrategyResolver",
]
