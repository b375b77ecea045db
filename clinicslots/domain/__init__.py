"""
Domain layer - Pure business logic without external dependencies.
"""

from .models import AvailabilityBlock, OfferWindow
from .slot_strategies import (
    DynamicDurationSlotStrategy,
    FixedIntervalSlotStrategy,
    SlotGenerationStrategy,
    fits,
)

__all__ = [
    "AvailabilityBlock",
    "OfferWindow",
    "SlotGenerationStrategy",
    "FixedIntervalSlotStrategy",
    "DynamicDurationSlotStrategy",
    "fits",
]
