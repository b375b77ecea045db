"""
Adapters layer - Availability data sources.
"""

from .static_availability import StaticAvailabilitySource

__all__ = ["StaticAvailabilitySource"]
