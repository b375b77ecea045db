"""
clinicslots - turn practitioner availability blocks into bookable slots.
"""

__version__ = "0.1.0"
