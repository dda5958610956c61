"""
serviceslots - appointment slot generation for service bookings.
"""

__version__ = "0.1.0"
