"""
storeslots - store opening hours, bookable time slots and opening reminders.
"""

__version__ = "0.1.0"
