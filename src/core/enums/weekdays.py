"""
Weekday enumeration used for day-of-week buckets.
"""

from datetime import datetime
from enum import StrEnum


class Weekday(StrEnum):
    """
    Days of the week keyed by their English name.

    Member order follows ``datetime.weekday()``: Monday is 0.
    """

    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"

    @classmethod
    def from_datetime(cls, moment: datetime) -> "Weekday":
        """Get the weekday a timestamp falls on."""
        return list(cls)[moment.weekday()]

    @property
    def is_weekend(self) -> bool:
        """Check if the day is Saturday or Sunday."""
        return self in [self.SATURDAY, self.SUNDAY]
