"""
Daily call limiter shared by all Google Maps requests
"""
from datetime import date
from typing import Optional

from circuitgen.config import settings


class APICounter:
    """Counts provider calls per calendar day"""

    def __init__(self, max_calls_per_day: Optional[int] = None):
        self._max_calls_per_day = max_calls_per_day
        self.current_date = date.today()
        self.calls_today = 0

    @property
    def max_calls_per_day(self) -> int:
        if self._max_calls_per_day is not None:
            return self._max_calls_per_day
        return settings.max_api_calls_per_day

    def _roll_over(self) -> None:
        today = date.today()
        if today != self.current_date:
            self.current_date = today
            self.calls_today = 0

    def can_make_call(self) -> bool:
        """Check if another provider call fits in today's budget"""
        self._roll_over()
        return self.calls_today < self.max_calls_per_day

    def record_call(self) -> None:
        self._roll_over()
        self.calls_today += 1

    def get_remaining_calls(self) -> int:
        self._roll_over()
        return max(0, self.max_calls_per_day - self.calls_today)


# Global counter instance
api_counter = APICounter()
