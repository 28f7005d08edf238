from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime


class ClockPort(ABC):
    """Port for time-related operations.

    Context writes are stamped through this port so tests can pin the time.
    """

    @abstractmethod
    def now(self) -> datetime:
        """Return current UTC datetime."""
        ...
