"""System clock adapter providing real UTC time.

Stamps context-store writes in production. For tests, inject a fixed clock.
"""

from __future__ import annotations

from datetime import UTC, datetime

from ...application.ports.clock_port import ClockPort


class SystemClock(ClockPort):
    def now(self) -> datetime:  # pragma: no cover - trivial
        """Return current system time in UTC timezone."""
        return datetime.now(UTC)
