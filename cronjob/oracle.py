"""
Cron expression evaluation.

Answers the two questions a job asks about its schedule: is it due
right now, and when was the schedule's most recent boundary.
"""

import logging
from datetime import datetime
from typing import Optional

from croniter import croniter

logger = logging.getLogger(__name__)


def _aware(now: Optional[datetime]) -> datetime:
    """Return ``now`` as a timezone-aware datetime (local time if naive)."""
    if now is None:
        return datetime.now().astimezone()
    if now.tzinfo is None:
        return now.astimezone()
    return now


class CronOracle:
    """
    Evaluates standard five-field cron expressions.

    Naive datetimes are interpreted in local time so that the timestamps
    returned by ``previous_run_time`` compare correctly with epoch
    timestamps recorded by ``time.time()``.
    """

    def is_valid(self, expression: str) -> bool:
        """Check whether ``expression`` is a parseable cron expression."""
        return isinstance(expression, str) and croniter.is_valid(expression)

    def is_due(self, expression: str, now: Optional[datetime] = None) -> bool:
        """
        Check if the expression fires within the minute containing ``now``.

        Args:
            expression: Cron expression (e.g., "0 2 * * *")
            now: Reference time (defaults to the current time)

        Returns:
            True if the schedule matches ``now``
        """
        now = _aware(now)
        due = croniter.match(expression, now)
        logger.debug(f"Cron '{expression}' due at {now.isoformat()}: {due}")
        return due

    def previous_run_time(self, expression: str, now: Optional[datetime] = None) -> int:
        """
        Get the most recent scheduled time strictly before ``now``.

        Args:
            expression: Cron expression
            now: Reference time (defaults to the current time)

        Returns:
            Epoch timestamp (seconds) of the previous scheduled run
        """
        now = _aware(now)
        previous = croniter(expression, now).get_prev(datetime)
        return int(previous.timestamp())
