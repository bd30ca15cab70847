"""
Interval builder.

Translates coarse intervals ("every 5 minutes", "daily", "weekly") into
cron expressions and binds them to the owning job.
"""

import logging
import re
from typing import Union

from cronjob.errors import InvalidIntervalError

logger = logging.getLogger(__name__)

EVERY_MINUTE = "* * * * *"

DAY_MAP = {
    'sunday': 0, 'monday': 1, 'tuesday': 2, 'wednesday': 3,
    'thursday': 4, 'friday': 5, 'saturday': 6
}

UNIT_ALIASES = {
    'minute': 'minute',
    'hour': 'hourly',
    'hourly': 'hourly',
    'day': 'daily',
    'daily': 'daily',
    'week': 'weekly',
    'weekly': 'weekly',
    'month': 'monthly',
    'monthly': 'monthly',
}

_MINUTES_RE = re.compile(r'^(\d+)\s*(?:m|min|mins|minute|minutes)$')


class IntervalSpec:
    """
    Fluent interval definition attached to a job.

    Creating the spec validates the unit and binds the matching cron
    expression to the job right away, so ``job.every()`` alone schedules
    the job every minute. Refinements such as ``at_time`` or ``on`` rewrite
    the expression and hand the job back for further chaining.
    """

    def __init__(self, job, unit: Union[str, int, None] = '*'):
        self.job = job
        self.unit = unit
        self.minute = '*'
        self.hour = '*'
        self.day = '*'
        self.month = '*'
        self.day_of_week = '*'
        self.kind = self._parse(unit)
        self.apply()

    def _parse(self, unit) -> str:
        """Set cron fields for ``unit`` and return the normalized kind."""
        if unit is None or unit == '*':
            return 'minute'

        if isinstance(unit, bool):
            raise InvalidIntervalError(f"Invalid interval: {unit!r}")

        if isinstance(unit, int):
            return self._parse_minutes(unit)

        if not isinstance(unit, str):
            raise InvalidIntervalError(f"Invalid interval: {unit!r}")

        text = unit.strip().lower()
        match = _MINUTES_RE.match(text)
        if match:
            return self._parse_minutes(int(match.group(1)))

        kind = UNIT_ALIASES.get(text)
        if kind is None:
            raise InvalidIntervalError(f"Invalid interval: {unit!r}")

        if kind in ('hourly', 'daily', 'weekly', 'monthly'):
            self.minute = '0'
        if kind in ('daily', 'weekly', 'monthly'):
            self.hour = '0'
        if kind == 'weekly':
            self.day_of_week = '0'
        if kind == 'monthly':
            self.day = '1'
        return kind

    def _parse_minutes(self, count: int) -> str:
        if count < 1 or count > 59:
            raise InvalidIntervalError(f"Minute interval must be between 1 and 59, got {count}")
        if count > 1:
            self.minute = f"*/{count}"
            return 'minutes'
        return 'minute'

    @property
    def expression(self) -> str:
        """The cron expression for the current interval."""
        return ' '.join([self.minute, self.hour, self.day, self.month, self.day_of_week])

    def apply(self):
        """Bind the current expression to the job and return the job."""
        logger.debug(f"Interval {self.unit!r} -> '{self.expression}'")
        return self.job.at(self.expression)

    def at_minute(self, minute: int):
        """Run at ``minute`` past the hour (hourly, daily, weekly, monthly)."""
        if self.kind not in ('hourly', 'daily', 'weekly', 'monthly'):
            raise InvalidIntervalError(f"Cannot set a minute on a '{self.kind}' interval")
        self.minute = str(_bounded(minute, 0, 59, 'minute'))
        return self.apply()

    def at_time(self, time: str):
        """
        Run at a wall-clock time.

        Args:
            time: "HH:MM" for daily, weekly and monthly intervals, or ":MM"
                for hourly intervals

        Returns:
            The owning job
        """
        if self.kind not in ('hourly', 'daily', 'weekly', 'monthly'):
            raise InvalidIntervalError(f"Cannot set a time on a '{self.kind}' interval")

        hour_text, sep, minute_text = str(time).partition(':')
        if not sep:
            raise InvalidIntervalError(f"Invalid time {time!r}, expected HH:MM")

        if hour_text:
            if self.kind == 'hourly':
                raise InvalidIntervalError("Hourly intervals only accept ':MM'")
            self.hour = str(_bounded(hour_text, 0, 23, 'hour'))
        self.minute = str(_bounded(minute_text, 0, 59, 'minute'))
        return self.apply()

    def on(self, day: Union[str, int]):
        """
        Pick the day the job runs on.

        Weekly intervals take a weekday name (or 0-6, Sunday first);
        monthly intervals take a day of the month (1-31).
        """
        if self.kind == 'weekly':
            if isinstance(day, str):
                weekday = DAY_MAP.get(day.strip().lower())
                if weekday is None:
                    raise InvalidIntervalError(f"Unknown weekday: {day!r}")
            else:
                weekday = _bounded(day, 0, 6, 'weekday')
            self.day_of_week = str(weekday)
        elif self.kind == 'monthly':
            self.day = str(_bounded(day, 1, 31, 'day of month'))
        else:
            raise InvalidIntervalError(f"Cannot set a day on a '{self.kind}' interval")
        return self.apply()

    def __repr__(self):
        return f"IntervalSpec(unit={self.unit!r}, expression='{self.expression}')"


def _bounded(value, low: int, high: int, name: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError) as e:
        raise InvalidIntervalError(f"Invalid {name}: {value!r}") from e
    if isinstance(value, bool) or not low <= number <= high:
        raise InvalidIntervalError(f"{name.capitalize()} must be between {low} and {high}, got {value!r}")
    return number
