"""
Due-checking for jobs.

A job is due when its schedule gate and its truth test both pass.
The schedule gate either asks the cron oracle directly or, when a
last-execution file is configured, compares the schedule's previous
boundary with the timestamp stored in that file (catch-up semantics).
"""

import logging
from datetime import datetime
from typing import Optional

from cronjob.errors import NoScheduleConfiguredError
from cronjob.filesystem import read_timestamp
from cronjob.oracle import CronOracle

logger = logging.getLogger(__name__)


class DueChecker:
    """
    Decides whether a job should fire. Safe to call at any polling rate:
    nothing on the job is modified.
    """

    def __init__(self, oracle: Optional[CronOracle] = None):
        self.oracle = oracle or CronOracle()

    def schedule_gate(self, job, now: Optional[datetime] = None) -> bool:
        """
        Evaluate the schedule half of the due-check.

        Raises:
            NoScheduleConfiguredError: If the job has no schedule
        """
        if job.schedule is None:
            raise NoScheduleConfiguredError(
                f"Job '{job}' has no schedule; call at() or every() first"
            )

        if job.last_execution_file:
            last_execution = read_timestamp(job.last_execution_file)
            if last_execution is None:
                # Missing or unreadable file: never ran, so the gate is open
                logger.debug(f"No last execution recorded for '{job}', schedule gate open")
                return True

            previous = self.oracle.previous_run_time(job.schedule, now)
            logger.debug(
                f"'{job}': previous boundary {previous}, last execution {last_execution}"
            )
            return previous > last_execution

        return self.oracle.is_due(job.schedule, now)

    def is_due(self, job, now: Optional[datetime] = None) -> bool:
        """
        Check if ``job`` should run at ``now``.

        Args:
            job: The job to check
            now: Reference time (defaults to the current time)

        Returns:
            True if both the schedule gate and the truth test pass
        """
        return self.schedule_gate(job, now) and job.truth_test is True
