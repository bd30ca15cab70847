#!/usr/bin/env python3
"""
Basic Usage Examples for cronjob

Defines a few jobs and drives them with a once-a-minute polling loop,
the way an owning scheduler would.
"""

import logging
import sys
import time
from pathlib import Path

# Add parent directory to path for imports (if running as standalone script)
sys.path.insert(0, str(Path(__file__).parent.parent))

from cronjob import Job, JobError, JobExecutor, JobSettings
from cronjob.log import setup_logging

logger = logging.getLogger('cronjob.examples')


def disk_report(args):
    """In-process job: report free space for a path."""
    import shutil
    usage = shutil.disk_usage(args.get('path', '/'))
    return f"free={usage.free} total={usage.total}\n"


def build_jobs(settings: JobSettings):
    """Example jobs covering intervals, cron expressions and output routing."""
    jobs = []

    # Shell command every 5 minutes, output appended to a log file
    heartbeat = Job('date', name='heartbeat').setup(settings.as_setup())
    heartbeat.every(5)
    heartbeat.output('/tmp/cronjob-heartbeat.log', append=True)
    jobs.append(heartbeat)

    # Python callable daily at 02:30, catch-up tracked in a timestamp file
    report = Job(disk_report, {'path': '/'}, name='disk-report')
    report.setup({'last_execution_file': '/tmp/cronjob-disk-report.last'})
    report.every('daily').at_time('02:30')
    report.output('/tmp/cronjob-disk-report.txt')
    jobs.append(report)

    # Raw cron expression, only on weekdays
    jobs.append(
        Job('echo weekday', name='weekday')
        .at('0 9 * * 1-5')
        .when(lambda: Path('/tmp').exists())
    )

    return jobs


def main():
    setup_logging(verbose='-v' in sys.argv)

    settings = JobSettings.from_env()
    errors = settings.validate()
    if errors:
        for error in errors:
            logger.error(f"  - {error}")
        sys.exit(1)

    executor = JobExecutor()
    jobs = build_jobs(settings)
    logger.info(f"Polling {len(jobs)} job(s). Press Ctrl+C to stop.")

    try:
        while True:
            for job in jobs:
                try:
                    if job.is_due():
                        job.exec(executor)
                except JobError as e:
                    logger.error(f"Job '{job}' failed: {e}")
            time.sleep(60 - time.time() % 60)
    except KeyboardInterrupt:
        logger.info("Shutting down...")


if __name__ == "__main__":
    main()
