"""
Cron-style jobs

A single schedulable unit of work wrapping a shell command or a
Python callable.

Features:
- Cron expressions or coarse intervals (every 5 minutes, daily, weekly)
- Catch-up due-checks based on a last-execution timestamp file
- Truth-test gating
- Compiled shell commands with argument injection, tee output files and
  background mode
- Output written to files and mailed to recipients
"""

from cronjob.command import InProcessCommand, ShellCommand
from cronjob.compiler import OutputMode, compile_command
from cronjob.config import DEFAULT_EMAIL_FROM, JobSettings
from cronjob.due import DueChecker
from cronjob.errors import (
    InvalidIntervalError,
    InvalidScheduleError,
    JobError,
    JobExecutionError,
    MailDispatchError,
    NoScheduleConfiguredError,
    SinkWriteError,
    UnsupportedCommandKindError,
)
from cronjob.executor import JobExecutor
from cronjob.interval import IntervalSpec
from cronjob.job import Job
from cronjob.mailer import SmtpMailDispatcher
from cronjob.oracle import CronOracle

__version__ = "0.1.0"
__all__ = [
    "Job",
    "ShellCommand",
    "InProcessCommand",
    "IntervalSpec",
    "OutputMode",
    "compile_command",
    "DueChecker",
    "CronOracle",
    "JobExecutor",
    "SmtpMailDispatcher",
    "JobSettings",
    "DEFAULT_EMAIL_FROM",
    "JobError",
    "InvalidIntervalError",
    "InvalidScheduleError",
    "NoScheduleConfiguredError",
    "UnsupportedCommandKindError",
    "SinkWriteError",
    "MailDispatchError",
    "JobExecutionError",
]
