"""
Exceptions raised by job scheduling, compilation and execution.
"""


class JobError(Exception):
    """Base class for all job errors."""
    pass


class InvalidIntervalError(JobError, ValueError):
    """Raised when an interval unit is not part of the supported vocabulary."""
    pass


class InvalidScheduleError(JobError, ValueError):
    """Raised when a cron expression cannot be parsed."""
    pass


class NoScheduleConfiguredError(JobError):
    """Raised when a due-check is attempted on a job without a schedule."""
    pass


class UnsupportedCommandKindError(JobError):
    """Raised when a job holds a command that cannot be executed."""
    pass


class SinkWriteError(JobError):
    """Raised when job output cannot be written to an output file."""
    pass


class MailDispatchError(JobError):
    """Raised when job output cannot be mailed."""
    pass


class JobExecutionError(JobError):
    """Raised when job execution fails."""
    pass
