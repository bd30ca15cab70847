"""
Schedulable job.

A Job wraps a shell command or a Python callable together with its
arguments, schedule, output files and email recipients. Configuration
methods return the job so calls can be chained:

    job = Job('backup.sh', {'--target': '/data'})
    job.every('day').at_time('02:30')
    job.output('/var/log/backup.log', append=True).email('ops@example.com')

    if job.is_due():
        job.exec()
"""

import logging
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from cronjob.command import InProcessCommand, ShellCommand, to_command
from cronjob.compiler import OutputMode, compile_command
from cronjob.config import DEFAULT_EMAIL_FROM
from cronjob.due import DueChecker
from cronjob.errors import InvalidScheduleError
from cronjob.executor import JobExecutor
from cronjob.interval import IntervalSpec
from cronjob.oracle import CronOracle

logger = logging.getLogger(__name__)

SETUP_ALIASES = {
    'last_execution_file': 'last_execution_file',
    'lastExecutionFile': 'last_execution_file',
    'email_from': 'email_from',
    'emailFrom': 'email_from',
}


def _as_list(value: Union[str, Iterable[str]]) -> List[str]:
    if isinstance(value, str):
        return [value]
    return list(value)


def _email_from(value) -> Tuple[str, str]:
    """Normalize an (address, name) pair or a single-entry {address: name} mapping."""
    if isinstance(value, Mapping):
        if len(value) != 1:
            raise ValueError(f"email_from mapping must hold exactly one sender, got {len(value)}")
        (address, name), = value.items()
        return (address, name)
    if isinstance(value, str):
        return (value, '')
    address, name = value
    return (address, name)


class Job:
    """
    A single schedulable unit of work.

    Attributes:
        command: ShellCommand or InProcessCommand, fixed at construction
        args: Ordered flag -> value mapping injected into the command
        created_at: When the job object was created
        outputs: Files receiving the output
        mode: OutputMode shared by all output files
        emails: Recipients of the output
        email_from: (address, display name) of the sender
        schedule: Cron expression, or None until at()/every() is called
        last_execution_file: File holding the last execution timestamp
        run_in_background: Whether shell commands are detached with ``&``
        truth_test: Result of the when() predicate
        timeout: Foreground shell command timeout in seconds
        escape_args: Shell-quote argument values instead of plain double quotes
        oracle: Cron evaluator used to validate and due-check the schedule
        name: Label used in logs (defaults to the base command)
    """

    def __init__(
        self,
        command: Union[str, Callable[[dict], Any], ShellCommand, InProcessCommand],
        args: Optional[Mapping[str, Any]] = None,
        *,
        name: Optional[str] = None,
        email_from: Optional[Tuple[str, str]] = None,
        escape_args: bool = False,
        timeout: int = 3600,
        oracle: Optional[CronOracle] = None
    ):
        self.command = to_command(command)
        self.args: Dict[str, Any] = dict(args or {})
        self.name = name
        self.created_at = datetime.now()

        self.outputs: List[str] = []
        self.mode = OutputMode.OVERWRITE
        self.emails: List[str] = []
        self.email_from = _email_from(email_from) if email_from else DEFAULT_EMAIL_FROM

        self.schedule: Optional[str] = None
        self.last_execution_file: Optional[str] = None

        self.run_in_background = True
        self.truth_test = True
        self.timeout = timeout
        self.escape_args = escape_args
        self.oracle = oracle or CronOracle()

        self._compiled = self.build()

    @property
    def compiled(self) -> str:
        """The compiled command, rebuilt from the current state on every access."""
        return self.build()

    def build(self) -> str:
        """Compile the command from the current state and store it."""
        self._compiled = compile_command(
            self.command.base,
            self.args,
            self.outputs,
            mode=self.mode,
            run_in_background=self.run_in_background,
            escape=self.escape_args
        )
        return self._compiled

    def at(self, expression: str) -> 'Job':
        """
        Define when to run the job.

        Args:
            expression: Cron expression (e.g., "0 2 * * *")

        Raises:
            InvalidScheduleError: If the expression cannot be parsed
        """
        if not self.oracle.is_valid(expression):
            raise InvalidScheduleError(f"Invalid cron expression: {expression!r}")

        self.schedule = expression
        logger.debug(f"[{self}] Scheduled at '{expression}'")
        return self

    def every(self, unit: Union[str, int, None] = '*') -> IntervalSpec:
        """
        Define the execution interval of the job.

        Args:
            unit: '*' (every minute, the default), a number of minutes,
                'minute', 'hourly', 'daily', 'weekly' or 'monthly'

        Returns:
            IntervalSpec for refining the interval
        """
        return IntervalSpec(self, unit)

    def output(self, output: Union[str, Iterable[str]], append: bool = False) -> 'Job':
        """
        Define the file(s) where the output of the job is sent.

        Args:
            output: One path or a list of paths
            append: Append to the files instead of overwriting them
        """
        self.outputs = _as_list(output)
        self.mode = OutputMode.APPEND if append else OutputMode.OVERWRITE
        return self

    def email(self, email: Union[str, Iterable[str]]) -> 'Job':
        """
        Define the address(es) that receive the output of the job.

        Mailing needs the output, so any recipient also switches the job to
        the foreground.
        """
        self.emails = _as_list(email)
        if self.emails:
            self.run_in_background = False
        return self

    def run_in_foreground(self) -> 'Job':
        """Run the command in the foreground."""
        self.run_in_background = False
        return self

    def when(self, test: Callable[[], Any]) -> 'Job':
        """
        Only run the job if ``test`` holds.

        The predicate is evaluated once, now, not on every due-check.

        Raises:
            TypeError: If ``test`` is not callable
        """
        if not callable(test):
            raise TypeError(f"when() expects a callable, got {type(test).__name__}")
        self.truth_test = bool(test())
        return self

    def setup(self, config: Mapping[str, Any]) -> 'Job':
        """
        Apply injected configuration.

        Recognized keys: ``last_execution_file`` and ``email_from`` (their
        camelCase spellings are accepted too). Unknown keys are ignored.
        """
        for key, value in config.items():
            field = SETUP_ALIASES.get(key)
            if field is None or value is None:
                continue
            if field == 'email_from':
                self.email_from = _email_from(value)
            else:
                self.last_execution_file = str(value)
        return self

    def is_due(self, now: Optional[datetime] = None, oracle: Optional[CronOracle] = None) -> bool:
        """Check if the job is due to run at ``now``."""
        return DueChecker(oracle or self.oracle).is_due(self, now)

    def exec(self, executor: Optional[JobExecutor] = None) -> Any:
        """Execute the job. See ``JobExecutor.execute``."""
        return (executor or JobExecutor()).execute(self)

    def __str__(self):
        return self.name or self.command.base

    def __repr__(self):
        return f"Job(command={self.command!r}, schedule={self.schedule!r}, args={self.args!r})"
