"""
Job execution.

Runs a job's compiled command (in-process callable or shell command),
writes its output to the configured files and mails it to the
configured recipients.
"""

import logging
import subprocess
import time
from pathlib import Path
from typing import Any, Callable, List, Optional

from cronjob.command import InProcessCommand, ShellCommand
from cronjob.config import JobSettings
from cronjob.errors import (
    JobExecutionError,
    MailDispatchError,
    UnsupportedCommandKindError,
)
from cronjob.filesystem import write_output, write_timestamp
from cronjob.mailer import Attachment, SmtpMailDispatcher

logger = logging.getLogger(__name__)

OUTPUT_ATTACHMENT_NAME = 'output.txt'

# pipefail makes a failing command fail the whole `cmd | tee ...` pipeline
FOREGROUND_SHELL = '/bin/bash'
PIPEFAIL = 'set -o pipefail; '


class JobExecutor:
    """
    Executes jobs.

    Background shell jobs are fire-and-forget: the trailing ``&`` of the
    compiled command detaches them and their lifetime belongs to the OS.
    Foreground shell jobs run synchronously under bash with pipefail, so the
    exit code is the command's rather than tee's. In-process callables also
    run synchronously.
    Failures are raised to the caller; nothing is retried.
    """

    def __init__(self, mailer=None, run: Callable[..., Any] = subprocess.run):
        """
        Initialize job executor.

        Args:
            mailer: Object with a ``send`` method (see ``SmtpMailDispatcher``).
                Built from ``JobSettings.from_env()`` on first use if omitted.
            run: Process runner with the signature of ``subprocess.run``
        """
        self.mailer = mailer
        self.run = run

    def execute(self, job) -> Any:
        """
        Execute a job.

        The command is recompiled first so changes made after the due-check
        are honoured.

        Returns:
            The callable's return value for in-process jobs, the exit code
            for foreground shell jobs, None for background shell jobs

        Raises:
            UnsupportedCommandKindError: Unknown command kind
            JobExecutionError: The command failed
            SinkWriteError: An output file could not be written
            MailDispatchError: The output could not be mailed
        """
        if not isinstance(job.command, (InProcessCommand, ShellCommand)):
            raise UnsupportedCommandKindError(
                f"Cannot execute command of type {type(job.command).__name__}"
            )

        compiled = job.build()
        logger.info(f"[{job}] Executing: {compiled}")

        if isinstance(job.command, InProcessCommand):
            result = self._run_callable(job)
        else:
            result = self._run_shell(job, compiled)

        if job.last_execution_file:
            write_timestamp(job.last_execution_file, int(time.time()))

        logger.info(f"[{job}] Completed")
        return result

    def _run_callable(self, job) -> Any:
        try:
            output = job.command.func(job.args)
        except Exception as e:
            logger.error(f"[{job}] Callable raised: {e}")
            raise JobExecutionError(f"Job '{job}' failed: {e}") from e

        # First failing output file aborts the remaining ones
        for path in job.outputs:
            write_output(output, path, job.mode)

        if job.emails:
            content = output if isinstance(output, bytes) else ('' if output is None else str(output))
            self._send_emails(job, [(OUTPUT_ATTACHMENT_NAME, content)])

        return output

    def _run_shell(self, job, command: str) -> Optional[int]:
        if job.run_in_background:
            try:
                self.run(command, shell=True, start_new_session=True)
            except OSError as e:
                raise JobExecutionError(f"Failed to start '{command}': {e}") from e
            logger.info(f"[{job}] Started in background")
            return None

        try:
            result = self.run(
                PIPEFAIL + command,
                shell=True,
                executable=FOREGROUND_SHELL,
                timeout=job.timeout
            )
        except subprocess.TimeoutExpired as e:
            logger.error(f"[{job}] Command timed out after {job.timeout}s")
            raise JobExecutionError(f"Command timed out after {job.timeout}s") from e
        except OSError as e:
            raise JobExecutionError(f"Command execution failed: {e}") from e

        if result.returncode != 0:
            raise JobExecutionError(
                f"Command failed with exit code {result.returncode}"
            )

        if job.emails:
            self._send_emails(job, self._read_outputs(job.outputs))

        return result.returncode

    @staticmethod
    def _read_outputs(paths: List[str]) -> List[Attachment]:
        attachments = []
        for path in paths:
            file_path = Path(path).expanduser()
            try:
                attachments.append((file_path.name, file_path.read_bytes()))
            except OSError as e:
                raise MailDispatchError(f"Cannot attach output file {path}: {e}") from e
        return attachments

    def _send_emails(self, job, attachments: List[Attachment]):
        if self.mailer is None:
            self.mailer = SmtpMailDispatcher.from_settings(JobSettings.from_env())

        logger.info(f"[{job}] Mailing output to {', '.join(job.emails)}")
        self.mailer.send(
            sender=job.email_from,
            recipients=list(job.emails),
            attachments=attachments
        )
