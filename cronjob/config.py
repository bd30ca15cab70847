"""
Job configuration.

Settings shared by jobs (default sender, last-execution file, SMTP
transport) are read from environment variables, with a ``.env`` file
loaded first when present.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional, Dict, List, Any, Tuple

from dotenv import find_dotenv, load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_EMAIL_FROM: Tuple[str, str] = ('cronjob@server.my', 'My Email Server')

ENV_PREFIX = 'CRONJOB_'


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.environ.get(ENV_PREFIX + name, default)


def _env_bool(name: str, default: bool) -> bool:
    value = _env(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


@dataclass
class JobSettings:
    """
    Settings injected into jobs and the mail transport.

    Environment variables (all prefixed with ``CRONJOB_``):
    - EMAIL_FROM / EMAIL_FROM_NAME: sender address and display name
    - LAST_EXECUTION_FILE: file holding the last execution timestamp
    - SMTP_HOST / SMTP_PORT / SMTP_USER / SMTP_PASSWORD / SMTP_TLS
    - TIMEOUT: foreground shell command timeout in seconds
    """
    email_from: Tuple[str, str] = DEFAULT_EMAIL_FROM
    last_execution_file: Optional[str] = None
    smtp_host: str = 'localhost'
    smtp_port: int = 25
    smtp_user: str = ''
    smtp_password: str = ''
    smtp_tls: bool = False
    timeout: int = 3600

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> 'JobSettings':
        """
        Build settings from the environment.

        Args:
            dotenv_path: Explicit ``.env`` file. If None, python-dotenv
                searches from the current directory upwards.
        """
        load_dotenv(dotenv_path or find_dotenv(usecwd=True))

        address = _env('EMAIL_FROM', DEFAULT_EMAIL_FROM[0])
        name = _env('EMAIL_FROM_NAME', DEFAULT_EMAIL_FROM[1])

        try:
            smtp_port = int(_env('SMTP_PORT', '25'))
            timeout = int(_env('TIMEOUT', '3600'))
        except ValueError as e:
            logger.error(f"Invalid numeric setting in environment: {e}")
            raise

        settings = cls(
            email_from=(address, name),
            last_execution_file=_env('LAST_EXECUTION_FILE') or None,
            smtp_host=_env('SMTP_HOST', 'localhost'),
            smtp_port=smtp_port,
            smtp_user=_env('SMTP_USER', ''),
            smtp_password=_env('SMTP_PASSWORD', ''),
            smtp_tls=_env_bool('SMTP_TLS', False),
            timeout=timeout
        )
        logger.debug(f"Loaded {settings!r}")
        return settings

    def as_setup(self) -> Dict[str, Any]:
        """Mapping suitable for ``Job.setup``."""
        config: Dict[str, Any] = {'email_from': self.email_from}
        if self.last_execution_file:
            config['last_execution_file'] = self.last_execution_file
        return config

    def validate(self) -> List[str]:
        """
        Validate settings.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        address, _ = self.email_from
        if not address or '@' not in address:
            errors.append(f"'email_from' must be an email address, got {address!r}")

        if not self.smtp_host:
            errors.append("'smtp_host' cannot be empty")

        if not 0 < self.smtp_port < 65536:
            errors.append(f"'smtp_port' out of range: {self.smtp_port}")

        if self.timeout <= 0:
            errors.append("'timeout' must be positive")

        return errors

    def __repr__(self):
        # Keep the SMTP password out of logs
        return (
            f"JobSettings(email_from={self.email_from}, "
            f"last_execution_file={self.last_execution_file}, "
            f"smtp={self.smtp_host}:{self.smtp_port}, timeout={self.timeout})"
        )
