"""
Tests for environment-driven job settings.
"""

import pytest

from cronjob.config import DEFAULT_EMAIL_FROM, JobSettings
from cronjob.job import Job
from cronjob.mailer import SmtpMailDispatcher

ENV_NAMES = [
    'EMAIL_FROM', 'EMAIL_FROM_NAME', 'LAST_EXECUTION_FILE', 'SMTP_HOST',
    'SMTP_PORT', 'SMTP_USER', 'SMTP_PASSWORD', 'SMTP_TLS', 'TIMEOUT',
]


@pytest.fixture
def clean_env(monkeypatch):
    """Remove CRONJOB_* variables and restore them after the test."""
    for name in ENV_NAMES:
        # setenv first so monkeypatch also undoes values loaded from .env files
        monkeypatch.setenv(f'CRONJOB_{name}', '')
        monkeypatch.delenv(f'CRONJOB_{name}')
    return monkeypatch


def test_defaults(clean_env, tmp_path):
    settings = JobSettings.from_env(dotenv_path=str(tmp_path / '.env'))

    assert settings.email_from == DEFAULT_EMAIL_FROM
    assert settings.last_execution_file is None
    assert settings.smtp_host == 'localhost'
    assert settings.smtp_port == 25
    assert settings.smtp_tls is False
    assert settings.timeout == 3600
    assert settings.validate() == []


def test_environment_overrides(clean_env, tmp_path):
    clean_env.setenv('CRONJOB_EMAIL_FROM', 'jobs@example.com')
    clean_env.setenv('CRONJOB_EMAIL_FROM_NAME', 'Jobs')
    clean_env.setenv('CRONJOB_LAST_EXECUTION_FILE', '/var/run/jobs.last')
    clean_env.setenv('CRONJOB_SMTP_PORT', '587')
    clean_env.setenv('CRONJOB_SMTP_TLS', 'yes')
    clean_env.setenv('CRONJOB_TIMEOUT', '60')

    settings = JobSettings.from_env(dotenv_path=str(tmp_path / '.env'))

    assert settings.email_from == ('jobs@example.com', 'Jobs')
    assert settings.last_execution_file == '/var/run/jobs.last'
    assert settings.smtp_port == 587
    assert settings.smtp_tls is True
    assert settings.timeout == 60


def test_dotenv_file_loaded(clean_env, tmp_path):
    env_file = tmp_path / '.env'
    env_file.write_text('CRONJOB_SMTP_HOST=mail.example.com\nCRONJOB_SMTP_USER=robot\n')

    settings = JobSettings.from_env(dotenv_path=str(env_file))

    assert settings.smtp_host == 'mail.example.com'
    assert settings.smtp_user == 'robot'


def test_invalid_number_raises(clean_env, tmp_path):
    clean_env.setenv('CRONJOB_SMTP_PORT', 'twenty-five')

    with pytest.raises(ValueError):
        JobSettings.from_env(dotenv_path=str(tmp_path / '.env'))


def test_validate_reports_errors():
    settings = JobSettings(email_from=('nobody', ''), smtp_host='', smtp_port=0, timeout=0)

    errors = settings.validate()

    assert len(errors) == 4


def test_settings_feed_job_setup():
    settings = JobSettings(email_from=('jobs@example.com', 'Jobs'), last_execution_file='/tmp/last')
    job = Job('cmd').setup(settings.as_setup())

    assert job.email_from == ('jobs@example.com', 'Jobs')
    assert job.last_execution_file == '/tmp/last'


def test_as_setup_without_last_execution_file():
    assert JobSettings().as_setup() == {'email_from': DEFAULT_EMAIL_FROM}


def test_mailer_from_settings():
    settings = JobSettings(smtp_host='mail.example.com', smtp_port=587, smtp_user='u',
                           smtp_password='p', smtp_tls=True)

    mailer = SmtpMailDispatcher.from_settings(settings)

    assert (mailer.host, mailer.port, mailer.username, mailer.password, mailer.use_tls) == \
        ('mail.example.com', 587, 'u', 'p', True)


def test_repr_hides_password():
    assert 'secret' not in repr(JobSettings(smtp_password='secret'))
