"""
Tests for command compilation.
"""

from cronjob.compiler import OutputMode, compile_command
from cronjob.job import Job


def test_backup_job_with_output_file():
    """Arguments, one output file, overwrite mode, background."""
    job = Job('backup.sh', {'--target': '/data'}).output('/log/out.txt')

    assert job.compiled == 'backup.sh --target "/data" | tee /log/out.txt > /dev/null 2>&1 &'


def test_email_recipient_drops_background_suffix():
    job = Job('backup.sh', {'--target': '/data'}).output('/log/out.txt')
    job.email('ops@example.com')

    assert job.compiled == 'backup.sh --target "/data" | tee /log/out.txt > /dev/null 2>&1'


def test_compile_is_deterministic():
    job = Job('report.sh', {'-a': 1, '-b': 'two'}).output(['/tmp/x', '/tmp/y'], append=True)

    assert job.build() == job.build()
    assert job.compiled == job.compiled


def test_arguments_keep_insertion_order():
    compiled = compile_command('cmd', {'a': 1, 'b': 2, 'c': 3}, [])

    assert compiled == 'cmd a "1" b "2" c "3" > /dev/null 2>&1 &'
    assert compiled.index(' a ') < compiled.index(' b ') < compiled.index(' c ')


def test_append_mode_adds_flag():
    append = compile_command('cmd', {}, ['/tmp/out'], mode=OutputMode.APPEND)
    overwrite = compile_command('cmd', {}, ['/tmp/out'], mode=OutputMode.OVERWRITE)

    assert append == 'cmd | tee -a /tmp/out > /dev/null 2>&1 &'
    assert overwrite == 'cmd | tee /tmp/out > /dev/null 2>&1 &'


def test_multiple_outputs_are_space_separated():
    compiled = compile_command('cmd', {}, ['/a', '/b'], run_in_background=False)

    assert compiled == 'cmd | tee /a /b > /dev/null 2>&1'


def test_no_outputs_still_redirects_to_null():
    assert compile_command('cmd', {}, [], run_in_background=False) == 'cmd > /dev/null 2>&1'


def test_legacy_quoting_does_not_escape():
    compiled = compile_command('echo', {'-m': 'say "hi"'}, [], run_in_background=False)

    assert compiled == 'echo -m "say "hi"" > /dev/null 2>&1'


def test_escaped_quoting_uses_shell_quotes():
    compiled = compile_command(
        'echo', {'-m': 'a b; rm -rf /'}, ['/tmp/my out'],
        run_in_background=False, escape=True
    )

    assert compiled == "echo -m 'a b; rm -rf /' | tee '/tmp/my out' > /dev/null 2>&1"


def test_compiled_follows_mutations():
    """The compiled string is never stale after configuration changes."""
    job = Job('sync.sh')
    assert job.compiled == 'sync.sh > /dev/null 2>&1 &'

    job.args['--dry-run'] = 'yes'
    assert job.compiled == 'sync.sh --dry-run "yes" > /dev/null 2>&1 &'

    job.output('/tmp/sync.log', append=True)
    assert job.compiled == 'sync.sh --dry-run "yes" | tee -a /tmp/sync.log > /dev/null 2>&1 &'

    job.run_in_foreground()
    assert job.compiled == 'sync.sh --dry-run "yes" | tee -a /tmp/sync.log > /dev/null 2>&1'
