"""
Command compilation.

Turns a job description into the single shell string that gets
executed: arguments, output sinks and background mode.
"""

import shlex
from enum import Enum
from typing import Any, Iterable, Mapping


class OutputMode(Enum):
    """How output files are written. Shared by every sink of a job."""
    OVERWRITE = 'w'
    APPEND = 'a'


NULL_REDIRECT = '> /dev/null 2>&1'


def _legacy_quote(value: Any) -> str:
    # Values are wrapped in double quotes only; embedded quotes are not escaped.
    return f'"{value}"'


def compile_command(
    base: str,
    args: Mapping[str, Any],
    outputs: Iterable[str],
    mode: OutputMode = OutputMode.OVERWRITE,
    run_in_background: bool = True,
    escape: bool = False
) -> str:
    """
    Compile a command string.

    Produces ``<base> <k1> "<v1>" | tee [-a] <sink1> <sink2> > /dev/null 2>&1 [&]``
    where each optional segment is only present when configured.

    Args:
        base: Base command
        args: Ordered flag -> value mapping
        outputs: Files receiving the command output
        mode: Overwrite or append for all outputs
        run_in_background: Append ``&`` when True
        escape: Shell-quote values and paths with ``shlex.quote`` instead of
            plain double quotes

    Returns:
        The compiled command
    """
    command = base

    for key, value in args.items():
        value = shlex.quote(str(value)) if escape else _legacy_quote(value)
        command += f" {key} {value}"

    outputs = [shlex.quote(str(path)) if escape else str(path) for path in outputs]
    if outputs:
        command += ' | tee '
        if mode == OutputMode.APPEND:
            command += '-a '
        command += ' '.join(outputs)

    command += ' ' + NULL_REDIRECT
    if run_in_background:
        command += ' &'

    return command.strip()
