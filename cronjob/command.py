"""
Command kinds a job can hold.

The kind is decided once, when the job is created, and never inspected
from the command value afterwards.
"""

from dataclasses import dataclass
from typing import Any, Callable


@dataclass(frozen=True)
class ShellCommand:
    """A shell command template run through ``/bin/sh``."""
    template: str

    @property
    def base(self) -> str:
        return self.template


@dataclass(frozen=True)
class InProcessCommand:
    """A Python callable invoked with the job's arguments as its only input."""
    func: Callable[[dict], Any]

    @property
    def base(self) -> str:
        module = getattr(self.func, '__module__', None)
        name = getattr(self.func, '__qualname__', None) or type(self.func).__name__
        return f"{module}.{name}" if module else name


def to_command(command):
    """Wrap a string or callable into its command kind."""
    if isinstance(command, (ShellCommand, InProcessCommand)):
        return command
    if isinstance(command, str):
        return ShellCommand(command)
    if callable(command):
        return InProcessCommand(command)
    raise TypeError(f"Job command must be a string or a callable, got {type(command).__name__}")
