"""
File helpers for job output and last-execution tracking.
"""

import logging
from pathlib import Path
from typing import Any, Optional, Union

from cronjob.compiler import OutputMode
from cronjob.errors import SinkWriteError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def write_output(content: Any, path: PathLike, mode: OutputMode = OutputMode.OVERWRITE):
    """
    Write job output to a file.

    Args:
        content: Output payload (``None`` writes nothing, ``bytes`` are written
            as-is, anything else is converted with ``str``)
        path: Destination file
        mode: Overwrite or append

    Raises:
        SinkWriteError: If the file cannot be written
    """
    if isinstance(content, bytes):
        data, file_mode = content, mode.value + 'b'
    else:
        data, file_mode = ('' if content is None else str(content)), mode.value

    try:
        with open(Path(path).expanduser(), file_mode) as f:
            f.write(data)
    except OSError as e:
        logger.error(f"Failed to write output to {path}: {e}")
        raise SinkWriteError(f"Cannot write output to {path}: {e}") from e

    logger.debug(f"Wrote {len(data)} chars to {path} (mode={mode.value})")


def read_timestamp(path: PathLike) -> Optional[int]:
    """
    Read an integer epoch timestamp from a file.

    Returns:
        The timestamp, or None if the file is missing, unreadable or does
        not hold an integer
    """
    try:
        raw = Path(path).expanduser().read_text().strip()
    except (OSError, UnicodeDecodeError) as e:
        logger.debug(f"Last execution file {path} not readable: {e}")
        return None

    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Last execution file {path} does not hold a timestamp: {raw!r}")
        return None


def write_timestamp(path: PathLike, timestamp: int):
    """Record an epoch timestamp, creating parent directories as needed."""
    target = Path(path).expanduser()
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(str(int(timestamp)))
    except OSError as e:
        raise SinkWriteError(f"Cannot record last execution in {path}: {e}") from e
    logger.debug(f"Recorded last execution {timestamp} in {path}")
