"""Git subprocess wrapper — the only place gitline spawns processes."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Callable, Optional, Sequence

from gitline.git.models import CommandOutput

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 5

Runner = Callable[[str, Sequence[str]], Optional[CommandOutput]]


def exec_cmd(
    program: str,
    args: Sequence[str],
    cwd: Optional[Path] = None,
    timeout: int = DEFAULT_TIMEOUT,
) -> Optional[CommandOutput]:
    """Run *program* with *args* and capture stdout.

    Returns ``None`` when the process cannot be spawned or times out.
    A non-zero exit is not an error here; callers inspect ``exit_code``.
    """
    logger.debug("Executing command: %s %s", program, " ".join(args))
    try:
        result = subprocess.run(
            [program, *args],
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=timeout,
            encoding="utf-8",
            errors="replace",
        )
    except FileNotFoundError:
        logger.debug("%s is not installed or not on PATH", program)
        return None
    except subprocess.TimeoutExpired:
        logger.debug("%s timed out after %ss", program, timeout)
        return None
    except OSError as exc:
        logger.debug("Unable to run %s: %s", program, exc)
        return None

    if result.returncode != 0:
        logger.debug("%s exited with %d: %s", program, result.returncode, result.stderr.strip())
    return CommandOutput(stdout=result.stdout, exit_code=result.returncode)
