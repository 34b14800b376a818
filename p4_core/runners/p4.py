from __future__ import annotations

import logging
import subprocess
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

from p4_core.consts import DEFAULT_P4_EXECUTABLE
from p4_core.runners.exceptions import SpawnFailedError
from p4_core.runners.retry import (
    NO_RETRY,
    RetryPolicy,
)

lgr = logging.getLogger('p4core.runners')


@dataclass(frozen=True)
class P4Output:
    """Captured result of a ``p4`` invocation"""

    cmd: list[str]
    """Complete command line that was executed"""
    returncode: int
    stdout: bytes
    stderr: bytes
    attempts: int = 1
    """Number of attempts it took to run the command"""


def mask_password(cmd: list[str]) -> list[str]:
    """Return a copy of ``cmd`` with the value of any ``-P`` option masked"""
    masked = list(cmd)
    for i, arg in enumerate(masked[:-1]):
        if arg == '-P':
            masked[i + 1] = '********'
    return masked


def _call_p4(
    cmd: list[str],
    *,
    cwd: Path | None = None,
    env: Mapping[str, str] | None = None,
    timeout: float | None = None,
) -> subprocess.CompletedProcess:
    """Wrapper around ``subprocess.run`` for a single ``p4`` execution

    Output is always captured (as bytes). The exit code of the process is
    not checked. On timeout the process is killed and
    ``subprocess.TimeoutExpired`` is raised.
    """
    return subprocess.run(
        cmd,
        capture_output=True,
        cwd=cwd,
        env=None if env is None else dict(env),
        timeout=timeout,
        check=False,
    )


def call_p4(
    args: list[str],
    *,
    executable: str = DEFAULT_P4_EXECUTABLE,
    retry: RetryPolicy = NO_RETRY,
    cwd: Path | None = None,
    env: Mapping[str, str] | None = None,
    timeout: float | None = None,
) -> P4Output:
    """Run ``p4`` and capture its output, retrying failures to run it

    ``args`` is a list of arguments for the ``p4`` command (global options,
    the command name and its arguments). This list must not contain the
    executable itself, which is given by ``executable``.

    If the process cannot be started (``OSError``), or does not complete
    within ``timeout`` seconds, the attempt is repeated according to
    ``retry``. A non-zero exit code of ``p4`` is not considered a failure
    here. With ``p4 -s`` the status is reported in the output.

    If ``cwd`` is not None, the command runs in this directory. If ``env``
    is not None, it replaces the process environment.

    Raises
    ------
    SpawnFailedError
      If no attempt succeeded. The exception of the last attempt is
      chained as the cause.
    """
    cmd = [executable, *args]
    # attempt counting is local to this call
    attempt = 0
    while True:
        attempt += 1
        lgr.debug('Run %r (attempt %i)', mask_password(cmd), attempt)
        try:
            res = _call_p4(cmd, cwd=cwd, env=env, timeout=timeout)
        except (OSError, subprocess.TimeoutExpired) as e:
            if attempt >= retry.max_attempts:
                raise SpawnFailedError(
                    mask_password(cmd),
                    e,
                    attempts=attempt,
                    cwd=cwd,
                ) from e
            delay = retry.delay_for(attempt)
            lgr.warning(
                'Failed to run %r (%s), retrying in %.2fs',
                mask_password(cmd),
                e,
                delay,
            )
            time.sleep(delay)
            continue
        lgr.debug(
            'Finished %r with exit code %i', mask_password(cmd), res.returncode
        )
        return P4Output(
            cmd=cmd,
            returncode=res.returncode,
            stdout=res.stdout,
            stderr=res.stderr,
            attempts=attempt,
        )
