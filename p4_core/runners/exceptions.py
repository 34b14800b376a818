from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from os import PathLike

from datasalad.runners import CommandError


class P4CommandError(CommandError):
    """Base class for failures of a ``p4`` command invocation

    ``cmd`` is the complete command line (argv) that was attempted.
    """


class SpawnFailedError(P4CommandError):
    """The ``p4`` process could not be started, or did not complete

    This error is reported after all retries have been exhausted. The
    OS-level cause of the last attempt is available as :attr:`cause`
    (and as ``__cause__``).
    """

    def __init__(
        self,
        cmd: list[str],
        cause: BaseException,
        *,
        attempts: int = 1,
        cwd: str | PathLike | None = None,
    ):
        super().__init__(
            cmd=cmd,
            msg=f'failed to run after {attempts} attempt(s): {cause}',
            cwd=cwd,
        )
        self.cause = cause
        self.attempts = attempts


class ParseFailedError(P4CommandError):
    """The output of ``p4`` did not match the expected record grammar

    The complete output is available as ``stdout``. This error is never
    the result of a transient condition, hence commands are not retried.
    """

    def __init__(
        self,
        cmd: list[str],
        reason: str,
        *,
        returncode: int | None = None,
        stdout: bytes = b'',
        stderr: bytes = b'',
        cwd: str | PathLike | None = None,
    ):
        super().__init__(
            cmd=cmd,
            msg=f'cannot parse output: {reason}',
            returncode=returncode,
            stdout=stdout,
            stderr=stderr,
            cwd=cwd,
        )
