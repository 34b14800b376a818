from __future__ import annotations

from dataclasses import (
    dataclass,
    field,
)
from typing import (
    TYPE_CHECKING,
    Any,
)

if TYPE_CHECKING:
    from pathlib import Path

    from p4_core.commands import FileMapping
    from p4_core.config import ConfigManager
    from p4_core.parser import ItemSequence
    from p4_core.runners import P4Output

from p4_core.commands import WhereCommand
from p4_core.config import get_manager
from p4_core.consts import DEFAULT_P4_EXECUTABLE
from p4_core.runners import (
    RetryPolicy,
    call_p4,
)


@dataclass(frozen=True)
class P4:
    """Connection to a Perforce server via the ``p4`` command line client

    An instance holds the settings that are passed to ``p4`` as global
    options on every invocation. Any setting that is ``None`` is not passed
    on, and ``p4`` falls back on its own configuration (``P4PORT`` etc.).

    Instances are immutable and can be shared across threads. Each command
    keeps its own state (including retry attempts).
    """

    executable: str = DEFAULT_P4_EXECUTABLE
    """Name or path of the ``p4`` binary"""
    port: str | None = None
    user: str | None = None
    password: str | None = None
    client: str | None = None
    charset: str | None = None
    retry: RetryPolicy = field(default_factory=RetryPolicy)
    """How to retry failures to run ``p4``"""
    timeout: float | None = None
    """Time limit for each ``p4`` process in seconds"""
    cwd: Path | None = None
    """Working directory for ``p4``, relevant for commands reporting on it"""

    @classmethod
    def from_config(cls, manager: ConfigManager | None = None, **kwargs) -> P4:
        """Create a connection from configuration settings

        If no ``manager`` is given, the one returned by
        :func:`~p4_core.config.get_manager` is used. Any ``kwargs`` take
        precedence over configuration settings.

        A password (``P4PASSWD``) is not read from the configuration, such
        that it does not end up on a command line. ``p4`` reads it from the
        environment by itself. A password can be given via ``kwargs``.
        """
        cfg = manager or get_manager()
        props: dict[str, Any] = {
            'executable': cfg.get('p4core.executable', DEFAULT_P4_EXECUTABLE).value,
            'port': cfg.get('P4PORT').value,
            'user': cfg.get('P4USER').value,
            'client': cfg.get('P4CLIENT').value,
            'charset': cfg.get('P4CHARSET').value,
            'retry': RetryPolicy(
                retries=cfg.get('p4core.retries', 2).value,
                delay=cfg.get('p4core.retry-delay', 0.5).value,
                backoff=cfg.get('p4core.retry-backoff', 2.0).value,
                max_delay=cfg.get('p4core.retry-max-delay', 10.0).value,
            ),
            'timeout': cfg.get('p4core.timeout').value,
        }
        props.update(kwargs)
        return cls(**props)

    def global_args(self, *, tagged: bool = False) -> list[str]:
        """Return the global options for a ``p4`` invocation

        ``-s`` is always included, it makes ``p4`` tag each output line
        with its type and report the exit status as a last line.
        With ``tagged=True``, ``-ztag`` requests output of one field per line.
        """
        args = ['-s']
        if tagged:
            args.append('-ztag')
        for opt, value in (
            ('-p', self.port),
            ('-u', self.user),
            ('-P', self.password),
            ('-c', self.client),
            ('-C', self.charset),
        ):
            if value is not None:
                args.extend((opt, value))
        return args

    def run(self, args: list[str], *, tagged: bool = False) -> P4Output:
        """Run a ``p4`` command with this connection's settings

        ``args`` are the command name and its arguments.
        """
        return call_p4(
            [*self.global_args(tagged=tagged), *args],
            executable=self.executable,
            retry=self.retry,
            cwd=self.cwd,
            timeout=self.timeout,
        )

    def where(self, *files: str) -> ItemSequence[FileMapping]:
        """Report how file names are mapped by the client view

        See :class:`~p4_core.commands.WhereCommand` for details.
        """
        return WhereCommand(self, files).run()
