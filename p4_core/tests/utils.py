from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

fake_p4_script = """\
#!/bin/sh
printf '%s\\n' "$@" > '{argv}'
cat '{stdout}'
exit {returncode}
"""


@dataclass(frozen=True)
class FakeP4:
    """Stand-in for the ``p4`` binary that prints a fixed output"""

    executable: Path
    argv_file: Path

    def argv(self) -> list[str]:
        """Return the arguments of the last invocation"""
        return self.argv_file.read_text().splitlines()

    @property
    def called(self) -> bool:
        return self.argv_file.exists()


def make_fake_p4(path: Path, stdout: bytes, returncode: int = 0) -> FakeP4:
    """Create a fake ``p4`` executable in directory ``path``

    The executable prints ``stdout`` (verbatim) and exits with
    ``returncode``. Its arguments are recorded, one per line, for
    inspection via :meth:`FakeP4.argv`. Requires a POSIX shell.
    """
    path.mkdir(parents=True, exist_ok=True)
    stdout_file = path / 'stdout'
    stdout_file.write_bytes(stdout)
    argv_file = path / 'argv'
    executable = path / 'p4'
    executable.write_text(
        fake_p4_script.format(
            argv=argv_file,
            stdout=stdout_file,
            returncode=returncode,
        )
    )
    executable.chmod(0o755)
    return FakeP4(executable=executable, argv_file=argv_file)
