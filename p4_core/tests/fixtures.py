"""Collection of fixtures for facilitation test implementations"""

from __future__ import annotations

import os
from itertools import count
from typing import (
    TYPE_CHECKING,
)

if TYPE_CHECKING:
    from collections.abc import (
        Callable,
        Generator,
    )

import pytest

from p4_core.tests.utils import (
    FakeP4,
    make_fake_p4,
)


def _p4_environ() -> dict[str, str]:
    return {k: v for k, v in os.environ.items() if k.startswith('P4')}


@pytest.fixture(autouse=True, scope='function')  # noqa: PT003
def verify_pristine_p4_environment() -> Generator[None]:
    """No test must leave modified ``P4*`` environment variables behind.

    If such modifications are needed, they must be limited to the scope of
    the test requiring it (e.g., via ``monkeypatch.setenv()``).
    """
    pre = _p4_environ()
    yield
    assert _p4_environ() == pre, 'P4* environment variables were modified'


@pytest.fixture(autouse=False, scope='function')  # noqa: PT003
def fake_p4(tmp_path) -> Callable[..., FakeP4]:
    """Yield a factory for fake ``p4`` executables

    The factory takes the output to print (``bytes``) and an optional exit
    code. Each call creates a new executable in the test's temporary
    directory. Tests using this fixture are skipped on platforms without
    a POSIX shell.
    """
    if os.name == 'nt':
        pytest.skip('fake p4 executable requires a POSIX shell')
    counter = count()

    def _make(stdout: bytes, returncode: int = 0) -> FakeP4:
        return make_fake_p4(
            tmp_path / f'fake_p4_{next(counter)}',
            stdout,
            returncode,
        )

    return _make
