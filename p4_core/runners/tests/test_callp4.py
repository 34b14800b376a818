import subprocess

import pytest

from .. import (
    NO_RETRY,
    CommandError,
    P4CommandError,
    RetryPolicy,
    SpawnFailedError,
    call_p4,
    mask_password,
)
from .. import p4 as p4_runner


class FlakySpawn:
    """Replacement for ``_call_p4`` that fails a given number of times"""

    def __init__(self, failures, exc=None):
        self.failures = failures
        self.exc = exc or FileNotFoundError(2, 'No such file or directory')
        self.calls = []

    def __call__(self, cmd, **kwargs):
        self.calls.append(cmd)
        if len(self.calls) <= self.failures:
            raise self.exc
        return subprocess.CompletedProcess(
            cmd,
            0,
            stdout=b'exit: 0\n',
            stderr=b'',
        )


@pytest.fixture
def nosleep(monkeypatch):
    delays = []
    monkeypatch.setattr(p4_runner.time, 'sleep', delays.append)
    return delays


def test_call_p4(fake_p4):
    p4 = fake_p4(b'info: hello\nexit: 0\n')
    res = call_p4(['-s', 'info'], executable=str(p4.executable))
    assert res.cmd == [str(p4.executable), '-s', 'info']
    assert res.returncode == 0
    assert res.stdout == b'info: hello\nexit: 0\n'
    assert res.attempts == 1
    assert p4.argv() == ['-s', 'info']


def test_call_p4_nonzero_exit(fake_p4):
    # a failing command is no spawn failure, the output is still reported
    p4 = fake_p4(b'error: Connect to server failed\nexit: 1\n', returncode=1)
    res = call_p4(['-s', 'info'], executable=str(p4.executable))
    assert res.returncode == 1
    assert res.stdout.endswith(b'exit: 1\n')


def test_call_p4_cwd(fake_p4, tmp_path):
    p4 = fake_p4(b'exit: 0\n')
    res = call_p4(['where'], executable=str(p4.executable), cwd=tmp_path)
    assert res.returncode == 0


def test_call_p4_retry_success(monkeypatch, nosleep):
    # fails twice, succeeds on the third attempt
    spawn = FlakySpawn(2)
    monkeypatch.setattr(p4_runner, '_call_p4', spawn)
    policy = RetryPolicy(retries=2, delay=0.1, backoff=2.0)
    res = call_p4(['where'], retry=policy)
    assert res.stdout == b'exit: 0\n'
    assert res.attempts == 3
    assert res.attempts - 1 <= policy.retries
    assert len(spawn.calls) == 3
    assert nosleep == [0.1, 0.2]


def test_call_p4_retry_exhausted(monkeypatch, nosleep):
    spawn = FlakySpawn(5)
    monkeypatch.setattr(p4_runner, '_call_p4', spawn)
    with pytest.raises(SpawnFailedError) as e:
        call_p4(['-P', 'secret', 'where'], retry=RetryPolicy(retries=2, delay=0))
    assert len(spawn.calls) == 3
    assert len(nosleep) == 2
    err = e.value
    assert err.attempts == 3
    assert isinstance(err.cause, FileNotFoundError)
    assert err.__cause__ is err.cause
    # command context, with the password masked
    assert err.cmd == ['p4', '-P', '********', 'where']
    assert 'secret' not in str(err)
    # fits into the common exception hierarchy
    assert isinstance(err, P4CommandError)
    assert isinstance(err, CommandError)


def test_call_p4_no_retry(monkeypatch, nosleep):
    spawn = FlakySpawn(1)
    monkeypatch.setattr(p4_runner, '_call_p4', spawn)
    with pytest.raises(SpawnFailedError):
        call_p4(['where'], retry=NO_RETRY)
    assert len(spawn.calls) == 1
    assert nosleep == []


def test_call_p4_timeout_is_spawn_failure(monkeypatch, nosleep):
    spawn = FlakySpawn(1, exc=subprocess.TimeoutExpired(['p4'], 1.0))
    monkeypatch.setattr(p4_runner, '_call_p4', spawn)
    res = call_p4(['where'], retry=RetryPolicy(retries=1, delay=0))
    assert res.attempts == 2


def test_call_p4_timeout(fake_p4, tmp_path):
    script = tmp_path / 'slow_p4'
    script.write_text('#!/bin/sh\nexec sleep 10\n')
    script.chmod(0o755)
    with pytest.raises(SpawnFailedError) as e:
        call_p4(['where'], executable=str(script), timeout=0.2)
    assert isinstance(e.value.cause, subprocess.TimeoutExpired)


def test_call_p4_missing_executable(tmp_path):
    with pytest.raises(SpawnFailedError) as e:
        call_p4(['where'], executable=str(tmp_path / 'nothere'))
    assert isinstance(e.value.cause, FileNotFoundError)


def test_retry_policy():
    policy = RetryPolicy(retries=3, delay=1.0, backoff=3.0, max_delay=5.0)
    assert policy.max_attempts == 4
    assert [policy.delay_for(i) for i in (1, 2, 3)] == [1.0, 3.0, 5.0]
    assert NO_RETRY.max_attempts == 1
    with pytest.raises(ValueError, match='negative'):
        RetryPolicy(retries=-1)
    with pytest.raises(ValueError, match='negative'):
        RetryPolicy(delay=-1)
    with pytest.raises(ValueError, match='backoff'):
        RetryPolicy(backoff=0.5)


def test_mask_password():
    assert mask_password(['p4', '-P', 'pw', 'where']) == [
        'p4',
        '-P',
        '********',
        'where',
    ]
    cmd = ['p4', 'where', '-P']
    assert mask_password(cmd) == cmd
