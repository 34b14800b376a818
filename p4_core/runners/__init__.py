"""Execution of ``p4`` subprocesses

This module provides the means to execute the Perforce command line client.
The main work horse is :func:`~p4_core.runners.call_p4`, which runs a
command to completion, captures its output, and retries attempts that fail to
start (or complete) the process according to a
:class:`~p4_core.runners.RetryPolicy`.

Failures are communicated with exceptions derived from
:class:`~p4_core.runners.P4CommandError`, which is itself a
``datasalad.runners.CommandError``:

- :class:`SpawnFailedError`: the process could not be run
- :class:`ParseFailedError`: the output could not be decoded

.. currentmodule:: p4_core.runners
.. autosummary::
   :toctree: generated

   call_p4
   mask_password
   P4Output
   RetryPolicy
   CommandError
   P4CommandError
   ParseFailedError
   SpawnFailedError
"""

__all__ = [
    'NO_RETRY',
    'CommandError',
    'P4CommandError',
    'P4Output',
    'ParseFailedError',
    'RetryPolicy',
    'SpawnFailedError',
    'call_p4',
    'mask_password',
]


from datasalad.runners import CommandError

from .exceptions import (
    P4CommandError,
    ParseFailedError,
    SpawnFailedError,
)
from .p4 import (
    P4Output,
    call_p4,
    mask_password,
)
from .retry import (
    NO_RETRY,
    RetryPolicy,
)
