"""Configuration management

This module provides the standard facilities for configuration management,
query, and update. It is built on `datasalad.settings
<https://datasalad.readthedocs.io/latest/generated/datasalad.settings.html>`__.

The key piece is the :class:`ConfigManager` that supports querying for
configuration settings across multiple sources. It also offers a context
manager to temporarily override particular configuration items.

Two sources are considered by default. The process environment
(:class:`P4Environment`) provides the connection settings of the Perforce
client (``P4PORT``, ``P4USER``, ``P4CLIENT``, ...) and any
``P4CORE_<NAME>`` overrides of this package's own settings. The
:class:`ImplementationDefaults` provide defaults for all of them:

``p4core.executable``
   Name or path of the ``p4`` binary (default: ``p4``)
``p4core.retries``
   Number of times a failed attempt to run ``p4`` is repeated (default: 2)
``p4core.retry-delay``
   Wait time before the first retry in seconds (default: 0.5)
``p4core.retry-backoff``
   Factor by which the wait time grows with each retry (default: 2.0)
``p4core.retry-max-delay``
   Upper limit for the wait time in seconds (default: 10.0)
``p4core.timeout``
   Time limit for a ``p4`` process in seconds (default: none)

Usage
-----

No global instance of :class:`~p4_core.config.ConfigManager` is provided.
Instead, if and when such a common instance it needed, it must be obtained by
calling :func:`get_manager`. Subsequent calls will return the same instance.

The same pattern is applied to obtain a common instance of
:class:`ImplementationDefaults` via :func:`get_defaults`.


.. currentmodule:: p4_core.config
.. autosummary::
   :toctree: generated

   ConfigItem
   ConfigManager
   P4Environment
   ImplementationDefaults
   UnsetValue
   get_defaults
   get_manager
"""

__all__ = [
    'ConfigItem',
    'ConfigManager',
    'P4Environment',
    'ImplementationDefaults',
    'UnsetValue',
    'get_defaults',
    'get_manager',
]

from datasalad.settings import UnsetValue

from .defaults import (
    ImplementationDefaults,
    get_defaults,
)
from .item import ConfigItem
from .manager import (
    ConfigManager,
    get_manager,
)
from .p4env import P4Environment
