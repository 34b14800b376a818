"""Connection to a Perforce server

A :class:`P4` instance bundles the settings for running the ``p4`` command
line client (server address, user, client workspace, retry policy, etc.).
It can be created from configuration via :meth:`P4.from_config`.

.. currentmodule:: p4_core.connection
.. autosummary::
   :toctree: generated

   P4
"""

__all__ = [
    'P4',
]

from .p4 import P4
