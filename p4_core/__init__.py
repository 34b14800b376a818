"""Typed access to Perforce command output

The central piece of this package is a decoder for the line-oriented output
of the ``p4`` command line client. Each line is classified as data, an
informational note, an error, or the terminating exit status, and turned
into an ordered sequence of typed items (see :mod:`p4_core.parser`).

Commands are executed via :mod:`p4_core.runners`, which retries transient
failures to launch the client. A :class:`~p4_core.connection.P4` instance
bundles the connection settings, which can be read from the environment via
:mod:`p4_core.config`.
"""

__version__ = '0.1.0'
