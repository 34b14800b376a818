"""Perforce commands with decoded output

Each command runs ``p4 -s`` with a particular subcommand and returns an
:class:`~p4_core.parser.ItemSequence` with the decoded output.

.. currentmodule:: p4_core.commands
.. autosummary::
   :toctree: generated

   FileMapping
   WhereCommand
   parse_where_output
"""

__all__ = [
    'FileMapping',
    'WhereCommand',
    'parse_where_output',
]

from .where import (
    FileMapping,
    WhereCommand,
    parse_where_output,
)
