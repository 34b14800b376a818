"""Decoding of ``p4 -s`` command output

Running the Perforce client with ``-s`` tags every line of its output. This
module classifies these lines into typed items:

- :class:`DataItem`: a decoded data record (e.g., a file mapping)
- :class:`InfoItem`: an informational message
- :class:`ErrorItem`: an error message (for part of a request)
- :class:`ExitItem`: the terminal exit status, exactly one per output

The recognizers for the individual line shapes are in
:mod:`p4_core.parser.grammar`. :func:`classify` and :func:`parse_output`
combine them, with a command-specific data recognizer, into an
:class:`ItemSequence`.

.. currentmodule:: p4_core.parser
.. autosummary::
   :toctree: generated

   classify
   parse_output
   DataItem
   ErrorItem
   ExitItem
   ExitStatus
   GrammarError
   InfoItem
   Item
   ItemKind
   ItemSequence
   Match
   Message
"""

__all__ = [
    'classify',
    'parse_output',
    'DataItem',
    'ErrorItem',
    'ExitItem',
    'ExitStatus',
    'GrammarError',
    'InfoItem',
    'Item',
    'ItemKind',
    'ItemSequence',
    'Match',
    'Message',
]

from .classify import (
    classify,
    parse_output,
)
from .grammar import (
    GrammarError,
    Match,
)
from .items import (
    DataItem,
    ErrorItem,
    ExitItem,
    ExitStatus,
    InfoItem,
    Item,
    ItemKind,
    Message,
)
from .results import ItemSequence
