from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from p4_core.parser.grammar import Recognizer
    from p4_core.parser.items import Item

from p4_core.parser import grammar
from p4_core.parser.grammar import GrammarError
from p4_core.parser.items import (
    DataItem,
    ErrorItem,
    ExitItem,
    InfoItem,
)
from p4_core.parser.results import ItemSequence


def classify(
    buf: bytes,
    data: Recognizer,
    *,
    info: Recognizer = grammar.info,
) -> tuple[bytes, list[Item], ExitItem]:
    """Classify the records in the output of a ``p4 -s`` command

    Records are recognized one after another, trying the ``data``
    recognizer first, then :func:`~p4_core.parser.grammar.error`, then
    ``info``. When none of them matches, the terminal exit marker must
    follow. ``info`` can be given to replace the default message recognizer
    (see :func:`~p4_core.parser.grammar.info_excluding`).

    Returns
    -------
    tuple
      The bytes following the exit marker (empty for regular output), the
      list of interior items in the order of their appearance, and the
      :class:`ExitItem`.

    Raises
    ------
    GrammarError
      If no exit marker is found where the sequence of records ends. This
      includes empty output.
    """
    alternatives = (
        (data, DataItem),
        (grammar.error, ErrorItem),
        (info, InfoItem),
    )
    items: list[Item] = []
    pos = 0
    while True:
        for recognize, envelope in alternatives:
            m = recognize(buf, pos)
            if m is not None:
                break
        else:
            # no record at `pos`
            break
        if m.end <= pos:
            msg = 'recognizer made no progress'
            raise GrammarError(msg, buf, pos)
        items.append(envelope(m.value))
        pos = m.end

    m = grammar.exit(buf, pos)
    if m is None:
        msg = (
            'no exit record in empty output'
            if not buf
            else 'unrecognized record or missing exit record'
        )
        raise GrammarError(msg, buf, pos)
    return m.rest(buf), items, ExitItem(m.value)


def parse_output(
    buf: bytes,
    data: Recognizer,
    *,
    info: Recognizer = grammar.info,
) -> ItemSequence:
    """Parse the complete output of a ``p4 -s`` command

    Like :func:`classify`, but the exit marker must be the last record of the
    output. Returns an :class:`ItemSequence` that has the exit item appended
    to all other items.
    """
    rest, items, exit_item = classify(buf, data, info=info)
    if rest:
        msg = 'unexpected output after exit record'
        raise GrammarError(msg, buf, len(buf) - len(rest))
    return ItemSequence.from_records(items, exit_item)
