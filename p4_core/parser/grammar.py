"""Recognizers for the record shapes in ``p4 -s`` output

A recognizer is a callable ``recognizer(buf, pos=0)`` that inspects the
bytes in ``buf`` starting at offset ``pos``. On success it returns a
:class:`Match` with the decoded value and the offset of the first byte it did
not consume. If the bytes do not have the expected shape, ``None`` is
returned. Recognizers are pure functions: they never modify their input or
any other state.

Each record occupies one or more complete lines. A line is terminated by
``\\n``, an additional ``\\r`` before it is dropped.
"""

from __future__ import annotations

import re
from typing import (
    TYPE_CHECKING,
    Any,
    NamedTuple,
)

if TYPE_CHECKING:
    from collections.abc import (
        Callable,
        Collection,
    )

from p4_core.parser.items import (
    ExitStatus,
    Message,
)


class Match(NamedTuple):
    """Result of a successful recognizer application"""

    value: Any
    end: int
    """Offset of the first unconsumed byte"""

    def rest(self, buf: bytes) -> bytes:
        """Return the bytes of ``buf`` that were not consumed"""
        return buf[self.end :]


if TYPE_CHECKING:
    Recognizer = Callable[[bytes, int], 'Match | None']


class GrammarError(ValueError):
    """Raised when output does not match the expected record grammar"""

    def __init__(self, msg: str, buf: bytes, pos: int):
        super().__init__(msg, buf, pos)

    @property
    def msg(self) -> str:
        return self.args[0]

    @property
    def offset(self) -> int:
        """Byte offset at which no record could be recognized"""
        return self.args[2]

    @property
    def lineno(self) -> int:
        """1-based number of the offending line"""
        return self.args[1].count(b'\n', 0, self.offset) + 1

    @property
    def line(self) -> bytes:
        """The offending line (without terminator), empty at end of output"""
        buf = self.args[1]
        end = buf.find(b'\n', self.offset)
        return buf[self.offset : None if end == -1 else end]

    def __str__(self) -> str:
        return f'{self.msg} (line {self.lineno}: {self.line!r})'


def decode(raw: bytes) -> str:
    """Decode a field value, undecodable bytes are kept as escape sequences"""
    return raw.decode('utf-8', errors='backslashreplace')


def read_line(
    buf: bytes,
    pos: int = 0,
    *,
    allow_eof: bool = False,
) -> tuple[bytes, int] | None:
    """Return the line starting at ``pos`` and the offset after it

    The returned line has its terminator removed. ``None`` is returned when
    there is no complete line at ``pos``. With ``allow_eof=True``, a final
    line without a terminator is accepted too.
    """
    if pos >= len(buf):
        return None
    nl = buf.find(b'\n', pos)
    if nl == -1:
        if not allow_eof:
            return None
        line, end = buf[pos:], len(buf)
    else:
        line, end = buf[pos:nl], nl + 1
    if line.endswith(b'\r'):
        line = line[:-1]
    return line, end


def _match_line(
    pattern: re.Pattern,
    buf: bytes,
    pos: int,
    *,
    allow_eof: bool = False,
) -> tuple[re.Match, int] | None:
    read = read_line(buf, pos, allow_eof=allow_eof)
    if read is None:
        return None
    line, end = read
    m = pattern.fullmatch(line)
    if m is None:
        return None
    return m, end


_info_re = re.compile(rb'info(?P<level>\d*):(?: (?P<text>.*))?')
_error_re = re.compile(rb'error:(?: (?P<text>.*))?')
_exit_re = re.compile(rb'exit: (?P<code>-?\d+)|\(exit code (?P<altcode>-?\d+)\)')
# `p4 -ztag` reports each field of a record on a line of its own
_field_re = re.compile(rb'info[1-9]\d*: (?P<name>\w+) (?P<value>\S.*)')
# the field name alone, whatever the value (if any)
_field_name_re = re.compile(rb'info[1-9]\d*: (?P<name>\w+)(?: .*)?')


def info(buf: bytes, pos: int = 0) -> Match | None:
    """Recognize an ``info:`` or ``infoN:`` line, yields a :class:`Message`"""
    found = _match_line(_info_re, buf, pos)
    if found is None:
        return None
    m, end = found
    level = m.group('level')
    return Match(
        Message(
            text=decode(m.group('text') or b''),
            level=int(level) if level else 0,
        ),
        end,
    )


def info_excluding(fields: Collection[str]) -> Recognizer:
    """Return an ``info`` recognizer that rejects particular tagged fields

    A tagged line (``infoN: <field> <value>``) for any of the given field
    names is not recognized as a message, even if the value is missing or
    blank. This is used to prevent the fields of an incomplete data record
    from being reported as messages.
    """
    names = frozenset(f.encode() for f in fields)

    def _info(buf: bytes, pos: int = 0) -> Match | None:
        field = _match_line(_field_name_re, buf, pos)
        if field is not None and field[0].group('name') in names:
            return None
        return info(buf, pos)

    return _info


def error(buf: bytes, pos: int = 0) -> Match | None:
    """Recognize an ``error:`` line, yields a :class:`Message`"""
    found = _match_line(_error_re, buf, pos)
    if found is None:
        return None
    m, end = found
    return Match(Message(text=decode(m.group('text') or b'')), end)


def exit(buf: bytes, pos: int = 0) -> Match | None:  # noqa: A001
    """Recognize the terminal exit marker, yields an :class:`ExitStatus`

    Both ``exit: <code>`` and ``(exit code <code>)`` are accepted. As the
    final record, the marker line need not be newline-terminated.
    """
    found = _match_line(_exit_re, buf, pos, allow_eof=True)
    if found is None:
        return None
    m, end = found
    code = m.group('code')
    if code is None:
        code = m.group('altcode')
    return Match(ExitStatus(int(code)), end)


def tagged_field(buf: bytes, pos: int, name: str) -> Match | None:
    """Recognize an ``infoN: <name> <value>`` line, yields the value

    The value must not be empty or blank.
    """
    found = _match_line(_field_re, buf, pos)
    if found is None:
        return None
    m, end = found
    if m.group('name') != name.encode():
        return None
    return Match(decode(m.group('value')), end)


def tagged_fields(buf: bytes, pos: int, names: tuple[str, ...]) -> Match | None:
    """Recognize consecutive tagged field lines in the given order

    Yields a ``tuple`` with the values of all fields. Fails unless all
    fields are present.
    """
    values = []
    for name in names:
        m = tagged_field(buf, pos, name)
        if m is None:
            return None
        values.append(m.value)
        pos = m.end
    return Match(tuple(values), pos)


def alt(*recognizers: Recognizer) -> Recognizer:
    """Combine recognizers into an ordered choice

    The returned recognizer yields the match of the first recognizer that
    succeeds.
    """

    def _alt(buf: bytes, pos: int = 0) -> Match | None:
        for recognize in recognizers:
            m = recognize(buf, pos)
            if m is not None:
                return m
        return None

    return _alt
