from __future__ import annotations

import logging
import re
from dataclasses import (
    dataclass,
    replace,
)
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from p4_core.connection import P4
    from p4_core.parser import ItemSequence

from p4_core.parser import (
    GrammarError,
    Match,
    parse_output,
)
from p4_core.parser import grammar
from p4_core.runners import (
    ParseFailedError,
    mask_password,
)

lgr = logging.getLogger('p4core.commands')

WHERE_FIELDS = ('depotFile', 'clientFile', 'path')
"""Names of the fields of a file mapping in tagged (``-ztag``) output"""


@dataclass(frozen=True)
class FileMapping:
    """Names of a file as mapped by the client view

    All three names refer to the same file.
    """

    depot_file: str
    """Name in the depot, e.g. ``//depot/dir/file.c``"""
    client_file: str
    """Name on the client in Perforce syntax, e.g. ``//ws/dir/file.c``"""
    path: Path
    """Name on the client in local syntax"""


# untagged output lists all three names on one line. Names in Perforce
# syntax cannot contain spaces here, but a local path can
_plain_mapping_re = re.compile(
    rb'(?:info: )?'
    rb'(?P<depot>//[^ ]+) '
    rb'(?P<client>//[^ ]+) '
    rb'(?P<path>\S.*)'
)


def plain_file_mapping(buf: bytes, pos: int = 0) -> Match | None:
    """Recognize a file mapping reported on a single line"""
    read = grammar.read_line(buf, pos)
    if read is None:
        return None
    line, end = read
    m = _plain_mapping_re.fullmatch(line)
    if m is None:
        return None
    return Match(
        FileMapping(
            depot_file=grammar.decode(m.group('depot')),
            client_file=grammar.decode(m.group('client')),
            path=Path(grammar.decode(m.group('path'))),
        ),
        end,
    )


def tagged_file_mapping(buf: bytes, pos: int = 0) -> Match | None:
    """Recognize a file mapping reported as three tagged field lines"""
    m = grammar.tagged_fields(buf, pos, WHERE_FIELDS)
    if m is None:
        return None
    depot_file, client_file, path = m.value
    return Match(
        FileMapping(
            depot_file=depot_file,
            client_file=client_file,
            path=Path(path),
        ),
        m.end,
    )


file_mapping = grammar.alt(tagged_file_mapping, plain_file_mapping)
# fields of an incomplete mapping must not pass as messages
where_info = grammar.info_excluding(WHERE_FIELDS)


def parse_where_output(buf: bytes) -> ItemSequence[FileMapping]:
    """Decode the output of ``p4 -s where`` (tagged or untagged)

    Raises
    ------
    GrammarError
      If the output does not match the expected grammar.
    """
    return parse_output(buf, file_mapping, info=where_info)


@dataclass(frozen=True)
class WhereCommand:
    """Show how file names are mapped by the client view

    For each file, three names are reported: the name in the depot, the
    name on the client in Perforce syntax, and the name on the client in
    local syntax. Without any ``files``, the mapping of the current
    directory (of the connection) and below is reported.

    ``p4 where`` does not determine where any real files reside. It only
    reports the locations that are mapped by the client view.

    Example::

        >>> files = WhereCommand(P4()).file('//depot/dir/...').run()  # doctest: +SKIP
        >>> for mapping in files.data():  # doctest: +SKIP
        ...     print(mapping.path)

    """

    connection: P4
    files: tuple[str, ...] = ()

    def file(self, file: str) -> WhereCommand:
        """Return a command that is restricted to an additional path"""
        return replace(self, files=(*self.files, file))

    def run(self) -> ItemSequence[FileMapping]:
        """Run the command and decode its output

        Raises
        ------
        SpawnFailedError
          If ``p4`` could not be run.
        ParseFailedError
          If the output could not be decoded. Such a failure is not retried.
        """
        res = self.connection.run(['where', *self.files], tagged=True)
        try:
            return parse_where_output(res.stdout)
        except GrammarError as e:
            cmd = mask_password(res.cmd)
            lgr.debug('Cannot parse output of %r: %s', cmd, e)
            raise ParseFailedError(
                cmd,
                str(e),
                returncode=res.returncode,
                stdout=res.stdout,
                stderr=res.stderr,
                cwd=self.connection.cwd,
            ) from e
