from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import (
    ClassVar,
    Generic,
    TypeVar,
    Union,
)

T = TypeVar('T')


# TODO: Could be `StrEnum`, came with PY3.11
class ItemKind(Enum):
    """Enumeration of the kinds of records in ``p4`` output"""

    data = 'data'
    info = 'info'
    error = 'error'
    exit = 'exit'


@dataclass(frozen=True)
class Message:
    """Free-text message reported by ``p4``"""

    text: str
    level: int = 0
    """Nesting level of an ``infoN:`` tag, ``0`` for untagged messages"""


@dataclass(frozen=True)
class ExitStatus:
    """Overall completion status of a ``p4`` command"""

    code: int

    @property
    def success(self) -> bool:
        return self.code == 0


@dataclass(frozen=True)
class DataItem(Generic[T]):
    """Successfully decoded payload of a command"""

    kind: ClassVar[ItemKind] = ItemKind.data
    data: T


@dataclass(frozen=True)
class InfoItem:
    """Advisory message, carries no data"""

    kind: ClassVar[ItemKind] = ItemKind.info
    message: Message


@dataclass(frozen=True)
class ErrorItem:
    """Error reported by ``p4`` for part of a request

    An error item does not indicate a failed command invocation. ``p4`` can
    report errors for some arguments and data for others in the same output.
    """

    kind: ClassVar[ItemKind] = ItemKind.error
    message: Message


@dataclass(frozen=True)
class ExitItem:
    """Terminal record of a command's output"""

    kind: ClassVar[ItemKind] = ItemKind.exit
    status: ExitStatus


# closed union, consumers dispatch on `.kind`
Item = Union[DataItem[T], InfoItem, ErrorItem, ExitItem]
