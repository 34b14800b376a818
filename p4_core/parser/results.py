from __future__ import annotations

from typing import (
    TYPE_CHECKING,
    Generic,
    TypeVar,
)

if TYPE_CHECKING:
    from collections.abc import (
        Generator,
        Iterable,
        Iterator,
    )

from p4_core.parser.items import (
    DataItem,
    ErrorItem,
    ExitItem,
    InfoItem,
    Item,
    ItemKind,
    Message,
)

T = TypeVar('T')


class ItemSequence(Generic[T]):
    """Ordered items decoded from the output of one command

    Items are kept in the order in which the command reported them. The
    last item is always the single :class:`ExitItem` of the output. The
    sequence is immutable.

    Besides plain iteration, the methods :meth:`data`, :meth:`infos`, and
    :meth:`errors` offer filtered views on the items. Whether any error
    item means that the command as a whole failed is up to the caller to
    decide.
    """

    __slots__ = ('_items',)

    def __init__(self, items: Iterable[Item[T]]):
        items = tuple(items)
        if not items or items[-1].kind is not ItemKind.exit:
            msg = f'last item must be an exit record, got {items[-1:]!r}'
            raise ValueError(msg)
        if any(i.kind is ItemKind.exit for i in items[:-1]):
            msg = f'more than one exit record in {items!r}'
            raise ValueError(msg)
        self._items = items

    @classmethod
    def from_records(
        cls,
        records: Iterable[Item[T]],
        exit_item: ExitItem,
    ) -> ItemSequence[T]:
        """Build a sequence from interior records and the terminal record"""
        return cls((*records, exit_item))

    def __iter__(self) -> Iterator[Item[T]]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ItemSequence):
            return NotImplemented
        return self._items == other._items

    def __hash__(self) -> int:
        return hash(self._items)

    def __repr__(self) -> str:
        return f'{self.__class__.__name__}({list(self._items)!r})'

    @property
    def exit(self) -> ExitItem:
        """The terminal record"""
        # the constructor guarantees the type
        return self._items[-1]  # type: ignore[return-value]

    def data(self) -> Generator[T]:
        """Yield the payloads of all data items"""
        for item in self._items:
            if isinstance(item, DataItem):
                yield item.data

    def infos(self) -> Generator[Message]:
        """Yield the messages of all info items"""
        for item in self._items:
            if isinstance(item, InfoItem):
                yield item.message

    def errors(self) -> Generator[Message]:
        """Yield the messages of all error items"""
        for item in self._items:
            if isinstance(item, ErrorItem):
                yield item.message
