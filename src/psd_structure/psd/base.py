"""
Base data structures intended for inheritance.

All the data objects in this subpackage inherit from the base classes here.
That means, all the data structures in the :py:mod:`psd_structure.psd`
subpackage implement :py:meth:`BaseElement.read` for decoding from a
:py:class:`~psd_structure.psd.cursor.Cursor`.

Objects that inherit from the :py:class:`~psd_structure.psd.base.BaseElement`
typically get attrs_ decoration to have data fields. Decoded elements are
frozen: a document does not change after it has been read.

.. _attrs: https://www.attrs.org/en/stable/index.html
"""

import logging
from enum import Enum
from typing import Any, Callable, Generator, Iterator, Optional, TypeVar

from attrs import define, field, fields, has, validate

from psd_structure.psd.bin_utils import trimmed_repr
from psd_structure.psd.cursor import Cursor

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="BaseElement")


class BaseElement:
    """
    Base element of various PSD file structs. All the data objects in
    :py:mod:`psd_structure.psd` subpackage inherit from this class.

    .. py:classmethod:: read(cls, cursor, **kwargs)

        Read the element from a :py:class:`~psd_structure.psd.cursor.Cursor`.

    .. py:classmethod:: frombytes(cls, data, *args, **kwargs)

        Read the element from bytes.

    .. py:method:: validate(self)

        Validate the attributes.
    """

    @classmethod
    def read(cls: type[T], cursor: Cursor, **kwargs: Any) -> T:
        raise NotImplementedError()

    @classmethod
    def frombytes(cls: type[T], data: bytes, *args: Any, **kwargs: Any) -> T:
        return cls.read(Cursor.frombytes(data), *args, **kwargs)

    def validate(self) -> None:
        return validate(self)  # type: ignore[arg-type]

    def _repr_pretty_(self, p: Any, cycle: bool) -> None:
        if cycle:
            p.text("{name}(...)".format(name=self.__class__.__name__))
            return

        with p.group(2, "{name}(".format(name=self.__class__.__name__), ")"):
            p.breakable("")
            field_list = [f for f in fields(self.__class__) if f.repr]  # type: ignore[arg-type]
            for idx, field_item in enumerate(field_list):
                if idx:
                    p.text(",")
                    p.breakable()
                p.text("{field}=".format(field=field_item.name))
                value = getattr(self, field_item.name)
                if isinstance(value, bytes):
                    p.text(trimmed_repr(value))
                elif isinstance(value, Enum):
                    p.text(value.name)
                else:
                    p.pretty(value)
            p.breakable("")

    def _find(
        self, condition: Optional[Callable[[Any], bool]] = None
    ) -> Generator[Any, None, None]:
        """
        Traversal API intended for debugging.
        """
        for _ in BaseElement._traverse(self, condition):
            yield _

    @staticmethod
    def _traverse(
        element: Any, condition: Optional[Callable[[Any], bool]] = None
    ) -> Generator[Any, None, None]:
        """
        Traversal API intended for debugging.
        """
        if condition is None or condition(element):
            yield element
        if isinstance(element, (ListElement, list, tuple)):
            for child in element:
                for _ in BaseElement._traverse(child, condition):
                    yield _
        elif has(element.__class__):
            for field_item in fields(element.__class__):
                child = getattr(element, field_item.name)
                for _ in BaseElement._traverse(child, condition):
                    yield _


@define(repr=False, eq=False, frozen=True)
class ValueElement(BaseElement):
    """
    Single value wrapper that has a `value` attribute.

    .. py:attribute:: value

        Internal value.
    """

    value: object = None

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, ValueElement):
            return bool(self.value == other.value)
        return bool(self.value == other)

    def __ne__(self, other: Any) -> bool:
        return not self.__eq__(other)

    def __hash__(self) -> int:
        return hash(self.value)

    def __bool__(self) -> bool:
        return bool(self.value)

    def __len__(self) -> int:
        return len(self.value)  # type: ignore[arg-type]

    def __repr__(self) -> str:
        if isinstance(self.value, bytes):
            return trimmed_repr(self.value)
        return self.value.__repr__()

    def _repr_pretty_(self, p: Any, cycle: bool) -> None:
        p.text(self.__repr__())


@define(repr=False, frozen=True)
class ListElement(BaseElement):
    """
    Read-only list-like element that has `items`.
    """

    _items: tuple = field(factory=tuple, converter=tuple)

    def index(self, x: Any) -> int:
        return self._items.index(x)

    def count(self, x: Any) -> int:
        return self._items.count(x)

    def __len__(self) -> int:
        return self._items.__len__()

    def __iter__(self) -> Iterator[Any]:
        return self._items.__iter__()

    def __getitem__(self, key: Any) -> Any:
        return self._items.__getitem__(key)

    def __contains__(self, x: Any) -> bool:
        return self._items.__contains__(x)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __repr__(self) -> str:
        return list(self._items).__repr__()

    def _repr_pretty_(self, p: Any, cycle: bool) -> None:
        if cycle:
            p.text("[...]")
            return

        with p.group(2, "[", "]"):
            p.breakable("")
            for idx in range(len(self._items)):
                if idx:
                    p.text(",")
                    p.breakable()
                value = self._items[idx]
                if isinstance(value, bytes):
                    value = trimmed_repr(value)
                p.pretty(value)
            p.breakable("")
