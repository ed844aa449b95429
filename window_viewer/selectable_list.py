from __future__ import annotations

from typing import Generic, Iterable, Iterator, Optional, Tuple, TypeVar

T = TypeVar("T")


class SelectableList(Generic[T]):
    """Ordered items plus a cursor.

    ``selected`` is ``None`` exactly when the list is empty, and a valid index
    otherwise. The items are only ever swapped out as a whole.
    """

    def __init__(self, items: Iterable[T] = ()) -> None:
        self._items: Tuple[T, ...] = tuple(items)
        self._selected: Optional[int] = 0 if self._items else None

    @classmethod
    def from_items(cls, items: Iterable[T]) -> "SelectableList[T]":
        return cls(items)

    @property
    def items(self) -> Tuple[T, ...]:
        return self._items

    @property
    def selected(self) -> Optional[int]:
        return self._selected

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def replace(self, items: Iterable[T]) -> None:
        new_items = tuple(items)
        size = len(new_items)
        if size == 0:
            self._selected = None
        elif self._selected is None:
            self._selected = 0
        elif self._selected >= size:
            # An index equal to the new length is past the end too.
            self._selected = size - 1
        self._items = new_items

    def next(self) -> None:
        if not self._items:
            return
        if self._selected is None or self._selected >= len(self._items) - 1:
            self._selected = 0
        else:
            self._selected += 1

    def previous(self) -> None:
        if not self._items:
            return
        if self._selected is None:
            self._selected = 0
        elif self._selected == 0:
            self._selected = len(self._items) - 1
        else:
            self._selected -= 1

    def selected_item(self) -> Optional[T]:
        if self._selected is None:
            return None
        return self._items[self._selected]

    def __repr__(self) -> str:
        return f"SelectableList(len={len(self._items)}, selected={self._selected})"


__all__ = ["SelectableList"]
