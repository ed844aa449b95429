from __future__ import annotations

from .enumerator import WindowDescriptor, WindowEnumerator
from .selectable_list import SelectableList


class AppState:
    """Top-level windows and the windows related to the selected one.

    ``children`` is never edited directly; it is recomputed from the current
    top-level selection by ``refresh_children``.
    """

    def __init__(self, enumerator: WindowEnumerator) -> None:
        self.enumerator = enumerator
        self.top_windows: SelectableList[WindowDescriptor] = SelectableList(enumerator.list_top_level())
        self.children: SelectableList[WindowDescriptor] = SelectableList()
        self.refresh_children()

    def refresh_top(self) -> None:
        self.top_windows.replace(self.enumerator.list_top_level())

    def refresh_children(self) -> None:
        selected = self.top_windows.selected_item()
        if selected is None:
            self.children.replace([])
            return
        self.children.replace(self.enumerator.list_related(selected))

    def reload(self) -> None:
        self.refresh_top()
        self.refresh_children()

    def select_next(self) -> None:
        self.top_windows.next()
        self.refresh_children()

    def select_previous(self) -> None:
        self.top_windows.previous()
        self.refresh_children()


__all__ = ["AppState"]
