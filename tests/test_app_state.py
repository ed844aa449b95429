from window_viewer.app_state import AppState
from window_viewer.enumerator import WindowDescriptor


def _win(handle, class_name="Cls", text="Title", owner=1):
    return WindowDescriptor(class_name, text, handle, owner, 0)


class FakeEnumerator:
    def __init__(self, top, related=None):
        self.top = list(top)
        self.related = related or {}
        self.related_calls = []

    def list_top_level(self):
        return list(self.top)

    def list_related(self, of):
        self.related_calls.append(of.handle)
        return list(self.related.get(of.handle, []))


def test_initial_state_derives_children_of_first_window():
    enum = FakeEnumerator([_win(1), _win(2)], {1: [_win(11)], 2: [_win(21)]})

    state = AppState(enum)

    assert state.top_windows.selected == 0
    assert [w.handle for w in state.children] == [11]
    assert enum.related_calls == [1]


def test_initial_state_with_no_windows_has_empty_children():
    enum = FakeEnumerator([])

    state = AppState(enum)

    assert state.top_windows.selected is None
    assert len(state.children) == 0
    assert enum.related_calls == []


def test_select_next_rederives_children_immediately():
    enum = FakeEnumerator([_win(1), _win(2)], {1: [_win(11)], 2: [_win(21), _win(22)]})
    state = AppState(enum)

    state.select_next()

    assert state.top_windows.selected_item().handle == 2
    assert [w.handle for w in state.children] == [21, 22]


def test_select_previous_wraps_and_rederives():
    enum = FakeEnumerator([_win(1), _win(2), _win(3)], {3: [_win(31)]})
    state = AppState(enum)

    state.select_previous()

    assert state.top_windows.selected == 2
    assert [w.handle for w in state.children] == [31]


def test_refresh_children_picks_up_changes_for_same_selection():
    enum = FakeEnumerator([_win(1)], {1: [_win(11)]})
    state = AppState(enum)

    enum.related[1] = [_win(11), _win(12)]
    state.refresh_children()

    assert [w.handle for w in state.children] == [11, 12]


def test_reload_after_shrink_derives_children_from_new_sole_item():
    enum = FakeEnumerator([_win(1), _win(2)], {1: [_win(11)], 2: [_win(21)], 9: [_win(91)]})
    state = AppState(enum)
    state.select_next()
    assert state.top_windows.selected == 1

    enum.top = [_win(9)]
    state.reload()

    assert state.top_windows.selected == 0
    assert state.top_windows.selected_item().handle == 9
    assert [w.handle for w in state.children] == [91]


def test_reload_from_index_zero_to_single_item():
    enum = FakeEnumerator([_win(1), _win(2)], {1: [_win(11)], 5: [_win(51)]})
    state = AppState(enum)

    enum.top = [_win(5)]
    state.reload()

    assert state.top_windows.selected == 0
    assert [w.handle for w in state.children] == [51]


def test_reload_to_empty_clears_children():
    enum = FakeEnumerator([_win(1)], {1: [_win(11)]})
    state = AppState(enum)

    enum.top = []
    state.reload()

    assert state.top_windows.selected is None
    assert len(state.children) == 0


def test_refresh_top_alone_leaves_children_until_rederived():
    enum = FakeEnumerator([_win(1)], {1: [_win(11)], 2: [_win(21)]})
    state = AppState(enum)

    enum.top = [_win(2)]
    state.refresh_top()
    assert [w.handle for w in state.children] == [11]

    state.refresh_children()
    assert [w.handle for w in state.children] == [21]


def test_vanished_selection_yields_empty_children():
    enum = FakeEnumerator([_win(1)], {1: [_win(11)]})
    state = AppState(enum)

    enum.related = {}
    state.refresh_children()

    assert len(state.children) == 0
    assert state.children.selected is None
