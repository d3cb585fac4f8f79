from unittest.mock import Mock

from vfolders.adapters.memory_kv_store import InMemoryKeyValueStore
from vfolders.services.folder_store import FolderStore
from vfolders.services.navigator import Navigator


def _crumbs(navigator: Navigator) -> list:
    return [(crumb.folder_id, crumb.name) for crumb in navigator.breadcrumbs]


def _tree():
    store = FolderStore(InMemoryKeyValueStore())
    a = store.create("A")
    a1 = store.create("A1", a.folder_id)
    a1x = store.create("A1x", a1.folder_id)
    return store, a, a1, a1x


def test_starts_at_root() -> None:
    navigator = Navigator(Mock())

    assert _crumbs(navigator) == [(None, "Root")]
    assert navigator.current_folder_id is None


def test_navigate_into_resolves_full_ancestor_chain() -> None:
    store, a, a1, a1x = _tree()
    navigator = Navigator(store)

    navigator.navigate_into(a1x.folder_id, "A1x")

    assert _crumbs(navigator) == [
        (None, "Root"),
        (a.folder_id, "A"),
        (a1.folder_id, "A1"),
        (a1x.folder_id, "A1x"),
    ]
    assert navigator.current_folder_id == a1x.folder_id


def test_navigate_into_folder_already_on_stack_truncates() -> None:
    real_store, a, a1, a1x = _tree()
    spy = Mock(wraps=real_store)
    navigator = Navigator(spy)
    navigator.navigate_into(a1x.folder_id)
    spy.reset_mock()

    navigator.navigate_into(a.folder_id, "A")

    assert _crumbs(navigator) == [(None, "Root"), (a.folder_id, "A")]
    spy.path_to.assert_not_called()


def test_navigate_into_unknown_folder_keeps_given_name() -> None:
    store = Mock()
    store.path_to.return_value = []
    navigator = Navigator(store)

    navigator.navigate_into("ghost", "Ghost")

    assert _crumbs(navigator) == [(None, "Root"), ("ghost", "Ghost")]


def test_navigate_up_stops_at_root() -> None:
    store, a, a1, _ = _tree()
    navigator = Navigator(store)
    navigator.navigate_into(a1.folder_id)

    navigator.navigate_up()
    assert navigator.current_folder_id == a.folder_id
    navigator.navigate_up()
    navigator.navigate_up()

    assert _crumbs(navigator) == [(None, "Root")]


def test_navigate_to_index_truncates() -> None:
    store, a, a1, a1x = _tree()
    navigator = Navigator(store)
    navigator.navigate_into(a1x.folder_id)

    navigator.navigate_to_index(1)
    assert navigator.current_folder_id == a.folder_id

    navigator.navigate_to_index(5)
    assert navigator.current_folder_id == a.folder_id

    navigator.navigate_to_index(0)
    assert _crumbs(navigator) == [(None, "Root")]


def test_navigate_into_none_returns_to_root() -> None:
    store, _, a1, _ = _tree()
    navigator = Navigator(store)
    navigator.navigate_into(a1.folder_id)

    navigator.navigate_into(None)

    assert _crumbs(navigator) == [(None, "Root")]
