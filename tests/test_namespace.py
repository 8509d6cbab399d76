import pytest

from folderstore.errors import ListingFailed, StoreListError
from folderstore.namespace import NamespaceSnapshot, list_namespace
from folderstore.paths import ROOT
from tests.tools import FlakyObjectStore, sentinels


@pytest.mark.anyio
async def test_list_empty(store):
    assert await list_namespace(store, ROOT) == NamespaceSnapshot.empty()
    assert (await list_namespace(store, ("a", "b"))).is_empty


@pytest.mark.anyio
async def test_list_folders_and_files():
    store = FlakyObjectStore(
        {
            **sentinels("a", "a/b", "a/b/c", "d"),
            "root.txt": b"",
            "a/x.txt": b"x",
            "a/b/y.txt": b"y",
        }
    )
    assert await list_namespace(store, ROOT) == NamespaceSnapshot(folders={"a", "d"}, files={"root.txt"})
    assert await list_namespace(store, ("a",)) == NamespaceSnapshot(folders={"b"}, files={"x.txt"})
    assert await list_namespace(store, ("a", "b")) == NamespaceSnapshot(folders={"c"}, files={"y.txt"})
    assert await list_namespace(store, ("a", "b", "c")) == NamespaceSnapshot()


@pytest.mark.anyio
async def test_folder_without_sentinel_is_listed():
    # e.g. files uploaded by another tool: the prefix is enough to make it a folder
    store = FlakyObjectStore({"a/b/x.txt": b""})
    assert (await list_namespace(store, ROOT)).folders == {"a"}
    assert (await list_namespace(store, ("a",))).folders == {"b"}


@pytest.mark.anyio
async def test_sentinels_are_never_listed():
    store = FlakyObjectStore({".keep": b"", "a/.keep": b"", "a/.keep/x": b"", "b/.keep": b""})
    root = await list_namespace(store, ROOT)
    assert root == NamespaceSnapshot(folders={"a", "b"}, files=set())
    a = await list_namespace(store, ("a",))
    assert a.is_empty
    for snapshot in (root, a):
        assert ".keep" not in snapshot.folders | snapshot.files


@pytest.mark.anyio
async def test_listing_failed(store):
    store.fail_list.add("a/b/")
    with pytest.raises(ListingFailed) as e:
        await list_namespace(store, ("a", "b"))
    assert e.value.path == "a/b"
    assert isinstance(e.value.cause, StoreListError)
    assert isinstance(e.value.__cause__, StoreListError)


def test_snapshot_helpers():
    snapshot = NamespaceSnapshot(folders={"b", "a"}, files={"z.txt", "y.txt"})
    assert snapshot.sorted_folders() == ["a", "b"]
    assert snapshot.sorted_files() == ["y.txt", "z.txt"]
    assert not snapshot.is_empty
    assert NamespaceSnapshot.empty().is_empty
