import pytest

from folderstore.config import Settings
from folderstore.errors import DepthExceeded, InvalidName, ListingFailed, UploadFailed
from folderstore.namespace import NamespaceSnapshot
from folderstore.paths import ROOT
from folderstore.session import BrowserSession
from tests.tools import FlakyObjectStore, sentinels


@pytest.fixture(scope="function")
def session(store):
    return BrowserSession(store, settings=Settings())


@pytest.mark.anyio
async def test_create_nested_folders(session):
    assert (await session.refresh()).is_empty

    await session.create_folder("a")
    assert session.snapshot == NamespaceSnapshot(folders={"a"}, files=set())

    await session.enter("a")
    for name in "bcdef":
        await session.create_folder(name)
        assert session.snapshot.folders == {name}
        await session.enter(name)
    assert session.current_path == ("a", "b", "c", "d", "e", "f")

    with pytest.raises(DepthExceeded):
        await session.create_folder("g")
    with pytest.raises(DepthExceeded):
        await session.enter("g")
    assert session.current_path == ("a", "b", "c", "d", "e", "f")


@pytest.mark.anyio
async def test_upload_and_delete_file(session):
    await session.create_folder("a")
    await session.enter("a")
    assert await session.upload("x.txt", b"x") == "a/x.txt"
    assert session.snapshot.files == {"x.txt"}

    await session.delete_file("x.txt")
    assert session.snapshot.files == set()


@pytest.mark.anyio
async def test_delete_folder(store, session):
    store.objects.update({**sentinels("a", "a/b"), "a/b/y.txt": b""})
    await session.refresh()
    assert session.snapshot.folders == {"a"}

    assert await session.delete_folder("a") == ("a",)
    assert session.snapshot.is_empty
    assert store.objects == {}


@pytest.mark.anyio
async def test_delete_folder_uses_concurrency_setting():
    store = FlakyObjectStore({**sentinels("a"), **{f"a/{i}": b"" for i in range(10)}})
    session = BrowserSession(store, settings=Settings(delete_concurrency=1))
    await session.delete_folder("a")
    assert store.objects == {}
    assert store.max_in_flight == 1


@pytest.mark.anyio
async def test_navigation_refreshes(store, session):
    store.objects.update({**sentinels("a", "a/b"), "a/x.txt": b""})
    assert await session.enter("a") == NamespaceSnapshot(folders={"b"}, files={"x.txt"})
    assert await session.back() == NamespaceSnapshot(folders={"a"}, files=set())
    assert store.listed == ["a/", ""]

    # at the root, back does nothing
    assert await session.back() == NamespaceSnapshot(folders={"a"}, files=set())
    assert store.listed == ["a/", ""]


@pytest.mark.anyio
async def test_refresh_after_failed_mutation(store, session):
    await session.refresh()
    # something changes the store behind our back, and then our upload fails
    store.objects["other.txt"] = b""
    store.fail_put.add("x.txt")
    with pytest.raises(UploadFailed):
        await session.upload("x.txt", b"")
    assert session.snapshot.files == {"other.txt"}


@pytest.mark.anyio
async def test_refresh_after_rejected_mutation(store, session):
    store.objects["other.txt"] = b""
    with pytest.raises(InvalidName):
        await session.create_folder("   ")
    assert session.snapshot.files == {"other.txt"}


@pytest.mark.anyio
async def test_refresh_failure_empties_snapshot(store, session):
    store.objects.update(sentinels("a"))
    await session.refresh()
    assert session.snapshot.folders == {"a"}

    store.fail_list.add("")
    with pytest.raises(ListingFailed):
        await session.refresh()
    assert session.snapshot.is_empty


@pytest.mark.anyio
async def test_mutation_error_wins_over_refresh_error(store, session):
    store.fail_put.add("x.txt")
    store.fail_list.add("")
    with pytest.raises(UploadFailed):
        await session.upload("x.txt", b"")
    assert session.snapshot.is_empty


@pytest.mark.anyio
async def test_urls_use_settings(store):
    session = BrowserSession(store, settings=Settings(preview_hours_valid=1, share_hours_valid=2))
    await session.upload("x.txt", b"")
    assert await session.preview_url("x.txt") == "memory://x.txt"
    assert await session.share_url("x.txt") == "memory://x.txt"
    assert store.hours_valid == [1, 2]
    assert session.current_path == ROOT
