import pytest

from folderstore.errors import (
    DeleteFailed,
    DepthExceeded,
    InvalidSegment,
    StoreDeleteError,
    StoreWriteError,
    UploadFailed,
    UrlUnavailable,
)
from folderstore.files import PREVIEW_HOURS_VALID, SHARE_HOURS_VALID, delete_file, preview_url, share_url, upload
from folderstore.folders import create_folder
from folderstore.namespace import list_namespace
from folderstore.paths import ROOT


@pytest.mark.anyio
async def test_upload_and_delete(store):
    await create_folder(store, ROOT, "a")
    assert await upload(store, ("a",), "x.txt", b"hello", content_type="text/plain") == "a/x.txt"
    assert store.objects["a/x.txt"] == b"hello"
    assert store.content_types["a/x.txt"] == "text/plain"
    assert (await list_namespace(store, ("a",))).files == {"x.txt"}

    await delete_file(store, ("a",), "x.txt")
    assert (await list_namespace(store, ("a",))).files == set()
    # the folder itself still exists
    assert (await list_namespace(store, ROOT)).folders == {"a"}


@pytest.mark.anyio
async def test_upload_overwrites(store):
    await upload(store, ROOT, "x.txt", b"first")
    await upload(store, ROOT, "x.txt", b"second")
    assert store.objects == {"x.txt": b"second"}


@pytest.mark.anyio
async def test_upload_depth(store):
    deepest = tuple("abcdef")
    assert await upload(store, deepest, "x.txt", b"") == "a/b/c/d/e/f/x.txt"
    with pytest.raises(DepthExceeded):
        await upload(store, deepest + ("g",), "x.txt", b"")
    assert set(store.objects) == {"a/b/c/d/e/f/x.txt"}


@pytest.mark.anyio
@pytest.mark.parametrize("name", ["", "a/x.txt", ".keep"])
async def test_upload_invalid_name(store, name):
    with pytest.raises(InvalidSegment):
        await upload(store, ("a",), name, b"")
    assert store.objects == {}


@pytest.mark.anyio
async def test_upload_failed(store):
    store.fail_put.add("a/x.txt")
    with pytest.raises(UploadFailed) as e:
        await upload(store, ("a",), "x.txt", b"")
    assert e.value.path == "a"
    assert e.value.name == "x.txt"
    assert isinstance(e.value.cause, StoreWriteError)


@pytest.mark.anyio
async def test_delete_failed(store):
    await upload(store, ROOT, "x.txt", b"")
    store.fail_delete.add("x.txt")
    with pytest.raises(DeleteFailed) as e:
        await delete_file(store, ROOT, "x.txt")
    assert not e.value.not_found
    assert isinstance(e.value.cause, StoreDeleteError)
    assert "x.txt" in store.objects


@pytest.mark.anyio
async def test_delete_missing_file(store):
    with pytest.raises(DeleteFailed) as e:
        await delete_file(store, ("a",), "x.txt")
    assert e.value.not_found


@pytest.mark.anyio
async def test_urls(store):
    await upload(store, ("a",), "x.txt", b"")
    assert await preview_url(store, ("a",), "x.txt") == "memory://a/x.txt"
    assert await share_url(store, ("a",), "x.txt") == "memory://a/x.txt"
    assert await share_url(store, ("a",), "x.txt", hours_valid=2) == "memory://a/x.txt"
    assert store.hours_valid == [PREVIEW_HOURS_VALID, SHARE_HOURS_VALID, 2]


@pytest.mark.anyio
async def test_url_unavailable(store):
    with pytest.raises(UrlUnavailable) as e:
        await preview_url(store, ("a",), "x.txt")
    assert e.value.not_found

    await upload(store, ("a",), "x.txt", b"")
    store.fail_url.add("a/x.txt")
    with pytest.raises(UrlUnavailable) as e:
        await share_url(store, ("a",), "x.txt")
    assert not e.value.not_found
