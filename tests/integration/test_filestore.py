import os

import pytest

from chosen_arrows.adapters.fs.filestore import FileSystemObjectStore
from chosen_arrows.core.ports.storage import StorageError


@pytest.fixture
def store(tmp_path):
    return FileSystemObjectStore(
        str(tmp_path), bucket="images", public_base_url="http://localhost:8000/"
    )


def test_upload_read_and_url(store, tmp_path):
    path = store.upload("campaigns/a.jpg", b"jpeg", content_type="image/jpeg")

    assert path == "campaigns/a.jpg"
    assert (tmp_path / "images" / "campaigns" / "a.jpg").read_bytes() == b"jpeg"
    assert store.read(path) == b"jpeg"
    assert store.public_url(path) == (
        "http://localhost:8000/storage/v1/object/public/images/campaigns/a.jpg"
    )


def test_no_overwrite_without_upsert(store):
    store.upload("a.jpg", b"one", content_type="image/jpeg")

    with pytest.raises(StorageError, match="already exists"):
        store.upload("a.jpg", b"two", content_type="image/jpeg")

    store.upload("a.jpg", b"two", content_type="image/jpeg", upsert=True)
    assert store.read("a.jpg") == b"two"


def test_traversal_rejected(store):
    with pytest.raises(StorageError, match="traversal"):
        store.upload("../escape.jpg", b"x", content_type="image/jpeg")
    with pytest.raises(StorageError):
        store.read("../../etc/passwd")


def test_list_newest_first_and_skips_folders(store, tmp_path):
    store.upload("campaigns/old.jpg", b"1", content_type="image/jpeg")
    store.upload("campaigns/new.jpg", b"22", content_type="image/jpeg")
    store.upload("campaigns/nested/x.jpg", b"3", content_type="image/jpeg")
    folder = tmp_path / "images" / "campaigns"
    os.utime(folder / "old.jpg", (1_700_000_000, 1_700_000_000))
    os.utime(folder / "new.jpg", (1_800_000_000, 1_800_000_000))

    objects = store.list("campaigns")

    assert [o.name for o in objects] == ["new.jpg", "old.jpg"]
    assert objects[0].size == 2
    assert store.list("campaigns", limit=1, offset=1)[0].name == "old.jpg"
    assert store.list("missing") == []


def test_remove(store):
    store.upload("a.jpg", b"x", content_type="image/jpeg")

    store.remove(["a.jpg", "never-existed.jpg"])

    with pytest.raises(FileNotFoundError):
        store.read("a.jpg")
