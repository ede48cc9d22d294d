import pytest

from techdocs.exceptions import NotFoundError, StorageError
from techdocs.storage.local import LocalStorage


def test_put_and_read_back(tmp_path):
    storage = LocalStorage(tmp_path / "bucket")
    storage.put_object("default/Component/foo/index.html", b"<h1>hi</h1>", "text/html")

    assert storage.get_object("default/Component/foo/index.html") == b"<h1>hi</h1>"
    assert storage.head_object("default/Component/foo/index.html")["ContentLength"] == 11
    chunks = list(storage.stream_object("default/Component/foo/index.html", chunk_size=4))
    assert len(chunks) == 3
    assert b"".join(chunks) == b"<h1>hi</h1>"


def test_missing_object(tmp_path):
    storage = LocalStorage(tmp_path)
    with pytest.raises(NotFoundError):
        storage.get_object("default/Component/foo/index.html")
    with pytest.raises(NotFoundError):
        storage.head_object("default/Component/foo")
    with pytest.raises(NotFoundError):
        list(storage.stream_object(""))


def test_keys_cannot_escape_root(tmp_path):
    storage = LocalStorage(tmp_path / "bucket")
    with pytest.raises(StorageError):
        storage.put_object("../outside.html", b"x")
    assert not (tmp_path / "outside.html").exists()


def test_probe(tmp_path):
    storage = LocalStorage(tmp_path / "bucket")
    storage.probe()
    (tmp_path / "bucket").rmdir()
    with pytest.raises(StorageError):
        storage.probe()


def test_invalid_key_is_a_storage_error(tmp_path):
    storage = LocalStorage(tmp_path / "bucket")
    with pytest.raises(StorageError):
        storage.get_object("default/Component/foo/a\x00b.html")
    with pytest.raises(StorageError):
        list(storage.stream_object("default/Component/foo/a\x00b.html"))
    with pytest.raises(StorageError):
        storage.head_object("default/Component/foo/a\x00b.html")
