import pytest

from techdocs.exceptions import ReadError
from techdocs.publish.helpers import (
    STATIC_CACHE_CONTROL,
    get_content_type,
    get_file_tree_recursively,
    get_headers_for_file_extension,
)
from tests.utils_s3 import write_site


def test_css_headers():
    headers = get_headers_for_file_extension(".css")
    assert headers["Content-Type"].startswith("text/css")
    assert headers["Cache-Control"] == STATIC_CACHE_CONTROL


def test_html_headers_are_not_cached():
    headers = get_headers_for_file_extension(".html")
    assert headers["Content-Type"].startswith("text/html")
    assert "Cache-Control" not in headers


def test_extension_lookup_is_case_insensitive():
    assert get_headers_for_file_extension(".CSS")["Content-Type"].startswith("text/css")


def test_unknown_extension_falls_back_to_octet_stream():
    headers = get_headers_for_file_extension(".unknownext")
    assert headers == {"Content-Type": "application/octet-stream"}


def test_content_type_for_paths():
    assert get_content_type("assets/images/favicon.png") == "image/png"
    assert get_content_type("sub-page/index.html").startswith("text/html")


def test_file_tree_is_sorted_and_relative(tmp_path):
    site = write_site(
        tmp_path / "site",
        {
            "sub/page.html": b"<p>page</p>",
            "index.html": b"<h1>home</h1>",
            "assets/main.css": b"body {}",
        },
    )
    (site / "empty-dir").mkdir()

    files = get_file_tree_recursively(site)

    assert [relative for _, relative in files] == ["assets/main.css", "index.html", "sub/page.html"]
    for path, relative in files:
        assert path.is_absolute()
        assert path.as_posix().endswith(relative)


def test_file_tree_of_missing_directory(tmp_path):
    with pytest.raises(ReadError):
        get_file_tree_recursively(tmp_path / "missing")
