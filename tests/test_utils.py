import stat
from pathlib import Path

from marc import utils


def test_strip_index_only_whole_trailing_component():
    assert utils.strip_index("index.html") == ""
    assert utils.strip_index("blog/index.html") == "blog/"
    assert utils.strip_index("a/b/index.html") == "a/b/"
    assert utils.strip_index("myindex.html") == "myindex.html"
    assert utils.strip_index("blog/myindex.html") == "blog/myindex.html"
    assert utils.strip_index("index.html/page.html") == "index.html/page.html"


def test_html_sibling():
    assert utils.html_sibling(Path("site/posts/hello.md")) == Path("site/posts/hello.html")
    assert utils.html_sibling(Path("index.md")) == Path("index.html")


def test_is_source_file(tmp_path):
    (tmp_path / "page.md").write_text("x", encoding="utf-8")
    (tmp_path / "PAGE.MD").write_text("x", encoding="utf-8")
    (tmp_path / "folder.md").mkdir()
    assert utils.is_source_file(tmp_path / "page.md")
    assert not utils.is_source_file(tmp_path / "PAGE.MD")
    assert not utils.is_source_file(tmp_path / "folder.md")
    assert not utils.is_source_file(tmp_path / "missing.md")


def test_write_file_creates_private_file_and_truncates(tmp_path):
    target = tmp_path / "out.html"
    utils.write_file(target, b"a much longer first version")
    assert target.read_bytes() == b"a much longer first version"
    assert stat.S_IMODE(target.stat().st_mode) == 0o600
    utils.write_file(target, b"short")
    assert target.read_bytes() == b"short"
