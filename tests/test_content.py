from pathlib import Path

import pytest

from marc.content import (
    ContentProcessor,
    DocumentLoader,
    FileContentLoader,
    PathMapper,
)
from marc.errors import DiscoveryError, PathError
from marc.extractors import Metadata, PreambleExtractor, extract_metadata


def test_extract_without_preamble_returns_body_unchanged():
    for raw in (b"", b"# Title\n\nBody", b"--\nkey: value\n--\n", b" ---\na: b\n---\n"):
        meta, body = extract_metadata(raw)
        assert meta == {}
        assert body == raw


def test_extract_preamble_and_body():
    raw = b"---\ntitle: Hello\ndate:  2024-05-01 \n---\n# Body\n"
    meta, body = extract_metadata(raw)
    assert meta == {"title": "Hello", "date": "2024-05-01"}
    assert body == b"\n# Body\n"


def test_extract_unterminated_preamble_is_not_metadata():
    raw = b"---\ntitle: Hello\n\nNo closing fence"
    meta, body = extract_metadata(raw)
    assert meta == {}
    assert body == raw


def test_extract_line_rules():
    raw = (
        b"---\n"
        b"title: First\n"
        b"no colon here\n"
        b"time: 10:30\n"
        b"  spaced key  :  spaced value  \n"
        b"title: Second\n"
        b"---\n"
    )
    meta, body = extract_metadata(raw)
    assert meta == {"title": "Second", "time": "10:30", "spaced key": "spaced value"}
    assert body == b"\n"


def test_extract_is_repeatable():
    raw = b"---\ntitle: Same\ndate: 2023-01-02\n---\nbody"
    assert extract_metadata(raw)[0] == extract_metadata(raw)[0]
    assert PreambleExtractor().extract(raw) == extract_metadata(raw)


def test_metadata_missing_keys_read_as_empty():
    meta = Metadata({"title": "Hi"})
    assert meta["date"] == ""
    assert "date" not in meta
    assert meta.get("date") is None


def test_map_path_urls(tmp_path):
    mapper = PathMapper()
    site = tmp_path
    assert mapper.map_path(site / "index.md", site) == (Path("index.md"), "")
    assert mapper.map_path(site / "blog" / "index.md", site) == (
        Path("blog/index.md"),
        "blog/",
    )
    assert mapper.map_path(site / "posts" / "hello.md", site)[1] == "posts/hello.html"
    # only a whole trailing component is stripped
    assert mapper.map_path(site / "myindex.md", site)[1] == "myindex.html"
    assert mapper.map_path(site / "index" / "page.md", site)[1] == "index/page.html"


def test_output_path_keeps_index_name(tmp_path):
    mapper = PathMapper()
    assert mapper.output_path(tmp_path / "index.md") == tmp_path / "index.html"
    assert mapper.output_path(tmp_path / "a" / "b.md") == tmp_path / "a" / "b.html"


def test_map_path_outside_site_root(tmp_path):
    site = tmp_path / "site"
    with pytest.raises(PathError) as info:
        PathMapper().map_path(tmp_path / "elsewhere.md", site)
    assert info.value.source_path == tmp_path / "elsewhere.md"


def test_discovery_order_is_lexical_depth_first(tmp_path):
    site = tmp_path
    (site / "a").mkdir()
    (site / "dir.md").mkdir()
    (site / "a" / "z.md").write_text("z", encoding="utf-8")
    (site / "a.md").write_text("a", encoding="utf-8")
    (site / "b.md").write_text("b", encoding="utf-8")
    (site / "B.md").write_text("B", encoding="utf-8")
    (site / "dir.md" / "x.md").write_text("x", encoding="utf-8")
    (site / "notes.txt").write_text("ignore", encoding="utf-8")
    (site / "upper.MD").write_text("ignore", encoding="utf-8")
    (site / "a.html").write_text("old output", encoding="utf-8")

    files = FileContentLoader(site).iter_files()
    rel = [p.relative_to(site).as_posix() for p in files]
    assert rel == ["B.md", "a/z.md", "a.md", "b.md", "dir.md/x.md"]


def test_discovery_custom_extension(tmp_path):
    (tmp_path / "one.markdown").write_text("x", encoding="utf-8")
    (tmp_path / "two.md").write_text("x", encoding="utf-8")
    files = FileContentLoader(tmp_path, ".markdown").iter_files()
    assert files == [tmp_path / "one.markdown"]


def test_discovery_unlistable_root(tmp_path):
    with pytest.raises(DiscoveryError):
        FileContentLoader(tmp_path / "missing").iter_files()


def test_document_loader_builds_document(tmp_path):
    path = tmp_path / "posts" / "hello.md"
    path.parent.mkdir()
    path.write_bytes(b"---\ntitle: Hello\n---\nBody text\n")
    doc = DocumentLoader(tmp_path).load(path)
    assert doc.metadata == {"title": "Hello"}
    assert doc.body == b"\nBody text\n"
    assert doc.url == "posts/hello.html"
    assert doc.source_path == path
    assert doc.relative_path == Path("posts/hello.md")
    assert doc.output_path == tmp_path / "posts" / "hello.html"
    assert doc.rendered_body == ""


def test_document_loader_read_failure(tmp_path):
    with pytest.raises(DiscoveryError) as info:
        DocumentLoader(tmp_path).load(tmp_path / "gone.md")
    assert info.value.source_path == tmp_path / "gone.md"
    assert isinstance(info.value.original_error, OSError)


def test_content_processor_loads_in_discovery_order(tmp_path):
    (tmp_path / "b.md").write_text("---\ndate: 2024-01-01\n---\nB", encoding="utf-8")
    (tmp_path / "a.md").write_text("A", encoding="utf-8")
    docs = ContentProcessor(tmp_path).load()
    assert [d.url for d in docs] == ["a.html", "b.html"]
    assert docs[0].metadata == {}
    assert docs[1].sort_key == "2024-01-01"
