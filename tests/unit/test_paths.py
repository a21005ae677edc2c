from pathlib import Path

import pytest

from crawlshot.crawl.paths import PathMapper, relative_path_for, url_segments  # type: ignore[import]


def test_relative_path_mirrors_url_segments():
    assert relative_path_for("https://example.com/a/b") == Path("example-com", "a", "b")


def test_relative_path_is_deterministic_for_multi_segment_urls():
    url = "https://example.com/docs/Getting Started/index.html"

    assert relative_path_for(url) == relative_path_for(url)


def test_distinct_urls_map_to_distinct_paths():
    urls = [
        "https://example.com/a/b",
        "https://example.com/a/c",
        "https://example.com/a",
        "https://example.org/a",
        "https://example.com/a/b/c",
        "https://example.com:8080/a",
    ]

    paths = {relative_path_for(url) for url in urls}

    assert len(paths) == len(urls)


def test_query_stays_on_last_segment():
    assert url_segments("https://example.com/search?q=cats") == ["example-com", "search-q-cats"]


def test_scheme_is_not_a_segment():
    assert url_segments("http://example.com/a") == url_segments("https://example.com/a")


def test_bare_host_gets_random_suffix():
    path = relative_path_for("https://x.test/")

    assert len(path.parts) == 2
    assert path.parts[0] == "x-test"
    # The suffix is random on purpose; only its presence is asserted.
    assert path.parts[1]


def test_url_without_host_is_rejected():
    with pytest.raises(ValueError):
        url_segments("/relative/path")


def test_path_for_creates_parent_directories(tmp_path):
    mapper = PathMapper(tmp_path)

    base = mapper.path_for("https://example.com/a/b")

    assert base == tmp_path / "example-com" / "a" / "b"
    assert (tmp_path / "example-com" / "a").is_dir()
    assert not base.exists()


def test_path_for_is_idempotent_for_overlapping_prefixes(tmp_path):
    mapper = PathMapper(tmp_path)

    mapper.path_for("https://example.com/a/b")
    mapper.path_for("https://example.com/a/c")
    mapper.path_for("https://example.com/a/b")

    assert sorted(p.name for p in (tmp_path / "example-com").iterdir()) == ["a"]


def test_path_for_propagates_directory_errors(tmp_path):
    (tmp_path / "example-com").write_text("not a directory")
    mapper = PathMapper(tmp_path)

    with pytest.raises(OSError):
        mapper.path_for("https://example.com/a/b")
