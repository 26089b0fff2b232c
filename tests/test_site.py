"""End-to-end tests for the tree aggregator and build_site."""

import datetime as dt
import logging
import os
from pathlib import Path

import pytest

from folio.errors import IoError, MalformedFrontmatter, StructuredDataError
from folio.models import DirectoryNode, FileNode
from folio.site import build_site

from conftest import echo_math, failing_math, make_doc, set_mtime

# 2024-03-01 12:00 UTC and 2024-01-01 12:00 UTC
MARCH = 1709294400
JANUARY = 1704110400

INFO = 'title = "{title}"\ndescription = "{description}"\ndate = 2000-01-01\n'


def _info(title, description=""):
    return INFO.format(title=title, description=description)


@pytest.fixture
def notes(make_site):
    root = make_site({
        "index.toml": _info("My Notes", "Everything I know"),
        "intro.md": make_doc("Introduction", date="2024-03-01", body="# Hello World\n\nWelcome.\n"),
        "_draft.md": make_doc("Draft", date="2024-05-01"),
        "notes.txt": "not a document",
        "maths/index.toml": _info("Maths"),
        "maths/limits.md": make_doc("Limits", date="2024-02-01", body="Let $x \\to 0$.\n"),
    })
    set_mtime(root / "intro.md", MARCH)
    set_mtime(root / "_draft.md", JANUARY)
    set_mtime(root / "maths" / "limits.md", JANUARY)
    return root


def _out(config) -> Path:
    return Path(config.output.base_dir)


class TestOutputLayout:
    def test_pages_written_per_document(self, sample_config, notes):
        build_site(sample_config, math_renderer=echo_math)
        out = _out(sample_config)
        assert (out / "intro" / "index.html").is_file()
        assert (out / "maths" / "limits" / "index.html").is_file()
        assert (out / "maths" / "index.html").is_file()
        assert (out / "index.html").is_file()

    def test_non_documents_skipped(self, sample_config, notes):
        build_site(sample_config, math_renderer=echo_math)
        out = _out(sample_config)
        assert not (out / "notes").exists()
        assert not (out / "index" / "index.html").exists()

    def test_page_content(self, sample_config, notes):
        build_site(sample_config, math_renderer=echo_math)
        html = (_out(sample_config) / "intro" / "index.html").read_text()
        assert "<title>Introduction</title>" in html
        assert '<h1 id="hello-world"><a class="header" href="#hello-world">Hello World</a></h1>' in html
        assert "01 March 2024" in html

    def test_hidden_page_built_but_not_listed(self, sample_config, notes):
        build_site(sample_config, math_renderer=echo_math)
        out = _out(sample_config)
        assert (out / "_draft" / "index.html").is_file()
        index = (out / "index.html").read_text()
        assert "Draft" not in index
        assert 'href="/intro/"' in index
        assert 'href="/maths/"' in index

    def test_nested_index_links(self, sample_config, notes):
        build_site(sample_config, math_renderer=echo_math)
        index = (_out(sample_config) / "maths" / "index.html").read_text()
        assert "<title>Maths</title>" in index
        assert 'href="/maths/limits/"' in index

    def test_static_files_copied(self, sample_config, notes):
        static = Path(sample_config.site.static_dir)
        static.mkdir()
        (static / "style.css").write_text("body {}")
        build_site(sample_config, math_renderer=echo_math)
        assert (_out(sample_config) / "style.css").read_text() == "body {}"

    def test_previous_build_removed(self, sample_config, notes):
        stale = _out(sample_config) / "gone" / "index.html"
        stale.parent.mkdir(parents=True)
        stale.write_text("old")
        build_site(sample_config, math_renderer=echo_math)
        assert not stale.exists()

    def test_site_template_override(self, sample_config, notes):
        templates = Path(sample_config.site.template_dir)
        templates.mkdir()
        (templates / "page.html").write_text("<div class=\"custom\">{{ rendered_body|safe }}</div>")
        build_site(sample_config, math_renderer=echo_math)
        html = (_out(sample_config) / "intro" / "index.html").read_text()
        assert '<div class="custom">' in html


class TestTree:
    def test_report_counts(self, sample_config, notes):
        report = build_site(sample_config, math_renderer=echo_math)
        assert report.documents == 3
        assert report.directories == 2

    def test_traversal_order_is_by_name(self, sample_config, notes):
        tree = build_site(sample_config, math_renderer=echo_math).tree
        names = [Path(node.path).name for node in tree.contents]
        assert names == ["_draft.md", "intro.md", "maths"]
        assert isinstance(tree.contents[0], FileNode)
        assert isinstance(tree.contents[2], DirectoryNode)

    def test_info_date_from_newest_document(self, sample_config, notes):
        tree = build_site(sample_config, math_renderer=echo_math).tree
        assert tree.info.title == "My Notes"
        assert tree.info.date == dt.date(2024, 3, 1)
        assert tree.contents[2].info.date == dt.date(2024, 1, 1)

    def test_subdirectories_do_not_raise_date(self, sample_config, make_site):
        root = make_site({
            "index.toml": _info("Root"),
            "old.md": make_doc("Old"),
            "newer/fresh.md": make_doc("Fresh"),
        })
        set_mtime(root / "old.md", JANUARY)
        set_mtime(root / "newer" / "fresh.md", MARCH)
        tree = build_site(sample_config, math_renderer=echo_math).tree
        assert tree.info.date == dt.date(2024, 1, 1)

    def test_directory_without_documents_gets_epoch(self, sample_config, make_site):
        make_site({
            "index.toml": _info("Root"),
            "deeper/page.md": make_doc("Page"),
        })
        tree = build_site(sample_config, math_renderer=echo_math).tree
        assert tree.info.date == dt.date(1970, 1, 1)

    def test_directory_without_info_file(self, sample_config, make_site):
        make_site({"page.md": make_doc("Page")})
        tree = build_site(sample_config, math_renderer=echo_math).tree
        assert tree.info is None
        assert (_out(sample_config) / "index.html").is_file()

    def test_parent_sees_child_info(self, sample_config, notes):
        build_site(sample_config, math_renderer=echo_math)
        index = (_out(sample_config) / "index.html").read_text()
        assert ">Maths</a>" in index

    def test_symlinks_are_skipped(self, sample_config, notes):
        os.symlink(notes, notes / "loop")
        os.symlink(notes / "intro.md", notes / "alias.md")
        report = build_site(sample_config, math_renderer=echo_math)
        out = _out(sample_config)
        assert not (out / "loop").exists()
        assert not (out / "alias").exists()
        assert report.documents == 3
        assert report.directories == 2


class TestErrors:
    def test_math_failure_does_not_stop_build(self, sample_config, notes):
        build_site(sample_config, math_renderer=failing_math)
        html = (_out(sample_config) / "maths" / "limits" / "index.html").read_text()
        assert "Maths Error: Undefined control sequence" in html

    def test_math_failure_logged(self, sample_config, notes, caplog):
        with caplog.at_level(logging.WARNING, logger="folio"):
            build_site(sample_config, math_renderer=failing_math)
        assert "Maths error" in caplog.text

    def test_malformed_document_names_path(self, sample_config, make_site):
        root = make_site({"bad.md": "no frontmatter here\n"})
        with pytest.raises(MalformedFrontmatter) as exc_info:
            build_site(sample_config, math_renderer=echo_math)
        assert exc_info.value.path == str(root / "bad.md")
        assert str(exc_info.value).startswith(str(root / "bad.md"))

    def test_invalid_info_file_names_path(self, sample_config, make_site):
        root = make_site({"index.toml": 'title = "Only a title"\n'})
        with pytest.raises(StructuredDataError) as exc_info:
            build_site(sample_config, math_renderer=echo_math)
        assert exc_info.value.path == str(root / "index.toml")

    def test_missing_content_dir(self, sample_config, tmp_path):
        config = sample_config.model_copy(
            update={"site": sample_config.site.model_copy(update={"content_dir": str(tmp_path / "absent")})}
        )
        with pytest.raises(IoError, match="content directory not found"):
            build_site(config)

    def test_build_time_logged(self, sample_config, notes, caplog):
        with caplog.at_level(logging.INFO, logger="folio"):
            build_site(sample_config, math_renderer=echo_math)
        assert "Completed rendering in" in caplog.text
