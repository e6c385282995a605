# htmlviews — named HTML views with layouts and includes for Jinja2
# Copyright (C) 2024-2026 Dr Horst Herb
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

"""Tests for htmlviews.sources."""

from __future__ import annotations

from pathlib import Path

import pytest

from htmlviews.errors import PatternSyntaxError
from htmlviews.sources import DirectorySource, MemorySource, escape, match

VIEWS = Path(__file__).parent / "fixtures" / "views"


class TestMatch:
    def test_star_stays_within_segment(self):
        assert match("*.html", "index.html")
        assert not match("*.html", "pages/index.html")
        assert match("pages/*.html", "pages/index.html")
        assert match("*/*.html", "pages/index.html")

    def test_whole_name_must_match(self):
        assert not match("index", "index.html")
        assert match("index.html", "index.html")

    def test_question_mark(self):
        assert match("page?.html", "page1.html")
        assert not match("page?.html", "page10.html")
        assert not match("a?b", "a/b")

    def test_character_class(self):
        assert match("[abc].html", "b.html")
        assert not match("[abc].html", "d.html")
        assert match("v[0-9].txt", "v7.txt")
        assert not match("v[0-9].txt", "vx.txt")

    def test_negated_class(self):
        assert match("[^a].html", "b.html")
        assert not match("[^a].html", "a.html")

    def test_escape(self):
        assert match(r"\*.html", "*.html")
        assert not match(r"\*.html", "x.html")
        assert match(r"[\]]", "]")

    def test_escape_literal_name(self):
        for name in ("pages/[id].html", "a*b?.html", "back\\slash.html", "plain.html"):
            assert match(escape(name), name)
        assert not match(escape("pages/[id].html"), "pages/i.html")
        assert not match(escape("*.html"), "index.html")

    def test_dot_is_literal(self):
        assert not match("a.html", "aXhtml")

    @pytest.mark.parametrize(
        "pattern",
        ["[", "[]", "[^]", "[a-", "[z-a]", "abc\\", "[a-]", "[\\"],
    )
    def test_malformed_patterns(self, pattern):
        with pytest.raises(PatternSyntaxError) as exc_info:
            match(pattern, "anything")
        assert exc_info.value.pattern == pattern


class TestMemorySource:
    def test_glob_sorted_per_segment(self):
        source = MemorySource({
            "b/a.html": "",
            "a/z.html": "",
            "a.html": "",
            "a-b/c.html": "",
        })
        assert source.glob("*") == ["a.html"]
        assert source.glob("*/*.html") == ["a/z.html", "a-b/c.html", "b/a.html"]

    def test_glob_no_match_is_empty(self):
        assert MemorySource({"a.html": ""}).glob("*.txt") == []

    def test_glob_validates_syntax_without_files(self):
        with pytest.raises(PatternSyntaxError):
            MemorySource().glob("[")

    def test_read_text_and_bytes(self):
        source = MemorySource({"a.html": "alpha", "b.html": "beta".encode("utf-8")})
        assert source.read("a.html") == "alpha"
        assert source.read("b.html") == "beta"

    def test_read_missing(self):
        with pytest.raises(FileNotFoundError):
            MemorySource().read("nope.html")

    def test_write_and_remove(self):
        source = MemorySource()
        source.write("a.html", "one")
        assert source.glob("*.html") == ["a.html"]
        source.write("a.html", "two")
        assert source.read("a.html") == "two"
        source.remove("a.html")
        assert source.glob("*.html") == []

    def test_input_mapping_is_copied(self):
        files = {"a.html": "one"}
        source = MemorySource(files)
        files["b.html"] = "two"
        assert source.names() == ["a.html"]


class TestDirectorySource:
    def test_glob_fixture_tree(self):
        source = DirectorySource(VIEWS)
        assert source.glob("pages/*.html") == ["pages/index.html"]
        assert source.glob("includes/*.html") == [
            "includes/footer.html",
            "includes/header.html",
        ]
        assert source.glob("layout*.html") == ["layout.html", "layout2.html"]

    def test_read(self):
        source = DirectorySource(VIEWS)
        assert source.read("fragments/data.html") == "data"

    def test_read_missing(self):
        with pytest.raises(FileNotFoundError):
            DirectorySource(VIEWS).read("fragments/nope.html")

    def test_read_outside_root(self, tmp_path):
        root = tmp_path / "root"
        root.mkdir()
        (tmp_path / "secret.html").write_text("secret")
        with pytest.raises(FileNotFoundError):
            DirectorySource(root).read("../secret.html")

    def test_missing_directory(self, tmp_path):
        with pytest.raises(NotADirectoryError):
            DirectorySource(tmp_path / "nope")

    def test_sees_new_files(self, tmp_path):
        source = DirectorySource(tmp_path)
        assert source.glob("*.html") == []
        (tmp_path / "new.html").write_text("new")
        assert source.glob("*.html") == ["new.html"]
