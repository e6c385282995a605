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

"""Tests for htmlviews.config and htmlviews.logsink."""

from __future__ import annotations

import logging
from pathlib import Path

from htmlviews.config import RendererOptions
from htmlviews.logsink import NullLogSink, StdlibLogSink
from htmlviews.sources import DirectorySource, MemorySource

VIEWS = Path(__file__).parent / "fixtures" / "views"


class TestRendererOptions:
    def test_defaults(self):
        options = RendererOptions()
        assert options.source is None
        assert options.auto_reload is False
        assert dict(options.functions) == {}
        assert options.log is None

    def test_from_env(self):
        options = RendererOptions.from_env({
            "HTMLVIEWS_TEMPLATE_DIR": str(VIEWS),
            "HTMLVIEWS_AUTO_RELOAD": "True",
        })
        assert isinstance(options.source, DirectorySource)
        assert options.source.root == VIEWS
        assert options.auto_reload is True

    def test_from_env_falsey_reload(self):
        for value in ("0", "false", "no", ""):
            options = RendererOptions.from_env({"HTMLVIEWS_AUTO_RELOAD": value})
            assert options.auto_reload is False

    def test_from_env_empty(self):
        assert RendererOptions.from_env({}) == RendererOptions()

    def test_overrides_win(self):
        source = MemorySource()
        options = RendererOptions.from_env(
            {"HTMLVIEWS_TEMPLATE_DIR": str(VIEWS), "HTMLVIEWS_AUTO_RELOAD": "1"},
            source=source,
            auto_reload=False,
        )
        assert options.source is source
        assert options.auto_reload is False

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("HTMLVIEWS_AUTO_RELOAD", "yes")
        monkeypatch.delenv("HTMLVIEWS_TEMPLATE_DIR", raising=False)
        assert RendererOptions.from_env().auto_reload is True


class TestLogSinks:
    def test_null_sink_accepts_everything(self):
        sink = NullLogSink()
        sink.debug("msg", {"a": 1})
        sink.debug_ctx({"id": 1}, "msg", {})
        sink.error_ctx(None, "msg", RuntimeError("x"), {})

    def test_stdlib_sink_formats_fields(self, caplog):
        logger = logging.getLogger("htmlviews.test")
        sink = StdlibLogSink(logger)
        caplog.set_level(logging.DEBUG, logger="htmlviews.test")

        sink.debug("plain", {})
        sink.debug_ctx({"path": "/"}, "hello", {"name": "a.html"})

        assert [r.getMessage() for r in caplog.records] == ["plain", "hello path=/ name=a.html"]
        assert caplog.records[1].fields == {"path": "/", "name": "a.html"}

    def test_stdlib_sink_respects_level(self, caplog):
        logger = logging.getLogger("htmlviews.quiet")
        sink = StdlibLogSink(logger)
        caplog.set_level(logging.WARNING, logger="htmlviews.quiet")

        sink.debug("hidden", {})
        sink.error_ctx(None, "shown", ValueError("bad"), {"name": "x"})

        assert [r.getMessage() for r in caplog.records] == ["shown name=x error=bad"]
        assert caplog.records[0].exc_info[0] is ValueError
