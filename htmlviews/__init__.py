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

"""Named HTML views on top of Jinja2.

Pages are registered by glob pattern, optionally wrapped in a shared
layout and compiled together with include fragments, then rendered by the
page's base name.  With ``auto_reload`` enabled every render recompiles the
view from its source files.

Usage::

    from htmlviews import DirectorySource, ViewRenderer

    views = ViewRenderer(
        DirectorySource("templates"),
        functions={"year": lambda: 2026},
    )
    views.add_with_layout("layout.html", "pages/*.html")
    html = views.render_to_string("index.html", {"title": "Home"})

FastAPI integration lives in :mod:`htmlviews.web`.
"""

from htmlviews.compiler import CompiledView, compile_view, resolve_patterns
from htmlviews.config import RendererOptions
from htmlviews.context import RequestContext
from htmlviews.errors import (
    ConfigurationError,
    NoMatchError,
    PatternSyntaxError,
    TemplateParseError,
    ViewError,
    ViewNotFoundError,
)
from htmlviews.logsink import LogSink, NullLogSink, StdlibLogSink
from htmlviews.registry import View, ViewRegistry
from htmlviews.renderer import ViewRenderer
from htmlviews.sources import DirectorySource, MemorySource, TemplateSource

__all__ = [
    "ViewRenderer",
    "RendererOptions",
    "RequestContext",
    "View",
    "ViewRegistry",
    "CompiledView",
    "compile_view",
    "resolve_patterns",
    "TemplateSource",
    "DirectorySource",
    "MemorySource",
    "LogSink",
    "NullLogSink",
    "StdlibLogSink",
    "ViewError",
    "ConfigurationError",
    "PatternSyntaxError",
    "NoMatchError",
    "TemplateParseError",
    "ViewNotFoundError",
]
