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

"""Register named views and render them.

Usage::

    from htmlviews import DirectorySource, ViewRenderer

    views = ViewRenderer(DirectorySource("templates"), auto_reload=True)
    views.add_with_layout_and_includes("layout.html", "includes/*.html", "pages/*.html")
    views.add("fragments/*.html")

    buf = io.StringIO()
    views.render(buf, "index.html", {"title": "Home"})
"""

from __future__ import annotations

import io
import logging
import time
from collections.abc import Callable, Mapping
from datetime import timedelta
from typing import Any

from htmlviews.compiler import SupportsWrite, resolve_patterns
from htmlviews.config import OPTION_NAMES, RendererOptions
from htmlviews.context import RequestContext
from htmlviews.errors import ConfigurationError, ViewError, ViewNotFoundError
from htmlviews.logsink import LogSink, NullLogSink
from htmlviews.registry import View, ViewRegistry
from htmlviews.sources import TemplateSource

logger = logging.getLogger(__name__)

HTTP_INTERNAL_SERVER_ERROR = 500


class ViewRenderer:
    """Registry of named HTML views with optional layouts and includes.

    Args:
        source: File collection that registration patterns resolve against.
        auto_reload: Recompile a view from *source* on every render.
        functions: Callables made available to every template as globals.
            They are bound when a view is compiled.
        log: Sink for per-render log messages.  Defaults to
            :class:`~htmlviews.logsink.NullLogSink`.
    """

    def __init__(
        self,
        source: TemplateSource | None = None,
        *,
        auto_reload: bool = False,
        functions: Mapping[str, Callable[..., Any]] | None = None,
        log: LogSink | None = None,
    ) -> None:
        self._registry = ViewRegistry()
        self.configure(source=source, auto_reload=auto_reload, functions=functions, log=log)

    @classmethod
    def from_options(cls, options: RendererOptions) -> ViewRenderer:
        return cls(**options.as_dict())

    def configure(self, **options: Any) -> None:
        """Apply renderer options by name.

        Recognised names are ``source``, ``auto_reload``, ``functions`` and
        ``log``.  Raises :class:`ConfigurationError` for anything else.
        """
        unknown = set(options) - OPTION_NAMES
        if unknown:
            raise ConfigurationError(
                f"Unknown renderer option(s): {sorted(unknown)}. "
                f"Available: {sorted(OPTION_NAMES)}"
            )
        registry = self._registry
        if "source" in options:
            registry.source = options["source"]
        if "auto_reload" in options:
            registry.auto_reload = bool(options["auto_reload"])
        if "functions" in options:
            registry.functions = dict(options["functions"] or {})
        if "log" in options:
            registry.log = options["log"] or NullLogSink()

    def update_source(self, source: TemplateSource, auto_reload: bool) -> None:
        """Replace the file collection and reload flag.

        Views already compiled keep their artifacts until recompiled.
        """
        self.configure(source=source, auto_reload=auto_reload)

    @property
    def source(self) -> TemplateSource | None:
        return self._registry.source

    @property
    def auto_reload(self) -> bool:
        return self._registry.auto_reload

    @property
    def log(self) -> LogSink:
        return self._registry.log

    def __contains__(self, name: object) -> bool:
        return name in self._registry

    def names(self) -> list[str]:
        """Return the registered view names, sorted."""
        return self._registry.names()

    def get(self, name: str) -> View:
        """Return the registered view *name* (raises :class:`ViewNotFoundError`)."""
        return self._registry.lookup(name)

    # --- Registration -------------------------------------------------------

    def _register(self, layout: str, includes: str, patterns: tuple[str, ...]) -> list[View]:
        source = self._registry.require_source()
        filenames = resolve_patterns(source, patterns)

        views = []
        for filename in filenames:
            view = View(path=filename, layout=layout, includes=includes)
            self._registry.compile(view)
            views.append(view)
        logger.debug("Registered %d view(s) for %s", len(views), list(patterns))
        return views

    def add(self, *patterns: str) -> list[View]:
        """Register one standalone view per file matching *patterns*."""
        return self._register("", "", patterns)

    def add_with_layout(self, layout: str, *patterns: str) -> list[View]:
        """Register one view per matching page, each wrapped in *layout*."""
        return self._register(layout, "", patterns)

    def add_with_layout_and_includes(
        self, layout: str, includes: str, *patterns: str,
    ) -> list[View]:
        """Register one view per matching page with *layout* and the
        fragments matched by *includes*."""
        return self._register(layout, includes, patterns)

    # --- Rendering ----------------------------------------------------------

    def render(
        self,
        stream: SupportsWrite,
        name: str,
        data: Any = None,
        ctx: RequestContext | None = None,
    ) -> None:
        """Render view *name* with *data* into *stream*.

        An unknown name is logged, answered with an empty 500 response
        through *ctx* and raised as :class:`ViewNotFoundError`.  In
        auto-reload mode compile errors are logged and raised.  Template
        execution errors are logged and re-raised; output written before
        the error stays in *stream*.
        """
        registry = self._registry
        log = registry.log
        log_ctx = ctx.context() if ctx is not None else None

        log.debug_ctx(log_ctx, "Render", {"name": name, "autoReload": registry.auto_reload})

        start = time.perf_counter()

        try:
            view = registry.lookup(name)
        except ViewNotFoundError as exc:
            log.error_ctx(log_ctx, "failed to load template", exc, {"name": name})
            if ctx is not None:
                ctx.write_no_content(HTTP_INTERNAL_SERVER_ERROR)
            raise

        if registry.auto_reload:
            try:
                artifact = registry.compile(view)
            except ViewError as exc:
                log.error_ctx(log_ctx, "failed to load template", exc, {"name": name})
                raise
        else:
            artifact = view.artifact

        try:
            artifact.execute(view.entry_point, data, stream)
        except Exception as exc:
            log.error_ctx(log_ctx, "render template failed", exc, {
                "name": view.path, "layout": view.layout,
            })
            raise

        log.debug_ctx(log_ctx, "execute template", {
            "name": view.path,
            "dur": str(timedelta(seconds=time.perf_counter() - start)),
            "layout": view.layout,
        })

    def render_to_string(self, name: str, data: Any = None, ctx: RequestContext | None = None) -> str:
        """Render view *name* and return the output."""
        buf = io.StringIO()
        self.render(buf, name, data, ctx)
        return buf.getvalue()

    def render_to_response(
        self,
        ctx: RequestContext,
        status_code: int,
        name: str,
        data: Any = None,
    ) -> None:
        """Render view *name* and send it as the response body.

        Nothing is written through *ctx* here when rendering fails; the
        error propagates.
        """
        body = self.render_to_string(name, data, ctx)
        ctx.write_body(status_code, body.encode("utf-8"))
