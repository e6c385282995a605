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

"""View registry: name -> view, plus the shared template functions.

Views are keyed by the base name of their page file (``pages/index.html``
is registered as ``index.html``).  Registering a second page with the same
base name replaces the first.

Recompiling a view builds a complete new :class:`CompiledView` before the
view's reference is swapped, so a concurrent render uses either the old or
the new artifact.  Recompiles of the same view are serialised.
"""

from __future__ import annotations

import posixpath
import threading
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from htmlviews.compiler import CompiledView, compile_view
from htmlviews.errors import ConfigurationError, ViewNotFoundError
from htmlviews.logsink import LogSink, NullLogSink
from htmlviews.sources import TemplateSource


@dataclass(eq=False)
class View:
    """A named page, its optional layout and includes, and its artifact."""

    path: str
    layout: str = ""
    includes: str = ""
    name: str = field(init=False)
    _artifact: CompiledView | None = field(default=None, init=False, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    def __post_init__(self) -> None:
        self.name = posixpath.basename(self.path)

    @property
    def entry_point(self) -> str:
        """Template name executed on render: the layout if any, else the page."""
        if self.layout:
            return posixpath.basename(self.layout)
        return self.name

    @property
    def artifact(self) -> CompiledView | None:
        return self._artifact


class ViewRegistry:
    """Holds registered views and the configuration they compile against."""

    def __init__(
        self,
        source: TemplateSource | None = None,
        *,
        auto_reload: bool = False,
        functions: Mapping[str, Callable[..., Any]] | None = None,
        log: LogSink | None = None,
    ) -> None:
        self.source = source
        self.auto_reload = auto_reload
        self.functions: dict[str, Callable[..., Any]] = dict(functions or {})
        self.log: LogSink = log or NullLogSink()
        self._views: dict[str, View] = {}
        self._lock = threading.Lock()

    def __contains__(self, name: object) -> bool:
        return name in self._views

    def __len__(self) -> int:
        return len(self._views)

    def names(self) -> list[str]:
        """Return the registered view names, sorted."""
        return sorted(self._views)

    def lookup(self, name: str) -> View:
        """Return the view registered as *name*.

        Raises :class:`ViewNotFoundError` if there is none.
        """
        view = self._views.get(name)
        if view is None:
            raise ViewNotFoundError(name)
        return view

    def require_source(self) -> TemplateSource:
        if self.source is None:
            raise ConfigurationError("No template source configured")
        return self.source

    def compile(self, view: View) -> CompiledView:
        """Compile *view*, swap in the new artifact and (re)register it.

        On failure the view keeps its previous artifact and the registry is
        left unchanged.
        """
        source = self.require_source()
        with view._lock:
            artifact = compile_view(view, source, self.functions, self.log)
            view._artifact = artifact
        with self._lock:
            self._views[view.name] = view
        return artifact
