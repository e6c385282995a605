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

"""Compile a view's layout, includes and page into one Jinja2 artifact.

Source files are gathered in the order layout, includes, page.  Each file
is registered under its base name, so a page can ``{% include %}`` a
fragment as ``"header.html"`` regardless of the directory it lives in.
When two files share a base name the later one wins.

When the view has a layout, its entry point is a composition of the page
over the layout: the page acts as a child template whose ``{% block %}``
definitions replace the layout's, and any page text outside blocks is
ignored.  Without a layout the page renders standalone.

The artifact holds a snapshot of the sources taken at compile time, so
later edits to the file collection only show up after recompiling.
"""

from __future__ import annotations

import logging
import posixpath
from collections.abc import Callable, Iterable, Mapping
from typing import TYPE_CHECKING, Any, Protocol

from jinja2 import (
    DictLoader,
    Environment,
    StrictUndefined,
    Template,
    TemplateSyntaxError,
)

from htmlviews.errors import NoMatchError, TemplateParseError
from htmlviews.logsink import LogSink, NullLogSink
from htmlviews.sources import TemplateSource, escape

if TYPE_CHECKING:
    from htmlviews.registry import View

logger = logging.getLogger(__name__)


class SupportsWrite(Protocol):
    def write(self, s: str, /) -> Any: ...


def resolve_patterns(source: TemplateSource, patterns: Iterable[str]) -> list[str]:
    """Expand *patterns* against *source*.

    Matches are concatenated in pattern order, then match order within a
    pattern.  Raises :class:`NoMatchError` if any pattern matches nothing
    and :class:`~htmlviews.errors.PatternSyntaxError` if one is malformed.
    """
    filenames: list[str] = []
    for pattern in patterns:
        matches = source.glob(pattern)
        if not matches:
            raise NoMatchError(pattern)
        filenames.extend(matches)
    return filenames


def _as_context(data: Any) -> Mapping[str, Any]:
    if data is None:
        return {}
    if isinstance(data, Mapping):
        return data
    return {"data": data}


class CompiledView:
    """An immutable, executable set of templates for one view.

    Parameters
    ----------
    environment:
        Jinja2 environment whose loader holds the source snapshot.
    entry_points:
        Pre-built templates keyed by the name they execute under.  Names
        not listed here fall back to the environment's templates.
    files:
        Resolved source file names, in compile order.
    """

    def __init__(
        self,
        environment: Environment,
        entry_points: Mapping[str, Template],
        files: list[str],
    ) -> None:
        self.environment = environment
        self._entry_points = dict(entry_points)
        self.files = tuple(files)

    def __repr__(self) -> str:
        return f"CompiledView(entry_points={sorted(self._entry_points)!r}, files={self.files!r})"

    @property
    def entry_points(self) -> list[str]:
        return list(self._entry_points)

    def get_template(self, name: str) -> Template:
        """Return the template executed for *name*.

        Raises :class:`jinja2.TemplateNotFound` for unknown names.
        """
        template = self._entry_points.get(name)
        if template is None:
            template = self.environment.get_template(name)
        return template

    def execute(self, name: str, data: Any, stream: SupportsWrite) -> None:
        """Render template *name* with *data* into *stream*.

        Output is written chunk by chunk; whatever was written before an
        error stays in *stream*.
        """
        template = self.get_template(name)
        for chunk in template.generate(_as_context(data)):
            stream.write(chunk)

    def render(self, name: str, data: Any = None) -> str:
        """Render template *name* to a string."""
        return self.get_template(name).render(_as_context(data))


def _parse(env: Environment, filename: str, key: str) -> Template:
    try:
        return env.get_template(key)
    except TemplateSyntaxError as exc:
        raise TemplateParseError(filename, exc.message or str(exc), exc.lineno) from exc


def compile_view(
    view: View,
    source: TemplateSource,
    functions: Mapping[str, Callable[..., Any]] | None = None,
    log: LogSink | None = None,
) -> CompiledView:
    """Build the executable artifact for *view*.

    Raises :class:`NoMatchError` / :class:`PatternSyntaxError` when a
    pattern cannot be resolved and :class:`TemplateParseError` when a source
    file has a syntax error.  The view itself is not modified.
    """
    log = log or NullLogSink()

    patterns: list[str] = []
    if view.layout:
        patterns.append(view.layout)
    if view.includes:
        patterns.append(view.includes)
    # the page is one concrete file, not a pattern
    patterns.append(escape(view.path))

    log.debug("new template", {
        "templateName": view.name,
        "layoutName": view.entry_point if view.layout else "",
        "includes": view.includes,
        "patterns": patterns,
    })

    filenames = resolve_patterns(source, patterns)

    # base name -> (file, source); later files replace earlier ones
    snapshot: dict[str, tuple[str, str]] = {}
    for filename in filenames:
        snapshot[posixpath.basename(filename)] = (filename, source.read(filename))

    env = Environment(
        loader=DictLoader({key: text for key, (_, text) in snapshot.items()}),
        autoescape=True,
        keep_trailing_newline=True,
        undefined=StrictUndefined,
        auto_reload=False,
    )
    # copied so later changes to the caller's mapping don't leak in
    env.globals.update(dict(functions or {}))

    for key, (filename, _) in snapshot.items():
        _parse(env, filename, key)

    entry_points: dict[str, Template] = {}
    if view.layout:
        page_file, page_source = snapshot[view.name]
        try:
            composed = env.from_string(f"{{% extends {view.entry_point!r} %}}{page_source}")
        except TemplateSyntaxError as exc:
            raise TemplateParseError(page_file, exc.message or str(exc), exc.lineno) from exc
        entry_points[view.entry_point] = composed
    else:
        entry_points[view.name] = env.get_template(view.name)

    logger.debug("Compiled view %s from %d file(s)", view.name, len(filenames))
    return CompiledView(env, entry_points, filenames)
