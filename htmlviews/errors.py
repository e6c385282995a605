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

"""Exceptions raised by htmlviews.

Registration errors (:class:`PatternSyntaxError`, :class:`NoMatchError`,
:class:`TemplateParseError`) surface from the ``add*`` calls and, in
auto-reload mode, from ``render``.  :class:`ViewNotFoundError` is raised per
request.  Errors raised while executing a template are Jinja2's own and are
not wrapped.
"""

from __future__ import annotations


class ViewError(Exception):
    """Base class for all htmlviews errors."""


class ConfigurationError(ViewError):
    """Renderer used without a required option, or given an unknown one."""


class PatternSyntaxError(ViewError):
    """A glob pattern is malformed."""

    def __init__(self, pattern: str, reason: str = "syntax error in pattern") -> None:
        self.pattern = pattern
        super().__init__(f"{reason}: {pattern!r}")


class NoMatchError(ViewError):
    """A glob pattern matched no files."""

    def __init__(self, pattern: str) -> None:
        self.pattern = pattern
        super().__init__(f"pattern matches no files: `{pattern}`")


class TemplateParseError(ViewError):
    """A template source file failed to parse.

    The underlying :class:`jinja2.TemplateSyntaxError` is chained as
    ``__cause__``.
    """

    def __init__(self, filename: str, message: str, lineno: int | None = None) -> None:
        self.filename = filename
        self.lineno = lineno
        where = f"{filename}:{lineno}" if lineno else filename
        super().__init__(f"failed to parse template {where}: {message}")


class ViewNotFoundError(ViewError, LookupError):
    """No view is registered under the requested name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"template not found: {name}")
