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

"""Read-only template file collections with glob lookup.

File names are slash-separated and relative to the collection root
(``pages/index.html``).  Patterns use the shell-style syntax of Go's
``path.Match``, applied to the whole name:

* ``*`` matches any run of characters except ``/``
* ``?`` matches a single character except ``/``
* ``[abc]``, ``[a-z]``, ``[^a-z]`` match a character class
* ``\\`` escapes the following character

A malformed pattern raises :class:`~htmlviews.errors.PatternSyntaxError`
even when no file would match it.
"""

from __future__ import annotations

import logging
import posixpath
import re
from abc import ABC, abstractmethod
from collections.abc import Mapping
from functools import lru_cache
from pathlib import Path

from htmlviews.errors import PatternSyntaxError

logger = logging.getLogger(__name__)


def _class_char(pattern: str, i: int) -> tuple[str, int]:
    """Read one (possibly escaped) character inside a ``[...]`` class."""
    if i >= len(pattern) or pattern[i] in "-]":
        raise PatternSyntaxError(pattern)
    if pattern[i] == "\\":
        if i + 1 >= len(pattern):
            raise PatternSyntaxError(pattern)
        return pattern[i + 1], i + 2
    return pattern[i], i + 1


@lru_cache(maxsize=256)
def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Translate a glob pattern into a compiled regular expression.

    Raises :class:`PatternSyntaxError` for unterminated or empty classes,
    reversed or open-ended ranges, and a trailing backslash.
    """
    out: list[str] = []
    i, n = 0, len(pattern)
    while i < n:
        c = pattern[i]
        if c == "*":
            out.append("[^/]*")
            i += 1
        elif c == "?":
            out.append("[^/]")
            i += 1
        elif c == "\\":
            if i + 1 >= n:
                raise PatternSyntaxError(pattern)
            out.append(re.escape(pattern[i + 1]))
            i += 2
        elif c == "[":
            i += 1
            negate = i < n and pattern[i] == "^"
            if negate:
                i += 1
            items: list[str] = []
            while True:
                if i >= n:
                    raise PatternSyntaxError(pattern)
                if pattern[i] == "]" and items:
                    i += 1
                    break
                lo, i = _class_char(pattern, i)
                hi = lo
                if i < n and pattern[i] == "-":
                    hi, i = _class_char(pattern, i + 1)
                    if hi < lo:
                        raise PatternSyntaxError(pattern)
                items.append(re.escape(lo) if lo == hi else f"{re.escape(lo)}-{re.escape(hi)}")
            body = "".join(items)
            out.append(f"[^/{body}]" if negate else f"[{body}]")
        else:
            out.append(re.escape(c))
            i += 1
    return re.compile("".join(out), re.DOTALL)


def match(pattern: str, name: str) -> bool:
    """Return whether *name* matches the whole of *pattern*."""
    return compile_pattern(pattern).fullmatch(name) is not None


def escape(name: str) -> str:
    """Return a pattern that matches exactly the literal *name*."""
    return re.sub(r"([*?\[\\])", r"\\\1", name)


def _sort_key(name: str) -> list[str]:
    return name.split("/")


class TemplateSource(ABC):
    """A read-only collection of named template files."""

    @abstractmethod
    def names(self) -> list[str]:
        """Return every file name in the collection."""

    @abstractmethod
    def read(self, name: str) -> str:
        """Return the text of *name*.

        Raises :class:`FileNotFoundError` if the file does not exist.
        """

    def glob(self, pattern: str) -> list[str]:
        """Return the names matching *pattern*, sorted per path segment.

        An empty list means no match; a malformed pattern raises
        :class:`PatternSyntaxError`.
        """
        regex = compile_pattern(pattern)
        return sorted(
            (name for name in self.names() if regex.fullmatch(name)),
            key=_sort_key,
        )


class DirectorySource(TemplateSource):
    """Template files under a directory on disk.

    Files are read on every :meth:`read` call; caching is left to the
    compiled views.
    """

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root).expanduser()
        if not self.root.is_dir():
            raise NotADirectoryError(f"Template directory not found: {self.root}")
        logger.debug("Template directory source: %s", self.root)

    def __repr__(self) -> str:
        return f"DirectorySource({str(self.root)!r})"

    def names(self) -> list[str]:
        return [
            path.relative_to(self.root).as_posix()
            for path in self.root.rglob("*")
            if path.is_file()
        ]

    def _resolve(self, name: str) -> Path:
        clean = posixpath.normpath(name)
        if clean.startswith(("/", "../")) or clean == "..":
            raise FileNotFoundError(f"Template outside source root: {name}")
        return self.root / clean

    def read(self, name: str) -> str:
        path = self._resolve(name)
        if not path.is_file():
            raise FileNotFoundError(f"Template not found: {name}")
        return path.read_text(encoding="utf-8")


class MemorySource(TemplateSource):
    """Template files held in a dictionary.

    Useful for tests and embedded templates.  :meth:`write` and
    :meth:`remove` mutate the collection in place.
    """

    def __init__(self, files: Mapping[str, str | bytes] | None = None) -> None:
        self.files: dict[str, str | bytes] = dict(files or {})

    def __repr__(self) -> str:
        return f"MemorySource({sorted(self.files)!r})"

    def names(self) -> list[str]:
        return list(self.files)

    def read(self, name: str) -> str:
        try:
            content = self.files[name]
        except KeyError:
            raise FileNotFoundError(f"Template not found: {name}") from None
        if isinstance(content, bytes):
            return content.decode("utf-8")
        return content

    def write(self, name: str, content: str | bytes) -> None:
        self.files[name] = content

    def remove(self, name: str) -> None:
        self.files.pop(name, None)
