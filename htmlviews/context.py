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

"""The slice of a web framework's request/response API the renderer uses."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any


class RequestContext(ABC):
    """Per-request handle passed to :meth:`ViewRenderer.render`.

    Implementations wrap a framework request; see
    :class:`htmlviews.web.StarletteContext`.
    """

    @abstractmethod
    def context(self) -> Mapping[str, Any]:
        """Return fields that correlate log messages with this request."""

    @abstractmethod
    def write_no_content(self, status_code: int) -> None:
        """Send an empty response with *status_code*."""

    @abstractmethod
    def write_body(self, status_code: int, body: bytes) -> None:
        """Send *body* as an HTML response with *status_code*."""
