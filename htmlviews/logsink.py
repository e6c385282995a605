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

"""Structured log sinks for the renderer.

The renderer reports each render through a :class:`LogSink` so that host
applications can route messages into whatever logging setup they run.
:class:`StdlibLogSink` forwards to the standard :mod:`logging` module.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

DEFAULT_LOGGER_NAME = "htmlviews"


class LogSink(ABC):
    """Destination for leveled messages with structured fields.

    *ctx* is the correlation mapping returned by
    :meth:`htmlviews.web.RequestContext.context` (or ``None`` outside a
    request).
    """

    @abstractmethod
    def debug(self, msg: str, fields: Mapping[str, Any]) -> None: ...

    @abstractmethod
    def debug_ctx(
        self, ctx: Mapping[str, Any] | None, msg: str, fields: Mapping[str, Any],
    ) -> None: ...

    @abstractmethod
    def error_ctx(
        self,
        ctx: Mapping[str, Any] | None,
        msg: str,
        err: BaseException,
        fields: Mapping[str, Any],
    ) -> None: ...


class NullLogSink(LogSink):
    """Discards everything."""

    def debug(self, msg, fields):
        pass

    def debug_ctx(self, ctx, msg, fields):
        pass

    def error_ctx(self, ctx, msg, err, fields):
        pass


def _format_fields(fields: Mapping[str, Any]) -> str:
    return " ".join(f"{key}={value}" for key, value in fields.items())


class StdlibLogSink(LogSink):
    """Forward messages to a :class:`logging.Logger`.

    Fields are appended to the message as ``key=value`` pairs and also
    attached to the record as ``record.fields`` for structured handlers.
    Correlation fields from *ctx* come first.
    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger if logger is not None else logging.getLogger(DEFAULT_LOGGER_NAME)

    def _log(
        self,
        level: int,
        ctx: Mapping[str, Any] | None,
        msg: str,
        fields: Mapping[str, Any],
        exc_info: BaseException | None = None,
    ) -> None:
        if not self.logger.isEnabledFor(level):
            return
        merged = {**(ctx or {}), **fields}
        if merged:
            self.logger.log(
                level, "%s %s", msg, _format_fields(merged),
                extra={"fields": merged}, exc_info=exc_info,
            )
        else:
            self.logger.log(level, "%s", msg, extra={"fields": merged}, exc_info=exc_info)

    def debug(self, msg: str, fields: Mapping[str, Any]) -> None:
        self._log(logging.DEBUG, None, msg, fields)

    def debug_ctx(
        self, ctx: Mapping[str, Any] | None, msg: str, fields: Mapping[str, Any],
    ) -> None:
        self._log(logging.DEBUG, ctx, msg, fields)

    def error_ctx(
        self,
        ctx: Mapping[str, Any] | None,
        msg: str,
        err: BaseException,
        fields: Mapping[str, Any],
    ) -> None:
        self._log(logging.ERROR, ctx, msg, {**fields, "error": err}, exc_info=err)
