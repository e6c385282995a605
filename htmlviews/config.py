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

"""Renderer options.

Environment variables read by :meth:`RendererOptions.from_env`:

* ``HTMLVIEWS_TEMPLATE_DIR`` — directory to load templates from
* ``HTMLVIEWS_AUTO_RELOAD`` — ``1``/``true``/``yes``/``on`` to recompile
  views on every render
"""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from htmlviews.logsink import LogSink
from htmlviews.sources import DirectorySource, TemplateSource

ENV_TEMPLATE_DIR = "HTMLVIEWS_TEMPLATE_DIR"
ENV_AUTO_RELOAD = "HTMLVIEWS_AUTO_RELOAD"

_TRUTHY = {"1", "true", "yes", "on"}

# Names accepted by ViewRenderer.configure()
OPTION_NAMES = frozenset({"source", "auto_reload", "functions", "log"})


@dataclass(frozen=True)
class RendererOptions:
    """Configuration for a :class:`~htmlviews.renderer.ViewRenderer`."""

    source: TemplateSource | None = None
    auto_reload: bool = False
    functions: Mapping[str, Callable[..., Any]] = field(default_factory=dict)
    log: LogSink | None = None

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        **overrides: Any,
    ) -> RendererOptions:
        """Build options from environment variables.

        Keyword *overrides* take precedence over the environment.
        """
        environ = os.environ if environ is None else environ
        values: dict[str, Any] = {}

        template_dir = environ.get(ENV_TEMPLATE_DIR)
        if template_dir:
            values["source"] = DirectorySource(template_dir)

        auto_reload = environ.get(ENV_AUTO_RELOAD)
        if auto_reload is not None:
            values["auto_reload"] = auto_reload.strip().lower() in _TRUTHY

        values.update(overrides)
        return cls(**values)

    def as_dict(self) -> dict[str, Any]:
        return {
            "source": self.source,
            "auto_reload": self.auto_reload,
            "functions": self.functions,
            "log": self.log,
        }
