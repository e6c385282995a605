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

"""FastAPI / Starlette integration.

Usage::

    from fastapi import FastAPI, Request
    from htmlviews import DirectorySource, ViewRenderer
    from htmlviews.web import render_response

    views = ViewRenderer(DirectorySource("templates"))
    views.add_with_layout("layout.html", "pages/*.html")

    app = FastAPI()

    @app.get("/")
    async def index(request: Request):
        return render_response(views, request, "index.html", {"title": "Home"})
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from fastapi import Request
from fastapi.responses import HTMLResponse, Response

from htmlviews.context import RequestContext
from htmlviews.errors import ViewNotFoundError
from htmlviews.renderer import ViewRenderer

REQUEST_ID_HEADER = "x-request-id"


class StarletteContext(RequestContext):
    """Adapt a Starlette/FastAPI :class:`Request` to :class:`RequestContext`.

    Starlette handlers return responses instead of writing them, so the
    last response "written" is kept in :attr:`response` for the handler to
    return.
    """

    def __init__(self, request: Request) -> None:
        self.request = request
        self.response: Response | None = None

    def context(self) -> Mapping[str, Any]:
        fields: dict[str, Any] = {
            "method": self.request.method,
            "path": self.request.url.path,
        }
        request_id = self.request.headers.get(REQUEST_ID_HEADER)
        if request_id:
            fields["request_id"] = request_id
        return fields

    def write_no_content(self, status_code: int) -> None:
        self.response = Response(status_code=status_code)

    def write_body(self, status_code: int, body: bytes) -> None:
        self.response = HTMLResponse(content=body, status_code=status_code)


def render_response(
    renderer: ViewRenderer,
    request: Request,
    name: str,
    data: Any = None,
    status_code: int = 200,
) -> Response:
    """Render view *name* for *request* and return the HTTP response.

    An unknown view yields the empty 500 response the renderer wrote.
    Compile and template errors propagate to the framework's error
    handling.
    """
    ctx = StarletteContext(request)
    try:
        renderer.render_to_response(ctx, status_code, name, data)
    except ViewNotFoundError:
        if ctx.response is None:
            raise
    return ctx.response
