"""Request ID middleware: injects X-Request-ID into context for logging.

If the incoming request has an X-Request-ID header it is reused; otherwise a
UUID4 is generated. The value is exposed to log records via RequestIdFilter
and echoed back on the response.
"""

from __future__ import annotations

import uuid

from starlette.datastructures import MutableHeaders
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from app.packages.explorer.core.logger import set_request_id

REQUEST_ID_HEADER = "x-request-id"


class RequestIdMiddleware:
    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        headers = {k.decode("latin-1").lower(): v.decode("latin-1") for k, v in scope.get("headers", [])}
        rid = headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        set_request_id(rid)

        async def send_with_request_id(message: Message) -> None:
            if message["type"] == "http.response.start":
                MutableHeaders(scope=message)[REQUEST_ID_HEADER] = rid
            await send(message)

        # Not reset afterwards: the Exception handler runs in ServerErrorMiddleware,
        # outside this middleware, and still needs the id for its log and header.
        await self.app(scope, receive, send_with_request_id)
