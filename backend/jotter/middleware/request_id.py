"""
Jotter Backend: Request ID Middleware
======================================

What:  Tags every request with a correlation id, echoed in X-Request-ID.
How:   A client-supplied X-Request-ID is reused; otherwise eight hex chars of
       a fresh uuid4. The id lives in a ContextVar for the duration of the
       request so exception handlers and loggers can include it.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

# Coroutine-local: concurrent requests on one event loop each see their own id
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:8]

        reset_token = request_id_var.set(rid)
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(reset_token)

        response.headers[REQUEST_ID_HEADER] = rid
        return response
