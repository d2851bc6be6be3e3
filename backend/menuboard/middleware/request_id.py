"""
MenuBoard — Request ID Middleware
===================================

What:  Assigns an ID to each incoming request and echoes it in the response.
Why:   Every log line written while serving a request can be correlated,
       and error bodies carry the same ID.
How:   A client-supplied X-Request-ID is reused only if it is a short token
       of letters, digits, '.', '_' or '-'; anything else (including a
       header crafted to inject text into log lines) is replaced by a short
       UUID. The ID is kept in a ContextVar and on request.state.
"""

import re
import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"
MAX_CLIENT_ID_LENGTH = 64

_CLIENT_ID_PATTERN = re.compile(r"[A-Za-z0-9._-]{1,%d}" % MAX_CLIENT_ID_LENGTH)

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def new_request_id() -> str:
    return uuid.uuid4().hex[:8]


def accept_client_id(value: Optional[str]) -> Optional[str]:
    """Return the client's ID if it is safe to log and echo, else None."""
    if value is None:
        return None
    value = value.strip()
    if _CLIENT_ID_PATTERN.fullmatch(value):
        return value
    return None


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Tags each request with a correlation ID for logs and error bodies."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = accept_client_id(request.headers.get(REQUEST_ID_HEADER)) or new_request_id()

        # Left set after the response so the outermost 500 handler can read it
        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)

        response.headers[REQUEST_ID_HEADER] = rid
        return response
