"""
CORS origin handling for the admin API

Allowed origins come from the comma-separated CLIENT_URL setting. Besides
exact matches the list may contain ``*``, and ``*.example.com`` /
``.example.com`` subdomain patterns; ``*.nip.io`` hosts are always allowed.
"""

import logging
from typing import List, Optional, Sequence

from starlette.middleware.cors import CORSMiddleware
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Receive, Scope, Send

from app.core.config import LOCAL_DEV_URL
from app.schemas import ErrorResponse

logger = logging.getLogger(__name__)

ALLOWED_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
ALLOWED_HEADERS = ["Content-Type", "Authorization", "X-Requested-With"]


def normalize_origin(origin: Optional[str]) -> Optional[str]:
    if origin and origin.endswith("/"):
        return origin[:-1]
    return origin


def parse_allowed_origins(raw: Optional[str]) -> List[str]:
    """Split CLIENT_URL into normalized origins, always keeping the dev server."""
    origins = [
        normalize_origin(part.strip())
        for part in (raw or "").split(",")
        if part.strip()
    ]
    if LOCAL_DEV_URL not in origins:
        origins.append(LOCAL_DEV_URL)
    return origins


def is_origin_allowed(origin: Optional[str], allowed: Sequence[str]) -> bool:
    """
    Decide whether a browser origin may call the API.

    Requests without an Origin header (curl, server-to-server) are allowed.
    """
    if not origin:
        return True

    incoming = normalize_origin(origin)
    if incoming in allowed or "*" in allowed:
        return True
    if incoming.endswith(".nip.io"):
        return True

    for pattern in allowed:
        if pattern.startswith("*.") and incoming.endswith(pattern[1:]):
            return True
        if pattern.startswith(".") and incoming.endswith(pattern):
            return True
    return False


class OriginPredicateCORSMiddleware(CORSMiddleware):
    """
    Starlette CORS middleware driven by :func:`is_origin_allowed`.

    Requests from a blocked origin get a 403 JSON response instead of
    reaching the application.
    """

    def __init__(self, app: ASGIApp, allowed_origins: Sequence[str]) -> None:
        super().__init__(
            app,
            allow_origins=[],
            allow_methods=ALLOWED_METHODS,
            allow_headers=ALLOWED_HEADERS,
            allow_credentials=True,
        )
        self.allowed_origins = list(allowed_origins)

    def is_allowed_origin(self, origin: str) -> bool:
        return is_origin_allowed(origin, self.allowed_origins)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http":
            origin = None
            for key, value in scope.get("headers", []):
                if key == b"origin":
                    origin = value.decode("latin-1")
                    break
            if origin is not None and not self.is_allowed_origin(origin):
                logger.warning(f"CORS blocked origin: {origin}")
                response = JSONResponse(
                    status_code=403,
                    content=ErrorResponse(message=f"Not allowed by CORS: {origin}").model_dump(),
                )
                await response(scope, receive, send)
                return
        await super().__call__(scope, receive, send)
