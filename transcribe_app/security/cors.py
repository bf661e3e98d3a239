from __future__ import annotations
from typing import Awaitable, Callable, Dict, FrozenSet, Optional

from fastapi import Request, Response

ALLOW_HEADERS = "Content-Type, Authorization, Accept"

def resolve_allow_origin(origin: Optional[str], allowed: FrozenSet[str]) -> str:
    """Echo an allow-listed origin; anything else (including no origin) gets '*'."""
    if origin and origin in allowed:
        return origin
    return "*"

def cors_headers(origin: Optional[str], allowed: FrozenSet[str], methods: str) -> Dict[str, str]:
    return {
        "Access-Control-Allow-Origin": resolve_allow_origin(origin, allowed),
        "Access-Control-Allow-Methods": methods,
        "Access-Control-Allow-Headers": ALLOW_HEADERS,
        "Access-Control-Allow-Credentials": "true",
    }

class OriginFilter:
    """
    HTTP middleware; the only place CORS headers are decided.
    Runs once per request whose path starts with ``path_prefix``.
    """

    def __init__(self, allowed: FrozenSet[str], methods: str, path_prefix: str = "/api/"):
        self.allowed = frozenset(allowed)
        self.methods = methods
        self.path_prefix = path_prefix

    def applies_to(self, path: str) -> bool:
        return path.startswith(self.path_prefix)

    async def __call__(self, request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
        if not self.applies_to(request.url.path):
            return await call_next(request)
        response = await call_next(request)
        for k, v in cors_headers(request.headers.get("origin"), self.allowed, self.methods).items():
            response.headers[k] = v
        return response
