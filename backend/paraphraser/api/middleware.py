from typing import Any, Dict, List, Optional

from fastapi.responses import JSONResponse
from starlette.datastructures import MutableHeaders
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from paraphraser.config import MAX_BODY_BYTES

BODY_TOO_LARGE = "Request body too large"

# helmet's defaults that still apply to a JSON API
SECURITY_HEADERS: Dict[str, str] = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "X-DNS-Prefetch-Control": "off",
    "X-Download-Options": "noopen",
    "X-Permitted-Cross-Domain-Policies": "none",
    "X-XSS-Protection": "0",
}


def _content_length(scope: Scope) -> Optional[int]:
    for k, v in scope.get("headers") or []:
        if k.lower() == b"content-length":
            try:
                return int(v.decode("latin-1"))
            except ValueError:
                return None
    return None


class BodySizeLimitMiddleware:
    """
    Answer 413 for bodies over max_body_bytes.

    A declared Content-Length is checked up front. Bodies without one
    are buffered up to the limit and replayed to the app.
    """

    def __init__(self, app: ASGIApp, *, max_body_bytes: int = MAX_BODY_BYTES) -> None:
        self.app = app
        self.max_body_bytes = max(0, max_body_bytes)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        declared = _content_length(scope)
        if declared is not None:
            if declared > self.max_body_bytes:
                await self._reject(scope, receive, send)
                return
            await self.app(scope, receive, send)
            return

        buffered: List[Message] = []
        size = 0
        while True:
            message = await receive()
            buffered.append(message)
            if message.get("type") != "http.request":
                break
            size += len(message.get("body") or b"")
            if size > self.max_body_bytes:
                await self._reject(scope, receive, send)
                return
            if not message.get("more_body"):
                break

        async def replay() -> Message:
            if buffered:
                return buffered.pop(0)
            return await receive()

        await self.app(scope, replay, send)

    async def _reject(self, scope: Scope, receive: Receive, send: Send) -> None:
        response = JSONResponse(status_code=413, content={"error": BODY_TOO_LARGE})
        await response(scope, receive, send)


class SecurityHeadersMiddleware:
    def __init__(self, app: ASGIApp, *, headers: Optional[Dict[str, str]] = None) -> None:
        self.app = app
        self.headers = dict(SECURITY_HEADERS if headers is None else headers)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        async def send_wrapped(message: Message) -> None:
            if message.get("type") == "http.response.start":
                response_headers = MutableHeaders(scope=message)
                for name, value in self.headers.items():
                    response_headers.setdefault(name, value)
            await send(message)

        await self.app(scope, receive, send_wrapped)


def install_server_guards(app: Any, max_body_bytes: int = MAX_BODY_BYTES) -> None:
    """
    Body size cap, wrapped by the security headers so 413 answers
    carry them too.
    """
    app.add_middleware(BodySizeLimitMiddleware, max_body_bytes=max_body_bytes)
    app.add_middleware(SecurityHeadersMiddleware)
