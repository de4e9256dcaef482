"""Security headers middleware for a JSON-only API. Raw ASGI."""

from typing import Any, Callable

API_SECURITY_HEADERS: dict[str, str] = {
    "Content-Security-Policy": "default-src 'none'; frame-ancestors 'none'",
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
    "Cache-Control": "no-store",
}


class SecurityHeadersMiddleware:
    """Add API_SECURITY_HEADERS to every HTTP response unless already set by the route."""

    def __init__(self, app: Callable, headers: dict[str, str] | None = None) -> None:
        self.app = app
        source = API_SECURITY_HEADERS if headers is None else headers
        self.headers = [(k.lower().encode(), v.encode()) for k, v in source.items()]

    async def __call__(self, scope: dict[str, Any], receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        async def send_with_headers(message: dict[str, Any]) -> None:
            if message["type"] == "http.response.start":
                existing = list(message.get("headers", []))
                present = {name.lower() for name, _ in existing}
                existing.extend(h for h in self.headers if h[0] not in present)
                message["headers"] = existing
            await send(message)

        await self.app(scope, receive, send_with_headers)
