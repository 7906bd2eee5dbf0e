"""
App-wide CORS with per-prefix opt-out.

Routes under an exempt prefix answer CORS themselves (including
preflights), so the middleware passes their requests through untouched.

Dependencies: starlette
System role: Browser cross-origin policy
"""

from starlette.middleware.cors import CORSMiddleware
from starlette.types import ASGIApp, Receive, Scope, Send


class PrefixExemptCORSMiddleware(CORSMiddleware):
    """CORSMiddleware that skips paths starting with one of ``exempt_prefixes``."""

    def __init__(self, app: ASGIApp, exempt_prefixes: tuple[str, ...] = (), **options) -> None:
        super().__init__(app, **options)
        self.exempt_prefixes = tuple(exempt_prefixes)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http" and self._is_exempt(scope["path"]):
            await self.app(scope, receive, send)
            return
        await super().__call__(scope, receive, send)

    def _is_exempt(self, path: str) -> bool:
        return any(
            path == prefix or path.startswith(f"{prefix}/") for prefix in self.exempt_prefixes
        )
