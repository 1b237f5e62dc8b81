"""Local stand-in for oapis.org, served by aiohttp's test server."""

from aiohttp import web
from aiohttp.test_utils import TestServer

from slop_mcp.config import ServerConfig


class FakeUpstream:
    """Answers canned responses keyed by request path and records every request"""

    def __init__(self):
        self.responses = {}
        self.requests = []
        self.server = None

    def respond(self, path: str, body, status: int = 200, content_type: str = "application/json") -> None:
        self.responses[path] = (status, body, content_type)

    async def start(self) -> None:
        app = web.Application()
        app.router.add_get("/{tail:.*}", self._handle)
        self.server = TestServer(app)
        await self.server.start_server()

    async def close(self) -> None:
        await self.server.close()

    @property
    def base_url(self) -> str:
        return f"http://{self.server.host}:{self.server.port}"

    def config(self, **overrides) -> ServerConfig:
        return ServerConfig(base_url=self.base_url, **overrides)

    async def _handle(self, request: web.Request) -> web.Response:
        self.requests.append({"path": request.raw_path, "accept": request.headers.get("Accept")})
        status, body, content_type = self.responses.get(
            request.raw_path, (404, "not found", "text/plain")
        )
        if isinstance(body, bytes):
            return web.Response(status=status, body=body, content_type=content_type)
        return web.Response(status=status, text=body, content_type=content_type)


async def unused_base_url() -> str:
    """Base URL of a port nothing listens on"""
    upstream = FakeUpstream()
    await upstream.start()
    base_url = upstream.base_url
    await upstream.close()
    return base_url
