"""
MCP server over HTTP (no SDK) for CFBD college basketball data.
Implements:
  - initialize
  - tools/list
  - tools/call for the 7 get_basketball_* tools
  - ping, notifications/*

Run:
  python -m servers.cbb_mcp_server.server_http
  uvicorn servers.cbb_mcp_server.server_http:app --port 8080
"""

import logging
import secrets
import threading
import time
from contextlib import asynccontextmanager
from typing import Any, Optional

import requests
import uvicorn
from fastapi import FastAPI, Request, Response
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError

from core.rpc_logger import logRPC
from core.settings import Settings, loadSettings
from .cbb_api import CbbApiClient
from .config import (
    ERR_INTERNAL,
    ERR_INVALID_PARAMS,
    ERR_NOT_FOUND,
    ERR_UNAUTHORIZED,
    PROTOCOL_VERSION,
    SERVER_NAME,
    SERVER_VERSION,
    SERVICE_TITLE,
)
from .tools import TOOLS, ToolRegistry, UnknownToolError

logger = logging.getLogger(__name__)


class RpcReq(BaseModel):
    jsonrpc: str = "2.0"
    id: Optional[Any] = None
    method: str
    params: Optional[dict[str, Any]] = None


def result(id_, payload):
    return {"jsonrpc": "2.0", "id": id_, "result": payload}

def error(id_, code, msg):
    return {"jsonrpc": "2.0", "id": id_, "error": {"code": code, "message": msg}}


def getCapabilities() -> dict[str, Any]:
    """Return minimal MCP capabilities (tools only)."""
    return {
        "protocolVersion": PROTOCOL_VERSION,
        "capabilities": {"tools": {}},
        "serverInfo": {"name": SERVER_NAME, "version": SERVER_VERSION},
    }


def describeErrors(e: ValidationError) -> str:
    """Compact one-line rendering of pydantic errors for JSON-RPC messages."""
    return "; ".join(
        f"{'.'.join(str(p) for p in err['loc']) or 'arguments'}: {err['msg']}"
        for err in e.errors()
    )


# ---------------------------
# JSON-RPC dispatcher
# ---------------------------
class McpDispatcher:
    """
    Routes one JSON-RPC body to an envelope.

    route() never raises: protocol problems come back as JSON-RPC errors with
    the HTTP status to send, tool-level problems as regular tool results.
    """

    def __init__(self, settings: Settings, registry: ToolRegistry):
        self.settings = settings
        self.registry = registry

    def authorized(self, authorization: Optional[str]) -> bool:
        if not self.settings.mcpApiKey:
            return True
        expected = f"Bearer {self.settings.mcpApiKey}"
        return secrets.compare_digest((authorization or "").encode(), expected.encode())

    def handle(self, body: Any, authorization: Optional[str] = None) -> tuple[int, Optional[dict]]:
        """Return (http status, envelope); envelope is None for notifications."""
        logRPC("recv", body, self.settings.logRpcDir)
        status, envelope = self.route(body, authorization)
        if envelope is not None:
            logRPC("send", envelope, self.settings.logRpcDir)
        return status, envelope

    def route(self, body: Any, authorization: Optional[str]) -> tuple[int, Optional[dict]]:
        rawId = body.get("id") if isinstance(body, dict) else None

        if not self.authorized(authorization):
            logger.warning("  Unauthorized request")
            return 401, error(rawId, ERR_UNAUTHORIZED, "Unauthorized")

        try:
            req = RpcReq.model_validate(body)
            mid = req.id
            logger.info("  Method: %s", req.method)

            if req.method.startswith("notifications/") and mid is None:
                return 202, None

            if req.method == "initialize":
                return 200, result(mid, getCapabilities())

            if req.method == "ping":
                return 200, result(mid, {})

            if req.method == "tools/list":
                return 200, result(mid, self.registry.listTools())

            if req.method == "tools/call":
                p = req.params or {}
                name = p.get("name")
                try:
                    return 200, result(mid, self.registry.callTool(name, p.get("arguments")))
                except UnknownToolError:
                    return 200, error(mid, ERR_NOT_FOUND, f"Unknown tool: {name}")
                except ValidationError as e:
                    return 200, error(mid, ERR_INVALID_PARAMS, f"Invalid params: {describeErrors(e)}")

            return 200, error(mid, ERR_NOT_FOUND, f"Unknown method: {req.method}")
        except Exception as e:
            logger.exception("MCP error")
            return 500, error(rawId, ERR_INTERNAL, str(e))


# ---------------------------
# Keep-alive pinger
# ---------------------------
class KeepAlive:
    """
    Background thread that GETs our own /health every `intervalSec` seconds.
    Ping failures are ignored; intervalSec <= 0 disables it.
    """

    def __init__(self, url: str, intervalSec: int):
        self.url = url
        self.intervalSec = intervalSec
        self.startedAt = time.monotonic()
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def start(self) -> None:
        if self.intervalSec <= 0 or self._thread:
            return
        self._thread = threading.Thread(target=self.loop, name="keepalive", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._stop.set()
        if self._thread:
            self._thread.join(timeout=2)
            self._thread = None

    def loop(self) -> None:
        while not self._stop.wait(self.intervalSec):
            self.pingOnce()

    def pingOnce(self) -> None:
        try:
            requests.get(self.url, timeout=5)
        except requests.RequestException:
            pass
        logger.debug("Alive: %ds", int(time.monotonic() - self.startedAt))


# ---------------------------
# FastAPI app
# ---------------------------
def createApp(settings: Settings, registry: Optional[ToolRegistry] = None) -> FastAPI:
    """Wire settings -> upstream client -> registry -> dispatcher -> routes."""
    registry = registry or ToolRegistry(CbbApiClient(settings))
    dispatcher = McpDispatcher(settings, registry)
    keepAlive = KeepAlive(f"http://127.0.0.1:{settings.port}/health", settings.keepaliveSec)

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        keepAlive.start()
        yield
        keepAlive.stop()

    app = FastAPI(title=SERVICE_TITLE, version=SERVER_VERSION, lifespan=lifespan)

    @app.get("/health")
    def health():
        return {"status": "healthy"}

    @app.get("/")
    def root():
        return {"service": SERVICE_TITLE, "status": "running", "tools": len(TOOLS), "sport": "basketball"}

    @app.post("/mcp")
    async def mcp(request: Request):
        logger.info("POST /mcp")
        try:
            body = await request.json()
        except ValueError:
            body = None
        status, envelope = await run_in_threadpool(
            dispatcher.handle, body, request.headers.get("authorization")
        )
        if envelope is None:
            return Response(status_code=status)
        return JSONResponse(envelope, status_code=status)

    @app.api_route("/mcp", methods=["GET", "HEAD", "OPTIONS", "PUT", "PATCH", "DELETE"])
    def probe(request: Request):
        logger.info("%s /mcp", request.method)
        return {"service": "Basketball MCP Server", "status": "ready"}

    return app


settings = loadSettings()
app = createApp(settings)


def main() -> None:
    logging.basicConfig(
        level=settings.logLevel,
        format="[%(asctime)s] %(levelname)-8s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logger.info("%s on port %s", SERVICE_TITLE, settings.port)
    logger.info("Tools available: %d", len(TOOLS))
    logger.info("CFBD Basketball Key: %s", "SET" if settings.cbbdApiKey else "MISSING")
    logger.info("MCP Key: %s", "SET" if settings.mcpApiKey else "NONE")
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.logLevel.lower())


if __name__ == "__main__":
    main()
