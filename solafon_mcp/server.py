"""FastAPI application exposing the Solafon MCP catalogs over HTTP."""

from __future__ import annotations

import logging
import time
import uuid
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from fastapi import Body, FastAPI, Request
from fastapi.responses import JSONResponse, Response

from solafon_mcp import SERVER_NAME, __version__, catalog, prompts, resources
from solafon_mcp.config import default_config
from solafon_mcp.logging_setup import configure_logging
from solafon_mcp.metrics import default_metrics
from solafon_mcp.solafon_api import SolafonApiError, default_client

logger = logging.getLogger(__name__)
configure_logging(default_config)

HEALTH_STATUS = {"status": "ok"}
APP_VERSION = __version__
MCP_SERVER_NAME = SERVER_NAME
MCP_SERVER_VERSION = __version__

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


@asynccontextmanager
async def lifespan(_app: FastAPI):
    # Startup
    yield
    # Shutdown
    await default_client.aclose()


app = FastAPI(
    title="Solafon MCP Server",
    description="Solafon Bot and Wallet API tool surface for LLM agents.",
    version=APP_VERSION,
    lifespan=lifespan,
)


@app.middleware("http")
async def add_request_context(request: Request, call_next):
    request_id = str(uuid.uuid4())
    request.state.request_id = request_id
    start = time.time()
    default_metrics.incr_request()
    response = await call_next(request)
    duration_ms = (time.time() - start) * 1000
    default_metrics.record_duration(request_id, duration_ms)
    response.headers["X-Request-ID"] = request_id
    return response


@app.get("/health")
async def health() -> JSONResponse:
    """Lightweight health endpoint for monitoring."""
    return JSONResponse(content=HEALTH_STATUS)


@app.get("/metrics")
async def metrics() -> JSONResponse:
    """Return in-process metrics snapshot."""
    return JSONResponse(content=default_metrics.snapshot())


@app.post("/tools/{tool_name}")
async def call_tool_route(
    tool_name: str,
    request: Request,
    arguments: Optional[Dict[str, Any]] = Body(default=None),
) -> JSONResponse:
    """Invoke one tool with the JSON body as its arguments."""
    request_id = getattr(request.state, "request_id", None)
    try:
        envelope = await catalog.call_tool(tool_name, arguments or {})
    except catalog.ToolNotFoundError as exc:
        return JSONResponse(status_code=404, content={"error": str(exc)})
    except catalog.ToolInputError as exc:
        return JSONResponse(status_code=422, content={"error": str(exc)})
    except SolafonApiError as exc:
        logger.warning(
            "tool=%s outcome=unreachable request_id=%s",
            tool_name,
            request_id,
            extra={"tool": tool_name, "request_id": request_id, "error": str(exc)},
        )
        return JSONResponse(status_code=502, content={"error": str(exc)})
    return JSONResponse(content=envelope)


@app.post("/mcp")
async def mcp_gateway(request: Request) -> Response:
    """
    JSON-RPC 2.0 gateway for MCP clients that speak HTTP.

    Supported methods:
      - initialize
      - tools/list, tools/call
      - prompts/list, prompts/get
      - resources/list, resources/read
      - notifications/initialized
    """
    request_id = getattr(request.state, "request_id", None)
    start_time = time.time()

    def _respond(payload: Dict[str, Any], status_code: int = 200, *, outcome: str, method_label: Optional[str] = None, tool_label: Optional[str] = None, error_code: Optional[int] = None) -> JSONResponse:
        duration_ms = (time.time() - start_time) * 1000
        logger.debug(
            "mcp outcome=%s method=%s tool=%s id=%s status=%s duration_ms=%.2f error_code=%s",
            outcome,
            method_label,
            tool_label,
            payload.get("id"),
            status_code,
            duration_ms,
            error_code,
            extra={"request_id": request_id, "tool": tool_label, "error": error_code},
        )
        return JSONResponse(status_code=status_code, content=payload)

    def _error(rpc_id: Any, code: int, message: str, *, status_code: int = 200, method_label: Optional[str] = None, tool_label: Optional[str] = None) -> JSONResponse:
        payload = _jsonrpc_error_payload(rpc_id, code, message)
        return _respond(payload, status_code, outcome="error", method_label=method_label, tool_label=tool_label, error_code=code)

    def _success(rpc_id: Any, result: Any, *, method_label: str, tool_label: Optional[str] = None) -> JSONResponse:
        return _respond(_jsonrpc_success_payload(rpc_id, result), outcome="success", method_label=method_label, tool_label=tool_label)

    try:
        body = await request.json()
    except ValueError:
        return _error(None, PARSE_ERROR, "Parse error", status_code=400)

    if not isinstance(body, dict):
        return _error(None, INVALID_REQUEST, "Invalid request", status_code=400)

    method = body.get("method")
    rpc_id = body.get("id")
    raw_params = body.get("params")
    if raw_params is None:
        params: Dict[str, Any] = {}
    elif isinstance(raw_params, dict):
        params = raw_params
    else:
        return _error(rpc_id, INVALID_PARAMS, "Invalid params", method_label=method)

    if not method or not isinstance(method, str):
        return _error(rpc_id, INVALID_REQUEST, "Invalid request")

    if method == "initialize":
        protocol_version = params.get("protocolVersion")
        if not isinstance(protocol_version, str) or not protocol_version:
            return _error(rpc_id, INVALID_PARAMS, "Invalid params", method_label=method)
        result = {
            "protocolVersion": protocol_version,
            "serverInfo": {"name": MCP_SERVER_NAME, "version": MCP_SERVER_VERSION},
            "capabilities": {
                "tools": {"listChanged": False},
                "prompts": {"listChanged": False},
                "resources": {"subscribe": False, "listChanged": False},
            },
        }
        return _success(rpc_id, result, method_label=method)

    if method in ("notifications/initialized", "initialized"):
        # Notifications should not return a JSON-RPC response body.
        logger.debug("mcp initialized notification received", extra={"request_id": request_id})
        return Response(status_code=204)

    if method == "tools/list":
        return _success(rpc_id, {"tools": catalog.list_tools()}, method_label=method)

    if method == "tools/call":
        tool_name = params.get("name")
        arguments = params.get("arguments")
        if arguments is None:
            arguments = {}
        if not isinstance(tool_name, str) or not tool_name.strip():
            return _error(rpc_id, INVALID_PARAMS, "Invalid params", method_label=method)
        if not isinstance(arguments, dict):
            return _error(rpc_id, INVALID_PARAMS, "Invalid params", method_label=method, tool_label=tool_name)
        try:
            envelope = await catalog.call_tool(tool_name, arguments)
        except catalog.ToolError as exc:
            return _error(rpc_id, INVALID_PARAMS, str(exc), method_label=method, tool_label=tool_name)
        except SolafonApiError as exc:
            return _error(rpc_id, INTERNAL_ERROR, str(exc), method_label=method, tool_label=tool_name)
        return _success(rpc_id, envelope, method_label=method, tool_label=tool_name)

    if method == "prompts/list":
        return _success(rpc_id, {"prompts": prompts.list_prompts()}, method_label=method)

    if method == "prompts/get":
        try:
            result = prompts.get_prompt(str(params.get("name") or ""))
        except prompts.PromptNotFoundError as exc:
            return _error(rpc_id, INVALID_PARAMS, str(exc), method_label=method)
        return _success(rpc_id, result, method_label=method)

    if method == "resources/list":
        return _success(rpc_id, {"resources": resources.list_resources()}, method_label=method)

    if method == "resources/read":
        try:
            result = resources.read_resource(str(params.get("uri") or ""))
        except resources.ResourceNotFoundError as exc:
            return _error(rpc_id, INVALID_PARAMS, str(exc), method_label=method)
        return _success(rpc_id, result, method_label=method)

    return _error(rpc_id, METHOD_NOT_FOUND, "Method not found", method_label=method)


# Run with: uvicorn solafon_mcp.server:app


def _jsonrpc_success_payload(rpc_id: Any, result: Any) -> Dict[str, Any]:
    return {"jsonrpc": "2.0", "id": rpc_id, "result": result}


def _jsonrpc_error_payload(rpc_id: Any, code: int, message: str) -> Dict[str, Any]:
    return {"jsonrpc": "2.0", "id": rpc_id, "error": {"code": code, "message": message}}
