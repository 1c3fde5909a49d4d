"""
stdio transport: a single MCP session over the process's stdin/stdout.

This is how desktop hosts launch the server. Any failure while starting or
serving is logged and ends the process with exit status 1; the host is
expected to restart it.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from typing import Dict, List, Optional

import mcp.types as types
from mcp.server import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.stdio import stdio_server
from mcp.shared.exceptions import McpError
from pydantic import AnyUrl

from solafon_mcp import SERVER_NAME, __version__, catalog, prompts, resources
from solafon_mcp.config import default_config
from solafon_mcp.logging_setup import configure_logging
from solafon_mcp.solafon_api import SolafonApiClient, default_client

logger = logging.getLogger(__name__)


def _invalid_params(message: str) -> McpError:
    return McpError(types.ErrorData(code=types.INVALID_PARAMS, message=message))


def create_server(client: SolafonApiClient = default_client) -> Server:
    """Build an MCP server exposing the tool, prompt and resource catalogs."""
    server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def handle_list_tools() -> List[types.Tool]:
        return [types.Tool.model_validate(tool) for tool in catalog.list_tools()]

    async def handle_call_tool(req: types.CallToolRequest) -> types.ServerResult:
        # Registered directly so argument errors reach the host as JSON-RPC
        # errors instead of being folded into an isError tool result.
        name = req.params.name
        try:
            envelope = await catalog.call_tool(name, req.params.arguments or {}, client=client)
        except catalog.ToolError as exc:
            raise _invalid_params(str(exc)) from exc
        return types.ServerResult(types.CallToolResult.model_validate(envelope))

    server.request_handlers[types.CallToolRequest] = handle_call_tool

    @server.list_prompts()
    async def handle_list_prompts() -> List[types.Prompt]:
        return [types.Prompt.model_validate(prompt) for prompt in prompts.list_prompts()]

    @server.get_prompt()
    async def handle_get_prompt(name: str, arguments: Optional[Dict[str, str]]) -> types.GetPromptResult:
        try:
            result = prompts.get_prompt(name)
        except prompts.PromptNotFoundError as exc:
            raise _invalid_params(str(exc)) from exc
        return types.GetPromptResult.model_validate(result)

    @server.list_resources()
    async def handle_list_resources() -> List[types.Resource]:
        return [types.Resource.model_validate(resource) for resource in resources.list_resources()]

    @server.read_resource()
    async def handle_read_resource(uri: AnyUrl) -> List[ReadResourceContents]:
        try:
            resource = resources.get_resource(str(uri))
        except resources.ResourceNotFoundError as exc:
            raise _invalid_params(str(exc)) from exc
        return [ReadResourceContents(content=resource.text, mime_type=resource.mime_type)]

    return server


async def serve(client: SolafonApiClient = default_client) -> None:
    server = create_server(client)
    try:
        async with stdio_server() as (read_stream, write_stream):
            await server.run(read_stream, write_stream, server.create_initialization_options())
    finally:
        await client.aclose()


def main() -> None:
    configure_logging(default_config)
    logger.info(
        "starting %s MCP server base_url=%s bot_token=%s",
        SERVER_NAME,
        default_config.base_url,
        "set" if default_config.bot_token else "unset",
    )
    try:
        asyncio.run(serve())
    except KeyboardInterrupt:
        logger.info("interrupted, shutting down")
    except Exception:
        logger.exception("Solafon MCP server error")
        sys.exit(1)


if __name__ == "__main__":
    main()
