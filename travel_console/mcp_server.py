#!/usr/bin/env python3
"""
Travel Console server.

Exposes the command console two ways on one FastMCP app:
- MCP tools `travel_command(command=...)` and `travel_query(query=...)`
- REST endpoints `POST /api/command` and `POST /api/query` for the web client

Port: 8890 (configurable via TRAVEL_CONSOLE_MCP_PORT)
Transport: SSE
"""

import asyncio
import logging
import os
import sys

from fastmcp import FastMCP
from starlette.requests import Request
from starlette.responses import JSONResponse

from travel_console import TravelConsole

logger = logging.getLogger("travel-console.server")

# Configuration
MCP_ENABLED = os.getenv("TRAVEL_CONSOLE_MCP_ENABLED", "false").lower() == "true"
MCP_PORT = int(os.getenv("TRAVEL_CONSOLE_MCP_PORT", "8890"))
MCP_HOST = os.getenv("TRAVEL_CONSOLE_MCP_HOST", "0.0.0.0")
DEFAULT_USER = os.getenv("TRAVEL_CONSOLE_DEFAULT_USER", "local")

COMMAND_PATH = "/api/command"
QUERY_PATH = "/api/query"

mcp = FastMCP(name="travel-console")

console = TravelConsole()


def _user_id(request: Request) -> str:
    # Authentication is handled upstream; the caller is identified by header.
    return request.headers.get("x-user-id") or DEFAULT_USER


async def _read_field(request: Request, field: str):
    """Return (value, error_response) for a required non-blank string field."""
    try:
        body = await request.json()
    except ValueError:
        return None, JSONResponse({"message": "Expected JSON body."}, status_code=400)

    value = body.get(field) if isinstance(body, dict) else None
    if not isinstance(value, str) or not value.strip():
        return None, JSONResponse({"message": f"Missing '{field}'."}, status_code=400)
    return value, None


@mcp.custom_route(COMMAND_PATH, methods=["POST"])
async def api_command(request: Request) -> JSONResponse:
    command, error = await _read_field(request, "command")
    if error is not None:
        return error

    try:
        result = await console.process_command(command, _user_id(request))
    except Exception as e:
        logger.error(f"Error processing command: {e}", exc_info=True)
        return JSONResponse({"message": "Failed to process command"}, status_code=500)
    return JSONResponse(result.to_wire())


@mcp.custom_route(QUERY_PATH, methods=["POST"])
async def api_query(request: Request) -> JSONResponse:
    query, error = await _read_field(request, "query")
    if error is not None:
        return error

    try:
        result = await console.process_query(query, _user_id(request))
    except Exception as e:
        logger.error(f"Error processing query: {e}", exc_info=True)
        return JSONResponse({"message": "Failed to process query"}, status_code=500)
    return JSONResponse(result.to_wire())


@mcp.tool()
async def travel_command(command: str, user_id: str = "") -> str:
    """
    Record something from a plain-English sentence.

    Args:
        command: What to record.
        user_id: Whose records to write (defaults to the configured user).

    Examples:
        - "add person Rajesh, phone 9876543210, met in Delhi"
        - "expense 250 for food"
        - "water 500ml"
        - "had dosa for breakfast"
        - "journal: sunset at the fort today"

    Returns:
        A one-line confirmation, or example syntax if the command was not understood.
    """
    logger.info(f"Tool called: travel_command(command='{command[:80]}')")
    result = await console.process_command(command, user_id or DEFAULT_USER)
    return result.message


@mcp.tool()
async def travel_query(query: str, user_id: str = "") -> str:
    """
    Answer a plain-English question about stored contacts, expenses, journal entries or pins.

    Examples:
        - "show me people in Pune"
        - "list today's expenses on food"
        - "journal entries about trekking"
        - "which places have I visited"
    """
    logger.info(f"Tool called: travel_query(query='{query[:80]}')")
    result = await console.process_query(query, user_id or DEFAULT_USER)
    if not result.data:
        return result.response
    return f"{result.response}\n\n({len(result.data)} matching record(s))"


def main():
    """Run the server over SSE when TRAVEL_CONSOLE_MCP_ENABLED is true."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if not MCP_ENABLED:
        logger.warning("Server disabled; set TRAVEL_CONSOLE_MCP_ENABLED=true to serve it")
        sys.exit(0)

    tools = sorted(asyncio.run(mcp.get_tools()))
    logger.info(f"Serving {mcp.name} on {MCP_HOST}:{MCP_PORT} (sse)")
    logger.info(f"MCP tools: {', '.join(tools)}")
    logger.info(f"REST routes: POST {COMMAND_PATH}, POST {QUERY_PATH}")

    try:
        mcp.run(transport="sse", host=MCP_HOST, port=MCP_PORT)
    except KeyboardInterrupt:
        logger.info("Server stopped")


if __name__ == "__main__":
    main()
