"""
MCP Server for Skylight.

Exposes a Skylight household (calendar, chores, lists, task box, rewards,
meals, photos) to AI assistants over stdio.
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncIterator

from mcp.server.fastmcp import FastMCP

from .client import SkylightClient
from .config import load_settings
from .errors import ConfigurationError, SkylightError
from .logging import configure_logging
from .tools.calendar import register_calendar_tools
from .tools.chores import register_chore_tools
from .tools.family import register_family_tools
from .tools.lists import register_list_tools
from .tools.meals import register_meal_tools
from .tools.misc import register_misc_tools
from .tools.photos import register_photo_tools
from .tools.rewards import register_reward_tools
from .tools.tasks import register_task_tools

logger = logging.getLogger(__name__)

SERVER_NAME = "skylight_mcp"


def build_server(client: SkylightClient) -> FastMCP:
    """Create the MCP server with every tool bound to ``client``."""

    @asynccontextmanager
    async def lifespan(server: FastMCP) -> AsyncIterator[None]:
        try:
            await client.initialize()
        except SkylightError as e:
            # tools log in again on first use; a bad password surfaces there too
            logger.error("Initial Skylight login failed: %s", e.message)
        try:
            yield
        finally:
            await client.aclose()

    mcp = FastMCP(SERVER_NAME, lifespan=lifespan)

    register_calendar_tools(mcp, client)
    register_chore_tools(mcp, client)
    register_list_tools(mcp, client)
    register_task_tools(mcp, client)
    register_reward_tools(mcp, client)
    register_meal_tools(mcp, client)
    register_family_tools(mcp, client)
    register_photo_tools(mcp, client)
    register_misc_tools(mcp, client)

    return mcp


# ─── Entry Point ─────────────────────────────────────────────────────────────


def main() -> None:
    try:
        settings = load_settings()
    except ConfigurationError as e:
        print(e.message, file=sys.stderr)
        sys.exit(1)

    configure_logging(settings.log_level)
    logger.info(
        "Starting Skylight MCP server (frame %s, %s auth)",
        settings.frame_id,
        settings.auth_mode.value,
    )

    mcp = build_server(SkylightClient(settings))
    mcp.run()


if __name__ == "__main__":
    main()
