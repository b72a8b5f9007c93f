from contextlib import asynccontextmanager
import logging
from typing import Any, AsyncIterator, Dict

from mcp.server.fastmcp import FastMCP

from .config import config
from .connection import close_unity_connection
from .tools import register_all_tools
from .tools.animation_find import state

# Configure logging using settings from config
logging.basicConfig(
    level=getattr(logging, config.log_level),
    format=config.log_format
)
logger = logging.getLogger(config.logger_name)


@asynccontextmanager
async def server_lifespan(server: FastMCP) -> AsyncIterator[Dict[str, Any]]:
    """Handle server startup and shutdown."""
    logger.info(f"Animation Property Finder starting up, project path: {config.unity_project_path}")
    try:
        yield {"search": state}
    finally:
        # The Unity connection is only opened by editor searches and select calls
        state.cancel_token.cancel()
        close_unity_connection()
        logger.info("Animation Property Finder shut down")


# Initialize MCP server
mcp = FastMCP(
    "animation-property-finder",
    lifespan=server_lifespan
)

# Register all tools
register_all_tools(mcp)


def main():
    mcp.run(transport='stdio')


# Run the server
if __name__ == "__main__":
    main()
