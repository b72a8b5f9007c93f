from .animation_find import register_animation_find_tools
from .animation_select import register_animation_select_tools


def register_all_tools(mcp):
    """Register all animation property finder tools with the MCP server."""
    register_animation_find_tools(mcp)
    register_animation_select_tools(mcp)
