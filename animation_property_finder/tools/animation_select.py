"""
Locate a found animation clip in the Unity Editor's Project window.
"""
from typing import Annotated, Any, Dict, Literal

from pydantic import Field
from mcp.server.fastmcp import FastMCP, Context

from .call_up import error_response, send_to_unity


def register_animation_select_tools(mcp: FastMCP):
    @mcp.tool("animation_property_select")
    def animation_property_select(
        ctx: Context,
        asset_path: Annotated[str, Field(
            title="Asset path",
            description="Asset path of the clip, as returned in the asset_path field of animation_property_find results",
            examples=["Assets/Animations/Walk.anim"]
        )],
        action: Annotated[Literal["ping", "select"], Field(
            title="Action",
            description="ping: highlight the clip in the Project window, select: make it the active selection"
        )] = "ping"
    ) -> Dict[str, Any]:
        """Ping or select an animation clip found by animation_property_find in the Unity Editor."""
        if not asset_path:
            return error_response("asset_path is required")
        return send_to_unity("project_operate", {"action": action, "path": asset_path})
