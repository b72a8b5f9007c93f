"""
Animation property search tools: find, presets and cancel.
"""
import logging
import threading
from typing import Annotated, Any, Dict, List, Literal, Optional

import anyio
from pydantic import Field
from mcp.server.fastmcp import FastMCP, Context

from ..config import config
from ..editor_source import EditorAssetSource
from ..models import Result
from ..project_source import ProjectAssetSource
from ..scanner import PROPERTY_PRESETS, CancellationToken, PropertyFinder
from ..sources import AssetSource
from .call_up import error_response

logger = logging.getLogger(config.logger_name)

# Kept equal to PROPERTY_PRESETS
PresetName = Literal["None", "_UDIMDiscardRow0_*", "_UDIMDiscardRow*", "*"]

SORT_KEYS = {
    "clip": lambda result: result.clip_name.lower(),
    "path": lambda result: result.binding_path,
    "property": lambda result: result.property_name,
}


class SearchState:
    """The one search session of this server and its cancel flag."""

    def __init__(self):
        self.finder = PropertyFinder(source=None)
        self.cancel_token = CancellationToken()
        self.lock = threading.Lock()

    @property
    def running(self) -> bool:
        return self.lock.locked()


state = SearchState()


def make_source(source: str, project_path: Optional[str] = None) -> AssetSource:
    if source == "project":
        return ProjectAssetSource(project_path or config.unity_project_path)
    if source == "editor":
        return EditorAssetSource()
    raise ValueError(f"Unknown source: {source!r}")


def sort_results(results: List[Result], sort_by: str) -> List[Result]:
    key = SORT_KEYS.get(sort_by)
    if key is None:
        return list(results)
    return sorted(results, key=key)


def run_search(
    search_state: SearchState,
    source: AssetSource,
    object_name: str = "",
    property_name: str = "",
    preset: str = "None",
    selected_object: Optional[str] = None,
    sort_by: str = "none",
    max_results: int = config.max_results,
    progress=None,
) -> Dict[str, Any]:
    """Run one search on the session and build the tool response."""
    if not search_state.lock.acquire(blocking=False):
        return error_response("A search is already running")
    try:
        search_state.cancel_token.reset()
        finder = search_state.finder
        finder.source = source
        finder.select_object(selected_object)
        finder.property_name = property_name
        try:
            finder.apply_preset(preset)
        except ValueError as e:
            return error_response(str(e))

        try:
            report = finder.search(object_name=object_name, cancel=search_state.cancel_token, progress=progress)
        except ConnectionError as e:
            logger.error(f"Search failed: {e}")
            return error_response(f"Unity connection error: {e}")
        object_name, property_name = finder.object_name, finder.property_name
    finally:
        search_state.lock.release()

    rows = sort_results(report.results, sort_by)
    response = report.to_dict()
    response["results"] = [result.to_dict() for result in rows[:max_results]]
    response["truncated"] = len(rows) > max_results
    response["success"] = not report.status.startswith("Error")
    response["object_name"] = object_name
    response["property_name"] = property_name
    return response


def register_animation_find_tools(mcp: FastMCP):
    @mcp.tool("animation_property_find")
    async def animation_property_find(
        ctx: Context,
        object_name: Annotated[str, Field(
            title="Object name",
            description="Text the animated object's path must contain (case-sensitive). Leave empty to use selected_object",
            examples=["Body", "Root/Arm", "Armature/Hips"]
        )] = "",
        property_name: Annotated[str, Field(
            title="Property name",
            description="Property to look for. Plain text matches anywhere in the property name (case-insensitive); with * it has to match the whole property name",
            examples=["m_LocalPosition", "blendShape.*", "*position*", "_UDIMDiscardRow0_*"]
        )] = "",
        preset: Annotated[PresetName, Field(
            title="Property preset",
            description="Canned property query. Anything but None replaces property_name"
        )] = "None",
        selected_object: Annotated[Optional[str], Field(
            title="Selected object",
            description="Name of the object selected in the hierarchy; its name becomes object_name",
            examples=["Body", "Hips"]
        )] = None,
        source: Annotated[Literal["project", "editor"], Field(
            title="Clip source",
            description="project: read .anim files from the Unity project folder, editor: ask the running Unity Editor"
        )] = "project",
        project_path: Annotated[Optional[str], Field(
            title="Project path",
            description="Unity project folder for the project source, defaults to UNITY_PROJECT_PATH",
            examples=["D:/Projects/MyAvatar", "/home/me/UnityProjects/Game"]
        )] = None,
        sort_by: Annotated[Literal["none", "clip", "path", "property"], Field(
            title="Sort results",
            description="none keeps clip order, then binding order"
        )] = "none",
        max_results: Annotated[int, Field(
            title="Max results",
            description="Limit on returned rows, match_count always holds the full count",
            ge=1,
            le=100000
        )] = config.max_results
    ) -> Dict[str, Any]:
        """Find all animation clips where a property of an object is animated.

        Each result row carries asset_path, clip_name, binding_path and property_name;
        pass asset_path to animation_property_select to locate the clip in the editor.
        """
        try:
            clip_source = make_source(source, project_path)
        except ValueError as e:
            return error_response(str(e))

        def progress(current: int, total: int):
            anyio.from_thread.run(ctx.report_progress, current, total)

        return await anyio.to_thread.run_sync(lambda: run_search(
            state,
            clip_source,
            object_name=object_name,
            property_name=property_name,
            preset=preset,
            selected_object=selected_object,
            sort_by=sort_by,
            max_results=max_results,
            progress=progress,
        ))

    @mcp.tool("animation_property_presets")
    def animation_property_presets(ctx: Context) -> Dict[str, Any]:
        """List the canned property queries accepted by animation_property_find."""
        return {"success": True, "presets": list(PROPERTY_PRESETS)}

    @mcp.tool("animation_property_cancel")
    def animation_property_cancel(ctx: Context) -> Dict[str, Any]:
        """Stop the running animation_property_find after the clip it is scanning."""
        if not state.running:
            return {"success": False, "error": "No search is running"}
        state.cancel_token.cancel()
        return {"success": True, "message": "Cancellation requested"}
