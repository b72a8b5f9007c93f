"""
Asset source backed by a running Unity Editor.

Uses two Unity-side functions of the MCP package:

- ``project_search`` with ``search_target="animation"``, answering
  ``{"assets": [{"guid": ..., "path": ...}, ...]}``
- ``animation_clip_bindings`` with ``{"path": ...}``, answering
  ``{"name": ..., "bindings": [{"path": ..., "propertyName": ...}, ...]}``
"""

import logging
from pathlib import PurePosixPath
from typing import Any, Dict, List, Optional

from .config import config
from .connection import UnityConnection, get_unity_connection
from .models import Binding, Clip

logger = logging.getLogger(config.logger_name)


class EditorAssetSource:
    """Lists and loads clips through the editor's asset database."""

    def __init__(self, bridge: Optional[UnityConnection] = None, max_results: int = 10000):
        self._bridge = bridge
        self.max_results = max_results
        self._guid_to_path: Dict[str, str] = {}

    @property
    def bridge(self) -> UnityConnection:
        if self._bridge is None:
            self._bridge = get_unity_connection()
        return self._bridge

    def list_assets_by_type(self, type_name: str) -> List[str]:
        result = self.bridge.send_command_with_retry("project_search", {
            "search_target": "animation",
            "query": f"t:{type_name}",
            "include_packages": True,
            "max_results": self.max_results,
        })

        self._guid_to_path.clear()
        asset_ids = []
        for asset in (result or {}).get("assets", []):
            path = asset.get("path")
            if not path:
                continue
            asset_id = asset.get("guid") or path
            self._guid_to_path[asset_id] = path
            asset_ids.append(asset_id)

        logger.info(f"Unity Editor listed {len(asset_ids)} animation clips")
        return asset_ids

    def resolve_path(self, asset_id: str) -> Optional[str]:
        return self._guid_to_path.get(asset_id)

    def load_clip(self, path: str) -> Optional[Clip]:
        try:
            result = self.bridge.send_command_with_retry("animation_clip_bindings", {"path": path}, max_retries=1)
        except RuntimeError as e:
            # Unity answered but could not load this asset; a lost editor raises ConnectionError
            logger.debug(f"Could not load clip {path} from Unity: {e}")
            return None
        if not result:
            return None
        return clip_from_payload(path, result)

    def unload_clip(self, clip: Clip) -> None:
        # Clip memory is owned by the editor.
        pass


def clip_from_payload(path: str, payload: Dict[str, Any]) -> Clip:
    bindings = tuple(
        Binding(item.get("path") or "", item.get("propertyName") or "")
        for item in payload.get("bindings", [])
        if isinstance(item, dict)
    )
    return Clip(asset_path=path, name=payload.get("name") or PurePosixPath(path).stem, bindings=bindings)
