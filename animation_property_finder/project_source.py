"""
Asset source reading animation clips straight from a Unity project folder.

Asset ids are the GUIDs found in the ``.meta`` files next to each ``.anim``
file, mirroring what the editor's asset database hands out.
"""

import logging
import os
from pathlib import Path
from typing import Dict, Iterable, List, Optional

import yaml

from .anim_yaml import parse_clip, read_meta_guid
from .config import config
from .models import Clip

logger = logging.getLogger(config.logger_name)


class ProjectAssetSource:
    """Scans ``Assets`` and ``Packages`` of a Unity project for clip files."""

    def __init__(self, project_path: str, search_roots: Optional[Iterable[str]] = None):
        self.project_path = Path(project_path)
        self.search_roots = tuple(search_roots) if search_roots is not None else config.search_roots
        self._guid_to_path: Dict[str, str] = {}
        self._cache: Dict[str, Clip] = {}

    def _iter_clip_files(self):
        for root in self.search_roots:
            root_dir = self.project_path / root
            if not root_dir.is_dir():
                continue
            for dirpath, _, files in os.walk(root_dir):
                for name in files:
                    if name.lower().endswith(config.clip_extension):
                        yield Path(dirpath) / name

    def _asset_path(self, file_path: Path) -> str:
        return file_path.relative_to(self.project_path).as_posix()

    def _read_guid(self, file_path: Path) -> Optional[str]:
        meta_path = file_path.with_name(file_path.name + ".meta")
        try:
            text = meta_path.read_text(encoding="utf-8", errors="ignore")
        except OSError:
            return None
        return read_meta_guid(text)

    def list_assets_by_type(self, type_name: str) -> List[str]:
        if type_name != config.clip_type_filter:
            logger.debug(f"Project source only lists {config.clip_type_filter}, not {type_name}")
            return []

        self._guid_to_path.clear()
        asset_ids = []
        for file_path in sorted(self._iter_clip_files(), key=self._asset_path):
            asset_path = self._asset_path(file_path)
            asset_id = self._read_guid(file_path) or asset_path
            if asset_id in self._guid_to_path:
                # Folders copied outside Unity keep their .meta GUIDs
                logger.warning(f"Duplicate GUID {asset_id} for {asset_path} and {self._guid_to_path[asset_id]}")
                asset_id = asset_path
            self._guid_to_path[asset_id] = asset_path
            asset_ids.append(asset_id)

        logger.info(f"Found {len(asset_ids)} animation clips under {self.project_path}")
        return asset_ids

    def resolve_path(self, asset_id: str) -> Optional[str]:
        return self._guid_to_path.get(asset_id)

    def load_clip(self, path: str) -> Optional[Clip]:
        cached = self._cache.get(path)
        if cached is not None:
            return cached

        file_path = self.project_path / path
        try:
            text = file_path.read_text(encoding="utf-8", errors="ignore")
            parsed = parse_clip(text)
        except (OSError, yaml.YAMLError) as e:
            logger.debug(f"Could not read clip {path}: {e}")
            return None
        if parsed is None:
            return None

        name, bindings = parsed
        clip = Clip(asset_path=path, name=name or file_path.stem, bindings=tuple(bindings))
        self._cache[path] = clip
        return clip

    def unload_clip(self, clip: Clip) -> None:
        self._cache.pop(clip.asset_path, None)

    @property
    def loaded_paths(self) -> List[str]:
        return list(self._cache)
