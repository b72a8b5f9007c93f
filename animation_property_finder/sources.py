"""
Asset sources the scanner enumerates clips from.

A source answers four questions, the same ones the editor's asset database
answers: which assets have a type, where an asset lives, what a clip at a
path contains, and that a clip is no longer needed.
"""

from typing import Dict, Iterable, List, Optional, Protocol, Set

from .models import Binding, Clip


class AssetSource(Protocol):
    def list_assets_by_type(self, type_name: str) -> List[str]:
        ...

    def resolve_path(self, asset_id: str) -> Optional[str]:
        ...

    def load_clip(self, path: str) -> Optional[Clip]:
        ...

    def unload_clip(self, clip: Clip) -> None:
        ...


class InMemoryAssetSource:
    """Asset source over a fixed list of clips; asset ids are the asset paths."""

    def __init__(self, clips: Iterable[Clip] = ()):
        self._clips: Dict[str, Clip] = {}
        self._order: List[str] = []
        self.unloaded: List[str] = []
        self.loaded: Set[str] = set()
        for clip in clips:
            self.add(clip)

    @classmethod
    def from_dict(cls, data: Dict[str, Iterable]) -> "InMemoryAssetSource":
        """Build from ``{clip_name: [(path, property_name), ...]}``."""
        clips = []
        for name, bindings in data.items():
            clips.append(Clip(
                asset_path=f"Assets/{name}.anim",
                name=name,
                bindings=tuple(Binding(path, prop) for path, prop in bindings),
            ))
        return cls(clips)

    def add(self, clip: Clip) -> None:
        if clip.asset_path not in self._clips:
            self._order.append(clip.asset_path)
        self._clips[clip.asset_path] = clip

    def remove(self, asset_path: str) -> None:
        """Drop a clip while keeping it listed, as if it was deleted after enumeration."""
        self._clips.pop(asset_path, None)

    def list_assets_by_type(self, type_name: str) -> List[str]:
        return list(self._order)

    def resolve_path(self, asset_id: str) -> Optional[str]:
        return asset_id

    def load_clip(self, path: str) -> Optional[Clip]:
        clip = self._clips.get(path)
        if clip is not None:
            self.loaded.add(path)
        return clip

    def unload_clip(self, clip: Clip) -> None:
        self.loaded.discard(clip.asset_path)
        self.unloaded.append(clip.asset_path)
