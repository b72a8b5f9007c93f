"""
Data types shared by the scanner, the asset sources and the MCP tools.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple


@dataclass(frozen=True)
class Binding:
    """An animated (object path, property name) pair of a clip."""
    path: str
    property_name: str


@dataclass(frozen=True)
class Clip:
    """An animation clip asset and its curve bindings."""
    asset_path: str
    name: str
    bindings: Tuple[Binding, ...] = ()


@dataclass(frozen=True)
class Result:
    """One matching binding together with the clip it was found in."""
    asset_path: str
    clip_name: str
    binding_path: str
    property_name: str

    @classmethod
    def from_binding(cls, clip: Clip, binding: Binding) -> "Result":
        return cls(clip.asset_path, clip.name, binding.path, binding.property_name)

    def to_dict(self) -> Dict[str, str]:
        return {
            "asset_path": self.asset_path,
            "clip_name": self.clip_name,
            "binding_path": self.binding_path,
            "property_name": self.property_name,
        }


@dataclass
class ScanReport:
    """Outcome of a single scan."""
    results: List[Result] = field(default_factory=list)
    total_clips: int = 0
    scanned_clips: int = 0
    skipped_clips: int = 0
    cancelled: bool = False
    status: str = ""

    @property
    def match_count(self) -> int:
        return len(self.results)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status,
            "match_count": self.match_count,
            "total_clips": self.total_clips,
            "scanned_clips": self.scanned_clips,
            "skipped_clips": self.skipped_clips,
            "cancelled": self.cancelled,
            "results": [result.to_dict() for result in self.results],
        }
