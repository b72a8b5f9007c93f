"""
Configuration settings for the Animation Property Finder.
This file contains all configurable args for the finder and its MCP server.
"""

import os
from dataclasses import dataclass, field
from typing import Tuple


@dataclass
class FinderConfig:
    """Main configuration class for the finder."""

    # Unity project settings
    unity_project_path: str = field(default_factory=lambda: os.environ.get("UNITY_PROJECT_PATH", "."))
    search_roots: Tuple[str, ...] = ("Assets", "Packages")
    clip_type_filter: str = "AnimationClip"
    clip_extension: str = ".anim"

    # Network settings
    unity_host: str = "127.0.0.1"
    unity_port_start: int = 8100
    unity_port_end: int = 8105

    # Connection settings
    send_timeout: float = 120.0  # large clip libraries take a while on the editor side
    ping_timeout: float = 3.0
    port_failure_timeout: float = 60.0  # cool-down before a failed port is retried

    # Logging settings
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    logger_name: str = "animation-property-finder"

    # Search settings
    max_results: int = 1000


# Create a global config instance
config = FinderConfig()
