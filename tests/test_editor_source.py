"""Tests for the Unity Editor backed asset source."""

import pytest

from animation_property_finder.editor_source import EditorAssetSource, clip_from_payload
from animation_property_finder.models import Binding
from animation_property_finder.scanner import scan


class FakeBridge:
    """Stands in for UnityConnection, answering from canned data."""

    def __init__(self, assets, clips, failing=(), lost=()):
        self.assets = assets
        self.clips = clips
        self.failing = set(failing)
        self.lost = set(lost)
        self.commands = []

    def send_command_with_retry(self, command_type, cmd=None, max_retries=2):
        self.commands.append((command_type, cmd))
        if command_type == "project_search":
            return {"assets": self.assets}
        if command_type == "animation_clip_bindings":
            path = cmd["path"]
            if path in self.lost:
                raise ConnectionError("Failed to communicate with Unity: timeout")
            if path in self.failing:
                raise RuntimeError(f"Unity error: Could not load {path}")
            return self.clips.get(path)
        raise RuntimeError(f"Unknown command {command_type}")


def make_bridge(**kwargs):
    assets = [
        {"guid": "a1", "path": "Assets/Walk.anim"},
        {"guid": "b2", "path": "Assets/Idle.anim"},
        {"path": "Assets/NoGuid.anim"},
        {"guid": "c3"},
    ]
    clips = {
        "Assets/Walk.anim": {"name": "Walk", "bindings": [
            {"path": "Root/Arm", "propertyName": "m_LocalPosition.x"},
            {"path": "Root/Arm", "propertyName": "m_LocalPosition.y"},
        ]},
        "Assets/Idle.anim": {"name": "Idle", "bindings": [
            {"path": "Root/Leg", "propertyName": "m_LocalRotation.y"},
        ]},
        "Assets/NoGuid.anim": {"bindings": [{"path": "Root/Arm", "propertyName": "m_IsActive"}]},
    }
    return FakeBridge(assets, clips, **kwargs)


class TestEditorAssetSource:
    def test_lists_assets(self):
        bridge = make_bridge()
        source = EditorAssetSource(bridge)
        asset_ids = source.list_assets_by_type("AnimationClip")
        assert asset_ids == ["a1", "b2", "Assets/NoGuid.anim"]
        assert source.resolve_path("b2") == "Assets/Idle.anim"
        command, args = bridge.commands[0]
        assert command == "project_search"
        assert args["search_target"] == "animation"
        assert args["query"] == "t:AnimationClip"

    def test_load_clip(self):
        clip = EditorAssetSource(make_bridge()).load_clip("Assets/Walk.anim")
        assert clip.name == "Walk"
        assert clip.bindings == (
            Binding("Root/Arm", "m_LocalPosition.x"),
            Binding("Root/Arm", "m_LocalPosition.y"),
        )

    def test_name_falls_back_to_file_name(self):
        clip = EditorAssetSource(make_bridge()).load_clip("Assets/NoGuid.anim")
        assert clip.name == "NoGuid"

    def test_missing_clip(self):
        assert EditorAssetSource(make_bridge()).load_clip("Assets/Gone.anim") is None

    def test_unity_error_skips_clip(self):
        source = EditorAssetSource(make_bridge(failing=["Assets/Walk.anim"]))
        report = scan("Root", "*", source)
        assert [r.clip_name for r in report.results] == ["Idle", "NoGuid"]
        assert report.skipped_clips == 1

    def test_lost_editor_stops_scan(self):
        bridge = make_bridge(lost=["Assets/Idle.anim"])
        with pytest.raises(ConnectionError, match="timeout"):
            scan("Root", "*", EditorAssetSource(bridge))
        loaded = [cmd["path"] for command, cmd in bridge.commands if command == "animation_clip_bindings"]
        assert loaded == ["Assets/Walk.anim", "Assets/Idle.anim"]

    def test_scan(self):
        report = scan("Arm", "*position*", EditorAssetSource(make_bridge()))
        assert [(r.clip_name, r.property_name) for r in report.results] == [
            ("Walk", "m_LocalPosition.x"),
            ("Walk", "m_LocalPosition.y"),
        ]

    def test_payload_ignores_junk_entries(self):
        clip = clip_from_payload("Assets/X.anim", {"name": "X", "bindings": ["junk", {"propertyName": "m_IsActive"}]})
        assert clip.bindings == (Binding("", "m_IsActive"),)
