"""Shared fixtures: in-memory clips and temporary Unity projects."""

from pathlib import Path
from textwrap import dedent

import pytest

from animation_property_finder.models import Binding, Clip
from animation_property_finder.sources import InMemoryAssetSource

ANIM_HEADER = """\
%YAML 1.1
%TAG !u! tag:unity3d.com,2011:
--- !u!74 &7400000
"""

META_TEMPLATE = """\
fileFormatVersion: 2
guid: {guid}
NativeFormatImporter:
  externalObjects: {{}}
  mainObjectFileID: 7400000
  userData:
  assetBundleName:
  assetBundleVariant:
"""

RUNTIME_CLIP = ANIM_HEADER + dedent("""\
    AnimationClip:
      m_ObjectHideFlags: 0
      m_CorrespondingSourceObject: {fileID: 0}
      m_Name: Walk
      serializedVersion: 7
      m_Legacy: 0
      m_RotationCurves: []
      m_CompressedRotationCurves: []
      m_EulerCurves: []
      m_PositionCurves:
      - curve:
          serializedVersion: 2
          m_Curve:
          - serializedVersion: 3
            time: 0
            value: {x: 0, y: 1, z: 0}
            inSlope: {x: 0, y: 0, z: 0}
            outSlope: {x: 0, y: 0, z: 0}
          m_PreInfinity: 2
          m_PostInfinity: 2
        path: Root/Arm
      m_ScaleCurves: []
      m_FloatCurves:
      - curve:
          serializedVersion: 2
          m_Curve: []
        attribute: material._UDIMDiscardRow0_1
        path: Body
        classID: 137
        script: {fileID: 0}
      m_PPtrCurves: []
      m_SampleRate: 60
      m_EditorCurves: []
      m_EulerEditorCurves: []
    """)

EDITOR_CLIP = ANIM_HEADER + dedent("""\
    AnimationClip:
      m_ObjectHideFlags: 0
      m_Name: Idle
      m_RotationCurves:
      - curve:
          serializedVersion: 2
          m_Curve: []
        path: Root/Leg
      m_PositionCurves: []
      m_FloatCurves: []
      m_EditorCurves:
      - curve:
          serializedVersion: 2
          m_Curve: []
        attribute: m_LocalRotation.y
        path: Root/Leg
        classID: 4
        script: {fileID: 0}
      - curve:
          serializedVersion: 2
          m_Curve: []
        attribute: blendShape.Smile
        path:
        classID: 137
        script: {fileID: 0}
      m_EulerEditorCurves:
      - curve:
          serializedVersion: 2
          m_Curve: []
        attribute: localEulerAnglesRaw.y
        path: Root/Leg
        classID: 4
        script: {fileID: 0}
    """)

CONTROLLER_ONLY = ANIM_HEADER.replace("74 &7400000", "91 &9100000") + dedent("""\
    AnimatorController:
      m_Name: NotAClip
    """)


def binding_clip(name, bindings, folder="Assets"):
    return Clip(
        asset_path=f"{folder}/{name}.anim",
        name=name,
        bindings=tuple(Binding(path, prop) for path, prop in bindings),
    )


@pytest.fixture
def walk_idle_source():
    """The Walk / Idle pair of clips."""
    return InMemoryAssetSource([
        binding_clip("Walk", [("Root/Arm", "m_LocalPosition.x")]),
        binding_clip("Idle", [("Root/Leg", "m_LocalRotation.y")]),
    ])


class UnityProject:
    """A Unity project folder on disk."""

    def __init__(self, root: Path):
        self.root = root

    def write_asset(self, relative_path: str, text: str, guid: str = None) -> Path:
        file_path = self.root / relative_path
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(text, encoding="utf-8")
        if guid is not None:
            file_path.with_name(file_path.name + ".meta").write_text(META_TEMPLATE.format(guid=guid), encoding="utf-8")
        return file_path


@pytest.fixture
def unity_project(tmp_path):
    """Create a temporary Unity project with a few clip files."""
    project = UnityProject(tmp_path / "Project")
    write_asset = project.write_asset

    write_asset("Assets/Animations/Walk.anim", RUNTIME_CLIP, guid="0a1b2c3d4e5f60718293a4b5c6d7e8f9")
    write_asset("Assets/Animations/Idle.anim", EDITOR_CLIP, guid="1111e111111111111111111111111111")
    write_asset("Assets/Animations/Broken.anim", "AnimationClip: [unclosed\n", guid="22222222222222222222222222222222")
    write_asset("Assets/Controllers/Locomotion.anim", CONTROLLER_ONLY)
    write_asset("Packages/com.example.emotes/Wave.anim", RUNTIME_CLIP.replace("m_Name: Walk", "m_Name: Wave"))
    write_asset("Assets/Animations/readme.txt", "not a clip")

    return project
