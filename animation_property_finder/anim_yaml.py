"""
Unity YAML reader for animation clip assets.

Unity serialises ``.anim`` files as multi-document YAML with ``!u!<classID>``
tags. Every scalar is read as a string so paths like ``yes`` or ``0`` stay
verbatim.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

import yaml

from .config import config
from .models import Binding

logger = logging.getLogger(config.logger_name)

UNITY_TAG_PREFIX = "tag:unity3d.com,2011:"
ANIMATION_CLIP_CLASS = "AnimationClip"

# Curves the editor reports directly, attribute names included.
EDITOR_CURVE_KEYS = ("m_EditorCurves", "m_EulerEditorCurves")

# Transform curves stored without attribute names, with the components they expand to.
TRANSFORM_CURVE_KEYS: Tuple[Tuple[str, str, str], ...] = (
    ("m_PositionCurves", "m_LocalPosition", "xyz"),
    ("m_RotationCurves", "m_LocalRotation", "xyzw"),
    ("m_EulerCurves", "localEulerAnglesRaw", "xyz"),
    ("m_ScaleCurves", "m_LocalScale", "xyz"),
)

FLOAT_CURVE_KEY = "m_FloatCurves"

_BaseLoader = getattr(yaml, "CBaseLoader", yaml.BaseLoader)


class UnityLoader(_BaseLoader):
    """Loader that accepts Unity's ``!u!`` object tags."""


def _construct_unity_object(loader, tag_suffix, node):
    if isinstance(node, yaml.MappingNode):
        return loader.construct_mapping(node, deep=True)
    if isinstance(node, yaml.SequenceNode):
        return loader.construct_sequence(node, deep=True)
    return loader.construct_scalar(node)


UnityLoader.add_multi_constructor(UNITY_TAG_PREFIX, _construct_unity_object)


def load_documents(text: str) -> List[Dict[str, Any]]:
    """Parse every object document of a Unity YAML file."""
    return [doc for doc in yaml.load_all(text, Loader=UnityLoader) if isinstance(doc, dict)]


def find_object(documents: Iterable[Dict[str, Any]], class_name: str) -> Optional[Dict[str, Any]]:
    for doc in documents:
        body = doc.get(class_name)
        if isinstance(body, dict):
            return body
    return None


def _curves(clip: Dict[str, Any], key: str) -> List[Dict[str, Any]]:
    curves = clip.get(key)
    if not isinstance(curves, list):
        return []
    return [curve for curve in curves if isinstance(curve, dict)]


def _curve_path(curve: Dict[str, Any]) -> str:
    return curve.get("path") or ""


def extract_bindings(clip: Dict[str, Any]) -> List[Binding]:
    """Curve bindings of an ``AnimationClip`` body, in file order, without duplicates."""
    bindings: List[Binding] = []

    editor_curves = [curve for key in EDITOR_CURVE_KEYS for curve in _curves(clip, key)]
    if editor_curves:
        for curve in editor_curves:
            bindings.append(Binding(_curve_path(curve), curve.get("attribute") or ""))
    else:
        for key, prefix, components in TRANSFORM_CURVE_KEYS:
            for curve in _curves(clip, key):
                path = _curve_path(curve)
                bindings.extend(Binding(path, f"{prefix}.{axis}") for axis in components)
        for curve in _curves(clip, FLOAT_CURVE_KEY):
            bindings.append(Binding(_curve_path(curve), curve.get("attribute") or ""))

    seen = set()
    unique = []
    for binding in bindings:
        if binding in seen:
            continue
        seen.add(binding)
        unique.append(binding)
    return unique


def parse_clip(text: str) -> Optional[Tuple[str, List[Binding]]]:
    """Return ``(clip name, bindings)`` for ``.anim`` text, or None if there is no clip in it."""
    clip = find_object(load_documents(text), ANIMATION_CLIP_CLASS)
    if clip is None:
        return None
    return clip.get("m_Name") or "", extract_bindings(clip)


def read_meta_guid(text: str) -> Optional[str]:
    """GUID recorded in a ``.meta`` file."""
    try:
        documents = load_documents(text)
    except yaml.YAMLError as e:
        logger.debug(f"Unreadable meta file: {e}")
        return None
    for doc in documents:
        guid = doc.get("guid")
        if guid:
            return guid
    return None
