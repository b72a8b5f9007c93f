"""
Animation Property Finder: find the animation clips that animate a property of an object.
"""

from .errors import AnimationFinderError, MissingInputError, SearchCancelled, UnresolvableAssetError
from .matcher import LiteralMatcher, PropertyMatcher, WildcardMatcher, compile_property_query
from .models import Binding, Clip, Result, ScanReport
from .project_source import ProjectAssetSource
from .scanner import PROPERTY_PRESETS, CancellationToken, PropertyFinder, scan
from .sources import AssetSource, InMemoryAssetSource

__all__ = [
    "AnimationFinderError",
    "AssetSource",
    "Binding",
    "CancellationToken",
    "Clip",
    "InMemoryAssetSource",
    "LiteralMatcher",
    "MissingInputError",
    "PROPERTY_PRESETS",
    "ProjectAssetSource",
    "PropertyFinder",
    "PropertyMatcher",
    "Result",
    "ScanReport",
    "SearchCancelled",
    "UnresolvableAssetError",
    "WildcardMatcher",
    "compile_property_query",
    "scan",
]
