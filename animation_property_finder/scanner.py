"""
Binding scanner and the search session built on top of it.

The scan walks every animation clip an asset source lists, keeps the
bindings whose object path contains the object name (case-sensitive) and
whose property name satisfies the compiled property query. Results keep
clip order, then binding order.
"""

import logging
import threading
from typing import Callable, List, Optional

from .config import config
from .errors import MissingInputError, SearchCancelled, UnresolvableAssetError
from .matcher import compile_property_query
from .models import Clip, Result, ScanReport
from .sources import AssetSource

logger = logging.getLogger(config.logger_name)

ProgressSink = Callable[[int, int], None]

PROPERTY_PRESETS: List[str] = [
    "None",
    "_UDIMDiscardRow0_*",
    "_UDIMDiscardRow*",
    "*",  # Wildcard
]


class CancellationToken:
    """Cooperative cancel flag, polled by the scanner between clips."""

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    def is_set(self) -> bool:
        return self._event.is_set()

    def reset(self) -> None:
        self._event.clear()


def results_status(count: int) -> str:
    return f"Results: {count}"


def _load(source: AssetSource, asset_id: str) -> Clip:
    path = source.resolve_path(asset_id)
    if not path:
        raise UnresolvableAssetError(asset_id, "no asset path")
    clip = source.load_clip(path)
    if clip is None:
        raise UnresolvableAssetError(path, "not an animation clip or missing")
    return clip


def scan(
    object_name: str,
    property_query: str,
    source: AssetSource,
    cancel=None,
    progress: Optional[ProgressSink] = None,
) -> ScanReport:
    """Find every binding of every clip matching the object name and property query."""
    report = ScanReport()

    if not object_name or not property_query:
        error = MissingInputError("Please enter both Object Name and Property names.")
        logger.warning(str(error))
        report.status = error.status
        return report

    matcher = compile_property_query(property_query)
    asset_ids = source.list_assets_by_type(config.clip_type_filter)
    report.total_clips = len(asset_ids)
    logger.debug(f"Scanning {report.total_clips} clips for {object_name!r} / {matcher!r}")

    try:
        _scan_clips(object_name, matcher, source, asset_ids, report, cancel, progress)
    except SearchCancelled as e:
        logger.info(str(e))
        report.cancelled = True
        report.status = f"Cancelled: {report.match_count} results"
    else:
        if progress is not None:
            progress(report.total_clips, report.total_clips)
        report.status = results_status(report.match_count)

    logger.info(f"Search complete. Found {report.match_count} matches.")
    return report


def _scan_clips(object_name, matcher, source, asset_ids, report, cancel, progress):
    for index, asset_id in enumerate(asset_ids):
        if cancel is not None and cancel.is_set():
            raise SearchCancelled("Search cancelled by user.")

        if progress is not None:
            progress(index, report.total_clips)

        try:
            clip = _load(source, asset_id)
        except UnresolvableAssetError as e:
            logger.debug(f"Skipping clip: {e}")
            report.skipped_clips += 1
            continue

        report.scanned_clips += 1
        clip_has_match = False
        for binding in clip.bindings:
            # Path filter is case-sensitive, the property matcher is not
            if object_name not in binding.path:
                continue
            if matcher.matches(binding.property_name):
                report.results.append(Result.from_binding(clip, binding))
                clip_has_match = True

        if not clip_has_match:
            source.unload_clip(clip)


class PropertyFinder:
    """Search session: the query form, the result list and the status line."""

    def __init__(self, source: AssetSource):
        self.source = source
        self.object_name = ""
        self.property_name = ""
        self.selected_object: Optional[str] = None
        self.results: List[Result] = []
        self.status = ""
        self.last_report: Optional[ScanReport] = None

    def select_object(self, name: Optional[str]) -> None:
        """Select an object in the hierarchy; its name becomes the object name."""
        self.selected_object = name
        if name:
            self.object_name = name

    def apply_preset(self, preset: str) -> None:
        if preset not in PROPERTY_PRESETS:
            raise ValueError(f"Unknown property preset: {preset!r}. Expected one of {PROPERTY_PRESETS}")
        if preset != PROPERTY_PRESETS[0]:
            self.property_name = preset

    def search(
        self,
        object_name: Optional[str] = None,
        property_name: Optional[str] = None,
        cancel=None,
        progress: Optional[ProgressSink] = None,
    ) -> ScanReport:
        if object_name is not None:
            self.object_name = object_name
        if property_name is not None:
            self.property_name = property_name

        self.results.clear()
        if not self.object_name and self.selected_object:
            self.object_name = self.selected_object

        report = scan(self.object_name, self.property_name, self.source, cancel=cancel, progress=progress)
        self.results.extend(report.results)
        self.status = report.status
        self.last_report = report
        return report

    def find(self, asset_path: str) -> List[Result]:
        """Rows of the current result list that came from ``asset_path``."""
        return [result for result in self.results if result.asset_path == asset_path]
