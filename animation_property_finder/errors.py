"""
Error types raised while searching animation clips.

None of these escape a scan: the scanner turns them into a status line.
"""


class AnimationFinderError(Exception):
    """Base class for finder errors."""


class MissingInputError(AnimationFinderError, ValueError):
    """Object name or property query was left empty."""

    status = "Error: Missing Input"


class UnresolvableAssetError(AnimationFinderError):
    """A listed clip could not be resolved or loaded."""

    def __init__(self, asset: str, reason: str = ""):
        self.asset = asset
        self.reason = reason
        message = f"Could not load animation clip {asset}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class SearchCancelled(AnimationFinderError):
    """The user asked the running search to stop."""
