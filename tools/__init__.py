"""ESP toolchain check tools module.

Exports the local version probe and the GitHub release fetcher.
"""

from .probe import SemanticVersion, VersionProbe, extract_version_token, parse_version
from .releases import ReleaseFetcher, ReleaseInfo, build_headers, clean_tag

__all__ = [
    "SemanticVersion",
    "VersionProbe",
    "extract_version_token",
    "parse_version",
    "ReleaseFetcher",
    "ReleaseInfo",
    "build_headers",
    "clean_tag",
]
