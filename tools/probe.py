"""Version probes for locally installed toolchain binaries.

Runs `<command> [args...] --version` and extracts a three-part version
from the second whitespace-delimited token of the output, e.g.
`espflash 3.3.0` or `cargo 1.84.0 (66221abde 2024-11-19)`.
"""

import re
import subprocess
from dataclasses import dataclass
from typing import Any

from mcp_tools.exceptions import MalformedVersionError

_SEPARATORS = re.compile(r"[.\-+]")
_UNSIGNED = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class SemanticVersion:
    """Three-part version number.

    Attributes:
        major: Major version.
        minor: Minor version.
        patch: Patch version.
    """

    major: int
    minor: int
    patch: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


def parse_version(text: str) -> SemanticVersion:
    """Parse a version string into a SemanticVersion.

    The string is split on '.', '-' and '+'; the first three segments
    must be unsigned integers. Anything after them is ignored, so
    "0.25.0-rc1" parses as 0.25.0.

    Args:
        text: Version string as printed by a tool.

    Returns:
        Parsed SemanticVersion.

    Raises:
        MalformedVersionError: Fewer than three segments, or a segment
            that is not an unsigned integer.
    """
    segments = _SEPARATORS.split(text)
    if len(segments) < 3:
        raise MalformedVersionError(text, details="expected at least three segments")

    numbers = []
    for segment in segments[:3]:
        if not _UNSIGNED.fullmatch(segment):
            raise MalformedVersionError(text, details=f"segment '{segment}' is not a number")
        numbers.append(int(segment))

    return SemanticVersion(*numbers)


def extract_version_token(output: str) -> str | None:
    """Return the second whitespace-delimited token of tool output.

    The first token is the program name banner.
    """
    parts = output.split()
    if len(parts) < 2:
        return None
    return parts[1]


class VersionProbe:
    """Query installed tools for their version.

    A probe never raises: missing binaries, failing commands and
    unparseable output all come back as None.

    Attributes:
        timeout: Seconds to wait for each tool.
        logger: Optional ToolcheckLogger for diagnostics.
    """

    def __init__(self, timeout: float = 30.0, logger: Any = None):
        self.timeout = timeout
        self.logger = logger

    def _debug(self, message: str, **context) -> None:
        if self.logger:
            self.logger.debug(message, **context)

    def _warning(self, message: str, **context) -> None:
        if self.logger:
            self.logger.warning(message, **context)

    def probe(self, command: str, args: tuple[str, ...] | list[str] = ()) -> SemanticVersion | None:
        """Run `<command> [args...] --version` and parse the reported version.

        Args:
            command: Executable name or path.
            args: Leading arguments placed before --version.

        Returns:
            SemanticVersion, or None if the tool is unavailable or its
            output could not be parsed.
        """
        cmd = [command, *args, "--version"]
        cmd_text = " ".join(cmd)

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired:
            self._warning(f"'{cmd_text}' timed out after {self.timeout}s", command=command)
            return None
        except OSError as e:
            self._debug(f"Cannot run '{cmd_text}': {e}", command=command)
            return None

        if result.returncode != 0:
            self._debug(
                f"'{cmd_text}' exited with status {result.returncode}",
                command=command,
                returncode=result.returncode,
            )
            return None

        # stderr is never decoded
        try:
            stdout = result.stdout.decode("utf-8")
        except UnicodeDecodeError:
            self._debug(f"'{cmd_text}' printed non UTF-8 output", command=command)
            return None

        token = extract_version_token(stdout)
        if token is None:
            self._debug(f"'{cmd_text}' printed no version", command=command)
            return None

        try:
            version = parse_version(token)
        except MalformedVersionError as e:
            self._warning(f"Ignoring output of '{cmd_text}': {e}", command=command)
            return None

        self._debug(f"'{cmd_text}' reports {version}", command=command, version=str(version))
        return version
