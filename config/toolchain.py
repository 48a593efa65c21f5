"""Toolchain requirements and release sources for the ESP toolchain check.

Everything the check compares against lives here as plain dataclasses, so
tests can build their own configuration instead of patching globals.
"""

import os
from dataclasses import dataclass, field

from mcp_tools.exceptions import ConfigurationError
from tools.probe import SemanticVersion

TOKEN_ENV_VAR = "GITHUB_TOKEN"

# Chips using the Xtensa architecture need the esp-rs fork of the compiler
XTENSA_CHIPS = ("esp32", "esp32s2", "esp32s3")
RISCV_CHIPS = ("esp32c2", "esp32c3", "esp32c6", "esp32h2")
SUPPORTED_CHIPS = XTENSA_CHIPS + RISCV_CHIPS

DEFAULT_CHIP = "esp32"


@dataclass(frozen=True)
class ToolRequirement:
    """A local tool and the minimum version it must report.

    Attributes:
        name: Display name used in the report (e.g. "Rust").
        command: Executable to run.
        args: Leading arguments placed before --version (e.g. a toolchain selector).
        minimum: Minimum required version.
    """

    name: str
    command: str
    minimum: SemanticVersion
    args: tuple[str, ...] = ()


@dataclass(frozen=True)
class ReleaseSource:
    """A remote "latest release" endpoint.

    Attributes:
        name: Display name used in the report.
        url: GitHub API URL of the latest release resource.
    """

    name: str
    url: str


RELEASE_SOURCES = (
    ReleaseSource("Xtensa Rust", "https://api.github.com/repos/esp-rs/rust-build/releases/latest"),
    ReleaseSource("STABLE Rust", "https://api.github.com/repos/rust-lang/rust/releases/latest"),
    ReleaseSource("espflash", "https://api.github.com/repos/esp-rs/espflash/releases/latest"),
    ReleaseSource("probe-rs", "https://api.github.com/repos/probe-rs/probe-rs/releases/latest"),
    ReleaseSource("esp_hal", "https://api.github.com/repos/esp-rs/esp-hal/releases/latest"),
)


@dataclass
class CheckConfig:
    """Complete configuration of one toolchain check run.

    Attributes:
        chip: Target chip the toolchain is checked for.
        requirements: Local tools to probe, in report order.
        sources: Release endpoints to query, in report order.
        github_token: Bearer token for the GitHub API, None to query anonymously.
        probe_timeout: Seconds to wait for each local tool.
        http_timeout: Seconds to wait for each API request.
    """

    chip: str = DEFAULT_CHIP
    requirements: list[ToolRequirement] = field(default_factory=list)
    sources: list[ReleaseSource] = field(default_factory=lambda: list(RELEASE_SOURCES))
    github_token: str | None = None
    probe_timeout: float = 30.0
    http_timeout: float = 10.0


def toolchain_selector(chip: str) -> str:
    """Return the rustup toolchain selector used to build for a chip.

    Args:
        chip: Target chip name (e.g. "esp32c3").

    Returns:
        "+esp" for Xtensa chips, "+stable" for RISC-V chips.

    Raises:
        ConfigurationError: If the chip is not supported.
    """
    if chip not in SUPPORTED_CHIPS:
        raise ConfigurationError(
            f"Unsupported chip '{chip}'",
            details=f"expected one of: {', '.join(SUPPORTED_CHIPS)}",
        )
    return "+esp" if chip in XTENSA_CHIPS else "+stable"


def default_requirements(chip: str) -> list[ToolRequirement]:
    """Build the list of required tools for a chip."""
    return [
        ToolRequirement("Rust", "cargo", SemanticVersion(1, 84, 0), (toolchain_selector(chip),)),
        ToolRequirement("espflash", "espflash", SemanticVersion(3, 3, 0)),
        ToolRequirement("probe-rs", "probe-rs", SemanticVersion(0, 25, 0)),
    ]


def token_from_env() -> str | None:
    """Read the GitHub token from the environment.

    A variable that is set but empty still counts as present.
    """
    return os.environ.get(TOKEN_ENV_VAR)


def get_default_config(
    chip: str = DEFAULT_CHIP,
    github_token: str | None = None,
    use_env_token: bool = True,
) -> CheckConfig:
    """Get the default check configuration for a chip.

    Args:
        chip: Target chip name.
        github_token: Explicit token; overrides the environment.
        use_env_token: Fall back to GITHUB_TOKEN when no token is given.

    Returns:
        CheckConfig instance.

    Raises:
        ConfigurationError: If the chip is not supported.
    """
    if github_token is None and use_env_token:
        github_token = token_from_env()

    return CheckConfig(
        chip=chip,
        requirements=default_requirements(chip),
        github_token=github_token,
    )
