"""Configuration module for the ESP toolchain check.

This module provides the tool requirements and release sources a check runs against.
"""

from .toolchain import (
    DEFAULT_CHIP,
    RELEASE_SOURCES,
    SUPPORTED_CHIPS,
    TOKEN_ENV_VAR,
    XTENSA_CHIPS,
    CheckConfig,
    ReleaseSource,
    ToolRequirement,
    default_requirements,
    get_default_config,
    token_from_env,
    toolchain_selector,
)

__all__ = [
    "DEFAULT_CHIP",
    "RELEASE_SOURCES",
    "SUPPORTED_CHIPS",
    "TOKEN_ENV_VAR",
    "XTENSA_CHIPS",
    "CheckConfig",
    "ReleaseSource",
    "ToolRequirement",
    "default_requirements",
    "get_default_config",
    "token_from_env",
    "toolchain_selector",
]
