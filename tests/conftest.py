"""
Pytest configuration for ESP toolchain check tests.

This file provides shared configuration and fixtures for all test modules.
"""

import json
import subprocess
from collections.abc import Callable

import httpx
import pytest

from observability import reset
from observability.logger import ToolcheckLogger

# ============================================================================
# Pytest Configuration
# ============================================================================


def pytest_configure(config):
    """
    Configure custom pytest markers.

    This function is called by pytest at the start of the test session
    to register custom markers used in the test suite.
    """
    markers = [
        ("network", "marks tests that query the real GitHub API"),
        ("toolchain", "marks tests that require cargo, espflash and probe-rs installed"),
    ]
    for marker, description in markers:
        config.addinivalue_line("markers", f"{marker}: {description}")


# ============================================================================
# Fixtures
# ============================================================================

XTENSA_RUST_URL = "https://api.github.com/repos/esp-rs/rust-build/releases/latest"
STABLE_RUST_URL = "https://api.github.com/repos/rust-lang/rust/releases/latest"
ESPFLASH_URL = "https://api.github.com/repos/esp-rs/espflash/releases/latest"
PROBE_RS_URL = "https://api.github.com/repos/probe-rs/probe-rs/releases/latest"
ESP_HAL_URL = "https://api.github.com/repos/esp-rs/esp-hal/releases/latest"

LATEST_TAGS = {
    XTENSA_RUST_URL: "v1.84.0.0",
    STABLE_RUST_URL: "1.84.1",
    ESPFLASH_URL: "v3.3.0",
    PROBE_RS_URL: "v0.26.0",
    ESP_HAL_URL: "v0.23.1",
}

RATE_LIMIT_BODY = json.dumps(
    {
        "message": "API rate limit exceeded for 203.0.113.7.",
        "documentation_url": "https://docs.github.com/rest/overview/resources-in-the-rest-api#rate-limiting",
    }
)


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset cached loggers before and after each test."""
    reset()
    yield
    reset()


@pytest.fixture(autouse=True)
def no_github_token(monkeypatch):
    """Run every test without a GitHub token unless it sets one."""
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)


@pytest.fixture
def test_logger() -> ToolcheckLogger:
    """Logger without console output; records still reach caplog."""
    return ToolcheckLogger("esp_toolcheck_test", console_enabled=False)


def json_release(tag: str, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, text=json.dumps({"tag_name": tag, "name": tag}))


@pytest.fixture
def release_transport() -> Callable[..., httpx.MockTransport]:
    """Build a MockTransport answering GitHub release URLs.

    The returned factory accepts a url -> httpx.Response mapping; URLs not in
    the mapping get a release from LATEST_TAGS. Every request is appended to
    the factory's `requests` list.
    """
    requests: list[httpx.Request] = []

    def factory(responses: dict[str, httpx.Response] | None = None) -> httpx.MockTransport:
        responses = responses or {}

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            url = str(request.url)
            if url in responses:
                return responses[url]
            if url in LATEST_TAGS:
                return json_release(LATEST_TAGS[url])
            return httpx.Response(404, text=json.dumps({"message": "Not Found"}))

        return httpx.MockTransport(handler)

    factory.requests = requests
    return factory


@pytest.fixture
def fake_tools(monkeypatch):
    """Replace subprocess.run with canned `--version` output.

    Returns a dict mapping command name to stdout text (str, or bytes for
    raw output), an exception instance to raise, or a (returncode, stdout)
    tuple. Output reaches the caller as bytes, like capture_output.
    Unlisted commands raise FileNotFoundError. Executed command lines are recorded in
    fake_tools["__calls__"].
    """
    outputs: dict = {"__calls__": []}

    def fake_run(cmd, **kwargs):
        outputs["__calls__"].append(list(cmd))
        output = outputs.get(cmd[0])
        if output is None:
            raise FileNotFoundError(2, "No such file or directory", cmd[0])
        if isinstance(output, BaseException):
            raise output
        returncode, stdout = output if isinstance(output, tuple) else (0, output)
        if isinstance(stdout, str):
            stdout = stdout.encode("utf-8")
        return subprocess.CompletedProcess(cmd, returncode, stdout=stdout, stderr=b"")

    monkeypatch.setattr(subprocess, "run", fake_run)
    return outputs
