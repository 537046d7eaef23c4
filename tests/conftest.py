"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from fluentbit_monitor.config.manager import ConfigManager
from fluentbit_monitor.config.models import AgentProfile

AGENT_URL = "http://fluentbit:2020"


def pytest_addoption(parser):
    parser.addoption("--agent-url", action="store", default=None)


@pytest.fixture
def live_agent_url(request) -> str:
    url = request.config.getoption("--agent-url")
    if not url:
        pytest.skip("Live agent URL not provided")
    return url


@pytest.fixture
def tmp_config(tmp_path: Path) -> Path:
    """Return a temporary config file path."""
    return tmp_path / "config.toml"


@pytest.fixture
def config_manager(tmp_config: Path) -> ConfigManager:
    """Return a ConfigManager pointed at a temp config file."""
    return ConfigManager(config_path=tmp_config)


@pytest.fixture
def sample_profile() -> AgentProfile:
    """Return a sample agent profile for testing."""
    return AgentProfile(name="test-agent", url="http://localhost:2020")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("FLUENTBIT_MONITOR_URL", raising=False)
    monkeypatch.delenv("FLUENTBIT_MONITOR_PROFILE", raising=False)


@pytest.fixture
def mock_build_info() -> dict:
    """Sample ``GET /`` response from Fluent Bit 1.8."""
    return {
        "fluent-bit": {
            "version": "1.8.15",
            "edition": "Community",
            "flags": [
                "FLB_HAVE_PARSER",
                "FLB_HAVE_RECORD_ACCESSOR",
                "FLB_HAVE_STREAM_PROCESSOR",
                "FLB_HAVE_HTTP_SERVER",
            ],
        }
    }


@pytest.fixture
def mock_uptime() -> dict:
    return {
        "uptime_sec": 5,
        "uptime_hr": "Fluent Bit has been running:  0 day, 0 hour, 0 minute and 5 seconds",
    }


@pytest.fixture
def mock_metrics() -> dict:
    return {
        "input": {"cpu.0": {"records": 10, "bytes": 200}},
        "output": {
            "stdout.0": {
                "proc_records": 10,
                "proc_bytes": 200,
                "errors": 0,
                "retries": 0,
                "retries_failed": 0,
            }
        },
    }


@pytest.fixture
def mock_storage() -> dict:
    return {
        "storage_layer": {
            "chunks": {
                "total_chunks": 3,
                "mem_chunks": 2,
                "fs_chunks": 1,
                "fs_chunks_up": 1,
                "fs_chunks_down": 0,
            }
        },
        "input_chunks": {
            "cpu.0": {
                "status": {"overlimit": False, "mem_size": "1.2K", "mem_limit": "0b"},
                "chunks": {"total": 3, "up": 3, "down": 0, "busy": 1, "busy_size": "600b"},
            }
        },
    }
