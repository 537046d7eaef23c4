"""Tests for the typed monitoring clients."""

from __future__ import annotations

import threading
import time

import httpx
import pytest
import respx

from fluentbit_monitor.client.errors import FetchTimeoutError, RequestConstructionError
from fluentbit_monitor.client.monitor import (
    AsyncMonitorClient,
    MonitorClient,
    _storage_timeout,
)
from fluentbit_monitor.config.models import AgentProfile

BASE = "http://fluentbit:2020"


class TestMonitorClient:
    @respx.mock
    def test_build_info(self, mock_build_info: dict):
        respx.get(f"{BASE}/").mock(return_value=httpx.Response(200, json=mock_build_info))
        with MonitorClient(BASE) as client:
            info = client.build_info(timeout=1)
        assert info.version == "1.8.15"
        assert info.edition == "Community"
        assert info.flags == mock_build_info["fluent-bit"]["flags"]

    @respx.mock
    def test_uptime(self):
        respx.get(f"{BASE}/api/v1/uptime").mock(
            return_value=httpx.Response(200, json={"uptime_sec": 5, "uptime_hr": "5s"})
        )
        with MonitorClient(BASE) as client:
            up = client.uptime(timeout=1)
        assert up.uptime_sec == 5
        assert up.uptime_hr == "5s"

    @respx.mock
    def test_metrics(self, mock_metrics: dict):
        respx.get(f"{BASE}/api/v1/metrics").mock(
            return_value=httpx.Response(200, json=mock_metrics)
        )
        with MonitorClient(BASE) as client:
            result = client.metrics(timeout=1)
        assert result.model_dump() == mock_metrics

    @respx.mock
    def test_storage_metrics(self, mock_storage: dict):
        respx.get(f"{BASE}/api/v1/storage").mock(
            return_value=httpx.Response(200, json=mock_storage)
        )
        with MonitorClient(BASE) as client:
            result = client.storage_metrics()
        assert result.storage_layer.chunks.total_chunks == 3
        assert result.storage_layer.chunks.fs_chunks_down == 0
        cpu = result.input_chunks["cpu.0"]
        assert cpu.status.overlimit is False
        assert cpu.status.mem_size == "1.2K"
        assert cpu.chunks.busy_size == "600b"
        assert result.model_dump() == mock_storage

    @respx.mock
    def test_trailing_slash_in_base_url(self):
        route = respx.get(f"{BASE}/api/v1/uptime").mock(
            return_value=httpx.Response(200, json={"uptime_sec": 1, "uptime_hr": "1s"})
        )
        with MonitorClient(BASE + "/") as client:
            client.uptime(timeout=1)
        assert route.called

    @respx.mock
    def test_shared_between_threads(self):
        respx.get(f"{BASE}/api/v1/uptime").mock(
            return_value=httpx.Response(200, json={"uptime_sec": 7, "uptime_hr": "7s"})
        )
        results: list[int] = []
        with MonitorClient(BASE) as client:
            threads = [
                threading.Thread(target=lambda: results.append(client.uptime(timeout=2).uptime_sec))
                for _ in range(4)
            ]
            for t in threads:
                t.start()
            for t in threads:
                t.join()
        assert results == [7, 7, 7, 7]

    @respx.mock
    def test_storage_timeout_is_bounded(self):
        respx.get(f"{BASE}/api/v1/storage").mock(return_value=httpx.Response(404))
        with MonitorClient(BASE, poll_interval=0.01) as client, pytest.raises(
            FetchTimeoutError, match="/api/v1/storage",
        ):
            client.storage_metrics(timeout=0.1)

    def test_storage_timeout_helper(self):
        assert _storage_timeout(None) == 3.0
        assert _storage_timeout(1.0) == 1.0
        assert _storage_timeout(60.0) == 3.0

    def test_empty_base_url(self):
        with pytest.raises(RequestConstructionError):
            MonitorClient("")

    @pytest.mark.parametrize(
        "url", ["http://", "http://bad host:2020", "localhost:2020", "ftp://fluentbit:2020"],
    )
    def test_malformed_base_url(self, url: str):
        start = time.monotonic()
        with pytest.raises(RequestConstructionError):
            MonitorClient(url, poll_interval=0.01).uptime(timeout=1)
        assert time.monotonic() - start < 0.5

    @pytest.mark.asyncio
    async def test_malformed_base_url_async(self):
        with pytest.raises(RequestConstructionError):
            AsyncMonitorClient("http://bad host:2020")

    def test_caller_client_not_closed(self):
        http_client = httpx.Client(base_url=BASE)
        with MonitorClient(BASE, http_client=http_client):
            pass
        assert not http_client.is_closed
        http_client.close()

    def test_from_profile(self):
        profile = AgentProfile(
            name="p", url="http://fluentbit:2020", timeout=2.0, poll_interval=0.5,
        )
        with MonitorClient.from_profile(profile) as client:
            assert client.base_url == BASE
            assert client._fetcher.poll_interval == 0.5


class TestAsyncMonitorClient:
    @pytest.mark.asyncio
    @respx.mock
    async def test_all_operations(
        self, mock_build_info: dict, mock_metrics: dict, mock_storage: dict,
    ):
        respx.get(f"{BASE}/").mock(return_value=httpx.Response(200, json=mock_build_info))
        respx.get(f"{BASE}/api/v1/uptime").mock(
            return_value=httpx.Response(200, json={"uptime_sec": 5, "uptime_hr": "5s"})
        )
        respx.get(f"{BASE}/api/v1/metrics").mock(
            return_value=httpx.Response(200, json=mock_metrics)
        )
        respx.get(f"{BASE}/api/v1/storage").mock(
            return_value=httpx.Response(200, json=mock_storage)
        )
        async with AsyncMonitorClient(BASE) as client:
            info = await client.build_info(timeout=1)
            up = await client.uptime(timeout=1)
            metrics = await client.metrics(timeout=1)
            storage = await client.storage_metrics()
            assert await client.ping() is True
        assert info.version == "1.8.15"
        assert up.uptime_sec == 5
        assert metrics.output["stdout.0"].proc_records == 10
        assert storage.input_chunks["cpu.0"].chunks.total == 3
