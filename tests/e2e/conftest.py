"""E2E test configuration: a live Fluent Bit agent.

Start one with the HTTP server and storage metrics enabled, e.g. with this
configuration mounted as /fluent-bit.conf::

    [SERVICE]
         HTTP_Server On
         HTTP_Listen 0.0.0.0
         HTTP_Port 2020
         storage.metrics On
    [INPUT]
         name cpu
    [OUTPUT]
         name stdout

    docker run --rm -p 2020:2020 -v $PWD/fluent-bit.conf:/fluent-bit.conf fluent/fluent-bit:1.8 /fluent-bit/bin/fluent-bit -c /fluent-bit.conf

then run ``pytest tests/e2e --agent-url http://localhost:2020``.
"""

from __future__ import annotations

import pytest

from fluentbit_monitor.client.monitor import MonitorClient


@pytest.fixture
def live_client(live_agent_url: str):
    with MonitorClient(live_agent_url) as client:
        if not client.ping():
            pytest.skip(f"Agent at {live_agent_url} is not reachable")
        yield client
