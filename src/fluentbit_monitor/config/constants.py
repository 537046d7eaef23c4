"""Default paths, environment variable names, and constants."""

from __future__ import annotations

import platformdirs

APP_NAME = "fluentbit-monitor"
APP_AUTHOR = "fluentbit-monitor"

CONFIG_DIR = platformdirs.user_config_path(APP_NAME, APP_AUTHOR)
CONFIG_FILE = CONFIG_DIR / "config.toml"

# Environment variable names
ENV_AGENT_URL = "FLUENTBIT_MONITOR_URL"
ENV_AGENT_PROFILE = "FLUENTBIT_MONITOR_PROFILE"

# Monitoring API endpoints
BUILD_INFO_PATH = "/"
UPTIME_PATH = "/api/v1/uptime"
METRICS_PATH = "/api/v1/metrics"
STORAGE_PATH = "/api/v1/storage"

# HTTP defaults (seconds)
DEFAULT_PORT = 2020
DEFAULT_REQUEST_TIMEOUT = 5.0
DEFAULT_HTTP_RETRY_TIMEOUT = 3.0
DEFAULT_HTTP_RETRY_BACKOFF = 0.15
