"""Configuration manager: read/write TOML config, resolve agent profiles."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import tomli_w

from fluentbit_monitor.client.errors import ConfigurationError
from fluentbit_monitor.config.constants import (
    CONFIG_FILE,
    DEFAULT_HTTP_RETRY_BACKOFF,
    DEFAULT_HTTP_RETRY_TIMEOUT,
    DEFAULT_REQUEST_TIMEOUT,
    ENV_AGENT_PROFILE,
    ENV_AGENT_URL,
)
from fluentbit_monitor.config.models import AgentProfile, CLIConfig

try:
    import tomllib
except ModuleNotFoundError:
    import tomli as tomllib

_DEFAULTS = {
    "verify_ssl": True,
    "timeout": DEFAULT_REQUEST_TIMEOUT,
    "retry_timeout": DEFAULT_HTTP_RETRY_TIMEOUT,
    "poll_interval": DEFAULT_HTTP_RETRY_BACKOFF,
}


class ConfigManager:
    """Manages CLI configuration on disk and resolves agent profiles."""

    def __init__(self, config_path: Path | None = None) -> None:
        self.config_path = config_path or CONFIG_FILE
        self._config: CLIConfig | None = None

    @property
    def config(self) -> CLIConfig:
        if self._config is None:
            self._config = self._load()
        return self._config

    def _load(self) -> CLIConfig:
        if not self.config_path.exists():
            return CLIConfig()
        raw = self.config_path.read_bytes()
        try:
            data = tomllib.loads(raw.decode())
        except tomllib.TOMLDecodeError as exc:
            raise ConfigurationError(
                f"Invalid config file {self.config_path}: {exc}"
            ) from exc
        profiles: dict[str, AgentProfile] = {}
        for name, prof_data in data.get("profiles", {}).items():
            profiles[name] = AgentProfile(name=name, **prof_data)
        return CLIConfig(
            default_profile=data.get("default_profile"),
            default_format=data.get("default_format", "table"),
            profiles=profiles,
        )

    def save(self) -> None:
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        # Owner-only directory
        os.chmod(self.config_path.parent, 0o700)
        data: dict[str, Any] = {}
        if self.config.default_profile:
            data["default_profile"] = self.config.default_profile
        if self.config.default_format != "table":
            data["default_format"] = self.config.default_format
        if self.config.profiles:
            data["profiles"] = {}
            for name, profile in self.config.profiles.items():
                prof_dict = profile.model_dump(exclude={"name"}, exclude_none=True)
                for key, default in _DEFAULTS.items():
                    if prof_dict.get(key) == default:
                        del prof_dict[key]
                data["profiles"][name] = prof_dict
        # Atomic write: write to temp file, then rename
        temp = self.config_path.with_suffix(".tmp")
        fd = os.open(str(temp), os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        try:
            os.write(fd, tomli_w.dumps(data).encode())
        finally:
            os.close(fd)
        temp.replace(self.config_path)

    def add_profile(self, profile: AgentProfile) -> None:
        self.config.profiles[profile.name] = profile
        if not self.config.default_profile:
            self.config.default_profile = profile.name
        self.save()

    def remove_profile(self, name: str) -> bool:
        if name not in self.config.profiles:
            return False
        del self.config.profiles[name]
        if self.config.default_profile == name:
            self.config.default_profile = next(iter(self.config.profiles), None)
        self.save()
        return True

    def set_default(self, name: str) -> bool:
        if name not in self.config.profiles:
            return False
        self.config.default_profile = name
        self.save()
        return True

    def get_profile(self, name: str | None = None) -> AgentProfile | None:
        if name:
            return self.config.profiles.get(name)
        default = self.config.default_profile
        if default:
            return self.config.profiles.get(default)
        return None

    def resolve_agent(
        self,
        profile_name: str | None = None,
        url: str | None = None,
        retry_timeout: float | None = None,
    ) -> AgentProfile:
        """Resolve the agent connection.

        Precedence: CLI flags > env vars > config profile.
        """
        env_profile = os.environ.get(ENV_AGENT_PROFILE)
        wanted = profile_name or env_profile
        profile = self.get_profile(wanted)
        if wanted and profile is None and not url:
            raise ConfigurationError(f"Profile '{wanted}' not found.")

        env_url = os.environ.get(ENV_AGENT_URL)
        resolved_url = url or env_url or (profile.url if profile else None)

        if not resolved_url:
            raise ConfigurationError(
                "No agent URL configured. Use 'fluentbit-monitor config add' or set "
                f"{ENV_AGENT_URL} or pass --url."
            )

        base = profile.model_dump(exclude={"name", "url"}) if profile else {}
        if retry_timeout is not None:
            base["retry_timeout"] = retry_timeout
        return AgentProfile(
            name=profile.name if profile else "cli",
            url=resolved_url,
            **base,
        )
