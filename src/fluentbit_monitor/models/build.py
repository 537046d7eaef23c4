"""Build information returned by ``GET /``."""

from __future__ import annotations

from pydantic import Field

from fluentbit_monitor.models.common import APIModel


class FluentBitInfo(APIModel):
    """The ``fluent-bit`` object of the build info payload."""

    version: str
    edition: str
    flags: list[str] = Field(default_factory=list)


class BuildInfoResult(APIModel):
    """Agent version, edition and compile-time feature flags."""

    fluent_bit: FluentBitInfo = Field(alias="fluent-bit")

    @property
    def version(self) -> str:
        return self.fluent_bit.version

    @property
    def edition(self) -> str:
        return self.fluent_bit.edition

    @property
    def flags(self) -> list[str]:
        return self.fluent_bit.flags
