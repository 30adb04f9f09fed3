"""Environment-driven configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass

SUPPORTED_ENGINES = ("libpostal",)


def _optional(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _split_list(value: str | None) -> tuple[str, ...]:
    if not value:
        return ()
    return tuple(part.strip() for part in value.split(",") if part.strip())


@dataclass(frozen=True)
class EngineConfig:
    engine: str = "libpostal"
    language: str | None = None
    country: str | None = None
    expand_languages: tuple[str, ...] = ()
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        if self.engine not in SUPPORTED_ENGINES:
            raise ValueError(f"Unsupported engine: {self.engine}")

    @classmethod
    def from_env(cls) -> "EngineConfig":
        return cls(
            engine=(os.getenv("ADDR_LENS_ENGINE", "libpostal").strip().lower() or "libpostal"),
            language=_optional(os.getenv("ADDR_LENS_LANGUAGE")),
            country=_optional(os.getenv("ADDR_LENS_COUNTRY")),
            expand_languages=_split_list(os.getenv("ADDR_LENS_EXPAND_LANGUAGES")),
            log_level=(os.getenv("ADDR_LENS_LOG_LEVEL", "WARNING").strip().upper() or "WARNING"),
        )
