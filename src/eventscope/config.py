"""Observability configuration: YAML file + env var overrides.

Priority: env var > YAML file > default.
Env vars use EVENTSCOPE_{FIELD_NAME} (e.g. EVENTSCOPE_LOG_LEVEL=DEBUG).
YAML file default: ~/.eventscope/config.yaml

Logging architecture:
    LogFormatter (how records are structured) × LogDestination (where they go)

    Formatter: EVENTSCOPE_LOG_FORMATTER=structlog (default) | stdlib
    Destination: EVENTSCOPE_LOG_DESTINATION=stderr (default) | jsonl
    Renderer: EVENTSCOPE_LOG_FORMAT=json (default) | console
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

from eventscope.severity import Severity

ENV_PREFIX = "EVENTSCOPE_"
_DEFAULT_PATH = Path("~/.eventscope/config.yaml").expanduser()


def _env(name: str, default: str | None = None) -> str | None:
    return os.environ.get(f"{ENV_PREFIX}{name.upper()}", default)


@dataclass
class ObservabilityConfig:
    """Observability configuration, env-var driven."""

    # Process-wide service name; applied once by configure()
    service_name: str | None = field(default_factory=lambda: _env("service_name") or None)

    # --- Logging: formatter × destination ---
    log_formatter: str = field(
        default_factory=lambda: _env("log_formatter", "structlog")
    )  # "structlog" | "stdlib"

    log_destination: str = field(
        default_factory=lambda: _env("log_destination", "stderr")
    )  # "stderr" | "jsonl"

    log_level: str = field(default_factory=lambda: _env("log_level", "INFO"))

    log_format: str = field(
        default_factory=lambda: _env("log_format", "json")
    )  # "json" | "console" (dev-friendly renderer)

    # JSONL file destination
    jsonl_path: str | None = field(default_factory=lambda: _env("jsonl_path"))

    def __post_init__(self) -> None:
        # Fail at load time rather than at setup_logging()
        Severity.parse(self.log_level)

    @property
    def severity(self) -> Severity:
        return Severity.parse(self.log_level)

    @classmethod
    def load(cls, path: Path | None = None) -> ObservabilityConfig:
        """Load config from a YAML file, then let env vars override it."""
        file_path = path or _DEFAULT_PATH
        file_values: dict[str, Any] = {}

        if file_path.exists():
            raw = yaml.safe_load(file_path.read_text()) or {}
            if isinstance(raw, dict):
                file_values = {str(k): v for k, v in raw.items()}

        kwargs: dict[str, Any] = {}
        for f in fields(cls):
            if _env(f.name) is not None:
                continue  # default_factory picks up the env var
            if f.name in file_values:
                value = file_values[f.name]
                kwargs[f.name] = None if value is None else str(value)
            # else: use dataclass default

        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}
