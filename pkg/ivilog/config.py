"""Settings from environment variables.

IVILOG_ADB          device-bridge executable (default: adb)
IVILOG_TIMEOUT      per-command timeout in seconds (default: 30)
IVILOG_DEFAULT_DIR  fallback output directory (default: ~/ivi_logs)
IVILOG_AUDIT_LOG    optional JSONL audit trail path
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

DEFAULT_TOOL = "adb"
DEFAULT_TIMEOUT = 30.0
DEFAULT_OUTPUT_DIR_NAME = "ivi_logs"


@dataclass
class Settings:
    tool: str = field(default=DEFAULT_TOOL)
    timeout: float = field(default=DEFAULT_TIMEOUT)
    default_output_dir: Path = field(default_factory=lambda: Path.home() / DEFAULT_OUTPUT_DIR_NAME)
    audit_log: Path | None = None
    # problems found while parsing the environment, reported by the CLI
    warnings: list[str] = field(default_factory=list)

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "Settings":
        env = os.environ if env is None else env
        warnings: list[str] = []
        default_dir = env.get("IVILOG_DEFAULT_DIR", "").strip()
        audit = env.get("IVILOG_AUDIT_LOG", "").strip()
        return cls(
            tool=env.get("IVILOG_ADB", "").strip() or DEFAULT_TOOL,
            timeout=cls._get_timeout(env, warnings),
            default_output_dir=Path(default_dir).expanduser() if default_dir else Path.home() / DEFAULT_OUTPUT_DIR_NAME,
            audit_log=Path(audit).expanduser() if audit else None,
            warnings=warnings,
        )

    @staticmethod
    def _get_timeout(env: Mapping[str, str], warnings: list[str]) -> float:
        value = env.get("IVILOG_TIMEOUT")
        if value is None or not value.strip():
            return DEFAULT_TIMEOUT
        try:
            timeout = float(value)
        except ValueError:
            warnings.append(f"Invalid IVILOG_TIMEOUT {value!r}, using default {DEFAULT_TIMEOUT:g}s")
            return DEFAULT_TIMEOUT
        if timeout <= 0:
            warnings.append(f"IVILOG_TIMEOUT must be positive, got {value!r}; using default {DEFAULT_TIMEOUT:g}s")
            return DEFAULT_TIMEOUT
        return timeout
