from __future__ import annotations

import re
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

TIMESTAMP = "%Y%m%d_%H%M%S"
UNSAFE_RE = re.compile(r"[^a-zA-Z0-9_-]")


def sanitize_device_id(device: Optional[str]) -> str:
    if not device:
        return "default"
    return UNSAFE_RE.sub("_", device)


def build_log_filename(device: Optional[str], now: Optional[datetime] = None) -> str:
    now = now or datetime.now()
    return f"ivi_logcat_{sanitize_device_id(device)}_{now.strftime(TIMESTAMP)}.txt"


def resolve_output_dir(
    given: Optional[str],
    default: Path,
    prompt: Callable[[str], str] = input,
) -> Path:
    """Use the argument if non-blank, else ask; a blank answer means ``default``."""
    if given and given.strip():
        return Path(given).expanduser()
    answer = prompt(f"PROMPT: Enter the directory to save logs (default: {default}): ").strip()
    return Path(answer).expanduser() if answer else default
