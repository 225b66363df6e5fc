from __future__ import annotations

import os
from dataclasses import dataclass, field


def _default_workers() -> int:
    return (os.cpu_count() or 1) * 2


@dataclass(frozen=True)
class Settings:
    progress_interval: float = 1.0
    preview_limit: int = 5
    refresh_interval: float = 0.1
    deleted_status_seconds: float = 3.0
    error_status_seconds: float = 5.0
    max_workers: int = field(default_factory=_default_workers)
