from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

ROOT = Path(__file__).resolve().parents[3]


def _parse_env_file(path: Path) -> dict[str, str]:
    values: dict[str, str] = {}
    if not path.exists() or not path.is_file():
        return values
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip("'").strip('"')
        if key:
            values[key] = value
    return values


def bootstrap_postal_env(root: Path = ROOT) -> None:
    """Load POSTAL_* env vars from project-level files if process env is empty."""
    candidates = [
        root / ".env.local",
        root / ".env",
        root / "config" / "postal.env",
    ]
    for env_path in candidates:
        for key, value in _parse_env_file(env_path).items():
            os.environ.setdefault(key, value)


def _flag(name: str, default: str) -> bool:
    return str(os.getenv(name, default)).strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class ApiSettings:
    data_dir: str = "/usr/local/share/libpostal"
    setup_on_startup: bool = True
    expand_root: bool = True
    max_batch_size: int = 500
    log_level: str = "INFO"


def load_settings() -> ApiSettings:
    bootstrap_postal_env()
    return ApiSettings(
        data_dir=str(os.getenv("POSTAL_DATA_DIR") or ApiSettings.data_dir).strip(),
        setup_on_startup=_flag("POSTAL_SETUP_ON_STARTUP", "1"),
        expand_root=_flag("POSTAL_EXPAND_ROOT", "1"),
        max_batch_size=int(os.getenv("POSTAL_MAX_BATCH_SIZE", "500")),
        log_level=str(os.getenv("POSTAL_LOG_LEVEL", "INFO")).upper(),
    )
