"""
Environment-backed settings.

Values are read on every call so tests can monkeypatch `os.environ`.
Invalid or empty values fall back to the given default.
"""

from __future__ import annotations

import os


def env_str(name: str, default: str = "") -> str:
    return os.environ.get(name, "").strip() or default


def env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def env_list(name: str, default: list[str] | None = None) -> list[str]:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return list(default or [])
    return [item.strip() for item in raw.split(",") if item.strip()]


def cors_origins() -> list[str]:
    return env_list(
        "CORS_ORIGINS",
        ["http://localhost:5173", "http://127.0.0.1:5173"],
    )


def questions_page_size() -> int:
    size = env_int("QUESTIONS_PAGE_SIZE", 20)
    return size if size > 0 else 20


def stats_timezone() -> str:
    # Calendar-year statistics are counted in the council's local time.
    return env_str("STATS_TIMEZONE", "Asia/Tokyo")
