"""Common types and helpers shared across models."""

from datetime import UTC, datetime
from enum import StrEnum


class Unit(StrEnum):
    METRIC = "metric"
    IMPERIAL = "imperial"


class Status(StrEnum):
    IDLE = "idle"
    LOADING = "loading"
    DISPLAYING = "displaying"
    ERROR = "error"


def utc_now() -> datetime:
    return datetime.now(UTC)


def utc_now_iso() -> str:
    return utc_now().isoformat()
