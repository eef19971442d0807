import os
import shlex
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from typing import TypeVar

from c_lint.errors import ConfigError

T = TypeVar("T")

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _default_jobs() -> int:
    return os.cpu_count() or 1


@dataclass(frozen=True)
class Settings:
    preprocessor: list[str] = field(default_factory=lambda: ["cpp"])
    preprocess_timeout: float = 30.0
    jobs: int = field(default_factory=_default_jobs)
    log_level: str = "WARNING"

    def with_overrides(self, **changes: object) -> "Settings":
        """Return a copy with every non-None keyword applied."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})


def _env(name: str, convert: Callable[[str], T], default: T) -> T:
    value = os.getenv(name)
    if not value:
        return default
    try:
        return convert(value)
    except ValueError:
        raise ConfigError(f"invalid value for {name}: {value!r}") from None


def _log_level(value: str) -> str:
    level = value.upper()
    if level not in LOG_LEVELS:
        raise ValueError(level)
    return level


def _timeout(value: str) -> float:
    timeout = float(value)
    if not timeout > 0:
        raise ValueError(value)
    return timeout


def get_settings() -> Settings:
    """Read settings from ``C_LINT_*`` environment variables.

    Raises ``ConfigError`` naming the variable when a value cannot be used.
    """
    command = _env("C_LINT_CPP", shlex.split, ["cpp"])
    if not command:
        raise ConfigError("invalid value for C_LINT_CPP: empty command")
    return Settings(
        preprocessor=command,
        preprocess_timeout=_env("C_LINT_CPP_TIMEOUT", _timeout, 30.0),
        jobs=max(1, _env("C_LINT_JOBS", int, _default_jobs())),
        log_level=_env("C_LINT_LOG_LEVEL", _log_level, "WARNING"),
    )
