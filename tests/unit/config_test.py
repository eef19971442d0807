"""Unit tests for environment-driven settings."""

import pytest

from c_lint.config import Settings, get_settings
from c_lint.errors import ConfigError


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("C_LINT_CPP", "C_LINT_CPP_TIMEOUT", "C_LINT_JOBS", "C_LINT_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)

    settings = get_settings()

    assert settings.preprocessor == ["cpp"]
    assert settings.preprocess_timeout == 30.0
    assert settings.jobs >= 1
    assert settings.log_level == "WARNING"


def test_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("C_LINT_CPP", "gcc -E -std=c11")
    monkeypatch.setenv("C_LINT_CPP_TIMEOUT", "2.5")
    monkeypatch.setenv("C_LINT_JOBS", "0")
    monkeypatch.setenv("C_LINT_LOG_LEVEL", "info")

    settings = get_settings()

    assert settings.preprocessor == ["gcc", "-E", "-std=c11"]
    assert settings.preprocess_timeout == 2.5
    assert settings.jobs == 1
    assert settings.log_level == "INFO"


def test_with_overrides_ignores_none() -> None:
    settings = Settings(jobs=2, log_level="WARNING")

    updated = settings.with_overrides(jobs=None, log_level="DEBUG")

    assert updated.jobs == 2
    assert updated.log_level == "DEBUG"
    assert settings.log_level == "WARNING"


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("C_LINT_JOBS", "many"),
        ("C_LINT_JOBS", "1.5"),
        ("C_LINT_CPP_TIMEOUT", "soon"),
        ("C_LINT_CPP_TIMEOUT", "0"),
        ("C_LINT_CPP_TIMEOUT", "-1"),
        ("C_LINT_LOG_LEVEL", "chatty"),
        ("C_LINT_CPP", "cpp '-I unterminated"),
        ("C_LINT_CPP", "   "),
    ],
)
def test_invalid_value_names_the_variable(monkeypatch: pytest.MonkeyPatch, name: str, value: str) -> None:
    monkeypatch.setenv(name, value)

    with pytest.raises(ConfigError, match=name):
        get_settings()
