"""Tests for settings loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from ceai.config import CeaiSettings, load_settings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "CEAI_LLM_PROVIDER",
        "CEAI_LLM_MODEL",
        "CEAI_GOOGLE_API_KEY",
        "CEAI_OUTPUT_DIR",
        "CEAI_LLM_TIMEOUT_SECONDS",
    ):
        monkeypatch.delenv(name, raising=False)


class TestDefaults:
    def test_defaults(self) -> None:
        settings = CeaiSettings()
        assert settings.llm_provider == "google"
        assert settings.llm_timeout_seconds == 60.0
        assert settings.output_dir == Path("ceai-output")

    def test_default_model_follows_provider(self) -> None:
        assert CeaiSettings().model_name == "gemini-2.0-flash"
        assert CeaiSettings(llm_provider="anthropic").model_name == "claude-sonnet-4-20250514"
        assert CeaiSettings(llm_provider="local").model_name == "llama3.2:3b"

    def test_explicit_model_wins(self) -> None:
        assert CeaiSettings(llm_model="gemini-2.5-pro").model_name == "gemini-2.5-pro"


class TestEnvironment:
    def test_env_prefix(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CEAI_LLM_PROVIDER", "openai")
        monkeypatch.setenv("CEAI_LLM_TIMEOUT_SECONDS", "5")
        settings = CeaiSettings()
        assert settings.llm_provider == "openai"
        assert settings.llm_timeout_seconds == 5.0

    def test_env_alias_normalised(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CEAI_LLM_PROVIDER", "Claude")
        assert CeaiSettings().llm_provider == "anthropic"


class TestLoadSettings:
    @pytest.mark.parametrize(
        ("alias", "expected"),
        [("gemini", "google"), ("Claude", "anthropic"), ("chatgpt", "openai"),
         ("gpt", "openai"), ("ollama", "local"), ("anthropic", "anthropic")],
    )
    def test_provider_aliases(self, alias: str, expected: str) -> None:
        assert load_settings(llm_provider=alias).llm_provider == expected

    def test_none_overrides_fall_through(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CEAI_OUTPUT_DIR", "/tmp/from-env")
        settings = load_settings(output_dir=None, llm_provider=None)
        assert settings.output_dir == Path("/tmp/from-env")
        assert settings.llm_provider == "google"

    def test_override(self, tmp_path: Path) -> None:
        assert load_settings(output_dir=tmp_path).output_dir == tmp_path
