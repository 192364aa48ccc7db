"""Application settings loaded from environment variables or .env.

Only the generative-text report and output locations are configurable.  The
instrument itself (dimension map, Likert phrases, thresholds) is fixed in
:mod:`ceai.instrument`.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _find_env_files() -> list[Path]:
    """The closest .env at or above the working directory, if any."""
    cwd = Path.cwd().resolve()
    for parent in [cwd, *cwd.parents]:
        env_path = parent / ".env"
        if env_path.is_file():
            return [env_path]
    return []


class CeaiSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="CEAI_",
        env_file=_find_env_files(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # LLM
    llm_provider: str = "google"  # "google", "anthropic", "openai", or "local"
    google_api_key: str = ""
    anthropic_api_key: str = ""
    openai_api_key: str = ""
    llm_model: str = ""  # empty = provider default
    llm_max_tokens: int = 4096
    llm_temperature: float = 0.2
    llm_timeout_seconds: float = 60.0

    # Local LLM (Ollama)
    local_url: str = "http://localhost:11434/v1"
    local_model: str = "llama3.2:3b"

    # Output
    output_dir: Path = Path("ceai-output")

    @property
    def model_name(self) -> str:
        """Configured model, or the provider's default when unset."""
        if self.llm_model:
            return self.llm_model
        if self.llm_provider == "local":
            return self.local_model
        from ceai.providers import PROVIDERS

        spec = PROVIDERS.get(self.llm_provider)
        return spec.default_model if spec else ""

    @field_validator("llm_provider")
    @classmethod
    def _canonical_provider(cls, value: str) -> str:
        # gemini → google, claude → anthropic, chatgpt/gpt → openai, ollama → local.
        # Unknown names pass through; LLMClient rejects them when a report is requested.
        from ceai.providers import get_provider_aliases

        key = value.strip().lower()
        return get_provider_aliases().get(key, key)


def load_settings(**overrides: object) -> CeaiSettings:
    """Settings from the environment and ``.env``, with CLI overrides on top.

    ``None`` overrides are dropped so unset CLI options fall through.
    """
    given = {key: value for key, value in overrides.items() if value is not None}
    return CeaiSettings(**given)  # type: ignore[arg-type]
