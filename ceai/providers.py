"""Text-generation providers the narrative report can use.

Each entry names the settings field that holds its API key (if any), the
environment variable that sets it, and the model used when none is configured.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ProviderSpec:
    name: str
    display_name: str
    default_model: str
    aliases: tuple[str, ...] = ()
    key_field: str | None = None  # CeaiSettings attribute; None = no key needed
    key_url: str = ""

    @property
    def api_key_env(self) -> str:
        return f"CEAI_{self.key_field.upper()}" if self.key_field else ""


PROVIDERS: dict[str, ProviderSpec] = {
    spec.name: spec
    for spec in (
        ProviderSpec(
            "google", "Gemini", "gemini-2.0-flash",
            aliases=("gemini",),
            key_field="google_api_key",
            key_url="https://aistudio.google.com/apikey",
        ),
        ProviderSpec(
            "anthropic", "Claude", "claude-sonnet-4-20250514",
            aliases=("claude",),
            key_field="anthropic_api_key",
            key_url="https://console.anthropic.com/settings/keys",
        ),
        ProviderSpec(
            "openai", "ChatGPT", "gpt-4o",
            aliases=("chatgpt", "gpt"),
            key_field="openai_api_key",
            key_url="https://platform.openai.com/api-keys",
        ),
        # Ollama speaks the OpenAI wire protocol
        ProviderSpec("local", "Local (Ollama)", "llama3.2:3b", aliases=("ollama",)),
    )
}


def get_provider_aliases() -> dict[str, str]:
    """Alias → canonical provider name (canonical names are not included)."""
    return {alias: spec.name for spec in PROVIDERS.values() for alias in spec.aliases}


def resolve_provider(name: str) -> str:
    """Canonical provider name for *name* or one of its aliases.

    Raises:
        ValueError: Unknown provider.
    """
    key = name.strip().lower()
    if key in PROVIDERS:
        return key
    aliases = get_provider_aliases()
    if key in aliases:
        return aliases[key]
    choices = ", ".join(sorted([*PROVIDERS, *aliases]))
    raise ValueError(f"Unknown LLM provider {name!r}; choose one of: {choices}")
