"""Prompt templates stored as Markdown.

A prompt file has a ``## System`` and a ``## User`` section.  Anything above
the first heading is a note for maintainers and is never sent.  The user
section is a :meth:`str.format` template.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

PROMPTS_DIR = Path(__file__).resolve().parent

_HEADING = re.compile(r"^##[ \t]+(\w+)[ \t]*$", re.MULTILINE)


@dataclass(frozen=True)
class Prompt:
    name: str
    system: str
    user_template: str

    def render(self, **fields: str) -> str:
        """Fill the user template's ``{placeholders}``."""
        return self.user_template.format(**fields)


def parse_prompt(name: str, text: str) -> Prompt:
    # split() with one group yields [preamble, heading, body, heading, body, ...]
    parts = _HEADING.split(text)
    sections = {
        heading.lower(): body.strip() for heading, body in zip(parts[1::2], parts[2::2])
    }
    for required in ("system", "user"):
        if required not in sections:
            raise ValueError(f"Prompt {name!r} has no '## {required.title()}' section")
    return Prompt(name=name, system=sections["system"], user_template=sections["user"])


@lru_cache(maxsize=None)
def get_prompt(name: str) -> Prompt:
    """Load ``<name>.md`` from this directory."""
    path = PROMPTS_DIR / f"{name}.md"
    return parse_prompt(name, path.read_text(encoding="utf-8"))
