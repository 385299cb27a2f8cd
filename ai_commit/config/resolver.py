"""Option Resolver - Merge command-line overrides with stored config.

Precedence per field, highest first:

1. Command-line value
2. Config file value
3. Built-in default (``DEFAULTS``)

The API key has no default. Nothing here touches the file system or network.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from ai_commit import APP_NAME

if TYPE_CHECKING:
    from ai_commit.config import Config


DEFAULTS = {
    "language": "en",
    "prompt": "",
    "url": "https://api.openai.com/v1/chat/completions",
    "model": "gpt-3.5-turbo",
}


class MissingApiKeyError(Exception):
    """Raised when neither the command line nor the config file supplies an API key."""

    def __init__(self, message: str | None = None):
        super().__init__(
            message
            or f"API key not set. Please run `{APP_NAME} config set-api-key <YOUR_KEY>`"
        )


@dataclass
class Overrides:
    """Per-invocation values from the command line. ``None`` means not given."""
    api_key: Optional[str] = None
    url: Optional[str] = None
    model: Optional[str] = None
    language: Optional[str] = None
    prompt: Optional[str] = None


@dataclass(frozen=True)
class EffectiveParameters:
    """Final generation options after merging."""
    language: str
    prompt: str
    url: str
    model: str
    api_key: str


def _pick(override: Optional[str], stored: Optional[str], default: Optional[str]) -> Optional[str]:
    if override is not None:
        return override
    if stored is not None:
        return stored
    return default


def resolve(overrides: Overrides, stored: 'Config') -> EffectiveParameters:
    """Merge overrides, stored config and defaults.

    Raises:
        MissingApiKeyError: no usable API key from either source.
    """
    api_key = _pick(overrides.api_key, stored.api_key, None)
    if not api_key:
        raise MissingApiKeyError()

    return EffectiveParameters(
        language=_pick(overrides.language, stored.language, DEFAULTS["language"]),
        prompt=_pick(overrides.prompt, stored.prompt, DEFAULTS["prompt"]),
        url=_pick(overrides.url, stored.url, DEFAULTS["url"]),
        model=_pick(overrides.model, stored.model, DEFAULTS["model"]),
        api_key=api_key,
    )
