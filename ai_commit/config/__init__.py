"""Configuration Management Package"""

import os
import sys
import tempfile
import tomllib
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Optional

import platformdirs
import tomli_w

from ai_commit import APP_NAME
from ai_commit.config.resolver import (
    DEFAULTS,
    EffectiveParameters,
    MissingApiKeyError,
    Overrides,
    resolve,
)

CONFIG_FILENAME = "config.toml"
CONFIG_ENV_VAR = "AI_COMMIT_CONFIG"


class ConfigError(Exception):
    """Raised when the config file cannot be read or written."""
    pass


@dataclass
class Config:
    """Stored user preferences. ``None`` means the field is unset."""
    api_key: Optional[str] = None
    url: Optional[str] = None
    model: Optional[str] = None
    language: Optional[str] = None
    prompt: Optional[str] = None

    def to_dict(self) -> dict:
        return {k: v for k, v in asdict(self).items() if v is not None}

    def validate(self) -> list[str]:
        """Unset every field holding a non-string value and return warnings."""
        warnings = []
        for f in fields(self):
            value = getattr(self, f.name)
            if value is not None and not isinstance(value, str):
                warnings.append(f"Ignoring non-string value for '{f.name}': {value!r}")
                setattr(self, f.name, None)
        return warnings

    @classmethod
    def from_dict(cls, data: dict) -> 'Config':
        valid_keys = {f.name for f in fields(cls)}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        config = cls(**filtered)
        for warning in config.validate():
            print(f"Config warning: {warning}", file=sys.stderr)
        return config


# Keys the config file understands, in display order
CONFIG_KEYS = tuple(f.name for f in fields(Config))


def get_config_path() -> Path:
    """Location of the per-user config file.

    ``$AI_COMMIT_CONFIG`` wins over the platform config directory.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path(platformdirs.user_config_dir(APP_NAME)) / CONFIG_FILENAME


class ConfigManager:
    """Loads and saves the flat preference record."""

    def __init__(self, path: Path | None = None):
        self._path = path
        self._config: Optional[Config] = None

    @property
    def path(self) -> Path:
        if self._path is None:
            self._path = get_config_path()
        return self._path

    def load(self) -> Config:
        if self._config is not None:
            return self._config

        if not self.path.exists():
            self._config = Config()
            return self._config

        try:
            with open(self.path, 'rb') as f:
                data = tomllib.load(f)
        except (tomllib.TOMLDecodeError, UnicodeDecodeError) as e:
            raise ConfigError(f"Could not parse {self.path}: {e}")
        except OSError as e:
            raise ConfigError(f"Could not read {self.path}: {e}")

        self._config = Config.from_dict(data)
        return self._config

    def save(self, config: Config) -> Path:
        """Write the set fields. The old file stays intact if anything fails."""
        path = self.path
        try:
            data = tomli_w.dumps(config.to_dict()).encode('utf-8')
        except UnicodeEncodeError as e:
            # Undecodable argv bytes arrive as lone surrogates
            raise ConfigError(f"Could not save {path}: value is not valid UTF-8 ({e.reason})")

        tmp_name = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile('wb', dir=path.parent, prefix=f".{path.name}.", delete=False) as tmp:
                tmp_name = tmp.name
                tmp.write(data)
            os.replace(tmp_name, path)
        except OSError as e:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise ConfigError(f"Could not write {path}: {e}")
        self._config = config
        return path


__all__ = [
    "Config",
    "ConfigError",
    "ConfigManager",
    "CONFIG_KEYS",
    "CONFIG_ENV_VAR",
    "get_config_path",
    "DEFAULTS",
    "EffectiveParameters",
    "MissingApiKeyError",
    "Overrides",
    "resolve",
]
