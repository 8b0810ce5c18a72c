"""Application configuration using pydantic-settings."""

import functools
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from ipa_master.models.game import DEFAULT_TIME_ATTACK_SECONDS
from ipa_master.progression.profile import HISTORY_LIMIT
from ipa_master.storage.profile_store import DEFAULT_NAMESPACE


def _find_project_root() -> Path:
    """Find project root by locating pyproject.toml."""
    current = Path(__file__).resolve()
    for parent in [current] + list(current.parents):
        if (parent / "pyproject.toml").exists():
            return parent
    # Installed without a source checkout: use the working directory
    return Path.cwd()


class YamlSettingsSource(PydanticBaseSettingsSource):
    """Custom settings source that loads from settings.yaml."""

    def get_field_value(self, field_name: str) -> tuple[Any, str, bool]:
        """Not used - we implement __call__ instead."""
        return None, "", False

    def __call__(self) -> dict[str, Any]:
        """Load settings from YAML file."""
        yaml_path = _find_project_root() / "config" / "settings.yaml"
        if not yaml_path.exists():
            return {}

        with open(yaml_path, encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}

        # Flatten nested structure to match Settings field names
        flattened = {}
        if 'dictionary' in data:
            flattened['dictionary_path'] = data['dictionary'].get('path')
        if 'storage' in data:
            flattened['data_dir'] = data['storage'].get('data_dir')
            flattened['store_namespace'] = data['storage'].get('namespace')
            flattened['history_limit'] = data['storage'].get('history_limit')
        if 'game' in data:
            flattened['time_attack_seconds'] = data['game'].get('time_attack_seconds')
            flattened['player_name'] = data['game'].get('player_name')
        if 'logging' in data:
            flattened['log_level'] = data['logging'].get('level')
            flattened['log_file'] = data['logging'].get('file')

        # Remove None values
        return {k: v for k, v in flattened.items() if v is not None}


class Settings(BaseSettings):
    """Application settings loaded from environment and config files."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Dictionary
    dictionary_path: Path | None = Field(default=None)

    # Storage
    data_dir: Path | None = Field(default=None)
    store_namespace: str = Field(default=DEFAULT_NAMESPACE)
    history_limit: int = Field(default=HISTORY_LIMIT, ge=1, le=HISTORY_LIMIT)

    # Game
    time_attack_seconds: int = Field(default=DEFAULT_TIME_ATTACK_SECONDS, ge=1)
    player_name: str = Field(default="Player")

    # Logging
    log_level: str = Field(default="INFO")
    log_file: Path | None = Field(default=None)

    # Paths
    project_root: Path = Field(default_factory=_find_project_root)

    def _resolve(self, path: Path) -> Path:
        return path if path.is_absolute() else self.project_root / path

    @property
    def resolved_dictionary_path(self) -> Path:
        if self.dictionary_path is None:
            return self.project_root / "data" / "en_US.txt"
        return self._resolve(self.dictionary_path)

    @property
    def resolved_data_dir(self) -> Path:
        d = self.project_root / "data" if self.data_dir is None else self._resolve(self.data_dir)
        d.mkdir(parents=True, exist_ok=True)
        return d

    @property
    def resolved_log_file(self) -> Path:
        if self.log_file is None:
            return self.resolved_data_dir / "ipa_master.log"
        return self._resolve(self.log_file)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customise settings sources to include YAML file.

        Priority order (highest to lowest):
        1. init_settings (arguments passed to Settings())
        2. env_settings (environment variables)
        3. dotenv_settings (.env file)
        4. YamlSettingsSource (settings.yaml)
        5. file_secret_settings
        """
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlSettingsSource(settings_cls),
            file_secret_settings,
        )


@functools.lru_cache
def get_settings() -> Settings:
    """Get application settings singleton."""
    return Settings()
