"""Configuration management for PromptCraft."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)


class Settings(BaseSettings):
    """Application settings loaded from environment, .env and promptcraft.yaml."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="PROMPTCRAFT_",
        yaml_file="promptcraft.yaml",
        extra="ignore",
    )

    # Storage
    data_dir: Path = Field(default_factory=lambda: Path.home() / ".promptcraft")
    library_store: str = "promptcraft-prompts"
    notion_store: str = "notion-prompts"

    # Generation
    generation_delay: float = 1.0

    # Image defaults
    image_aspect: str = "16:9"
    image_version: str = "7"
    image_profile: bool = True

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )

    def store_path(self, store_name: str) -> Path:
        return self.data_dir / f"{store_name}.json"

    @property
    def library_path(self) -> Path:
        return self.store_path(self.library_store)

    @property
    def notion_path(self) -> Path:
        return self.store_path(self.notion_store)


def get_settings() -> Settings:
    """Get application settings."""
    return Settings()
