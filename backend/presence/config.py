import os
from pathlib import Path

from pydantic import BaseModel, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

_CONFIG_PATH = os.getenv("PRESENCE_CONFIG", "config.toml")
_ENV_PATH = os.getenv("PRESENCE_ENV", ".env")


class FamilyPatterns(BaseModel):
    join: str
    leave: str


class ClassifierSettings(BaseModel):
    """
    Log line recognition patterns.

    Family patterns are evaluated in declaration order, then the fallback,
    then the snapshot patterns, then the identity patterns. Player names are
    captured by the named group `name`, snapshot lists by the group `names`.
    """

    families: dict[str, FamilyPatterns] = Field(
        default_factory=lambda: {
            "bedrock": FamilyPatterns(
                join=r"Player connected: (?P<name>.+?), xuid:",
                leave=r"Player disconnected: (?P<name>.+?), xuid:",
            ),
            "java": FamilyPatterns(
                join=r"(?P<name>\S+) joined the game",
                leave=r"(?P<name>\S+) left the game",
            ),
        }
    )
    fallback: FamilyPatterns = FamilyPatterns(
        join=r": (?P<name>.+) joined\.",
        leave=r": (?P<name>.+) left\.",
    )
    snapshot_patterns: list[str] = [
        r"There are \d+(?: of a max of | out of maximum )\d+ players online:(?P<names>.*)$",
        r"(?:[Pp]layers [Oo]nline|[Oo]nline [Pp]layers) \(\d+(?:/\d+)?\):(?P<names>.*)$",
    ]
    identity_patterns: list[str] = [
        r"UUID of player (?P<name>\S+) is(?: (?P<uuid>[0-9a-fA-F]{8}-?[0-9a-fA-F]{4}-?[0-9a-fA-F]{4}-?[0-9a-fA-F]{4}-?[0-9a-fA-F]{12}))?",
    ]


class ReconciliationSettings(BaseModel):
    command: str = "list"
    initial_delay_seconds: float = Field(default=2.0, ge=0)
    interval_seconds: float = Field(default=60.0, gt=0)


class ServerSettings(BaseModel):
    log_path: Path
    # argv prefix, the console command is appended as the last argument
    command_exec: list[str] = ["rcon-cli"]
    command_timeout_seconds: float = Field(default=10.0, gt=0)
    auto_track: bool = True


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="PRESENCE_",
        env_nested_delimiter="__",
        toml_file=_CONFIG_PATH,
        env_file=_ENV_PATH,
        extra="ignore",
    )

    host: str = "127.0.0.1"
    port: int = 5680
    logs_dir: Path = Field(default=Path("logs"))

    reconciliation: ReconciliationSettings = Field(
        default_factory=ReconciliationSettings
    )
    classifier: ClassifierSettings = Field(default_factory=ClassifierSettings)
    servers: dict[str, ServerSettings] = Field(default_factory=dict)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Source order: init args > OS env > .env > config.toml > secrets
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            TomlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )


settings = Settings()
