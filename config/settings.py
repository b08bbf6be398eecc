from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # App
    APP_NAME: str = "Kickbet"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Match timing (45 s of play is presented as a 90 minute match)
    MATCH_DURATION_MS: int = 45_000
    TICK_INTERVAL_MS: int = 100
    GOAL_DWELL_MS: int = 2_000

    # Field geometry, same units as the physics collaborator
    FIELD_WIDTH: float = 340.0
    FIELD_HEIGHT: float = 525.0

    # Wagering
    INITIAL_BALANCE: int = 10_000
    FIXED_STAKE: int = 100
    TOTAL_GOALS_LINE: float = 4.5
    # Merged over the default odds table, e.g. '{"result": {"draw": 350}}'
    ODDS_OVERRIDES: dict[str, dict[str, int]] = {}

    # Seed for kickoff velocity draws; None = fresh entropy per process
    KICKOFF_SEED: int | None = None


settings = Settings()
