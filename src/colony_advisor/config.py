"""Runtime configuration for Colony Advisor."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-driven runtime settings."""

    model_config = SettingsConfigDict(env_prefix="COLONY_ADVISOR_", env_file=".env", extra="ignore")

    app_name: str = "colony-advisor"
    log_level: str = "INFO"
    display_count: int = Field(default=5, ge=1, description="How many recommendations the front-end shows.")
    preference_weight: float = Field(
        default=0.3,
        description="Score added per manual affirmation of a move.",
    )
    starting_money: int = Field(default=3, ge=0)
    you_starting_resource: str = "Indigo"
    opponent_starting_resource: str = "Corn"
    face_up_slots: int = Field(default=3, ge=1)
    quarry_pool: int = Field(default=5, ge=0)
    prospector_income: int = Field(default=1, ge=0)
    history_limit: int = Field(default=200, ge=1)
    you_go_first: bool = True
    telemetry_enabled: bool = True


settings = Settings()
