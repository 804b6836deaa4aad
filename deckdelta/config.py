from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="DECKDELTA_")

    app_name: str = "DeckDelta"
    debug: bool = False

    log_level: str = "INFO"

    # Upper bound on a single pasted deck list accepted by the API
    max_deck_text_length: int = 200_000


settings = Settings()
