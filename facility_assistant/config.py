from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    anthropic_api_key: str = ""
    anthropic_model: str = "claude-sonnet-4-20250514"
    log_level: str = "INFO"

    playo_url: str = (
        "https://playo.co/venues/horamavu-bengaluru/"
        "flowternity-sports-horamavu-bengaluru"
    )
    instagram_url: str = "https://www.instagram.com/flowternity_sports/?hl=en"
    google_maps_url: str = "https://share.google/T3WTGtG79S2pc9jJi"

    fetch_max_retries: int = 3
    fetch_base_delay: float = 1.0
    fetch_timeout: float = 10.0
    generation_timeout: float = 12.0

    refresh_interval_seconds: float = 300.0  # 0 disables the periodic loop
    aggregate_on_startup: bool = True
    max_fragments: int = 5000
