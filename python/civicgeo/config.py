"""Application settings loaded from environment."""
from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    geocode_base_url: str = Field(
        "http://localhost:5000", validation_alias="GEOCODE_PROXY_URL"
    )
    geocode_path: str = "/api/geocode"
    reverse_geocode_path: str = "/api/reverse-geocode"
    geocode_batch_delay_ms: int = Field(400, ge=0)

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "populate_by_name": True,
        "extra": "ignore",
    }

settings = Settings()
