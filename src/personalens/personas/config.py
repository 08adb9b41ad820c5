"""Pipeline configuration."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class PipelineConfig(BaseSettings):
    """Configuration for persona analysis runs."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="PERSONALENS_",
        extra="ignore",
    )

    id_field: str = "customer_id"
    sample_size: int = Field(default=20, ge=1)
    max_concurrent_personas: int = Field(default=4, ge=1)

    # k-means
    random_state: int = 42
    n_init: int = Field(default=10, ge=1)
    max_iter: int = Field(default=300, ge=1)
