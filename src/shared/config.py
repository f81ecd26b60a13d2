"""Application settings loaded from the environment.

Variables use the ``SHOPPING_`` prefix, e.g. ``SHOPPING_DEFAULT_CURRENCY=EUR``.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

CURRENCY_DEFAULT = "USD"
PRICING_ZONE_DEFAULT = "global"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="SHOPPING_",
        env_file=".env",
        extra="ignore",
    )

    environment: str = Field("development", description="Deployment environment name")
    log_level: str | None = Field(None, description="Overrides the environment's default log level")
    log_dir: str | None = Field(None, description="Directory for rotating log files; console only when unset")

    default_currency: str = Field(CURRENCY_DEFAULT, description="Currency assigned to newly created carts")
    pricing_zone: str = Field(PRICING_ZONE_DEFAULT, description="Pricing zone used for cart and order price lookups")


@lru_cache
def get_settings() -> Settings:
    return Settings()
