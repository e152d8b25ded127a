"""Runtime settings from environment variables; loads .env locally via python-dotenv."""

from __future__ import annotations

import logging
import os
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Load .env only when present (e.g. local dev); does not override existing env
load_dotenv()


class Settings(BaseModel):
    log_level: str = Field(default="INFO", description="Root log level")
    cors_origin_regex: str = Field(
        default=r"^https?://(localhost|127\.0\.0\.1)(?::\d+)?$",
        description="Origins allowed to call the HTTP service",
    )
    max_pool_size: int = Field(default=200, gt=0, description="Max container pool entries per request")


@lru_cache
def get_settings() -> Settings:
    defaults = Settings()
    return Settings(
        log_level=os.getenv("CARGO_OPTIMIZER_LOG_LEVEL", defaults.log_level).upper(),
        cors_origin_regex=os.getenv("CARGO_OPTIMIZER_CORS_ORIGIN_REGEX", defaults.cors_origin_regex),
        max_pool_size=int(os.getenv("CARGO_OPTIMIZER_MAX_POOL_SIZE", defaults.max_pool_size)),
    )


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    # basicConfig ignores level once the root logger has handlers
    logging.getLogger().setLevel((level or get_settings().log_level).upper())
