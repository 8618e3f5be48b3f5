import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class WarConfig(BaseModel):
    seed: Optional[int] = Field(None, description="Seed for the dice generator (unseeded if omitted)")
    log_level: str = Field("INFO", description="Console log level")
    log_file: Optional[str] = Field(None, description="Optional file that receives DEBUG logs")
    use_colors: bool = Field(True, description="Colorize console output")

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level


def _env_flag(value: str) -> bool:
    return value.strip().lower() not in ('0', 'false', 'no', 'off', '')


def load_config() -> WarConfig:
    """Build a WarConfig from the environment (and a .env file, if present)."""
    load_dotenv()

    values = {}
    seed = os.getenv('WAR_SEED')
    if seed:
        values['seed'] = seed
    log_level = os.getenv('WAR_LOG_LEVEL')
    if log_level:
        values['log_level'] = log_level
    log_file = os.getenv('WAR_LOG_FILE')
    if log_file:
        values['log_file'] = log_file
    colors = os.getenv('WAR_COLORS')
    if colors is not None:
        values['use_colors'] = _env_flag(colors)

    return WarConfig(**values)
