"""Library configuration using pydantic-settings."""

from enum import Enum
from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Language(str, Enum):
    """Language used for verdict words in the detail trace."""

    EN = "en"
    ZH = "zh"


class Limits(BaseModel):
    """Compile-time bounds on a dice expression.

    Examples:
        >>> Limits().max_roll_times
        100
        >>> Limits(max_dice_sides=20).max_dice_sides
        20
    """

    model_config = ConfigDict(frozen=True)

    # Numbers and dice terms; parentheses are not counted
    max_item_count: int = Field(default=20, gt=0)
    max_dice_sides: int = Field(default=1000, gt=0)
    # Sum of dice counts across the whole expression
    max_roll_times: int = Field(default=100, gt=0)
    # Absolute value of number items and checker targets
    max_number_item_value: int = Field(default=65536, gt=0)
    # Nesting of parentheses
    max_depth: int = Field(default=32, gt=0)


DEFAULT_LIMITS = Limits()


class Settings(BaseSettings):
    """Settings loaded from ``GURGLE_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="GURGLE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter="__",
        extra="ignore",
    )

    # Limits, e.g. GURGLE_LIMITS__MAX_DICE_SIDES=20
    limits: Limits = Field(default_factory=Limits)

    # Detail trace
    detail: bool = True
    language: Language = Language.EN

    # Debug
    debug: bool = False


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
