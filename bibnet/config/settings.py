# bibnet/config/settings.py

from __future__ import annotations

from enum import Enum
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LabelCase(str, Enum):
    """
    Case policy applied to author names and keywords before counting.

    UPPER    - default; folds inconsistent casing into one node.
    LOWER    - same folding, lower-case output labels.
    PRESERVE - labels are kept exactly as written (after whitespace cleanup).
    """
    UPPER = "upper"
    LOWER = "lower"
    PRESERVE = "preserve"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_prefix="BIBNET_",
    )

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------
    DEFAULT_OUTPUT: str = Field(
        default="output.csv",
        description="Edge-list CSV written when no output path is given.",
    )

    CSV_DELIMITER: str = Field(
        default=",",
        min_length=1,
        max_length=1,
        description="Field delimiter for the edge and node CSV files.",
    )

    MIN_WEIGHT: int = Field(
        default=1,
        ge=1,
        description="Edges lighter than this are left out of the written files.",
    )

    # ------------------------------------------------------------------
    # Label normalization
    # ------------------------------------------------------------------
    LABEL_CASE: LabelCase = Field(
        default=LabelCase.UPPER,
        description="Case policy for author and keyword labels.",
    )

    STRIP_WHITESPACE: bool = Field(
        default=True,
        description=(
            "Strip labels and collapse internal whitespace runs so that "
            "'Jane  Doe ' and 'Jane Doe' become the same node."
        ),
    )

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    LOG_LEVEL: str = Field(
        default="WARNING",
        description="Root log level used by the CLI (DEBUG, INFO, WARNING, ...).",
    )


@lru_cache()
def get_settings() -> Settings:
    """Construct Settings once per process; call get_settings.cache_clear() to reload."""
    return Settings()
