"""
Settings of the application, read from the environment.

* KOTH_CHECKS_TO_WIN: how many checks a side has to receive to lose the game (default: 3)
* KOTH_LOG_LEVEL: level for the standard library logging setup (default: INFO)
"""

import logging
import os
from typing import Mapping, Optional, Self

from pydantic import BaseModel, Field, field_validator

from src.koth.rules import CHECKS_TO_WIN

ENV_PREFIX = "KOTH_"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class Settings(BaseModel):
    checks_to_win: int = Field(default=CHECKS_TO_WIN, ge=1)
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value!r}")
        return level

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> Self:
        """Only the variables that are actually set override the defaults"""
        environ = os.environ if environ is None else environ
        values = {
            name: environ[f"{ENV_PREFIX}{name.upper()}"]
            for name in cls.model_fields
            if f"{ENV_PREFIX}{name.upper()}" in environ
        }
        return cls.model_validate(values)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)
