# config.py

"""
Runtime settings for the fraccalc command line.

Settings come from the environment (optionally via a .env file):

    FRACCALC_RENDER_MODE   ratio | mixed          (default: ratio)
    FRACCALC_LOG_LEVEL     DEBUG, INFO, ...       (default: WARNING)
    FRACCALC_HISTORY_FILE  prompt history path, empty to disable
    FRACCALC_PROMPT        interactive prompt     (default: "? ")
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field, field_validator

from fraccalc.rational import RenderMode

ENV_PREFIX = "FRACCALC_"
DEFAULT_HISTORY_FILE = Path("~/.fraccalc_history").expanduser()

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class Settings(BaseModel):
    """Validated calculator settings."""
    render_mode: RenderMode = RenderMode.RATIO
    log_level: str = "WARNING"
    history_file: Optional[Path] = DEFAULT_HISTORY_FILE
    prompt: str = Field(default="? ", min_length=1)

    @field_validator('render_mode', mode='before')
    @classmethod
    def render_mode_is_case_insensitive(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator('log_level')
    @classmethod
    def log_level_must_be_known(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level {v!r}; expected one of {', '.join(_LOG_LEVELS)}")
        return level

    @field_validator('history_file', mode='before')
    @classmethod
    def empty_history_file_disables_history(cls, v: Any) -> Any:
        if isinstance(v, str):
            if not v.strip():
                return None
            return Path(v.strip()).expanduser()
        return v

    @property
    def logging_level(self) -> int:
        return getattr(logging, self.log_level)

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None, dotenv: bool = True) -> "Settings":
        """Build settings from FRACCALC_* variables.

        With dotenv=True the nearest .env file, searching up from the working
        directory, is loaded first; variables already set in the environment win.
        """
        if environ is None:
            if dotenv:
                load_dotenv(find_dotenv(usecwd=True))
            environ = dict(os.environ)
        values: Dict[str, Any] = {}
        for name in cls.model_fields:
            key = ENV_PREFIX + name.upper()
            if key in environ:
                values[name] = environ[key]
        return cls(**values)
