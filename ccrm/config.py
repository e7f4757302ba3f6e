"""
Configuration for the CCRM platform.

A ``RecordsConfig`` instance is built once by the entry point and passed to
the collaborators that need it.
"""

import json
import os
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError

from .core.exceptions import ConfigurationError


class RecordsConfig(BaseModel):
    data_folder: Path = Field(default=Path("data"))
    max_credits: int = Field(default=18, ge=1)
    log_level: str = Field(default="INFO", pattern=r'^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$')
    rest_host: str = "0.0.0.0"
    rest_port: int = Field(default=8000, ge=1, le=65535)

    @classmethod
    def load(cls, path: Optional[Union[str, Path]] = None) -> "RecordsConfig":
        """Load configuration from a JSON file; defaults when no path is given."""
        if path is None:
            return cls()
        if not os.path.exists(path):
            raise ConfigurationError(f"Configuration file not found: {path}")
        try:
            with open(path, "r", encoding="utf-8") as f:
                return cls.model_validate(json.load(f))
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in {path}: {e}") from e
        except PydanticValidationError as e:
            raise ConfigurationError(f"Invalid configuration in {path}: {e}") from e

    def ensure_data_folder(self) -> Path:
        """Create the data folder if needed and return it."""
        os.makedirs(self.data_folder, exist_ok=True)
        return self.data_folder
