from __future__ import annotations

"""Load run settings from YAML."""

import logging
import os
from pathlib import Path

from pydantic import ValidationError

from branching.config import DEFAULT_CONFIG_FILENAME, Settings
from branching.io.loaders.errors import LoaderError
from branching.io.loaders.yaml_loader import read_yaml_file

logger = logging.getLogger(__name__)


def default_config_path() -> str:
    return str(Path.cwd() / DEFAULT_CONFIG_FILENAME)


def load_settings(path: str | None = None) -> Settings:
    """Load settings from ``path`` (or the default config file).

    A missing default file yields default settings; a missing explicit path
    is an error.
    """
    explicit = path is not None
    fp = path or default_config_path()
    if not os.path.exists(fp):
        if explicit:
            raise LoaderError(fp, "Config file not found")
        logger.debug("No config file at %s, using defaults", fp)
        return Settings()

    data = read_yaml_file(fp)
    try:
        return Settings.model_validate(data)
    except ValidationError as exc:
        raise LoaderError(fp, "Invalid settings", cause=exc) from exc
