import os
from pathlib import Path
from typing import Optional

import yaml

from cherrypick_core.errors import InputValidationError
from cherrypick_core.utils.process import DEFAULT_MAX_OUTPUT_BYTES

DEFAULT_AUTHOR_NAME = "github-actions[bot]"
DEFAULT_AUTHOR_EMAIL = "github-actions[bot]@users.noreply.github.com"

DEFAULT_CONFIG: dict = {
    "author_name": DEFAULT_AUTHOR_NAME,
    "author_email": DEFAULT_AUTHOR_EMAIL,
    "draft": False,
    "labels": [],  # applied to every PR opened by this repo's runs, e.g. ["backport"]
    "remote": "origin",
    "max_output_bytes": DEFAULT_MAX_OUTPUT_BYTES,
}


def split_csv(value) -> list[str]:
    """Split a comma-separated string into trimmed, non-empty items.

    Lists (as written in YAML) pass through with the same trimming.
    """
    if not value:
        return []
    items = value.split(",") if isinstance(value, str) else value
    return [str(item).strip() for item in items if str(item).strip()]


_TRUE_STRINGS = {"true", "yes", "on", "1"}
_FALSE_STRINGS = {"false", "no", "off", "0"}


def parse_bool(key: str, value) -> bool:
    """Read a YAML flag. Quoted strings like "false" count as False; an empty key as False."""
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    raise InputValidationError(f"{key} must be true or false, got {value!r}")


def load_config(config_path: str = ".cherrypick.yml", cli_overrides: Optional[dict] = None) -> dict:
    """
    Load configuration by merging (in order of precedence):
      1. Built-in defaults
      2. the YAML file at config_path
      3. CLI argument overrides
    """
    config = {**DEFAULT_CONFIG, "labels": list(DEFAULT_CONFIG["labels"])}

    path = Path(config_path)
    if path.exists():
        with open(path) as f:
            file_config = yaml.safe_load(f) or {}
        config.update(file_config)

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                config[key] = value

    config["labels"] = split_csv(config.get("labels"))
    config["draft"] = parse_bool("draft", config.get("draft"))

    # The repository defaults to the one the Actions job runs in.
    if not config.get("repository"):
        config["repository"] = os.environ.get("GITHUB_REPOSITORY", "")
    config["github_token"] = os.environ.get("GITHUB_TOKEN")

    return config
