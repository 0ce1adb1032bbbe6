"""Loading and saving scrub configurations as JSON.

A configuration document is a JSON object with a ``matches`` list and an
optional ``replace_with`` string. A missing document (None, empty text or
JSON ``null``) means "no configuration" and yields the default config.

Example:
    Saving a configuration:

    >>> from pathlib import Path
    >>> config = ScrubConfig(matches=("baidu\\\\.com",), replace_with="*")
    >>> save_config(config, Path("scrub.json"))

    Loading it again:

    >>> load_config(Path("scrub.json")).replace_with
    '*'
"""

from __future__ import annotations

import json
from pathlib import Path

from scrubber.core.config import ScrubConfig
from scrubber.core.errors import ConfigurationError
from scrubber.utils.logger import get_logger
from scrubber.utils.path_utils import PathLike, ensure_directory, normalize_path

logger = get_logger("scrubber.core.config_loader")


def parse_config_json(text: str | None) -> ScrubConfig:
    """Parse a JSON configuration document.

    Args:
        text: JSON text, or None when the host supplied no configuration.

    Returns:
        ScrubConfig instance

    Raises:
        ConfigurationError: If the text is not valid JSON or does not
            describe a valid configuration.
    """
    if text is None or not text.strip():
        logger.debug("No configuration supplied; using defaults")
        return ScrubConfig()

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"invalid JSON: {e}") from e

    return ScrubConfig.from_dict(data)


def load_config(config_path: PathLike) -> ScrubConfig:
    """Load a configuration from a JSON file.

    Args:
        config_path: Path to the configuration file

    Returns:
        ScrubConfig instance

    Raises:
        FileNotFoundError: If the file doesn't exist
        ConfigurationError: If the file content is not a valid configuration
    """
    path = normalize_path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ConfigurationError(f"configuration file {path} is not UTF-8: {e}") from e

    config = parse_config_json(text)
    logger.info(f"Loaded configuration from {path} ({len(config.matches)} pattern(s))")
    return config


def save_config(config: ScrubConfig, config_path: PathLike) -> Path:
    """Write a configuration to a JSON file, creating parent directories.

    Args:
        config: ScrubConfig to save
        config_path: Destination path

    Returns:
        The normalized path written to

    Raises:
        ConfigurationError: If the configuration fails validation
        OSError: If the file cannot be written
    """
    config.validate()

    path = normalize_path(config_path)
    ensure_directory(path.parent)
    path.write_text(
        json.dumps(config.to_dict(), indent=2, ensure_ascii=False) + "\n",
        encoding="utf-8",
    )

    logger.info(f"Saved configuration to {path}")
    return path
