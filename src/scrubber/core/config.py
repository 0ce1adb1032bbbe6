"""Configuration data model for literal scrubbing.

This module defines the ScrubConfig dataclass: the ordered list of patterns
to look for in string literals and the text that replaces each match.

Example:
    Building a configuration from a decoded JSON document:

    >>> config = ScrubConfig.from_dict({
    ...     "matches": ["[一-鿿]", "example.com"],
    ...     "replace_with": "*",
    ... })
    >>> config.validate()

    Converting back for JSON serialization:

    >>> config.to_dict()
    {'matches': ['[一-鿿]', 'example.com'], 'replace_with': '*'}
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from scrubber.core.errors import ConfigurationError
from scrubber.utils.logger import get_logger

logger = get_logger("scrubber.core.config")

# Keys understood by the engine. Anything else is ignored with a warning.
KNOWN_KEYS = frozenset({"matches", "replace_with"})

DEFAULT_REPLACE_WITH = ""


@dataclass(frozen=True)
class ScrubConfig:
    """Scrub configuration.

    Attributes:
        matches: Regular expressions to search for, in priority order. The
            position of a pattern decides ties between equal matches.
            Duplicates are allowed.
        replace_with: Mask text. Empty (the default) deletes matches; any
            other value is repeated/truncated to the matched length so the
            literal keeps its visible length.
    """

    matches: tuple[str, ...] = ()
    replace_with: str = DEFAULT_REPLACE_WITH

    def __post_init__(self) -> None:
        # Accept any sequence but store an immutable tuple
        if not isinstance(self.matches, tuple):
            object.__setattr__(self, "matches", tuple(self.matches))

    def validate(self) -> None:
        """Validate field types.

        Pattern syntax is checked separately, when the patterns are compiled.

        Raises:
            ConfigurationError: If a field has the wrong type
        """
        for index, pattern in enumerate(self.matches):
            if not isinstance(pattern, str):
                raise ConfigurationError(
                    f"entry {index} must be a string, got {type(pattern).__name__}",
                    key="matches",
                )

        if not isinstance(self.replace_with, str):
            raise ConfigurationError(
                f"must be a string, got {type(self.replace_with).__name__}",
                key="replace_with",
            )

        logger.debug(
            f"Configuration validated: {len(self.matches)} pattern(s), "
            f"replace_with={self.replace_with!r}"
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to a JSON-serializable dictionary."""
        return {
            "matches": list(self.matches),
            "replace_with": self.replace_with,
        }

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> ScrubConfig:
        """Create a configuration from a decoded configuration document.

        Args:
            data: Mapping with ``matches`` and optional ``replace_with``.
                None means "no configuration" and yields the default
                (no patterns, delete matches).

        Returns:
            A validated ScrubConfig instance

        Raises:
            ConfigurationError: If ``matches`` is missing or a value has the
                wrong type

        Example:
            >>> ScrubConfig.from_dict({"matches": ["example.com"]}).replace_with
            ''
        """
        if data is None:
            return cls()

        if not isinstance(data, Mapping):
            raise ConfigurationError(
                f"configuration must be an object, got {type(data).__name__}"
            )

        unknown = sorted(str(key) for key in data if key not in KNOWN_KEYS)
        if unknown:
            logger.warning(f"Ignoring unknown configuration key(s): {', '.join(unknown)}")

        if "matches" not in data:
            raise ConfigurationError("missing required field", key="matches")

        matches = data["matches"]
        if isinstance(matches, (str, bytes)) or not isinstance(matches, (list, tuple)):
            raise ConfigurationError(
                f"must be a list of strings, got {type(matches).__name__}",
                key="matches",
            )

        replace_with = data.get("replace_with")
        if replace_with is None:
            replace_with = DEFAULT_REPLACE_WITH

        config = cls(matches=tuple(matches), replace_with=replace_with)
        config.validate()
        return config
