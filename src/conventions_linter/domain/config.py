"""Configuration for linter settings. Immutable value object created by Infrastructure."""

from __future__ import annotations

import logging

from conventions_linter.domain.constants import (
    DEFAULT_COMMENT_PARSER,
    DEFAULT_IGNORED_PARAMS,
    DEFAULT_RETURN_EXEMPT_METHODS,
)


class ConfigurationLoader:
    """
    Immutable configuration for linter settings.

    Created by Infrastructure from the [tool.conventions-linter] table. Domain
    does not read the filesystem; the composition root calls
    ConfigFileLoader.load_config_from_fs() and constructs ConfigurationLoader(config_dict).
    """

    KNOWN_KEYS: frozenset[str] = frozenset(
        {"comment_parser", "ignored_params", "return_exempt_methods"}
    )

    def __init__(self, config_dict: dict[str, object] | None = None) -> None:
        """Set config once at construction. No mutable state after init."""
        self._config: dict[str, object] = dict(config_dict or {})
        if self._config:
            self.validate_config(self._config)

    def validate_config(self, config: dict[str, object]) -> None:
        """Warn about unknown keys and values of the wrong type."""
        for key in sorted(set(config) - self.KNOWN_KEYS):
            logging.warning("Configuration Warning: unknown key '%s' in [tool.conventions-linter].", key)

        parser = config.get("comment_parser")
        if parser is not None and not isinstance(parser, str):
            logging.warning("Configuration Warning: 'comment_parser' must be a string; using the default parser.")

        for key in ("ignored_params", "return_exempt_methods"):
            value = config.get(key)
            if value is not None and not self._is_string_list(value):
                logging.warning("Configuration Warning: '%s' must be a list of strings; using defaults.", key)

    @staticmethod
    def _is_string_list(value: object) -> bool:
        return isinstance(value, list) and all(isinstance(item, str) for item in value)

    @property
    def config(self) -> dict[str, object]:
        """Return the loaded configuration."""
        return self._config

    @property
    def comment_parser(self) -> str:
        """Import path ('module:attr') of the comment parser class."""
        raw = self._config.get("comment_parser")
        if isinstance(raw, str) and raw.strip():
            return raw.strip()
        return DEFAULT_COMMENT_PARSER

    @property
    def ignored_params(self) -> frozenset[str]:
        """Parameter names never required in @param tags."""
        raw = self._config.get("ignored_params")
        if self._is_string_list(raw):
            return frozenset(raw)  # type: ignore[arg-type]
        return frozenset(DEFAULT_IGNORED_PARAMS)

    @property
    def return_exempt_methods(self) -> frozenset[str]:
        """Function names never required to carry a @return tag."""
        raw = self._config.get("return_exempt_methods")
        if self._is_string_list(raw):
            return frozenset(raw)  # type: ignore[arg-type]
        return frozenset(DEFAULT_RETURN_EXEMPT_METHODS)
