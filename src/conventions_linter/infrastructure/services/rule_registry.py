"""RuleRegistryService: loads rule_registry.yaml for checker messages."""

import logging
from pathlib import Path
from typing import Optional, cast

import yaml

from conventions_linter.domain.protocols import RuleRegistryProtocol
from conventions_linter.domain.registry_types import RuleRegistryEntry
from conventions_linter.domain.rule_msgs import RuleMsgBuilder


class RuleRegistryService(RuleRegistryProtocol):
    """Loads rule_registry.yaml and exposes entries by message id."""

    def __init__(self, registry_path: str | None = None) -> None:
        if registry_path is not None:
            self._path = Path(registry_path)
        else:
            # Default: packaged resource next to this package
            _base = Path(__file__).resolve().parent.parent.parent
            self._path = _base / "resources" / "rule_registry.yaml"
        self._registry: dict[str, RuleRegistryEntry] = {}
        self._load()

    def _load(self) -> None:
        if self._path.exists():
            with open(self._path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
                self._registry = (
                    cast(dict[str, RuleRegistryEntry], data) if isinstance(data, dict) else {}
                )
        else:
            logging.warning("Rule registry not found at %s; checkers will have no messages.", self._path)
            self._registry = {}

    def get_registry(self) -> dict[str, RuleRegistryEntry]:
        """Return a shallow copy of the loaded registry for use by domain/use_cases."""
        return dict(self._registry)

    def get_entry(self, msgid: str) -> Optional[RuleRegistryEntry]:
        """Return the registry entry for a message id such as C9101."""
        return RuleMsgBuilder.get_entry(self._registry, msgid)
