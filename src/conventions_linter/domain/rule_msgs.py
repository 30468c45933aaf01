"""Pure message-building from a registry dict. No I/O or infrastructure imports."""

from collections.abc import Iterable, Iterator, Mapping
from typing import cast

from conventions_linter.domain.constants import RULE_PREFIX
from conventions_linter.domain.registry_types import RuleRegistryEntry


class RuleMsgBuilder:
    """Turns registry entries into Pylint msgs and violation-code lookups."""

    @staticmethod
    def get_entry(
        registry: Mapping[str, RuleRegistryEntry], msgid: str
    ) -> RuleRegistryEntry | None:
        """Copy of the entry stored under 'conventions.<msgid>', or None."""
        entry = registry.get(f"{RULE_PREFIX}{msgid}")
        if not isinstance(entry, dict):
            return None
        return cast(RuleRegistryEntry, dict(entry))

    @classmethod
    def _entries(
        cls, registry: Mapping[str, RuleRegistryEntry], msgids: Iterable[str]
    ) -> Iterator[tuple[str, RuleRegistryEntry]]:
        for msgid in msgids:
            entry = cls.get_entry(registry, msgid)
            if entry:
                yield msgid, entry

    @classmethod
    def build_msgs_for_codes(
        cls, registry: Mapping[str, RuleRegistryEntry], codes: list[str]
    ) -> dict[str, tuple[str, str, str]]:
        """
        Pylint msgs for the given message ids: { msgid: (template, symbol, description) }.

        Entries without a message template are left out. Symbol and description
        fall back to the msgid.
        """
        return {
            msgid: (
                str(entry["message_template"]),
                str(entry.get("symbol") or msgid),
                str(entry.get("short_description") or entry.get("display_name") or msgid),
            )
            for msgid, entry in cls._entries(registry, codes)
            if entry.get("message_template")
        }

    @classmethod
    def build_symbol_map(
        cls, registry: Mapping[str, RuleRegistryEntry], codes: list[str]
    ) -> dict[str, str]:
        """Map violation codes (e.g. 'NotFound') to Pylint symbols for the given message ids."""
        return {
            str(entry["violation_code"]): str(entry.get("symbol") or msgid)
            for msgid, entry in cls._entries(registry, codes)
            if entry.get("violation_code")
        }
