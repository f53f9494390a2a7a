from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Dict, Iterable, List, Mapping, Tuple

from ..models import PatientContext

TEMPLATE_PREFIX = "#"
MACRO_PREFIX = "@"


class ShortcutRegistryError(ValueError):
    """Raised when a shortcut or macro entry is malformed."""


@dataclass(frozen=True)
class ShortcutTemplate:
    key: str
    description: str
    generate: Callable[[PatientContext], str]

    @property
    def kind(self) -> str:
        return "template" if self.key.startswith(TEMPLATE_PREFIX) else "macro"

    def to_dict(self) -> Dict[str, str]:
        return {"key": self.key, "description": self.description, "kind": self.kind}


# Same shape; the "@" prefix is what makes an entry a macro.
DataMacro = ShortcutTemplate


def _check_key(key: str, prefix: str) -> None:
    if not key.startswith(prefix) or len(key) < 2:
        raise ShortcutRegistryError(f"Key {key!r} must start with {prefix!r} and name something")
    if any(ch.isspace() for ch in key):
        raise ShortcutRegistryError(f"Key {key!r} must not contain whitespace")


def _index(entries: Iterable[ShortcutTemplate], prefix: str) -> Dict[str, ShortcutTemplate]:
    out: Dict[str, ShortcutTemplate] = {}
    for entry in entries:
        _check_key(entry.key, prefix)
        if entry.key in out:
            raise ShortcutRegistryError(f"Duplicate key {entry.key!r}")
        out[entry.key] = entry
    return out


class ShortcutRegistry:
    """
    Immutable catalog of "#" templates and "@" macros, in insertion order.
    Build a new registry (with_entries) instead of changing an existing one.
    """

    def __init__(
        self,
        templates: Iterable[ShortcutTemplate] = (),
        macros: Iterable[ShortcutTemplate] = (),
    ) -> None:
        self._templates: Mapping[str, ShortcutTemplate] = MappingProxyType(_index(templates, TEMPLATE_PREFIX))
        self._macros: Mapping[str, ShortcutTemplate] = MappingProxyType(_index(macros, MACRO_PREFIX))

    @property
    def templates(self) -> Mapping[str, ShortcutTemplate]:
        return self._templates

    @property
    def macros(self) -> Mapping[str, ShortcutTemplate]:
        return self._macros

    def keys(self) -> Tuple[str, ...]:
        return tuple(self._templates) + tuple(self._macros)

    def entries(self) -> List[ShortcutTemplate]:
        return list(self._templates.values()) + list(self._macros.values())

    def __contains__(self, key: object) -> bool:
        return key in self._templates or key in self._macros

    def __len__(self) -> int:
        return len(self._templates) + len(self._macros)

    def with_entries(self, *entries: ShortcutTemplate) -> "ShortcutRegistry":
        """Return a copy with entries added; an entry replaces one with the same key."""
        templates = dict(self._templates)
        macros = dict(self._macros)
        for entry in entries:
            if entry.key.startswith(TEMPLATE_PREFIX):
                templates[entry.key] = entry
            elif entry.key.startswith(MACRO_PREFIX):
                macros[entry.key] = entry
            else:
                raise ShortcutRegistryError(
                    f"Key {entry.key!r} must start with {TEMPLATE_PREFIX!r} or {MACRO_PREFIX!r}"
                )
        return ShortcutRegistry(templates.values(), macros.values())
