from __future__ import annotations

import logging
import os
from typing import List, Optional

from ..models import PatientContext
from .catalog import DEFAULT_REGISTRY
from .registry import ShortcutRegistry

logger = logging.getLogger("notecore.shortcuts")

# Stored notes were written with only the first occurrence of each key expanded.
EXPAND_FIRST_OCCURRENCE_ONLY = os.getenv("NOTECORE_EXPAND_FIRST_ONLY", "1").strip() != "0"


class ExpansionEngine:
    """Substitutes registered "#" shortcuts and "@" macros in note text."""

    def __init__(
        self,
        registry: Optional[ShortcutRegistry] = None,
        first_occurrence_only: Optional[bool] = None,
    ) -> None:
        self.registry = DEFAULT_REGISTRY if registry is None else registry
        self.first_occurrence_only = (
            EXPAND_FIRST_OCCURRENCE_ONLY if first_occurrence_only is None else first_occurrence_only
        )

    def has_shortcuts(self, text: Optional[str]) -> bool:
        source = text or ""
        return any(key in source for key in self.registry.keys())

    def expand(self, text: Optional[str], ctx: PatientContext) -> str:
        """
        Shortcuts are applied first, then macros over the already-expanded
        text. Text that only looks like a key is left alone.
        """
        processed = text or ""
        count = 1 if self.first_occurrence_only else -1
        expanded: List[str] = []
        for group in (self.registry.templates, self.registry.macros):
            for key, entry in group.items():
                if key not in processed:
                    continue
                processed = processed.replace(key, entry.generate(ctx), count)
                expanded.append(key)
        if expanded:
            logger.debug(
                "shortcuts.expand keys=%s first_only=%s",
                ",".join(expanded),
                self.first_occurrence_only,
            )
        return processed


default_engine = ExpansionEngine()


def expand(text: Optional[str], ctx: PatientContext) -> str:
    return default_engine.expand(text, ctx)


def has_shortcuts(text: Optional[str]) -> bool:
    return default_engine.has_shortcuts(text)
