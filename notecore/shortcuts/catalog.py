from __future__ import annotations

import json
import logging
import os
import re
from typing import Any, Callable, Dict, List, Optional

from ..models import PatientContext
from .macros import DATA_MACROS
from .registry import MACRO_PREFIX, TEMPLATE_PREFIX, ShortcutRegistry, ShortcutTemplate
from .templates import SHORTCUT_TEMPLATES

logger = logging.getLogger("notecore.shortcuts")

ENV_CUSTOM_SHORTCUTS_PATH = "NOTECORE_CUSTOM_SHORTCUTS_PATH"

DEFAULT_REGISTRY = ShortcutRegistry(SHORTCUT_TEMPLATES, DATA_MACROS)

# {{NAME}} placeholders available to clinician-authored shortcut text.
PLACEHOLDERS: Dict[str, Callable[[PatientContext], str]] = {
    "AGE": lambda ctx: ctx.age_text,
    "GENDER": lambda ctx: ctx.gender_text,
    "PATIENT": lambda ctx: ctx.patient_phrase,
    "BP": lambda ctx: ctx.blood_pressure_text,
    "MEDS": lambda ctx: ctx.medications_text,
    "ALLERGIES": lambda ctx: ctx.allergies_text,
    "CONDITION": lambda ctx: ctx.condition_text,
    "FAMILY_HISTORY": lambda ctx: ctx.family_history_text,
    "DOB": lambda ctx: ctx.dob_text,
    "PHONE": lambda ctx: ctx.phone_text,
    "EMAIL": lambda ctx: ctx.email_text,
    "ADDRESS": lambda ctx: ctx.address_text,
    "RISK": lambda ctx: ctx.risk_text,
}

_PLACEHOLDER_RE = re.compile(r"\{\{\s*([A-Z_]+)\s*\}\}")


def list_shortcuts(registry: Optional[ShortcutRegistry] = None) -> List[Dict[str, str]]:
    """Catalog for autocomplete/help surfaces: templates first, then macros."""
    reg = DEFAULT_REGISTRY if registry is None else registry
    return [entry.to_dict() for entry in reg.entries()]


def fill_placeholders(content: str, ctx: PatientContext) -> str:
    def _sub(m: "re.Match[str]") -> str:
        fn = PLACEHOLDERS.get(m.group(1))
        return fn(ctx) if fn else m.group(0)

    return _PLACEHOLDER_RE.sub(_sub, content)


def _text_generator(content: str) -> Callable[[PatientContext], str]:
    return lambda ctx: fill_placeholders(content, ctx)


def _clean_str(x: Any) -> str:
    return (str(x).strip() if x is not None else "")


def _store_path(path: Optional[str]) -> str:
    return (path or os.getenv(ENV_CUSTOM_SHORTCUTS_PATH) or "").strip()


def _safe_json_load(path: str) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return data if isinstance(data, dict) else {}
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as e:
        logger.warning("shortcuts.custom unreadable path=%s error=%s", path, e)
        return {}


def load_custom_shortcuts(path: Optional[str] = None) -> List[ShortcutTemplate]:
    """
    Read clinician-authored shortcuts from a JSON file:

        {"shortcuts": [{"key": "#asthma", "description": "...", "content": "..."}]}

    Content may use {{AGE}}, {{BP}}, {{MEDS}}... placeholders. A missing file
    yields no entries; malformed entries are skipped.
    """
    p = _store_path(path)
    if not p:
        return []
    raw = _safe_json_load(p).get("shortcuts", [])
    if not isinstance(raw, list):
        return []
    out: List[ShortcutTemplate] = []
    for item in raw:
        if not isinstance(item, dict):
            continue
        key = _clean_str(item.get("key"))
        content = _clean_str(item.get("content"))
        description = _clean_str(item.get("description")) or f"Insert {key} text"
        if not key or not content:
            continue
        if not key.startswith((TEMPLATE_PREFIX, MACRO_PREFIX)) or len(key) < 2 or any(ch.isspace() for ch in key):
            logger.warning("shortcuts.custom skipping invalid key=%r path=%s", key, p)
            continue
        out.append(ShortcutTemplate(key=key, description=description, generate=_text_generator(content)))
    logger.info("shortcuts.custom loaded=%s path=%s", len(out), p)
    return out


def load_registry(path: Optional[str] = None) -> ShortcutRegistry:
    """Default catalog plus any custom shortcuts; custom keys override built-ins."""
    custom = load_custom_shortcuts(path)
    if not custom:
        return DEFAULT_REGISTRY
    return DEFAULT_REGISTRY.with_entries(*custom)
