from __future__ import annotations

import logging
from typing import Any, Iterable, List, Mapping, Optional, Union

from pydantic import Field

from ..models import StrictBaseModel
from .schema import EMPTY_NOTE_TEXT, FULL_SCHEMA, PLACEHOLDER_TEXT, NoteSections, SectionSchema

logger = logging.getLogger("notecore.sections")

BULLET = "• "


class NoteCatalogs(StrictBaseModel):
    """Reference lists appended to a template note, each behind its own switch."""
    diagnoses: List[str] = Field(default_factory=list)
    tests: List[str] = Field(default_factory=list)
    medications: List[str] = Field(default_factory=list)

    include_diagnoses: bool = True
    include_tests: bool = True
    include_medications: bool = True


def _strip_bullets(line: str) -> str:
    raw = (line or "").lstrip()
    if raw.startswith("- "):
        return raw[2:].strip()
    if raw.startswith("• "):
        return raw[2:].strip()
    if raw.startswith("•"):
        return raw[1:].strip()
    return raw.strip()


def bullet_lines(items: Iterable[str]) -> List[str]:
    out: List[str] = []
    for item in items:
        clean = _strip_bullets(item)
        if clean:
            out.append(f"{BULLET}{clean}")
    return out


def _coerce_sections(sections: Union[NoteSections, Mapping[str, Any], None]) -> NoteSections:
    if sections is None:
        return NoteSections()
    if isinstance(sections, NoteSections):
        return sections
    return NoteSections.model_validate(dict(sections))


def _resolve_include(schema: SectionSchema, include: Optional[Iterable[str]]) -> set:
    if include is None:
        return set(schema.keys())
    resolved = set()
    unknown = []
    for key in include:
        k = schema.resolve_key(key)
        if k is None:
            unknown.append(key)
        else:
            resolved.add(k)
    if unknown:
        raise ValueError(f"Unknown section keys for schema {schema.name!r}: {sorted(unknown)}")
    return resolved


def _render_catalogs(catalogs: NoteCatalogs) -> List[str]:
    blocks: List[str] = []
    for enabled, header, items in (
        (catalogs.include_diagnoses, "COMMON DIAGNOSES TO CONSIDER", catalogs.diagnoses),
        (catalogs.include_tests, "COMMON TESTS", catalogs.tests),
        (catalogs.include_medications, "COMMON MEDICATIONS", catalogs.medications),
    ):
        if not enabled:
            continue
        lines = bullet_lines(items)
        if lines:
            blocks.append("\n".join([f"{header}:"] + lines))
    return blocks


def combine_sections(
    sections: Union[NoteSections, Mapping[str, Any], None],
    *,
    include: Optional[Iterable[str]] = None,
    placeholder_mode: bool = False,
    catalogs: Optional[NoteCatalogs] = None,
    schema: SectionSchema = FULL_SCHEMA,
) -> str:
    """
    Render section fields as the canonical note text.

    Sections are emitted in schema order as "HEADER:\\nvalue", one blank line
    apart. Empty sections are dropped, or filled with the placeholder in
    placeholder mode, where the catalog blocks may also be appended. The
    result is never empty.
    """
    note = _coerce_sections(sections)
    wanted = _resolve_include(schema, include)

    dropped = sorted(k for k in note.non_empty() if k not in schema.keys())
    if dropped:
        logger.warning("sections.combine schema=%s has no section for filled fields=%s", schema.name, ",".join(dropped))

    blocks: List[str] = []
    for descriptor in schema:
        if descriptor.key not in wanted:
            continue
        value = note.get(descriptor.key).strip()
        if value:
            blocks.append(f"{descriptor.header_label}:\n{value}")
        elif placeholder_mode:
            blocks.append(f"{descriptor.header_label}:\n{PLACEHOLDER_TEXT}")

    if placeholder_mode and catalogs is not None:
        blocks.extend(_render_catalogs(catalogs))

    if not blocks:
        logger.debug("sections.combine schema=%s empty; using fallback text", schema.name)
        return EMPTY_NOTE_TEXT
    return "\n\n".join(blocks)
