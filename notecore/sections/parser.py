from __future__ import annotations

import logging
import re
from functools import lru_cache
from typing import Optional, Pattern, Tuple

from .schema import FULL_SCHEMA, NoteSections, SectionDescriptor, SectionSchema

logger = logging.getLogger("notecore.sections")


def _section_pattern(schema: SectionSchema, descriptor: SectionDescriptor) -> Pattern[str]:
    # A section ends at the header of any section that may follow it, or at end of text.
    later = [f"(?:{d.header_regex}):" for d in schema.after(descriptor.key)]
    stop = "|".join(later + [r"\Z"])
    return re.compile(
        rf"(?:{descriptor.header_regex}):\s*(.*?)(?={stop})",
        re.IGNORECASE | re.DOTALL,
    )


@lru_cache(maxsize=None)
def _compiled(schema: SectionSchema) -> Tuple[Tuple[SectionDescriptor, Pattern[str]], ...]:
    return tuple((d, _section_pattern(schema, d)) for d in schema)


def parse_sections(text: Optional[str], schema: SectionSchema = FULL_SCHEMA) -> NoteSections:
    """
    Split a canonical note back into its section fields.

    Every section is searched for independently across the whole text, so a
    later section's header appearing inside earlier free text is taken as a
    real boundary. Sections whose header is absent come back empty.
    """
    source = text or ""
    values = {}
    for descriptor, pattern in _compiled(schema):
        match = pattern.search(source)
        if match:
            values[descriptor.key] = match.group(1).strip()
    logger.debug(
        "sections.parse schema=%s chars=%s matched=%s",
        schema.name,
        len(source),
        ",".join(values) or "-",
    )
    return NoteSections(**values)
