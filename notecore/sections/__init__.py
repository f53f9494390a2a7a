from .parser import parse_sections
from .renderer import NoteCatalogs, combine_sections
from .schema import (
    EMPTY_NOTE_TEXT,
    FULL_SCHEMA,
    PLACEHOLDER_TEXT,
    SCHEMAS,
    SOAP_SCHEMA,
    NoteSections,
    SectionDescriptor,
    SectionSchema,
)

__all__ = [
    "parse_sections",
    "combine_sections",
    "NoteCatalogs",
    "NoteSections",
    "SectionDescriptor",
    "SectionSchema",
    "FULL_SCHEMA",
    "SOAP_SCHEMA",
    "SCHEMAS",
    "PLACEHOLDER_TEXT",
    "EMPTY_NOTE_TEXT",
]
