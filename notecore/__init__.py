from .models import PatientContext, PatientRecord
from .patient_context import to_patient_context
from .sections import NoteCatalogs, NoteSections, combine_sections, parse_sections
from .shortcuts import expand, has_shortcuts, list_shortcuts

__all__ = [
    "parse_sections",
    "combine_sections",
    "expand",
    "has_shortcuts",
    "list_shortcuts",
    "to_patient_context",
    "NoteSections",
    "NoteCatalogs",
    "PatientContext",
    "PatientRecord",
]
