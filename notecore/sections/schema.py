from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional, Tuple

from pydantic import ConfigDict, Field, field_validator

from ..models import StrictBaseModel

PLACEHOLDER_TEXT = "[To be documented]"
EMPTY_NOTE_TEXT = "Note content not yet documented"


@dataclass(frozen=True)
class SectionDescriptor:
    key: str
    header_label: str
    order: int
    alias: str
    # Regex for spelling variants seen in stored notes; defaults to the label.
    header_pattern: str = ""

    @property
    def header_regex(self) -> str:
        if self.header_pattern:
            return self.header_pattern
        return r"\s+".join(re.escape(word) for word in self.header_label.split())


@dataclass(frozen=True)
class SectionSchema:
    name: str
    sections: Tuple[SectionDescriptor, ...]

    def __post_init__(self) -> None:
        orders = [d.order for d in self.sections]
        if orders != sorted(orders) or len(set(orders)) != len(orders):
            raise ValueError(f"Section schema {self.name!r} must be strictly ordered")

    def __iter__(self):
        return iter(self.sections)

    def __len__(self) -> int:
        return len(self.sections)

    def keys(self) -> Tuple[str, ...]:
        return tuple(d.key for d in self.sections)

    def resolve_key(self, key: str) -> Optional[str]:
        """Map a snake_case key or its camelCase alias to the schema key."""
        for d in self.sections:
            if key in (d.key, d.alias):
                return d.key
        return None

    def after(self, key: str) -> Tuple[SectionDescriptor, ...]:
        for idx, d in enumerate(self.sections):
            if d.key == key:
                return self.sections[idx + 1:]
        raise KeyError(key)

    def subset(self, name: str, keys: Iterable[str]) -> "SectionSchema":
        wanted = set(keys)
        unknown = wanted - set(self.keys())
        if unknown:
            raise ValueError(f"Unknown section keys: {sorted(unknown)}")
        return SectionSchema(name=name, sections=tuple(d for d in self.sections if d.key in wanted))


FULL_SCHEMA = SectionSchema(
    name="full",
    sections=(
        SectionDescriptor("chief_complaint", "CHIEF COMPLAINT", 1, "chiefComplaint"),
        SectionDescriptor("hpi", "HISTORY OF PRESENT ILLNESS", 2, "hpi"),
        SectionDescriptor("review_of_systems", "REVIEW OF SYSTEMS", 3, "reviewOfSystems"),
        SectionDescriptor("vital_signs", "VITAL SIGNS", 4, "vitalSigns"),
        SectionDescriptor("physical_exam", "PHYSICAL EXAMINATION", 5, "physicalExam"),
        SectionDescriptor("social_history", "SOCIAL HISTORY", 6, "socialHistory"),
        SectionDescriptor("family_history", "FAMILY HISTORY", 7, "familyHistory"),
        SectionDescriptor("medication_reconciliation", "MEDICATION RECONCILIATION", 8, "medicationReconciliation"),
        SectionDescriptor("diagnosis_codes", "DIAGNOSIS CODES", 9, "diagnosisCodes", r"DIAGNOSIS\s+CODES?"),
        SectionDescriptor("assessment", "ASSESSMENT", 10, "assessment"),
        SectionDescriptor("plan", "PLAN", 11, "plan"),
        SectionDescriptor("patient_instructions", "PATIENT INSTRUCTIONS", 12, "patientInstructions", r"PATIENT\s+INSTRUCTIONS?"),
        SectionDescriptor("follow_up", "FOLLOW-UP", 13, "followUp", r"FOLLOW[\s-]?UP"),
    ),
)

SOAP_SCHEMA = FULL_SCHEMA.subset("soap", ("chief_complaint", "hpi", "physical_exam", "assessment", "plan"))

SCHEMAS: Dict[str, SectionSchema] = {s.name: s for s in (FULL_SCHEMA, SOAP_SCHEMA)}


class NoteSections(StrictBaseModel):
    """
    Per-section note fields. Accepts snake_case names or the camelCase keys
    the note form uses; UI form state also carries title/content/type, which
    are ignored here.
    """
    model_config = ConfigDict(extra="ignore", validate_assignment=True, populate_by_name=True)

    chief_complaint: str = Field("", alias="chiefComplaint")
    hpi: str = ""
    review_of_systems: str = Field("", alias="reviewOfSystems")
    vital_signs: str = Field("", alias="vitalSigns")
    physical_exam: str = Field("", alias="physicalExam")
    social_history: str = Field("", alias="socialHistory")
    family_history: str = Field("", alias="familyHistory")
    medication_reconciliation: str = Field("", alias="medicationReconciliation")
    diagnosis_codes: str = Field("", alias="diagnosisCodes")
    assessment: str = ""
    plan: str = ""
    patient_instructions: str = Field("", alias="patientInstructions")
    follow_up: str = Field("", alias="followUp")

    @field_validator("*", mode="before")
    @classmethod
    def _none_as_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    def get(self, key: str) -> str:
        return getattr(self, key)

    def non_empty(self) -> Dict[str, str]:
        return {k: v.strip() for k, v in self.model_dump().items() if v.strip()}

    def to_form(self) -> Dict[str, str]:
        return self.model_dump(by_alias=True)
