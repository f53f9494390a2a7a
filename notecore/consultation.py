from __future__ import annotations

from typing import List, Optional, Tuple

from pydantic import ConfigDict, Field

from .models import PatientContext, StrictBaseModel
from .sections.renderer import NoteCatalogs, bullet_lines, combine_sections
from .sections.schema import FULL_SCHEMA, NoteSections

CONSULTATION_KEYS = (
    "chief_complaint",
    "hpi",
    "review_of_systems",
    "vital_signs",
    "physical_exam",
    "assessment",
    "plan",
)


class ConsultationTemplate(StrictBaseModel):
    """Specialty consultation template as saved from the template editor (ids and timestamps ignored)."""
    model_config = ConfigDict(extra="ignore", validate_assignment=True, populate_by_name=True)

    name: str = ""
    specialty: Optional[str] = None
    chief_complaint: str = Field("", alias="chiefComplaint")
    history_of_present_illness: str = Field("", alias="historyOfPresentIllness")
    review_of_systems: List[str] = Field(default_factory=list, alias="reviewOfSystems")
    physical_examination: List[str] = Field(default_factory=list, alias="physicalExamination")
    assessment: str = ""
    plan: List[str] = Field(default_factory=list)
    common_diagnoses: List[str] = Field(default_factory=list, alias="commonDiagnoses")
    common_tests: List[str] = Field(default_factory=list, alias="commonTests")
    common_medications: List[str] = Field(default_factory=list, alias="commonMedications")


def _bullets_or(items: List[str], fallback: str) -> str:
    lines = bullet_lines(items)
    return "\n".join(lines) if lines else fallback


def build_consultation_note(
    template: ConsultationTemplate,
    ctx: PatientContext,
) -> Tuple[NoteSections, NoteCatalogs]:
    sections = NoteSections(
        chief_complaint=template.chief_complaint.strip() or "Chief complaint to be documented",
        hpi=template.history_of_present_illness.strip() or "History of present illness to be documented",
        review_of_systems=_bullets_or(template.review_of_systems, "Review of systems to be documented"),
        vital_signs=f"BP: {ctx.blood_pressure_text}",
        physical_exam=_bullets_or(template.physical_examination, "Physical examination to be documented"),
        assessment=template.assessment.strip() or "Assessment to be documented",
        plan=_bullets_or(template.plan, "Plan to be documented"),
    )
    catalogs = NoteCatalogs(
        diagnoses=list(template.common_diagnoses),
        tests=list(template.common_tests),
        medications=list(template.common_medications),
    )
    return sections, catalogs


def render_consultation_note(
    template: ConsultationTemplate,
    ctx: PatientContext,
    *,
    include_diagnoses: bool = True,
    include_tests: bool = True,
    include_medications: bool = True,
) -> str:
    sections, catalogs = build_consultation_note(template, ctx)
    catalogs = catalogs.model_copy(
        update={
            "include_diagnoses": include_diagnoses,
            "include_tests": include_tests,
            "include_medications": include_medications,
        }
    )
    return combine_sections(
        sections,
        include=CONSULTATION_KEYS,
        placeholder_mode=True,
        catalogs=catalogs,
        schema=FULL_SCHEMA,
    )
