from __future__ import annotations

from typing import Tuple

from .models import PatientContext
from .sections.schema import FULL_SCHEMA, NoteSections, SectionSchema


def _append(existing: str, block: str) -> str:
    return f"{existing}\n\n{block}" if existing.strip() else block


def _target(schema: SectionSchema, candidates: Tuple[str, ...]) -> str:
    for key in candidates:
        if key in schema.keys():
            return key
    raise ValueError(f"Schema {schema.name!r} has none of the sections {list(candidates)}")


def quick_fill_vitals(
    sections: NoteSections,
    ctx: PatientContext,
    *,
    schema: SectionSchema = FULL_SCHEMA,
) -> NoteSections:
    """
    Put the recorded blood pressure into the vital signs field. Schemas
    without one (SOAP) get the line appended to the physical exam instead.
    """
    if not ctx.blood_pressure:
        return sections
    line = f"BP: {ctx.blood_pressure}"
    key = _target(schema, ("vital_signs", "physical_exam"))
    if key == "vital_signs":
        return sections.model_copy(update={key: line})
    return sections.model_copy(update={key: _append(sections.get(key), line)})


def quick_fill_medications(
    sections: NoteSections,
    ctx: PatientContext,
    *,
    schema: SectionSchema = FULL_SCHEMA,
) -> NoteSections:
    if not ctx.active_medications:
        return sections
    key = _target(schema, ("plan",))
    block = f"Current Medications:\n{ctx.medications_text}"
    return sections.model_copy(update={key: _append(sections.get(key), block)})


def quick_fill_allergies(
    sections: NoteSections,
    ctx: PatientContext,
    *,
    schema: SectionSchema = FULL_SCHEMA,
) -> NoteSections:
    if not ctx.allergies:
        return sections
    key = _target(schema, ("hpi",))
    block = f"Allergies: {ctx.allergies_text}"
    return sections.model_copy(update={key: _append(sections.get(key), block)})
