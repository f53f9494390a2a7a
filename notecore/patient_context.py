from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Tuple, Union

from .models import PatientContext, PatientRecord

logger = logging.getLogger("notecore.patient_context")


def _clean_str(x: Any) -> Optional[str]:
    s = (str(x).strip() if x is not None else "")
    return s or None


def _clean_list(items) -> Tuple[str, ...]:
    out = []
    for item in items or []:
        s = _clean_str(item)
        if s:
            out.append(s)
    return tuple(out)


def to_patient_context(patient: Union[PatientRecord, Mapping[str, Any]]) -> PatientContext:
    """
    Project a chart record onto the fields templates and macros may read.

    Accepts a PatientRecord or a raw mapping from the chart (camelCase keys ok).
    The source is only read, never modified. Medications are narrowed to those
    with status "Active".
    """
    record = patient if isinstance(patient, PatientRecord) else PatientRecord.model_validate(dict(patient))

    lifestyle = record.lifestyle
    social = record.social_determinants

    ctx = PatientContext(
        age=record.age,
        gender=_clean_str(record.gender),
        blood_pressure=_clean_str(record.bp),
        active_medications=_clean_list(m.name for m in record.medications if m.is_active),
        allergies=_clean_list(record.allergies),
        condition=_clean_str(record.condition),
        family_history=_clean_list(record.family_history),
        smoking_status=_clean_str(lifestyle.smoking_status) if lifestyle else None,
        alcohol_use=_clean_str(lifestyle.alcohol_use) if lifestyle else None,
        activity_level=_clean_str(lifestyle.activity_level) if lifestyle else None,
        sleep_hours=lifestyle.sleep_hours if lifestyle else None,
        housing_stability=_clean_str(social.housing_stability) if social else None,
        food_security=_clean_str(social.food_security) if social else None,
        transportation=_clean_str(social.transportation) if social else None,
        health_literacy=_clean_str(social.health_literacy) if social else None,
        dob=_clean_str(record.dob),
        phone=_clean_str(record.phone),
        email=_clean_str(record.email),
        address=_clean_str(record.address),
        risk_score=record.risk,
    )
    logger.debug(
        "patient_context.built patient_id=%s active_meds=%s allergies=%s",
        record.id or "-",
        len(ctx.active_medications),
        len(ctx.allergies),
    )
    return ctx
