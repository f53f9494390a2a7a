from __future__ import annotations

from ..models import NOT_RECORDED, PatientContext
from .registry import ShortcutTemplate


def _meds(ctx: PatientContext) -> str:
    if not ctx.active_medications:
        return "Current medications: None"
    lines = [f"{i}. {name}" for i, name in enumerate(ctx.active_medications, start=1)]
    return "\n".join(["Current medications:"] + lines)


def _dob(ctx: PatientContext) -> str:
    if not ctx.dob:
        return f"Date of birth: {NOT_RECORDED}"
    return f"Date of birth: {ctx.dob_text} (Age: {ctx.age_text} years)"


def _social(ctx: PatientContext) -> str:
    items = ctx.lifestyle_items()
    return f"Social history: {'; '.join(items) if items else NOT_RECORDED}"


DATA_MACROS = (
    ShortcutTemplate("@bp", "Insert blood pressure", lambda ctx: f"Blood pressure: {ctx.blood_pressure_text}"),
    ShortcutTemplate("@age", "Insert patient age", lambda ctx: f"Age: {ctx.age_text} years"),
    ShortcutTemplate("@gender", "Insert patient gender", lambda ctx: f"Gender: {ctx.gender_text}"),
    ShortcutTemplate("@meds", "Insert current medications list", _meds),
    ShortcutTemplate("@allergies", "Insert allergies list", lambda ctx: f"Allergies: {ctx.allergies_text}"),
    ShortcutTemplate("@condition", "Insert primary condition", lambda ctx: f"Primary condition: {ctx.condition_text}"),
    ShortcutTemplate("@risk", "Insert risk score", lambda ctx: f"Risk score: {ctx.risk_text}%"),
    ShortcutTemplate("@dob", "Insert date of birth", _dob),
    ShortcutTemplate("@phone", "Insert phone number", lambda ctx: f"Phone: {ctx.phone_text}"),
    ShortcutTemplate("@email", "Insert email address", lambda ctx: f"Email: {ctx.email_text}"),
    ShortcutTemplate("@address", "Insert address", lambda ctx: f"Address: {ctx.address_text}"),
    ShortcutTemplate("@familyhx", "Insert family history", lambda ctx: f"Family history: {ctx.family_history_text}"),
    ShortcutTemplate("@social", "Insert lifestyle and social factors", _social),
)
