from __future__ import annotations

from ..models import PatientContext
from .registry import ShortcutTemplate

DIABETES_MED_MARKERS = ("metformin", "insulin", "glipizide", "glimepiride")
ANTIHYPERTENSIVE_MARKERS = ("lisinopril", "amlodipine", "losartan", "metoprolol")
SYSTOLIC_TARGET = 140

DIABETES_TEMPLATE = """DIABETES VISIT

Chief Complaint: Follow-up for diabetes management

History of Present Illness:
Patient is a {patient} with type 2 diabetes mellitus. {med_line}

Review of Systems:
- No polyuria, polydipsia, or polyphagia
- No vision changes
- No numbness or tingling in extremities
- No foot ulcers or wounds

Assessment:
Type 2 Diabetes Mellitus - {control}

Plan:
- Continue current diabetes medications
- Monitor HbA1c every 3 months
- Annual diabetic eye exam
- Annual diabetic foot exam
- Continue diet and exercise counseling""".strip()

HYPERTENSION_TEMPLATE = """HYPERTENSION VISIT

Chief Complaint: Follow-up for hypertension management

History of Present Illness:
Patient is a {patient} with hypertension. Current BP: {bp}. {med_line}

Review of Systems:
- No chest pain or palpitations
- No headaches
- No vision changes
- No shortness of breath

Assessment:
Hypertension - {control}

Plan:
- Continue current antihypertensive medications
- Monitor blood pressure regularly
- Lifestyle modifications: DASH diet, regular exercise
- Follow-up in 3 months""".strip()

WELLNESS_TEMPLATE = """ANNUAL WELLNESS VISIT

Chief Complaint: Annual wellness examination

History of Present Illness:
Patient is a {patient} presenting for annual wellness visit. {med_line}

Review of Systems:
- General: No weight changes, fatigue, or fever
- Cardiovascular: No chest pain, palpitations, or shortness of breath
- Respiratory: No cough, wheezing, or dyspnea
- Gastrointestinal: No abdominal pain, nausea, or changes in bowel habits
- Genitourinary: No dysuria, frequency, or urgency
- Neurological: No headaches, dizziness, or weakness
- Musculoskeletal: No joint pain or stiffness
- Skin: No rashes or lesions

Assessment:
- Healthy {patient}
- Continue preventive care measures

Plan:
- Annual screening labs
- Age-appropriate cancer screenings
- Vaccination review
- Lifestyle counseling: diet, exercise, smoking cessation if applicable
- Follow-up in 1 year""".strip()

COLD_TEMPLATE = """UPPER RESPIRATORY INFECTION

Chief Complaint: Cold symptoms

History of Present Illness:
Patient presents with recent history of:
- Nasal congestion
- Rhinorrhea
- Cough
- Sore throat

Review of Systems:
- No fever
- No shortness of breath
- No chest pain

Assessment:
Upper Respiratory Infection, likely viral

Plan:
- Supportive care: rest, fluids, saline nasal spray
- Symptomatic treatment as needed
- Return if symptoms worsen or persist >10 days
- Follow-up PRN""".strip()


def diabetes_visit(ctx: PatientContext) -> str:
    meds = ctx.medications_matching(DIABETES_MED_MARKERS)
    return DIABETES_TEMPLATE.format(
        patient=ctx.patient_phrase,
        med_line=f"Currently on {', '.join(meds)}." if meds else "No current diabetes medications.",
        control="Well controlled" if ctx.has_condition("diabetes") else "Needs optimization",
    )


def _bp_control(ctx: PatientContext) -> str:
    values = ctx.blood_pressure_values()
    if values is None:
        return "Status unknown"
    return "Well controlled" if values[0] < SYSTOLIC_TARGET else "Needs optimization"


def hypertension_visit(ctx: PatientContext) -> str:
    meds = ctx.medications_matching(ANTIHYPERTENSIVE_MARKERS)
    return HYPERTENSION_TEMPLATE.format(
        patient=ctx.patient_phrase,
        bp=ctx.blood_pressure_text,
        med_line=f"Currently on {', '.join(meds)}." if meds else "No current antihypertensive medications.",
        control=_bp_control(ctx),
    )


def wellness_visit(ctx: PatientContext) -> str:
    count = len(ctx.active_medications)
    return WELLNESS_TEMPLATE.format(
        patient=ctx.patient_phrase,
        med_line=f"Currently taking {count} medication(s)." if count else "No current medications.",
    )


def cold_visit(ctx: PatientContext) -> str:
    return COLD_TEMPLATE


SHORTCUT_TEMPLATES = (
    ShortcutTemplate("#diabetes", "Insert diabetes visit template", diabetes_visit),
    ShortcutTemplate("#hypertension", "Insert hypertension visit template", hypertension_visit),
    ShortcutTemplate("#wellness", "Insert annual wellness visit template", wellness_visit),
    ShortcutTemplate("#cold", "Insert upper respiratory infection template", cold_visit),
)
