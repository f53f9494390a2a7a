from __future__ import annotations

import re
from datetime import date
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

NOT_RECORDED = "Not recorded"
NOT_AVAILABLE = "N/A"
NONE_KNOWN = "None known"
NONE_DOCUMENTED = "None documented"
NONE_RECORDED = "None recorded"

_BP_RE = re.compile(r"(\d+)\s*/\s*(\d+)")


# =========================
# Shared strict base model (Pydantic v2)
# =========================

class StrictBaseModel(BaseModel):
    """
    Strict, assignment-validating base model (Pydantic v2).
    - extra fields are forbidden (schema discipline)
    - assignment is validated (catches subtle runtime drift)
    """
    model_config = ConfigDict(extra="forbid", validate_assignment=True)


class RecordModel(BaseModel):
    """
    Incoming patient data from the chart. The chart carries far more than the
    note engine reads (appointments, labs, imaging...), so unknown fields are
    ignored rather than rejected. camelCase keys from the UI are accepted.
    """
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


# =========================
# Patient record (as supplied by the chart)
# =========================

class Medication(RecordModel):
    name: str = ""
    status: str = ""  # "Active" | "Discontinued" | "Historical" | "Archived"
    started: str = ""
    instructions: Optional[str] = None

    @property
    def is_active(self) -> bool:
        return self.status == "Active"


class Lifestyle(RecordModel):
    activity_level: Optional[str] = Field(None, alias="activityLevel")
    sleep_hours: Optional[float] = Field(None, alias="sleepHours")
    smoking_status: Optional[str] = Field(None, alias="smokingStatus")
    alcohol_use: Optional[str] = Field(None, alias="alcoholUse")


class SocialDeterminants(RecordModel):
    housing_stability: Optional[str] = Field(None, alias="housingStability")
    food_security: Optional[str] = Field(None, alias="foodSecurity")
    transportation: Optional[str] = None
    health_literacy: Optional[str] = Field(None, alias="healthLiteracy")


class PatientRecord(RecordModel):
    id: str = ""
    name: str = ""
    age: Optional[int] = None
    gender: Optional[str] = None
    bp: Optional[str] = None
    condition: Optional[str] = None
    risk: Optional[float] = None
    address: Optional[str] = None
    email: Optional[str] = None
    dob: Optional[str] = None  # leave as string (chart formats vary)
    phone: Optional[str] = None
    allergies: List[str] = Field(default_factory=list)
    family_history: List[str] = Field(default_factory=list, alias="familyHistory")
    lifestyle: Optional[Lifestyle] = None
    social_determinants: Optional[SocialDeterminants] = Field(None, alias="socialDeterminants")
    medications: List[Medication] = Field(default_factory=list)

    @field_validator("allergies", "family_history", "medications", mode="before")
    @classmethod
    def _none_as_empty(cls, v):
        return [] if v is None else v


# =========================
# Patient context (what templates and macros may read)
# =========================

class PatientContext(StrictBaseModel):
    """
    Read-only snapshot of the patient fields the expansion engine needs.
    Raw values stay Optional; the *_text accessors are the only way generated
    note text should read them, so a missing value always renders as its
    documented fallback.
    """
    model_config = ConfigDict(extra="forbid", frozen=True)

    age: Optional[int] = None
    gender: Optional[str] = None
    blood_pressure: Optional[str] = None
    active_medications: Tuple[str, ...] = ()
    allergies: Tuple[str, ...] = ()
    condition: Optional[str] = None
    family_history: Tuple[str, ...] = ()

    smoking_status: Optional[str] = None
    alcohol_use: Optional[str] = None
    activity_level: Optional[str] = None
    sleep_hours: Optional[float] = None
    housing_stability: Optional[str] = None
    food_security: Optional[str] = None
    transportation: Optional[str] = None
    health_literacy: Optional[str] = None

    dob: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    risk_score: Optional[float] = None

    @property
    def age_text(self) -> str:
        return str(self.age) if self.age is not None else NOT_AVAILABLE

    @property
    def gender_text(self) -> str:
        return self.gender or NOT_AVAILABLE

    @property
    def blood_pressure_text(self) -> str:
        return self.blood_pressure or NOT_RECORDED

    @property
    def allergies_text(self) -> str:
        return ", ".join(self.allergies) if self.allergies else NONE_KNOWN

    @property
    def condition_text(self) -> str:
        return self.condition or NONE_DOCUMENTED

    @property
    def medications_text(self) -> str:
        return ", ".join(self.active_medications) if self.active_medications else "None"

    @property
    def family_history_text(self) -> str:
        return ", ".join(self.family_history) if self.family_history else NONE_RECORDED

    @property
    def risk_text(self) -> str:
        score = self.risk_score or 0
        return str(int(score)) if float(score).is_integer() else str(score)

    @property
    def phone_text(self) -> str:
        return self.phone or NOT_RECORDED

    @property
    def email_text(self) -> str:
        return self.email or NOT_RECORDED

    @property
    def address_text(self) -> str:
        return self.address or NOT_RECORDED

    @property
    def dob_text(self) -> str:
        """Date of birth as M/D/YYYY; unparseable chart values pass through as-is."""
        if not self.dob:
            return NOT_RECORDED
        try:
            d = date.fromisoformat(self.dob[:10])
        except ValueError:
            return self.dob
        return f"{d.month}/{d.day}/{d.year}"

    @property
    def patient_phrase(self) -> str:
        return f"{self.age_text}-year-old {self.gender_text}"

    def blood_pressure_values(self) -> Optional[Tuple[int, int]]:
        m = _BP_RE.search(self.blood_pressure or "")
        if not m:
            return None
        return int(m.group(1)), int(m.group(2))

    def medications_matching(self, markers: Tuple[str, ...]) -> List[str]:
        out: List[str] = []
        for name in self.active_medications:
            low = name.lower()
            if any(marker in low for marker in markers):
                out.append(name)
        return out

    def has_condition(self, term: str) -> bool:
        return term.lower() in (self.condition or "").lower()

    def lifestyle_items(self) -> List[str]:
        items: List[str] = []
        if self.smoking_status:
            items.append(f"Smoking: {self.smoking_status}")
        if self.alcohol_use:
            items.append(f"Alcohol: {self.alcohol_use}")
        if self.activity_level:
            items.append(f"Activity: {self.activity_level.replace('_', ' ')}")
        if self.sleep_hours is not None:
            items.append(f"Sleep: {self.sleep_hours:g} hours")
        if self.housing_stability:
            items.append(f"Housing: {self.housing_stability}")
        if self.food_security:
            items.append(f"Food security: {self.food_security}")
        if self.transportation:
            items.append(f"Transportation: {self.transportation}")
        if self.health_literacy:
            items.append(f"Health literacy: {self.health_literacy}")
        return items
