from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, List, Literal

MIN_TEXT_CHARS = 20
REASON_MAX_CHARS = 200
NOTES_MAX_CHARS = 500

FOLLOW_UP_PATTERNS = [
    re.compile(p, re.IGNORECASE)
    for p in (
        r"follow.?up",
        r"f/u",
        r"return in (\d+)\s*(weeks?|months?|days?)",
        r"recheck in",
        r"review in",
    )
]

REFERRAL_PATTERNS = [
    re.compile(p, re.IGNORECASE)
    for p in (
        r"refer to",
        r"referral to",
        r"refer patient to",
        r"consult with",
        r"send to",
        r"transfer to",
    )
]

SPECIALTY_KEYWORDS: Dict[str, List[str]] = {
    "cardiology": ["cardiology", "cardiac", "heart", "cardiologist"],
    "dermatology": ["dermatology", "dermatologist", "skin"],
    "endocrinology": ["endocrinology", "endocrinologist", "diabetes", "thyroid"],
    "gastroenterology": ["gastroenterology", "gastroenterologist", "gi", "gastro"],
    "neurology": ["neurology", "neurologist", "neurological"],
    "oncology": ["oncology", "oncologist", "cancer"],
    "orthopedics": ["orthopedics", "orthopedic", "orthopedist", "bone", "joint"],
    "psychiatry": ["psychiatry", "psychiatrist", "mental health", "psychiatric"],
    "pulmonology": ["pulmonology", "pulmonologist", "lung", "respiratory"],
    "urology": ["urology", "urologist", "urological"],
}

_URGENT_RE = re.compile(r"\b(urgent|asap|as soon as possible)\b", re.IGNORECASE)
_STAT_RE = re.compile(r"\b(stat|immediate|emergency)\b", re.IGNORECASE)
_REFER_PREFIX_RE = re.compile(r"refer.*?to", re.IGNORECASE)


@dataclass(frozen=True)
class NoteAction:
    kind: Literal["follow-up", "referral"]
    confidence: float
    data: Dict[str, str] = field(default_factory=dict)


def _first_matching_line(text: str, patterns: List["re.Pattern[str]"]) -> str:
    for line in text.split("\n"):
        if any(p.search(line) for p in patterns):
            return line
    return ""


def _detect_specialty(text: str) -> str:
    low = text.lower()
    for specialty, keywords in SPECIALTY_KEYWORDS.items():
        for keyword in keywords:
            if re.search(rf"\b{re.escape(keyword)}\b", low):
                return specialty
    return ""


def _detect_priority(text: str) -> str:
    if _URGENT_RE.search(text):
        return "urgent"
    if _STAT_RE.search(text):
        return "stat"
    return "routine"


def _follow_up_action(text: str) -> List[NoteAction]:
    if not any(p.search(text) for p in FOLLOW_UP_PATTERNS):
        return []
    line = _first_matching_line(text, FOLLOW_UP_PATTERNS)
    reason = line.strip()[:REASON_MAX_CHARS] or "Follow-up consultation"
    return [
        NoteAction(
            kind="follow-up",
            confidence=0.8,
            data={"reason": reason, "notes": text[:NOTES_MAX_CHARS]},
        )
    ]


def _referral_action(text: str) -> List[NoteAction]:
    if not any(p.search(text) for p in REFERRAL_PATTERNS):
        return []
    specialty = _detect_specialty(text)
    line = _first_matching_line(text, REFERRAL_PATTERNS)
    reason = _REFER_PREFIX_RE.sub("", line, count=1).strip()[:REASON_MAX_CHARS]
    if not specialty and len(reason) <= 10:
        return []
    return [
        NoteAction(
            kind="referral",
            confidence=0.9 if specialty else 0.6,
            data={
                "specialty": specialty or "other",
                "reason": reason or "Specialist consultation",
                "priority": _detect_priority(text),
                "notes": text[:NOTES_MAX_CHARS],
            },
        )
    ]


def detect_note_actions(text: str) -> List[NoteAction]:
    """
    Suggest follow-up and referral actions from free note text, most
    confident first. Short fragments produce no suggestions.
    """
    source = text or ""
    if len(source) <= MIN_TEXT_CHARS:
        return []
    actions = _follow_up_action(source) + _referral_action(source)
    return sorted(actions, key=lambda a: a.confidence, reverse=True)
