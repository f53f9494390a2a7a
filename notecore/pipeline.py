from __future__ import annotations

import logging
from datetime import date
from typing import Any, Callable, Dict, Literal, Mapping, Optional, Union

from .models import PatientContext, StrictBaseModel
from .sections.renderer import combine_sections
from .sections.schema import FULL_SCHEMA, NoteSections, SectionSchema
from .shortcuts.engine import ExpansionEngine, default_engine

logger = logging.getLogger("notecore.pipeline")

NoteType = Literal["visit", "consultation", "procedure", "follow-up"]

# Receives {title, content, date, type}; raising or returning False is a failed save.
NoteSink = Callable[[Dict[str, Any]], Any]


class NoteDraft(StrictBaseModel):
    title: str
    content: str
    date: str
    type: NoteType = "visit"

    def to_payload(self) -> Dict[str, Any]:
        # The notes API spells follow-up with an underscore.
        return {
            "title": self.title,
            "content": self.content,
            "date": self.date,
            "type": "follow_up" if self.type == "follow-up" else self.type,
        }


def prepare_note(
    sections: Union[NoteSections, Mapping[str, Any], None] = None,
    *,
    content: str = "",
    title: str = "",
    note_type: NoteType = "visit",
    patient: Optional[PatientContext] = None,
    schema: SectionSchema = FULL_SCHEMA,
    engine: Optional[ExpansionEngine] = None,
    on_date: Optional[date] = None,
) -> NoteDraft:
    """
    Build the note to persist: free-typed content wins when present, otherwise
    the section fields are combined. Shortcuts are expanded when a patient
    context is available.
    """
    final_content = content if (content or "").strip() else combine_sections(sections, schema=schema)

    eng = engine or default_engine
    if patient is not None and eng.has_shortcuts(final_content):
        final_content = eng.expand(final_content, patient)

    note_title = (title or "").strip() or f"{note_type.capitalize()} Note"
    return NoteDraft(
        title=note_title,
        content=final_content,
        date=(on_date or date.today()).isoformat(),
        type=note_type,
    )


def save_note(draft: NoteDraft, sink: NoteSink) -> bool:
    """Hand the note to the caller's store; a failure is reported, not raised."""
    try:
        result = sink(draft.to_payload())
    except Exception as e:
        logger.warning("note.save failed title=%r; caller keeps local copy: %s", draft.title, e)
        return False
    ok = result is not False
    logger.info("note.save ok=%s type=%s chars=%s", ok, draft.type, len(draft.content))
    return ok
