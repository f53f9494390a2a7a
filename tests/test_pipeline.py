import unittest
from datetime import date

from notecore.patient_context import to_patient_context
from notecore.pipeline import prepare_note, save_note
from notecore.sections import SOAP_SCHEMA, NoteSections, parse_sections


class TestPrepareNote(unittest.TestCase):
    def setUp(self):
        self.ctx = to_patient_context({"age": 45, "gender": "male", "bp": "120/80"})

    def test_sections_combined_when_no_content(self):
        sections = NoteSections(chief_complaint="Cough", plan="Fluids")
        draft = prepare_note(sections, on_date=date(2026, 3, 1))
        self.assertEqual(draft.content, "CHIEF COMPLAINT:\nCough\n\nPLAN:\nFluids")
        self.assertEqual(draft.title, "Visit Note")
        self.assertEqual(draft.date, "2026-03-01")
        self.assertEqual(parse_sections(draft.content), sections)

    def test_free_content_wins(self):
        draft = prepare_note(NoteSections(plan="Fluids"), content="Typed note", title=" Clinic ")
        self.assertEqual(draft.content, "Typed note")
        self.assertEqual(draft.title, "Clinic")

    def test_empty_note_still_has_content(self):
        draft = prepare_note(content="   ", schema=SOAP_SCHEMA)
        self.assertEqual(draft.content, "Note content not yet documented")

    def test_shortcuts_expanded_with_patient(self):
        sections = NoteSections(vital_signs="@bp")
        draft = prepare_note(sections, patient=self.ctx)
        self.assertEqual(draft.content, "VITAL SIGNS:\nBlood pressure: 120/80")
        untouched = prepare_note(sections)
        self.assertEqual(untouched.content, "VITAL SIGNS:\n@bp")

    def test_follow_up_title_and_payload_type(self):
        draft = prepare_note(content="Doing well", note_type="follow-up", on_date=date(2026, 3, 1))
        self.assertEqual(draft.title, "Follow-up Note")
        self.assertEqual(
            draft.to_payload(),
            {"title": "Follow-up Note", "content": "Doing well", "date": "2026-03-01", "type": "follow_up"},
        )


class TestSaveNote(unittest.TestCase):
    def setUp(self):
        self.draft = prepare_note(content="Doing well", on_date=date(2026, 3, 1))

    def test_sink_receives_payload(self):
        received = []
        self.assertTrue(save_note(self.draft, received.append))
        self.assertEqual(received[0]["content"], "Doing well")
        self.assertEqual(received[0]["type"], "visit")

    def test_sink_failure_is_reported(self):
        def failing_sink(payload):
            raise ConnectionError("API unavailable")

        with self.assertLogs("notecore.pipeline", level="WARNING"):
            self.assertFalse(save_note(self.draft, failing_sink))

    def test_sink_returning_false(self):
        self.assertFalse(save_note(self.draft, lambda payload: False))


if __name__ == "__main__":
    unittest.main()
