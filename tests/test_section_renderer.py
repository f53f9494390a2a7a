import unittest

from notecore.sections import (
    EMPTY_NOTE_TEXT,
    FULL_SCHEMA,
    SOAP_SCHEMA,
    NoteCatalogs,
    NoteSections,
    combine_sections,
    parse_sections,
)


class TestCombineSections(unittest.TestCase):
    def test_empty_note_uses_fallback_text(self):
        self.assertEqual(combine_sections(NoteSections()), "Note content not yet documented")
        self.assertEqual(combine_sections({}), EMPTY_NOTE_TEXT)
        self.assertEqual(combine_sections(None), EMPTY_NOTE_TEXT)
        self.assertEqual(combine_sections({"plan": "   \n"}), EMPTY_NOTE_TEXT)

    def test_schema_order_regardless_of_input_order(self):
        out = combine_sections({"plan": "Rest", "chiefComplaint": "Cough"})
        self.assertEqual(out, "CHIEF COMPLAINT:\nCough\n\nPLAN:\nRest")

    def test_values_are_trimmed(self):
        out = combine_sections(NoteSections(assessment="  URI \n"))
        self.assertEqual(out, "ASSESSMENT:\nURI")

    def test_include_restricts_sections(self):
        sections = NoteSections(chief_complaint="Cough", plan="Rest")
        self.assertEqual(combine_sections(sections, include=["plan"]), "PLAN:\nRest")
        self.assertEqual(combine_sections(sections, include={"chiefComplaint"}), "CHIEF COMPLAINT:\nCough")

    def test_unknown_include_key_raises(self):
        with self.assertRaises(ValueError):
            combine_sections(NoteSections(plan="Rest"), include=["plan", "billing"])
        with self.assertRaises(ValueError):
            combine_sections(NoteSections(plan="Rest"), include=["vital_signs"], schema=SOAP_SCHEMA)

    def test_placeholder_mode_fills_empty_sections(self):
        out = combine_sections(
            NoteSections(chief_complaint="Cough"),
            include=["chief_complaint", "assessment"],
            placeholder_mode=True,
        )
        self.assertEqual(out, "CHIEF COMPLAINT:\nCough\n\nASSESSMENT:\n[To be documented]")

    def test_placeholder_mode_full_soap(self):
        out = combine_sections(NoteSections(), placeholder_mode=True, schema=SOAP_SCHEMA)
        self.assertEqual(out.count("[To be documented]"), 5)
        self.assertTrue(out.startswith("CHIEF COMPLAINT:\n"))
        self.assertTrue(out.endswith("PLAN:\n[To be documented]"))

    def test_placeholder_mode_with_nothing_in_scope(self):
        self.assertEqual(combine_sections(NoteSections(), include=[], placeholder_mode=True), EMPTY_NOTE_TEXT)

    def test_catalog_blocks_each_gated(self):
        catalogs = NoteCatalogs(
            diagnoses=["URI", "- Sinusitis"],
            tests=[],
            medications=["Amoxicillin"],
            include_medications=False,
        )
        out = combine_sections(
            NoteSections(plan="Rest"),
            include=["plan"],
            placeholder_mode=True,
            catalogs=catalogs,
        )
        self.assertEqual(out, "PLAN:\nRest\n\nCOMMON DIAGNOSES TO CONSIDER:\n• URI\n• Sinusitis")

    def test_catalogs_ignored_outside_placeholder_mode(self):
        out = combine_sections(NoteSections(plan="Rest"), catalogs=NoteCatalogs(tests=["CBC"]))
        self.assertEqual(out, "PLAN:\nRest")


class TestRoundTrip(unittest.TestCase):
    def test_all_sections_round_trip(self):
        values = {key: f"Value for {key.replace('_', ' ')}\nsecond line" for key in FULL_SCHEMA.keys()}
        sections = NoteSections(**values)
        self.assertEqual(parse_sections(combine_sections(sections)), sections)

    def test_sparse_round_trip_loses_only_empty_sections(self):
        sections = NoteSections(
            hpi="Three days of cough.\n\nNo fever.",
            medication_reconciliation="Metformin 500 mg BID",
            follow_up="2 weeks",
        )
        parsed = parse_sections(combine_sections(sections))
        self.assertEqual(parsed.non_empty(), sections.non_empty())

    def test_soap_round_trip(self):
        sections = NoteSections(chief_complaint="Cough", physical_exam="Clear", plan="Fluids")
        text = combine_sections(sections, schema=SOAP_SCHEMA)
        self.assertEqual(parse_sections(text, schema=SOAP_SCHEMA), sections)


if __name__ == "__main__":
    unittest.main()
