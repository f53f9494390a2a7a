import unittest

from notecore.sections import FULL_SCHEMA, SOAP_SCHEMA, NoteSections, parse_sections


class TestSectionParser(unittest.TestCase):
    def test_parse_example(self):
        out = parse_sections("CHIEF COMPLAINT:\nHeadache\n\nASSESSMENT:\nMigraine")
        self.assertEqual(out.chief_complaint, "Headache")
        self.assertEqual(out.assessment, "Migraine")
        others = {k: v for k, v in out.model_dump().items() if k not in {"chief_complaint", "assessment"}}
        self.assertTrue(all(v == "" for v in others.values()))

    def test_headers_case_insensitive(self):
        out = parse_sections("chief complaint: Cough\nPlan: rest and fluids")
        self.assertEqual(out.chief_complaint, "Cough")
        self.assertEqual(out.plan, "rest and fluids")

    def test_header_not_at_line_start(self):
        out = parse_sections("Seen today. CHIEF COMPLAINT: Cough ASSESSMENT: URI")
        self.assertEqual(out.chief_complaint, "Cough")
        self.assertEqual(out.assessment, "URI")

    def test_capture_is_trimmed_and_keeps_inner_blank_lines(self):
        out = parse_sections("HISTORY OF PRESENT ILLNESS:\n\n  Line one\n\nLine two  \n\nPLAN:\nRest\n")
        self.assertEqual(out.hpi, "Line one\n\nLine two")
        self.assertEqual(out.plan, "Rest")

    def test_header_variants(self):
        out = parse_sections(
            "DIAGNOSIS CODE:\nJ06.9\n\nPATIENT INSTRUCTION:\nRest\n\nFOLLOW UP:\n2 weeks"
        )
        self.assertEqual(out.diagnosis_codes, "J06.9")
        self.assertEqual(out.patient_instructions, "Rest")
        self.assertEqual(out.follow_up, "2 weeks")

    def test_canonical_follow_up_header(self):
        out = parse_sections("PLAN:\nRest\n\nFOLLOW-UP:\nPRN")
        self.assertEqual(out.plan, "Rest")
        self.assertEqual(out.follow_up, "PRN")

    def test_headerless_and_empty_input(self):
        for text in ["just some free text", "", None]:
            out = parse_sections(text)
            self.assertEqual(out, NoteSections())

    def test_later_label_inside_earlier_content_is_a_boundary(self):
        text = "HISTORY OF PRESENT ILLNESS:\nPain. Plan: see later\n\nASSESSMENT:\nStrain"
        out = parse_sections(text)
        self.assertEqual(out.hpi, "Pain.")
        self.assertEqual(out.assessment, "Strain")
        self.assertTrue(out.plan.startswith("see later"))

    def test_soap_schema_ignores_sections_outside_subset(self):
        text = (
            "CHIEF COMPLAINT:\nCough\n\n"
            "VITAL SIGNS:\nBP 120/80\n\n"
            "PHYSICAL EXAMINATION:\nChest clear\n\n"
            "PLAN:\nFluids"
        )
        out = parse_sections(text, schema=SOAP_SCHEMA)
        self.assertEqual(out.vital_signs, "")
        self.assertEqual(out.physical_exam, "Chest clear")
        self.assertEqual(out.plan, "Fluids")
        # vital signs is not a boundary for the lighter note type
        self.assertIn("VITAL SIGNS", out.chief_complaint)

    def test_form_keys_are_camel_case(self):
        form = parse_sections("CHIEF COMPLAINT:\nCough").to_form()
        self.assertEqual(form["chiefComplaint"], "Cough")
        self.assertEqual(len(form), len(FULL_SCHEMA))


if __name__ == "__main__":
    unittest.main()
