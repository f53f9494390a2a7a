import unittest

from notecore.note_actions import detect_note_actions


class TestNoteActions(unittest.TestCase):
    def test_follow_up_detected(self):
        text = "Patient stable on current regimen.\nFollow-up in 2 weeks for BP check."
        actions = detect_note_actions(text)
        self.assertEqual(len(actions), 1)
        self.assertEqual(actions[0].kind, "follow-up")
        self.assertEqual(actions[0].data["reason"], "Follow-up in 2 weeks for BP check.")
        self.assertEqual(actions[0].data["notes"], text)

    def test_referral_specialty_and_priority(self):
        actions = detect_note_actions("Refer to cardiology for chest pain evaluation, urgent.")
        self.assertEqual(len(actions), 1)
        action = actions[0]
        self.assertEqual(action.kind, "referral")
        self.assertEqual(action.confidence, 0.9)
        self.assertEqual(action.data["specialty"], "cardiology")
        self.assertEqual(action.data["priority"], "urgent")
        self.assertEqual(action.data["reason"], "cardiology for chest pain evaluation, urgent.")

    def test_sorted_by_confidence(self):
        text = "Consult with neurology re: headaches.\nRecheck in 6 weeks."
        kinds = [a.kind for a in detect_note_actions(text)]
        self.assertEqual(kinds, ["referral", "follow-up"])

    def test_keywords_match_whole_words(self):
        actions = detect_note_actions("Send to a specialist beginning next week, stat")
        self.assertEqual(len(actions), 1)
        self.assertEqual(actions[0].data["specialty"], "other")
        self.assertEqual(actions[0].data["priority"], "stat")
        self.assertEqual(actions[0].confidence, 0.6)

    def test_short_or_plain_text(self):
        self.assertEqual(detect_note_actions("f/u 2w"), [])
        self.assertEqual(detect_note_actions("Patient doing well, no changes today."), [])
        self.assertEqual(detect_note_actions(""), [])


if __name__ == "__main__":
    unittest.main()
