import io
import json
import tempfile
import unittest
from contextlib import redirect_stderr
from pathlib import Path

from chordtrainer.app import explain
from chordtrainer.stats.stats import format_summary, new_session_stats, update_stats, write_stats
from chordtrainer.theory.matcher import check_chord_match


class StatsTests(unittest.TestCase):
    def test_update_and_summary(self) -> None:
        stats = new_session_stats("level5")
        update_stats(stats, "major", True)
        update_stats(stats, "major", False)
        update_stats(stats, "minor", True)
        self.assertEqual(stats["total"], 3)
        self.assertEqual(stats["correct"], 2)
        self.assertEqual(stats["per_type"]["major"], {"asked": 2, "correct": 1})
        lines = format_summary(stats).splitlines()
        self.assertEqual(lines[0], "Score: 2/3 (67%)")
        # weakest type first
        self.assertTrue(lines[1].strip().startswith("major"))

    def test_empty_summary(self) -> None:
        self.assertEqual(format_summary(new_session_stats()), "Score: 0/0 (0%)")

    def test_write_stats(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "nested" / "stats.json"
            write_stats(new_session_stats("level1"), str(path))
            self.assertEqual(json.loads(path.read_text(encoding="utf-8"))["difficulty"], "level1")


class ExplainTests(unittest.TestCase):
    def tearDown(self) -> None:
        explain.enable(False)

    def test_disabled_by_default(self) -> None:
        buf = io.StringIO()
        with redirect_stderr(buf):
            check_chord_match(["C4", "E4", "G4"], ["C4", "E4", "G4"])
        self.assertEqual(buf.getvalue(), "")

    def test_match_trace(self) -> None:
        explain.enable(True, ["match_checked"])
        buf = io.StringIO()
        with redirect_stderr(buf):
            check_chord_match(["C4", "E4", "G4"], ["E4", "G4", "C5"])
            explain.trace("other_event", {"x": 1})
        lines = buf.getvalue().splitlines()
        self.assertEqual(len(lines), 1)
        self.assertTrue(lines[0].startswith("[EXPLAIN] match_checked :: "))
        payload = json.loads(lines[0].split(" :: ", 1)[1])
        self.assertFalse(payload["match"])


if __name__ == "__main__":
    unittest.main()
