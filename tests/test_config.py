import io
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path

from chordtrainer.config.config import load_config, validate_config


class ConfigTests(unittest.TestCase):
    def test_defaults_file(self) -> None:
        cfg = validate_config(load_config())
        self.assertEqual(cfg["engine"]["default_octave"], 4)
        self.assertTrue(cfg["engine"]["strict_matching"])
        self.assertEqual(cfg["quiz"]["difficulty"], "level1")
        self.assertFalse(cfg["storage"]["enabled"])

    def test_empty_config_gets_defaults(self) -> None:
        cfg = validate_config({})
        self.assertEqual(cfg["quiz"]["questions"], 10)
        self.assertEqual(cfg["stats"]["output_path"], "./session_stats.json")

    def test_invalid_values_are_repaired(self) -> None:
        buf = io.StringIO()
        with redirect_stdout(buf):
            cfg = validate_config({"quiz": {"difficulty": "level42", "questions": "many"},
                                   "engine": {"default_octave": 99}})
        self.assertEqual(cfg["quiz"]["difficulty"], "level1")
        self.assertEqual(cfg["quiz"]["questions"], 10)
        self.assertEqual(cfg["engine"]["default_octave"], 4)
        self.assertIn("WARNING", buf.getvalue())

    def test_user_config(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "cfg.yml"
            path.write_text("quiz:\n  difficulty: level8\n  questions: 3\n", encoding="utf-8")
            cfg = validate_config(load_config(str(path)))
        self.assertEqual(cfg["quiz"]["difficulty"], "level8")
        self.assertEqual(cfg["quiz"]["questions"], 3)

    def test_missing_config_exits(self) -> None:
        with self.assertRaises(SystemExit):
            load_config("/nonexistent/chordtrainer.yml")


if __name__ == "__main__":
    unittest.main()
