import unittest

from chordtrainer.theory.note_utils import (
    degree_to_semitone,
    midi_to_note,
    normalize_pitch_class,
    note_to_midi,
    note_to_numeric,
    parse_note,
)


class PitchClassTests(unittest.TestCase):
    def test_normalize_wraps_into_1_12(self) -> None:
        self.assertEqual(normalize_pitch_class(0), 12)
        self.assertEqual(normalize_pitch_class(12), 12)
        self.assertEqual(normalize_pitch_class(13), 1)
        self.assertEqual(normalize_pitch_class(24), 12)
        self.assertEqual(normalize_pitch_class(-1), 11)

    def test_parse_note(self) -> None:
        self.assertEqual(parse_note("C4"), (1, 4))
        self.assertEqual(parse_note("F#3"), (7, 3))
        self.assertEqual(parse_note("Bb5"), (11, 5))
        self.assertEqual(parse_note("Db4"), (2, 4))
        self.assertEqual(parse_note("A#2"), (11, 2))

    def test_missing_octave_defaults_to_4(self) -> None:
        self.assertEqual(parse_note("E"), (5, 4))
        self.assertEqual(parse_note("E", default_octave=3), (5, 3))

    def test_malformed_notes_are_zero(self) -> None:
        for bad in ("", "H4", "C#x", "Cb4", "44"):
            self.assertEqual(note_to_numeric(bad), 0, bad)


class DegreeTests(unittest.TestCase):
    def test_degree_offsets(self) -> None:
        expected = {"1": 0, "2": 2, "b3": 3, "3": 4, "4": 5, "b5": 6, "5": 7,
                    "#5": 8, "6": 9, "bb7": 9, "b7": 10, "7": 11}
        for degree, semis in expected.items():
            self.assertEqual(degree_to_semitone(degree), semis, degree)

    def test_unknown_degree(self) -> None:
        with self.assertRaises(ValueError):
            degree_to_semitone("9")


class MidiTests(unittest.TestCase):
    def test_midi_to_note(self) -> None:
        self.assertEqual(midi_to_note(60), "C4")
        self.assertEqual(midi_to_note(61), "C#4")
        self.assertEqual(midi_to_note(70), "Bb4")
        self.assertEqual(midi_to_note(21), "A0")

    def test_note_to_midi(self) -> None:
        self.assertEqual(note_to_midi("C4"), 60)
        self.assertEqual(note_to_midi("B3"), 59)
        self.assertEqual(note_to_midi("Eb5"), 75)
        with self.assertRaises(ValueError):
            note_to_midi("X4")


if __name__ == "__main__":
    unittest.main()
