import unittest

from chordtrainer.theory.chord import (
    ChordData,
    calculate_chord_notes,
    create_chord,
    generate_chord_name,
    generate_note_strings,
    scale_degrees_for,
)
from chordtrainer.theory.note_utils import note_to_midi, note_to_numeric
from chordtrainer.theory.patterns import build_catalog

C, E, G, D, A = 1, 5, 8, 3, 10


class ChordGenerationTests(unittest.TestCase):
    def setUp(self) -> None:
        self.catalog = build_catalog()

    def test_calculate_chord_notes(self) -> None:
        self.assertEqual(calculate_chord_notes(C, [0, 4, 7]), [1, 5, 8])
        # B major: B D# F#
        self.assertEqual(calculate_chord_notes(12, [0, 4, 7]), [12, 4, 7])
        self.assertEqual(calculate_chord_notes(C, [-8, -5, 0]), [5, 8, 1])

    def test_pitch_classes_stay_in_range(self) -> None:
        for root in range(1, 13):
            for pc in calculate_chord_notes(root, range(-12, 25)):
                self.assertTrue(1 <= pc <= 12)

    def test_names(self) -> None:
        c = self.catalog.require
        self.assertEqual(generate_chord_name(C, c("major", 0)), "C")
        self.assertEqual(generate_chord_name(C, c("minor7", 0)), "Cm7")
        self.assertEqual(generate_chord_name(C, c("major", 1)), "C/E")
        self.assertEqual(generate_chord_name(G, c("dominant7", 2)), "G7/D")
        self.assertEqual(generate_chord_name(A, c("minor", 2)), "Am/E")
        self.assertEqual(generate_chord_name(D, c("major", 1)), "D/F#")

    def test_note_strings(self) -> None:
        c = self.catalog.require
        self.assertEqual(generate_note_strings(C, c("major", 0)), ["C4", "E4", "G4"])
        self.assertEqual(generate_note_strings(C, c("major", 1)), ["E4", "G4", "C5"])
        self.assertEqual(generate_note_strings(C, c("major", 2)), ["G4", "C5", "E5"])
        self.assertEqual(generate_note_strings(G, c("major", 0)), ["G4", "B4", "D5"])
        self.assertEqual(generate_note_strings(G, c("dominant7", 2)), ["D4", "F4", "G4", "B4"])
        self.assertEqual(generate_note_strings(C, c("minor", 0), base_octave=3), ["C3", "Eb3", "G3"])

    def test_scale_degrees_rotate_with_inversion(self) -> None:
        c = self.catalog.require
        self.assertEqual(scale_degrees_for(C, c("major", 0)), {0: "1", 1: "3", 2: "5"})
        self.assertEqual(scale_degrees_for(C, c("major", 1)), {0: "3", 1: "5", 2: "1"})
        self.assertEqual(scale_degrees_for(G, c("dominant7", 2)), {0: "5", 1: "b7", 2: "1", 3: "3"})

    def test_generated_notes_round_trip_and_ascend(self) -> None:
        for pattern in self.catalog:
            for root in range(1, 13):
                notes = generate_note_strings(root, pattern)
                pcs = calculate_chord_notes(root, pattern.intervals)
                self.assertEqual([note_to_numeric(n) for n in notes], pcs)
                midis = [note_to_midi(n) for n in notes]
                self.assertEqual(midis, sorted(set(midis)), (root, pattern.type, pattern.inversion))


class ChordDataTests(unittest.TestCase):
    def test_create_chord(self) -> None:
        pattern = build_catalog().require("minor", 1)
        chord = create_chord(A, pattern, 7, "level5")
        self.assertEqual(chord.id, 7)
        self.assertEqual(chord.name, "Am/C")
        self.assertEqual(chord.notes, ("C4", "E4", "A4"))
        self.assertEqual(chord.note_numbers, (1, 5, 10))
        self.assertEqual(chord.root_note, A)
        self.assertEqual(chord.root_name, "A")
        self.assertEqual(chord.inversion, 1)
        self.assertEqual(chord.bass_degree, "b3")
        self.assertEqual(chord.chord_type, "minor")
        self.assertEqual(len(chord.notes), len(chord.note_numbers))
        self.assertEqual(len(chord.notes), len(chord.scale_degrees))

    def test_chord_is_immutable(self) -> None:
        chord = create_chord(C, build_catalog().require("major", 0), 1, "level1")
        with self.assertRaises(Exception):
            chord.name = "X"  # type: ignore[misc]
        with self.assertRaises(TypeError):
            chord.scale_degrees[0] = "3"  # type: ignore[index]

    def test_json_uses_wire_names(self) -> None:
        chord = create_chord(C, build_catalog().require("major", 0), 1, "level1")
        data = chord.to_json()
        self.assertEqual(data["noteNumbers"], [1, 5, 8])
        self.assertEqual(data["rootNote"], 1)
        self.assertEqual(data["scaleDegrees"], {0: "1", 1: "3", 2: "5"})
        self.assertEqual(ChordData.from_json(data), chord)


if __name__ == "__main__":
    unittest.main()
