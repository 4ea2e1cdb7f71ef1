"""Music-theory engine: pattern catalog, chord generation and matching."""

from .patterns import ChordPattern, ChordCatalog, CatalogLookupError, build_catalog, default_catalog  # noqa: F401
from .chord import ChordData, calculate_chord_notes, create_chord, generate_chord_name, generate_note_strings, scale_degrees_for  # noqa: F401
from .matcher import MatchReport, check_chord_match, diagnose_match  # noqa: F401
from .note_utils import note_to_numeric, parse_note  # noqa: F401
