import unittest

from wad.core.errors import InvalidFileError, InvalidLumpNameError
from wad.core.models import SECTIONS, DirectoryEntry, SectionMarkers
from wad.parsers.sections import SectionFilter, resolve_section
from tests.wadbuild import name8


def _entries(names: list[str | bytes]) -> list[DirectoryEntry]:
    return [
        DirectoryEntry(file_pos=100 + i * 8, size=i, raw_name=name8(name))
        for i, name in enumerate(names)
    ]


def _names(lumps) -> list[str]:
    return [lump.name for lump in lumps]


class TestSectionFilter(unittest.TestCase):
    def setUp(self) -> None:
        self.floor = SectionFilter(SECTIONS["floor"])

    def test_toggle_accumulates_multiple_sections(self) -> None:
        lumps = self.floor.collect(_entries(["A", "F_START", "B", "C", "F_END", "D", "F_START", "E"]))
        self.assertEqual(_names(lumps), ["B", "C", "E"])

    def test_lump_fields_come_from_entry(self) -> None:
        (lump,) = self.floor.collect(_entries(["F_START", "FLAT1", "F_END"]))
        self.assertEqual((lump.file_pos, lump.size, lump.name), (108, 1, "FLAT1"))

    def test_no_markers_yields_nothing(self) -> None:
        self.assertEqual(self.floor.collect(_entries(["PLAYPAL", "E1M1", "THINGS"])), [])

    def test_end_marker_while_outside_is_consumed(self) -> None:
        lumps = self.floor.collect(_entries(["F_END", "A", "F_START", "B", "F_END"]))
        self.assertEqual(_names(lumps), ["B"])

    def test_repeated_start_keeps_section_open(self) -> None:
        lumps = self.floor.collect(_entries(["F_START", "A", "F_START", "B", "F_END"]))
        self.assertEqual(_names(lumps), ["A", "B"])

    def test_marker_match_is_exact(self) -> None:
        # FF_START / F1_START in PWADs are ordinary names here
        lumps = self.floor.collect(_entries(["FF_START", "F_START", "f_end", "F1_START", "F_END"]))
        self.assertEqual(_names(lumps), ["f_end", "F1_START"])

    def test_unterminated_section_is_accepted_by_default(self) -> None:
        lumps = self.floor.collect(_entries(["F_START", "A", "B"]))
        self.assertEqual(_names(lumps), ["A", "B"])
        self.assertTrue(self.floor.unterminated)

    def test_unterminated_section_rejected_in_strict_mode(self) -> None:
        strict = SectionFilter(SECTIONS["floor"], strict=True)
        with self.assertRaises(InvalidFileError) as ctx:
            strict.collect(_entries(["F_START", "A"]))
        self.assertEqual(ctx.exception.reason, "unterminated section")

    def test_strict_mode_accepts_closed_sections(self) -> None:
        strict = SectionFilter(SECTIONS["floor"], strict=True)
        self.assertEqual(_names(strict.collect(_entries(["F_START", "A", "F_END"]))), ["A"])
        self.assertFalse(strict.unterminated)

    def test_bad_name_outside_section_still_fails(self) -> None:
        with self.assertRaises(InvalidLumpNameError):
            self.floor.collect(_entries([b"\xff\xfe", "F_START", "A", "F_END"]))

    def test_state_resets_between_calls(self) -> None:
        self.floor.collect(_entries(["F_START", "A"]))
        self.assertEqual(self.floor.collect(_entries(["B", "C"])), [])

    def test_sprite_section(self) -> None:
        sprites = SectionFilter(SECTIONS["sprite"])
        lumps = sprites.collect(_entries(["F_START", "FLAT", "F_END", "S_START", "TROOA1", "S_END"]))
        self.assertEqual(_names(lumps), ["TROOA1"])


class TestResolveSection(unittest.TestCase):
    def test_known_names(self) -> None:
        self.assertEqual(resolve_section("floor"), SectionMarkers("F_START", "F_END"))
        self.assertEqual(resolve_section("patch"), SectionMarkers("P_START", "P_END"))

    def test_markers_pass_through(self) -> None:
        markers = SectionMarkers("FF_START", "FF_END")
        self.assertIs(resolve_section(markers), markers)

    def test_unknown_name(self) -> None:
        with self.assertRaises(KeyError):
            resolve_section("music")


if __name__ == "__main__":
    unittest.main()
