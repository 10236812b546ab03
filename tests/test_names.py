import unittest

from wad.core.errors import InvalidLumpNameError
from wad.parsers.names import decode_lump_name


class TestDecodeLumpName(unittest.TestCase):
    def test_zero_padded_name(self) -> None:
        self.assertEqual(decode_lump_name(b"SKY1\x00\x00\x00\x00"), "SKY1")

    def test_full_width_name_is_not_truncated(self) -> None:
        self.assertEqual(decode_lump_name(b"FLOOR0_1"), "FLOOR0_1")

    def test_stops_at_first_zero(self) -> None:
        self.assertEqual(decode_lump_name(b"AB\x00CD\x00\x00\x00"), "AB")

    def test_empty_name(self) -> None:
        self.assertEqual(decode_lump_name(b"\x00" * 8), "")

    def test_no_normalisation(self) -> None:
        self.assertEqual(decode_lump_name(b" vile\\ \x00"), " vile\\ ")

    def test_non_ascii_before_terminator(self) -> None:
        raw = b"BAD\xe9\x00\x00\x00\x00"
        with self.assertRaises(InvalidLumpNameError) as ctx:
            decode_lump_name(raw)
        self.assertEqual(ctx.exception.raw_name, raw)
        self.assertEqual(ctx.exception.reason, "undecodable name")

    def test_non_ascii_in_unterminated_name(self) -> None:
        with self.assertRaises(InvalidLumpNameError):
            decode_lump_name(b"ABCDEFG\x80")

    def test_non_ascii_after_terminator_is_ignored(self) -> None:
        self.assertEqual(decode_lump_name(b"OK\x00\xff\xff\xff\xff\xff"), "OK")

    def test_wrong_field_width(self) -> None:
        with self.assertRaises(ValueError):
            decode_lump_name(b"SHORT")


if __name__ == "__main__":
    unittest.main()
