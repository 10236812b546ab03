import struct
import unittest

from tests.wadbuild import build_wad, header_only, name8
from wad.core.errors import InvalidFileError
from wad.core.models import WadHeader
from wad.parsers.directory import scan_directory
from wad.parsers.header import validate_header


class TestScanDirectory(unittest.TestCase):
    def test_entries_in_file_order(self) -> None:
        data = build_wad([("PLAYPAL", b"\x01" * 10), ("COLORMAP", b"\x02" * 3), ("E1M1", b"")])
        entries = list(scan_directory(data, validate_header(data)))

        self.assertEqual([e.raw_name for e in entries], [name8("PLAYPAL"), name8("COLORMAP"), name8("E1M1")])
        self.assertEqual([(e.file_pos, e.size) for e in entries], [(12, 10), (22, 3), (25, 0)])

    def test_raw_name_bytes_are_untouched(self) -> None:
        data = build_wad([(b"AB\x00CD\x00\x00\x00", b"")])
        (entry,) = scan_directory(data, validate_header(data))
        self.assertEqual(entry.raw_name, b"AB\x00CD\x00\x00\x00")

    def test_signed_fields(self) -> None:
        directory = struct.pack("<ii8s", -1, -2147483648, name8("NEG"))
        data = header_only(1, 16) + b"\x00" * 4 + directory
        (entry,) = scan_directory(data, validate_header(data))
        self.assertEqual(entry.file_pos, -1)
        self.assertEqual(entry.size, -2147483648)

    def test_duplicates_are_kept(self) -> None:
        data = build_wad([("THINGS", b""), ("THINGS", b"")])
        self.assertEqual(validate_header(data).directory_offset, 16)
        self.assertEqual(len(list(scan_directory(data, validate_header(data)))), 2)

    def test_directory_past_end_of_buffer(self) -> None:
        data = header_only(4, 16) + b"\x00" * (4 + 3 * 16)
        with self.assertRaises(InvalidFileError) as ctx:
            scan_directory(data, validate_header(data))
        self.assertEqual(ctx.exception.reason, "directory out of bounds")

    def test_huge_lump_count_fails_before_iteration(self) -> None:
        data = header_only(0x7FFFFFFF, 0x7FFFFFF0) + b"\x00" * 64
        with self.assertRaises(InvalidFileError):
            scan_directory(data, validate_header(data))

    def test_directory_ending_exactly_at_buffer_end(self) -> None:
        header = WadHeader(magic=b"IWAD", lump_count=1, directory_offset=16)
        data = header_only(1, 16) + b"\x00" * 4 + struct.pack("<ii8s", 0, 0, name8("X"))
        self.assertEqual(len(data), header.directory_end)
        self.assertEqual(len(list(scan_directory(data, header))), 1)


if __name__ == "__main__":
    unittest.main()
