# SPDX-License-Identifier: LGPL-2.1-or-later

# Copyright (C) 2020-2022 igo95862
# Copyright (C) 2025, Alan Dragomirecký

# This file is part of aionm, a NetworkManager binding built on aiodbus.

# This library is free software; you can redistribute it and/or
# modify it under the terms of the GNU Lesser General Public
# License as published by the Free Software Foundation; either
# version 2.1 of the License, or (at your option) any later version.

# This library is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the GNU
# Lesser General Public License for more details.

# You should have received a copy of the GNU Lesser General Public
# License along with this library; if not, write to the Free Software
# Foundation, Inc., 51 Franklin Street, Fifth Floor, Boston, MA  02110-1301 USA
from __future__ import annotations

from unittest import TestCase
from unittest import main as unittest_main

import aionm
from aionm.exceptions import InvalidAddress
from aionm.utils import byte_array_to_string, string_to_byte_array, uint32_to_bytes


class TestByteArrayString(TestCase):
    def test_decode(self) -> None:
        self.assertEqual(byte_array_to_string(b"Caf\xc3\xa9"), "Café")
        self.assertEqual(byte_array_to_string(bytearray(b"ssid")), "ssid")
        self.assertEqual(byte_array_to_string(memoryview(b"home-net")), "home-net")
        self.assertEqual(byte_array_to_string(b""), "")

    def test_encode(self) -> None:
        self.assertEqual(string_to_byte_array("Café"), b"Caf\xc3\xa9")
        self.assertEqual(string_to_byte_array(""), b"")

    def test_ssid_round_trip(self) -> None:
        for ssid in ("eduroam", "Café Wi-Fi", "网络"):
            with self.subTest(ssid=ssid):
                self.assertEqual(byte_array_to_string(string_to_byte_array(ssid)), ssid)

    def test_invalid_utf8(self) -> None:
        with self.assertRaises(UnicodeDecodeError):
            byte_array_to_string(b"\xff\xfe")


class TestUint32ToBytes(TestCase):
    def test_big_endian(self) -> None:
        self.assertEqual(uint32_to_bytes(0), b"\x00\x00\x00\x00")
        self.assertEqual(uint32_to_bytes(0x0100A8C0), b"\x01\x00\xa8\xc0")
        self.assertEqual(uint32_to_bytes(0xFFFFFFFF), b"\xff\xff\xff\xff")

    def test_out_of_range(self) -> None:
        for value in (-1, 2**32, True, 1.0, "1", None):
            with self.subTest(value=value), self.assertRaises(InvalidAddress):
                uint32_to_bytes(value)  # type: ignore[arg-type]


class TestPackageExports(TestCase):
    def test_exported(self) -> None:
        self.assertIs(aionm.byte_array_to_string, byte_array_to_string)
        self.assertIs(aionm.string_to_byte_array, string_to_byte_array)
        self.assertIs(aionm.uint32_to_bytes, uint32_to_bytes)
        for name in ("byte_array_to_string", "string_to_byte_array", "uint32_to_bytes"):
            self.assertIn(name, aionm.__all__)


if __name__ == "__main__":
    unittest_main()
