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

from typing import Union

from aionm.exceptions import InvalidAddress

ByteArrayLike = Union[bytes, bytearray, memoryview]


def byte_array_to_string(data: ByteArrayLike) -> str:
    """Decode an ``ay`` value such as an SSID."""
    return bytes(data).decode("utf-8")


def string_to_byte_array(text: str) -> bytes:
    return text.encode("utf-8")


def uint32_to_bytes(value: int) -> bytes:
    """Big-endian encoding of an unsigned 32-bit integer."""
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 0xFFFFFFFF:
        raise InvalidAddress(value, "expected an unsigned 32-bit integer")
    return value.to_bytes(4, "big")


__all__ = ("byte_array_to_string", "string_to_byte_array", "uint32_to_bytes")
