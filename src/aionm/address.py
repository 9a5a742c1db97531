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
"""
Conversions between the NetworkManager wire representation of IP
addresses and their text form.

IPv4 addresses travel as a ``u`` (uint32) whose little-endian byte layout
is the address in network order, so ``0x0100a8c0`` is ``192.168.0.1``.
IPv6 addresses travel as ``ay`` holding the 16 address bytes.
"""
from __future__ import annotations

import ipaddress as _ip
from typing import Any, Optional

from aionm.exceptions import InvalidAddress

IP4_ADDRESS_SIZE = 4
IP6_ADDRESS_SIZE = 16


def format_ip4_address(raw: int) -> Optional[str]:
    """
    Render a wire IPv4 address as dotted quad.

    ``0`` means no address and gives ``None``.
    """
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise InvalidAddress(raw, "expected an unsigned 32-bit integer")

    if not 0 <= raw <= 0xFFFFFFFF:
        raise InvalidAddress(raw, "out of the unsigned 32-bit range")

    if raw == 0:
        return None

    return str(_ip.IPv4Address(raw.to_bytes(IP4_ADDRESS_SIZE, "little")))


def parse_ip4_address(text: str) -> int:
    if not isinstance(text, str):
        raise InvalidAddress(text, "expected a string")

    try:
        address = _ip.IPv4Address(text)
    except _ip.AddressValueError as e:
        raise InvalidAddress(text, str(e)) from e

    return int.from_bytes(address.packed, "little")


def _address_bytes(raw: Any) -> bytes:
    if isinstance(raw, (bytes, bytearray, memoryview)):
        return bytes(raw)

    if isinstance(raw, (list, tuple)):
        for item in raw:
            if isinstance(item, bool) or not isinstance(item, int) or not 0 <= item <= 255:
                raise InvalidAddress(raw, f"bad byte {item!r}")
        return bytes(raw)

    raise InvalidAddress(raw, "expected a byte sequence")


def format_ip6_address(raw: bytes) -> str:
    """
    Render 16 address bytes in the compressed colon-hextet form.
    """
    data = _address_bytes(raw)
    if len(data) != IP6_ADDRESS_SIZE:
        raise InvalidAddress(raw, f"expected {IP6_ADDRESS_SIZE} bytes, got {len(data)}")

    return _ip.IPv6Address(data).compressed


def parse_ip6_address(text: str) -> bytes:
    if not isinstance(text, str):
        raise InvalidAddress(text, "expected a string")

    # Scoped addresses have no wire form
    if "%" in text:
        raise InvalidAddress(text, "scope id not allowed")

    try:
        return _ip.IPv6Address(text).packed
    except _ip.AddressValueError as e:
        raise InvalidAddress(text, str(e)) from e


__all__ = (
    "format_ip4_address",
    "parse_ip4_address",
    "format_ip6_address",
    "parse_ip6_address",
)
