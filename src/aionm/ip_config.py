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

import logging
from typing import Any, Dict, List, Optional

from aionm.address import format_ip6_address
from aionm.bus import Dbus
from aionm.proxy import (
    NM_SERVICE,
    PropertyValue,
    get_all_properties,
    resolve_interface,
)

logger = logging.getLogger(__name__)

IP4_CONFIG_INTERFACE = "org.freedesktop.NetworkManager.IP4Config"
IP6_CONFIG_INTERFACE = "org.freedesktop.NetworkManager.IP6Config"

NAMESERVER_DATA = "NameserverData"
LEGACY_NAMESERVERS = "Nameservers"


async def fetch_ip_config(
    config_path: str,
    interface_name: str,
    *,
    bus: Optional[Dbus] = None,
    service_name: str = NM_SERVICE,
) -> Dict[str, PropertyValue]:
    handle = await resolve_interface(
        config_path, interface_name, bus=bus, service_name=service_name
    )
    return await get_all_properties(handle)


async def fetch_ip4_config(
    config_path: str,
    *,
    bus: Optional[Dbus] = None,
    service_name: str = NM_SERVICE,
) -> Dict[str, PropertyValue]:
    return await fetch_ip_config(
        config_path, IP4_CONFIG_INTERFACE, bus=bus, service_name=service_name
    )


async def fetch_ip6_config(
    config_path: str,
    *,
    bus: Optional[Dbus] = None,
    service_name: str = NM_SERVICE,
) -> Dict[str, PropertyValue]:
    properties = await fetch_ip_config(
        config_path, IP6_CONFIG_INTERFACE, bus=bus, service_name=service_name
    )
    return apply_nameserver_fallback(properties)


def _legacy_nameserver_entries(variant: Any) -> Optional[List[bytes]]:
    if not isinstance(variant, tuple) or len(variant) != 2:
        return None

    signature, value = variant
    if signature != "aay" or not isinstance(value, (list, tuple)):
        return None

    entries: List[bytes] = []
    for entry in value:
        if not isinstance(entry, (bytes, bytearray, list, tuple)) or len(entry) != 16:
            return None
        try:
            entries.append(bytes(entry))
        except (TypeError, ValueError):
            return None
    return entries


def apply_nameserver_fallback(properties: Dict[str, PropertyValue]) -> Dict[str, PropertyValue]:
    """
    Fill in ``NameserverData`` from the legacy ``Nameservers`` list.

    Older NetworkManager releases only expose the raw ``aay`` list. The
    structured field is derived only when it is missing and the legacy
    field has exactly that shape.
    """
    if NAMESERVER_DATA in properties or LEGACY_NAMESERVERS not in properties:
        return properties

    entries = _legacy_nameserver_entries(properties[LEGACY_NAMESERVERS])
    if entries is None:
        logger.warning(
            "Ignoring %s with unexpected shape: %r",
            LEGACY_NAMESERVERS,
            properties[LEGACY_NAMESERVERS],
        )
        return properties

    properties[NAMESERVER_DATA] = (
        "aa{sv}",
        [{"address": ("s", format_ip6_address(entry))} for entry in entries],
    )
    return properties



__all__ = (
    "IP4_CONFIG_INTERFACE",
    "IP6_CONFIG_INTERFACE",
    "apply_nameserver_fallback",
    "fetch_ip_config",
    "fetch_ip4_config",
    "fetch_ip6_config",
)
