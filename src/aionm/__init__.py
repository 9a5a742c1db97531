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

from aionm.address import (
    format_ip4_address,
    format_ip6_address,
    parse_ip4_address,
    parse_ip6_address,
)
from aionm.broadcast import (
    Broadcast,
    BroadcastStream,
    Subscription,
    distinct_until_variant_changed,
)
from aionm.bus import (
    Dbus,
    connect,
    get_current_message,
    get_default_bus,
    set_default_bus,
)
from aionm.device import (
    BLUETOOTH,
    BOND,
    BRIDGE,
    GENERIC,
    LOOPBACK,
    MODEM,
    TUN,
    VLAN,
    WIRED,
    WIRELESS,
    WIREGUARD,
    DeviceKind,
    NetworkDevice,
    merge_property_changes,
)
from aionm.ip_config import apply_nameserver_fallback, fetch_ip4_config, fetch_ip6_config
from aionm.proxy import (
    NM_SERVICE,
    InterfaceHandle,
    call,
    get_all_properties,
    get_property,
    resolve_interface,
    set_property,
)
from aionm.signal import SignalChannel, Signaler, listen_signal
from aionm.utils import byte_array_to_string, string_to_byte_array, uint32_to_bytes

from .exceptions import (
    AccessDeniedError,
    CallFailedError,
    DbusError,
    DeviceNotActiveError,
    InterfaceResolutionError,
    InvalidAddress,
    MalformedNotificationError,
    MethodCallError,
    MethodInvocationError,
    NetworkManagerError,
    PropertyFetchError,
    PropertySetError,
    ServiceUnknownError,
    UknownMethodError,
    UnknownInterfaceError,
    UnknownObjectError,
    UnknownPropertyError,
)

__all__ = (
    "AccessDeniedError",
    "CallFailedError",
    "DbusError",
    "DeviceNotActiveError",
    "InterfaceResolutionError",
    "InvalidAddress",
    "MalformedNotificationError",
    "MethodCallError",
    "MethodInvocationError",
    "NetworkManagerError",
    "PropertyFetchError",
    "PropertySetError",
    "ServiceUnknownError",
    "UknownMethodError",
    "UnknownInterfaceError",
    "UnknownObjectError",
    "UnknownPropertyError",
    "format_ip4_address",
    "format_ip6_address",
    "parse_ip4_address",
    "parse_ip6_address",
    "Broadcast",
    "BroadcastStream",
    "Subscription",
    "distinct_until_variant_changed",
    "Dbus",
    "connect",
    "get_current_message",
    "get_default_bus",
    "set_default_bus",
    "DeviceKind",
    "NetworkDevice",
    "merge_property_changes",
    "BLUETOOTH",
    "BOND",
    "BRIDGE",
    "GENERIC",
    "LOOPBACK",
    "MODEM",
    "TUN",
    "VLAN",
    "WIRED",
    "WIRELESS",
    "WIREGUARD",
    "apply_nameserver_fallback",
    "fetch_ip4_config",
    "fetch_ip6_config",
    "NM_SERVICE",
    "InterfaceHandle",
    "call",
    "get_all_properties",
    "get_property",
    "resolve_interface",
    "set_property",
    "SignalChannel",
    "Signaler",
    "listen_signal",
    "byte_array_to_string",
    "string_to_byte_array",
    "uint32_to_bytes",
)
