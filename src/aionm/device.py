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
from asyncio import CancelledError, Task, get_running_loop
from contextlib import AbstractAsyncContextManager
from types import MappingProxyType
from typing import (
    Any,
    Callable,
    Dict,
    Mapping,
    Optional,
    Sequence,
    Tuple,
)

from aionm.address import format_ip4_address
from aionm.broadcast import Broadcast, BroadcastStream, Subscription
from aionm.bus import Dbus, get_default_bus
from aionm.exceptions import InvalidAddress, MalformedNotificationError
from aionm.ip_config import fetch_ip4_config, fetch_ip6_config
from aionm.proxy import (
    NM_SERVICE,
    PROPERTIES_INTERFACE,
    InterfaceHandle,
    Properties,
    PropertyValue,
    call,
    get_all_properties,
    resolve_interface,
)
from aionm.signal import SignalChannel, Signaler

logger = logging.getLogger(__name__)

DEVICE_INTERFACE = "org.freedesktop.NetworkManager.Device"
PROPERTIES_CHANGED = "PropertiesChanged"

IP4_ADDRESS = "Ip4Address"
IP4_CONFIG = "Ip4Config"
IP6_CONFIG = "Ip6Config"

# NetworkManager reports "/" for an unset object path
_UNSET_PATHS = ("", "/")


class DeviceKind:
    """
    Describes one NetworkManager device type.

    Devices of every kind share the generic device interface; a kind adds
    the type specific interface and the properties it is expected to
    contribute to the snapshot.
    """

    def __init__(
        self,
        name: str,
        interface_name: str,
        expected_properties: Sequence[str] = (),
    ) -> None:
        self.name = name
        self.interface_name = interface_name
        self.expected_properties = tuple(expected_properties)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name!r}, {self.interface_name!r})"


GENERIC = DeviceKind(
    "generic",
    "org.freedesktop.NetworkManager.Device.Generic",
    ("HwAddress", "TypeDescription"),
)
WIRED = DeviceKind(
    "wired",
    "org.freedesktop.NetworkManager.Device.Wired",
    ("HwAddress", "PermHwAddress", "Speed", "Carrier"),
)
WIRELESS = DeviceKind(
    "wireless",
    "org.freedesktop.NetworkManager.Device.Wireless",
    (
        "HwAddress",
        "PermHwAddress",
        "Mode",
        "Bitrate",
        "AccessPoints",
        "ActiveAccessPoint",
        "WirelessCapabilities",
    ),
)
BLUETOOTH = DeviceKind(
    "bluetooth",
    "org.freedesktop.NetworkManager.Device.Bluetooth",
    ("HwAddress", "Name", "BtCapabilities"),
)
MODEM = DeviceKind(
    "modem",
    "org.freedesktop.NetworkManager.Device.Modem",
    ("ModemCapabilities", "CurrentCapabilities"),
)
VLAN = DeviceKind(
    "vlan",
    "org.freedesktop.NetworkManager.Device.Vlan",
    ("Parent", "VlanId"),
)
BRIDGE = DeviceKind("bridge", "org.freedesktop.NetworkManager.Device.Bridge", ("Slaves",))
BOND = DeviceKind("bond", "org.freedesktop.NetworkManager.Device.Bond", ("Slaves",))
TUN = DeviceKind("tun", "org.freedesktop.NetworkManager.Device.Tun", ("Mode", "Owner", "Group"))
WIREGUARD = DeviceKind(
    "wireguard",
    "org.freedesktop.NetworkManager.Device.WireGuard",
    ("PublicKey", "ListenPort", "FwMark"),
)
LOOPBACK = DeviceKind("loopback", "org.freedesktop.NetworkManager.Device.Loopback")


def _format_ip4_property(value: Any) -> PropertyValue:
    if not isinstance(value, tuple) or len(value) != 2:
        raise MalformedNotificationError(f"{IP4_ADDRESS} is not a variant: {value!r}")
    signature, raw = value
    if raw is None:
        return value
    return signature, format_ip4_address(raw)


def format_device_properties(properties: Mapping[str, PropertyValue]) -> Dict[str, PropertyValue]:
    """Copy of ``properties`` with wire encoded fields turned into text."""
    formatted = dict(properties)
    if IP4_ADDRESS in formatted:
        formatted[IP4_ADDRESS] = _format_ip4_property(formatted[IP4_ADDRESS])
    return formatted


def merge_property_changes(snapshot: Properties, event: Sequence[Any]) -> Properties:
    """
    Apply a ``PropertiesChanged`` body to a snapshot.

    The body is ``(interface_name, changed, invalidated)``; only ``changed``
    is used. Returns a new read-only snapshot, ``snapshot`` is not touched.
    """
    try:
        changes = event[1]
    except (TypeError, IndexError, KeyError) as e:
        raise MalformedNotificationError(f"Unexpected {PROPERTIES_CHANGED} body: {event!r}") from e

    if not isinstance(changes, Mapping):
        raise MalformedNotificationError(f"Unexpected changed properties: {changes!r}")

    for name, value in changes.items():
        if not isinstance(name, str) or not isinstance(value, tuple) or len(value) != 2:
            raise MalformedNotificationError(f"Unexpected property {name!r}: {value!r}")

    merged = dict(snapshot)
    merged.update(format_device_properties(changes))
    return MappingProxyType(merged)


class NetworkDevice(AbstractAsyncContextManager):
    """
    Live view of a NetworkManager device.

    Use :meth:`create` to build one. The snapshot in :attr:`properties` is
    replaced as a whole on every change notification and published to
    subscribers.
    """

    def __init__(
        self,
        bus: Dbus,
        device_path: str,
        kind: DeviceKind,
        device_interface: InterfaceHandle,
        kind_interface: InterfaceHandle,
        properties_interface: InterfaceHandle,
        initial_properties: Mapping[str, PropertyValue],
        signaler: Signaler,
        changes: SignalChannel,
    ) -> None:
        self._bus = bus
        self.device_path = device_path
        self.kind = kind

        self._device_interface = device_interface
        self._kind_interface = kind_interface
        self._properties_interface = properties_interface

        self._properties: Properties = MappingProxyType(dict(initial_properties))
        self._properties_broadcast: Broadcast[Properties] = Broadcast(self._properties)

        self._signaler = signaler
        self._changes = changes
        self._updates_task: Task[None] = get_running_loop().create_task(
            self._apply_property_changes()
        )

    @classmethod
    async def create(
        cls,
        device_path: str,
        kind: DeviceKind = GENERIC,
        *,
        bus: Optional[Dbus] = None,
        service_name: str = NM_SERVICE,
    ) -> NetworkDevice:
        if bus is None:
            bus = get_default_bus()

        logger.debug("Initializing %s device %s", kind.name, device_path)

        device_interface = await resolve_interface(
            device_path, DEVICE_INTERFACE, bus=bus, service_name=service_name
        )
        kind_interface = await resolve_interface(
            device_path, kind.interface_name, bus=bus, service_name=service_name
        )
        properties_interface = await resolve_interface(
            device_path, PROPERTIES_INTERFACE, bus=bus, service_name=service_name
        )

        device_properties = format_device_properties(await get_all_properties(device_interface))
        kind_properties = await get_all_properties(kind_interface)

        initial_properties = {**device_properties, **kind_properties}

        missing = [name for name in kind.expected_properties if name not in initial_properties]
        if missing:
            logger.warning(
                "Device %s is missing expected %s properties: %s",
                device_path,
                kind.name,
                ", ".join(missing),
            )

        signaler = Signaler()
        changes = await signaler.listen_signal(properties_interface, PROPERTIES_CHANGED)

        try:
            return cls(
                bus,
                device_path,
                kind,
                device_interface,
                kind_interface,
                properties_interface,
                initial_properties,
                signaler,
                changes,
            )
        except BaseException:
            signaler.close()
            raise

    @property
    def bus(self) -> Dbus:
        return self._bus

    @property
    def properties(self) -> Properties:
        """Current snapshot, read only."""
        return self._properties

    @property
    def error(self) -> Optional[BaseException]:
        """Error that stopped change tracking, if any."""
        return self._properties_broadcast.error

    def subscribe(
        self,
        on_next: Callable[[Properties], Any],
        on_error: Optional[Callable[[BaseException], Any]] = None,
    ) -> Subscription[Properties]:
        """
        Receive the current snapshot immediately and every later one.
        """
        return self._properties_broadcast.subscribe(on_next, on_error)

    def stream(self) -> AbstractAsyncContextManager[BroadcastStream[Properties]]:
        return self._properties_broadcast.stream()

    async def disconnect(self) -> None:
        """
        Disconnects a device and prevents the device from automatically
        activating further connections without user intervention.
        """
        await call(self._device_interface, "Disconnect")

    def _config_path(self, property_name: str) -> Optional[str]:
        variant = self._properties.get(property_name)
        if variant is None:
            return None
        path = variant[1]
        if not path or path in _UNSET_PATHS:
            return None
        return str(path)

    async def get_ip4_config_properties(self) -> Optional[Dict[str, PropertyValue]]:
        """
        Gets all IP4Config properties.
        """
        config_path = self._config_path(IP4_CONFIG)
        if config_path is None:
            return None

        return await fetch_ip4_config(
            config_path,
            bus=self._bus,
            service_name=self._device_interface.service_name,
        )

    async def get_ip6_config_properties(self) -> Optional[Dict[str, PropertyValue]]:
        """
        Gets all IP6Config properties.
        """
        config_path = self._config_path(IP6_CONFIG)
        if config_path is None:
            return None

        return await fetch_ip6_config(
            config_path,
            bus=self._bus,
            service_name=self._device_interface.service_name,
        )

    async def _apply_property_changes(self) -> None:
        async for event in self._changes:
            try:
                properties = merge_property_changes(self._properties, event)
            except (MalformedNotificationError, InvalidAddress) as e:
                logger.error("Bad %s on %s: %s", PROPERTIES_CHANGED, self.device_path, e)
                self._signaler.close()
                self._properties_broadcast.fail(e)
                return

            self._properties = properties
            logger.debug(
                "Device %s changed: %s", self.device_path, ", ".join(_changed_names(event))
            )
            self._properties_broadcast.emit(properties)

    def close(self) -> None:
        self._signaler.close()
        self._updates_task.cancel()

    async def aclose(self) -> None:
        self.close()
        try:
            await self._updates_task
        except CancelledError:
            ...

    async def __aexit__(self, *_) -> None:
        await self.aclose()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.device_path!r}, {self.kind.name!r})"


def _changed_names(event: Sequence[Any]) -> Tuple[str, ...]:
    return tuple(event[1].keys())


__all__ = (
    "DEVICE_INTERFACE",
    "DeviceKind",
    "NetworkDevice",
    "format_device_properties",
    "merge_property_changes",
    "GENERIC",
    "WIRED",
    "WIRELESS",
    "BLUETOOTH",
    "MODEM",
    "VLAN",
    "BRIDGE",
    "BOND",
    "TUN",
    "WIREGUARD",
    "LOOPBACK",
)
