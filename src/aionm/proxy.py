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
from typing import Any, Dict, Mapping, Optional, Tuple, TypeAlias
from xml.etree import ElementTree

from aionm.bus import Dbus, get_default_bus
from aionm.exceptions import (
    InterfaceResolutionError,
    MethodInvocationError,
    PropertyFetchError,
    PropertySetError,
    UknownMethodError,
    UnknownInterfaceError,
    UnknownPropertyError,
)

logger = logging.getLogger(__name__)

NM_SERVICE = "org.freedesktop.NetworkManager"

INTROSPECTABLE_INTERFACE = "org.freedesktop.DBus.Introspectable"
PROPERTIES_INTERFACE = "org.freedesktop.DBus.Properties"

PropertyValue: TypeAlias = Tuple[str, Any]
Properties: TypeAlias = Mapping[str, PropertyValue]


class InterfaceHandle:
    """
    Resolved reference to one interface of a remote object.

    Carries the method input signatures and property types read from
    introspection so calls can be marshalled without the caller spelling
    out signatures.
    """

    def __init__(
        self,
        bus: Dbus,
        service_name: str,
        object_path: str,
        interface_name: str,
        method_signatures: Optional[Dict[str, str]] = None,
        property_signatures: Optional[Dict[str, str]] = None,
    ) -> None:
        self.bus = bus
        self.service_name = service_name
        self.object_path = object_path
        self.interface_name = interface_name
        self.method_signatures: Dict[str, str] = method_signatures or {}
        self.property_signatures: Dict[str, str] = property_signatures or {}

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}({self.service_name!r}, "
            f"{self.object_path!r}, {self.interface_name!r})"
        )


def _parse_introspection(
    xml_data: str,
    interface_name: str,
) -> Tuple[Dict[str, str], Dict[str, str]]:
    root = ElementTree.fromstring(xml_data)

    for interface in root.findall("interface"):
        if interface.get("name") != interface_name:
            continue

        methods: Dict[str, str] = {}
        for method in interface.findall("method"):
            methods[method.get("name", "")] = "".join(
                arg.get("type", "")
                for arg in method.findall("arg")
                if arg.get("direction", "in") == "in"
            )

        properties = {
            prop.get("name", ""): prop.get("type", "") for prop in interface.findall("property")
        }
        return methods, properties

    raise UnknownInterfaceError(f"Object does not implement {interface_name}")


async def resolve_interface(
    object_path: str,
    interface_name: str,
    *,
    bus: Optional[Dbus] = None,
    service_name: str = NM_SERVICE,
) -> InterfaceHandle:
    if bus is None:
        bus = get_default_bus()

    try:
        xml_data = await bus.call_method(
            destination=service_name,
            path=object_path,
            interface=INTROSPECTABLE_INTERFACE,
            member="Introspect",
            signature="",
            args=(),
        )
        methods, properties = _parse_introspection(str(xml_data), interface_name)
    except Exception as e:
        raise InterfaceResolutionError(object_path, interface_name, e) from e

    logger.debug("Resolved %s on %s", interface_name, object_path)
    return InterfaceHandle(bus, service_name, object_path, interface_name, methods, properties)


async def get_all_properties(handle: InterfaceHandle) -> Dict[str, PropertyValue]:
    try:
        result = await handle.bus.call_method(
            destination=handle.service_name,
            path=handle.object_path,
            interface=PROPERTIES_INTERFACE,
            member="GetAll",
            signature="s",
            args=(handle.interface_name,),
        )
    except Exception as e:
        raise PropertyFetchError(handle.interface_name, handle.object_path, e) from e

    return dict(result)  # type: ignore[arg-type]


async def get_property(handle: InterfaceHandle, property_name: str) -> PropertyValue:
    try:
        result = await handle.bus.get_property(
            destination=handle.service_name,
            path=handle.object_path,
            interface=handle.interface_name,
            member=property_name,
        )
    except Exception as e:
        raise PropertyFetchError(
            handle.interface_name, handle.object_path, e, property_name
        ) from e

    signature, value = result
    return signature, value


async def set_property(
    handle: InterfaceHandle,
    property_name: str,
    value: Any,
    *,
    signature: Optional[str] = None,
) -> None:
    """
    Set a property.

    ``value`` is always the bare value. It is marshalled with ``signature``
    when given, otherwise with the property type known from introspection.
    """
    try:
        if signature is None:
            signature = handle.property_signatures.get(property_name)
        if not signature:
            raise UnknownPropertyError(
                f"No signature known for {property_name}, pass signature="
            )

        await handle.bus.set_property(
            destination=handle.service_name,
            path=handle.object_path,
            interface=handle.interface_name,
            member=property_name,
            signature=signature,
            args=(value,),
        )
    except Exception as e:
        raise PropertySetError(
            handle.interface_name, handle.object_path, property_name, e
        ) from e


async def call(handle: InterfaceHandle, method_name: str, *args: Any) -> Any:
    try:
        signature = handle.method_signatures.get(method_name)
        if signature is None:
            raise UknownMethodError(f"{method_name} is not part of {handle.interface_name}")

        return await handle.bus.call_method(
            destination=handle.service_name,
            path=handle.object_path,
            interface=handle.interface_name,
            member=method_name,
            signature=signature,
            args=args,
        )
    except Exception as e:
        raise MethodInvocationError(
            handle.interface_name, handle.object_path, method_name, e
        ) from e


__all__ = (
    "NM_SERVICE",
    "PROPERTIES_INTERFACE",
    "InterfaceHandle",
    "PropertyValue",
    "Properties",
    "resolve_interface",
    "get_all_properties",
    "get_property",
    "set_property",
    "call",
)
