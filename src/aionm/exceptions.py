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

from typing import Any, ClassVar, Dict, Optional, Type


class DbusError(Exception): ...


class MethodCallError(DbusError):

    error_name: str

    def __init__(self, message: str | None = None, *, name: str | None = None) -> None:
        if not hasattr(self, "error_name"):
            assert name is not None, "name= not provided"
        self.error_name = name or self.error_name
        self.error_message = message
        super().__init__(self.error_name)

    def __str__(self) -> str:
        if self.error_message:
            return f"{self.error_name}: {self.error_message}"
        return self.error_name

    subclasses: ClassVar[Dict[str, Type[MethodCallError]]] = {}

    @staticmethod
    def create(name: str, message: str | None = None):
        DbusMethodErrorSubclass = MethodCallError.subclasses.get(name)
        if DbusMethodErrorSubclass is None:
            return MethodCallError(name=name, message=message)
        else:
            return DbusMethodErrorSubclass(name=name, message=message)

    def __init_subclass__(cls, name: str) -> None:
        super().__init_subclass__()
        setattr(cls, "error_name", name)
        cls.subclasses[name] = cls


class CallFailedError(
    MethodCallError,
    name="org.freedesktop.DBus.Error.Failed",
): ...


class NoMemoryError(
    MethodCallError,
    name="org.freedesktop.DBus.Error.NoMemory",
): ...


class ServiceUnknownError(MethodCallError, name="org.freedesktop.DBus.Error.ServiceUnknown"): ...


class NameHasNoOwnerError(
    MethodCallError,
    name="org.freedesktop.DBus.Error.NameHasNoOwner",
): ...


class NoReplyError(
    MethodCallError,
    name="org.freedesktop.DBus.Error.NoReply",
): ...


class TimeoutError(
    MethodCallError,
    name="org.freedesktop.DBus.Error.Timeout",
): ...


class DisconnectedError(
    MethodCallError,
    name="org.freedesktop.DBus.Error.Disconnected",
): ...


class AccessDeniedError(
    MethodCallError,
    name="org.freedesktop.DBus.Error.AccessDenied",
): ...


class InvalidArgsError(
    MethodCallError,
    name="org.freedesktop.DBus.Error.InvalidArgs",
): ...


class InvalidSignatureError(
    MethodCallError,
    name="org.freedesktop.DBus.Error.InvalidSignature",
): ...


class UknownMethodError(
    MethodCallError,
    name="org.freedesktop.DBus.Error.UnknownMethod",
): ...


class UnknownObjectError(
    MethodCallError,
    name="org.freedesktop.DBus.Error.UnknownObject",
): ...


class UnknownInterfaceError(
    MethodCallError,
    name="org.freedesktop.DBus.Error.UnknownInterface",
): ...


class UnknownPropertyError(
    MethodCallError,
    name="org.freedesktop.DBus.Error.UnknownProperty",
): ...


class PropertyReadOnlyError(
    MethodCallError,
    name="org.freedesktop.DBus.Error.PropertyReadOnly",
): ...


class DeviceNotActiveError(
    MethodCallError,
    name="org.freedesktop.NetworkManager.Device.NotActive",
): ...


class DeviceNotSoftwareError(
    MethodCallError,
    name="org.freedesktop.NetworkManager.Device.NotSoftware",
): ...


class DevicePermissionDeniedError(
    MethodCallError,
    name="org.freedesktop.NetworkManager.Device.PermissionDenied",
): ...


class NetworkManagerError(Exception):
    """Base class for errors raised by this binding."""


class RemoteAccessError(NetworkManagerError):
    """
    A remote operation failed.

    The original fault is kept in ``cause`` and chained as ``__cause__``.
    """

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.cause = cause


class InterfaceResolutionError(RemoteAccessError):
    def __init__(
        self,
        path: str,
        interface_name: str,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(
            f"Error getting {interface_name} interface on {path}: {cause}",
            cause,
        )
        self.path = path
        self.interface_name = interface_name


class PropertyFetchError(RemoteAccessError):
    def __init__(
        self,
        interface_name: str,
        path: str,
        cause: Optional[BaseException] = None,
        property_name: Optional[str] = None,
    ) -> None:
        if property_name is None:
            message = (
                f"Error getting all properties for object {path} "
                f"with interface {interface_name}: {cause}"
            )
        else:
            message = (
                f"Error getting property {property_name} on {interface_name} "
                f"interface for object {path}: {cause}"
            )
        super().__init__(message, cause)
        self.interface_name = interface_name
        self.path = path
        self.property_name = property_name


class PropertySetError(RemoteAccessError):
    def __init__(
        self,
        interface_name: str,
        path: str,
        property_name: str,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(
            f"Error setting property {property_name} on {interface_name} "
            f"interface for object {path}: {cause}",
            cause,
        )
        self.interface_name = interface_name
        self.path = path
        self.property_name = property_name


class MethodInvocationError(RemoteAccessError):
    def __init__(
        self,
        interface_name: str,
        path: str,
        method_name: str,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(
            f"Error calling {method_name} on {interface_name} for object {path}: {cause}",
            cause,
        )
        self.interface_name = interface_name
        self.path = path
        self.method_name = method_name


class InvalidAddress(NetworkManagerError, ValueError):
    def __init__(self, value: Any, reason: str = "") -> None:
        message = f"Invalid IP address: {value!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.value = value


class MalformedNotificationError(NetworkManagerError, ValueError):
    """A change notification did not have the expected shape."""
