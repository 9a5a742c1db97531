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

from asyncio import sleep
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple
from xml.sax.saxutils import quoteattr

from aionm.exceptions import (
    UknownMethodError,
    UnknownInterfaceError,
    UnknownObjectError,
    UnknownPropertyError,
)
from aionm.proxy import NM_SERVICE

PropertyTable = Dict[str, Tuple[str, Any]]

STANDARD_INTERFACES = (
    "org.freedesktop.DBus.Introspectable",
    "org.freedesktop.DBus.Properties",
)


class FakeMessage:
    def __init__(self, path: str, sender: str, contents: Tuple[Any, ...]) -> None:
        self.path = path
        self.sender = sender
        self._contents = contents

    def get_contents(self) -> Tuple[Any, ...]:
        return self._contents


class FakeMatchSlot:
    def __init__(
        self,
        bus: FakeDbus,
        sender: Optional[str],
        path: Optional[str],
        interface: Optional[str],
        member: Optional[str],
        callback: Callable[[FakeMessage], None],
    ) -> None:
        self.bus = bus
        self.sender = sender
        self.path = path
        self.interface = interface
        self.member = member
        self.callback = callback
        self.close_count = 0

    def matches(self, sender: str, path: str, interface: str, member: str) -> bool:
        return all(
            expected is None or expected == actual
            for expected, actual in (
                (self.sender, sender),
                (self.path, path),
                (self.interface, interface),
                (self.member, member),
            )
        )

    def close(self) -> None:
        self.close_count += 1
        if self in self.bus.match_slots:
            self.bus.match_slots.remove(self)


class FakeObject:
    def __init__(self) -> None:
        self.properties: Dict[str, PropertyTable] = {}
        self.methods: Dict[str, Dict[str, Tuple[str, Callable[..., Any]]]] = {}

    def introspect(self) -> str:
        lines = ["<node>"]
        for interface_name in (*STANDARD_INTERFACES, *self.properties):
            lines.append(f"  <interface name={quoteattr(interface_name)}>")
            for method_name, (signature, _) in self.methods.get(interface_name, {}).items():
                lines.append(f"    <method name={quoteattr(method_name)}>")
                for arg_type in _split_signature(signature):
                    lines.append(f'      <arg type={quoteattr(arg_type)} direction="in"/>')
                lines.append('      <arg type="s" name="unused" direction="out"/>')
                lines.append("    </method>")
            for name, (signature, _) in self.properties.get(interface_name, {}).items():
                lines.append(
                    f"    <property name={quoteattr(name)} "
                    f'type={quoteattr(signature)} access="readwrite"/>'
                )
            lines.append("  </interface>")
        lines.append("</node>")
        return "\n".join(lines)


def _split_signature(signature: str) -> List[str]:
    # Enough for the basic types used in tests
    return list(signature)


class FakeDbus:
    """
    In memory stand in for a bus connection serving NetworkManager objects.
    """

    def __init__(self, service_name: str = NM_SERVICE) -> None:
        self.service_name = service_name
        self.objects: Dict[str, FakeObject] = {}
        self.calls: List[Tuple[str, str, str, Tuple[Any, ...]]] = []
        self.failures: Dict[Tuple[str, str, str], Exception] = {}
        self.match_slots: List[FakeMatchSlot] = []
        self.closed = False

    def add_interface(
        self,
        path: str,
        interface_name: str,
        properties: Optional[PropertyTable] = None,
        methods: Optional[Dict[str, Tuple[str, Callable[..., Any]]]] = None,
    ) -> None:
        fake_object = self.objects.setdefault(path, FakeObject())
        fake_object.properties[interface_name] = dict(properties or {})
        fake_object.methods[interface_name] = dict(methods or {})

    def fail(self, path: str, interface: str, member: str, error: Exception) -> None:
        self.failures[(path, interface, member)] = error

    def calls_to(self, interface: str, member: str) -> List[Tuple[str, str, str, Tuple[Any, ...]]]:
        return [c for c in self.calls if c[1] == interface and c[2] == member]

    def _record(self, path: str, interface: str, member: str, args: Iterable[Any]) -> None:
        self.calls.append((path, interface, member, tuple(args)))
        failure = self.failures.get((path, interface, member))
        if failure is not None:
            raise failure

    def _object(self, path: str) -> FakeObject:
        try:
            return self.objects[path]
        except KeyError:
            raise UnknownObjectError(f"Unknown object {path}") from None

    def _table(self, path: str, interface: str) -> PropertyTable:
        try:
            return self._object(path).properties[interface]
        except KeyError:
            raise UnknownInterfaceError(f"Unknown interface {interface}") from None

    async def call_method(
        self,
        *,
        destination: str,
        path: str,
        interface: str,
        member: str,
        signature: str,
        args: Iterable[Any],
        no_reply: bool = False,
    ) -> Any:
        args = tuple(args)
        self._record(path, interface, member, args)
        await sleep(0)

        if interface == "org.freedesktop.DBus.Introspectable" and member == "Introspect":
            return self._object(path).introspect()

        if interface == "org.freedesktop.DBus.Properties" and member == "GetAll":
            return dict(self._table(path, args[0]))

        methods = self._object(path).methods.get(interface, {})
        try:
            _, handler = methods[member]
        except KeyError:
            raise UknownMethodError(f"Unknown method {member}") from None
        return handler(*args)

    async def get_property(
        self,
        *,
        destination: str,
        path: str,
        interface: str,
        member: str,
    ) -> Any:
        self._record(path, interface, member, ())
        await sleep(0)
        try:
            return self._table(path, interface)[member]
        except KeyError:
            raise UnknownPropertyError(f"Unknown property {member}") from None

    async def set_property(
        self,
        *,
        destination: str,
        path: str,
        interface: str,
        member: str,
        signature: str,
        args: Iterable[Any],
    ) -> None:
        args = tuple(args)
        self._record(path, interface, member, args)
        await sleep(0)
        table = self._table(path, interface)
        if member not in table:
            raise UnknownPropertyError(f"Unknown property {member}")
        table[member] = (signature, args[0])

    async def subscribe_signals(
        self,
        *,
        sender_filter: Optional[str] = None,
        path_filter: Optional[str] = None,
        interface_filter: Optional[str] = None,
        member_filter: Optional[str] = None,
        callback: Callable[[FakeMessage], None],
    ) -> FakeMatchSlot:
        self._record(path_filter or "", interface_filter or "", "AddMatch", (member_filter,))
        slot = FakeMatchSlot(
            self, sender_filter, path_filter, interface_filter, member_filter, callback
        )
        self.match_slots.append(slot)
        return slot

    def emit_signal(self, path: str, interface: str, member: str, *contents: Any) -> None:
        message = FakeMessage(path, self.service_name, contents)
        for slot in tuple(self.match_slots):
            if slot.matches(self.service_name, path, interface, member):
                slot.callback(message)

    def emit_properties_changed(
        self,
        path: str,
        interface: str,
        changed: PropertyTable,
        invalidated: Iterable[str] = (),
    ) -> None:
        self.emit_signal(
            path,
            "org.freedesktop.DBus.Properties",
            "PropertiesChanged",
            interface,
            changed,
            list(invalidated),
        )

    def close(self) -> None:
        self.closed = True

    def __enter__(self) -> FakeDbus:
        return self

    def __exit__(self, *_) -> None:
        self.close()


async def settle(rounds: int = 5) -> None:
    for _ in range(rounds):
        await sleep(0)
