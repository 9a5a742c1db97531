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

from aionm.exceptions import (
    AccessDeniedError,
    DeviceNotActiveError,
    MethodCallError,
    MethodInvocationError,
    NetworkManagerError,
)


class TestMethodCallError(TestCase):
    def test_create_known(self) -> None:
        error = MethodCallError.create("org.freedesktop.DBus.Error.AccessDenied", "nope")

        self.assertIsInstance(error, AccessDeniedError)
        self.assertEqual(error.error_message, "nope")
        self.assertEqual(str(error), "org.freedesktop.DBus.Error.AccessDenied: nope")

    def test_create_network_manager_error(self) -> None:
        error = MethodCallError.create("org.freedesktop.NetworkManager.Device.NotActive")

        self.assertIsInstance(error, DeviceNotActiveError)
        self.assertEqual(str(error), "org.freedesktop.NetworkManager.Device.NotActive")

    def test_create_unknown(self) -> None:
        error = MethodCallError.create("org.example.Error.Strange", "odd")

        self.assertIs(type(error), MethodCallError)
        self.assertEqual(error.error_name, "org.example.Error.Strange")

    def test_wrapped_error(self) -> None:
        cause = AccessDeniedError()
        error = MethodInvocationError("org.example.Iface", "/obj", "Frob", cause)

        self.assertIsInstance(error, NetworkManagerError)
        self.assertIs(error.cause, cause)
        self.assertIn("Frob", str(error))
        self.assertIn("/obj", str(error))


if __name__ == "__main__":
    unittest_main()
