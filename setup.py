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

from setuptools import setup

if __name__ == "__main__":
    with open("./README.md") as f:
        long_description = f.read()

    setup(
        name="aionm",
        version="0.1.0",
        description="Asyncio client for NetworkManager devices over D-Bus",
        long_description=long_description,
        long_description_content_type="text/markdown",
        license="LGPL-2.1-or-later",
        python_requires=">=3.11",
        packages=[
            "aionm",
            "aionm.bus",
            "aionm.utils",
        ],
        package_dir={
            "": "src",
        },
        install_requires=[
            # libsystemd sd-bus binding (sdbus.sd_bus_internals)
            "sdbus>=0.12",
        ],
    )
