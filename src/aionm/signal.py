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
from asyncio import Queue
from typing import Any, AsyncIterator, Optional, Set, Tuple

from aionm.bus import DbusMessage
from aionm.handle import Closeable
from aionm.proxy import InterfaceHandle

logger = logging.getLogger(__name__)


class SignalChannel:
    """
    Queue of signal bodies delivered for one remote object.

    Bodies are queued in transport order and consumed one at a time.
    """

    def __init__(self, signal_name: str, object_path: str) -> None:
        self.signal_name = signal_name
        self.object_path = object_path
        self.queue: Queue[Tuple[Any, ...]] = Queue()
        self._match_slot: Optional[Closeable] = None
        self.closed = False

    def _on_message(self, message: DbusMessage) -> None:
        if self.closed:
            return
        self.queue.put_nowait(message.get_contents())

    def _attach(self, match_slot: Closeable) -> None:
        self._match_slot = match_slot

    async def get(self) -> Tuple[Any, ...]:
        return await self.queue.get()

    async def __aiter__(self) -> AsyncIterator[Tuple[Any, ...]]:
        while True:
            yield await self.queue.get()

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        match_slot, self._match_slot = self._match_slot, None
        if match_slot is not None:
            match_slot.close()
        logger.debug("Stopped listening for %s on %s", self.signal_name, self.object_path)


async def listen_signal(handle: InterfaceHandle, signal_name: str) -> SignalChannel:
    channel = SignalChannel(signal_name, handle.object_path)

    match_slot = await handle.bus.subscribe_signals(
        sender_filter=handle.service_name,
        path_filter=handle.object_path,
        interface_filter=handle.interface_name,
        member_filter=signal_name,
        callback=channel._on_message,
    )
    channel._attach(match_slot)

    logger.debug(
        "Listening for %s.%s on %s", handle.interface_name, signal_name, handle.object_path
    )
    return channel


class Signaler:
    """Keeps track of open signal channels so they can be closed together."""

    def __init__(self) -> None:
        self._channels: Set[SignalChannel] = set()

    async def listen_signal(self, handle: InterfaceHandle, signal_name: str) -> SignalChannel:
        channel = await listen_signal(handle, signal_name)
        self._channels.add(channel)
        return channel

    def stop_listening(self, channel: SignalChannel) -> None:
        self._channels.discard(channel)
        channel.close()

    def close(self) -> None:
        while self._channels:
            self._channels.pop().close()


__all__ = ("SignalChannel", "Signaler", "listen_signal")
