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
from contextlib import asynccontextmanager
from typing import (
    Any,
    AsyncGenerator,
    AsyncIterator,
    Callable,
    List,
    Mapping,
    Generic,
    Optional,
    TypeVar,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Subscription(Generic[T]):
    def __init__(
        self,
        broadcast: Broadcast[T],
        on_next: Callable[[T], Any],
        on_error: Optional[Callable[[BaseException], Any]],
    ) -> None:
        self._broadcast = broadcast
        self.on_next = on_next
        self.on_error = on_error
        self.closed = False

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        self._broadcast._remove(self)

    def __enter__(self) -> Subscription[T]:
        return self

    def __exit__(self, *_) -> None:
        self.close()


class Broadcast(Generic[T]):
    """
    Holds the latest value and pushes every new value to its subscribers.

    A new subscriber receives the current value right away, then every
    later emission in order. Delivery is synchronous; sinks that need to
    do slow work should hand the value off, as ``stream`` does.
    """

    def __init__(self, initial: T) -> None:
        self._value = initial
        self._error: Optional[BaseException] = None
        self._subscriptions: List[Subscription[T]] = []

    @property
    def value(self) -> T:
        return self._value

    @property
    def error(self) -> Optional[BaseException]:
        return self._error

    def subscribe(
        self,
        on_next: Callable[[T], Any],
        on_error: Optional[Callable[[BaseException], Any]] = None,
    ) -> Subscription[T]:
        subscription = Subscription(self, on_next, on_error)

        if self._error is not None:
            subscription.closed = True
            self._deliver_error(subscription, self._error)
            return subscription

        self._subscriptions.append(subscription)
        on_next(self._value)
        return subscription

    def emit(self, value: T) -> None:
        if self._error is not None:
            raise RuntimeError("Cannot emit on a failed broadcast") from self._error

        self._value = value
        for subscription in tuple(self._subscriptions):
            if subscription.closed:
                continue
            try:
                subscription.on_next(value)
            except Exception:
                logger.exception("Unhandled exception in broadcast subscriber")

    def fail(self, error: BaseException) -> None:
        if self._error is not None:
            return

        self._error = error
        subscriptions, self._subscriptions = self._subscriptions, []
        for subscription in subscriptions:
            if not subscription.closed:
                subscription.closed = True
                self._deliver_error(subscription, error)

    @staticmethod
    def _deliver_error(subscription: Subscription[T], error: BaseException) -> None:
        if subscription.on_error is None:
            logger.error("Unobserved error in broadcast: %r", error)
            return
        subscription.on_error(error)

    def _remove(self, subscription: Subscription[T]) -> None:
        try:
            self._subscriptions.remove(subscription)
        except ValueError:
            ...

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    @asynccontextmanager
    async def stream(self) -> AsyncGenerator[BroadcastStream[T], None]:
        queue: Queue[_Item[T]] = Queue()

        subscription = self.subscribe(
            lambda value: queue.put_nowait(_Item(value=value)),
            lambda error: queue.put_nowait(_Item(error=error)),
        )
        try:
            yield BroadcastStream(queue)
        finally:
            subscription.close()


class _Item(Generic[T]):
    __slots__ = ("value", "error")

    def __init__(self, value: Optional[T] = None, error: Optional[BaseException] = None):
        self.value = value
        self.error = error


class BroadcastStream(Generic[T]):
    def __init__(self, queue: Queue[_Item[T]]):
        self.queue = queue

    async def get(self) -> T:
        item = await self.queue.get()
        if item.error is not None:
            raise item.error
        return item.value  # type: ignore[return-value]

    async def __aiter__(self) -> AsyncIterator[T]:
        while True:
            yield await self.get()


def distinct_until_variant_changed(
    key: str,
    on_next: Callable[[Mapping[str, Any]], Any],
    compare: Optional[Callable[[Any, Any], bool]] = None,
) -> Callable[[Mapping[str, Any]], None]:
    """
    Wrap a snapshot sink so it only sees snapshots where the value of the
    ``key`` property changed.

    ``compare`` receives the previous and new unwrapped values and returns
    True when they are equal.
    """
    missing = object()
    last: Any = missing

    def sink(snapshot: Mapping[str, Any]) -> None:
        nonlocal last
        variant = snapshot.get(key)
        value = variant[1] if variant is not None else None
        if last is not missing:
            same = compare(last, value) if compare is not None else last == value
            if same:
                return
        last = value
        on_next(snapshot)

    return sink


__all__ = (
    "Broadcast",
    "BroadcastStream",
    "Subscription",
    "distinct_until_variant_changed",
)
