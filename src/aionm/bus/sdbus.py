from __future__ import annotations

import logging
from functools import partial
from typing import (
    TYPE_CHECKING,
    Callable,
    Iterable,
    Optional,
    Tuple,
    assert_never,
)

from sdbus.sd_bus_internals import (
    SdBus as _SdBus,
    SdBusBaseError,
    SdBusLibraryError,
    SdBusMessage,
    SdBusUnmappedMessageError,
    sd_bus_open_system,
    sd_bus_open_system_remote,
    sd_bus_open_user,
)

from aionm.bus.any import Dbus
from aionm.bus.connection import DbusType
from aionm.bus.message import DbusMessage, _set_current_message
from aionm.exceptions import DbusError, MethodCallError
from aionm.handle import Closeable

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from sdbus.sd_bus_internals import DbusCompleteType


def _to_method_call_error(error: SdBusBaseError) -> MethodCallError:
    if isinstance(error, SdBusUnmappedMessageError) and error.args:
        details = error.args[0]
        if isinstance(details, tuple) and len(details) == 2:
            name, message = details
            return MethodCallError.create(name, message)

    name = getattr(error, "dbus_error_name", None)
    message = str(error.args[0]) if error.args else None
    if name is None:
        return MethodCallError(message, name="org.freedesktop.DBus.Error.Failed")
    return MethodCallError.create(name, message)


class SdBus(Dbus):
    def __init__(self, bus: _SdBus) -> None:
        self._sdbus = bus

    async def _call(self, message: SdBusMessage) -> SdBusMessage:
        try:
            return await self._sdbus.call_async(message)
        except SdBusLibraryError as e:
            raise DbusError(str(e)) from e
        except SdBusBaseError as e:
            raise _to_method_call_error(e) from e

    async def call_method(
        self,
        *,
        destination: str,
        path: str,
        interface: str,
        member: str,
        signature: str,
        args: Iterable[DbusCompleteType],
        no_reply: bool = False,
    ) -> Tuple[DbusCompleteType, ...]:
        message = self._sdbus.new_method_call_message(destination, path, interface, member)
        if args:
            message.append_data(signature, *args)
        if no_reply:
            message.expect_reply = False
            message.send()
            return ()
        else:
            reply = await self._call(message)
            return reply.get_contents()

    async def get_property(
        self,
        *,
        destination: str,
        path: str,
        interface: str,
        member: str,
    ) -> Tuple[DbusCompleteType, ...]:
        message = self._sdbus.new_property_get_message(destination, path, interface, member)
        reply = await self._call(message)
        return reply.get_contents()

    async def set_property(
        self,
        *,
        destination: str,
        path: str,
        interface: str,
        member: str,
        signature: str,
        args: Iterable[DbusCompleteType],
    ) -> None:
        message = self._sdbus.new_property_set_message(destination, path, interface, member)
        message.append_data("v", (signature, *args))
        await self._call(message)

    @staticmethod
    def _signal_handler(callback: Callable[[DbusMessage], None], message: DbusMessage) -> None:
        try:
            with _set_current_message(message):
                callback(message)
        except Exception:
            logger.exception("Unhandled exception when handling a signal")

    async def subscribe_signals(
        self,
        *,
        sender_filter: Optional[str] = None,
        path_filter: Optional[str] = None,
        interface_filter: Optional[str] = None,
        member_filter: Optional[str] = None,
        callback: Callable[[DbusMessage], None],
    ) -> Closeable:
        try:
            return await self._sdbus.match_signal_async(
                sender_filter,
                path_filter,
                interface_filter,
                member_filter,
                partial(self._signal_handler, callback),
            )
        except SdBusBaseError as e:
            raise DbusError(str(e)) from e

    def close(self) -> None:
        self._sdbus.close()

    def __enter__(self) -> "Dbus":
        return self

    def __exit__(self, *_) -> None:
        self.close()


def sdbus_connect_local(address: DbusType):
    match address:
        case "session":
            return SdBus(sd_bus_open_user())
        case "system":
            return SdBus(sd_bus_open_system())
        case _:
            assert_never(address)


def sdbus_connect_remote(address: str):
    return SdBus(sd_bus_open_system_remote(address))
