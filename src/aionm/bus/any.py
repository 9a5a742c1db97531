from __future__ import annotations

from typing import (
    TYPE_CHECKING,
    Callable,
    Iterable,
    Optional,
    Protocol,
    Tuple,
)

from aionm.bus.message import DbusMessage
from aionm.handle import Closeable

if TYPE_CHECKING:
    from sdbus.sd_bus_internals import DbusCompleteType


class Dbus(Protocol):
    """
    Client side of a D-Bus connection.

    Replies are returned the way the transport parses them: a method with a
    single out argument yields that value, a property get yields the
    ``(signature, value)`` variant.
    """

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
        """
        Call a method on the dbus and return the result.
        """
        ...

    async def get_property(
        self,
        *,
        destination: str,
        path: str,
        interface: str,
        member: str,
    ) -> Tuple[DbusCompleteType, ...]: ...

    async def set_property(
        self,
        *,
        destination: str,
        path: str,
        interface: str,
        member: str,
        signature: str,
        args: Iterable[DbusCompleteType],
    ) -> None: ...

    async def subscribe_signals(
        self,
        *,
        sender_filter: Optional[str] = None,
        path_filter: Optional[str] = None,
        interface_filter: Optional[str] = None,
        member_filter: Optional[str] = None,
        callback: Callable[[DbusMessage], None],
    ) -> Closeable: ...

    def close(self) -> None:
        """
        Close connection to the dbus.
        """
        ...

    def __enter__(self) -> "Dbus": ...

    def __exit__(self, *_) -> None: ...
