from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from typing import TYPE_CHECKING, Optional, Protocol, Tuple

if TYPE_CHECKING:
    from sdbus.sd_bus_internals import DbusCompleteType


class DbusMessage(Protocol):
    @property
    def path(self) -> Optional[str]: ...

    @property
    def sender(self) -> Optional[str]: ...

    def get_contents(self) -> Tuple[DbusCompleteType, ...]: ...


_current_message: ContextVar[DbusMessage] = ContextVar("current_message")


@contextmanager
def _set_current_message(message: DbusMessage):
    token = _current_message.set(message)
    try:
        yield message
    finally:
        _current_message.reset(token)


def get_current_message() -> DbusMessage:
    """Message currently being dispatched to a signal callback."""
    return _current_message.get()
