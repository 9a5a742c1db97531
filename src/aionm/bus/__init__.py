from .any import Dbus
from .connection import DbusAddress, DbusType, connect, get_default_bus, set_default_bus
from .message import DbusMessage, get_current_message

__all__ = (
    "Dbus",
    "DbusAddress",
    "DbusMessage",
    "DbusType",
    "connect",
    "get_default_bus",
    "set_default_bus",
    "get_current_message",
)
