"""TARDIS Remote: control surface for a networked TARDIS prop."""

__version__ = "0.1.0"

# Synchronization core
from .core import TardisManager

# Device transport
from .device import DeviceAPI, HttpDeviceAPI

__all__ = [
    "DeviceAPI",
    "HttpDeviceAPI",
    "TardisManager",
]
