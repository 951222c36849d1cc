"""Access to the TARDIS controller.

- DeviceAPI: the async transport protocol the synchronization core consumes
- HttpDeviceAPI: aiohttp implementation against the controller's REST API
"""

from .http import HttpDeviceAPI
from .protocols import DeviceAPI

__all__ = ["DeviceAPI", "HttpDeviceAPI"]
