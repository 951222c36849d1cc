"""
Custom exception hierarchy for TARDIS Remote.

## Exception Hierarchy

```
TardisRemoteError (base)
├── RemoteError
│   ├── RemoteCommandFailed
│   ├── RemoteFetchFailed
│   └── DecodeFailed
└── ConfigurationError
    ├── ConfigFileInvalidError
    └── ConfigValidationError
```

## Usage

All custom exceptions inherit from `TardisRemoteError`, which provides:

- `user_message`: Human-friendly message for display to users
- `technical_message`: Detailed message for logging
- `recoverable`: Whether the error can be recovered from
- `recovery_hint`: Optional suggestion for how to fix the issue

Remote errors are raised by `DeviceAPI` implementations and caught inside the
synchronization core; they never escape `TardisManager`'s intent methods.
Configuration errors propagate to the CLI.

### Example: Command rejected by the device

```python
from tardisremote.exceptions import RemoteCommandFailed

raise RemoteCommandFailed("set_color", target="Top Light", status=500)

# User sees: "The TARDIS did not accept 'set_color (Top Light)'."
# Logs show: "Command set_color (Top Light) failed with HTTP 500"
```
"""

from .base import TardisRemoteError
from .config import ConfigFileInvalidError, ConfigurationError, ConfigValidationError
from .handlers import (
    ErrorContext,
    format_error_for_display,
    wrap_pydantic_error,
    wrap_transport_error,
)
from .remote import DecodeFailed, RemoteCommandFailed, RemoteError, RemoteFetchFailed

__all__ = [
    "ConfigFileInvalidError",
    "ConfigValidationError",
    # Config
    "ConfigurationError",
    # Remote
    "DecodeFailed",
    "ErrorContext",
    "RemoteCommandFailed",
    "RemoteError",
    "RemoteFetchFailed",
    # Base
    "TardisRemoteError",
    # Handlers
    "format_error_for_display",
    "wrap_pydantic_error",
    "wrap_transport_error",
]
