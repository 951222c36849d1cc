"""
Centralized error handling utilities.

Each layer translates errors to be more useful at the next level up:

```
┌─────────────────────────────────────────┐
│  USER LAYER (CLI)                   │
│  - Formats error.user_message       │
│  - Shows error.recovery_hint        │
└─────────────────────────────────────────┘
                  ↑
                  │ TardisRemoteError (config errors only)
                  │
┌─────────────────────────────────────────┐
│  CORE (TardisManager & friends)     │
│  - Catches RemoteError at the await │
│  - Logs, notifies observers         │
│  - Never raises to intent callers   │
└─────────────────────────────────────────┘
                  ↑
                  │ RemoteCommandFailed / RemoteFetchFailed / DecodeFailed
                  │
┌─────────────────────────────────────────┐
│  DEVICE (HttpDeviceAPI)             │
│  - Converts aiohttp / JSON errors   │
└─────────────────────────────────────────┘
```

### Converting low-level errors

```python
try:
    async with session.post(url, json=body) as response:
        response.raise_for_status()
except (aiohttp.ClientError, asyncio.TimeoutError) as e:
    raise wrap_transport_error(e, operation="set_color", target="Top Light") from e
```

### Critical section with auto-logging

```python
with ErrorContext("load configuration", logger_instance=logger):
    config = AppConfig.load_or_default(path)
```
"""

import logging
from typing import Optional

from .base import TardisRemoteError
from .config import ConfigFileInvalidError, ConfigValidationError
from .remote import RemoteCommandFailed, RemoteError, RemoteFetchFailed


logger = logging.getLogger(__name__)


class ErrorContext:
    """
    Context manager for error handling with automatic logging.

    Use this for critical sections where you want consistent error handling.

    Example:
        ```python
        with ErrorContext("save configuration", re_raise=False) as ctx:
            config.save()

        if ctx.error:
            print(f"Failed: {ctx.error}")
        ```
    """

    def __init__(
        self,
        operation: str,
        logger_instance: Optional[logging.Logger] = None,
        re_raise: bool = True
    ):
        """
        Initialize error context.

        Args:
            operation: Description of the operation
            logger_instance: Logger to use (defaults to module logger)
            re_raise: Whether to re-raise exceptions
        """
        self.operation = operation
        self.logger = logger_instance or logger
        self.re_raise = re_raise
        self.error: Optional[BaseException] = None

    def __enter__(self):
        """Enter the context."""
        self.logger.debug(f"Starting: {self.operation}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """
        Exit the context and handle any exceptions.

        Returns:
            True if exception should be suppressed, False otherwise
        """
        if exc_type is None:
            self.logger.debug(f"Completed: {self.operation}")
            return False

        self.error = exc_val

        if isinstance(exc_val, TardisRemoteError):
            self.logger.error(
                f"Failed to {self.operation}: {exc_val.technical_message}"
            )
        else:
            self.logger.error(
                f"Failed to {self.operation}: {exc_val}",
                exc_info=True
            )

        # Return True to suppress exception, False to re-raise
        return not self.re_raise


def wrap_pydantic_error(error: Exception, file_path: str) -> TardisRemoteError:
    """
    Convert Pydantic validation errors to configuration exceptions.

    Args:
        error: The Pydantic ValidationError
        file_path: Path to the config file that failed validation

    Returns:
        A ConfigurationError with appropriate type and message
    """
    from pydantic import ValidationError

    error_msg = str(error)

    # Format: "Invalid JSON: <actual error> [type=json_invalid, ..."
    if "Invalid JSON" in error_msg or "json_invalid" in error_msg:
        if "Invalid JSON:" in error_msg:
            parse_error = error_msg.split("Invalid JSON:")[1].split("[type=")[0].strip()
        else:
            parse_error = error_msg

        return ConfigFileInvalidError(file_path, parse_error)

    if isinstance(error, ValidationError):
        errors = error.errors()
        if len(errors) == 1:
            first_error = errors[0]
            field = ".".join(str(loc) for loc in first_error.get('loc', ('unknown',)))
            return ConfigValidationError(
                field=field,
                value=first_error.get('input', None),
                error_msg=first_error.get('msg', 'validation failed'),
                file_path=file_path
            )
        if errors:
            error_lines = []
            for err in errors:
                field = ".".join(str(loc) for loc in err.get('loc', ('unknown',)))
                error_lines.append(f"  - {field}: {err.get('msg', 'validation failed')}")

            return ConfigValidationError(
                field="multiple fields",
                value=None,
                error_msg=f"{len(errors)} validation errors:\n" + "\n".join(error_lines),
                file_path=file_path
            )

    return ConfigValidationError(
        field="unknown",
        value=None,
        error_msg=error_msg,
        file_path=file_path
    )


def wrap_transport_error(
    error: Exception,
    operation: str,
    target: Optional[str] = None,
    kind: Optional[str] = None,
) -> RemoteError:
    """
    Convert a low-level transport error into a remote exception.

    Catalog calls (kind given) become RemoteFetchFailed, everything else
    RemoteCommandFailed. The HTTP status is kept when the error carries one
    (aiohttp.ClientResponseError does); it is informational only.

    Args:
        error: The original exception from the HTTP library
        operation: Name of the device call
        target: Section, sound or scene addressed by the call
        kind: Catalog collection name for list calls

    Returns:
        A RemoteError subclass describing the failure
    """
    if isinstance(error, RemoteError):
        return error

    status = getattr(error, "status", None)
    if not isinstance(status, int):
        status = None
    original = str(error) or type(error).__name__

    if kind is not None:
        return RemoteFetchFailed(kind, status=status, original_error=original)
    return RemoteCommandFailed(operation, target=target, status=status, original_error=original)


def format_error_for_display(error: Exception) -> tuple[str, Optional[str]]:
    """
    Format an exception for user display.

    Returns a tuple of (message, recovery_hint).

    Args:
        error: The exception to format

    Returns:
        Tuple of (user_message, recovery_hint or None)
    """
    if isinstance(error, TardisRemoteError):
        return error.user_message, error.recovery_hint

    error_type = type(error).__name__
    return f"{error_type}: {error}", None
