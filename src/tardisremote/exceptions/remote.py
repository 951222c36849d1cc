"""Device communication exceptions.

This module defines exceptions for talking to the TARDIS controller:
- RemoteError: Base class for device communication errors
- RemoteCommandFailed: A command was rejected or the device was unreachable
- RemoteFetchFailed: A catalog list call failed
- DecodeFailed: The device answered with an unexpected payload
"""

from .base import TardisRemoteError

_UNREACHABLE_HINT = (
    "Check that the TARDIS controller is powered on and reachable, "
    "and that 'device_url' is correct ('tardis config show')."
)


class RemoteError(TardisRemoteError):
    """Communication with the device failed."""

    def __init__(self, user_message: str, status: int | None = None, **kwargs):
        """
        Initialize a remote error.

        Args:
            user_message: User-friendly error message
            status: HTTP status code, if the device answered at all
        """
        kwargs.setdefault("recoverable", True)
        kwargs.setdefault("recovery_hint", _UNREACHABLE_HINT)
        super().__init__(user_message, **kwargs)
        self.status = status


class RemoteCommandFailed(RemoteError):
    """A command sent to the device was rejected or never arrived."""

    def __init__(
        self,
        operation: str,
        target: str | None = None,
        status: int | None = None,
        original_error: str | None = None,
    ):
        """
        Initialize command failure.

        Args:
            operation: Name of the command (e.g. "set_color")
            target: Section, sound or scene the command addressed
            status: HTTP status code, if any
            original_error: Low-level error message
        """
        subject = f"{operation} ({target})" if target else operation
        tech_msg = f"Command {subject} failed"
        if status is not None:
            tech_msg += f" with HTTP {status}"
        if original_error:
            tech_msg += f": {original_error}"

        super().__init__(
            user_message=f"The TARDIS did not accept '{subject}'.",
            technical_message=tech_msg,
            status=status,
        )
        self.operation = operation
        self.target = target


class RemoteFetchFailed(RemoteError):
    """A catalog list call failed."""

    def __init__(self, kind: str, status: int | None = None, original_error: str | None = None):
        """
        Initialize fetch failure.

        Args:
            kind: Catalog collection that was requested ("sections", "sounds", "scenes")
            status: HTTP status code, if any
            original_error: Low-level error message
        """
        tech_msg = f"Fetching {kind} failed"
        if status is not None:
            tech_msg += f" with HTTP {status}"
        if original_error:
            tech_msg += f": {original_error}"

        super().__init__(
            user_message=f"Could not load {kind} from the TARDIS.",
            technical_message=tech_msg,
            status=status,
        )
        self.kind = kind


class DecodeFailed(RemoteError):
    """The device answered, but the payload did not have the expected shape."""

    def __init__(self, operation: str, detail: str):
        """
        Initialize decode failure.

        Args:
            operation: Name of the call whose response could not be decoded
            detail: What was wrong with the payload
        """
        super().__init__(
            user_message=f"The TARDIS sent an unexpected response to '{operation}'.",
            technical_message=f"Could not decode {operation} response: {detail}",
            recovery_hint="The controller firmware may be a different version than this client expects.",
        )
        self.operation = operation
        self.detail = detail
