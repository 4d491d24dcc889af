from __future__ import annotations

import errno as errno_mod
import os


class TransportError(Exception):
    """Base class for transport failures.

    ``errno`` carries the underlying system error code when one is known.
    """

    def __init__(self, message: str, errno: int | None = None) -> None:
        super().__init__(message)
        self.errno = errno

    @classmethod
    def from_os_error(cls, exc: OSError, action: str) -> TransportError:
        code = exc.errno
        reason = os.strerror(code) if code is not None else str(exc)
        return cls(f"{action} failed: {reason}", errno=code)


class TransportConfigurationError(TransportError):
    """Descriptors could not be prepared for non-blocking I/O."""


class UnsupportedPlatformError(TransportConfigurationError):
    pass


class DescriptorError(TransportConfigurationError):
    pass


class NotConnectedError(TransportError):
    def __init__(self, message: str = "Transport is not connected") -> None:
        super().__init__(message, errno=errno_mod.ENOTCONN)


class TransportClosedError(TransportError):
    """Raised when connecting a transport that was already disconnected."""


class ReadError(TransportError):
    pass


class WriteError(TransportError):
    pass


__all__ = [
    "TransportError",
    "TransportConfigurationError",
    "UnsupportedPlatformError",
    "DescriptorError",
    "NotConnectedError",
    "TransportClosedError",
    "ReadError",
    "WriteError",
]
