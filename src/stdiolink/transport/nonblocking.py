from __future__ import annotations

import errno
import os
from typing import Any

from stdiolink.errors import DescriptorError, UnsupportedPlatformError

try:  # pragma: no cover - POSIX only
    import fcntl
except ImportError:  # pragma: no cover
    fcntl = None  # type: ignore[assignment]

_TRANSIENT_ERRNOS = frozenset({errno.EAGAIN, errno.EWOULDBLOCK})


def fileno_of(handle: Any) -> int:
    """Return the OS descriptor for an int or any object exposing ``fileno()``."""
    if isinstance(handle, bool):
        raise TypeError("descriptor must be an int or have a fileno() method")
    if isinstance(handle, int):
        return handle
    fileno = getattr(handle, "fileno", None)
    if not callable(fileno):
        raise TypeError(
            f"descriptor must be an int or have a fileno() method, got {type(handle).__name__}"
        )
    return fileno()


def set_non_blocking(fd: int) -> int:
    """Add O_NONBLOCK to ``fd`` and return the flags it had before."""
    if fcntl is None:
        raise UnsupportedPlatformError(
            "Setting non-blocking mode not supported on this platform",
            errno=errno.EOPNOTSUPP,
        )
    try:
        flags = fcntl.fcntl(fd, fcntl.F_GETFL)
        fcntl.fcntl(fd, fcntl.F_SETFL, flags | os.O_NONBLOCK)
    except OSError as e:
        raise DescriptorError.from_os_error(e, f"configuring descriptor {fd}") from e
    return flags


def restore_flags(fd: int, flags: int) -> None:
    """Put back flags returned by ``set_non_blocking``."""
    if fcntl is None:  # pragma: no cover
        return
    try:
        fcntl.fcntl(fd, fcntl.F_SETFL, flags)
    except OSError as e:
        raise DescriptorError.from_os_error(e, f"restoring descriptor {fd}") from e


def is_transient(exc: BaseException) -> bool:
    """True for the would-block condition of a non-blocking descriptor."""
    if isinstance(exc, BlockingIOError):
        return True
    return isinstance(exc, OSError) and exc.errno in _TRANSIENT_ERRNOS
