from __future__ import annotations

import logging

from stdiolink.errors import (
    DescriptorError,
    NotConnectedError,
    ReadError,
    TransportClosedError,
    TransportConfigurationError,
    TransportError,
    UnsupportedPlatformError,
    WriteError,
)
from stdiolink.transport.stdio import StdioTransport

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "StdioTransport",
    "TransportError",
    "TransportConfigurationError",
    "UnsupportedPlatformError",
    "DescriptorError",
    "NotConnectedError",
    "TransportClosedError",
    "ReadError",
    "WriteError",
]
