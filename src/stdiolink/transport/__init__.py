from stdiolink.transport.base import MessageFramer, Transport
from stdiolink.transport.framing import NewlineFramer
from stdiolink.transport.stdio import StdioTransport, TransportState
from stdiolink.transport.stream import MessageStream

__all__ = [
    "Transport",
    "MessageFramer",
    "NewlineFramer",
    "MessageStream",
    "StdioTransport",
    "TransportState",
]
