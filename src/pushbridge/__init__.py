"""pushbridge: multicast, cancellable streams over callback-driven push APIs."""

from pushbridge.core.errors import BridgeError, ProducerError
from pushbridge.events import Completed, Failed, TerminalSignal
from pushbridge.gateway import Bridge
from pushbridge.sources import PushSource, SourceConfig
from pushbridge.stream import Stream, Subject, Subscription

__version__ = "0.1.0"

__all__ = [
    "Bridge",
    "BridgeError",
    "Completed",
    "Failed",
    "ProducerError",
    "PushSource",
    "SourceConfig",
    "Stream",
    "Subject",
    "Subscription",
    "TerminalSignal",
    "__version__",
]
