from podstatus.monitor import StatusMonitor
from podstatus.monitor_app import BluezClient, DiscoveryError, MonitorSettings, PropertyDispatcher
from podstatus.parsing.status import LatchState, StatusDecoder, StatusLine, decode_fixed_bytes
from podstatus.parsing.values import TreeWalker
from importlib.metadata import PackageNotFoundError, version

__all__ = [
    "StatusMonitor",
    "BluezClient",
    "DiscoveryError",
    "MonitorSettings",
    "PropertyDispatcher",
    "LatchState",
    "StatusDecoder",
    "StatusLine",
    "decode_fixed_bytes",
    "TreeWalker",
]

try:
    __version__ = version("podstatus")
except PackageNotFoundError:
    __version__ = "0.0.0"
