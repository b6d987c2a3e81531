from podstatus.monitor_app.bluez import BluezClient, DiscoveryError, build_discovery_filter
from podstatus.monitor_app.config import MonitorSettings, get_settings
from podstatus.monitor_app.dispatch import PropertyDispatcher
from podstatus.monitor_app.logging import create_logger

__all__ = [
    "BluezClient",
    "DiscoveryError",
    "build_discovery_filter",
    "MonitorSettings",
    "get_settings",
    "PropertyDispatcher",
    "create_logger",
]
