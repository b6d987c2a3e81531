from __future__ import annotations

import logging
from typing import Any, Dict, Mapping

from dbus_fast import Variant

from podstatus.parsing.values import TreeWalker, as_tagged_value


class PropertyDispatcher:
    """Feeds the manufacturer data property of BlueZ devices to the walker."""

    def __init__(
        self,
        walker: TreeWalker,
        logger: logging.Logger,
        property_name: str = "ManufacturerData",
        device_interface: str = "org.bluez.Device1",
    ) -> None:
        self.walker = walker
        self.logger = logger
        self.property_name = property_name
        self.device_interface = device_interface
        self.addresses: Dict[str, str] = {}

    def device_snapshot(self, path: str, properties: Mapping[str, Any]) -> None:
        address = properties.get("Address")
        if isinstance(address, Variant):
            self.addresses[path] = str(address.value)
        self._dispatch(path, properties)

    def properties_changed(self, path: str, interface: str, changed: Mapping[str, Any]) -> None:
        if interface != self.device_interface:
            return
        self._dispatch(path, changed)

    def device_removed(self, path: str) -> None:
        self.addresses.pop(path, None)

    def _dispatch(self, path: str, properties: Mapping[str, Any]) -> None:
        value = as_tagged_value(properties.get(self.property_name))
        if value is None:
            return
        self.logger.debug(
            "manufacturer_data",
            extra={"details": {"path": path, "address": self.addresses.get(path)}},
        )
        self.walker.walk(value, False)
