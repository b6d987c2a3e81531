"""
BlueZ collaborator: system bus connection, adapter lookup and discovery.

The client connects to the system bus, loads the managed objects exported by
BlueZ as the initial snapshot, subscribes to device property changes, and
starts discovery on the first adapter it sees. Every failed request is fatal.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Mapping, Optional

from dbus_fast import BusType, Message, MessageType, Variant
from dbus_fast.aio import MessageBus

from podstatus.monitor_app.config import MonitorSettings
from podstatus.monitor_app.dispatch import PropertyDispatcher

DBUS_SERVICE = "org.freedesktop.DBus"
DBUS_PATH = "/org/freedesktop/DBus"
DBUS_INTERFACE = "org.freedesktop.DBus"
PROPERTIES_INTERFACE = "org.freedesktop.DBus.Properties"
OBJECT_MANAGER_INTERFACE = "org.freedesktop.DBus.ObjectManager"


class DiscoveryError(RuntimeError):
    pass


def build_discovery_filter(settings: MonitorSettings, cleared: bool = False) -> Dict[str, Variant]:
    """
    Build the ``a{sv}`` argument for ``Adapter1.SetDiscoveryFilter``.

    Args:
        settings: Source of the filter options.
        cleared: Return an empty filter, which resets BlueZ to its defaults.

    Returns:
        A mapping of filter keys to typed variants.
    """
    if cleared:
        return {}
    flt: Dict[str, Variant] = {"UUIDs": Variant("as", list(settings.discovery_uuids))}
    if settings.discovery_pathloss is not None:
        flt["Pathloss"] = Variant("q", settings.discovery_pathloss)
    if settings.discovery_rssi is not None:
        flt["RSSI"] = Variant("n", settings.discovery_rssi)
    if settings.discovery_transport is not None:
        flt["Transport"] = Variant("s", settings.discovery_transport)
    if settings.discovery_duplicate_data:
        flt["DuplicateData"] = Variant("b", True)
    if settings.discovery_discoverable:
        flt["Discoverable"] = Variant("b", True)
    if settings.discovery_pattern is not None:
        flt["Pattern"] = Variant("s", settings.discovery_pattern)
    return flt


def match_rules(settings: MonitorSettings) -> List[str]:
    sender = settings.bluez_service
    return [
        f"type='signal',sender='{sender}',interface='{PROPERTIES_INTERFACE}',"
        f"member='PropertiesChanged',arg0='{settings.device_interface}'",
        f"type='signal',sender='{sender}',interface='{OBJECT_MANAGER_INTERFACE}',member='InterfacesAdded'",
        f"type='signal',sender='{sender}',interface='{OBJECT_MANAGER_INTERFACE}',member='InterfacesRemoved'",
    ]


class BluezClient:
    def __init__(
        self,
        settings: MonitorSettings,
        dispatcher: PropertyDispatcher,
        logger: logging.Logger,
        bus: Optional[MessageBus] = None,
    ) -> None:
        self.settings = settings
        self.dispatcher = dispatcher
        self.logger = logger
        self.bus = bus
        self.adapter_path: Optional[str] = None
        self._adapter_found: Optional[asyncio.Future] = None

    async def connect(self) -> None:
        self._adapter_found = asyncio.get_running_loop().create_future()
        if self.bus is None:
            try:
                self.bus = await MessageBus(bus_type=BusType.SYSTEM).connect()
            except Exception as exc:
                raise DiscoveryError(f"Could not connect to the system bus: {exc}") from exc
        self.bus.add_message_handler(self._on_message)
        for rule in match_rules(self.settings):
            await self._call(DBUS_SERVICE, DBUS_PATH, DBUS_INTERFACE, "AddMatch", "s", [rule])

        body = await self._call(self.settings.bluez_service, "/", OBJECT_MANAGER_INTERFACE, "GetManagedObjects")
        objects = body[0] if body else {}
        self.logger.info("managed_objects_loaded", extra={"details": {"count": len(objects)}})
        for path, interfaces in objects.items():
            self._interfaces_added(path, interfaces)

    async def start_discovery(self, adapter_path: str) -> None:
        flt = build_discovery_filter(self.settings, cleared=self.settings.discovery_clear_filter)
        await self._call(
            self.settings.bluez_service,
            adapter_path,
            self.settings.adapter_interface,
            "SetDiscoveryFilter",
            "a{sv}",
            [flt],
        )
        await self._call(self.settings.bluez_service, adapter_path, self.settings.adapter_interface, "StartDiscovery")
        self.logger.info("discovery_started", extra={"details": {"adapter": adapter_path, "filter": sorted(flt)}})

    async def run(self) -> None:
        await self.connect()
        adapter_path = await self._adapter_found
        await self.start_discovery(adapter_path)
        await self.bus.wait_for_disconnect()
        raise DiscoveryError("System bus connection closed")

    async def _call(
        self,
        destination: str,
        path: str,
        interface: str,
        member: str,
        signature: str = "",
        body: Optional[List[Any]] = None,
    ) -> List[Any]:
        message = Message(
            destination=destination,
            path=path,
            interface=interface,
            member=member,
            signature=signature,
            body=body or [],
        )
        try:
            reply = await self.bus.call(message)
        except Exception as exc:
            raise DiscoveryError(f"{member} could not be sent: {exc}") from exc
        if reply is None:
            raise DiscoveryError(f"{member} got no reply")
        if reply.message_type == MessageType.ERROR:
            detail = reply.body[0] if reply.body else ""
            raise DiscoveryError(f"{member} failed: {reply.error_name} {detail}".strip())
        return reply.body

    def _on_message(self, message: Message) -> None:
        if message.message_type != MessageType.SIGNAL:
            return
        if message.interface == PROPERTIES_INTERFACE and message.member == "PropertiesChanged":
            interface, changed, _invalidated = message.body
            self.dispatcher.properties_changed(message.path, interface, changed)
        elif message.interface == OBJECT_MANAGER_INTERFACE and message.member == "InterfacesAdded":
            path, interfaces = message.body
            self._interfaces_added(path, interfaces)
        elif message.interface == OBJECT_MANAGER_INTERFACE and message.member == "InterfacesRemoved":
            path, interfaces = message.body
            if self.settings.device_interface in interfaces:
                self.dispatcher.device_removed(path)

    def _interfaces_added(self, path: str, interfaces: Mapping[str, Mapping[str, Any]]) -> None:
        if self.settings.adapter_interface in interfaces and self.adapter_path is None:
            self.adapter_path = path
            self.logger.info("adapter_selected", extra={"details": {"adapter": path}})
            if self._adapter_found is not None and not self._adapter_found.done():
                self._adapter_found.set_result(path)
        if self.settings.device_interface in interfaces:
            self.dispatcher.device_snapshot(path, interfaces[self.settings.device_interface])
