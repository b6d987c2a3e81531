import argparse
import asyncio
import logging
import sys
from typing import Optional, TextIO

from dbus_fast.aio import MessageBus

from podstatus.monitor_app import (
    BluezClient,
    DiscoveryError,
    MonitorSettings,
    PropertyDispatcher,
    create_logger,
    get_settings,
)
from podstatus.parsing.status import LatchState, StatusDecoder
from podstatus.parsing.values import TreeWalker


class StatusMonitor:
    def __init__(
        self,
        settings: MonitorSettings,
        output: TextIO,
        logger: logging.Logger,
        bus: Optional[MessageBus] = None,
    ) -> None:
        self.settings = settings
        self.logger = logger
        self.latch = LatchState()
        self.decoder = StatusDecoder(self.latch, output)
        self.walker = TreeWalker(self.decoder, marker=settings.marker_value)
        self.dispatcher = PropertyDispatcher(
            self.walker,
            logger,
            property_name=settings.property_name,
            device_interface=settings.device_interface,
        )
        self.client = BluezClient(settings, self.dispatcher, logger, bus=bus)

    async def run(self) -> None:
        self.decoder.write_placeholder()
        await self.client.run()


def _open_output(path: Optional[str]) -> TextIO:
    if path is None:
        return sys.stdout
    return open(path, "w+", encoding="utf-8")


def main(argv: Optional[list] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="podstatus",
        description="Print earbud and case status from BLE advertisements seen by BlueZ.",
    )
    parser.add_argument("output", nargs="?", default=None, help="File to write status lines to (default: stdout).")
    args = parser.parse_args(argv)

    settings = get_settings()
    logger = create_logger("podstatus", settings.log_level)

    try:
        output = _open_output(args.output)
    except OSError as exc:
        logger.error("output_open_failed", extra={"details": {"path": args.output, "error": str(exc)}})
        return 1

    monitor = StatusMonitor(settings, output, logger)
    try:
        asyncio.run(monitor.run())
    except DiscoveryError as exc:
        logger.error("discovery_failed", extra={"details": {"error": str(exc)}})
        return 1
    except KeyboardInterrupt:
        return 0
    finally:
        if output is not sys.stdout:
            output.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
