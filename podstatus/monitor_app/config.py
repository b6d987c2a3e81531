from functools import lru_cache
from typing import List, Optional

from pydantic import Field
from pydantic_settings import SettingsConfigDict, BaseSettings


class MonitorSettings(BaseSettings):
    bluez_service: str = Field("org.bluez", validation_alias="PODSTATUS_BLUEZ_SERVICE")
    adapter_interface: str = Field("org.bluez.Adapter1", validation_alias="PODSTATUS_ADAPTER_INTERFACE")
    device_interface: str = Field("org.bluez.Device1", validation_alias="PODSTATUS_DEVICE_INTERFACE")
    property_name: str = Field("ManufacturerData", validation_alias="PODSTATUS_PROPERTY_NAME")
    marker_value: int = Field(0x4C, validation_alias="PODSTATUS_MARKER_VALUE")

    # SetDiscoveryFilter options; unset values are left out of the filter
    discovery_transport: Optional[str] = Field(None, validation_alias="PODSTATUS_DISCOVERY_TRANSPORT")
    discovery_rssi: Optional[int] = Field(None, validation_alias="PODSTATUS_DISCOVERY_RSSI")
    discovery_pathloss: Optional[int] = Field(None, validation_alias="PODSTATUS_DISCOVERY_PATHLOSS")
    discovery_pattern: Optional[str] = Field(None, validation_alias="PODSTATUS_DISCOVERY_PATTERN")
    discovery_uuids: List[str] = Field(default_factory=list, validation_alias="PODSTATUS_DISCOVERY_UUIDS")
    discovery_duplicate_data: bool = Field(False, validation_alias="PODSTATUS_DISCOVERY_DUPLICATE_DATA")
    discovery_discoverable: bool = Field(False, validation_alias="PODSTATUS_DISCOVERY_DISCOVERABLE")
    discovery_clear_filter: bool = Field(False, validation_alias="PODSTATUS_DISCOVERY_CLEAR_FILTER")

    log_level: str = Field("WARNING", validation_alias="PODSTATUS_LOG_LEVEL")
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", populate_by_name=True, extra="ignore")


@lru_cache
def get_settings() -> MonitorSettings:
    return MonitorSettings()
