"""Installation marker and device-scan models."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

MARKER_FILE_NAME = "sdk.info"
SDK_LOCATION_KEY = "SDK_LOCATION"


@dataclass
class InstallationMarker:
    """The ``sdk.info`` record binding a device directory to an SDK installation."""

    avd_dir: Path
    sdk_location: str | None = None  # None when absent, unreadable or empty

    @property
    def path(self) -> Path:
        return self.avd_dir / MARKER_FILE_NAME

    def owned_by(self, sdk_location: str) -> bool:
        return self.sdk_location == sdk_location


@dataclass
class ScanResult:
    """Outcome of scanning device subfolders for a given installation."""

    owner: Path | None = None  # First device folder referencing the installation
    device_count: int = 0

    @property
    def matched(self) -> bool:
        return self.owner is not None
