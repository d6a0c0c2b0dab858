"""Cross-installation validator — decide which SDK installation owns an AVD folder."""

from __future__ import annotations

import os
from collections.abc import Iterable
from pathlib import Path

from loguru import logger

from android_location.core.home import ensure_directory, with_trailing_sep
from android_location.core.properties import read_properties, store_properties
from android_location.models.marker import SDK_LOCATION_KEY, InstallationMarker, ScanResult

MARKER_COMMENT = "Created by android-location. Do not modify!"

# Descriptor files inside each device folder, and the keys holding SDK paths
DEVICE_CONFIG_FILES = ("config.ini", "hardware-qemu.ini", "hardware.ini")
SDK_PATH_KEYS = ("skin.path", "kernel.path", "disk.ramdisk.path", "disk.systemPartition.initPath")
DEVICE_CHECKS: tuple[tuple[str, str], ...] = tuple(
    (file_name, key) for file_name in DEVICE_CONFIG_FILES for key in SDK_PATH_KEYS
)


# ── Filesystem checks ──


def _exists_as(path: Path, kind: str) -> bool:
    """``path.is_file()`` or ``path.is_dir()``; an unreadable entry counts as absent."""
    try:
        return path.is_file() if kind == "file" else path.is_dir()
    except OSError as e:
        logger.warning(f"Cannot inspect {path}, skipping it: {e}")
        return False


# ── Marker file ──


def read_marker(avd_dir: Path) -> InstallationMarker:
    """Read ``sdk.info``; a missing, unreadable or empty record has no location."""
    marker = InstallationMarker(avd_dir)
    if not _exists_as(marker.path, "file"):
        return marker
    location = read_properties(marker.path).get(SDK_LOCATION_KEY)
    marker.sdk_location = location or None
    return marker


def write_marker(avd_dir: Path, sdk_location: str) -> None:
    """Record ``sdk_location`` as the owner of ``avd_dir``. Failures are logged only."""
    marker = InstallationMarker(avd_dir, sdk_location)
    try:
        store_properties(marker.path, {SDK_LOCATION_KEY: sdk_location}, MARKER_COMMENT)
    except (OSError, ValueError) as e:
        logger.warning(f"Failed to write installation marker {marker.path}: {e}")
        return
    logger.debug(f"Marked {avd_dir} as owned by {sdk_location}")


# ── Device scan ──


def belongs_to_sdk(value: str | None, sdk_location: str) -> bool:
    """True if a descriptor value is a path inside the installation."""
    return bool(value) and value.startswith(sdk_location + os.sep)


def device_references_sdk(
    device_dir: Path, sdk_location: str, checks: Iterable[tuple[str, str]] = DEVICE_CHECKS
) -> bool:
    """Check one device folder's descriptor files for paths inside the installation."""
    loaded: dict[str, dict[str, str]] = {}
    for file_name, key in checks:
        if file_name not in loaded:
            path = device_dir / file_name
            loaded[file_name] = read_properties(path) if _exists_as(path, "file") else {}
        if belongs_to_sdk(loaded[file_name].get(key), sdk_location):
            logger.debug(f"{device_dir.name}: {file_name} {key} points into {sdk_location}")
            return True
    return False


def scan_devices(
    avd_dir: Path, sdk_location: str, checks: Iterable[tuple[str, str]] = DEVICE_CHECKS
) -> ScanResult:
    """Return the first device folder that references the installation, and the folder count."""
    checks = tuple(checks)
    result = ScanResult()
    try:
        entries = sorted(avd_dir.iterdir())
    except OSError as e:
        logger.warning(f"Failed to list AVD folder {avd_dir}: {e}")
        return result

    for device_dir in entries:
        if not _exists_as(device_dir, "dir"):
            continue
        result.device_count += 1
        if device_references_sdk(device_dir, sdk_location, checks):
            result.owner = device_dir
            break
    return result


def validate_avds(avd_dir: str, sdk_location: str, hashed_dir: Path) -> str:
    """
    Decide whether the legacy AVD folder belongs to ``sdk_location``.

    - a device references the installation: mark the folder and keep it
    - devices exist but none match: they belong to another installation, so
      switch to the hashed folder (the legacy folder is left unmarked)
    - no devices at all: keep the legacy folder as is
    """
    scan = scan_devices(Path(avd_dir), sdk_location)
    if scan.matched:
        write_marker(Path(avd_dir), sdk_location)
        return avd_dir
    if scan.device_count:
        logger.info(
            f"{avd_dir} holds {scan.device_count} AVD(s) from another SDK, using {hashed_dir}"
        )
        ensure_directory(hashed_dir, "the AVD folder")
        return with_trailing_sep(str(hashed_dir))
    return avd_dir
