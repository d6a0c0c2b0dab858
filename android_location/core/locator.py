"""Android location resolver — preference home and AVD folders, with multi-SDK support."""

from __future__ import annotations

import os
import threading
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

from android_location.config import LocationConfig, get_config
from android_location.core.hashing import hashed_avd_name
from android_location.core.home import (
    ANDROID_AVD_HOME,
    ANDROID_SDK_HOME,
    USER_HOME_SOURCES,
    ensure_directory,
    find_home_folder,
    find_valid_path,
    validate_path,
    with_trailing_sep,
)
from android_location.core.validator import read_marker, validate_avds, write_marker
from android_location.errors import AndroidLocationError, ErrorKind

if TYPE_CHECKING:
    from android_location.models.sdk import SdkHandler

# AVD folder inside the preference home
FOLDER_AVD = "avd"

_instance: "AndroidLocator | None" = None


def get_locator() -> AndroidLocator:
    """Module-level factory — single process-wide AndroidLocator."""
    global _instance
    if _instance is None:
        _instance = AndroidLocator(get_config())
    return _instance


def reset_locator() -> None:
    """Drop the process-wide locator (for testing)."""
    global _instance
    _instance = None


class AndroidLocator:
    """
    Locates the folder used to store android related files (emulator files,
    ddms config, debug keystore) and the folder holding the user's AVDs.

    Resolved paths are cached on the instance until :meth:`reset`. Every
    returned path is terminated by a separator.
    """

    def __init__(self, config: LocationConfig | None = None) -> None:
        self._config = config or get_config()
        self._lock = threading.RLock()
        self._prefs_location: str | None = None
        self._avd_location: str | None = None

    @property
    def config(self) -> LocationConfig:
        return self._config

    def reset(self) -> None:
        """Forget cached locations so the next call re-runs the full search."""
        with self._lock:
            self._prefs_location = None
            self._avd_location = None

    # ── Preference home ──

    def get_folder(self) -> str:
        """Return ``<home>/.android/``, creating it if needed."""
        with self._lock:
            if self._prefs_location is None:
                self._prefs_location = find_home_folder(self._config)
            location = self._prefs_location

        folder = Path(location)
        if not folder.exists():
            ensure_directory(folder, "the preference folder")
            logger.info(f"Created Android preference folder: {folder}")
        elif folder.is_file():
            raise AndroidLocationError(
                ErrorKind.NOT_A_DIRECTORY,
                f"{location} is not a directory!\n"
                "This is the path of preference folder expected by the Android tools.",
            )
        return location

    def get_folder_without_writes(self) -> str | None:
        """Like :meth:`get_folder` but never creates anything; None if no home is found."""
        with self._lock:
            if self._prefs_location is None:
                try:
                    self._prefs_location = find_home_folder(self._config)
                except AndroidLocationError as e:
                    logger.debug(f"No Android home folder: {e}")
                    return None
            return self._prefs_location

    def check_android_sdk_home(self) -> None:
        """Raise ``INVALID_OVERRIDE`` if ANDROID_SDK_HOME points at an SDK root."""
        validate_path(ANDROID_SDK_HOME, self._config, silent=False)

    def get_user_home_folder(self) -> str | None:
        """Return the user's home directory, ignoring ANDROID_SDK_HOME."""
        return find_valid_path(self._config, *USER_HOME_SOURCES)

    # ── AVD folders ──

    def get_avd_folder(self, sdk: SdkHandler | None = None) -> str:
        """
        Return the folder holding the user's AVDs.

        Without ``sdk`` this is the legacy folder: ANDROID_AVD_HOME, or
        ``<home>/.android/avd/``. With ``sdk``, the folder is checked against
        the installation that owns it and a per-installation ``avd_<hash>``
        folder is used when another SDK got there first.
        """
        if sdk is None:
            return self._legacy_avd_folder()
        return self._avd_folder_for(os.path.abspath(str(sdk.location)))

    def hashed_avd_folder(self, sdk_location: str | Path) -> Path:
        """Per-installation AVD folder under the preference home."""
        return Path(self.get_folder()) / hashed_avd_name(sdk_location)

    def _legacy_avd_folder(self) -> str:
        with self._lock:
            if self._avd_location is None:
                home = find_valid_path(self._config, ANDROID_AVD_HOME)
                if home is None:
                    home = self.get_folder() + FOLDER_AVD
                self._avd_location = with_trailing_sep(home)
            return self._avd_location

    def _avd_folder_for(self, sdk_location: str) -> str:
        hashed_dir = self.hashed_avd_folder(sdk_location)
        if hashed_dir.exists():
            return with_trailing_sep(str(hashed_dir))

        # The legacy cache is shared by every installation asking this locator.
        avd_location = self._legacy_avd_folder()
        avd_dir = Path(avd_location)
        if not avd_dir.exists():
            # First use: adopt the legacy folder for this installation
            ensure_directory(avd_dir, "the AVD folder")
            write_marker(avd_dir, sdk_location)
            logger.info(f"Created AVD folder {avd_dir} for SDK {sdk_location}")
            return avd_location

        marker = read_marker(avd_dir)
        if marker.sdk_location is None:
            return validate_avds(avd_location, sdk_location, hashed_dir)
        if marker.owned_by(sdk_location):
            return avd_location

        logger.info(f"{avd_dir} belongs to SDK {marker.sdk_location}, using {hashed_dir}")
        ensure_directory(hashed_dir, "the AVD folder")
        return with_trailing_sep(str(hashed_dir))
