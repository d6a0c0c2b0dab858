"""Locate the Android preference folder and the AVD folder for an SDK installation."""

from loguru import logger as _loguru_logger

from android_location.config import LocationConfig, get_config, reset_config
from android_location.core.locator import AndroidLocator, get_locator, reset_locator
from android_location.errors import AndroidLocationError, ErrorKind
from android_location.logger import setup_logger, teardown_logger
from android_location.models.sdk import SdkHandler, SdkInstallation

# Silent until the host calls setup_logger() or logger.enable("android_location")
_loguru_logger.disable("android_location")

__all__ = [
    "AndroidLocationError",
    "AndroidLocator",
    "ErrorKind",
    "LocationConfig",
    "SdkHandler",
    "SdkInstallation",
    "get_config",
    "get_locator",
    "reset_config",
    "reset_locator",
    "setup_logger",
    "teardown_logger",
]
