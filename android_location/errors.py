"""Error type raised when the Android folders cannot be located."""

from __future__ import annotations

from enum import StrEnum


class ErrorKind(StrEnum):
    """Why a location could not be resolved."""

    HOME_NOT_FOUND = "home_not_found"
    INVALID_OVERRIDE = "invalid_override"
    DIRECTORY_CREATION_DENIED = "directory_creation_denied"
    NOT_A_DIRECTORY = "not_a_directory"


class AndroidLocationError(Exception):
    """Raised when the location of the android folder couldn't be found or used."""

    def __init__(self, kind: ErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
