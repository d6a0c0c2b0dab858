"""Home folder lookup — candidate sources checked in a fixed priority order."""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

from android_location.errors import AndroidLocationError, ErrorKind
from android_location.models.candidate import CandidateSource, CheckOutcome, CheckStatus, SourceKind

if TYPE_CHECKING:
    from android_location.config import LocationConfig

# Name of the preference folder created under the user's home
FOLDER_DOT_ANDROID = ".android"


def _sub_folder_exists(folder: Path, name: str) -> bool:
    return (folder / name).is_dir()


def is_sdk_root_without_dot_android(folder: Path) -> bool:
    """True if ``folder`` looks like an SDK install root rather than a preference home."""
    return (
        _sub_folder_exists(folder, "platforms")
        and _sub_folder_exists(folder, "platform-tools")
        and not _sub_folder_exists(folder, FOLDER_DOT_ANDROID)
    )


ANDROID_AVD_HOME = CandidateSource("ANDROID_AVD_HOME", SourceKind.BOTH)
ANDROID_SDK_HOME = CandidateSource(
    "ANDROID_SDK_HOME", SourceKind.BOTH, rejects=is_sdk_root_without_dot_android
)
TEST_TMPDIR = CandidateSource("TEST_TMPDIR", SourceKind.ENVIRONMENT)  # Bazel sandboxes
USER_HOME = CandidateSource("user.home", SourceKind.PROPERTY)
HOME = CandidateSource("HOME", SourceKind.ENVIRONMENT)

HOME_SOURCES = (ANDROID_SDK_HOME, TEST_TMPDIR, USER_HOME, HOME)
USER_HOME_SOURCES = (TEST_TMPDIR, USER_HOME, HOME)


def with_trailing_sep(path: str) -> str:
    return path if path.endswith(os.sep) else path + os.sep


def ensure_directory(path: Path, purpose: str) -> None:
    """Create ``path`` (and parents) or raise ``DIRECTORY_CREATION_DENIED``."""
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise AndroidLocationError(
            ErrorKind.DIRECTORY_CREATION_DENIED,
            f"Unable to create folder '{path}'. This is the path of {purpose} expected by the Android tools.",
        ) from e
    logger.debug(f"Ensured folder exists: {path}")


# ── Checking ──


def check_path(source: CandidateSource, value: str | None) -> CheckOutcome:
    """Check one raw value read from ``source``."""
    if not value:
        return CheckOutcome(CheckStatus.NO_MATCH, source=source.name)
    folder = Path(value)
    if not folder.is_dir():
        return CheckOutcome(CheckStatus.NO_MATCH, value, source.name)
    if source.rejects is not None and source.rejects(folder):
        return CheckOutcome(CheckStatus.INVALID_OVERRIDE, value, source.name)
    return CheckOutcome(CheckStatus.MATCH, value, source.name)


def iter_outcomes(source: CandidateSource, config: LocationConfig) -> Iterator[CheckOutcome]:
    """Yield one outcome per value the source reads: property first, then environment."""
    if source.reads_property:
        yield check_path(source, config.get_property(source.name))
    if source.reads_environment:
        yield check_path(source, config.get_env(source.name))


def validate_path(source: CandidateSource, config: LocationConfig, silent: bool) -> str | None:
    """
    Return the first accepted value of ``source``, or None.

    A rejected override is skipped when ``silent``; otherwise it raises
    :class:`AndroidLocationError` with kind ``INVALID_OVERRIDE``.
    """
    for outcome in iter_outcomes(source, config):
        if outcome.accepted:
            return outcome.path
        if outcome.status is CheckStatus.INVALID_OVERRIDE:
            if not silent:
                raise AndroidLocationError(
                    ErrorKind.INVALID_OVERRIDE,
                    _invalid_override_message(outcome, config),
                )
            logger.debug(f"Ignoring {outcome.source}={outcome.path}: points at an SDK root")
    return None


def _invalid_override_message(outcome: CheckOutcome, config: LocationConfig) -> str:
    return (
        f"{outcome.source} is set to the root of your SDK: {outcome.path}\n"
        "This is the path of the preference folder expected by the Android tools.\n"
        "It should NOT be set to the same as the root of your SDK.\n"
        "Please set it to a different folder or do not set it at all.\n"
        f"If this is not set we default to: {find_valid_path(config, *USER_HOME_SOURCES)}"
    )


def find_valid_path(config: LocationConfig, *sources: CandidateSource) -> str | None:
    """Return the first valid directory among ``sources``. Order matters."""
    for source in sources:
        path = validate_path(source, config, silent=True)
        if path is not None:
            logger.debug(f"Using {source.name}: {path}")
            return path
    return None


def find_home_folder(config: LocationConfig) -> str:
    """Return ``<home>/.android/`` for the first usable candidate, terminated by a separator."""
    home = find_valid_path(config, *HOME_SOURCES)
    if home is None:
        raise AndroidLocationError(
            ErrorKind.HOME_NOT_FOUND,
            f"No home directory found (prop: {config.get_property(ANDROID_SDK_HOME.name)})",
        )
    return with_trailing_sep(with_trailing_sep(home) + FOLDER_DOT_ANDROID)
