"""Candidate source models for home / AVD folder lookup."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Flag, StrEnum
from pathlib import Path


class SourceKind(Flag):
    """Where a candidate value is read from."""

    PROPERTY = 1
    ENVIRONMENT = 2
    BOTH = 3


@dataclass(frozen=True)
class CandidateSource:
    """
    A named origin for a directory path.

    ``rejects`` is an optional hook called with an existing directory; when it
    returns True the directory is refused as an invalid override.
    """

    name: str
    kinds: SourceKind
    rejects: Callable[[Path], bool] | None = None

    @property
    def reads_property(self) -> bool:
        return bool(self.kinds & SourceKind.PROPERTY)

    @property
    def reads_environment(self) -> bool:
        return bool(self.kinds & SourceKind.ENVIRONMENT)


class CheckStatus(StrEnum):
    MATCH = "match"
    NO_MATCH = "no_match"
    INVALID_OVERRIDE = "invalid_override"


@dataclass(frozen=True)
class CheckOutcome:
    """Result of checking one candidate value."""

    status: CheckStatus
    path: str | None = None
    source: str = ""

    @property
    def accepted(self) -> bool:
        return self.status is CheckStatus.MATCH
