"""SDK installation model."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol


class SdkHandler(Protocol):
    """Anything that knows where an SDK installation lives."""

    @property
    def location(self) -> Path: ...


@dataclass(frozen=True)
class SdkInstallation:
    """One on-disk copy of the SDK, identified by its root path."""

    location: Path
