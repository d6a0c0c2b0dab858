"""Stable per-installation naming for hashed AVD folders."""

from __future__ import annotations

import os
from pathlib import Path

HASHED_AVD_PREFIX = "avd_"


def java_string_hash(text: str) -> int:
    """
    Return ``text.hashCode()`` as computed by Java.

    Python's ``hash()`` is salted per process, so folder names derived from it
    would change on every run. The Java algorithm works over UTF-16 code units
    and wraps to a signed 32-bit integer.
    """
    h = 0
    data = text.encode("utf-16-le", errors="surrogatepass")
    for i in range(0, len(data), 2):
        unit = data[i] | (data[i + 1] << 8)
        h = (31 * h + unit) & 0xFFFFFFFF
    return h - 0x100000000 if h & 0x80000000 else h


def hashed_avd_name(sdk_location: str | Path) -> str:
    """Folder name for an installation, e.g. ``avd_N1234`` for hash ``-1234``."""
    absolute = os.path.abspath(str(sdk_location))
    return HASHED_AVD_PREFIX + str(java_string_hash(absolute)).replace("-", "N")
