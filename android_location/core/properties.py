"""Reader/writer for Java-style ``.properties`` / ``.ini`` key-value files.

Only the subset used by AVD descriptors and the ``sdk.info`` marker:
``#``/``!`` comments, ``=``/``:``/whitespace separators, backslash escapes
(including ``\\uXXXX``) and backslash line continuations.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from datetime import datetime, timezone
from pathlib import Path

from loguru import logger

_SEPARATORS = "=:"
_WHITESPACE = " \t\f"
_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}


def read_properties(path: Path) -> dict[str, str]:
    """
    Load a properties file.

    Unreadable files are logged and treated as empty, so callers can fall
    back to their next step instead of aborting.
    """
    try:
        text = path.read_text(encoding="utf-8", errors="surrogateescape")
    except OSError as e:
        logger.warning(f"Failed to read properties file {path}: {e}")
        return {}
    return parse_properties(text)


def parse_properties(text: str) -> dict[str, str]:
    """Parse properties text into a dict. Later keys override earlier ones."""
    result: dict[str, str] = {}
    for line in _logical_lines(text):
        key, value = _split_key_value(line)
        result[_unescape(key)] = _unescape(value)
    return result


def store_properties(path: Path, values: Mapping[str, str], comment: str | None = None) -> None:
    """
    Write ``values`` as a properties file, preceded by comment and timestamp lines.

    Text is UTF-8 with ``surrogateescape``, so paths holding undecodable
    filesystem bytes survive a write and a later :func:`read_properties`.
    Raises ``OSError`` on I/O failure and ``UnicodeEncodeError`` for lone
    surrogates that do not come from undecodable bytes.
    """
    lines: list[str] = []
    if comment:
        lines.extend(f"#{part}" for part in comment.splitlines())
    lines.append("#" + datetime.now(tz=timezone.utc).strftime("%a %b %d %H:%M:%S %Z %Y"))
    for key, value in values.items():
        lines.append(f"{_escape(key, is_key=True)}={_escape(value, is_key=False)}")

    # Encoded before the file is touched; a failed encode writes nothing
    data = ("\n".join(lines) + "\n").encode("utf-8", errors="surrogateescape")
    path.write_bytes(data)


# ── Parsing helpers ──


def _logical_lines(text: str) -> Iterator[str]:
    """Yield non-comment lines with backslash continuations joined."""
    pending: str | None = None
    for raw in text.splitlines():
        line = raw.lstrip(_WHITESPACE)
        if pending is None:
            if not line or line[0] in "#!":
                continue
        else:
            line = pending + line
            pending = None

        if _trailing_backslashes(line) % 2 == 1:
            pending = line[:-1]
            continue
        yield line

    if pending:
        yield pending


def _trailing_backslashes(line: str) -> int:
    return len(line) - len(line.rstrip("\\"))


def _split_key_value(line: str) -> tuple[str, str]:
    i = 0
    while i < len(line):
        ch = line[i]
        if ch == "\\":
            i += 2
            continue
        if ch in _SEPARATORS or ch in _WHITESPACE:
            break
        i += 1

    key = line[:i]
    rest = line[i:].lstrip(_WHITESPACE)
    if rest and rest[0] in _SEPARATORS:
        rest = rest[1:].lstrip(_WHITESPACE)
    return key, rest


def _unescape(text: str) -> str:
    if "\\" not in text:
        return text

    out: list[str] = []
    i = 0
    while i < len(text):
        ch = text[i]
        if ch != "\\" or i + 1 >= len(text):
            out.append(ch)
            i += 1
            continue

        nxt = text[i + 1]
        if nxt == "u" and i + 6 <= len(text):
            digits = text[i + 2 : i + 6]
            try:
                out.append(chr(int(digits, 16)))
                i += 6
                continue
            except ValueError:
                pass
        out.append(_ESCAPES.get(nxt, nxt))
        i += 2
    return "".join(out)


def _escape(text: str, *, is_key: bool) -> str:
    out: list[str] = []
    for index, ch in enumerate(text):
        if ch == "\\":
            out.append("\\\\")
        elif ch in "\t\n\r\f":
            out.append("\\" + {"\t": "t", "\n": "n", "\r": "r", "\f": "f"}[ch])
        elif ch in "=:#!":
            out.append("\\" + ch)
        elif ch == " " and (is_key or index == 0):
            out.append("\\ ")
        else:
            out.append(ch)
    return "".join(out)
