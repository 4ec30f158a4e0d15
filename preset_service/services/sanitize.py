import re
from typing import Any

MAX_FILENAME_BYTES = 255

_ILLEGAL_RE = re.compile(r'[/?<>\\:*|"]')
_CONTROL_RE = re.compile(r'[\x00-\x1f\x80-\x9f]')
_LEADING_DOTS_RE = re.compile(r'^\.+')
_WINDOWS_RESERVED_RE = re.compile(r'^(con|prn|aux|nul|com[0-9]|lpt[0-9])(\..*)?$', re.IGNORECASE)
_TRAILING_RE = re.compile(r'[. ]+$')


def _truncate_utf8(value: str, max_bytes: int) -> str:
    encoded = value.encode("utf-8")
    if len(encoded) <= max_bytes:
        return value
    # Drop a trailing partial character instead of failing
    return encoded[:max_bytes].decode("utf-8", errors="ignore")


def sanitize_filename(raw: Any) -> str:
    """
    Make a user-supplied preset name safe to use as a single file name.

    Path separators, reserved punctuation and control characters are removed,
    leading dots and trailing dots/spaces are stripped, and Windows device
    names are rejected. Returns "" when nothing usable is left, which callers
    treat as an invalid name.
    """
    if not isinstance(raw, str):
        return ""

    name = _ILLEGAL_RE.sub("", raw)
    name = _CONTROL_RE.sub("", name)
    name = _LEADING_DOTS_RE.sub("", name)
    name = _WINDOWS_RESERVED_RE.sub("", name)
    name = _truncate_utf8(name, MAX_FILENAME_BYTES)
    return _TRAILING_RE.sub("", name)
